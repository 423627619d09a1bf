from .config import DatadogConfig, DatadogProviderConfig, DEFAULT_DATADOG_SITE, DEFAULT_TIMEOUT
from .core import DatadogClient
