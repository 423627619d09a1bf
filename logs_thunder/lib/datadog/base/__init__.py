from .datadog_module import DatadogModule
