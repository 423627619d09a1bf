from .core import (
    get_datadog_site,
    get_parameter_store_common,
    get_provider_override,
    tag_namespace,
)
from .mapper import get_stack_config
from .thunder_env import thunder_env
