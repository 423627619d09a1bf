from abc import ABC

from pulumi import ResourceOptions, log
from pulumi_aws import ssm

from logs_thunder.lib.base import BaseModule, ConfigType
from logs_thunder.lib.config import get_datadog_site, get_parameter_store_common
from logs_thunder.lib.datadog.client import DatadogConfig, DatadogProviderConfig, DEFAULT_TIMEOUT


def _get_common_parameter(name: str) -> str:
    return ssm.get_parameter(f"{get_parameter_store_common()}/{name}", with_decryption=True).value


class DatadogModule(BaseModule, ABC):
    """
    Base class for thunder modules managing Datadog resources through the Datadog API
    """

    provider: str = "datadog"

    def __init__(self, name: str, config: ConfigType, opts: ResourceOptions = None):
        super().__init__(name, config, opts)

        self.datadog_provider_config = self._get_provider_config(config)

        log.debug(f"using {self.datadog_provider_config}", resource=self)

    @staticmethod
    def _get_provider_config(config: DatadogConfig) -> DatadogProviderConfig:
        """Resolve credentials and site for the Datadog API

        Values set on the stack win. Keys fall back to SSM Parameter Store, the site to Thunder.common.yaml.

        :param config: The module's stack config
        :return: A read-only provider configuration
        """
        return DatadogProviderConfig(
            api_key=config.api_key or _get_common_parameter("DD_API_KEY"),
            app_key=config.app_key or _get_common_parameter("DD_APP_KEY"),
            site=config.datadog_site or get_datadog_site(),
            timeout=config.timeout or DEFAULT_TIMEOUT,
        )
