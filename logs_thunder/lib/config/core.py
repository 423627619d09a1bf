from typing import Optional

from pulumi import Config

from logs_thunder.lib.datadog.client import DEFAULT_DATADOG_SITE
from .thunder_env import thunder_env

thunder_config = Config("thunder")

tag_namespace = thunder_env.get("tag_namespace", "thunder")
"""Namespace Thunder uses for everything it owns outside of Pulumi, such as SSM parameter paths."""


def get_parameter_store_common() -> str:
    """
    Returns the SSM Parameter Store path holding the parameters shared by every sysenv

    Example: /thunder/common

    :return: Parameter path, without trailing slash
    """
    return f"/{tag_namespace}/common"


def get_datadog_site() -> str:
    """
    Returns the Datadog site used when a module does not set one

    Can be overridden by setting `datadog_site` in your Thunder.common.yaml

    :return: Datadog site, e.g. `datadoghq.com`
    """
    return thunder_env.get("datadog_site", DEFAULT_DATADOG_SITE)


def get_provider_override() -> Optional[str]:
    """
    Retrieve the provider override for the current module (`thunder:provider: myprovider`)

    :return: The provider name, if set
    """
    return thunder_config.get("provider")
