"""
Tests for the LogsArchives module and Datadog credential resolution, run against Pulumi's mock engine.

SSM lookups are answered by the mocks with a value derived from the parameter name.
"""

import pulumi
import pytest

from logs_thunder.lib.config import get_parameter_store_common, thunder_env
from logs_thunder.lib.config.mapper import parse_stack_config
from logs_thunder.lib.datadog.base import DatadogModule
from logs_thunder.lib.datadog.client import DEFAULT_DATADOG_SITE, DEFAULT_TIMEOUT, DatadogConfig
from logs_thunder.lib.datadog.logs_archives import DestinationType
from logs_thunder.modules.datadog.logs_archives import LogsArchives
from logs_thunder.modules.datadog.logs_archives.config import LogsArchivesConfig


class ThunderMocks(pulumi.runtime.Mocks):
    def __init__(self):
        self.parameters = []

    def new_resource(self, args: pulumi.runtime.MockResourceArgs):
        return f"{args.name}-id", dict(args.inputs)

    def call(self, args: pulumi.runtime.MockCallArgs):
        if args.token == "aws:ssm/getParameter:getParameter":
            self.parameters.append(args.args["name"])
            return {"name": args.args["name"], "value": f"ssm:{args.args['name']}"}
        return {}


mocks = ThunderMocks()
pulumi.runtime.set_mocks(mocks, preview=False)


def _stack_config(**kwargs) -> LogsArchivesConfig:
    raw_config = {
        "archives": [
            {
                "key": "azure-archive",
                "name": "my first azure archive",
                "query": "service:toto",
                "azure": {
                    "container": "my-container",
                    "client_id": "aaaaaaaa-1a1a-1a1a-1a1a-aaaaaaaaaaab",
                    "tenant_id": "aaaaaaaa-1a1a-1a1a-1a1a-aaaaaaaaaaaa",
                    "storage_account": "storageAccount",
                },
            },
            {
                "key": "gcs-archive",
                "name": "my first gcs archive",
                "query": "service:tata",
                "gcs": {
                    "bucket": "dd-logs-test-datadog-api-client-go",
                    "client_email": "email@email.com",
                    "project_id": "aaaaaaaa-1a1a-1a1a-1a1a-aaaaaaaaaaaa",
                },
            },
        ],
        **kwargs,
    }
    return parse_stack_config("logs-archives", raw_config, LogsArchivesConfig)


@pytest.fixture(autouse=True)
def reset_parameters():
    mocks.parameters.clear()


class TestProviderConfig:
    def test_explicit_values(self, monkeypatch):
        monkeypatch.setitem(thunder_env.data, "datadog_site", "datadoghq.eu")
        config = DatadogConfig(api_key="api-key", app_key="app-key", datadog_site="us5.datadoghq.com", timeout=5)

        provider_config = DatadogModule._get_provider_config(config)

        assert provider_config.api_key == "api-key"
        assert provider_config.app_key == "app-key"
        assert provider_config.site == "us5.datadoghq.com"
        assert provider_config.timeout == 5
        assert mocks.parameters == []

    def test_keys_fall_back_to_ssm(self):
        provider_config = DatadogModule._get_provider_config(DatadogConfig(app_key="app-key"))

        expected_name = f"{get_parameter_store_common()}/DD_API_KEY"
        assert mocks.parameters == [expected_name]
        assert provider_config.api_key == f"ssm:{expected_name}"
        assert provider_config.app_key == "app-key"

    def test_site_falls_back_to_thunder_common(self, monkeypatch):
        monkeypatch.setitem(thunder_env.data, "datadog_site", "datadoghq.eu")

        provider_config = DatadogModule._get_provider_config(DatadogConfig(api_key="a", app_key="b"))

        assert provider_config.site == "datadoghq.eu"

    def test_site_defaults_to_us1(self, monkeypatch):
        monkeypatch.delitem(thunder_env.data, "datadog_site", raising=False)

        provider_config = DatadogModule._get_provider_config(DatadogConfig(api_key="a", app_key="b", timeout=None))

        assert provider_config.site == DEFAULT_DATADOG_SITE
        assert provider_config.timeout == DEFAULT_TIMEOUT


@pulumi.runtime.test
def test_build_creates_one_archive_per_entry():
    exports = LogsArchives("logs-archives-two", _stack_config(api_key="a", app_key="b")).run()

    assert [archive.key for archive in exports.archives] == ["azure-archive", "gcs-archive"]
    assert [archive.name for archive in exports.archives] == ["my first azure archive", "my first gcs archive"]
    assert [archive.destination_type for archive in exports.archives] == [DestinationType.azure, DestinationType.gcs]

    def check_ids(ids):
        assert ids == ["azure-archive-id", "gcs-archive-id"]

    return pulumi.Output.all(*[archive.id for archive in exports.archives]).apply(check_ids)


@pulumi.runtime.test
def test_build_resolves_keys_from_ssm():
    module = LogsArchives("logs-archives-ssm", _stack_config())

    assert module.datadog_provider_config.api_key == f"ssm:{get_parameter_store_common()}/DD_API_KEY"
    assert module.datadog_provider_config.app_key == f"ssm:{get_parameter_store_common()}/DD_APP_KEY"


@pulumi.runtime.test
def test_build_rejects_duplicate_keys():
    config = _stack_config(api_key="a", app_key="b")
    config.archives[1].key = "azure-archive"

    with pytest.raises(Exception, match="duplicates: azure-archive"):
        LogsArchives("logs-archives-duplicates", config).run()


@pulumi.runtime.test
def test_build_with_no_archives():
    exports = LogsArchives("logs-archives-empty", parse_stack_config("logs-archives", {}, LogsArchivesConfig)).run()

    assert exports.archives == []
