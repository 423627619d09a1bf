"""
Tests for the dynamic provider lifecycle.

The provider builds its own client, so the client class is swapped for one bound to the stub session.
"""

import pytest

from logs_thunder.lib.datadog.client import DatadogClient
from logs_thunder.lib.datadog.logs_archives import (
    GCSDestination,
    LogsArchiveArgs,
    LogsArchiveProvider,
    ReadFailed,
    ResourceGoneError,
)

ARCHIVES_PATH = "/api/v2/logs/config/archives"
BY_ID_PATH = f"{ARCHIVES_PATH}/FooBar"


@pytest.fixture
def provider(provider_config, stub_session, monkeypatch):
    monkeypatch.setattr(
        "logs_thunder.lib.datadog.logs_archives.provider.DatadogClient",
        lambda config: DatadogClient(config, session=stub_session),
    )
    return LogsArchiveProvider(provider_config)


class TestCheck:
    def test_valid(self, provider, gcs_props):
        result = provider.check({}, gcs_props)

        assert result.failures == []
        assert result.inputs == gcs_props

    def test_no_destination(self, provider):
        result = provider.check({}, {"name": "archive", "query": "service:toto"})

        assert len(result.failures) == 1
        assert "none was" in result.failures[0].reason

    def test_two_destinations(self, provider, azure_props, gcs_props):
        result = provider.check({}, dict(azure_props, gcs=gcs_props["gcs"]))

        assert [failure.property for failure in result.failures] == ["gcs"]

    def test_empty_name(self, provider, gcs_props):
        result = provider.check({}, dict(gcs_props, name=""))

        assert [failure.property for failure in result.failures] == ["name"]

    def test_unknown_destination_attribute(self, provider, gcs_props):
        props = dict(gcs_props, gcs=dict(gcs_props["gcs"], storage_class="COLDLINE"))

        result = provider.check({}, props)

        assert [failure.property for failure in result.failures] == ["gcs"]

    def test_sends_nothing(self, provider, stub_session):
        provider.check({}, {})

        assert stub_session.calls == []


class TestDiff:
    def test_no_changes(self, provider, gcs_props):
        result = provider.diff("FooBar", dict(gcs_props, state="WORKING"), gcs_props)

        assert result.changes is False
        assert result.replaces == []

    def test_query_change_updates_in_place(self, provider, gcs_props):
        result = provider.diff("FooBar", gcs_props, dict(gcs_props, query="service:other"))

        assert result.changes is True
        assert result.replaces == []

    def test_destination_attribute_change_updates_in_place(self, provider, gcs_props):
        news = dict(gcs_props, gcs=dict(gcs_props["gcs"], path="/other"))

        result = provider.diff("FooBar", gcs_props, news)

        assert result.changes is True
        assert result.replaces == []

    def test_destination_type_change_replaces(self, provider, gcs_props, s3_props):
        result = provider.diff("FooBar", gcs_props, s3_props)

        assert result.changes is True
        assert result.replaces == ["gcs", "s3"]


class TestLifecycle:
    def test_create(self, provider, stub_session, gcs_props, archive_fixture):
        stub_session.expect("POST", ARCHIVES_PATH, 200, archive_fixture("gcs"))

        result = provider.create(gcs_props)

        assert result.id == "FooBar"
        assert result.outs == {
            "name": "my first gcs archive",
            "query": "service:tata",
            "state": "UNKNOWN",
            "azure": None,
            "gcs": gcs_props["gcs"],
            "s3": None,
        }

    def test_keys_stay_out_of_outputs(self, provider, stub_session, s3_props, archive_fixture):
        stub_session.expect("POST", ARCHIVES_PATH, 200, archive_fixture("s3"))

        outs = provider.create(s3_props).outs

        assert "api-key" not in repr(outs)
        assert "app-key" not in repr(outs)
        assert "api-key" not in repr(LogsArchiveArgs(**s3_props).to_props())

    def test_read(self, provider, stub_session, azure_props, archive_fixture):
        stub_session.expect("GET", BY_ID_PATH, 200, archive_fixture("azure"))

        result = provider.read("FooBar", azure_props)

        assert result.id == "FooBar"
        assert result.outs["azure"] == azure_props["azure"]
        assert result.outs["gcs"] is None

    def test_read_absent(self, provider, stub_session, azure_props):
        stub_session.expect("GET", BY_ID_PATH, 404, {"errors": ["Not found"]})

        result = provider.read("FooBar", azure_props)

        assert result.id == ""
        assert result.outs == {}

    def test_read_failure(self, provider, stub_session, azure_props):
        stub_session.expect("GET", BY_ID_PATH, 500, "internal error")

        with pytest.raises(ReadFailed):
            provider.read("FooBar", azure_props)

    def test_update(self, provider, stub_session, s3_props, archive_fixture):
        stub_session.expect("PUT", BY_ID_PATH, 200, archive_fixture("s3"))

        result = provider.update("FooBar", s3_props, s3_props)

        assert result.outs["state"] == "WORKING"
        assert result.outs["s3"] == s3_props["s3"]

    def test_update_gone(self, provider, stub_session, s3_props):
        stub_session.expect("PUT", BY_ID_PATH, 404)

        with pytest.raises(ResourceGoneError):
            provider.update("FooBar", s3_props, s3_props)

    @pytest.mark.parametrize("status", [204, 404])
    def test_delete(self, status, provider, stub_session, s3_props):
        stub_session.expect("DELETE", BY_ID_PATH, status)

        provider.delete("FooBar", s3_props)


class TestLogsArchiveArgs:
    def test_dataclass_destination(self):
        args = LogsArchiveArgs(
            name="archive",
            query="service:toto",
            gcs=GCSDestination(bucket="bucket", client_email="email@email.com", project_id="project"),
        )

        assert args.to_props() == {
            "name": "archive",
            "query": "service:toto",
            "azure": None,
            "gcs": {"bucket": "bucket", "client_email": "email@email.com", "project_id": "project"},
            "s3": None,
            "state": None,
        }

    def test_dict_destination(self, azure_props):
        args = LogsArchiveArgs(name="archive", query="service:toto", azure=azure_props["azure"])

        assert args.to_props()["azure"] == azure_props["azure"]
