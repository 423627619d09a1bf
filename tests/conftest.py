"""Pytest fixtures for the logs archives tests."""

import json
from pathlib import Path
from urllib.parse import urlparse

import pytest
import requests

from logs_thunder.lib.datadog.client import DatadogClient, DatadogProviderConfig
from logs_thunder.lib.datadog.logs_archives import LogsArchivesApi

FIXTURES_PATH = Path(__file__).parent / "fixtures"

ARCHIVES_PATH = "/api/v2/logs/config/archives"


def read_fixture(path: str) -> str:
    """Return the contents of a file under ``tests/fixtures``"""
    return (FIXTURES_PATH / path).read_text()


def make_response(status: int, body=None) -> requests.Response:
    response = requests.Response()
    response.status_code = status
    if body is None:
        response._content = b""
    elif isinstance(body, str):
        response._content = body.encode()
    else:
        response._content = json.dumps(body).encode()
    response.headers["Content-Type"] = "application/json"
    return response


class StubSession(requests.Session):
    """
    A ``requests.Session`` answering from an ordered queue of expected exchanges.

    Each expectation is consumed by exactly one request. A request that doesn't match the next expectation fails
    the test, so the number and order of API calls is asserted too.
    """

    def __init__(self):
        super().__init__()
        self.expectations = []
        self.calls = []

    def expect(self, method: str, path: str, status: int = 200, body=None, json_body=None):
        self.expectations.append((method, path, status, body, json_body))
        return self

    def request(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))

        assert self.expectations, f"unexpected request {method} {url}"
        expected_method, expected_path, status, body, json_body = self.expectations.pop(0)

        assert method == expected_method
        assert urlparse(url).path == expected_path
        if json_body is not None:
            assert kwargs.get("json") == json_body

        return make_response(status, body)

    @property
    def pending(self):
        return list(self.expectations)


@pytest.fixture
def provider_config():
    return DatadogProviderConfig(api_key="api-key", app_key="app-key")


@pytest.fixture
def stub_session():
    session = StubSession()
    yield session
    assert not session.pending, f"expected requests were never sent: {session.pending}"


@pytest.fixture
def client(provider_config, stub_session):
    return DatadogClient(provider_config, session=stub_session)


@pytest.fixture
def api(client):
    return LogsArchivesApi(client)


@pytest.fixture
def azure_props():
    return {
        "name": "my first azure archive",
        "query": "service:toto",
        "azure": {
            "container": "my-container",
            "client_id": "aaaaaaaa-1a1a-1a1a-1a1a-aaaaaaaaaaab",
            "tenant_id": "aaaaaaaa-1a1a-1a1a-1a1a-aaaaaaaaaaaa",
            "storage_account": "storageAccount",
            "region": "my-region",
            "path": "/path/blou",
        },
    }


@pytest.fixture
def gcs_props():
    return {
        "name": "my first gcs archive",
        "query": "service:tata",
        "gcs": {
            "bucket": "dd-logs-test-datadog-api-client-go",
            "path": "/path/blah",
            "client_email": "email@email.com",
            "project_id": "aaaaaaaa-1a1a-1a1a-1a1a-aaaaaaaaaaaa",
        },
    }


@pytest.fixture
def s3_props():
    return {
        "name": "my first s3 archive",
        "query": "service:titi",
        "s3": {
            "bucket": "bucket",
            "path": "/path/hello",
            "client_email": "clientEmail",
            "project_id": "projectId",
            "account_id": "accountId",
            "role_name": "roleName",
        },
    }


@pytest.fixture
def archive_fixture():
    """Reads the canned create/read response for a destination type"""

    def _read(archive_type: str) -> str:
        return read_fixture(f"logs/archives/{archive_type}/create.json")

    return _read
