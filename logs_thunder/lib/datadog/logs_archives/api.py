import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

import requests

from logs_thunder.lib.datadog.client import DatadogClient
from .errors import (
    CreateFailed,
    DeleteFailed,
    ReadFailed,
    ResourceGoneError,
    UnexpectedResponseError,
    UpdateFailed,
)
from .mapper import from_collection_response, from_response, to_request
from .types import Archive, ArchiveConfig

logger = logging.getLogger(__name__)

ARCHIVES_PATH = "/api/v2/logs/config/archives"


@dataclass(frozen=True)
class ArchiveFound:
    archive: Archive


@dataclass(frozen=True)
class ArchiveAbsent:
    archive_id: str


ArchiveLookup = Union[ArchiveFound, ArchiveAbsent]


class DeleteOutcome(Enum):
    deleted = "deleted"
    already_absent = "already_absent"


def _json(response: requests.Response) -> Any:
    try:
        return response.json()
    except ValueError as e:
        raise UnexpectedResponseError(f"response is not valid JSON (HTTP {response.status_code})") from e


class LogsArchivesApi:
    """
    CRUD operations on Datadog logs archives.

    Each method sends exactly one request. A 404 on ``get`` or ``delete`` is an outcome, not an error.
    """

    def __init__(self, client: DatadogClient):
        self.client = client

    @staticmethod
    def _archive_path(archive_id: str) -> str:
        return f"{ARCHIVES_PATH}/{archive_id}"

    def create(self, config: ArchiveConfig) -> Archive:
        response = self.client.request("POST", ARCHIVES_PATH, to_request(config))

        if response.status_code not in (200, 201):
            raise CreateFailed(response.status_code, response.text)

        archive = from_response(_json(response), expected_type=config.destination.type)

        logger.info("created logs archive `%s` (%s)", archive.id, archive.name)

        return archive

    def get(self, archive_id: str) -> ArchiveLookup:
        response = self.client.request("GET", self._archive_path(archive_id))

        if response.status_code == 404:
            logger.info("logs archive `%s` does not exist", archive_id)
            return ArchiveAbsent(archive_id)

        if response.status_code != 200:
            raise ReadFailed(response.status_code, response.text, archive_id)

        return ArchiveFound(from_response(_json(response)))

    def update(self, archive_id: str, config: ArchiveConfig) -> Archive:
        response = self.client.request("PUT", self._archive_path(archive_id), to_request(config))

        if response.status_code == 404:
            raise ResourceGoneError(archive_id)

        if response.status_code != 200:
            raise UpdateFailed(response.status_code, response.text, archive_id)

        archive = from_response(_json(response), expected_type=config.destination.type)

        logger.info("updated logs archive `%s` (%s)", archive.id, archive.name)

        return archive

    def delete(self, archive_id: str) -> DeleteOutcome:
        response = self.client.request("DELETE", self._archive_path(archive_id))

        if response.status_code == 404:
            logger.info("logs archive `%s` was already deleted", archive_id)
            return DeleteOutcome.already_absent

        if response.status_code not in (200, 204):
            raise DeleteFailed(response.status_code, response.text, archive_id)

        logger.info("deleted logs archive `%s`", archive_id)

        return DeleteOutcome.deleted

    def get_all(self) -> list[Archive]:
        response = self.client.request("GET", ARCHIVES_PATH)

        if response.status_code != 200:
            raise ReadFailed(response.status_code, response.text)

        return from_collection_response(_json(response))
