from collections.abc import Iterable

import requests

from .api import ArchiveAbsent, LogsArchivesApi
from .errors import (
    ArchiveMissingError,
    ArchiveStillExistsError,
    DestroyCheckError,
    ExistenceCheckError,
    LogsArchiveError,
    ReadFailed,
    UnexpectedResponseError,
)


def check_exists(api: LogsArchivesApi, archive_ids: Iterable[str]) -> None:
    """Confirm that every archive still resolves on the backend

    Any failure is an ``ExistenceCheckError``. A 404 raises the ``ArchiveMissingError`` subclass so callers that
    care can tell a missing archive apart from a failed lookup.

    :param api: Logs archives API
    :param archive_ids: IDs of the archives to look up
    :return: None
    """
    for archive_id in archive_ids:
        try:
            lookup = api.get(archive_id)
        except (LogsArchiveError, requests.RequestException) as e:
            raise ExistenceCheckError(archive_id, str(e)) from e

        if isinstance(lookup, ArchiveAbsent):
            raise ArchiveMissingError(archive_id)


def check_destroyed(api: LogsArchivesApi, archive_ids: Iterable[str]) -> None:
    """Confirm that every archive is gone from the backend

    Any 2xx answer means the archive is still there, even when its body can't be mapped back onto an archive.

    :param api: Logs archives API
    :param archive_ids: IDs of previously managed archives
    :return: None
    """
    for archive_id in archive_ids:
        try:
            lookup = api.get(archive_id)
        except ReadFailed as e:
            if 200 <= e.status < 300:
                raise ArchiveStillExistsError(archive_id) from e
            raise DestroyCheckError(archive_id, str(e)) from e
        except UnexpectedResponseError as e:
            # only raised for a 200 that doesn't describe an archive
            raise ArchiveStillExistsError(archive_id) from e
        except (LogsArchiveError, requests.RequestException) as e:
            raise DestroyCheckError(archive_id, str(e)) from e

        if not isinstance(lookup, ArchiveAbsent):
            raise ArchiveStillExistsError(archive_id)
