from typing import Optional


class LogsArchiveError(Exception):
    """Base class for every error raised while managing a logs archive"""


class ConfigurationError(LogsArchiveError):
    """The declarative configuration is invalid. Raised before any request is sent."""

    def __init__(self, message: str, property_: str = ""):
        super().__init__(message)
        self.property = property_


class ApiRequestFailed(LogsArchiveError):
    operation = "request"

    def __init__(self, status: int, body: str, archive_id: Optional[str] = None):
        target = f" for archive `{archive_id}`" if archive_id else ""
        super().__init__(f"logs archive {self.operation} failed{target} with HTTP {status}: {body}")
        self.status = status
        self.body = body
        self.archive_id = archive_id


class CreateFailed(ApiRequestFailed):
    operation = "create"


class ReadFailed(ApiRequestFailed):
    operation = "read"


class UpdateFailed(ApiRequestFailed):
    operation = "update"


class DeleteFailed(ApiRequestFailed):
    operation = "delete"


class ResourceGoneError(LogsArchiveError):
    """The archive targeted by an update no longer exists upstream"""

    def __init__(self, archive_id: str):
        super().__init__(f"logs archive `{archive_id}` no longer exists")
        self.archive_id = archive_id


class UnexpectedResponseError(LogsArchiveError):
    """The backend answered with a payload we can't map back onto the requested archive"""


class VerificationError(LogsArchiveError):
    pass


class ExistenceCheckError(VerificationError):
    """Could not confirm that an archive exists"""

    def __init__(self, archive_id: str, reason: str):
        super().__init__(f"could not confirm existence of logs archive `{archive_id}`: {reason}")
        self.archive_id = archive_id


class ArchiveMissingError(ExistenceCheckError):
    """The backend reported the archive as not found"""

    def __init__(self, archive_id: str):
        super().__init__(archive_id, "not found")


class ArchiveStillExistsError(VerificationError):
    def __init__(self, archive_id: str):
        super().__init__(f"archive still exists: `{archive_id}`")
        self.archive_id = archive_id


class DestroyCheckError(VerificationError):
    """Destroy verification could not complete for a reason other than the archive still existing"""

    def __init__(self, archive_id: str, reason: str):
        super().__init__(f"received an error when retrieving archive `{archive_id}`: {reason}")
        self.archive_id = archive_id
