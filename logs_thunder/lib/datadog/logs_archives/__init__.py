from .api import ArchiveAbsent, ArchiveFound, ArchiveLookup, DeleteOutcome, LogsArchivesApi
from .checks import check_destroyed, check_exists
from .errors import (
    ApiRequestFailed,
    ArchiveMissingError,
    ArchiveStillExistsError,
    ConfigurationError,
    CreateFailed,
    DeleteFailed,
    DestroyCheckError,
    ExistenceCheckError,
    LogsArchiveError,
    ReadFailed,
    ResourceGoneError,
    UnexpectedResponseError,
    UpdateFailed,
    VerificationError,
)
from .provider import LogsArchive, LogsArchiveArgs, LogsArchiveProvider
from .types import (
    Archive,
    ArchiveConfig,
    AzureDestination,
    Destination,
    DestinationType,
    GCSDestination,
    S3Destination,
    destination_from_blocks,
    destination_to_block,
)
