from collections.abc import Mapping
from dataclasses import MISSING, asdict, dataclass, fields
from enum import Enum
from typing import ClassVar, Optional, Union

from dacite import Config, DaciteError, from_dict

from .errors import ConfigurationError


class DestinationType(Enum):
    azure = "azure"
    gcs = "gcs"
    s3 = "s3"


class _DestinationBase:
    type: ClassVar[DestinationType]

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            property_ = f"{self.type.value}.{f.name}"

            if f.default is MISSING:
                if not isinstance(value, str) or not value:
                    raise ConfigurationError(f"`{property_}` is required and must be a non-empty string", property_)
            elif value == "":
                # unset optionals must never reach the payload as empty strings
                object.__setattr__(self, f.name, None)
            elif value is not None and not isinstance(value, str):
                raise ConfigurationError(f"`{property_}` must be a string", property_)


@dataclass(frozen=True)
class AzureDestination(_DestinationBase):
    container: str
    """Name of the container in the storage account"""

    client_id: str
    """Client ID of the Azure AD application the archive writes as"""

    tenant_id: str
    """Azure AD tenant of the application"""

    storage_account: str
    """Storage account holding the container"""

    path: Optional[str] = None
    """(Optional) Path inside the container"""

    region: Optional[str] = None
    """(Optional) Region of the storage account"""

    type: ClassVar[DestinationType] = DestinationType.azure


@dataclass(frozen=True)
class GCSDestination(_DestinationBase):
    bucket: str
    """Name of the GCS bucket"""

    client_email: str
    """Service account email used to write into the bucket"""

    project_id: str
    """GCP project of the service account"""

    path: Optional[str] = None
    """(Optional) Path inside the bucket"""

    type: ClassVar[DestinationType] = DestinationType.gcs


@dataclass(frozen=True)
class S3Destination(_DestinationBase):
    bucket: str
    """Name of the S3 bucket"""

    client_email: str

    project_id: str

    account_id: str
    """AWS account ID owning the role Datadog assumes"""

    role_name: str
    """IAM role Datadog assumes to write into the bucket"""

    path: Optional[str] = None
    """(Optional) Path inside the bucket"""

    type: ClassVar[DestinationType] = DestinationType.s3


Destination = Union[AzureDestination, GCSDestination, S3Destination]

DESTINATION_CLASSES: dict[DestinationType, type] = {
    DestinationType.azure: AzureDestination,
    DestinationType.gcs: GCSDestination,
    DestinationType.s3: S3Destination,
}


def _destination_from_block(destination_type: DestinationType, block) -> Destination:
    destination_cls = DESTINATION_CLASSES[destination_type]

    if isinstance(block, destination_cls):
        return block

    if not isinstance(block, Mapping):
        raise ConfigurationError(f"`{destination_type.value}` must be a block of attributes", destination_type.value)

    try:
        return from_dict(data_class=destination_cls, data=dict(block), config=Config(strict=True))
    except DaciteError as e:
        raise ConfigurationError(f"invalid `{destination_type.value}` block: {e}", destination_type.value) from e


def destination_from_blocks(azure=None, gcs=None, s3=None) -> Destination:
    """Build the destination variant out of the three declarative blocks

    Exactly one block must be set. ``None`` means unset.

    :param azure: Attributes of the ``azure`` block
    :param gcs: Attributes of the ``gcs`` block
    :param s3: Attributes of the ``s3`` block
    :return: The populated destination variant
    """
    blocks = {
        DestinationType.azure: azure,
        DestinationType.gcs: gcs,
        DestinationType.s3: s3,
    }
    populated = [(destination_type, block) for destination_type, block in blocks.items() if block is not None]

    if not populated:
        raise ConfigurationError("exactly one of `azure`, `gcs` or `s3` must be set, none was")

    if len(populated) > 1:
        names = [destination_type.value for destination_type, _ in populated]
        raise ConfigurationError(
            f"exactly one of `azure`, `gcs` or `s3` must be set, got {', '.join(names)}",
            names[-1],
        )

    return _destination_from_block(*populated[0])


def destination_to_block(destination: Destination) -> dict:
    """Declarative attributes of a destination, without the unset optionals"""
    return {k: v for k, v in asdict(destination).items() if v is not None}


@dataclass(frozen=True)
class ArchiveConfig:
    name: str
    """Archive name. Not unique."""

    query: str
    """Log query selecting what gets archived"""

    destination: Destination
    """Where the logs are archived"""

    def __post_init__(self):
        for property_ in ("name", "query"):
            value = getattr(self, property_)
            if not isinstance(value, str) or not value:
                raise ConfigurationError(f"`{property_}` is required and must be a non-empty string", property_)

    @classmethod
    def from_props(cls, props: Mapping) -> "ArchiveConfig":
        destination = destination_from_blocks(
            azure=props.get("azure"),
            gcs=props.get("gcs"),
            s3=props.get("s3"),
        )

        return cls(name=props.get("name"), query=props.get("query"), destination=destination)


@dataclass(frozen=True)
class Archive:
    id: str
    """Backend-assigned archive ID"""

    name: str

    query: str

    destination: Destination

    state: Optional[str] = None
    """Backend-reported archive state, if any"""

    @property
    def config(self) -> ArchiveConfig:
        return ArchiveConfig(name=self.name, query=self.query, destination=self.destination)

    def to_props(self) -> dict:
        """Flatten the archive into the attributes tracked by the host

        :return: dict with one block per destination type, the inactive ones set to ``None``
        """
        props = {
            "name": self.name,
            "query": self.query,
            "state": self.state,
        }
        for destination_type in DestinationType:
            props[destination_type.value] = None

        props[self.destination.type.value] = destination_to_block(self.destination)

        return props
