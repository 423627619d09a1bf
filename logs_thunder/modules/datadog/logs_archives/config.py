from dataclasses import dataclass, field
from typing import Optional

from pulumi import Output

from logs_thunder.lib.datadog.client import DatadogConfig
from logs_thunder.lib.datadog.logs_archives import AzureDestination, GCSDestination, S3Destination, DestinationType


@dataclass
class LogsArchiveConfig:
    key: str
    """Pulumi resource name for the archive. Must be unique within the stack, unlike `name`."""

    name: str
    """Archive name shown in Datadog"""

    query: str
    """Log query selecting what gets archived, e.g. `service:web env:prod`"""

    azure: Optional[AzureDestination] = None
    """Archive to an Azure Blob Storage container"""

    gcs: Optional[GCSDestination] = None
    """Archive to a Google Cloud Storage bucket"""

    s3: Optional[S3Destination] = None
    """Archive to an Amazon S3 bucket"""


@dataclass
class LogsArchivesConfig(DatadogConfig):
    archives: list[LogsArchiveConfig] = field(default_factory=list)
    """Archives managed by this stack. Each one sets exactly one of `azure`, `gcs` or `s3`."""


@dataclass
class LogsArchiveExports:
    key: str

    name: str

    destination_type: DestinationType

    id: Output[str]
    """The Datadog-assigned archive ID"""

    state: Output[Optional[str]]


@dataclass
class LogsArchivesExports:
    archives: list[LogsArchiveExports]
