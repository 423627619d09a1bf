import logging
from dataclasses import asdict, dataclass
from typing import Optional, Union

from pulumi import Input, Output, ResourceOptions
from pulumi.dynamic import (
    CheckFailure,
    CheckResult,
    CreateResult,
    DiffResult,
    ReadResult,
    Resource,
    ResourceProvider,
    UpdateResult,
)

from logs_thunder.lib.datadog.client import DatadogClient, DatadogProviderConfig
from .api import ArchiveAbsent, LogsArchivesApi
from .errors import ConfigurationError
from .types import ArchiveConfig, AzureDestination, DestinationType, GCSDestination, S3Destination

logger = logging.getLogger(__name__)

# attributes the host compares, `state` is an output only
_CONFIG_PROPS = ("name", "query", *(destination_type.value for destination_type in DestinationType))


def _prop_value(config: ArchiveConfig, prop: str):
    if prop in ("name", "query"):
        return getattr(config, prop)
    if config.destination.type.value == prop:
        return config.destination
    return None


class LogsArchiveProvider(ResourceProvider):
    """
    Dynamic Pulumi provider managing a Datadog logs archive through the Logs Archives API.

    The Pulumi engine owns state, diffing of the resource graph and apply ordering. This provider only validates
    inputs and translates each lifecycle call into one API request.

    Dynamic providers can't call Pulumi runtime functions, so logging goes through the standard library and the
    Datadog configuration is handed over at construction time. The keys never appear in the archive inputs or
    outputs, but Pulumi serializes the provider object itself into the state, so they are stored there with it.
    """

    def __init__(self, config: DatadogProviderConfig):
        super().__init__()
        self.config = config

    def _api(self) -> LogsArchivesApi:
        return LogsArchivesApi(DatadogClient(self.config))

    def check(self, _olds, news):
        try:
            ArchiveConfig.from_props(news)
        except ConfigurationError as e:
            return CheckResult(news, [CheckFailure(e.property, str(e))])

        return CheckResult(news, [])

    def diff(self, _id, olds, news):
        old_config = ArchiveConfig.from_props(olds)
        new_config = ArchiveConfig.from_props(news)

        changed = [prop for prop in _CONFIG_PROPS if _prop_value(old_config, prop) != _prop_value(new_config, prop)]

        replaces = []
        if old_config.destination.type is not new_config.destination.type:
            # moving an archive to another storage backend is a different resource
            replaces = [old_config.destination.type.value, new_config.destination.type.value]

        return DiffResult(
            changes=bool(changed),
            replaces=replaces,
            stables=[],
            delete_before_replace=False,
        )

    def create(self, props):
        config = ArchiveConfig.from_props(props)

        archive = self._api().create(config)

        return CreateResult(archive.id, archive.to_props())

    def read(self, id_, props):
        lookup = self._api().get(id_)

        if isinstance(lookup, ArchiveAbsent):
            # an empty ID tells the engine to drop the resource from the state
            return ReadResult("", {})

        return ReadResult(id_, lookup.archive.to_props())

    def update(self, _id, _olds, news):
        config = ArchiveConfig.from_props(news)

        archive = self._api().update(_id, config)

        return UpdateResult(archive.to_props())

    def delete(self, _id, _props):
        self._api().delete(_id)


@dataclass
class LogsArchiveArgs:
    name: Input[str]
    """Archive name"""

    query: Input[str]
    """Log query selecting the archived logs"""

    azure: Optional[Union[AzureDestination, dict]] = None
    """Azure Blob Storage destination"""

    gcs: Optional[Union[GCSDestination, dict]] = None
    """Google Cloud Storage destination"""

    s3: Optional[Union[S3Destination, dict]] = None
    """Amazon S3 destination"""

    def to_props(self) -> dict:
        return {
            "name": self.name,
            "query": self.query,
            "azure": self._block(self.azure),
            "gcs": self._block(self.gcs),
            "s3": self._block(self.s3),
            "state": None,
        }

    @staticmethod
    def _block(block):
        if block is None or isinstance(block, dict):
            return block
        return {k: v for k, v in asdict(block).items() if v is not None}


class LogsArchive(Resource):
    name: Output[str]
    query: Output[str]
    azure: Output[Optional[dict]]
    gcs: Output[Optional[dict]]
    s3: Output[Optional[dict]]
    state: Output[Optional[str]]

    def __init__(
        self,
        resource_name: str,
        args: LogsArchiveArgs,
        provider_config: DatadogProviderConfig,
        opts: Optional[ResourceOptions] = None,
    ):
        super().__init__(LogsArchiveProvider(provider_config), resource_name, args.to_props(), opts)
