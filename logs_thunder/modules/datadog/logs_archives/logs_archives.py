from pulumi import ResourceOptions, log

from logs_thunder.lib.datadog.base import DatadogModule
from logs_thunder.lib.datadog.logs_archives import LogsArchive, LogsArchiveArgs, destination_from_blocks
from .config import LogsArchiveConfig, LogsArchiveExports, LogsArchivesConfig, LogsArchivesExports


class LogsArchives(DatadogModule):
    def build(self, config: LogsArchivesConfig) -> LogsArchivesExports:
        keys = [archive.key for archive in config.archives]
        duplicates = sorted({key for key in keys if keys.count(key) > 1})
        if duplicates:
            raise Exception(f"archive keys must be unique, found duplicates: {', '.join(duplicates)}")

        return LogsArchivesExports(archives=[self._create_archive(archive) for archive in config.archives])

    def _create_archive(self, archive: LogsArchiveConfig) -> LogsArchiveExports:
        # fail the preview here rather than in the provider
        destination = destination_from_blocks(azure=archive.azure, gcs=archive.gcs, s3=archive.s3)

        log.debug(f"creating `{destination.type.value}` logs archive `{archive.key}`", resource=self)

        logs_archive = LogsArchive(
            archive.key,
            LogsArchiveArgs(
                name=archive.name,
                query=archive.query,
                azure=archive.azure,
                gcs=archive.gcs,
                s3=archive.s3,
            ),
            provider_config=self.datadog_provider_config,
            opts=ResourceOptions(parent=self),
        )

        return LogsArchiveExports(
            key=archive.key,
            name=archive.name,
            destination_type=destination.type,
            id=logs_archive.id,
            state=logs_archive.state,
        )
