import logging
from functools import wraps

import boto3
import click
import requests
import yaml
from click_option_group import optgroup, RequiredMutuallyExclusiveOptionGroup

from logs_thunder.lib.datadog.client import DatadogClient, DatadogProviderConfig, DEFAULT_DATADOG_SITE, DEFAULT_TIMEOUT
from logs_thunder.lib.datadog.logs_archives import (
    Archive,
    ArchiveAbsent,
    ArchiveConfig,
    DeleteOutcome,
    LogsArchiveError,
    LogsArchivesApi,
    check_destroyed,
    check_exists,
    destination_to_block,
)

DEFAULT_SSM_PREFIX = "/thunder/common"

logger = logging.getLogger(__name__)


def echo_key_value(key, value):
    click.echo(click.style(f"{key}: ", fg="green", bold=True) + str(value))


def echo_archive(archive: Archive):
    echo_key_value("ID", archive.id)
    echo_key_value("Name", archive.name)
    echo_key_value("Query", archive.query)
    echo_key_value("Destination", archive.destination.type.value)

    for key, value in destination_to_block(archive.destination).items():
        echo_key_value(f"  {key}", value)

    if archive.state:
        echo_key_value("State", archive.state)


def _get_ssm_parameter(prefix: str, name: str) -> str:
    ssm = boto3.client("ssm")
    return ssm.get_parameter(Name=f"{prefix}/{name}", WithDecryption=True)["Parameter"]["Value"]


def _load_archive_config(path) -> ArchiveConfig:
    with open(path) as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise click.ClickException(f"`{path}` is not valid YAML: {e}")

    if not isinstance(data, dict):
        raise click.ClickException(f"`{path}` does not hold an archive definition")

    return ArchiveConfig.from_props(data)


class CliSettings:
    """Global options, resolved into an API client on first use"""

    def __init__(self, api_key, app_key, site, api_url, timeout, ssm_prefix):
        self.api_key = api_key
        self.app_key = app_key
        self.site = site
        self.api_url = api_url
        self.timeout = timeout
        self.ssm_prefix = ssm_prefix
        self._api = None

    def provider_config(self) -> DatadogProviderConfig:
        return DatadogProviderConfig(
            api_key=self.api_key or _get_ssm_parameter(self.ssm_prefix, "DD_API_KEY"),
            app_key=self.app_key or _get_ssm_parameter(self.ssm_prefix, "DD_APP_KEY"),
            site=self.site,
            api_url=self.api_url,
            timeout=self.timeout,
        )

    @property
    def api(self) -> LogsArchivesApi:
        if self._api is None:
            self._api = LogsArchivesApi(DatadogClient(self.provider_config()))
        return self._api


def handle_errors(func):
    """Report library errors as click errors instead of tracebacks"""

    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (LogsArchiveError, requests.RequestException) as e:
            logger.debug("command failed", exc_info=True)
            raise click.ClickException(str(e))

    return wrapper


def _find_archive(api: LogsArchivesApi, archive_id, name) -> Archive:
    if archive_id:
        lookup = api.get(archive_id)
        if isinstance(lookup, ArchiveAbsent):
            raise click.ClickException(f"No archive with ID `{archive_id}` was found")
        return lookup.archive

    matches = [archive for archive in api.get_all() if archive.name == name]

    if not matches:
        raise click.ClickException(f"No archive named `{name}` was found")
    if len(matches) > 1:
        ids = ", ".join(archive.id for archive in matches)
        raise click.ClickException(f"Several archives are named `{name}` ({ids}), use --id instead")

    return matches[0]


@click.group()
@click.option("--debug", is_flag=True, default=False, help="Enable DEBUG logging")
@click.option("--api-key", envvar="DD_API_KEY", help="Datadog API key. Read from SSM when unset.")
@click.option("--app-key", envvar="DD_APP_KEY", help="Datadog application key. Read from SSM when unset.")
@click.option("--site", envvar="DD_SITE", default=DEFAULT_DATADOG_SITE, show_default=True, help="Datadog site")
@click.option("--api-url", envvar="DD_API_URL", help="Datadog API URL, overrides --site")
@click.option("--timeout", type=float, default=DEFAULT_TIMEOUT, show_default=True, help="HTTP timeout in seconds")
@click.option(
    "--ssm-prefix",
    envvar="THUNDER_SSM_PREFIX",
    default=DEFAULT_SSM_PREFIX,
    show_default=True,
    help="SSM Parameter Store path holding DD_API_KEY and DD_APP_KEY",
)
@click.pass_context
def cli(ctx, debug, api_key, app_key, site, api_url, timeout, ssm_prefix):
    logging.basicConfig(format="[%(asctime)s %(levelname)s %(name)s %(threadName)s]: %(message)s")

    if debug:
        logging.getLogger().setLevel(logging.DEBUG)
        click.echo("Enabled debug mode!")

    ctx.obj = CliSettings(api_key, app_key, site, api_url, timeout, ssm_prefix)


@cli.command(name="list")
@click.pass_obj
@handle_errors
def list_archives(settings: CliSettings):
    archives = settings.api.get_all()

    if not archives:
        click.echo("No archives found")

    for archive in archives:
        click.echo()
        echo_archive(archive)


@cli.command()
@optgroup.group(
    "Identifiers",
    cls=RequiredMutuallyExclusiveOptionGroup,
    help="The manner of identifying the archive",
)
@optgroup.option("--id", "archive_id", help="Archive ID")
@optgroup.option("--name", help="Archive name")
@click.pass_obj
@handle_errors
def show(settings: CliSettings, archive_id, name):
    echo_archive(_find_archive(settings.api, archive_id, name))


@cli.command()
@click.option("-f", "--file", "path", required=True, type=click.Path(exists=True, dir_okay=False), help="YAML file")
@click.pass_obj
@handle_errors
def create(settings: CliSettings, path):
    archive = settings.api.create(_load_archive_config(path))

    echo_archive(archive)


@cli.command()
@click.option("--id", "archive_id", required=True, help="Archive ID")
@click.option("-f", "--file", "path", required=True, type=click.Path(exists=True, dir_okay=False), help="YAML file")
@click.pass_obj
@handle_errors
def update(settings: CliSettings, archive_id, path):
    archive = settings.api.update(archive_id, _load_archive_config(path))

    echo_archive(archive)


@cli.command()
@optgroup.group(
    "Identifiers",
    cls=RequiredMutuallyExclusiveOptionGroup,
    help="The manner of identifying the archive",
)
@optgroup.option("--id", "archive_id", help="Archive ID")
@optgroup.option("--name", help="Archive name")
@click.option(
    "-y",
    "--yes",
    help="Answer yes to all questions",
    is_flag=True,
)
@click.pass_obj
@handle_errors
def delete(settings: CliSettings, archive_id, name, yes):
    if name:
        archive = _find_archive(settings.api, None, name)
        echo_archive(archive)
        archive_id = archive.id
    else:
        echo_key_value("ID", archive_id)

    click.echo()

    if yes or click.confirm("Do you want to continue?"):
        outcome = settings.api.delete(archive_id)

        if outcome is DeleteOutcome.already_absent:
            click.echo(f"Archive `{archive_id}` was already deleted")
        else:
            click.echo(f"Deleted archive `{archive_id}`")


@cli.command(name="verify-exists")
@click.argument("archive_ids", nargs=-1, required=True)
@click.pass_obj
@handle_errors
def verify_exists(settings: CliSettings, archive_ids):
    check_exists(settings.api, archive_ids)

    click.echo(f"All {len(archive_ids)} archive(s) exist")


@cli.command(name="verify-destroyed")
@click.argument("archive_ids", nargs=-1, required=True)
@click.pass_obj
@handle_errors
def verify_destroyed(settings: CliSettings, archive_ids):
    check_destroyed(settings.api, archive_ids)

    click.echo(f"All {len(archive_ids)} archive(s) are gone")


def run():
    exit(cli())


if __name__ == "__main__":
    run()
