from dataclasses import asdict, fields
from typing import Any, Optional

from dacite import DaciteError, from_dict

from .errors import ConfigurationError, UnexpectedResponseError
from .types import DESTINATION_CLASSES, Archive, ArchiveConfig, Destination, DestinationType

ARCHIVES_TYPE = "archives"

# credentials live under `destination.integration` on the wire
INTEGRATION_FIELDS: dict[DestinationType, tuple[str, ...]] = {
    DestinationType.azure: ("client_id", "tenant_id"),
    DestinationType.gcs: ("client_email", "project_id"),
    DestinationType.s3: ("account_id", "role_name", "client_email", "project_id"),
}


def destination_to_payload(destination: Destination) -> dict:
    """Convert a destination variant to its API representation

    Unset optional fields are left out of the payload.

    :param destination: The destination variant
    :return: The ``destination`` object of a request
    """
    integration_fields = INTEGRATION_FIELDS[destination.type]

    payload = {"type": destination.type.value}
    integration = {}

    for key, value in asdict(destination).items():
        if value is None:
            continue
        if key in integration_fields:
            integration[key] = value
        else:
            payload[key] = value

    payload["integration"] = integration

    return payload


def destination_from_payload(payload: Any) -> Destination:
    """Convert the ``destination`` object of a response back into a destination variant

    Only the fields of the active variant are expected, anything else the backend adds is ignored.

    :param payload: The ``destination`` object of a response
    :return: The destination variant
    """
    if not isinstance(payload, dict):
        raise UnexpectedResponseError("response carries no `destination` object")

    try:
        destination_type = DestinationType(payload.get("type"))
    except ValueError:
        raise UnexpectedResponseError(f"response carries unknown destination type `{payload.get('type')}`")

    destination_cls = DESTINATION_CLASSES[destination_type]
    known = {f.name for f in fields(destination_cls)}

    integration = payload.get("integration") or {}
    if not isinstance(integration, dict):
        raise UnexpectedResponseError("response carries an `integration` that is not an object")

    flattened = {k: v for k, v in payload.items() if k in known}
    flattened.update({k: v for k, v in integration.items() if k in known})

    try:
        return from_dict(data_class=destination_cls, data=flattened)
    except (DaciteError, ConfigurationError) as e:
        raise UnexpectedResponseError(f"response carries an invalid `{destination_type.value}` destination: {e}") from e


def to_request(config: ArchiveConfig) -> dict:
    """Build the create/update request body for an archive

    :param config: The archive configuration
    :return: JSON-serializable request body
    """
    return {
        "data": {
            "type": ARCHIVES_TYPE,
            "attributes": {
                "name": config.name,
                "query": config.query,
                "destination": destination_to_payload(config.destination),
            },
        }
    }


def _archive_from_data(data: Any, expected_type: Optional[DestinationType]) -> Archive:
    if not isinstance(data, dict):
        raise UnexpectedResponseError("response carries no `data` object")

    archive_id = data.get("id")
    if not archive_id:
        raise UnexpectedResponseError("response carries no archive `id`")

    attributes = data.get("attributes") or {}
    if not isinstance(attributes, dict):
        raise UnexpectedResponseError(f"response for archive `{archive_id}` carries no `attributes` object")

    destination = destination_from_payload(attributes.get("destination"))

    if expected_type is not None and destination.type is not expected_type:
        raise UnexpectedResponseError(
            f"requested a `{expected_type.value}` destination for archive `{archive_id}`, "
            f"backend acknowledged `{destination.type.value}`"
        )

    name, query = attributes.get("name"), attributes.get("query")
    if not isinstance(name, str) or not isinstance(query, str):
        raise UnexpectedResponseError(f"response for archive `{archive_id}` is missing its name or query")

    return Archive(
        id=str(archive_id),
        name=name,
        query=query,
        destination=destination,
        state=attributes.get("state"),
    )


def from_response(body: Any, expected_type: Optional[DestinationType] = None) -> Archive:
    """Map a single-archive response back into an ``Archive``

    :param body: Decoded JSON response
    :param expected_type: Destination type that was requested, if any
    :return: The archive described by the response
    """
    if not isinstance(body, dict):
        raise UnexpectedResponseError("response is not a JSON object")

    return _archive_from_data(body.get("data"), expected_type)


def from_collection_response(body: Any) -> list[Archive]:
    if not isinstance(body, dict) or not isinstance(body.get("data"), list):
        raise UnexpectedResponseError("response carries no `data` list")

    return [_archive_from_data(data, None) for data in body["data"]]
