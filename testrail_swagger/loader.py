"""Fetch custom field metadata from the TestRail API.

Each collection is one authenticated GET returning a JSON array of field
objects. Records are decoded strictly into FieldDefinition instances so a
bad payload fails here rather than half-way through rendering.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import httpx

from .config import GeneratorConfig
from .field_types import FieldDefinitionError, UnknownFieldTypeError, to_field_type
from .models import FieldDefinition

logger = logging.getLogger(__name__)

CASE_FIELDS_METHOD = "get_case_fields"
RESULT_FIELDS_METHOD = "get_result_fields"


def make_client(
    config: GeneratorConfig,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Build an HTTP client carrying basic auth and the configured timeout."""
    return httpx.Client(
        auth=httpx.BasicAuth(config.user, config.api_key),
        headers={"Content-Type": "application/json"},
        timeout=config.timeout,
        transport=transport,
    )


def fetch_json(client: httpx.Client, url: str) -> Any:
    """GET a URL and decode its JSON body."""
    logger.debug("GET %s", url)
    response = client.get(url)
    response.raise_for_status()
    try:
        return response.json()
    except ValueError as exc:
        raise FieldDefinitionError(f"{url} did not return JSON: {exc}") from exc


def parse_field_definition(record: Any) -> FieldDefinition:
    """Decode one field object, failing fast on missing or bad keys."""
    if not isinstance(record, Mapping):
        raise FieldDefinitionError(f"Field definition must be an object, got {record!r}")

    system_name = record.get("system_name")
    if not isinstance(system_name, str) or not system_name:
        raise FieldDefinitionError(f"Field definition is missing system_name: {dict(record)!r}")

    if "type_id" not in record:
        raise FieldDefinitionError(f"Field {system_name!r} is missing type_id")
    try:
        field_type = to_field_type(record["type_id"])
    except UnknownFieldTypeError as exc:
        raise UnknownFieldTypeError(f"Field {system_name!r}: {exc}") from None

    description = record.get("description")
    if description is not None and not isinstance(description, str):
        raise FieldDefinitionError(
            f"Field {system_name!r} has a non-string description: {description!r}"
        )

    return FieldDefinition(
        system_name=system_name,
        type_id=field_type,
        description=description,
    )


def parse_field_definitions(payload: Any) -> list[FieldDefinition]:
    """Decode a get_*_fields response body, keeping the service's order."""
    if not isinstance(payload, list):
        raise FieldDefinitionError(
            f"Expected a JSON array of field definitions, got {type(payload).__name__}"
        )
    fields = [parse_field_definition(record) for record in payload]
    seen: set[str] = set()
    for field in fields:
        if field.system_name in seen:
            raise FieldDefinitionError(f"Duplicate system_name {field.system_name!r}")
        seen.add(field.system_name)
    return fields


def fetch_field_definitions(
    client: httpx.Client,
    config: GeneratorConfig,
    method: str,
) -> list[FieldDefinition]:
    """Fetch and decode one custom field collection."""
    url = config.endpoint(method)
    fields = parse_field_definitions(fetch_json(client, url))
    logger.debug("%s returned %d fields", method, len(fields))
    return fields
