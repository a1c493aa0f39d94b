"""Build the Jinja2 template context from fetched field metadata.

Custom fields are sorted by system_name so the generated document does not
change when TestRail returns them in a different order.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

from .config import ServiceCoordinates
from .field_types import schema_for
from .models import FieldDefinition, FieldProperty


def build_property(field: FieldDefinition) -> FieldProperty:
    """Render one field definition into a schema property."""
    return FieldProperty(
        name=field.system_name,
        schema=schema_for(field.type_id),
        description=field.description or None,
    )


def build_properties(fields: Iterable[FieldDefinition]) -> list[FieldProperty]:
    """Render a field collection, ordered by system_name."""
    ordered = sorted(fields, key=lambda f: f.system_name)
    return [build_property(f) for f in ordered]


def properties_mapping(properties: Sequence[FieldProperty]) -> dict[str, Any]:
    """Ordered name -> schema mapping for a properties block."""
    return {prop.name: prop.as_schema() for prop in properties}


def build_context(
    service: ServiceCoordinates,
    case_fields: Iterable[FieldDefinition],
    result_fields: Iterable[FieldDefinition],
) -> dict[str, Any]:
    """Build the full template context for swagger.yaml.j2."""
    case_properties = build_properties(case_fields)
    result_properties = build_properties(result_fields)
    return {
        "service": service,
        "case_properties": properties_mapping(case_properties),
        "result_properties": properties_mapping(result_properties),
        "case_field_count": len(case_properties),
        "result_field_count": len(result_properties),
    }
