"""Records passed between the fetcher, the renderer and the assembler."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .field_types import FieldType


@dataclass(frozen=True)
class FieldDefinition:
    """One custom field as configured in TestRail."""

    system_name: str
    type_id: FieldType
    description: str | None = None


@dataclass(frozen=True)
class FieldProperty:
    """A named schema property rendered from a FieldDefinition."""

    name: str
    schema: dict[str, Any] = field(default_factory=dict)
    description: str | None = None

    def as_schema(self) -> dict[str, Any]:
        """Property schema with the description (if any) ahead of the type."""
        result: dict[str, Any] = {}
        if self.description:
            result["description"] = self.description
        result.update(self.schema)
        return result
