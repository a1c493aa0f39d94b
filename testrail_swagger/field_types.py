"""Map TestRail custom field type codes to Swagger schema fragments.

TestRail reports a ``type_id`` for every custom field:

   1 String
   2 Integer
   3 Text
   4 URL            (string)
   5 Checkbox       (boolean)
   6 Dropdown       (int32 option id)
   7 User           (int32 user id)
   8 Date           (string)
   9 Milestone      (int32 milestone id)
  10 Steps          (array of Step objects)
  11 Step Results   (int32 array)
  12 Multi-select   (int32 array of option ids)
"""

from __future__ import annotations

import copy
from enum import IntEnum
from typing import Any

STEP_REF = "#/definitions/Step"


class FieldDefinitionError(ValueError):
    """Raised when custom field metadata cannot be decoded."""


class UnknownFieldTypeError(FieldDefinitionError):
    """Raised for a type_id outside the known TestRail field types."""


class FieldType(IntEnum):
    STRING = 1
    INTEGER = 2
    TEXT = 3
    URL = 4
    CHECKBOX = 5
    DROPDOWN = 6
    USER = 7
    DATE = 8
    MILESTONE = 9
    STEPS = 10
    STEP_RESULTS = 11
    MULTI_SELECT = 12


_STRING: dict[str, Any] = {"type": "string"}
_BOOLEAN: dict[str, Any] = {"type": "boolean"}
_INT32: dict[str, Any] = {"type": "integer", "format": "int32"}
_STEP_ARRAY: dict[str, Any] = {"type": "array", "items": {"$ref": STEP_REF}}
_INT32_ARRAY: dict[str, Any] = {"type": "array", "items": dict(_INT32)}

_TYPE_SCHEMAS: dict[FieldType, dict[str, Any]] = {
    FieldType.STRING: _STRING,
    FieldType.TEXT: _STRING,
    FieldType.URL: _STRING,
    FieldType.DATE: _STRING,
    FieldType.CHECKBOX: _BOOLEAN,
    FieldType.INTEGER: _INT32,
    FieldType.DROPDOWN: _INT32,
    FieldType.USER: _INT32,
    FieldType.MILESTONE: _INT32,
    FieldType.STEPS: _STEP_ARRAY,
    FieldType.STEP_RESULTS: _INT32_ARRAY,
    FieldType.MULTI_SELECT: _INT32_ARRAY,
}


def to_field_type(type_id: int) -> FieldType:
    """Convert a raw type_id into a FieldType, rejecting unknown codes."""
    # bool is an int subclass, True would decode as STRING
    if isinstance(type_id, bool) or not isinstance(type_id, int):
        raise UnknownFieldTypeError(f"type_id must be an integer, got {type_id!r}")
    try:
        return FieldType(type_id)
    except ValueError:
        raise UnknownFieldTypeError(f"Unknown custom field type_id: {type_id}") from None


def schema_for(type_id: FieldType | int) -> dict[str, Any]:
    """Return the schema fragment for a field type as a fresh dict."""
    field_type = to_field_type(type_id)
    return copy.deepcopy(_TYPE_SCHEMAS[field_type])
