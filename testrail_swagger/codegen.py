"""Render the Swagger document template.

The template holds the static TestRail paths and definitions; custom field
properties are serialized to YAML at the two insertion points.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import jinja2
import yaml

TEMPLATE_DIR = Path(__file__).parent / "templates"
TEMPLATE_NAME = "swagger.yaml.j2"


def to_yaml(value: Any) -> str:
    """Serialize a value as block YAML, keeping insertion order.

    An empty mapping comes out as ``{}`` so ``properties:`` stays an object.
    """
    text = yaml.safe_dump(
        value,
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
        width=float("inf"),
    )
    return text.rstrip("\n")


def make_environment() -> jinja2.Environment:
    env = jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(TEMPLATE_DIR)),
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
        undefined=jinja2.StrictUndefined,
    )
    env.filters["to_yaml"] = to_yaml
    return env


def generate(context: dict[str, Any]) -> str:
    """Render the Swagger template and return the document text."""
    template = make_environment().get_template(TEMPLATE_NAME)
    return template.render(**context)
