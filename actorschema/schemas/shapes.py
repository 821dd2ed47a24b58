"""
Schema shape helpers for consumers (the dynamic form renderer).

A resolved schema arrives in one of three shapes:
- json_schema: {"properties": {...}, "required": [...]}
- example: an arbitrary flat JSON object (the example-input fallback)
- empty: {}
"""

from __future__ import annotations

from typing import Any, Literal

from actorschema.schemas.types import Schema

SchemaShape = Literal["json_schema", "example", "empty"]
Widget = Literal["select", "checkbox", "json", "number", "text"]


def describe_schema(schema: Schema) -> SchemaShape:
    if not schema:
        return "empty"
    if isinstance(schema.get("properties"), dict):
        return "json_schema"
    return "example"


def field_widget(field: dict[str, Any]) -> Widget:
    """
    Pick the input widget for one JSON-Schema property.

    enum -> select, boolean -> checkbox, array/object -> JSON text,
    integer/number -> number, everything else -> text.
    """
    if field.get("enum"):
        return "select"
    field_type = field.get("type")
    if field_type == "boolean":
        return "checkbox"
    if field_type in ("array", "object"):
        return "json"
    if field_type in ("integer", "number"):
        return "number"
    return "text"


def example_widget(value: Any) -> Widget:
    """Pick the widget for one key of an example payload, from its value."""
    if isinstance(value, bool):
        return "checkbox"
    if isinstance(value, (list, dict)):
        return "json"
    if isinstance(value, (int, float)):
        return "number"
    return "text"


def form_fields(schema: Schema) -> list[dict[str, Any]]:
    """
    Flatten a resolved schema into renderable field descriptors.

    Each descriptor has name, widget, required, and the source field's
    title/description/default/enum where present.
    """
    shape = describe_schema(schema)
    if shape == "empty":
        return []

    if shape == "example":
        return [
            {"name": key, "widget": example_widget(value), "required": False, "default": value}
            for key, value in schema.items()
        ]

    required = set(schema.get("required") or [])
    fields = []
    for name, field in schema["properties"].items():
        if not isinstance(field, dict):
            field = {}
        descriptor: dict[str, Any] = {
            "name": name,
            "widget": field_widget(field),
            "required": name in required,
        }
        for key in ("title", "description", "default", "enum", "editor"):
            if key in field:
                descriptor[key] = field[key]
        fields.append(descriptor)
    return fields
