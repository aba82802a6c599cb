"""
Conversion of an extracted Schema to a JSON Schema (draft-07) document.
"""

import os
from typing import Any, Dict

from customizer.models import Parameter, Schema

JSON_SCHEMA_DRAFT = "http://json-schema.org/draft-07/schema#"
SCHEMA_ID_BASE = "https://openscad-customizer.local/schemas"

# Customizer types without a JSON Schema counterpart
_JSON_TYPE_MAP: Dict[str, str] = {
    "color": "string",
    "file": "string",
}


def _parameter_property(param: Parameter) -> Dict[str, Any]:
    prop: Dict[str, Any] = {
        "type": _JSON_TYPE_MAP.get(param.type, param.type),
        "title": param.name,
        "description": param.description,
        "default": param.default,
        "x-group": param.group,
        "x-order": param.order,
        "x-hint": param.ui_type,
    }

    if param.type in ("integer", "number"):
        if param.minimum is not None:
            prop["minimum"] = param.minimum
        if param.maximum is not None:
            prop["maximum"] = param.maximum
        if param.step is not None:
            prop["x-step"] = param.step
    if param.enum:
        prop["enum"] = list(param.enum)
    if param.type == "color":
        prop["format"] = "color"
    if param.accepted_extensions:
        prop["x-accepted-extensions"] = list(param.accepted_extensions)
    if param.unit is not None:
        prop["x-unit"] = param.unit
    if param.dependency is not None:
        prop["x-depends-on"] = param.dependency.to_dict()
    return prop


def to_json_schema(schema: Schema, filename: str) -> Dict[str, Any]:
    """Build a JSON Schema document describing a model's parameters.

    Args:
        schema: Extracted schema.
        filename: Source file name, used for ``$id`` and ``title``.

    Returns:
        JSON-serializable dictionary. Properties are emitted in source order.
    """
    stem = os.path.splitext(os.path.basename(filename))[0]
    ordered = sorted(schema.parameters.values(), key=lambda p: p.order)

    return {
        "$schema": JSON_SCHEMA_DRAFT,
        "$id": f"{SCHEMA_ID_BASE}/{stem}.json",
        "title": stem,
        "description": f"Parameters for {os.path.basename(filename)}",
        "type": "object",
        "properties": {param.name: _parameter_property(param) for param in ordered},
        "x-groups": [
            {"name": group.id, "label": group.label, "order": group.order}
            for group in schema.groups
        ],
        "x-libraries": sorted(schema.libraries),
    }
