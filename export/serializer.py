"""
Render a finalized schema tree as plain Python data or JSON text.

Output shape:
    {
        "count": 2,
        "fields": [
            {
                "name": "type",
                "path": "type",
                "count": 2,
                "type": ["String", "Null"],
                "probability": 0.5,
                "has_duplicates": false,
                "types": [{"name": "String", "path": "type", "count": 1, ...}]
            }
        ]
    }

Document types carry their nested "fields" instead of values, and omit
"unique" and "has_duplicates"; duplication inside a nested document is
reported through its own fields.
"""
import base64
import json
import math
from typing import Any, Optional


def value_to_json(value) -> Any:
    """Convert a Value to something json.dumps accepts without allow_nan."""
    data = value.to_python()
    if isinstance(data, bytes):
        return base64.b64encode(data).decode("ascii")
    if isinstance(data, float) and not math.isfinite(data):
        if math.isnan(data):
            return "NaN"
        return "Infinity" if data > 0 else "-Infinity"
    return data


def type_to_dict(field_type) -> dict:
    result = {
        "name": field_type.name,
        "path": field_type.path,
        "count": field_type.count,
        "probability": field_type.probability,
    }

    if field_type.is_document:
        result["fields"] = [field_to_dict(f) for f in field_type.schema.fields.values()]
        return result

    if field_type.values:
        result["values"] = [value_to_json(v) for v in field_type.values]
    if field_type.lengths:
        result["lengths"] = list(field_type.lengths)
        result["average_length"] = field_type.average_length
    if field_type.types:
        result["types"] = [type_to_dict(t) for t in field_type.types.values()]
    if field_type.unique is not None:
        result["unique"] = field_type.unique
    result["has_duplicates"] = field_type.has_duplicates
    return result


def field_to_dict(field) -> dict:
    type_names = field.type_names
    return {
        "name": field.name,
        "path": field.path,
        "count": field.count,
        "type": type_names[0] if len(type_names) == 1 else type_names,
        "probability": field.probability,
        "has_duplicates": field.has_duplicates,
        "types": [type_to_dict(t) for t in field.types.values()],
    }


def to_dict(schema) -> dict:
    """
    Render a finalized SchemaParser.

    Args:
        schema: A SchemaParser on which finalize() has been called.

    Returns:
        Nested dicts and lists of JSON-compatible values.
    """
    return {
        "count": schema.count,
        "fields": [field_to_dict(f) for f in schema.fields.values()],
    }


def to_json(schema, indent: Optional[int] = None) -> str:
    """Render a finalized SchemaParser as JSON text."""
    return json.dumps(to_dict(schema), indent=indent, allow_nan=False)
