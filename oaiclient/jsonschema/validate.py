"""Validation of decoded JSON data against a schema definition."""

from __future__ import annotations

import json
import math
from typing import Any

from .definition import DataType, Definition


class SchemaValidationError(ValueError):
    """Raised when decoded data does not match its schema."""


def collect_defs(schema: Definition) -> dict[str, Definition]:
    """Map every ``$defs`` entry reachable from ``schema`` to its JSON pointer."""
    result: dict[str, Definition] = {}
    _collect(schema, result, "#")
    return result


def _collect(schema: Definition, result: dict[str, Definition], prefix: str) -> None:
    for name, sub in (schema.defs or {}).items():
        path = f"{prefix}/$defs/{name}"
        result[path] = sub
        _collect(sub, result, path)
    for name, sub in (schema.properties or {}).items():
        _collect(sub, result, f"{prefix}/properties/{name}")
    if schema.items is not None:
        _collect(schema.items, result, prefix)


def validate(
    schema: Definition, data: Any, defs: dict[str, Definition] | None = None
) -> bool:
    """Return whether ``data`` matches ``schema``.

    ``defs`` resolves ``$ref`` pointers; when omitted it is collected from
    ``schema`` itself.
    """
    if defs is None:
        defs = collect_defs(schema)

    kind = schema.type
    if kind == DataType.OBJECT:
        return _validate_object(schema, data, defs)
    if kind == DataType.ARRAY:
        return _validate_array(schema, data, defs)
    if kind == DataType.STRING:
        if not isinstance(data, str):
            return False
        return data in schema.enum if schema.enum else True
    if kind == DataType.NUMBER:
        return isinstance(data, (int, float)) and not isinstance(data, bool)
    if kind == DataType.BOOLEAN:
        return isinstance(data, bool)
    if kind == DataType.INTEGER:
        if isinstance(data, bool):
            return False
        if isinstance(data, float):
            return math.isfinite(data) and data.is_integer()
        return isinstance(data, int)
    if kind == DataType.NULL:
        return data is None
    if schema.ref:
        target = defs.get(schema.ref)
        if target is not None:
            return validate(target, data, defs)
    return False


def _validate_object(
    schema: Definition, data: Any, defs: dict[str, Definition]
) -> bool:
    if not isinstance(data, dict):
        return False
    if any(name not in data for name in schema.required or ()):
        return False
    return all(
        validate(sub, data[name], defs)
        for name, sub in (schema.properties or {}).items()
        if name in data
    )


def _validate_array(schema: Definition, data: Any, defs: dict[str, Definition]) -> bool:
    if not isinstance(data, list):
        return False
    if schema.items is None:
        return True
    return all(validate(schema.items, item, defs) for item in data)


def verify_schema_and_unmarshal(schema: Definition, content: str | bytes) -> Any:
    """Decode ``content`` as JSON and return it if it matches ``schema``.

    Raises ``json.JSONDecodeError`` for malformed input and
    ``SchemaValidationError`` when the data does not match.
    """
    data = json.loads(content)
    if not validate(schema, data, collect_defs(schema)):
        raise SchemaValidationError(
            "data validation failed against the provided schema"
        )
    return data