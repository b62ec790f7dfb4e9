"""Rendering of runtime values (defaults, constants) as label literals."""

from __future__ import annotations

from collections.abc import Mapping, Set
from typing import Any

from class_atlas.labels.escape import escape

_OPAQUE = (bytes, bytearray, memoryview)


def format_value(value: Any) -> str:
    """Render *value* as a record-label literal.

    Collections are never enumerated; objects show only their type name.
    """
    if value is None:
        return "NULL"
    if isinstance(value, str):
        return '\\"' + escape(value.replace('"', '\\"')) + '\\"'
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, (list, tuple, Mapping, Set)):
        return "[…]" if len(value) else "[]"
    if isinstance(value, _OPAQUE) or callable(value):
        return "…"
    return escape(type(value).__qualname__) + "\\{…\\}"


def value_type_name(value: Any) -> str:
    """Coarse type name of *value*, as a doc tag would spell it."""
    if value is None:
        return "NULL"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, float):
        return "double"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple, Mapping, Set)):
        return "array"
    return "object"
