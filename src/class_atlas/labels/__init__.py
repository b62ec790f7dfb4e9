"""Labels package — record label rendering and its building blocks."""

from __future__ import annotations

from class_atlas.labels.escape import escape
from class_atlas.labels.filter import MemberFilter
from class_atlas.labels.renderer import LabelRenderer
from class_atlas.labels.types import TypeResolver, canonicalize
from class_atlas.labels.values import format_value

__all__ = [
    "LabelRenderer",
    "MemberFilter",
    "TypeResolver",
    "canonicalize",
    "escape",
    "format_value",
]
