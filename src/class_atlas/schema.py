"""Diagram vocabulary for Class Atlas.

Defines type kinds, member visibility, stereotypes, and the Graphviz layout
attributes attached to vertices and edges.  The attribute values are the wire
format understood by the rendering backend and must not change.
"""

from __future__ import annotations

from enum import StrEnum
from types import MappingProxyType

# ---------------------------------------------------------------------------
# Kind discriminators
# ---------------------------------------------------------------------------


class TypeKind(StrEnum):
    CLASS = "class"
    ABSTRACT_CLASS = "abstractClass"
    INTERFACE = "interface"
    EXTENSION_MODULE = "extensionModule"


class Visibility(StrEnum):
    PUBLIC = "public"
    PROTECTED = "protected"
    PRIVATE = "private"


# ---------------------------------------------------------------------------
# Label vocabulary
# ---------------------------------------------------------------------------


class Stereotype(StrEnum):
    INTERFACE = "«interface»"
    ABSTRACT = "«abstract»"
    EXTENSION = "«extension»"
    STATIC = "«static»"


VISIBILITY_MARKERS: MappingProxyType[Visibility, str] = MappingProxyType(
    {
        Visibility.PUBLIC: "+",
        Visibility.PROTECTED: "#",
        Visibility.PRIVATE: "–",  # EN DASH
    }
)

HEADER_STEREOTYPES: MappingProxyType[TypeKind, Stereotype] = MappingProxyType(
    {
        TypeKind.INTERFACE: Stereotype.INTERFACE,
        TypeKind.ABSTRACT_CLASS: Stereotype.ABSTRACT,
    }
)

# Placeholders for information that could not be resolved
INVALID_CLASS = "«invalidClass»"
UNKNOWN_DEFAULT = "«unknown»"
MIXED = "mixed"

# ---------------------------------------------------------------------------
# Layout attributes
# ---------------------------------------------------------------------------

RECORD_SHAPE = "record"

INHERITANCE_EDGE: MappingProxyType[str, str | int] = MappingProxyType({"arrowhead": "empty"})

REALIZATION_EDGE: MappingProxyType[str, str | int] = MappingProxyType({"arrowhead": "empty", "style": "dashed"})

NOTE_VERTEX: MappingProxyType[str, str | int] = MappingProxyType(
    {
        "shape": "note",
        "fontsize": 8,
        "style": "filled",
        "fillcolor": "yellow",
    }
)

NOTE_EDGE: MappingProxyType[str, str | int] = MappingProxyType({"len": 1, "style": "dashed", "arrowhead": "none"})


# ---------------------------------------------------------------------------
# Import-time validation
# ---------------------------------------------------------------------------


def _validate_vocabulary() -> None:
    """Ensure every visibility has a marker."""
    missing = set(Visibility) - set(VISIBILITY_MARKERS)
    if missing:
        msg = f"Visibility values missing from VISIBILITY_MARKERS: {missing}"
        raise RuntimeError(msg)


_validate_vocabulary()
