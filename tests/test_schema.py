"""Unit tests for the diagram vocabulary.

These values end up verbatim in DOT output.
"""

from __future__ import annotations

from class_atlas.schema import (
    HEADER_STEREOTYPES,
    INHERITANCE_EDGE,
    NOTE_EDGE,
    REALIZATION_EDGE,
    VISIBILITY_MARKERS,
    Stereotype,
    TypeKind,
    Visibility,
)


class TestVocabularyCompleteness:
    """Every visibility has a marker; only interfaces and abstract classes get header stereotypes."""

    def test_markers(self):
        assert set(VISIBILITY_MARKERS) == set(Visibility)
        assert VISIBILITY_MARKERS[Visibility.PRIVATE] == "–"

    def test_header_stereotypes(self):
        assert dict(HEADER_STEREOTYPES) == {
            TypeKind.INTERFACE: Stereotype.INTERFACE,
            TypeKind.ABSTRACT_CLASS: Stereotype.ABSTRACT,
        }


def test_kind_values():
    assert [k.value for k in TypeKind] == ["class", "abstractClass", "interface", "extensionModule"]


def test_edge_styles_differ_only_by_dash():
    assert dict(REALIZATION_EDGE) == {**INHERITANCE_EDGE, "style": "dashed"}
    assert NOTE_EDGE["arrowhead"] == "none"
