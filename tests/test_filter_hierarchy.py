"""Tests for member filtering and interface edge pruning."""

from __future__ import annotations

from class_atlas.hierarchy import prune_interfaces
from class_atlas.labels.filter import MemberFilter, identical
from class_atlas.metadata.descriptors import PropertyDescriptor, TypeDescriptor
from class_atlas.schema import TypeKind, Visibility
from class_atlas.settings import DiagramOptions

# ---------------------------------------------------------------------------
# MemberFilter
# ---------------------------------------------------------------------------


class TestVisibility:
    def test_defaults(self):
        f = MemberFilter(DiagramOptions())
        assert f.is_displayable(Visibility.PUBLIC)
        assert f.is_displayable(Visibility.PROTECTED)
        assert not f.is_displayable(Visibility.PRIVATE)

    def test_everything_hidden_but_public(self):
        f = MemberFilter(DiagramOptions(show_protected=False, show_private=False))
        assert f.is_displayable(Visibility.PUBLIC)
        assert not f.is_displayable(Visibility.PROTECTED)
        assert not f.is_displayable(Visibility.PRIVATE)

    def test_private_only(self):
        f = MemberFilter(DiagramOptions(show_protected=False, show_private=True))
        assert not f.is_displayable(Visibility.PROTECTED)
        assert f.is_displayable(Visibility.PRIVATE)


class TestOwnMembers:
    def test_only_self_hides_inherited(self):
        f = MemberFilter(DiagramOptions(only_self=True))
        inherited = PropertyDescriptor("p", declaring_type_name="Base")
        own = PropertyDescriptor("q", declaring_type_name="Child")
        assert not f.shows_member(inherited, "Child")
        assert f.shows_member(own, "Child")

    def test_inherited_shown_without_only_self(self):
        f = MemberFilter(DiagramOptions(only_self=False))
        assert f.shows_member(PropertyDescriptor("p", declaring_type_name="Base"), "Child")

    def test_visibility_still_applies(self):
        f = MemberFilter(DiagramOptions(only_self=True))
        hidden = PropertyDescriptor("p", visibility=Visibility.PRIVATE, declaring_type_name="Child")
        assert not f.shows_member(hidden, "Child")


class TestConstants:
    parent = TypeDescriptor("Base", constants={"A": 1, "B": "x", "C": [1, 2]})

    def test_same_value_counts_as_inherited(self):
        f = MemberFilter(DiagramOptions(only_self=True))
        assert not f.shows_constant("A", 1, self.parent)
        assert not f.shows_constant("C", [1, 2], self.parent)

    def test_changed_value_is_shown(self):
        f = MemberFilter(DiagramOptions(only_self=True))
        assert f.shows_constant("A", 2, self.parent)
        assert f.shows_constant("B", "y", self.parent)

    def test_type_must_match(self):
        f = MemberFilter(DiagramOptions(only_self=True))
        assert f.shows_constant("A", 1.0, self.parent)
        assert f.shows_constant("A", True, self.parent)

    def test_new_name_and_no_parent(self):
        f = MemberFilter(DiagramOptions(only_self=True))
        assert f.shows_constant("Z", 1, self.parent)
        assert f.shows_constant("A", 1, None)

    def test_all_shown_without_only_self(self):
        f = MemberFilter(DiagramOptions(only_self=False))
        assert f.shows_constant("A", 1, self.parent)


def test_identical():
    assert identical({"a": [1]}, {"a": [1]})
    assert not identical({"a": 1, "b": 2}, {"b": 2, "a": 1})
    assert not identical(0, False)
    assert not identical([1], (1,))


# ---------------------------------------------------------------------------
# prune_interfaces
# ---------------------------------------------------------------------------


def _lookup(*types: TypeDescriptor):
    index = {t.name: t for t in types}
    return index.get


class TestPruneInterfaces:
    def test_parent_interfaces_removed(self):
        i = TypeDescriptor("I", TypeKind.INTERFACE)
        j = TypeDescriptor("J", TypeKind.INTERFACE)
        parent = TypeDescriptor("P", interfaces=("I",))
        child = TypeDescriptor("C", parent="P", interfaces=("I", "J"))
        assert prune_interfaces(child, _lookup(i, j, parent)) == ["J"]

    def test_sibling_reduction_one_level(self):
        base = TypeDescriptor("Base", TypeKind.INTERFACE)
        mid = TypeDescriptor("Mid", TypeKind.INTERFACE, interfaces=("Base",))
        other = TypeDescriptor("Other", TypeKind.INTERFACE)
        t = TypeDescriptor("T", interfaces=("Mid", "Base", "Other"))
        assert prune_interfaces(t, _lookup(base, mid, other)) == ["Mid", "Other"]

    def test_order_follows_input(self):
        a = TypeDescriptor("A", TypeKind.INTERFACE)
        b = TypeDescriptor("B", TypeKind.INTERFACE)
        assert prune_interfaces(TypeDescriptor("T", interfaces=("B", "A")), _lookup(a, b)) == ["B", "A"]

    def test_only_direct_interface_lists_are_consulted(self):
        # Top's list is not transitive here, so Bottom survives: one level only
        bottom = TypeDescriptor("Bottom", TypeKind.INTERFACE)
        mid = TypeDescriptor("Mid", TypeKind.INTERFACE, interfaces=("Bottom",))
        top = TypeDescriptor("Top", TypeKind.INTERFACE, interfaces=("Mid",))
        t = TypeDescriptor("T", interfaces=("Top", "Bottom"))
        assert prune_interfaces(t, _lookup(bottom, mid, top)) == ["Top", "Bottom"]

    def test_no_interfaces(self):
        assert prune_interfaces(TypeDescriptor("T"), _lookup()) == []
