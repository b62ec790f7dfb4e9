"""Member visibility and provenance filtering."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from class_atlas.schema import Visibility

if TYPE_CHECKING:
    from class_atlas.metadata.descriptors import MethodDescriptor, PropertyDescriptor, TypeDescriptor
    from class_atlas.settings import DiagramOptions


def identical(a: Any, b: Any) -> bool:
    """Strict equality: same type and equal value, element-wise for containers."""
    if type(a) is not type(b):
        return False
    if isinstance(a, (list, tuple)):
        return len(a) == len(b) and all(identical(x, y) for x, y in zip(a, b, strict=True))
    if isinstance(a, Mapping):
        return list(a) == list(b) and all(identical(a[k], b[k]) for k in a)
    return bool(a == b)


class MemberFilter:
    """Decides which members appear in a label."""

    def __init__(self, options: DiagramOptions) -> None:
        self._options = options

    def is_displayable(self, visibility: Visibility) -> bool:
        if visibility == Visibility.PUBLIC:
            return True
        if visibility == Visibility.PROTECTED:
            return self._options.show_protected
        if visibility == Visibility.PRIVATE:
            return self._options.show_private
        return False

    def is_own_member(self, declaring_type_name: str, current_type_name: str) -> bool:
        return declaring_type_name == current_type_name

    def shows_member(self, member: PropertyDescriptor | MethodDescriptor, current_type_name: str) -> bool:
        """Apply the only-self rule, then visibility."""
        if self._options.only_self and not self.is_own_member(member.declaring_type_name, current_type_name):
            return False
        return self.is_displayable(member.visibility)

    def shows_constant(self, name: str, value: Any, parent: TypeDescriptor | None) -> bool:
        """Constants carry no declaring type: treat one as inherited when the
        parent defines the same name with an identical value.

        A subclass redefining a constant to the same value is therefore
        hidden as well.
        """
        if not self._options.only_self or parent is None:
            return True
        if name not in parent.constants:
            return True
        return not identical(parent.constants[name], value)
