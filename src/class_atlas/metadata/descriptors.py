"""Read-only descriptors for types, members and parameters.

Descriptors are supplied by a metadata provider and never mutated by the
diagram builder.  Type references (parent, interfaces) are held by name and
resolved through the provider.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from class_atlas.errors import DefaultValueError
from class_atlas.schema import TypeKind, Visibility

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping


class _Missing:
    """Sentinel for "no default value" (distinct from a default of ``None``)."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


# ---------------------------------------------------------------------------
# Parameters and callables
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ParameterDescriptor:
    """A single formal parameter of a method or function."""

    name: str
    position: int
    declared_type_name: str | None = None
    is_by_reference: bool = False
    is_optional: bool = False
    default_value: Any = MISSING
    default_factory: Callable[[], Any] | None = None

    def evaluate_default(self) -> Any:
        """Return the default value, evaluating it lazily if needed.

        Raises :class:`DefaultValueError` when the parameter has no default
        or its default expression cannot be evaluated.
        """
        if self.default_factory is not None:
            try:
                return self.default_factory()
            except DefaultValueError:
                raise
            except Exception as exc:
                raise DefaultValueError(self.name, str(exc)) from exc
        if self.default_value is MISSING:
            raise DefaultValueError(self.name, "no default value")
        return self.default_value


@dataclass(frozen=True)
class FunctionDescriptor:
    """A bare callable, e.g. a function exported by an extension module.

    Functions carry no visibility or declaring type; they render as public,
    non-static, non-abstract members.
    """

    name: str
    parameters: tuple[ParameterDescriptor, ...] = ()
    declared_return_type_name: str | None = None
    doc_comment: str | None = None


@dataclass(frozen=True)
class MethodDescriptor(FunctionDescriptor):
    """A method declared somewhere in a type hierarchy."""

    visibility: Visibility = Visibility.PUBLIC
    is_static: bool = False
    is_abstract: bool = False
    declaring_type_name: str = ""


# ---------------------------------------------------------------------------
# Properties and types
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PropertyDescriptor:
    """A property (field) of a type."""

    name: str
    visibility: Visibility = Visibility.PUBLIC
    is_static: bool = False
    declaring_type_name: str = ""
    default_value: Any = MISSING
    declared_type_name: str | None = None
    doc_comment: str | None = None

    @property
    def has_default(self) -> bool:
        return self.default_value is not MISSING


@dataclass(frozen=True)
class TypeDescriptor:
    """A class, abstract class or interface."""

    name: str
    kind: TypeKind = TypeKind.CLASS
    parent: str | None = None
    interfaces: tuple[str, ...] = ()  # direct + inherited, duplicates removed
    constants: Mapping[str, Any] = field(default_factory=dict)
    properties: tuple[PropertyDescriptor, ...] = ()
    methods: tuple[MethodDescriptor, ...] = ()
    doc_comment: str | None = None

    @property
    def is_interface(self) -> bool:
        return self.kind == TypeKind.INTERFACE

    @property
    def is_abstract(self) -> bool:
        return self.kind == TypeKind.ABSTRACT_CLASS


@dataclass(frozen=True)
class ExtensionDescriptor:
    """An extension module: a named bundle of functions and constants."""

    name: str
    functions: tuple[FunctionDescriptor, ...] = ()
    constants: Mapping[str, Any] = field(default_factory=dict)
    doc_comment: str | None = None
