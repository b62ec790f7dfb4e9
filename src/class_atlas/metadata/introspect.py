"""Runtime introspection of Python classes and modules.

Maps live Python objects onto descriptors:

- ``typing.Protocol`` subclasses and pure-abstract ABCs are interfaces; other
  classes with unimplemented abstract methods are abstract classes.
- Visibility follows naming conventions: ``__x`` (name-mangled) is private,
  ``_x`` is protected, everything else (dunders included) is public.
- UPPER_CASE class attributes are constants; other data attributes and
  annotations are properties; routines are methods.
- Modules double as extension modules: their public functions and
  UPPER_CASE attributes.

Type names are ``module.QualName`` (bare ``QualName`` for builtins) and resolve
back through :func:`importlib.import_module` plus attribute lookup.
"""

from __future__ import annotations

import builtins
import functools
import importlib
import inspect
import re
import typing
from typing import TYPE_CHECKING, Any

from loguru import logger

from class_atlas.errors import TypeNotFoundError
from class_atlas.metadata.descriptors import (
    MISSING,
    ExtensionDescriptor,
    FunctionDescriptor,
    MethodDescriptor,
    ParameterDescriptor,
    PropertyDescriptor,
    TypeDescriptor,
)
from class_atlas.metadata.provider import normalize_type_name
from class_atlas.schema import TypeKind, Visibility

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable
    from types import ModuleType

_CONSTANT_NAME = re.compile(r"[A-Z][A-Z0-9_]*")

# Machinery classes that never show up as parents or interfaces
_IGNORED_BASES: frozenset[Any] = frozenset({object, typing.Generic, typing.Protocol})
_MACHINERY_MODULES: frozenset[str] = frozenset({"abc", "typing", "typing_extensions", "_typeshed"})
_SKIPPED_DATA: frozenset[str] = frozenset(
    {"_is_protocol", "_is_runtime_protocol", "_abc_impl", "__annotate__", "__annotate_func__", "__annotations_cache__"}
)


# ---------------------------------------------------------------------------
# Naming helpers
# ---------------------------------------------------------------------------


def type_name(cls: type) -> str:
    """Qualified diagram name of *cls*."""
    if cls.__module__ == "builtins":
        return cls.__qualname__
    return f"{cls.__module__}.{cls.__qualname__}"


def member_visibility(name: str) -> Visibility:
    """Visibility implied by a Python member name."""
    if name.startswith("__") and name.endswith("__"):
        return Visibility.PUBLIC
    if name.startswith("__"):
        return Visibility.PRIVATE
    if name.startswith("_"):
        return Visibility.PROTECTED
    return Visibility.PUBLIC


def _demangle(name: str, owner: type) -> str:
    """Undo private name mangling (``_Owner__x`` -> ``__x``)."""
    prefix = f"_{owner.__name__.lstrip('_')}__"
    if name.startswith(prefix) and len(name) > len(prefix):
        return "__" + name[len(prefix) :]
    return name


def _is_machinery(cls: type) -> bool:
    return cls in _IGNORED_BASES or cls.__module__ in _MACHINERY_MODULES


def _annotation_name(annotation: Any, module: str | None = None) -> str | None:
    """Best-effort type name for an annotation."""
    if annotation is inspect.Parameter.empty or annotation is None:
        return None
    if isinstance(annotation, str):
        if module and annotation.isidentifier() and annotation not in vars(builtins):
            return f"{module}.{annotation}"
        return annotation
    if isinstance(annotation, type) and typing.get_origin(annotation) is None:
        return type_name(annotation)
    origin = typing.get_origin(annotation)
    args = typing.get_args(annotation)
    if origin is list and len(args) == 1 and isinstance(args[0], type):
        return f"array[{args[0].__qualname__}]"
    if origin is typing.ClassVar and len(args) == 1:
        return _annotation_name(args[0], module)
    return str(annotation).replace("typing.", "")


def _annotations(owner: type) -> dict[str, Any]:
    try:
        return inspect.get_annotations(owner, eval_str=True)
    except (NameError, SyntaxError, TypeError, AttributeError):
        pass
    try:
        return inspect.get_annotations(owner)
    except NameError:
        logger.debug("Unresolvable annotations on {}", owner.__qualname__)
        return {}


def _is_class_var(annotation: Any) -> bool:
    if isinstance(annotation, str):
        return annotation.startswith(("ClassVar", "typing.ClassVar"))
    return typing.get_origin(annotation) is typing.ClassVar


# ---------------------------------------------------------------------------
# Callables
# ---------------------------------------------------------------------------


def _signature(func: Callable[..., Any]) -> inspect.Signature | None:
    try:
        return inspect.signature(func, eval_str=True)
    except (NameError, SyntaxError, TypeError, AttributeError):
        pass
    except ValueError:
        return None
    try:
        return inspect.signature(func)
    except (TypeError, ValueError):
        # Some builtins expose no signature
        return None


def _parameters(func: Callable[..., Any], *, skip_first: bool) -> tuple[ParameterDescriptor, ...]:
    sig = _signature(func)
    if sig is None:
        return ()
    module = getattr(func, "__module__", None)
    params = list(sig.parameters.values())
    if skip_first and params and params[0].kind in (params[0].POSITIONAL_ONLY, params[0].POSITIONAL_OR_KEYWORD):
        params = params[1:]

    result: list[ParameterDescriptor] = []
    for position, p in enumerate(params):
        name = p.name
        if p.kind == p.VAR_POSITIONAL:
            name = f"*{name}"
        elif p.kind == p.VAR_KEYWORD:
            name = f"**{name}"
        has_default = p.default is not p.empty
        result.append(
            ParameterDescriptor(
                name=name,
                position=position,
                declared_type_name=_annotation_name(p.annotation, module),
                is_optional=has_default,
                default_value=p.default if has_default else MISSING,
            )
        )
    return tuple(result)


def _return_type(func: Callable[..., Any]) -> str | None:
    sig = _signature(func)
    if sig is None:
        return None
    return _annotation_name(sig.return_annotation, getattr(func, "__module__", None))


def describe_function(func: Callable[..., Any], name: str | None = None) -> FunctionDescriptor:
    """Describe a module-level function."""
    return FunctionDescriptor(
        name=name or func.__name__,
        parameters=_parameters(func, skip_first=False),
        declared_return_type_name=_return_type(func),
        doc_comment=inspect.getdoc(func),
    )


# ---------------------------------------------------------------------------
# Provider
# ---------------------------------------------------------------------------


class IntrospectionProvider:
    """Metadata provider reading live Python classes and modules.

    Classes that cannot be imported by name (e.g. defined inside a function)
    can be made resolvable with :meth:`register`.
    """

    def __init__(self, classes: Iterable[type] = ()) -> None:
        self._classes: dict[str, type] = {}
        self._cache: dict[str, TypeDescriptor] = {}
        for cls in classes:
            self.register(cls)

    def register(self, cls: type) -> str:
        """Make *cls* resolvable by its diagram name; returns that name."""
        name = type_name(cls)
        self._classes[name] = cls
        return name

    # -- lookup ---------------------------------------------------------------

    def resolve_class(self, name: str) -> type | None:
        """Find the class object behind a diagram name, or ``None``."""
        name = normalize_type_name(name)
        cls = self._classes.get(name)
        if cls is not None:
            return cls

        parts = name.split(".")
        for i in range(len(parts) - 1, 0, -1):
            try:
                obj: Any = importlib.import_module(".".join(parts[:i]))
            except ImportError:
                continue
            try:
                for attr in parts[i:]:
                    obj = getattr(obj, attr)
            except AttributeError:
                return None
            return obj if isinstance(obj, type) else None

        obj = getattr(builtins, name, None)
        return obj if isinstance(obj, type) else None

    def get_type(self, name: str) -> TypeDescriptor:
        descriptor = self.find_type(name)
        if descriptor is None:
            raise TypeNotFoundError(name)
        return descriptor

    def find_type(self, name: str) -> TypeDescriptor | None:
        cls = self.resolve_class(name)
        if cls is None:
            logger.debug("Class {!r} could not be resolved", name)
            return None
        return self.describe(cls)

    def get_extension(self, name: str) -> ExtensionDescriptor:
        try:
            module = importlib.import_module(name)
        except ImportError as exc:
            raise TypeNotFoundError(name, "extension") from exc
        return describe_module(module)

    # -- classes --------------------------------------------------------------

    def is_interface(self, cls: type) -> bool:
        """Protocols and ABCs made only of abstract methods count as interfaces."""
        if _is_machinery(cls):
            return False
        if getattr(cls, "_is_protocol", False):
            return True
        if not inspect.isabstract(cls):
            return False
        if not all(_is_machinery(base) or self.is_interface(base) for base in cls.__bases__):
            return False
        for attr, value in vars(cls).items():
            if (attr.startswith("__") and attr.endswith("__")) or attr in _SKIPPED_DATA or _CONSTANT_NAME.fullmatch(attr):
                continue
            func = value.__func__ if isinstance(value, (staticmethod, classmethod)) else value
            if isinstance(func, property):
                func = func.fget
            if not getattr(func, "__isabstractmethod__", False):
                return False
        return True

    def _kind(self, cls: type) -> TypeKind:
        if self.is_interface(cls):
            return TypeKind.INTERFACE
        if inspect.isabstract(cls):
            return TypeKind.ABSTRACT_CLASS
        return TypeKind.CLASS

    def _hierarchy(self, cls: type) -> list[type]:
        return [k for k in cls.__mro__ if not _is_machinery(k)]

    def describe(self, cls: type) -> TypeDescriptor:
        """Build (and cache) the descriptor for *cls*."""
        name = self.register(cls)
        cached = self._cache.get(name)
        if cached is not None:
            return cached

        is_interface = self.is_interface(cls)
        parent: type | None = None
        if not is_interface:
            parent = next(
                (b for b in cls.__bases__ if not _is_machinery(b) and not self.is_interface(b)),
                None,
            )
        interfaces = [k for k in cls.__mro__[1:] if self.is_interface(k)]
        for related in ([parent] if parent else []) + interfaces:
            self.register(related)

        constants: dict[str, Any] = {}
        properties: list[PropertyDescriptor] = []
        methods: list[MethodDescriptor] = []
        seen: set[str] = set()

        for owner in self._hierarchy(cls):
            declaring = type_name(owner)
            annotations = _annotations(owner)
            for raw_name, value in vars(owner).items():
                member = _demangle(raw_name, owner)
                if member in seen or raw_name in _SKIPPED_DATA:
                    continue
                descriptor = self._member(owner, member, value, annotations.get(raw_name, MISSING), declaring)
                if descriptor is None:
                    continue
                seen.add(member)
                if isinstance(descriptor, MethodDescriptor):
                    methods.append(descriptor)
                elif isinstance(descriptor, PropertyDescriptor):
                    properties.append(descriptor)
                else:
                    constants[member] = value
            for raw_name, annotation in annotations.items():
                member = _demangle(raw_name, owner)
                if member in seen or raw_name in vars(owner) or _CONSTANT_NAME.fullmatch(member):
                    continue
                seen.add(member)
                properties.append(
                    PropertyDescriptor(
                        name=member,
                        visibility=member_visibility(member),
                        is_static=_is_class_var(annotation),
                        declaring_type_name=declaring,
                        declared_type_name=_annotation_name(annotation, owner.__module__),
                    )
                )

        descriptor = TypeDescriptor(
            name=name,
            kind=TypeKind.INTERFACE if is_interface else self._kind(cls),
            parent=type_name(parent) if parent else None,
            interfaces=tuple(type_name(k) for k in interfaces),
            constants=constants,
            properties=tuple(properties),
            methods=tuple(methods),
            doc_comment=cls.__doc__,
        )
        self._cache[name] = descriptor
        return descriptor

    def _member(
        self,
        owner: type,
        name: str,
        value: Any,
        annotation: Any,
        declaring: str,
    ) -> MethodDescriptor | PropertyDescriptor | str | None:
        """Classify one class attribute; returns ``"constant"`` for constants."""
        is_static = isinstance(value, (staticmethod, classmethod))
        func = value.__func__ if is_static else value

        if isinstance(func, property):
            fget = func.fget
            return PropertyDescriptor(
                name=name,
                visibility=member_visibility(name),
                declaring_type_name=declaring,
                declared_type_name=_return_type(fget) if fget else None,
                doc_comment=inspect.getdoc(fget) if fget else None,
            )

        if isinstance(value, functools.cached_property):
            return PropertyDescriptor(
                name=name,
                visibility=member_visibility(name),
                declaring_type_name=declaring,
                declared_type_name=_return_type(value.func),
                doc_comment=inspect.getdoc(value.func),
            )

        if inspect.isroutine(func):
            if getattr(func, "__module__", None) in _MACHINERY_MODULES:
                return None
            return MethodDescriptor(
                name=name,
                parameters=_parameters(func, skip_first=not isinstance(value, staticmethod)),
                declared_return_type_name=_return_type(func),
                doc_comment=func.__doc__,
                visibility=member_visibility(name),
                is_static=is_static,
                is_abstract=bool(getattr(func, "__isabstractmethod__", False)),
                declaring_type_name=declaring,
            )

        if name.startswith("__") and name.endswith("__"):
            return None
        if inspect.isclass(value) or inspect.ismodule(value):
            return None

        has_annotation = annotation is not MISSING
        declared = _annotation_name(annotation, owner.__module__) if has_annotation else None

        # __slots__ entries and other data descriptors hold per-instance values
        if inspect.ismemberdescriptor(value) or inspect.isdatadescriptor(value):
            return PropertyDescriptor(
                name=name,
                visibility=member_visibility(name),
                declaring_type_name=declaring,
                declared_type_name=declared,
            )
        if _CONSTANT_NAME.fullmatch(name):
            return "constant"

        return PropertyDescriptor(
            name=name,
            visibility=member_visibility(name),
            is_static=not has_annotation or _is_class_var(annotation),
            declaring_type_name=declaring,
            default_value=value,
            declared_type_name=declared,
        )


def describe_module(module: ModuleType) -> ExtensionDescriptor:
    """Describe a module as an extension: public functions and constants."""
    functions: list[FunctionDescriptor] = []
    constants: dict[str, Any] = {}
    is_native = getattr(module, "__file__", None) is None or not str(module.__file__).endswith(".py")
    for attr, value in vars(module).items():
        if attr.startswith("_"):
            continue
        if inspect.isroutine(value):
            if is_native or getattr(value, "__module__", None) == module.__name__:
                functions.append(describe_function(value, attr))
        elif _CONSTANT_NAME.fullmatch(attr) and not (inspect.isclass(value) or inspect.ismodule(value)):
            constants[attr] = value
    return ExtensionDescriptor(
        name=module.__name__,
        functions=tuple(functions),
        constants=constants,
        doc_comment=module.__doc__,
    )
