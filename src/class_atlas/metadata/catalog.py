"""Type catalogs: declarative hierarchy descriptions loaded from JSON or TOML.

A catalog lists types with their *direct* relationships and *own* members.
Loading validates the document with pydantic, then materializes descriptors
the way a runtime would report them: transitive interface sets, inherited
members tagged with the declaring type, and inherited constants.

Example (JSON)::

    {
      "types": [
        {"name": "Countable", "kind": "interface",
         "methods": [{"name": "count", "doc": "/** @return int */"}]},
        {"name": "Bag", "interfaces": ["Countable"],
         "constants": {"MAX": 10},
         "properties": [{"name": "items", "visibility": "private", "default": []}],
         "methods": [{"name": "add", "parameters": [{"name": "item"}]}]}
      ],
      "extensions": [{"name": "json", "functions": [{"name": "json_encode"}]}]
    }
"""

from __future__ import annotations

import json
import tomllib
from pathlib import Path
from typing import TYPE_CHECKING, Any

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, model_validator

from class_atlas.errors import DefaultValueError, TypeNotFoundError
from class_atlas.metadata.descriptors import (
    MISSING,
    ExtensionDescriptor,
    FunctionDescriptor,
    MethodDescriptor,
    ParameterDescriptor,
    PropertyDescriptor,
    TypeDescriptor,
)
from class_atlas.metadata.provider import StaticProvider
from class_atlas.schema import TypeKind, Visibility

if TYPE_CHECKING:
    from collections.abc import Callable

# ---------------------------------------------------------------------------
# Document models
# ---------------------------------------------------------------------------


class ParameterModel(BaseModel):
    """One parameter. ``default`` may be any JSON value, including ``null``."""

    model_config = ConfigDict(extra="forbid")

    name: str
    type: str | None = Field(default=None, description="Class or interface hint for the parameter.")
    by_reference: bool = False
    optional: bool | None = Field(default=None, description="Defaults to true when a default is given.")
    default: Any = None
    default_error: str | None = Field(
        default=None, description="Marks a default expression that cannot be evaluated (e.g. an undefined constant)."
    )

    @property
    def has_default(self) -> bool:
        return "default" in self.model_fields_set


class FunctionModel(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str
    parameters: list[ParameterModel] = Field(default_factory=list)
    returns: str | None = Field(default=None, description="Declared return type.")
    doc: str | None = None


class MethodModel(FunctionModel):
    visibility: Visibility = Visibility.PUBLIC
    static: bool = False
    abstract: bool = False


class PropertyModel(BaseModel):
    """One property. ``default`` distinguishes absent from ``null``."""

    model_config = ConfigDict(extra="forbid")

    name: str
    visibility: Visibility = Visibility.PUBLIC
    static: bool = False
    default: Any = None
    type: str | None = Field(default=None, description="Declared property type; wins over a doc comment tag.")
    doc: str | None = None

    @property
    def has_default(self) -> bool:
        return "default" in self.model_fields_set


class TypeModel(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str
    kind: TypeKind = TypeKind.CLASS
    parent: str | None = None
    interfaces: list[str] = Field(default_factory=list, description="Directly implemented or extended interfaces.")
    constants: dict[str, Any] = Field(default_factory=dict)
    properties: list[PropertyModel] = Field(default_factory=list)
    methods: list[MethodModel] = Field(default_factory=list)
    doc: str | None = None

    @model_validator(mode="after")
    def _check_kind(self) -> TypeModel:
        if self.kind == TypeKind.EXTENSION_MODULE:
            msg = f"Type {self.name!r} cannot be an extension module; list it under 'extensions'"
            raise ValueError(msg)
        if self.kind == TypeKind.INTERFACE and self.parent is not None:
            msg = f"Interface {self.name!r} cannot have a parent class; use 'interfaces'"
            raise ValueError(msg)
        return self


class ExtensionModel(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str
    functions: list[FunctionModel] = Field(default_factory=list)
    constants: dict[str, Any] = Field(default_factory=dict)
    doc: str | None = None


class CatalogModel(BaseModel):
    """Root of a catalog document."""

    model_config = ConfigDict(extra="forbid")

    types: list[TypeModel] = Field(default_factory=list)
    extensions: list[ExtensionModel] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Materialization
# ---------------------------------------------------------------------------


def _failing_default(parameter: str, reason: str) -> Callable[[], Any]:
    def evaluate() -> Any:
        raise DefaultValueError(parameter, reason)

    return evaluate


def _build_parameters(models: list[ParameterModel]) -> tuple[ParameterDescriptor, ...]:
    params: list[ParameterDescriptor] = []
    for position, p in enumerate(models):
        has_default = p.has_default or p.default_error is not None
        params.append(
            ParameterDescriptor(
                name=p.name,
                position=position,
                declared_type_name=p.type,
                is_by_reference=p.by_reference,
                is_optional=p.optional if p.optional is not None else has_default,
                default_value=p.default if p.has_default else MISSING,
                default_factory=_failing_default(p.name, p.default_error) if p.default_error is not None else None,
            )
        )
    return tuple(params)


def _build_function(model: FunctionModel) -> FunctionDescriptor:
    return FunctionDescriptor(
        name=model.name,
        parameters=_build_parameters(model.parameters),
        declared_return_type_name=model.returns,
        doc_comment=model.doc,
    )


def _build_method(model: MethodModel, declaring: str) -> MethodDescriptor:
    return MethodDescriptor(
        name=model.name,
        parameters=_build_parameters(model.parameters),
        declared_return_type_name=model.returns,
        doc_comment=model.doc,
        visibility=model.visibility,
        is_static=model.static,
        is_abstract=model.abstract,
        declaring_type_name=declaring,
    )


def _build_property(model: PropertyModel, declaring: str) -> PropertyDescriptor:
    return PropertyDescriptor(
        name=model.name,
        visibility=model.visibility,
        is_static=model.static,
        declaring_type_name=declaring,
        default_value=model.default if model.has_default else MISSING,
        declared_type_name=model.type,
        doc_comment=model.doc,
    )


class _Materializer:
    """Resolves direct declarations into full descriptors, memoized by name."""

    def __init__(self, catalog: CatalogModel) -> None:
        self._models: dict[str, TypeModel] = {}
        for model in catalog.types:
            if model.name in self._models:
                msg = f"Type declared twice in catalog: {model.name!r}"
                raise ValueError(msg)
            self._models[model.name] = model
        self._done: dict[str, TypeDescriptor] = {}
        self._visiting: set[str] = set()

    def _model(self, name: str, referrer: str) -> TypeModel:
        model = self._models.get(name)
        if model is None:
            logger.error("Catalog type {!r} references unknown type {!r}", referrer, name)
            raise TypeNotFoundError(name)
        return model

    def build(self, name: str) -> TypeDescriptor:
        done = self._done.get(name)
        if done is not None:
            return done
        if name in self._visiting:
            msg = f"Inheritance cycle involving {name!r}"
            raise ValueError(msg)
        self._visiting.add(name)
        try:
            descriptor = self._materialize(self._models[name])
        finally:
            self._visiting.discard(name)
        self._done[name] = descriptor
        return descriptor

    def _materialize(self, model: TypeModel) -> TypeDescriptor:
        parent = self.build(self._model(model.parent, model.name).name) if model.parent else None
        direct = [self.build(self._model(i, model.name).name) for i in model.interfaces]

        # Transitive interface set: each direct interface followed by its own
        # interfaces, then whatever the parent implements.
        interfaces: dict[str, None] = {}
        for iface in direct:
            interfaces[iface.name] = None
            interfaces.update(dict.fromkeys(iface.interfaces))
        if parent is not None:
            interfaces.update(dict.fromkeys(parent.interfaces))
        interfaces.pop(model.name, None)

        constants: dict[str, Any] = {}
        for iface in direct:
            constants.update(iface.constants)
        if parent is not None:
            constants.update(parent.constants)
        constants.update(model.constants)

        properties = [_build_property(p, model.name) for p in model.properties]
        own_props = {p.name for p in properties}
        if parent is not None:
            properties.extend(
                p for p in parent.properties if p.name not in own_props and p.visibility != Visibility.PRIVATE
            )

        methods = [_build_method(m, model.name) for m in model.methods]
        seen = {m.name.lower() for m in methods}
        for ancestor in ([parent] if parent is not None else []) + direct:
            for method in ancestor.methods:
                if method.name.lower() not in seen:
                    seen.add(method.name.lower())
                    methods.append(method)

        return TypeDescriptor(
            name=model.name,
            kind=model.kind,
            parent=parent.name if parent is not None else None,
            interfaces=tuple(interfaces),
            constants=constants,
            properties=tuple(properties),
            methods=tuple(methods),
            doc_comment=model.doc,
        )

    def build_all(self) -> list[TypeDescriptor]:
        return [self.build(name) for name in self._models]


def provider_from_catalog(catalog: CatalogModel) -> StaticProvider:
    """Materialize a validated catalog into a :class:`StaticProvider`."""
    types = _Materializer(catalog).build_all()
    extensions = [
        ExtensionDescriptor(
            name=ext.name,
            functions=tuple(_build_function(f) for f in ext.functions),
            constants=dict(ext.constants),
            doc_comment=ext.doc,
        )
        for ext in catalog.extensions
    ]
    return StaticProvider(types, extensions)


def parse_catalog(data: dict[str, Any]) -> StaticProvider:
    """Validate a catalog document (already decoded) and materialize it."""
    return provider_from_catalog(CatalogModel.model_validate(data))


def load_catalog(path: str | Path) -> StaticProvider:
    """Load a ``.json`` or ``.toml`` catalog file."""
    path = Path(path)
    if path.suffix.lower() == ".toml":
        with path.open("rb") as fh:
            data = tomllib.load(fh)
    else:
        data = json.loads(path.read_text(encoding="utf-8"))
    provider = parse_catalog(data)
    logger.debug(
        "Loaded catalog {}: {} types, {} extensions",
        path,
        len(provider.type_names),
        len(provider.extension_names),
    )
    return provider
