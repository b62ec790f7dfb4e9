"""Metadata provider interface and an in-memory implementation.

The diagram builder never introspects anything itself: it asks a provider for
descriptors by name.  Any object with ``get_type``, ``find_type`` and
``get_extension`` satisfies the protocol.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from loguru import logger

from class_atlas.errors import TypeNotFoundError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from class_atlas.metadata.descriptors import ExtensionDescriptor, TypeDescriptor


def normalize_type_name(name: str) -> str:
    """Drop a leading namespace separator (``\\Foo`` and ``.Foo`` both mean ``Foo``)."""
    return name.lstrip("\\.")


@runtime_checkable
class MetadataProvider(Protocol):
    """Source of type and extension descriptors."""

    def get_type(self, name: str) -> TypeDescriptor:
        """Return the descriptor for *name* or raise :class:`TypeNotFoundError`."""
        ...

    def find_type(self, name: str) -> TypeDescriptor | None:
        """Return the descriptor for *name* or ``None`` if it does not exist."""
        ...

    def get_extension(self, name: str) -> ExtensionDescriptor:
        """Return the extension descriptor for *name* or raise :class:`TypeNotFoundError`."""
        ...


class StaticProvider:
    """Provider backed by descriptors registered up front."""

    def __init__(
        self,
        types: Iterable[TypeDescriptor] = (),
        extensions: Iterable[ExtensionDescriptor] = (),
    ) -> None:
        self._types: dict[str, TypeDescriptor] = {}
        self._extensions: dict[str, ExtensionDescriptor] = {}
        for descriptor in types:
            self.register_type(descriptor)
        for extension in extensions:
            self.register_extension(extension)

    def register_type(self, descriptor: TypeDescriptor) -> None:
        """Register a type descriptor. Raises on duplicate names."""
        if descriptor.name in self._types:
            msg = f"Type already registered: {descriptor.name!r}"
            raise ValueError(msg)
        self._types[descriptor.name] = descriptor
        logger.debug("Registered type: {}", descriptor.name)

    def register_extension(self, extension: ExtensionDescriptor) -> None:
        """Register an extension descriptor. Raises on duplicate names."""
        if extension.name in self._extensions:
            msg = f"Extension already registered: {extension.name!r}"
            raise ValueError(msg)
        self._extensions[extension.name] = extension
        logger.debug("Registered extension: {}", extension.name)

    @property
    def type_names(self) -> list[str]:
        return list(self._types)

    @property
    def extension_names(self) -> list[str]:
        return list(self._extensions)

    def get_type(self, name: str) -> TypeDescriptor:
        descriptor = self.find_type(name)
        if descriptor is None:
            raise TypeNotFoundError(name)
        return descriptor

    def find_type(self, name: str) -> TypeDescriptor | None:
        return self._types.get(normalize_type_name(name))

    def get_extension(self, name: str) -> ExtensionDescriptor:
        extension = self._extensions.get(name)
        if extension is None:
            raise TypeNotFoundError(name, "extension")
        return extension
