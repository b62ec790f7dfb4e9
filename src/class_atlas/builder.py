"""UML class diagram builder.

Turns type descriptors into vertices of a :class:`~class_atlas.graph.Diagram`:
each type becomes a record-shaped vertex whose label lists its members, with
solid hollow-arrow edges to its parent class and dashed hollow-arrow edges to
the interfaces it realizes.  Ancestors are added on demand.

References:
  - http://www.ffnn.nl/pages/articles/media/uml-diagrams-using-graphviz-dot.php
  - https://graphviz.org/doc/info/shapes.html#record
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from loguru import logger

from class_atlas.errors import TypeNotFoundError
from class_atlas.graph import Diagram, all_components, component_containing, component_count
from class_atlas.hierarchy import prune_interfaces
from class_atlas.labels import LabelRenderer
from class_atlas.metadata.descriptors import ExtensionDescriptor, TypeDescriptor
from class_atlas.metadata.provider import normalize_type_name
from class_atlas.render.dot import Raw
from class_atlas.schema import INHERITANCE_EDGE, NOTE_EDGE, NOTE_VERTEX, REALIZATION_EDGE, RECORD_SHAPE
from class_atlas.settings import DiagramOptions

if TYPE_CHECKING:
    from collections.abc import Hashable

    from class_atlas.graph import Vertex
    from class_atlas.metadata.provider import MetadataProvider


class DiagramBuilder:
    """Adds types, extension modules and notes to a diagram.

    Every type is added at most once: the vertex is registered under the type
    name before its ancestors are visited, so diamonds and repeated requests
    reuse it instead of recursing again.
    If an ancestor cannot be found, the diagram is left without the new vertex.
    """

    def __init__(
        self,
        provider: MetadataProvider,
        diagram: Diagram | None = None,
        options: DiagramOptions | None = None,
    ) -> None:
        self._provider = provider
        self._diagram = diagram if diagram is not None else Diagram()
        self._options = options if options is not None else DiagramOptions()

    @property
    def diagram(self) -> Diagram:
        return self._diagram

    @property
    def options(self) -> DiagramOptions:
        return self._options

    def set_option(self, name: str, flag: object) -> DiagramBuilder:
        """Switch one option; raises :class:`ConfigurationError` for unknown names.

        Returns ``self`` so calls can be chained.
        """
        self._options = self._options.with_option(name, flag)
        return self

    def _renderer(self) -> LabelRenderer:
        return LabelRenderer(self._provider, self._options)

    # -- types ----------------------------------------------------------------

    def has_type(self, name: str) -> bool:
        return self._diagram.has_vertex(normalize_type_name(name))

    def add_type(self, type_ref: TypeDescriptor | str) -> Vertex:
        """Return the vertex for *type_ref*, creating it (and its ancestors) if needed."""
        if isinstance(type_ref, TypeDescriptor):
            descriptor = type_ref
        else:
            existing = self._diagram.get_vertex(normalize_type_name(type_ref))
            if existing is not None:
                return existing
            descriptor = self._provider.get_type(normalize_type_name(type_ref))

        if self._diagram.has_vertex(descriptor.name):
            return self._diagram.get_vertex(descriptor.name)

        parent_name: str | None = None
        interfaces: list[str] = []
        if self._options.add_parents:
            # Resolve ancestors up front so an unknown one leaves the diagram untouched
            if descriptor.parent is not None:
                parent_name = self._provider.get_type(descriptor.parent).name
            interfaces = [
                self._provider.get_type(name).name for name in prune_interfaces(descriptor, self._provider.find_type)
            ]

        vertex, _ = self._diagram.get_or_create_vertex(descriptor.name)
        try:
            if parent_name is not None:
                parent = self._ensure_type(parent_name)
                self._diagram.create_edge(vertex, parent, **INHERITANCE_EDGE)
            for interface in interfaces:
                target = self._ensure_type(interface)
                self._diagram.create_edge(vertex, target, **REALIZATION_EDGE)
        except TypeNotFoundError:
            # a deeper ancestor is missing; drop the half-built vertex
            self._diagram.remove_vertex(vertex)
            raise

        label = self._renderer().type_label(descriptor)
        self._diagram.set_vertex_attributes(vertex, {"shape": RECORD_SHAPE, "label": Raw(label)})
        logger.debug("Added type {} ({})", descriptor.name, descriptor.kind)
        return vertex

    def _ensure_type(self, name: str) -> Vertex:
        return self._diagram.get_vertex(name) or self.add_type(name)

    def add_extension_module(self, extension_ref: ExtensionDescriptor | str) -> Vertex:
        """Return the vertex for an extension module, creating it if needed."""
        if isinstance(extension_ref, ExtensionDescriptor):
            extension = extension_ref
        else:
            existing = self._diagram.get_vertex(extension_ref)
            if existing is not None:
                return existing
            extension = self._provider.get_extension(extension_ref)

        vertex, created = self._diagram.get_or_create_vertex(extension.name)
        if created:
            label = self._renderer().extension_label(extension)
            self._diagram.set_vertex_attributes(vertex, {"shape": RECORD_SHAPE, "label": Raw(label)})
            logger.debug("Added extension {}", extension.name)
        return vertex

    # -- notes ----------------------------------------------------------------

    def add_note(self, text: str, attached_to: Vertex | Hashable | None = None) -> Vertex:
        """Create a UML note, optionally linked to the vertex it annotates."""
        note = self._diagram.create_vertex(label=text + "\n", **NOTE_VERTEX)
        if attached_to is not None:
            self._diagram.create_edge(note, attached_to, **NOTE_EDGE)
        return note

    # -- components -----------------------------------------------------------

    def extract_component_containing(self, name: str) -> Diagram:
        """Sub-diagram of everything connected to type *name*.

        Raises :class:`TypeNotFoundError` if *name* is not in the diagram.
        """
        key = normalize_type_name(name)
        if not self._diagram.has_vertex(key):
            logger.debug("Component requested for unknown type {!r}", name)
            raise TypeNotFoundError(name)
        return component_containing(self._diagram, key)

    def extract_all_components(self) -> list[Diagram]:
        return all_components(self._diagram)

    def component_count(self) -> int:
        return component_count(self._diagram)
