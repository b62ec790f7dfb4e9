"""Attributed directed multigraph holding a diagram.

Thin wrapper over :class:`networkx.MultiDiGraph`.  Vertices are keyed by type
name (or by a generated integer for anonymous vertices such as notes); both
vertices and edges carry a mapping of Graphviz layout attributes.
"""

from __future__ import annotations

from dataclasses import dataclass
from itertools import count
from typing import TYPE_CHECKING, Any

import networkx as nx
from loguru import logger

if TYPE_CHECKING:
    from collections.abc import Hashable, Iterator, Mapping

# Key of the attribute mapping inside networkx node/edge data
_ATTRS = "layout"


@dataclass(frozen=True)
class Vertex:
    """Handle to a vertex of a :class:`Diagram`."""

    id: Hashable
    attributes: dict[str, Any]


@dataclass(frozen=True)
class Edge:
    """Handle to one (possibly parallel) directed edge of a :class:`Diagram`."""

    source: Hashable
    target: Hashable
    key: int
    attributes: dict[str, Any]


class Diagram:
    """Directed multigraph whose vertices and edges carry layout attributes."""

    def __init__(self, graph: nx.MultiDiGraph | None = None) -> None:
        self._graph: nx.MultiDiGraph = graph if graph is not None else nx.MultiDiGraph()
        self._anonymous = count(1)

    @property
    def graph(self) -> nx.MultiDiGraph:
        """The underlying networkx graph."""
        return self._graph

    def __len__(self) -> int:
        return self._graph.number_of_nodes()

    def __contains__(self, key: object) -> bool:
        return self.has_vertex(key)

    # -- vertices -------------------------------------------------------------

    def has_vertex(self, key: object) -> bool:
        return key in self._graph

    def get_vertex(self, key: Hashable) -> Vertex | None:
        """Return the vertex for *key*, or ``None`` if it does not exist."""
        if key not in self._graph:
            return None
        return Vertex(key, self._graph.nodes[key][_ATTRS])

    def get_or_create_vertex(self, key: Hashable) -> tuple[Vertex, bool]:
        """Return ``(vertex, created)``; creation happens at most once per key."""
        vertex = self.get_vertex(key)
        if vertex is not None:
            return vertex, False
        self._graph.add_node(key, **{_ATTRS: {}})
        logger.debug("Created vertex {!r}", key)
        return Vertex(key, self._graph.nodes[key][_ATTRS]), True

    def create_vertex(self, **attributes: Any) -> Vertex:
        """Create an anonymous vertex with a generated integer id."""
        key = next(self._anonymous)
        while key in self._graph:
            key = next(self._anonymous)
        self._graph.add_node(key, **{_ATTRS: dict(attributes)})
        return Vertex(key, self._graph.nodes[key][_ATTRS])

    def remove_vertex(self, vertex: Vertex | Hashable) -> None:
        """Remove a vertex together with its incident edges."""
        key = vertex.id if isinstance(vertex, Vertex) else vertex
        self._graph.remove_node(key)
        logger.debug("Removed vertex {!r}", key)

    def vertices(self) -> Iterator[Vertex]:
        """All vertices in insertion order."""
        for key, data in self._graph.nodes(data=_ATTRS):
            yield Vertex(key, data)

    def set_vertex_attributes(self, vertex: Vertex | Hashable, attributes: Mapping[str, Any]) -> None:
        key = vertex.id if isinstance(vertex, Vertex) else vertex
        self._graph.nodes[key][_ATTRS].update(attributes)

    # -- edges ----------------------------------------------------------------

    def create_edge(self, source: Vertex | Hashable, target: Vertex | Hashable, **attributes: Any) -> Edge:
        """Create a directed edge; parallel edges are allowed."""
        u = source.id if isinstance(source, Vertex) else source
        v = target.id if isinstance(target, Vertex) else target
        key = self._graph.add_edge(u, v, **{_ATTRS: dict(attributes)})
        logger.debug("Created edge {!r} -> {!r} {}", u, v, attributes)
        return Edge(u, v, key, self._graph.edges[u, v, key][_ATTRS])

    def edges(self) -> Iterator[Edge]:
        """All edges in insertion order."""
        for u, v, key, data in self._graph.edges(keys=True, data=_ATTRS):
            yield Edge(u, v, key, data)

    def edges_between(self, source: Hashable, target: Hashable) -> list[Edge]:
        if not self._graph.has_edge(source, target):
            return []
        return [Edge(source, target, k, d[_ATTRS]) for k, d in self._graph[source][target].items()]

    def set_edge_attributes(self, edge: Edge, attributes: Mapping[str, Any]) -> None:
        self._graph.edges[edge.source, edge.target, edge.key][_ATTRS].update(attributes)
