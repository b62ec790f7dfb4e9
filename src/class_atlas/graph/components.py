"""Connected components of a diagram.

Edge direction is ignored: a class and all of its ancestors, descendants and
notes form one component.  Components are ordered by the insertion order of
their earliest vertex so output is reproducible.
"""

from __future__ import annotations

import copy
from typing import TYPE_CHECKING

import networkx as nx

from class_atlas.graph.diagram import Diagram

if TYPE_CHECKING:
    from collections.abc import Hashable, Iterable


def induced_diagram(diagram: Diagram, vertices: Iterable[Hashable]) -> Diagram:
    """Copy of *diagram* restricted to *vertices* (and the edges among them)."""
    keep = set(vertices)
    source = diagram.graph
    graph = nx.MultiDiGraph()
    graph.add_nodes_from((n, copy.deepcopy(d)) for n, d in source.nodes(data=True) if n in keep)
    graph.add_edges_from(
        (u, v, k, copy.deepcopy(d)) for u, v, k, d in source.edges(keys=True, data=True) if u in keep and v in keep
    )
    return Diagram(graph)


def _ordered_components(diagram: Diagram) -> list[set[Hashable]]:
    order = {key: i for i, key in enumerate(diagram.graph.nodes)}
    components = list(nx.weakly_connected_components(diagram.graph))
    components.sort(key=lambda c: min(order[n] for n in c))
    return components


def component_containing(diagram: Diagram, vertex: Hashable) -> Diagram:
    """The component that *vertex* belongs to, as a separate diagram."""
    return induced_diagram(diagram, nx.node_connected_component(diagram.graph.to_undirected(as_view=True), vertex))


def all_components(diagram: Diagram) -> list[Diagram]:
    """One separate diagram per component."""
    return [induced_diagram(diagram, c) for c in _ordered_components(diagram)]


def component_count(diagram: Diagram) -> int:
    if len(diagram) == 0:
        return 0
    return nx.number_weakly_connected_components(diagram.graph)
