"""Graph package — networkx-backed diagram storage and component analysis."""

from __future__ import annotations

from class_atlas.graph.components import all_components, component_containing, component_count
from class_atlas.graph.diagram import Diagram, Edge, Vertex

__all__ = [
    "Diagram",
    "Edge",
    "Vertex",
    "all_components",
    "component_containing",
    "component_count",
]
