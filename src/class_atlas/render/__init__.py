"""Render package — Graphviz DOT serialization and image rendering."""

from __future__ import annotations

from class_atlas.render.dot import Raw, quote, render_diagram, to_dot, write_dot

__all__ = [
    "Raw",
    "quote",
    "render_diagram",
    "to_dot",
    "write_dot",
]
