"""Graphviz DOT output.

Serializes a :class:`~class_atlas.graph.Diagram` to DOT text and hands it to
the ``dot`` executable to produce images.  Record labels are emitted through
:class:`Raw` because they are already quoted and escaped.
"""

from __future__ import annotations

import re
import subprocess
from pathlib import Path
from typing import TYPE_CHECKING, Any

from loguru import logger

from class_atlas.errors import RenderError

if TYPE_CHECKING:
    from collections.abc import Mapping

    from class_atlas.graph import Diagram
    from class_atlas.settings import RenderSettings

_BARE_ID = re.compile(r"[A-Za-z_][A-Za-z0-9_]*|-?(?:\.[0-9]+|[0-9]+(?:\.[0-9]*)?)")
_KEYWORDS = frozenset({"node", "edge", "graph", "digraph", "subgraph", "strict"})


class Raw(str):
    """A value written to DOT output verbatim, without quoting."""

    __slots__ = ()


def quote(value: Any) -> str:
    """Format an ID or attribute value as a DOT token."""
    if isinstance(value, Raw):
        return str(value)
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    text = str(value)
    if _BARE_ID.fullmatch(text) and text.lower() not in _KEYWORDS:
        return text
    return '"' + text.replace('"', '\\"').replace("\n", "\\n") + '"'


def _attribute_list(attributes: Mapping[str, Any]) -> str:
    if not attributes:
        return ""
    return " [" + " ".join(f"{quote(k)}={quote(v)}" for k, v in attributes.items()) + "]"


def to_dot(diagram: Diagram, name: str = "G") -> str:
    """Serialize *diagram* as a ``digraph``."""
    lines = [f"digraph {quote(name)} {{"]
    for vertex in diagram.vertices():
        lines.append(f"  {quote(vertex.id)}{_attribute_list(vertex.attributes)}")
    for edge in diagram.edges():
        lines.append(f"  {quote(edge.source)} -> {quote(edge.target)}{_attribute_list(edge.attributes)}")
    lines.append("}")
    return "\n".join(lines) + "\n"


def write_dot(diagram: Diagram, path: str | Path, name: str = "G") -> Path:
    path = Path(path)
    path.write_text(to_dot(diagram, name), encoding="utf-8")
    logger.debug("Wrote DOT source to {}", path)
    return path


def render_diagram(
    diagram: Diagram,
    output: str | Path,
    settings: RenderSettings,
    output_format: str | None = None,
) -> Path:
    """Render *diagram* to *output* with Graphviz.

    The format defaults to the output file suffix, then to the configured
    format.  Raises :class:`RenderError` if ``dot`` is missing, fails or
    times out.
    """
    output = Path(output)
    fmt = output_format or output.suffix.lstrip(".") or settings.output_format
    cmd = [settings.dot_binary, f"-T{fmt}", "-o", str(output)]
    try:
        subprocess.run(
            cmd,
            input=to_dot(diagram, settings.graph_name),
            text=True,
            capture_output=True,
            check=True,
            timeout=settings.timeout_s,
        )
    except FileNotFoundError as exc:
        msg = f"Graphviz executable not found: {settings.dot_binary!r}"
        raise RenderError(msg) from exc
    except subprocess.TimeoutExpired as exc:
        msg = f"Graphviz timed out after {settings.timeout_s}s"
        raise RenderError(msg) from exc
    except subprocess.CalledProcessError as exc:
        msg = f"Graphviz failed (exit {exc.returncode}): {(exc.stderr or '').strip()}"
        raise RenderError(msg) from exc
    logger.info("Rendered {} ({})", output, fmt)
    return output
