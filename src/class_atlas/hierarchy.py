"""Interface edge pruning for class hierarchies."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

    from class_atlas.metadata.descriptors import TypeDescriptor


def prune_interfaces(
    descriptor: TypeDescriptor,
    lookup: Callable[[str], TypeDescriptor | None],
) -> list[str]:
    """Interfaces that need their own realization edge from *descriptor*.

    Drops every interface the parent already implements (the inheritance edge
    implies it), then every interface that another remaining interface
    extends.  The second step looks one level deep only, so deep interface
    chains may keep redundant edges.  Input order is preserved.
    """
    remaining: dict[str, None] = dict.fromkeys(descriptor.interfaces)

    if descriptor.parent is not None:
        parent = lookup(descriptor.parent)
        if parent is not None:
            for name in parent.interfaces:
                remaining.pop(name, None)

    for name in list(remaining):
        interface = lookup(name)
        if interface is None:
            continue
        for implied in interface.interfaces:
            if implied != name:
                remaining.pop(implied, None)

    return list(remaining)
