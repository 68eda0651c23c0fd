"""Fold a flat heading outline into a nested table-of-contents tree."""

from __future__ import annotations

import typing as typ

from .models import OutlineNode

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .models import OutlineEntry


def nest_outline(outline: cabc.Iterable[OutlineEntry]) -> list[OutlineNode]:
    """Return outline entries nested under their closest shallower heading.

    Parameters
    ----------
    outline : Iterable[OutlineEntry]
        Entries in document order, typically ``RenderResult.outline``.

    Returns
    -------
    list[OutlineNode]
        Root nodes in document order. An entry becomes a child of the nearest
        preceding entry with a strictly smaller level; entries without one are
        roots, so a document that starts at ``h2`` still yields a usable tree.
    """
    roots: list[OutlineNode] = []
    stack: list[OutlineNode] = []
    for entry in outline:
        node = OutlineNode(entry=entry)
        while stack and stack[-1].entry.level >= entry.level:
            stack.pop()
        if stack:
            stack[-1].children.append(node)
        else:
            roots.append(node)
        stack.append(node)
    return roots


__all__ = ["nest_outline"]
