"""Shared dataclasses returned by the rendering pipeline."""

from __future__ import annotations

import dataclasses as dc

from ._constants import DEFAULT_URL_ROOT


@dc.dataclass(frozen=True, slots=True)
class OutlineEntry:
    """A single heading summary collected while rendering.

    Attributes
    ----------
    level : int
        Heading level between 1 and 6.
    text : str
        Plain-text heading content with inline formatting removed.
    id : str
        Identifier assigned to the heading element in the rendered HTML.
    """

    level: int
    text: str
    id: str


@dc.dataclass(frozen=True, slots=True)
class RenderResult:
    """Rendered HTML fragment alongside the document outline.

    Attributes
    ----------
    html : str
        HTML fragment markup without any ``<html>`` or ``<body>`` wrapper.
    outline : tuple[OutlineEntry, ...]
        One entry per heading, in document order.
    """

    html: str
    outline: tuple[OutlineEntry, ...] = ()


@dc.dataclass(slots=True)
class RenderOptions:
    """Settings controlling how links are rewritten during rendering.

    Attributes
    ----------
    url_root : str
        Root prepended to absolute link and image targets. The default ``"/"``
        leaves targets untouched.
    link_rewrite_rules : dict[str, str]
        Exact link targets mapped to the URL that replaces them.
    """

    url_root: str = DEFAULT_URL_ROOT
    link_rewrite_rules: dict[str, str] = dc.field(default_factory=dict)


@dc.dataclass(slots=True)
class OutlineNode:
    """Outline entry with the entries nested beneath it."""

    entry: OutlineEntry
    children: list[OutlineNode] = dc.field(default_factory=list)


__all__ = ["OutlineEntry", "OutlineNode", "RenderOptions", "RenderResult"]
