"""Markdown rendering for Doctave documentation pages.

The package converts a Markdown document into an HTML fragment and, in the
same pass, collects an outline of its headings and turns ``mermaid`` fenced
code blocks into diagram containers for the client-side Mermaid library.

Exports
-------
- ``render``: Render a document with optional :class:`RenderOptions`.
- ``DocumentRenderer``: Reusable renderer bound to a set of options.
- ``RenderResult`` / ``OutlineEntry``: Values returned by ``render``.
- ``nest_outline``: Fold an outline into a table-of-contents tree.
- ``load_render_options``: Read options from a YAML file.

Examples
--------
>>> from doctave_markdown import render
>>> result = render("# Getting Started\\n\\nHello")
>>> result.outline[0].id
'getting-started'
>>> result.html.splitlines()[0]
'<h1 id="getting-started">Getting Started</h1>'
"""

from __future__ import annotations

from .config import RenderConfigError, build_render_options, load_render_options
from .models import OutlineEntry, OutlineNode, RenderOptions, RenderResult
from .outline import nest_outline
from .renderer import DocumentRenderer, render
from .slugs import SlugRegistry, slugify

__all__ = [
    "DocumentRenderer",
    "OutlineEntry",
    "OutlineNode",
    "RenderConfigError",
    "RenderOptions",
    "RenderResult",
    "SlugRegistry",
    "build_render_options",
    "load_render_options",
    "nest_outline",
    "render",
    "slugify",
]
