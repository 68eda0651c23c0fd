"""Render Markdown into HTML together with its heading outline."""

from __future__ import annotations

import structlog
from markdown import Markdown

from ._constants import MARKDOWN_EXTENSION_CONFIGS, MARKDOWN_EXTENSIONS
from .fences import FenceNormalizeExtension
from .headings import HeadingAnchorExtension
from .links import LinkRootExtension
from .mermaid import MermaidExtension
from .models import OutlineEntry, RenderOptions, RenderResult

log = structlog.get_logger()


class DocumentRenderer:
    """Render Markdown documents with heading anchors and Mermaid diagrams.

    A renderer holds only immutable settings; every call to :meth:`render`
    builds its own ``Markdown`` instance, slug registry and outline, so one
    renderer may be shared between threads.
    """

    def __init__(self, options: RenderOptions | None = None) -> None:
        """Initialize a renderer with optional link rewriting options.

        Parameters
        ----------
        options : RenderOptions, optional
            URL root and rewrite rules applied to links and images. Defaults
            to :class:`RenderOptions` with no rewriting.
        """
        self.options = options or RenderOptions()

    def render(self, text: str) -> RenderResult:
        """Render ``text`` into an HTML fragment and its outline.

        Parameters
        ----------
        text : str
            Markdown source.

        Returns
        -------
        RenderResult
            HTML whose headings carry ``id`` attributes, plus one
            :class:`OutlineEntry` per heading in document order.
        """
        if not text.strip():
            return RenderResult(html="", outline=())

        outline: list[OutlineEntry] = []
        diagrams: list[str] = []
        md = Markdown(
            extensions=[
                *MARKDOWN_EXTENSIONS,
                MermaidExtension(diagrams),
                FenceNormalizeExtension(),
                HeadingAnchorExtension(outline),
                LinkRootExtension(self.options),
            ],
            extension_configs=MARKDOWN_EXTENSION_CONFIGS,
        )
        html = md.convert(text)
        log.debug(
            "markdown_rendered",
            characters=len(text),
            headings=len(outline),
            diagrams=len(diagrams),
        )
        return RenderResult(html=html, outline=tuple(outline))


def render(text: str, options: RenderOptions | None = None) -> RenderResult:
    """Render ``text`` with a one-off :class:`DocumentRenderer`."""
    return DocumentRenderer(options).render(text)


__all__ = ["DocumentRenderer", "render"]
