"""Render ``mermaid`` fenced code blocks as diagram containers.

Mermaid diagrams are drawn client-side, so the renderer only needs to hand
the diagram source to the page inside ``<div class="mermaid">``. The
preprocessor runs ahead of fence normalisation and Python-Markdown's
``fenced_code`` extension, so the Mermaid decision is made on the info string
exactly as written: the first whitespace-separated token must equal
``mermaid``, and ``mermaid,x`` stays an ordinary code block. Every other
fenced block is left in place for ``fenced_code`` to render as
``<pre><code>``.

A fence nested under a list item must be indented to the item's content
column, four spaces per level as Python-Markdown expects. The diagram then
stays inside the ``<li>``. Fences inside block quotes (``> ```mermaid``) are
not recognised, because Python-Markdown's preprocessors only see the raw
quoted lines. Such blocks render as quoted text rather than as a diagram.

Example
-------
>>> from markdown import Markdown
>>> from doctave_markdown.mermaid import MermaidExtension
>>> md = Markdown(extensions=["fenced_code", MermaidExtension()])
>>> md.convert("```mermaid\\ngraph TD; A-->B;\\n```")
'<div class="mermaid">graph TD; A--&gt;B;\\n</div>'
"""

from __future__ import annotations

import typing as typ
from html import escape

from markdown.extensions import Extension
from markdown.preprocessors import Preprocessor

from ._constants import MERMAID_CLASS, MERMAID_LANGUAGE
from .fences import rewrite_fenced_blocks

if typ.TYPE_CHECKING:
    from markdown import Markdown

    from .fences import FencedBlock
else:  # pragma: no cover - type-checking fallback
    Markdown = typ.Any
    FencedBlock = typ.Any


def diagram_html(source: str) -> str:
    """Wrap escaped diagram ``source`` in the Mermaid container element."""
    return f'<div class="{MERMAID_CLASS}">{escape(source, quote=False)}</div>'


class MermaidExtension(Extension):
    """Swap ``mermaid`` fenced blocks for diagram containers.

    Parameters
    ----------
    diagrams : list[str], optional
        When provided, the raw source of each rewritten diagram is appended in
        document order.
    """

    def __init__(self, diagrams: list[str] | None = None) -> None:
        super().__init__()
        self.diagrams = diagrams if diagrams is not None else []

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Register the preprocessor ahead of fence normalisation."""
        processor = MermaidPreprocessor(md, self.diagrams)
        md.preprocessors.register(processor, "doctave_mermaid", 28)


class MermaidPreprocessor(Preprocessor):
    """Replace Mermaid fences with stashed ``<div class="mermaid">`` markup."""

    def __init__(self, md: Markdown, diagrams: list[str]) -> None:
        super().__init__(md)
        self.diagrams = diagrams

    def run(self, lines: list[str]) -> list[str]:
        """Rewrite Mermaid blocks, keeping every other fenced block as written."""
        return rewrite_fenced_blocks(lines, self._diagram)

    def _diagram(self, block: FencedBlock) -> list[str] | None:
        if block.language != MERMAID_LANGUAGE:
            return None
        source = "".join(f"{line}\n" for line in block.body)
        self.diagrams.append(source)
        placeholder = self.md.htmlStash.store(diagram_html(source))
        # The placeholder keeps the fence's indent so list items still own it.
        return ["", f"{' ' * block.indent}{placeholder}", ""]


__all__ = ["MermaidExtension", "MermaidPreprocessor", "diagram_html"]
