"""Assign anchor ids to headings and collect the document outline."""

from __future__ import annotations

import html
import re
import typing as typ

from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor
from markdown.util import AMP_SUBSTITUTE, ETX, HTML_PLACEHOLDER_RE, STX, AtomicString

from ._constants import HEADING_LEVELS
from .models import OutlineEntry
from .slugs import SlugRegistry, slugify

if typ.TYPE_CHECKING:
    from xml.etree.ElementTree import Element

    from markdown import Markdown
else:  # pragma: no cover - type-checking fallback
    Markdown = typ.Any
    Element = typ.Any

ESCAPED_CHAR_PATTERN = re.compile(f"{STX}([0-9]+){ETX}")
TAG_PATTERN = re.compile(r"<[^>]*>")


class HeadingAnchorExtension(Extension):
    """Give every heading an ``id`` and record it in ``outline``.

    The caller owns ``outline``; entries are appended in document order while
    the Markdown instance converts the text. Register a fresh extension per
    conversion so outlines from separate documents never mix.
    """

    def __init__(self, outline: list[OutlineEntry]) -> None:
        super().__init__()
        self.outline = outline

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Register the heading treeprocessor after inline processing."""
        processor = HeadingAnchorTreeprocessor(md, self.outline)
        md.treeprocessors.register(processor, "doctave_heading_anchors", 5)


class HeadingAnchorTreeprocessor(Treeprocessor):
    """Walk the parsed tree depth-first and annotate ``h1``-``h6`` elements."""

    def __init__(self, md: Markdown, outline: list[OutlineEntry]) -> None:
        super().__init__(md)
        self.outline = outline

    def run(self, root: Element) -> Element:
        """Set heading ids from a registry scoped to this conversion."""
        registry = SlugRegistry()
        for element in root.iter():
            level = HEADING_LEVELS.get(element.tag)
            if level is None:
                continue
            text = self._plain_text(element)
            slug = registry.claim(slugify(text))
            element.set("id", slug)
            self.outline.append(OutlineEntry(level=level, text=text, id=slug))
        return root

    def _plain_text(self, element: Element) -> str:
        """Return the literal characters of ``element`` without inline markup."""
        parts: list[str] = []
        for chunk in element.itertext():
            if isinstance(chunk, AtomicString):
                # Code spans keep their entity-escaped form until serialisation.
                parts.append(html.unescape(chunk))
            else:
                parts.append(self._expand_placeholders(chunk))
        return "".join(parts).strip()

    def _expand_placeholders(self, text: str) -> str:
        """Replace stash and escape placeholders with the text they stand for."""
        stash = self.md.htmlStash.rawHtmlBlocks

        def _stashed(match: re.Match[str]) -> str:
            index = int(match.group(1))
            if index >= len(stash):
                return ""
            raw = stash[index]
            source = raw if isinstance(raw, str) else "".join(raw.itertext())
            return html.unescape(TAG_PATTERN.sub("", source))

        expanded = HTML_PLACEHOLDER_RE.sub(_stashed, text)
        expanded = ESCAPED_CHAR_PATTERN.sub(lambda m: chr(int(m.group(1))), expanded)
        return expanded.replace(AMP_SUBSTITUTE, "&")


__all__ = ["HeadingAnchorExtension", "HeadingAnchorTreeprocessor"]
