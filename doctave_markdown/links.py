"""Helpers for rewriting link and image targets onto a configured root."""

from __future__ import annotations

import posixpath
import typing as typ

from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor

if typ.TYPE_CHECKING:
    from xml.etree.ElementTree import Element

    from markdown import Markdown

    from .models import RenderOptions
else:  # pragma: no cover - type-checking fallback
    Markdown = typ.Any
    Element = typ.Any
    RenderOptions = typ.Any

LINK_ATTRIBUTES: dict[str, str] = {"a": "href", "img": "src"}


class LinkRootExtension(Extension):
    """Point absolute links at the configured URL root.

    Documentation sites are frequently served from a sub-path such as
    ``/docs/v2``. Authors still write ``[guide](/guide)``, and this extension
    turns that target into ``/docs/v2/guide``. Targets listed in
    ``link_rewrite_rules`` are swapped wholesale instead, which lets a host
    map local assets (``/assets/cat.jpg``) onto a CDN.
    """

    def __init__(self, options: RenderOptions) -> None:
        super().__init__()
        self.options = options

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Register the link treeprocessor on the Markdown instance."""
        processor = LinkRootTreeprocessor(
            md, self.options.url_root, self.options.link_rewrite_rules
        )
        md.treeprocessors.register(processor, "doctave_link_root", 15)


class LinkRootTreeprocessor(Treeprocessor):
    """Rewrite ``href`` and ``src`` attributes in the parsed tree."""

    def __init__(
        self, md: Markdown, url_root: str, rewrite_rules: typ.Mapping[str, str]
    ) -> None:
        super().__init__(md)
        self.url_root = url_root
        self.rewrite_rules = rewrite_rules

    def run(self, root: Element) -> Element:
        """Rewrite link and image targets in place."""
        for element in root.iter():
            attribute = LINK_ATTRIBUTES.get(element.tag)
            if attribute is None:
                continue
            rewritten = self.rewrite(element.get(attribute))
            if rewritten is not None:
                element.set(attribute, rewritten)
        return root

    def rewrite(self, target: str | None) -> str | None:
        """Return the rewritten target, or ``None`` when it should stay as is."""
        if not target:
            return None
        if target in self.rewrite_rules:
            return self.rewrite_rules[target]
        if target.startswith("/") and not target.startswith("//"):
            return posixpath.join(self.url_root, target[1:])
        return None


__all__ = ["LINK_ATTRIBUTES", "LinkRootExtension", "LinkRootTreeprocessor"]
