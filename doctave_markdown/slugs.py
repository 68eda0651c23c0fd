r"""Turn heading text into unique, URL-safe identifiers.

Slugs are folded to ASCII, lowercased, stripped of anything other than
letters, digits, hyphens and whitespace, and whitespace runs become single
hyphens. A :class:`SlugRegistry` hands out suffixed variants when a slug has
already been used within the same render.

Example
-------
>>> from doctave_markdown.slugs import SlugRegistry, slugify
>>> slugify("Getting Started")
'getting-started'
>>> registry = SlugRegistry()
>>> [registry.claim(slugify("Overview")) for _ in range(3)]
['overview', 'overview-1', 'overview-2']
"""

from __future__ import annotations

import re
import unicodedata

from ._constants import SLUG_FALLBACK

INVALID_SLUG_CHARS = re.compile(r"[^a-z0-9\s-]")
WHITESPACE_RUN = re.compile(r"\s+")


def slugify(text: str) -> str:
    """Return the normalised slug for ``text``, or ``"section"`` when empty."""
    folded = (
        unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    )
    cleaned = INVALID_SLUG_CHARS.sub("", folded.lower()).strip()
    slug = WHITESPACE_RUN.sub("-", cleaned)
    return slug or SLUG_FALLBACK


class SlugRegistry:
    """Track slugs handed out during a single render.

    Each candidate maps to the last numeric suffix used for it. Generated
    suffixed slugs are registered too, so a heading whose own text happens to
    produce ``intro-1`` cannot collide with a disambiguated ``Intro``.
    """

    __slots__ = ("_counters",)

    def __init__(self) -> None:
        self._counters: dict[str, int] = {}

    def __contains__(self, slug: object) -> bool:
        return slug in self._counters

    def claim(self, candidate: str) -> str:
        """Register ``candidate`` and return it, suffixed when already taken.

        Parameters
        ----------
        candidate : str
            Normalised slug produced by :func:`slugify`.

        Returns
        -------
        str
            ``candidate`` itself on first use, otherwise ``candidate-N`` where
            ``N`` is the next free counter value.
        """
        if candidate not in self._counters:
            self._counters[candidate] = 0
            return candidate

        counter = self._counters[candidate]
        while True:
            counter += 1
            slug = f"{candidate}-{counter}"
            if slug not in self._counters:
                break
        self._counters[candidate] = counter
        self._counters[slug] = 0
        return slug


__all__ = ["SlugRegistry", "slugify"]
