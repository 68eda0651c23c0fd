r"""Locate fenced code blocks in Markdown source lines.

Python-Markdown's ``fenced_code`` extension only recognises fences that start
in column zero and close with exactly the opening fence. The walker in this
module finds fences the way CommonMark describes them: up to three spaces of
indentation, a closing run of the same character at least as long as the
opening one, and no backticks in the info string of a backtick fence. Fences
indented four or more spaces count only when they continue a list item, which
is how Python-Markdown nests block content under list markers.

Only the opening line, the closing line and the indentation of a block's body
are ever touched. Lines inside a fenced body are never scanned for further
fences, so a block quoting another fence stays intact.

Example
-------
>>> from doctave_markdown.fences import normalize_fence, rewrite_fenced_blocks
>>> lines = ["  ```rust,no_run", "  fn main() {}", "  ````"]
>>> rewrite_fenced_blocks(lines, normalize_fence)
['```rust', 'fn main() {}', '```']
"""

from __future__ import annotations

import dataclasses as dc
import re
import typing as typ

from markdown.extensions import Extension
from markdown.preprocessors import Preprocessor

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from markdown import Markdown
else:  # pragma: no cover - type-checking fallback
    Markdown = typ.Any

FENCE_OPEN_PATTERN = re.compile(
    r"^(?P<indent>[ ]*)(?P<fence>`{3,}|~{3,})[ ]*(?P<info>.*?)[ ]*$"
)
LIST_ITEM_PATTERN = re.compile(r"^[ ]*(?:[*+-]|\d+[.)])[ ]+\S")
LABEL_OPTIONS_PATTERN = re.compile(r"^([A-Za-z0-9_+#.-]+)?,.*$")
MAX_FENCE_INDENT = 3


@dc.dataclass(frozen=True, slots=True)
class FencedBlock:
    """A fenced code block found in the source lines.

    Attributes
    ----------
    start : int
        Index of the opening fence line.
    end : int
        Index of the closing fence line.
    indent : int
        Spaces before the opening fence.
    fence : str
        The opening run of backticks or tildes.
    info : str
        Info string following the opening fence, stripped of spaces.
    body : tuple[str, ...]
        Content lines with up to ``indent`` leading spaces removed.
    """

    start: int
    end: int
    indent: int
    fence: str
    info: str
    body: tuple[str, ...]

    @property
    def language(self) -> str:
        """Return the first token of the info string, or ``""``."""
        return fence_language(self.info)


def fence_language(info: str) -> str:
    """Return the language tag from a fence info string, or ``""``."""
    tokens = info.split()
    return tokens[0] if tokens else ""


def _indent_of(line: str) -> int:
    return len(line) - len(line.lstrip(" "))


def _dedent(line: str, indent: int) -> str:
    """Remove up to ``indent`` leading spaces from ``line``."""
    return line[min(indent, _indent_of(line)) :]


def _continues_list_item(lines: cabc.Sequence[str], index: int, indent: int) -> bool:
    """Return whether a deeply indented line at ``index`` belongs to a list item."""
    for line in reversed(lines[:index]):
        if not line.strip() or _indent_of(line) >= indent:
            continue
        return LIST_ITEM_PATTERN.match(line) is not None
    return False


def _closes(line: str, fence: str, indent: int) -> bool:
    """Return whether ``line`` closes a block opened with ``fence``."""
    limit = indent + MAX_FENCE_INDENT if indent > MAX_FENCE_INDENT else MAX_FENCE_INDENT
    if _indent_of(line) > limit:
        return False
    run = line.strip(" ")
    return len(run) >= len(fence) and set(run) == {fence[0]}


def fenced_block_at(lines: cabc.Sequence[str], index: int) -> FencedBlock | None:
    """Return the fenced block opening at ``index``, or ``None``.

    Unclosed fences are not treated as blocks.
    """
    match = FENCE_OPEN_PATTERN.match(lines[index])
    if match is None:
        return None
    indent = len(match.group("indent"))
    fence = match.group("fence")
    info = match.group("info")
    if fence.startswith("`") and "`" in info:
        return None
    if indent > MAX_FENCE_INDENT and not _continues_list_item(lines, index, indent):
        return None
    for end in range(index + 1, len(lines)):
        if _closes(lines[end], fence, indent):
            return FencedBlock(
                start=index,
                end=end,
                indent=indent,
                fence=fence,
                info=info,
                body=tuple(_dedent(line, indent) for line in lines[index + 1 : end]),
            )
    return None


def rewrite_fenced_blocks(
    lines: cabc.Sequence[str],
    replace: cabc.Callable[[FencedBlock], list[str] | None],
) -> list[str]:
    """Return ``lines`` with each fenced block passed through ``replace``.

    ``replace`` returns the lines that stand in for the block, or ``None`` to
    keep the block exactly as written. Scanning resumes after the closing
    fence either way.
    """
    output: list[str] = []
    index = 0
    while index < len(lines):
        block = fenced_block_at(lines, index)
        if block is None:
            output.append(lines[index])
            index += 1
            continue
        replacement = replace(block)
        if replacement is None:
            output.extend(lines[block.start : block.end + 1])
        else:
            output.extend(replacement)
        index = block.end + 1
    return output


def normalize_fence(block: FencedBlock) -> list[str] | None:
    """Rewrite a shallow fence into the column-zero form ``fenced_code`` reads.

    The block is dedented, ``,option`` suffixes are dropped from the label
    (``rust,no_run`` becomes ``rust``), and the closing fence is made to match
    the opening one. Fences nested under list items are left alone.
    """
    if block.indent > MAX_FENCE_INDENT:
        return None
    info = LABEL_OPTIONS_PATTERN.sub(r"\1", block.info)
    opening = f"{block.fence}{info}"
    return [opening, *block.body, block.fence]


class FenceNormalizeExtension(Extension):
    """Normalise fence lines so ``fenced_code`` recognises them."""

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Register the preprocessor between Mermaid rewriting and ``fenced_code``."""
        md.preprocessors.register(FenceNormalizePreprocessor(md), "doctave_fences", 27)


class FenceNormalizePreprocessor(Preprocessor):
    """Apply :func:`normalize_fence` to every fenced block."""

    def run(self, lines: list[str]) -> list[str]:
        return rewrite_fenced_blocks(lines, normalize_fence)


__all__ = [
    "FenceNormalizeExtension",
    "FenceNormalizePreprocessor",
    "FencedBlock",
    "fence_language",
    "fenced_block_at",
    "normalize_fence",
    "rewrite_fenced_blocks",
]
