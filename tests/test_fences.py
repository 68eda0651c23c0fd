"""Tests for the fenced code block walker.

The walker in :mod:`doctave_markdown.fences` decides where fenced blocks
start and end before Python-Markdown sees the source. These tests pin its
closing-fence rules, the list-item indentation rule and the guarantee that
fence-like lines inside a block body are never treated as fences.

Usage
-----
Run ``pytest tests/test_fences.py -v``.
"""

from __future__ import annotations

import pytest

from doctave_markdown.fences import (
    FencedBlock,
    fence_language,
    fenced_block_at,
    normalize_fence,
    rewrite_fenced_blocks,
)


def test_simple_block_is_found() -> None:
    """A column-zero fence yields its info string and body."""
    block = fenced_block_at(["```py", "x = 1", "```"], 0)
    assert block == FencedBlock(
        start=0, end=2, indent=0, fence="```", info="py", body=("x = 1",)
    )
    assert block.language == "py"


def test_unclosed_fence_is_not_a_block() -> None:
    """Without a closing fence the lines stay ordinary text."""
    assert fenced_block_at(["```mermaid", "graph TD;"], 0) is None


@pytest.mark.parametrize(
    ("lines", "end", "body"),
    [
        (["```", "a", "`````"], 2, ("a",)),
        (["````", "```", "````"], 2, ("```",)),
        (["~~~", "```", "~~~"], 2, ("```",)),
        (["```", "a", "   ```"], 2, ("a",)),
    ],
)
def test_closing_fence_rules(lines: list[str], end: int, body: tuple[str, ...]) -> None:
    """Closing runs use the opening character and are at least as long."""
    block = fenced_block_at(lines, 0)
    assert block is not None
    assert block.end == end
    assert block.body == body


def test_backtick_in_backtick_info_is_not_a_fence() -> None:
    """Backtick fences cannot carry backticks in their info string."""
    assert fenced_block_at(["``` a`b", "x", "```"], 0) is None


def test_deep_indent_outside_list_is_not_a_fence() -> None:
    """Four spaces of indent after a paragraph make an indented code block."""
    lines = ["para", "", "    ```", "    x", "    ```"]
    assert fenced_block_at(lines, 2) is None


def test_deep_indent_under_list_item_is_a_fence() -> None:
    """A fence at the list item's content column belongs to the item."""
    lines = ["- item", "", "    ```mermaid", "    a", "    ```"]
    block = fenced_block_at(lines, 2)
    assert block is not None
    assert block.indent == 4
    assert block.body == ("a",)


def test_walker_does_not_look_inside_block_bodies() -> None:
    """A fence quoted inside a longer fence is part of the outer body."""
    seen: list[FencedBlock] = []

    def record(block: FencedBlock) -> None:
        seen.append(block)

    lines = ["````md", "```mermaid", "x", "```", "````", "after"]
    assert rewrite_fenced_blocks(lines, record) == lines
    assert [block.info for block in seen] == ["md"], f"unexpected blocks: {seen!r}"


@pytest.mark.parametrize(
    ("info", "expected"),
    [
        ("mermaid", "mermaid"),
        ("mermaid title", "mermaid"),
        ("mermaid,x", "mermaid,x"),
        ("", ""),
    ],
)
def test_fence_language(info: str, expected: str) -> None:
    """The language tag is the first whitespace token, taken verbatim."""
    assert fence_language(info) == expected


def test_normalize_fence_strips_options_and_indent() -> None:
    """Shallow fences are dedented and lose ``,option`` suffixes."""
    lines = ["  ```rust,no_run", "  fn main() {}", "  ````"]
    assert rewrite_fenced_blocks(lines, normalize_fence) == [
        "```rust",
        "fn main() {}",
        "```",
    ]


def test_normalize_fence_keeps_list_fences() -> None:
    """Fences nested under list items are left as written."""
    lines = ["- item", "", "    ```js,linenos", "    x", "    ```"]
    assert rewrite_fenced_blocks(lines, normalize_fence) == lines
