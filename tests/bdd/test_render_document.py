"""Behaviour tests for rendering whole documents.

These pytest-bdd scenarios drive :class:`doctave_markdown.DocumentRenderer`
from the ``render_document.feature`` file. They check that duplicate headings
receive distinct anchors that match the outline, that Mermaid blocks are
turned into diagram containers while other code blocks stay code, and that
absolute links follow the configured URL root.

Usage
-----
Run ``pytest tests/bdd/test_render_document.py -v`` after installing the test
extra (``pip install -e '.[test]'``). No external services are required.
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import pytest
from bs4 import BeautifulSoup
from pytest_bdd import given, parsers, scenarios, then, when

from doctave_markdown import DocumentRenderer, RenderOptions, RenderResult

FEATURE_FILE = (
    Path(__file__).resolve().parents[2] / "features" / "render_document.feature"
)
scenarios(FEATURE_FILE)


@pytest.fixture
def scenario_state() -> dict[str, object]:
    """Return a mutable dict used to share scenario state across BDD steps."""
    return {}


def _result(scenario_state: dict[str, object]) -> RenderResult:
    return typ.cast("RenderResult", scenario_state["result"])


def _soup(scenario_state: dict[str, object]) -> BeautifulSoup:
    return BeautifulSoup(_result(scenario_state).html, "html.parser")


@given(parsers.parse('a markdown document with repeated "{title}" headings'))
def given_repeated_headings(title: str, scenario_state: dict[str, object]) -> None:
    """Store a document containing the same heading twice."""
    scenario_state["markdown"] = (
        f"# {title}\n\nFirst body.\n\n## {title}\n\nSecond body.\n"
    )


@given("a markdown document with a mermaid block and a js block")
def given_diagram_document(scenario_state: dict[str, object]) -> None:
    """Store a document holding one Mermaid block and one JavaScript block."""
    scenario_state["markdown"] = (
        "```mermaid\ngraph TD; A-->B;\n```\n\n```js\ngraph TD; A-->B;\n```\n"
    )


@given("a markdown document with an absolute link")
def given_absolute_link(scenario_state: dict[str, object]) -> None:
    """Store a document with a root-relative link."""
    scenario_state["markdown"] = "See the [install guide](/guide/install).\n"


@given(parsers.parse('render options with the URL root "{url_root}"'))
def given_url_root(url_root: str, scenario_state: dict[str, object]) -> None:
    """Configure the URL root used for the render."""
    scenario_state["options"] = RenderOptions(url_root=url_root)


@when("I render the document")
def when_render(scenario_state: dict[str, object]) -> None:
    """Render the stored document with any configured options."""
    options = typ.cast("RenderOptions | None", scenario_state.get("options"))
    renderer = DocumentRenderer(options)
    scenario_state["result"] = renderer.render(
        typ.cast("str", scenario_state["markdown"])
    )


@then(parsers.parse('the outline ids are "{ids}"'))
def then_outline_ids(ids: str, scenario_state: dict[str, object]) -> None:
    """Compare outline ids with the comma-separated expectation."""
    expected = [value.strip() for value in ids.split(",")]
    actual = [entry.id for entry in _result(scenario_state).outline]
    assert actual == expected, f"expected outline ids {expected!r}, got {actual!r}"


@then("every heading element carries its outline id")
def then_heading_ids_match(scenario_state: dict[str, object]) -> None:
    """Ensure heading ``id`` attributes mirror the outline order."""
    soup = _soup(scenario_state)
    heading_ids = [
        heading.get("id")
        for heading in soup.find_all(["h1", "h2", "h3", "h4", "h5", "h6"])
    ]
    outline_ids = [entry.id for entry in _result(scenario_state).outline]
    assert heading_ids == outline_ids, (
        f"heading ids {heading_ids!r} do not match outline {outline_ids!r}"
    )


@then("the HTML contains one mermaid diagram container")
def then_one_diagram(scenario_state: dict[str, object]) -> None:
    """Check for exactly one Mermaid container holding the diagram text."""
    containers = _soup(scenario_state).select("div.mermaid")
    assert len(containers) == 1, "expected a single mermaid container"
    assert containers[0].get_text().strip() == "graph TD; A-->B;"


@then("the js block is rendered as highlighted-ready code")
def then_js_block_is_code(scenario_state: dict[str, object]) -> None:
    """Check the JavaScript block keeps its language class for highlighters."""
    code = _soup(scenario_state).select_one("pre > code.language-js")
    assert code is not None, "expected the js block to render as <pre><code>"
    assert code.get_text().strip() == "graph TD; A-->B;"


@then(parsers.parse('the link points at "{href}"'))
def then_link_target(href: str, scenario_state: dict[str, object]) -> None:
    """Verify the rendered link target."""
    link = _soup(scenario_state).find("a")
    assert link is not None, "expected a rendered link"
    assert link.get("href") == href
