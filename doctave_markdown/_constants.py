"""Common literal values used across doctave_markdown.

These constants keep the markup contract with Doctave's front-end in one
place so the Markdown extensions, the renderer, and the tests agree on the
same class names and fallbacks.

Examples
--------
>>> from doctave_markdown import _constants
>>> _constants.MERMAID_CLASS
'mermaid'
>>> _constants.HEADING_LEVELS["h3"]
3
"""

MERMAID_LANGUAGE = "mermaid"
MERMAID_CLASS = "mermaid"
SLUG_FALLBACK = "section"
DEFAULT_URL_ROOT = "/"
HEADING_LEVELS: dict[str, int] = {f"h{level}": level for level in range(1, 7)}
MARKDOWN_EXTENSIONS: tuple[str, ...] = (
    "fenced_code",
    "tables",
    "sane_lists",
    "pymdownx.tilde",
    "pymdownx.tasklist",
)
MARKDOWN_EXTENSION_CONFIGS: dict[str, dict[str, object]] = {
    "pymdownx.tilde": {"subscript": False},
    "pymdownx.tasklist": {"custom_checkbox": False, "clickable_checkbox": False},
}
