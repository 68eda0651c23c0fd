"""Load render options from YAML into typed dataclasses.

Hosts usually keep the URL root and link rewrites alongside the rest of
their site configuration. :func:`load_render_options` reads a small YAML
document of the form::

    url_root: /docs/v2
    link_rewrites:
      /assets/cat.jpg: https://cdn.example.com/cat.jpg

Both keys are optional; an empty file yields the defaults.

Examples
--------
>>> from doctave_markdown.config import build_render_options
>>> build_render_options({"url_root": "/docs"}).url_root
'/docs'
"""

from __future__ import annotations

import collections.abc as cabc
import typing as typ

import structlog
from ruamel.yaml import YAML

from ._constants import DEFAULT_URL_ROOT
from .models import RenderOptions

if typ.TYPE_CHECKING:
    from pathlib import Path

log = structlog.get_logger()


class RenderConfigError(ValueError):
    """Raised when render options are invalid or incomplete."""


def build_render_options(raw: cabc.Mapping[str, typ.Any]) -> RenderOptions:
    """Build :class:`RenderOptions` from an already-parsed mapping.

    Raises
    ------
    RenderConfigError
        If ``url_root`` is not a non-empty string, ``link_rewrites`` is not a
        mapping, or a rewrite target is not a string.
    """
    url_root = raw.get("url_root", DEFAULT_URL_ROOT)
    if not isinstance(url_root, str) or not url_root.strip():
        msg = "'url_root' must be a non-empty string."
        raise RenderConfigError(msg)

    rewrites_raw = raw.get("link_rewrites") or {}
    if not isinstance(rewrites_raw, cabc.Mapping):
        msg = "'link_rewrites' must be a mapping of link targets to URLs."
        raise RenderConfigError(msg)

    rules: dict[str, str] = {}
    for source, target in rewrites_raw.items():
        match target:
            case str() if target.strip():
                rules[str(source)] = target.strip()
            case _:
                msg = f"Rewrite target for '{source}' must be a non-empty string."
                raise RenderConfigError(msg)

    return RenderOptions(url_root=url_root.strip(), link_rewrite_rules=rules)


def load_render_options(path: Path) -> RenderOptions:
    """Load render options from the YAML file at ``path``.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML document.

    Returns
    -------
    RenderOptions
        Options with defaults applied for any omitted key.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    RenderConfigError
        If a key holds a value of the wrong shape.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)

    options = build_render_options(loaded)
    log.debug(
        "render_options_loaded",
        path=str(path),
        url_root=options.url_root,
        rewrite_rules=len(options.link_rewrite_rules),
    )
    return options


__all__ = ["RenderConfigError", "build_render_options", "load_render_options"]
