"""Module artifact encoding for compiled CSS.

The module artifact is a single export statement binding a string literal::

    export const cssText = "body{color:red}"

The literal is produced by ``json.dumps`` so arbitrary stylesheet text
(quotes, backslashes, newlines, non-ASCII) round-trips exactly. With
``ensure_ascii`` every non-ASCII code point is escaped, which also keeps
U+2028/U+2029 out of the JavaScript source.
"""

from __future__ import annotations

import json

CSS_MODULE_PREFIX = "export const cssText = "


def render_css_module(css_text: str) -> str:
    """Render *css_text* as the content of a module artifact."""
    return CSS_MODULE_PREFIX + json.dumps(css_text, ensure_ascii=True)


def parse_css_module(source: str) -> str:
    """Recover the CSS text embedded in a module artifact.

    Raises ValueError if *source* is not a module produced by
    :func:`render_css_module`.
    """
    if not source.startswith(CSS_MODULE_PREFIX):
        msg = "Not a CSS module: missing 'export const cssText' binding"
        raise ValueError(msg)
    literal = source[len(CSS_MODULE_PREFIX) :]
    try:
        value = json.loads(literal)
    except json.JSONDecodeError as exc:
        msg = f"Malformed CSS module literal: {exc}"
        raise ValueError(msg) from exc
    if not isinstance(value, str):
        msg = "CSS module must bind a string literal"
        raise ValueError(msg)
    return value
