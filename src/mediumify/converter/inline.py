"""Inline rendering: markdown spans to Medium-safe HTML.

Inline markdown (``**bold**``, ``*emphasis*``, ```code```, ``[links](…)``,
``~~strike~~``) is parsed with mistune's inline parser and re-emitted as the
small HTML subset the Medium editor accepts on paste.  Raw HTML in the
source is never passed through: it is escaped like any other text.

Escaping uses the explicit entity table :data:`HTML_ENTITIES`.
"""

from __future__ import annotations

from urllib.parse import urlparse

import mistune

HTML_ENTITIES: dict[str, str] = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#39;",
}

_ESCAPE_TABLE = str.maketrans(HTML_ENTITIES)

# Link schemes that may appear in an href; anything else keeps its text only.
_SAFE_SCHEMES: frozenset[str] = frozenset({"", "http", "https", "mailto"})

_SIMPLE_TAGS: dict[str, str] = {
    "strong": "strong",
    "emphasis": "em",
    "strikethrough": "s",
}

_parser = mistune.create_markdown(
    renderer="ast",
    plugins=["strikethrough", "url"],
)


def html_escape(text: str) -> str:
    """Replace every character in :data:`HTML_ENTITIES` with its entity."""
    return text.translate(_ESCAPE_TABLE)


def is_safe_url(url: str) -> bool:
    """Return True if *url* may be used as a link target."""
    return urlparse(url.strip()).scheme.lower() in _SAFE_SCHEMES


def render_inline(text: str) -> str:
    """Render inline markdown in *text* to escaped HTML.

    Only mistune's inline parser runs: a fragment that starts with a block
    marker (``1. Introduction``, ``# 1``, ``> note``) keeps it as text.

    Examples
    --------
    >>> render_inline("Use **bold** and `x < y`")
    'Use <strong>bold</strong> and <code>x &lt; y</code>'
    """
    if not text.strip():
        return ""
    text = text.strip(" \r\n\t\f")
    return _join_inline(_parser.inline(text, {"ref_links": {}}))


def _join_inline(tokens: list[dict]) -> str:
    return "".join(_render_token(token) for token in tokens)


def _render_token(token: dict) -> str:
    token_type = token.get("type", "")
    children = token.get("children") or []

    if token_type == "text":
        return html_escape(token.get("raw", ""))
    if token_type == "codespan":
        return f"<code>{html_escape(token.get('raw', ''))}</code>"
    if token_type in _SIMPLE_TAGS:
        tag = _SIMPLE_TAGS[token_type]
        return f"<{tag}>{_join_inline(children)}</{tag}>"
    if token_type == "link":
        return _render_link(token, children)
    if token_type == "image":
        attrs = token.get("attrs", {})
        url = attrs.get("url", "")
        alt = html_escape(_plain_text(children))
        if not is_safe_url(url):
            return alt
        return f'<img src="{html_escape(url)}" alt="{alt}">'
    if token_type == "softbreak":
        return " "
    if token_type == "linebreak":
        return "<br>"
    if token_type == "inline_html":
        return html_escape(token.get("raw", ""))

    # Unknown tokens render as nothing.
    return ""


def _render_link(token: dict, children: list[dict]) -> str:
    url = token.get("attrs", {}).get("url", "")
    label = _join_inline(children)
    if not is_safe_url(url):
        return label
    return f'<a href="{html_escape(url)}" target="_blank">{label}</a>'


def _plain_text(tokens: list[dict]) -> str:
    """Concatenate the raw text of *tokens*, dropping all markup."""
    parts: list[str] = []
    for token in tokens:
        if "raw" in token:
            parts.append(token["raw"])
        elif token.get("children"):
            parts.append(_plain_text(token["children"]))
    return "".join(parts)
