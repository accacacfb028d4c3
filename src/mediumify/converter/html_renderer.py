"""Render a :class:`Document` into Medium-ready output.

Every renderer walks ``document.sections`` and dispatches on
:class:`BlockType` through a handler table, so adding a block kind means
adding one handler per table.  Rendering is deterministic: the same
document always produces byte-identical output.

Output formats
--------------
* :func:`render_optimized` -- one HTML fragment for the Medium editor.
  Headers are always ``<h2>``; lists are flat ``<ul>``; gist references
  become a link plus a ``<script>`` embed.
* :func:`render_sections` -- the same blocks grouped into small chunks
  (see :func:`group_blocks`).
* :func:`render_rich_document` -- a complete styled HTML page.
* :func:`render_plain_text` -- markdown-flavoured plain text.
"""

from __future__ import annotations

from collections.abc import Callable

from mediumify.converter.inline import html_escape, render_inline
from mediumify.converter.segmenter import LIST_BULLET
from mediumify.models import BlockType, ContentBlock, Document
from mediumify.observability import get_logger

log = get_logger("mediumify.renderer")

MAX_GROUP_SIZE = 3
SECTION_DELIMITER = "\n\n---\n\n"
SUBTITLE_HEADING_MAX_LENGTH = 60
"""Longer subtitles are rendered as an italic paragraph instead of ``<h2>``."""


# ---------------------------------------------------------------------------
# Per-block HTML
# ---------------------------------------------------------------------------

def _list_items(content: str) -> list[str]:
    items: list[str] = []
    for line in content.split("\n"):
        item = line.strip().lstrip(LIST_BULLET + "-*").strip()
        if item:
            items.append(item)
    return items


def _html_header(block: ContentBlock, document: Document) -> str:
    return f"<h2>{render_inline(block.content)}</h2>"


def _html_paragraph(block: ContentBlock, document: Document) -> str:
    return f"<p>{render_inline(block.content)}</p>"


def _html_list(block: ContentBlock, document: Document) -> str:
    items = "\n".join(f"<li>{render_inline(item)}</li>" for item in _list_items(block.content))
    return f"<ul>\n{items}\n</ul>"


def _html_quote(block: ContentBlock, document: Document) -> str:
    return f"<blockquote><p>{render_inline(block.content)}</p></blockquote>"


def _html_code(block: ContentBlock, document: Document) -> str:
    return f"<pre><code>{html_escape(block.content)}</code></pre>"


def _html_gist_reference(block: ContentBlock, document: Document) -> str:
    artifact = document.find_artifact(block.gist_id)
    if artifact is None:
        log.warning(
            "Gist reference without matching artifact omitted",
            extra={"extra_fields": {"op": "render", "gist_id": block.gist_id}},
        )
        return ""
    url = html_escape(artifact.url)
    language = html_escape(artifact.language)
    return (
        f'<p><strong>Code Example:</strong> <a href="{url}" target="_blank">'
        f"View {language} code on GitHub Gist</a></p>\n\n"
        f'<script src="{html_escape(artifact.embed_url)}"></script>'
    )


_HTML_HANDLERS: dict[BlockType, Callable[[ContentBlock, Document], str]] = {
    BlockType.HEADER: _html_header,
    BlockType.PARAGRAPH: _html_paragraph,
    BlockType.LIST: _html_list,
    BlockType.QUOTE: _html_quote,
    BlockType.CODE: _html_code,
    BlockType.GIST_REFERENCE: _html_gist_reference,
}


def render_block(block: ContentBlock, document: Document) -> str:
    """Render one block to HTML; ``""`` when the block is omitted."""
    return _HTML_HANDLERS[block.type](block, document)


def _title_html(document: Document, compact: bool = False) -> str:
    html = f"<h1>{html_escape(document.title)}</h1>"
    subtitle = document.subtitle
    if not subtitle:
        return html
    separator = "\n" if compact else "\n\n"
    if not compact and len(subtitle) > SUBTITLE_HEADING_MAX_LENGTH:
        return f"{html}{separator}<p><em>{render_inline(subtitle)}</em></p>"
    return f"{html}{separator}<h2>{render_inline(subtitle)}</h2>"


def _body_html(document: Document) -> str:
    parts = [_title_html(document)]
    for block in document.sections:
        html = render_block(block, document)
        if html:
            parts.append(html)
    return "\n\n".join(parts)


# ---------------------------------------------------------------------------
# Optimized
# ---------------------------------------------------------------------------

def render_optimized(document: Document) -> str:
    """Render *document* as a single Medium-ready HTML fragment.

    Metadata (tags, reading time, word count) is appended as HTML comments,
    which the Medium editor ignores on paste.
    """
    meta = document.metadata
    trailer: list[str] = []
    if meta.tags:
        trailer.append(f"<!-- Tags: {html_escape(', '.join(meta.tags))} -->")
    trailer.append(f"<!-- Reading time: {meta.reading_time} minutes -->")
    trailer.append(f"<!-- Word count: {meta.word_count} words -->")
    return f"{_body_html(document)}\n\n" + "\n".join(trailer)


# ---------------------------------------------------------------------------
# Sections
# ---------------------------------------------------------------------------

def group_blocks(
    blocks: list[ContentBlock],
    max_group: int = MAX_GROUP_SIZE,
) -> list[list[ContentBlock]]:
    """Group consecutive blocks of the same type, at most *max_group* each.

    A header always starts a new group.  The final group is flushed
    whatever its size.
    """
    groups: list[list[ContentBlock]] = []
    current: list[ContentBlock] = []
    for block in blocks:
        starts_new = (
            not current
            or block.type is not current[-1].type
            or block.type is BlockType.HEADER
            or len(current) >= max_group
        )
        if starts_new and current:
            groups.append(current)
            current = []
        current.append(block)
    if current:
        groups.append(current)
    return groups


def render_sections(document: Document) -> list[str]:
    """Render *document* as a list of HTML chunks.

    The first chunk holds the title and subtitle; each further chunk is one
    group from :func:`group_blocks`.  Groups whose blocks all render empty
    are dropped.
    """
    sections = [_title_html(document, compact=True)]
    for group in group_blocks(document.sections):
        rendered = [html for html in (render_block(b, document) for b in group) if html]
        if rendered:
            sections.append("\n\n".join(rendered))
    return sections


# ---------------------------------------------------------------------------
# Rich document
# ---------------------------------------------------------------------------

_RICH_STYLES = """\
        body {
            max-width: 680px;
            margin: 0 auto;
            padding: 20px;
            font-family: Georgia, Cambria, "Times New Roman", Times, serif;
            font-size: 21px;
            line-height: 1.58;
            color: rgba(41, 41, 41, 1);
        }
        h1, h2 {
            font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, "Helvetica Neue", Arial, sans-serif;
            font-weight: 700;
        }
        h1 { font-size: 42px; line-height: 1.04; letter-spacing: -0.015em; margin: 0 0 30px 0; }
        h2 { font-size: 32px; line-height: 1.15; letter-spacing: -0.02em; margin: 40px 0 16px 0; }
        p { margin: 0 0 30px 0; word-wrap: break-word; }
        blockquote { border-left: 3px solid rgba(41, 41, 41, 1); padding-left: 20px; margin: 30px 0; font-style: italic; }
        ul { margin: 30px 0; padding-left: 30px; }
        li { margin: 10px 0; }
        pre { background-color: rgba(242, 242, 242, 1); padding: 20px; border-radius: 3px; overflow-x: auto; margin: 30px 0; }
        code { font-family: Menlo, Monaco, "Courier New", Courier, monospace; font-size: 16px; line-height: 1.4; }
        a { color: inherit; text-decoration: underline; }
        .metadata {
            margin-top: 50px;
            padding-top: 20px;
            border-top: 1px solid rgba(230, 230, 230, 1);
            font-size: 16px;
            color: rgba(117, 117, 117, 1);
        }"""


def _metadata_footer(document: Document) -> str:
    meta = document.metadata
    lines = [
        f"<p><strong>Reading time:</strong> {meta.reading_time} minutes</p>",
        f"<p><strong>Word count:</strong> {meta.word_count} words</p>",
    ]
    if meta.tags:
        lines.append(f"<p><strong>Tags:</strong> {html_escape(', '.join(meta.tags))}</p>")
    count = len(document.artifacts)
    if count:
        plural = "s" if count > 1 else ""
        lines.append(f"<p><strong>Code examples:</strong> {count} GitHub Gist{plural}</p>")
    inner = "\n        ".join(lines)
    return f'<div class="metadata">\n        {inner}\n    </div>'


def render_rich_document(document: Document) -> str:
    """Wrap the optimized body in a complete, styled HTML document."""
    return (
        "<!DOCTYPE html>\n"
        '<html lang="en">\n'
        "<head>\n"
        '    <meta charset="UTF-8">\n'
        '    <meta name="viewport" content="width=device-width, initial-scale=1.0">\n'
        f"    <title>{html_escape(document.title)}</title>\n"
        f"    <style>\n{_RICH_STYLES}\n    </style>\n"
        "</head>\n"
        "<body>\n"
        f"{_body_html(document)}\n\n"
        f"    {_metadata_footer(document)}\n"
        "</body>\n"
        "</html>"
    )


# ---------------------------------------------------------------------------
# Plain text
# ---------------------------------------------------------------------------

def _text_gist_reference(block: ContentBlock, document: Document) -> str:
    artifact = document.find_artifact(block.gist_id)
    if artifact is None:
        return ""
    return f"[View {artifact.language} code on GitHub Gist]({artifact.url})"


_TEXT_HANDLERS: dict[BlockType, Callable[[ContentBlock, Document], str]] = {
    BlockType.HEADER: lambda block, doc: f"{'#' * (block.level or 2)} {block.content}",
    BlockType.PARAGRAPH: lambda block, doc: block.content,
    BlockType.LIST: lambda block, doc: "\n".join(
        f"{LIST_BULLET} {item}" for item in _list_items(block.content)
    ),
    BlockType.QUOTE: lambda block, doc: "\n".join(
        f"> {line}" for line in block.content.split("\n")
    ),
    BlockType.CODE: lambda block, doc: f"```\n{block.content}\n```",
    BlockType.GIST_REFERENCE: _text_gist_reference,
}


def render_plain_text(document: Document) -> str:
    """Render *document* as markdown-flavoured plain text."""
    parts = [document.title]
    if document.subtitle:
        parts.append(document.subtitle)
    for block in document.sections:
        text = _TEXT_HANDLERS[block.type](block, document)
        if text:
            parts.append(text)
    return "\n\n".join(parts)
