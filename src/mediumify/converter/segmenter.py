"""Split raw markdown into code spans and typed content blocks.

Both functions are pure and total: malformed input never raises, it is
simply classified as ordinary text.

Pattern semantics
-----------------
* **Fence** -- a line starting with three backticks, optionally followed by
  a language tag (``[\\w+#.-]*``; any further info string is ignored).  The
  span ends at the next line consisting of three backticks.  Unterminated
  fences are not code.
* **Heading** -- one to six ``#`` followed by whitespace.
* **Bullet** -- optional indentation, then ``-``, ``*``, ``+`` or ``N.``,
  then whitespace.  Indentation is discarded (lists are flattened).
* **Quote** -- a line starting with ``>`` after optional indentation.
* **Thematic break** -- three or more ``-``, ``*`` or ``_``; skipped.
* **Table row** -- a line starting and ending with ``|``.  Separator rows
  (``|---|:--:|``) are dropped.
"""

from __future__ import annotations

import re

from mediumify.models import BlockType, CodeBlock, ContentBlock

FENCE_RE = re.compile(
    r"^```[ \t]*(?P<lang>[\w+#.-]*)[^\n]*\n(?P<code>.*?)\n?^```[ \t]*$",
    re.MULTILINE | re.DOTALL,
)
HEADING_RE = re.compile(r"^(#{1,6})\s+(.*?)(?:\s+#+)?\s*$")
BULLET_RE = re.compile(r"^\s*(?:[-*+]|\d+\.)\s+")
QUOTE_RE = re.compile(r"^\s*>")
TABLE_ROW_RE = re.compile(r"^\s*\|.*\|\s*$")
TABLE_SEPARATOR_RE = re.compile(r"^\s*\|?\s*:?-+:?\s*(\|\s*:?-+:?\s*)*\|?\s*$")
THEMATIC_BREAK_RE = re.compile(r"^\s*([-*_])(?:\s*\1){2,}\s*$")

LIST_BULLET = "•"


def extract_code_blocks(text: str) -> list[CodeBlock]:
    """Return every fenced code span in *text*, in document order."""
    blocks: list[CodeBlock] = []
    for match in FENCE_RE.finditer(text):
        start_line = text.count("\n", 0, match.start()) + 1
        end_line = text.count("\n", 0, match.end()) + 1
        blocks.append(CodeBlock(
            language=match.group("lang") or "text",
            code=match.group("code").strip("\n"),
            start_line=start_line,
            end_line=end_line,
        ))
    return blocks


def is_block_boundary(line: str) -> bool:
    """Return True if *line* starts a non-paragraph block."""
    return bool(
        HEADING_RE.match(line.strip())
        or BULLET_RE.match(line)
        or QUOTE_RE.match(line)
        or TABLE_ROW_RE.match(line)
        or THEMATIC_BREAK_RE.match(line)
        or line.lstrip().startswith("```")
    )


def segment_blocks(
    text: str,
    code_blocks: list[CodeBlock] | None = None,
) -> list[ContentBlock]:
    """Classify *text* into an ordered list of :class:`ContentBlock`.

    Parameters
    ----------
    text:
        Raw markdown.
    code_blocks:
        The spans returned by :func:`extract_code_blocks` for the same
        *text*.  Computed when omitted.  Fences are recognised only where a
        span starts, so segmentation and extraction always agree.
    """
    if code_blocks is None:
        code_blocks = extract_code_blocks(text)
    spans = {block.start_line: (index, block) for index, block in enumerate(code_blocks)}

    lines = text.split("\n")
    blocks: list[ContentBlock] = []
    i = 0
    while i < len(lines):
        line = lines[i]
        stripped = line.strip()

        if i + 1 in spans:
            index, code = spans[i + 1]
            blocks.append(ContentBlock(
                type=BlockType.CODE,
                content=code.code,
                language=code.language,
                code_index=index,
            ))
            i = code.end_line
            continue

        if not stripped:
            i += 1
            continue

        heading = HEADING_RE.match(stripped)
        if heading:
            blocks.append(ContentBlock(
                type=BlockType.HEADER,
                content=heading.group(2),
                level=len(heading.group(1)),
            ))
            i += 1
            continue

        if THEMATIC_BREAK_RE.match(line):
            i += 1
            continue

        if QUOTE_RE.match(line):
            quoted: list[str] = []
            while i < len(lines) and QUOTE_RE.match(lines[i]):
                quoted.append(lines[i].strip()[1:].strip())
                i += 1
            blocks.append(ContentBlock(type=BlockType.QUOTE, content="\n".join(quoted)))
            continue

        if BULLET_RE.match(line):
            items: list[str] = []
            while i < len(lines) and i + 1 not in spans:
                if BULLET_RE.match(lines[i]):
                    items.append(f"{LIST_BULLET} {BULLET_RE.sub('', lines[i], count=1).strip()}")
                elif lines[i].strip():
                    break
                i += 1
            blocks.append(ContentBlock(type=BlockType.LIST, content="\n".join(items)))
            continue

        if TABLE_ROW_RE.match(line):
            rows: list[str] = []
            while i < len(lines) and TABLE_ROW_RE.match(lines[i]):
                if not TABLE_SEPARATOR_RE.match(lines[i]):
                    cells = [cell.strip() for cell in lines[i].strip().strip("|").split("|")]
                    rows.append(f"{LIST_BULLET} {' | '.join(cells)}")
                i += 1
            if rows:
                blocks.append(ContentBlock(type=BlockType.LIST, content="\n".join(rows)))
            continue

        paragraph: list[str] = [stripped]
        i += 1
        while (
            i < len(lines)
            and lines[i].strip()
            and i + 1 not in spans
            and not is_block_boundary(lines[i])
        ):
            paragraph.append(lines[i].strip())
            i += 1
        blocks.append(ContentBlock(type=BlockType.PARAGRAPH, content=" ".join(paragraph)))

    return blocks
