"""Markdown to Medium conversion pipeline.

Public API:

- :class:`MediumFormatter` -- markdown to :class:`~mediumify.models.Document`.
- :func:`bind_artifacts` -- swap code blocks for gist references.
- :func:`extract_code_blocks` / :func:`segment_blocks` -- the scanning stages.
- :func:`render_optimized`, :func:`render_sections`,
  :func:`render_rich_document`, :func:`render_plain_text` -- output formats.
"""

from mediumify.converter.formatter import MediumFormatter, bind_artifacts
from mediumify.converter.html_renderer import (
    SECTION_DELIMITER,
    group_blocks,
    render_optimized,
    render_plain_text,
    render_rich_document,
    render_sections,
)
from mediumify.converter.inline import render_inline
from mediumify.converter.segmenter import extract_code_blocks, segment_blocks

__all__ = [
    "SECTION_DELIMITER",
    "MediumFormatter",
    "bind_artifacts",
    "extract_code_blocks",
    "group_blocks",
    "render_inline",
    "render_optimized",
    "render_plain_text",
    "render_rich_document",
    "render_sections",
    "segment_blocks",
]
