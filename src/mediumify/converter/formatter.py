"""Build the Medium content model from raw markdown.

:class:`MediumFormatter` orchestrates the conversion:

1. **Extract** -- :func:`extract_code_blocks` finds fenced code spans.
2. **Segment** -- :func:`segment_blocks` classifies the text into blocks.
3. **Transform** -- the title and subtitle are lifted out of the block
   stream and header levels are clamped to the two tiers Medium supports.
4. **Measure** -- word count, reading time and keyword tags.

The result is a :class:`Document` with no artifacts.  Once gists exist,
:func:`bind_artifacts` swaps the matching code blocks for gist references.
"""

from __future__ import annotations

import dataclasses
import math
import re

from mediumify.config import MediumifyConfig
from mediumify.converter.segmenter import extract_code_blocks, segment_blocks
from mediumify.models import (
    ArtifactRef,
    BlockType,
    ContentBlock,
    Document,
    DocumentMetadata,
)

WORDS_PER_MINUTE = 200
"""Reading speed used for :attr:`DocumentMetadata.reading_time`."""

MAX_HEADER_LEVEL = 2

SUBTITLE_MAX_PARAGRAPH_LENGTH = 120
"""A plain line after the title only becomes the subtitle below this length."""

TAG_KEYWORDS: tuple[str, ...] = (
    "javascript", "typescript", "python", "react", "nodejs", "ai",
    "machine learning", "web development", "mobile development", "ios",
    "android", "swift", "kotlin", "docker", "kubernetes", "aws", "azure",
    "gcp", "git", "github", "api", "database", "sql", "nosql", "mongodb",
    "postgresql", "mysql", "redis", "frontend", "backend", "fullstack",
    "devops", "cicd", "testing",
)
"""Candidate tags, in priority order."""

_TAG_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = tuple(
    (keyword, re.compile(rf"\b{re.escape(keyword)}\b")) for keyword in TAG_KEYWORDS
)


def count_words(text: str) -> int:
    """Count whitespace-delimited tokens."""
    return len(text.split())


def reading_time(word_count: int) -> int:
    """Minutes needed to read *word_count* words at :data:`WORDS_PER_MINUTE`."""
    return math.ceil(word_count / WORDS_PER_MINUTE)


def extract_tags(text: str, limit: int = 5) -> tuple[str, ...]:
    """Return up to *limit* keywords from :data:`TAG_KEYWORDS` found in *text*.

    Matching is case-insensitive and on word boundaries; the result follows
    keyword-list order, so identical input always yields identical tags.
    """
    lowered = text.lower()
    tags: list[str] = []
    for keyword, pattern in _TAG_PATTERNS:
        if len(tags) >= limit:
            break
        if pattern.search(lowered):
            tags.append(keyword)
    return tuple(tags)


class MediumFormatter:
    """Convert markdown to a :class:`Document`.

    Parameters
    ----------
    config:
        Package configuration (title placeholder, tag limit).

    Examples
    --------
    >>> doc = MediumFormatter(MediumifyConfig()).convert("# Hi\\n\\nSome text")
    >>> doc.title, [b.type.value for b in doc.sections]
    ('Hi', ['paragraph'])
    """

    def __init__(self, config: MediumifyConfig | None = None) -> None:
        self._config = config or MediumifyConfig()

    def convert(self, markdown: str) -> Document:
        """Full pipeline: extract -> segment -> transform -> measure."""
        code_blocks = extract_code_blocks(markdown)
        blocks = segment_blocks(markdown, code_blocks)

        title, subtitle, blocks = self._lift_title(blocks)
        sections = [_clamp_header(block) for block in blocks]

        words = count_words(markdown)
        metadata = DocumentMetadata(
            tags=extract_tags(markdown, self._config.max_tags),
            word_count=words,
            reading_time=reading_time(words),
        )
        return Document(
            title=title,
            subtitle=subtitle,
            sections=sections,
            code_blocks=code_blocks,
            metadata=metadata,
        )

    def _lift_title(
        self,
        blocks: list[ContentBlock],
    ) -> tuple[str, str | None, list[ContentBlock]]:
        """Remove the title block (and the subtitle block after it)."""
        position = next(
            (
                i for i, block in enumerate(blocks)
                if block.type is BlockType.HEADER and block.level == 1
            ),
            None,
        )
        if position is None:
            return self._config.title_placeholder, None, blocks

        title = blocks[position].content or self._config.title_placeholder
        remaining = blocks[:position] + blocks[position + 1:]
        if position == len(remaining):
            return title, None, remaining

        candidate = remaining[position]
        subtitle: str | None = None
        if candidate.type is BlockType.HEADER and candidate.level == 2:
            subtitle = candidate.content
        elif (
            candidate.type is BlockType.PARAGRAPH
            and len(candidate.content) < SUBTITLE_MAX_PARAGRAPH_LENGTH
        ):
            subtitle = candidate.content
        if subtitle is not None:
            del remaining[position]
        return title, subtitle, remaining


def _clamp_header(block: ContentBlock) -> ContentBlock:
    if block.type is BlockType.HEADER and (block.level or 1) > MAX_HEADER_LEVEL:
        return dataclasses.replace(block, level=MAX_HEADER_LEVEL)
    return block


def bind_artifacts(document: Document, artifacts: list[ArtifactRef]) -> Document:
    """Return a copy of *document* with code blocks replaced by gist references.

    A code block is replaced when an artifact's ``block_index`` equals its
    ``code_index``.  Code blocks without an artifact (e.g. because creation
    failed) stay inline.
    """
    by_index = {artifact.block_index: artifact for artifact in artifacts}
    sections: list[ContentBlock] = []
    for block in document.sections:
        artifact = by_index.get(block.code_index) if block.type is BlockType.CODE else None
        if artifact is None:
            sections.append(block)
            continue
        sections.append(ContentBlock(
            type=BlockType.GIST_REFERENCE,
            content=f"[View code on GitHub Gist]({artifact.url})",
            language=artifact.language,
            code_index=block.code_index,
            gist_id=artifact.id,
        ))
    return dataclasses.replace(document, sections=sections, artifacts=list(artifacts))
