"""Public data models for the mediumify package.

This module contains every result type, enum, and supporting dataclass
referenced by the export pipeline.  Types that are shared between pipeline
stages and must not change after construction (blocks, code spans, gist
references) are frozen.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from enum import Enum

# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class BlockType(str, Enum):
    """Kinds of content block in the Medium content model."""

    HEADER = "header"
    PARAGRAPH = "paragraph"
    LIST = "list"
    QUOTE = "quote"
    CODE = "code"
    GIST_REFERENCE = "gist-reference"
    """A code block that has been externalized to a GitHub Gist."""


class ExportFormat(str, Enum):
    """Output representations produced by the exporter."""

    OPTIMIZED = "medium-optimized"
    """A single HTML fragment ready to paste into the Medium editor."""

    SECTIONS = "medium-sections"
    """The article split into small HTML chunks for piecewise pasting."""

    RICH_HTML = "rich-html"
    """A complete, styled HTML document with a metadata footer."""

    PLAIN_TEXT = "plain-text"
    """Markdown-flavoured plain text."""


# ---------------------------------------------------------------------------
# Content model
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CodeBlock:
    """A fenced code span extracted from the source markdown.

    Attributes
    ----------
    language:
        The fence's language tag, ``"text"`` when none was given.
    code:
        The body between the fences, without surrounding blank lines.
    start_line:
        1-indexed line of the opening fence.
    end_line:
        1-indexed line of the closing fence (inclusive).
    """

    language: str
    code: str
    start_line: int
    end_line: int


@dataclass(frozen=True)
class ContentBlock:
    """One classified unit of document structure.

    Attributes
    ----------
    type:
        The block kind.
    content:
        Block text.  Lists hold one ``• item`` per line; quotes hold one
        line per quoted line; code holds the raw code.
    level:
        Heading level (``1`` or ``2``) for headers.
    language:
        Language tag for code blocks.
    code_index:
        Ordinal of the originating :class:`CodeBlock` for code blocks.
    gist_id:
        ID of the :class:`ArtifactRef` for gist references.
    """

    type: BlockType
    content: str
    level: int | None = None
    language: str | None = None
    code_index: int | None = None
    gist_id: str | None = None


@dataclass(frozen=True)
class ArtifactRef:
    """A GitHub Gist created for one code block.

    Attributes
    ----------
    id:
        The gist ID assigned by GitHub.
    url:
        The gist's HTML page.
    embed_url:
        The ``<script>`` embed URL (``https://gist.github.com/<id>.js``).
    language:
        Language of the originating code block.
    block_index:
        Ordinal of the originating :class:`CodeBlock` in
        :attr:`Document.code_blocks`.
    filename:
        The gist's file name.
    description:
        The gist description.
    """

    id: str
    url: str
    embed_url: str
    language: str
    block_index: int
    filename: str = ""
    description: str = ""


@dataclass
class DocumentMetadata:
    """Derived article metadata."""

    tags: tuple[str, ...] = ()
    word_count: int = 0
    reading_time: int = 0


@dataclass
class Document:
    """Canonical intermediate representation of an article.

    ``artifacts`` stays empty until gists have been created and bound with
    :func:`~mediumify.converter.formatter.bind_artifacts`.
    """

    title: str
    subtitle: str | None = None
    sections: list[ContentBlock] = field(default_factory=list)
    code_blocks: list[CodeBlock] = field(default_factory=list)
    artifacts: list[ArtifactRef] = field(default_factory=list)
    metadata: DocumentMetadata = field(default_factory=DocumentMetadata)

    def find_artifact(self, gist_id: str | None) -> ArtifactRef | None:
        """Return the artifact with *gist_id*, or ``None``."""
        for artifact in self.artifacts:
            if artifact.id == gist_id:
                return artifact
        return None


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

@dataclass
class ValidationResult:
    """Outcome of one or more validation checks.

    Errors are fatal; warnings never affect :attr:`is_valid`.
    """

    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


def merge_results(*results: ValidationResult) -> ValidationResult:
    """Combine validation results by concatenating errors and warnings.

    The merged result is valid only when every input is valid.
    """
    merged = ValidationResult()
    for result in results:
        merged.errors.extend(result.errors)
        merged.warnings.extend(result.warnings)
    return merged


# ---------------------------------------------------------------------------
# Export options and result
# ---------------------------------------------------------------------------

@dataclass
class ExportOptions:
    """Per-call export options.

    Parameters
    ----------
    credential:
        GitHub token used to create gists.  Never logged.
    create_artifacts:
        Externalize code blocks to GitHub Gists.
    public:
        Gist visibility.  ``None`` uses the configured default.
    """

    credential: str | None = None
    create_artifacts: bool = False
    public: bool | None = None

    def __repr__(self) -> str:
        """Mask the credential to prevent accidental leakage."""
        parts: list[str] = []
        for f in dataclasses.fields(self):
            val = getattr(self, f.name)
            if f.name == "credential" and val is not None:
                masked = f"...{val[-4:]}" if len(val) >= 4 else "****"
                parts.append(f"credential='{masked}'")
            else:
                parts.append(f"{f.name}={val!r}")
        return f"ExportOptions({', '.join(parts)})"


@dataclass
class ExportResult:
    """Result of a single export call.

    Attributes
    ----------
    format:
        The requested output format.
    content:
        The rendered output; empty on failure.
    filename:
        Suggested file name for *content*.
    sections:
        Individual chunks for :attr:`ExportFormat.SECTIONS`.
    artifacts:
        Gists created during the export.
    success:
        ``False`` when the export was aborted.
    error:
        Human-readable failure reason.
    validation:
        Combined validation outcome, including non-fatal warnings.
    """

    format: ExportFormat | str
    content: str = ""
    filename: str | None = None
    sections: list[str] | None = None
    artifacts: list[ArtifactRef] | None = None
    success: bool = False
    error: str | None = None
    validation: ValidationResult | None = None
