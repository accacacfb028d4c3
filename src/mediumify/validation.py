"""Pre-export validation checks.

Four independent checks each return a :class:`ValidationResult`:

* :func:`validate_content` -- the raw markdown.
* :func:`validate_credential` -- the optional GitHub token.
* :func:`validate_code_blocks` -- extracted code, including a scan for
  secrets that must not be published.
* :func:`validate_document` -- the built :class:`Document`.

Errors are fatal and abort the export; warnings are attached to the result.
Results are combined with :func:`~mediumify.models.merge_results`.
"""

from __future__ import annotations

import re

from mediumify.converter.segmenter import extract_code_blocks
from mediumify.models import BlockType, CodeBlock, Document, ValidationResult

MIN_CONTENT_LENGTH = 100
MAX_CONTENT_LENGTH = 100_000
MAX_CODE_BLOCKS = 10
MAX_CONSECUTIVE_CODE_BLOCKS = 2
MAX_CODE_BLOCK_LENGTH = 5_000
MAX_TITLE_LENGTH = 100
MAX_SUBTITLE_LENGTH = 200
MAX_SECTIONS = 50
MAX_CONSECUTIVE_HEADERS = 2
MAX_READING_TIME = 20

_TITLE_LINE_RE = re.compile(r"^\s*#\s+\S")
_NESTED_LIST_RE = re.compile(r"^ {2,}(?:[-*+]|\d+\.)\s", re.MULTILINE)
_TABLE_RE = re.compile(r"^\s*\|.*\|\s*$", re.MULTILINE)

_GITHUB_TOKEN_RES: tuple[re.Pattern[str], ...] = (
    re.compile(r"^gh[ps]_[A-Za-z0-9_]{36,251}$"),
    re.compile(r"^github_pat_[A-Za-z0-9_]{22,255}$"),
)

# Secret-shaped strings that must never be published in a public gist.
_SENSITIVE_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("API key", re.compile(r"\b(?:sk|pk|rk)-(?:[A-Za-z0-9_-]+-)?[A-Za-z0-9]{20,}")),
    ("AWS access key", re.compile(r"\b(?:AKIA|ASIA)[0-9A-Z]{16}\b")),
    ("GitHub token", re.compile(r"\b(?:gh[pousr]_[A-Za-z0-9]{30,}|github_pat_[A-Za-z0-9_]{22,})")),
    ("Google API key", re.compile(r"\bAIza[0-9A-Za-z_-]{35}")),
    ("Slack token", re.compile(r"\bxox[abprs]-[A-Za-z0-9-]{10,}")),
    ("private key", re.compile(r"-----BEGIN (?:[A-Z]+ )?PRIVATE KEY-----")),
    ("encoded secret", re.compile(r"[A-Za-z0-9+/]{40,}={0,2}")),
    ("IP address", re.compile(r"\b(?:(?:25[0-5]|2[0-4]\d|1?\d?\d)\.){3}(?:25[0-5]|2[0-4]\d|1?\d?\d)\b")),
    ("email address", re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b")),
)


def is_github_token(token: str | None) -> bool:
    """Return True if *token* matches a GitHub personal or app token format."""
    if not token:
        return False
    return any(pattern.match(token) for pattern in _GITHUB_TOKEN_RES)


def _count_consecutive_runs(code_blocks: list[CodeBlock], lines: list[str]) -> int:
    """Count runs of more than MAX_CONSECUTIVE_CODE_BLOCKS adjacent fences.

    Two fences are adjacent when only blank lines separate them.
    """
    runs = 0
    length = 1
    for previous, block in zip(code_blocks, code_blocks[1:]):
        gap = lines[previous.end_line:block.start_line - 1]
        if all(not line.strip() for line in gap):
            length += 1
            if length == MAX_CONSECUTIVE_CODE_BLOCKS + 1:
                runs += 1
        else:
            length = 1
    return runs


def validate_content(content: str) -> ValidationResult:
    """Validate raw markdown before conversion.

    Empty or whitespace-only content is the only fatal condition.
    """
    result = ValidationResult()
    if not content or not content.strip():
        result.errors.append("Content is empty")
        return result

    if len(content) < MIN_CONTENT_LENGTH:
        result.warnings.append("Content is very short; consider adding more detail")
    if len(content) > MAX_CONTENT_LENGTH:
        result.warnings.append(
            f"Content is very long ({len(content)} characters); "
            "consider splitting it into several articles"
        )

    first_line = next((line for line in content.split("\n") if line.strip()), "")
    if not _TITLE_LINE_RE.match(first_line):
        result.warnings.append("Content does not start with a '# Title' line")

    code_blocks = extract_code_blocks(content)
    if len(code_blocks) > MAX_CODE_BLOCKS:
        result.warnings.append(
            f"Content has {len(code_blocks)} code blocks; "
            "consider externalizing them to GitHub Gists"
        )

    if _NESTED_LIST_RE.search(content):
        result.warnings.append("Nested lists will be flattened for Medium")

    if _TABLE_RE.search(content):
        result.warnings.append("Tables are not supported by Medium and will be converted to lists")

    if _count_consecutive_runs(code_blocks, content.split("\n")):
        result.warnings.append(
            "Three or more consecutive code blocks found; "
            "add explanatory text between them"
        )

    return result


def validate_credential(token: str | None) -> ValidationResult:
    """Validate the optional GitHub token.

    A missing token is valid but means no gists can be created.
    """
    result = ValidationResult()
    if not token:
        result.warnings.append("No GitHub token provided; code blocks will stay inline")
    elif not is_github_token(token):
        result.errors.append("GitHub token format is invalid")
    return result


def find_sensitive_data(code: str) -> list[str]:
    """Return the names of every secret-shaped pattern found in *code*."""
    return [name for name, pattern in _SENSITIVE_PATTERNS if pattern.search(code)]


def validate_code_blocks(code_blocks: list[CodeBlock]) -> ValidationResult:
    """Validate extracted code blocks.

    Sensitive data is fatal: the block must not be exported as-is.
    """
    result = ValidationResult()
    for number, block in enumerate(code_blocks, start=1):
        if not block.code.strip():
            result.warnings.append(f"Code block {number} is empty")
            continue
        if len(block.code) > MAX_CODE_BLOCK_LENGTH:
            result.warnings.append(
                f"Code block {number} is very long ({len(block.code)} characters)"
            )
        findings = find_sensitive_data(block.code)
        if findings:
            result.errors.append(
                f"Code block {number} (line {block.start_line}) appears to contain "
                f"sensitive data: {', '.join(findings)}"
            )
    return result


def validate_document(document: Document) -> ValidationResult:
    """Validate the built document against Medium's practical limits."""
    result = ValidationResult()
    if len(document.title) > MAX_TITLE_LENGTH:
        result.warnings.append(
            f"Title is longer than {MAX_TITLE_LENGTH} characters"
        )
    if document.subtitle and len(document.subtitle) > MAX_SUBTITLE_LENGTH:
        result.warnings.append(
            f"Subtitle is longer than {MAX_SUBTITLE_LENGTH} characters"
        )
    if len(document.sections) > MAX_SECTIONS:
        result.warnings.append(
            f"Article has {len(document.sections)} sections; "
            "Medium works best with fewer"
        )

    # The count restarts after each warning: six headers in a row warn twice.
    consecutive = 0
    for number, block in enumerate(document.sections, start=1):
        if block.type is not BlockType.HEADER:
            consecutive = 0
            continue
        consecutive += 1
        if consecutive > MAX_CONSECUTIVE_HEADERS:
            result.warnings.append(
                f"More than two consecutive headers around section {number}; "
                "add content between them"
            )
            consecutive = 0

    if document.metadata.reading_time > MAX_READING_TIME:
        result.warnings.append(
            f"Reading time is {document.metadata.reading_time} minutes; "
            f"articles over {MAX_READING_TIME} minutes lose readers"
        )
    return result
