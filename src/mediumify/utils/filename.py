"""Suggested output file names."""

from __future__ import annotations

import re

_UNSAFE_RE = re.compile(r"[^a-z0-9\s-]")
_WHITESPACE_RE = re.compile(r"\s+")

MAX_FILENAME_LENGTH = 50
FALLBACK_FILENAME = "article"


def generate_filename(title: str) -> str:
    """Derive a file-system-safe stem from an article title.

    The title is lower-cased, stripped of everything except ASCII letters,
    digits, whitespace and hyphens, and whitespace runs become ``_``.

    >>> generate_filename("Hello, World! 2024")
    'hello_world_2024'
    """
    stem = _UNSAFE_RE.sub("", title.lower()).strip()
    stem = _WHITESPACE_RE.sub("_", stem)[:MAX_FILENAME_LENGTH]
    return stem or FALLBACK_FILENAME
