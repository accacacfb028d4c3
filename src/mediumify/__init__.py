"""mediumify -- Markdown to Medium export pipeline.

Public re-exports
-----------------

* **Exporter:** :class:`MediumExporter`, :func:`export_content`
* **Configuration:** :class:`MediumifyConfig`
* **Errors:** Every :class:`MediumifyError` subclass and :class:`ErrorCode`
* **Models:** The content model, export options and result types

Usage::

    from mediumify import ExportFormat, MediumExporter

    result = MediumExporter().export("# Hello\\n\\nWorld", ExportFormat.OPTIMIZED)
    print(result.filename, result.content)
"""

from __future__ import annotations

# ── Configuration ───────────────────────────────────────────────────────
from mediumify.config import DEFAULT_TITLE_PLACEHOLDER, MediumifyConfig

# ── Errors ──────────────────────────────────────────────────────────────
from mediumify.errors import (
    ErrorCode,
    MediumifyAuthError,
    MediumifyCredentialError,
    MediumifyError,
    MediumifyGistError,
    MediumifyNetworkError,
    MediumifyNotFoundError,
    MediumifyPermissionError,
    MediumifyRateLimitError,
    MediumifyRetryExhaustedError,
    MediumifyUnsupportedFormatError,
    MediumifyValidationError,
)

# ── Exporter ────────────────────────────────────────────────────────────
from mediumify.exporter import MediumExporter, export_content

# ── Models ──────────────────────────────────────────────────────────────
from mediumify.models import (
    ArtifactRef,
    BlockType,
    CodeBlock,
    ContentBlock,
    Document,
    DocumentMetadata,
    ExportFormat,
    ExportOptions,
    ExportResult,
    ValidationResult,
    merge_results,
)

# ── Public surface ──────────────────────────────────────────────────────

__all__ = [
    # Exporter
    "MediumExporter",
    "export_content",
    # Configuration
    "MediumifyConfig",
    "DEFAULT_TITLE_PLACEHOLDER",
    # Error base + code enum
    "MediumifyError",
    "ErrorCode",
    # GitHub API / transport errors
    "MediumifyValidationError",
    "MediumifyAuthError",
    "MediumifyPermissionError",
    "MediumifyNotFoundError",
    "MediumifyRateLimitError",
    "MediumifyRetryExhaustedError",
    "MediumifyNetworkError",
    # Export errors
    "MediumifyCredentialError",
    "MediumifyGistError",
    "MediumifyUnsupportedFormatError",
    # Models: content
    "BlockType",
    "CodeBlock",
    "ContentBlock",
    "ArtifactRef",
    "Document",
    "DocumentMetadata",
    # Models: validation
    "ValidationResult",
    "merge_results",
    # Models: export
    "ExportFormat",
    "ExportOptions",
    "ExportResult",
]
