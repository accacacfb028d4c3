"""Package configuration for mediumify.

:class:`MediumifyConfig` is a dataclass that captures every tuneable knob
of the export pipeline.  The GitHub credential is deliberately *not* part
of it: credentials travel with each export call in
:class:`~mediumify.models.ExportOptions` so that concurrent exports never
share mutable authentication state.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

DEFAULT_TITLE_PLACEHOLDER = "Untitled Article"
"""Title used when the markdown has no top-level ``# Title`` line."""


@dataclass
class MediumifyConfig:
    """Complete configuration for a :class:`~mediumify.exporter.MediumExporter`.

    Every parameter has a sensible default, so ``MediumifyConfig()`` is a
    valid configuration.

    Parameters
    ----------
    github_api_url:
        GitHub REST API root.  Override for GitHub Enterprise or testing.
    github_api_version:
        Value of the ``X-GitHub-Api-Version`` header.
    timeout_seconds:
        Per-request HTTP timeout for gist calls.
    http_proxy:
        Optional HTTP/HTTPS proxy URL.
    retry_max_attempts:
        Maximum total attempts per gist request for retryable failures
        (``429``, ``5xx``, network errors).
    retry_base_delay:
        Base delay (seconds) for exponential backoff.
    retry_max_delay:
        Upper cap (seconds) on computed backoff delay.
    retry_jitter:
        Randomly scale backoff intervals to 50-100 % of their value.
    gist_min_interval:
        Minimum spacing (seconds) between two consecutive gist creations.
        Must be positive: GitHub throttles bursts of content-creating
        requests.
    gist_public:
        Default visibility for created gists.
    title_placeholder:
        Title used when the article has no ``# Title`` line.
    max_tags:
        Maximum number of keyword tags attached to a document.
    metrics:
        Optional :class:`~mediumify.observability.MetricsHook`.
    debug_dump_payload:
        Write the (redacted) gist request/response to *stderr*.
    """

    # ── GitHub ──────────────────────────────────────────────────────────
    github_api_url: str = "https://api.github.com"

    github_api_version: str = "2022-11-28"

    # ── HTTP ────────────────────────────────────────────────────────────
    timeout_seconds: float = 15.0

    http_proxy: str | None = None

    # ── Retry & pacing ──────────────────────────────────────────────────
    retry_max_attempts: int = 3

    retry_base_delay: float = 1.0

    retry_max_delay: float = 30.0

    retry_jitter: bool = True

    gist_min_interval: float = 0.5

    gist_public: bool = True

    # ── Content model ──────────────────────────────────────────────────
    title_placeholder: str = DEFAULT_TITLE_PLACEHOLDER

    max_tags: int = 5

    # ── Observability ──────────────────────────────────────────────────
    metrics: Any | None = None

    # ── Debug ───────────────────────────────────────────────────────────
    debug_dump_payload: bool = False

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        from urllib.parse import urlparse

        parsed = urlparse(self.github_api_url)
        if parsed.scheme == "http" and parsed.hostname not in (
            "localhost",
            "127.0.0.1",
            "::1",
        ):
            raise ValueError(
                f"github_api_url uses insecure HTTP for non-local host '{parsed.hostname}'. "
                "Use HTTPS to protect your token, or target localhost for testing."
            )

        if self.retry_max_attempts < 1:
            raise ValueError(f"retry_max_attempts must be >= 1, got {self.retry_max_attempts}")
        if self.retry_base_delay < 0:
            raise ValueError(f"retry_base_delay must be >= 0, got {self.retry_base_delay}")
        if self.retry_max_delay < 0:
            raise ValueError(f"retry_max_delay must be >= 0, got {self.retry_max_delay}")
        if self.gist_min_interval <= 0:
            raise ValueError(f"gist_min_interval must be > 0, got {self.gist_min_interval}")
        if self.timeout_seconds <= 0:
            raise ValueError(f"timeout_seconds must be > 0, got {self.timeout_seconds}")
        if self.max_tags < 0:
            raise ValueError(f"max_tags must be >= 0, got {self.max_tags}")
