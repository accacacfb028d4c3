"""Medium export entry point.

:class:`MediumExporter` runs the whole pipeline for one article:

1. Validate the raw markdown and, when needed, the GitHub token.
2. Build the :class:`~mediumify.models.Document`.
3. Validate the document and its code blocks.
4. Optionally publish code blocks as gists and bind them to the document.
5. Render the requested :class:`~mediumify.models.ExportFormat`.

Usage::

    from mediumify import ExportFormat, ExportOptions, MediumExporter

    exporter = MediumExporter()
    result = exporter.export(
        markdown,
        ExportFormat.OPTIMIZED,
        ExportOptions(credential="ghp_...", create_artifacts=True),
    )
    if result.success:
        Path(result.filename).write_text(result.content)

``export`` never raises: fatal validation and unexpected failures are
returned as ``ExportResult(success=False, error=...)``.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import Any

import httpx

from mediumify.config import MediumifyConfig
from mediumify.converter.formatter import MediumFormatter, bind_artifacts
from mediumify.converter.html_renderer import (
    SECTION_DELIMITER,
    render_optimized,
    render_plain_text,
    render_rich_document,
    render_sections,
)
from mediumify.errors import MediumifyError, MediumifyUnsupportedFormatError
from mediumify.gist_api import GistAPI, GistTransport, RequestSpacer, publish_code_blocks
from mediumify.models import (
    ArtifactRef,
    Document,
    ExportFormat,
    ExportOptions,
    ExportResult,
    ValidationResult,
    merge_results,
)
from mediumify.observability import NoopMetricsHook, get_logger
from mediumify.utils.filename import generate_filename
from mediumify.validation import (
    validate_code_blocks,
    validate_content,
    validate_credential,
    validate_document,
)

log = get_logger("mediumify.exporter")

FILENAME_SUFFIXES: dict[ExportFormat, str] = {
    ExportFormat.OPTIMIZED: "_medium_ready.html",
    ExportFormat.SECTIONS: "_sections.html",
    ExportFormat.RICH_HTML: "_rich.html",
    ExportFormat.PLAIN_TEXT: "_medium.txt",
}


def _coerce_format(value: ExportFormat | str) -> ExportFormat:
    try:
        return ExportFormat(value)
    except ValueError:
        raise MediumifyUnsupportedFormatError(
            message=f"Unsupported export format: {value!r}",
            context={
                "format": str(value),
                "supported": [f.value for f in ExportFormat],
            },
        ) from None


class MediumExporter:
    """Convert markdown articles into Medium-ready output.

    Parameters
    ----------
    config:
        Package configuration.  Defaults to :class:`MediumifyConfig()`.
    http_transport:
        Optional ``httpx`` transport for the GitHub client, e.g.
        :class:`httpx.MockTransport` in tests.
    clock, sleep:
        Time source for gist request pacing; *sleep* also serves retry
        backoff.
    """

    def __init__(
        self,
        config: MediumifyConfig | None = None,
        *,
        http_transport: httpx.BaseTransport | None = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._config = config or MediumifyConfig()
        self._http_transport = http_transport
        self._clock = clock
        self._sleep = sleep
        self._formatter = MediumFormatter(self._config)
        self._metrics = (
            self._config.metrics if self._config.metrics is not None else NoopMetricsHook()
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def export(
        self,
        content: str,
        format: ExportFormat | str = ExportFormat.OPTIMIZED,
        options: ExportOptions | None = None,
    ) -> ExportResult:
        """Export *content* in *format*.

        Parameters
        ----------
        content:
            Raw markdown.  The first ``# `` heading becomes the title.
        format:
            An :class:`ExportFormat` or its string value.
        options:
            Per-call options (GitHub token, gist creation, visibility).

        Returns
        -------
        ExportResult
            ``success`` is ``False`` when validation found a fatal error
            or the export failed; ``validation`` always carries warnings.
        """
        options = options or ExportOptions()
        t0 = time.monotonic()
        try:
            result = self._export(content, format, options)
        except MediumifyError as exc:
            log.warning(
                "Export failed",
                extra={
                    "extra_fields": {
                        "op": "export",
                        "format": str(getattr(format, "value", format)),
                        "error_code": getattr(exc.code, "value", exc.code),
                        "error": exc.message,
                    }
                },
            )
            result = ExportResult(format=format, error=exc.message)
        except Exception as exc:
            log.exception(
                "Unexpected export failure",
                extra={"extra_fields": {"op": "export"}},
            )
            result = ExportResult(format=format, error=f"Export failed: {exc}")

        tags = {
            "format": str(getattr(result.format, "value", result.format)),
            "status": "success" if result.success else "failure",
        }
        self._metrics.increment("mediumify.exports_total", tags=tags)
        self._metrics.timing(
            "mediumify.export_duration_ms", (time.monotonic() - t0) * 1000, tags=tags,
        )
        return result

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------

    def _export(
        self,
        content: str,
        format: ExportFormat | str,
        options: ExportOptions,
    ) -> ExportResult:
        export_format = _coerce_format(format)

        # 1. Raw content; an empty article stops here
        content_check = validate_content(content)
        if not content_check.is_valid:
            return self._failed(export_format, content_check)

        # 2. Token format, only when one is given or gists are wanted
        checks = [content_check]
        if options.credential is not None or options.create_artifacts:
            credential_check = validate_credential(options.credential)
            checks.append(credential_check)
            if not credential_check.is_valid:
                return self._failed(export_format, merge_results(*checks))

        # 3. Build and validate the document
        document = self._formatter.convert(content)
        checks.append(validate_document(document))
        checks.append(validate_code_blocks(document.code_blocks))
        validation = merge_results(*checks)
        if not validation.is_valid:
            return self._failed(export_format, validation)

        # 4. Externalize code blocks
        artifacts: list[ArtifactRef] = []
        if options.create_artifacts and options.credential and document.code_blocks:
            artifacts, gist_warnings = self._publish(document, options)
            validation.warnings.extend(gist_warnings)
            document = bind_artifacts(document, artifacts)

        if validation.warnings:
            self._metrics.increment(
                "mediumify.validation_warnings_total",
                value=len(validation.warnings),
            )

        # 5. Render
        result = self._render(document, export_format)
        result.artifacts = artifacts or None
        result.validation = validation
        log.info(
            "Export complete",
            extra={
                "extra_fields": {
                    "op": "export",
                    "format": export_format.value,
                    "sections": len(document.sections),
                    "code_blocks": len(document.code_blocks),
                    "gists": len(artifacts),
                    "warnings": len(validation.warnings),
                }
            },
        )
        return result

    def _publish(
        self,
        document: Document,
        options: ExportOptions,
    ) -> tuple[list[ArtifactRef], list[str]]:
        public = self._config.gist_public if options.public is None else options.public
        spacer = RequestSpacer(
            self._config.gist_min_interval, clock=self._clock, sleep=self._sleep,
        )
        with GistTransport(
            self._config,
            options.credential,
            http_transport=self._http_transport,
            sleep=self._sleep,
        ) as transport:
            return publish_code_blocks(
                GistAPI(transport),
                document.code_blocks,
                spacer,
                public=public,
                metrics=self._metrics,
            )

    def _render(self, document: Document, export_format: ExportFormat) -> ExportResult:
        filename = generate_filename(document.title) + FILENAME_SUFFIXES[export_format]
        sections: list[str] | None = None
        if export_format is ExportFormat.OPTIMIZED:
            content = render_optimized(document)
        elif export_format is ExportFormat.SECTIONS:
            sections = render_sections(document)
            content = SECTION_DELIMITER.join(sections)
        elif export_format is ExportFormat.RICH_HTML:
            content = render_rich_document(document)
        else:
            content = render_plain_text(document)
        return ExportResult(
            format=export_format,
            content=content,
            filename=filename,
            sections=sections,
            success=True,
        )

    def _failed(self, export_format: ExportFormat, validation: ValidationResult) -> ExportResult:
        log.warning(
            "Export aborted by validation",
            extra={
                "extra_fields": {
                    "op": "export",
                    "format": export_format.value,
                    "errors": len(validation.errors),
                }
            },
        )
        return ExportResult(
            format=export_format,
            success=False,
            error="; ".join(validation.errors),
            validation=validation,
        )


def export_content(
    content: str,
    format: ExportFormat | str = ExportFormat.OPTIMIZED,
    options: ExportOptions | None = None,
    config: MediumifyConfig | None = None,
    **kwargs: Any,
) -> ExportResult:
    """One-shot :meth:`MediumExporter.export`; *kwargs* go to the exporter."""
    return MediumExporter(config, **kwargs).export(content, format, options)
