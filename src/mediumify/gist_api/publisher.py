"""Batch gist creation with pacing and partial-failure tolerance.

:func:`publish_code_blocks` creates one gist per code block, strictly in
order, waiting on a :class:`RequestSpacer` before each request.  A block
whose gist cannot be created is skipped: the failure is logged, counted,
and returned as a warning string, and the remaining blocks are still
published.
"""

from __future__ import annotations

from typing import Any

from mediumify.errors import MediumifyError
from mediumify.models import ArtifactRef, CodeBlock
from mediumify.observability import NoopMetricsHook, get_logger

from .rate_limit import RequestSpacer

log = get_logger("mediumify.gist")


def publish_code_blocks(
    gist_api: Any,
    code_blocks: list[CodeBlock],
    spacer: RequestSpacer,
    public: bool = True,
    metrics: Any | None = None,
) -> tuple[list[ArtifactRef], list[str]]:
    """Create a gist for every block in *code_blocks*.

    Parameters
    ----------
    gist_api:
        A :class:`~mediumify.gist_api.gists.GistAPI` (or compatible object).
    code_blocks:
        Blocks in document order; each artifact's ``block_index`` is the
        block's position in this list.
    spacer:
        Pacing for consecutive requests.
    public:
        Gist visibility.
    metrics:
        Optional metrics hook.

    Returns
    -------
    tuple[list[ArtifactRef], list[str]]
        (artifacts, warnings).  Fewer artifacts than blocks means some
        creations failed; each failure has one warning.
    """
    metrics = metrics if metrics is not None else NoopMetricsHook()
    artifacts: list[ArtifactRef] = []
    warnings: list[str] = []

    for index, block in enumerate(code_blocks):
        wait = spacer.acquire()
        if wait > 0:
            metrics.timing("mediumify.gist_wait_ms", wait * 1000)

        try:
            artifact = gist_api.create_gist(block, index, public=public)
        except MediumifyError as exc:
            code = getattr(exc.code, "value", exc.code)
            warnings.append(_record_failure(metrics, block, index, code, exc.message))
            continue
        except Exception as exc:
            # Per-block failures never abort the batch.
            warnings.append(_record_failure(
                metrics, block, index, "UNEXPECTED", str(exc) or type(exc).__name__,
                exc_info=True,
            ))
            continue

        metrics.increment("mediumify.gists_created_total")
        log.info(
            "Gist created",
            extra={
                "extra_fields": {
                    "op": "create_gist",
                    "block_index": index,
                    "gist_id": artifact.id,
                }
            },
        )
        artifacts.append(artifact)

    return artifacts, warnings


def _record_failure(
    metrics: Any,
    block: CodeBlock,
    index: int,
    code: str,
    message: str,
    exc_info: bool = False,
) -> str:
    """Log and count one failed block; return its user-facing warning."""
    metrics.increment("mediumify.gist_failures_total", tags={"code": code})
    log.warning(
        "Gist creation failed; keeping code inline",
        extra={
            "extra_fields": {
                "op": "create_gist",
                "block_index": index,
                "language": block.language,
                "error_code": code,
                "error": message,
            }
        },
        exc_info=exc_info,
    )
    return (
        f"Code block {index + 1} ({block.language}) could not be "
        f"converted to a GitHub Gist: {message}"
    )
