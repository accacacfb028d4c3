"""Synchronous HTTP transport for the GitHub REST API.

The transport handles the full request lifecycle:

1. Send the HTTP request with auth, media-type and API-version headers.
2. On ``2xx`` -- return the parsed JSON object.
3. On ``429`` / ``5xx`` / dropped connection -- back off and retry as
   :class:`~mediumify.gist_api.retries.RetryPolicy` allows.
4. On non-retryable ``4xx`` -- raise the appropriate typed error.  An
   exhausted ``403`` quota raises :class:`MediumifyRateLimitError`.
5. On max attempts exceeded -- raise :class:`MediumifyRetryExhaustedError`.

Every failure leaves as a :class:`~mediumify.errors.MediumifyError`.

Pacing between gist creations is the publisher's job
(:class:`~mediumify.gist_api.rate_limit.RequestSpacer`), not the
transport's.
"""

from __future__ import annotations

import json as _json
import sys
import time
from collections.abc import Callable
from typing import Any

import httpx

from mediumify.config import MediumifyConfig
from mediumify.errors import (
    MediumifyAuthError,
    MediumifyCredentialError,
    MediumifyGistError,
    MediumifyNetworkError,
    MediumifyNotFoundError,
    MediumifyPermissionError,
    MediumifyRateLimitError,
    MediumifyRetryExhaustedError,
    MediumifyValidationError,
)
from mediumify.observability import NoopMetricsHook, get_logger
from mediumify.validation import is_github_token

from .retries import RetryPolicy, is_rate_limited, server_delay

log = get_logger("mediumify.transport")

GITHUB_MEDIA_TYPE = "application/vnd.github+json"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _raise_for_status(
    response: httpx.Response,
    method: str,
    path: str,
    now: Callable[[], float] = time.time,
) -> None:
    """Raise the :class:`MediumifyError` subclass for a non-retryable 4xx."""
    status = response.status_code
    try:
        body = response.json()
    except ValueError:
        body = {}
    if not isinstance(body, dict):
        body = {}

    github_message = body.get("message", response.text[:500])

    if status in (400, 422):
        raise MediumifyValidationError(
            message=f"Validation error on {method} {path}: {github_message}",
            context={"status_code": status, "body": body},
        )
    if status == 401:
        raise MediumifyAuthError(
            message=f"Authentication failed on {method} {path}: {github_message}",
            context={"status_code": status},
        )
    if status == 403:
        if is_rate_limited(response, github_message):
            raise MediumifyRateLimitError(
                message=f"Rate limited on {method} {path}: {github_message}",
                context={
                    "status_code": status,
                    "reset_at": response.headers.get("x-ratelimit-reset"),
                    "retry_after": server_delay(response, now),
                },
            )
        raise MediumifyPermissionError(
            message=f"Permission denied on {method} {path}: {github_message}",
            context={"status_code": status, "operation": f"{method} {path}"},
        )
    if status == 404:
        raise MediumifyNotFoundError(
            message=f"Resource not found on {method} {path}: {github_message}",
            context={"status_code": status, "path": path},
        )

    raise MediumifyValidationError(
        message=f"Client error {status} on {method} {path}: {github_message}",
        context={"status_code": status, "body": body},
    )


def _parse_body(response: httpx.Response, method: str, path: str) -> dict:
    """Decode a 2xx body, which GitHub always sends as a JSON object."""
    if response.status_code == 204 or not response.content:
        return {}
    try:
        body = response.json()
    except ValueError as exc:
        raise MediumifyGistError(
            message=f"GitHub returned a non-JSON body on {method} {path}",
            context={"status_code": response.status_code, "reason": "malformed_response"},
            cause=exc,
        ) from exc
    if not isinstance(body, dict):
        raise MediumifyGistError(
            message=f"GitHub returned {type(body).__name__} instead of an object on {method} {path}",
            context={"status_code": response.status_code, "reason": "malformed_response"},
        )
    return body


def _dump_payload(
    method: str,
    url: str,
    payload: dict | None,
    response_status: int | None,
    response_body: Any | None,
    token: str | None = None,
) -> None:
    """Write a redacted debug dump of the request/response to stderr."""
    from mediumify.utils.redact import redact

    dump: dict[str, Any] = {
        "method": method,
        "url": url,
    }
    if payload is not None:
        dump["request_body"] = payload
    if response_status is not None:
        dump["response_status"] = response_status
    if response_body is not None:
        dump["response_body"] = response_body
    safe_dump = redact(dump, token)
    print(
        _json.dumps(safe_dump, indent=2, default=str),
        file=sys.stderr,
    )


# ---------------------------------------------------------------------------
# Transport
# ---------------------------------------------------------------------------

class GistTransport:
    """HTTP transport for the GitHub REST API with auth and retries.

    Parameters
    ----------
    config:
        A :class:`MediumifyConfig` controlling timeouts and retries.
    token:
        GitHub token (classic ``ghp_``/``ghs_`` or fine-grained
        ``github_pat_``).  Checked before any connection is opened.
    http_transport:
        Optional ``httpx`` transport, e.g. :class:`httpx.MockTransport`.
    sleep:
        Called with each retry delay.
    now:
        Wall-clock time in epoch seconds, for ``x-ratelimit-reset``.

    Raises
    ------
    MediumifyCredentialError
        If *token* does not look like a GitHub token.
    """

    def __init__(
        self,
        config: MediumifyConfig,
        token: str,
        *,
        http_transport: httpx.BaseTransport | None = None,
        sleep: Callable[[float], None] = time.sleep,
        now: Callable[[], float] = time.time,
    ) -> None:
        if not is_github_token(token):
            suffix = token[-4:] if token and len(token) >= 4 else "****"
            raise MediumifyCredentialError(
                message="GitHub token format is invalid",
                context={"token_suffix": suffix},
            )

        self._config = config
        self._token = token
        self._policy = RetryPolicy.from_config(config)
        self._sleep = sleep
        self._now = now
        self._metrics = config.metrics if config.metrics is not None else NoopMetricsHook()
        self._client = httpx.Client(
            base_url=config.github_api_url,
            headers={
                "Authorization": f"token {token}",
                "Accept": GITHUB_MEDIA_TYPE,
                "X-GitHub-Api-Version": config.github_api_version,
            },
            timeout=httpx.Timeout(config.timeout_seconds),
            proxy=config.http_proxy,
            transport=http_transport,
        )

    def request(self, method: str, path: str, **kwargs: Any) -> dict:
        """Execute an HTTP request against the GitHub API.

        Parameters
        ----------
        method:
            HTTP method (``GET``, ``POST``, ``PATCH``, ``DELETE``).
        path:
            API path relative to ``github_api_url`` (e.g. ``/gists``).
        **kwargs:
            Forwarded to :meth:`httpx.Client.request`.

        Returns
        -------
        dict
            Parsed JSON response body (``{}`` for empty responses).

        Raises
        ------
        MediumifyAuthError
            On 401 responses.
        MediumifyPermissionError
            On 403 responses that are not rate limits.
        MediumifyRateLimitError
            On 403 responses caused by an exhausted quota.
        MediumifyNotFoundError
            On 404 responses.
        MediumifyValidationError
            On 400/422 and other non-retryable 4xx responses.
        MediumifyGistError
            On a 2xx response whose body is not a JSON object.
        MediumifyRetryExhaustedError
            When every attempt hit a retryable status.
        MediumifyNetworkError
            On transport-level failures that cannot be retried further.
        """
        policy = self._policy
        last_status: int | None = None
        json_payload = kwargs.get("json")

        for attempt in range(policy.max_attempts):
            t0 = time.monotonic()
            try:
                response = self._client.request(method, path, **kwargs)
            except httpx.TransportError as exc:
                self._handle_transport_error(method, path, exc, attempt)
                continue
            elapsed_ms = (time.monotonic() - t0) * 1000

            last_status = response.status_code
            tags = {"method": method, "path": path, "status": str(response.status_code)}
            self._metrics.increment("mediumify.requests_total", tags=tags)
            self._metrics.timing("mediumify.request_duration_ms", elapsed_ms, tags=tags)

            if self._config.debug_dump_payload:
                self._emit_debug_dump(method, response, json_payload)

            if 200 <= response.status_code < 300:
                return _parse_body(response, method, path)

            if not policy.retries_status(response.status_code):
                _raise_for_status(response, method, path, self._now)

            if not policy.can_retry(attempt):
                break

            requested: float | None = None
            reason = "server_error"
            if response.status_code == 429:
                requested = server_delay(response, self._now)
                reason = "rate_limited"
                self._metrics.increment(
                    "mediumify.rate_limited_total",
                    tags={"method": method, "path": path},
                )
                log.warning(
                    "Rate limited by GitHub API",
                    extra={
                        "extra_fields": {
                            "op": "request",
                            "method": method,
                            "path": path,
                            "status_code": 429,
                            "retry_after": requested,
                            "attempt": attempt + 1,
                        }
                    },
                )

            self._metrics.increment(
                "mediumify.retries_total",
                tags={"method": method, "path": path, "reason": reason},
            )
            self._sleep(policy.backoff(attempt, requested))

        raise MediumifyRetryExhaustedError(
            message=(
                f"All {policy.max_attempts} attempts exhausted for {method} {path} "
                f"(last status: {last_status})"
            ),
            context={"attempts": policy.max_attempts, "last_status_code": last_status},
        )

    def _handle_transport_error(
        self,
        method: str,
        path: str,
        exc: httpx.TransportError,
        attempt: int,
    ) -> None:
        """Sleep before the next attempt, or raise if the error is final."""
        self._metrics.increment(
            "mediumify.requests_total",
            tags={"method": method, "path": path, "status": "error"},
        )
        log.warning(
            "Request transport error",
            extra={
                "extra_fields": {
                    "op": "request",
                    "method": method,
                    "path": path,
                    "attempt": attempt + 1,
                    "error_type": type(exc).__name__,
                    "error": str(exc),
                }
            },
        )
        if not (self._policy.retries_exception(exc) and self._policy.can_retry(attempt)):
            raise MediumifyNetworkError(
                message=f"Network error on {method} {path}: {exc}",
                context={"url": path, "attempt": attempt + 1},
                cause=exc,
            ) from exc

        self._metrics.increment(
            "mediumify.retries_total",
            tags={"method": method, "path": path, "reason": "network_error"},
        )
        self._sleep(self._policy.backoff(attempt))

    def _emit_debug_dump(
        self,
        method: str,
        response: httpx.Response,
        json_payload: Any,
    ) -> None:
        try:
            resp_body = response.json()
        except ValueError:
            resp_body = response.text[:1000]
        _dump_payload(
            method, str(response.url), json_payload,
            response.status_code, resp_body,
            token=self._token,
        )

    def close(self) -> None:
        """Close the underlying HTTP client and release resources."""
        self._client.close()

    def __enter__(self) -> GistTransport:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()
