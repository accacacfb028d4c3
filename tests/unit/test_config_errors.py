"""Tests for config.py validation, errors.py and the ExportOptions repr."""

from __future__ import annotations

import pytest

from mediumify.config import DEFAULT_TITLE_PLACEHOLDER, MediumifyConfig
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
from mediumify.models import ExportOptions


class TestMediumifyConfig:
    def test_defaults(self):
        config = MediumifyConfig()
        assert config.github_api_url == "https://api.github.com"
        assert config.gist_min_interval > 0
        assert config.title_placeholder == DEFAULT_TITLE_PLACEHOLDER == "Untitled Article"
        assert config.max_tags == 5
        assert config.gist_public is True

    def test_http_remote_rejected(self):
        with pytest.raises(ValueError, match="insecure HTTP"):
            MediumifyConfig(github_api_url="http://api.github.com")

    @pytest.mark.parametrize("host", ["localhost", "127.0.0.1"])
    def test_http_local_allowed(self, host):
        MediumifyConfig(github_api_url=f"http://{host}:8080")

    @pytest.mark.parametrize(("field", "value"), [
        ("retry_max_attempts", 0),
        ("retry_base_delay", -1.0),
        ("retry_max_delay", -0.5),
        ("gist_min_interval", 0),
        ("timeout_seconds", 0),
        ("max_tags", -1),
    ])
    def test_invalid_values(self, field, value):
        with pytest.raises(ValueError, match=field):
            MediumifyConfig(**{field: value})


class TestErrors:
    @pytest.mark.parametrize(("cls", "code"), [
        (MediumifyValidationError, ErrorCode.VALIDATION_ERROR),
        (MediumifyAuthError, ErrorCode.AUTH_ERROR),
        (MediumifyPermissionError, ErrorCode.PERMISSION_ERROR),
        (MediumifyNotFoundError, ErrorCode.NOT_FOUND),
        (MediumifyRateLimitError, ErrorCode.RATE_LIMITED),
        (MediumifyRetryExhaustedError, ErrorCode.RETRY_EXHAUSTED),
        (MediumifyNetworkError, ErrorCode.NETWORK_ERROR),
        (MediumifyCredentialError, ErrorCode.CREDENTIAL_FORMAT),
        (MediumifyGistError, ErrorCode.GIST_ERROR),
        (MediumifyUnsupportedFormatError, ErrorCode.UNSUPPORTED_FORMAT),
    ])
    def test_codes(self, cls, code):
        err = cls(message="boom", context={"k": "v"})
        assert isinstance(err, MediumifyError)
        assert err.code == code
        assert err.code == code.value
        assert err.message == "boom"
        assert str(err) == "boom"
        assert err.context == {"k": "v"}

    def test_default_context_is_empty(self):
        assert MediumifyGistError(message="x").context == {}

    def test_cause_chained(self):
        cause = OSError("reset")
        err = MediumifyNetworkError(message="network", cause=cause)
        assert err.cause is cause
        assert err.__cause__ is cause

    def test_repr(self):
        err = MediumifyNotFoundError(message="gone", context={"path": "/gists/x"})
        text = repr(err)
        assert text.startswith("MediumifyNotFoundError(code=")
        assert "message='gone'" in text
        assert text.endswith("context={'path': '/gists/x'})")

    def test_repr_without_context(self):
        assert "context" not in repr(MediumifyGistError(message="x"))


class TestExportOptionsRepr:
    def test_credential_masked(self, token):
        text = repr(ExportOptions(credential=token, create_artifacts=True))
        assert token not in text
        assert f"credential='...{token[-4:]}'" in text
        assert "create_artifacts=True" in text

    def test_short_credential_fully_masked(self):
        assert "credential='****'" in repr(ExportOptions(credential="abc"))

    def test_no_credential(self):
        assert "credential=None" in repr(ExportOptions())
