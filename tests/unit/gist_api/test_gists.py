"""Unit tests for gist_api/gists.py."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from mediumify.errors import MediumifyGistError
from mediumify.gist_api.gists import (
    GIST_EMBED_URL,
    GistAPI,
    file_extension,
    gist_description,
    gist_filename,
)
from mediumify.models import CodeBlock

BLOCK = CodeBlock(language="python", code="print('hi')", start_line=3, end_line=5)


def make_api(response: dict | None = None) -> tuple[GistAPI, MagicMock]:
    transport = MagicMock()
    transport.request.return_value = response if response is not None else {
        "id": "abc123",
        "html_url": "https://gist.github.com/abc123",
        "description": "Code example from Medium article - python",
    }
    return GistAPI(transport), transport


class TestNaming:
    @pytest.mark.parametrize(("language", "ext"), [
        ("python", "py"),
        ("JavaScript", "js"),
        ("c++", "cpp"),
        ("bash", "sh"),
        ("yaml", "yml"),
        ("text", "txt"),
        ("brainfuck", "txt"),
    ])
    def test_file_extension(self, language, ext):
        assert file_extension(language) == ext

    def test_filename_is_one_based(self):
        assert gist_filename("python", 0) == "code-example-1.py"
        assert gist_filename("go", 4) == "code-example-5.go"

    def test_description(self):
        assert gist_description("rust") == "Code example from Medium article - rust"


class TestCreateGist:
    def test_request_body(self):
        api, transport = make_api()
        api.create_gist(BLOCK, 0, public=False)
        transport.request.assert_called_once_with(
            "POST",
            "/gists",
            json={
                "description": "Code example from Medium article - python",
                "public": False,
                "files": {"code-example-1.py": {"content": "print('hi')"}},
            },
        )

    def test_artifact_fields(self):
        api, _ = make_api()
        artifact = api.create_gist(BLOCK, 2)
        assert artifact.id == "abc123"
        assert artifact.url == "https://gist.github.com/abc123"
        assert artifact.embed_url == GIST_EMBED_URL.format(gist_id="abc123")
        assert artifact.embed_url == "https://gist.github.com/abc123.js"
        assert artifact.language == "python"
        assert artifact.block_index == 2
        assert artifact.filename == "code-example-3.py"

    @pytest.mark.parametrize("response", [
        {"html_url": "https://gist.github.com/x"},
        {"id": "x"},
        {},
    ])
    def test_incomplete_response_raises(self, response):
        api, _ = make_api(response)
        with pytest.raises(MediumifyGistError) as exc_info:
            api.create_gist(BLOCK, 1)
        assert exc_info.value.context["block_index"] == 1


class TestUpdateDeleteGist:
    def test_update(self):
        api, transport = make_api()
        artifact = api.update_gist("abc123", BLOCK, 0)
        transport.request.assert_called_once_with(
            "PATCH",
            "/gists/abc123",
            json={"files": {"code-example-1.py": {"content": "print('hi')"}}},
        )
        assert artifact.id == "abc123"

    def test_delete(self):
        api, transport = make_api({})
        assert api.delete_gist("abc123") is None
        transport.request.assert_called_once_with("DELETE", "/gists/abc123")
