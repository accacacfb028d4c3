"""Gist endpoint wrapper for the GitHub REST API.

:class:`GistAPI` creates, updates and deletes single-file gists that hold
one extracted code block each, and maps GitHub's response onto
:class:`~mediumify.models.ArtifactRef`.
"""

from __future__ import annotations

from typing import Any

from mediumify.errors import MediumifyGistError
from mediumify.models import ArtifactRef, CodeBlock

from .transport import GistTransport

GIST_EMBED_URL = "https://gist.github.com/{gist_id}.js"

_FILE_EXTENSIONS: dict[str, str] = {
    "javascript": "js",
    "js": "js",
    "typescript": "ts",
    "ts": "ts",
    "python": "py",
    "py": "py",
    "java": "java",
    "c": "c",
    "cpp": "cpp",
    "c++": "cpp",
    "csharp": "cs",
    "c#": "cs",
    "go": "go",
    "rust": "rs",
    "php": "php",
    "ruby": "rb",
    "swift": "swift",
    "kotlin": "kt",
    "scala": "scala",
    "html": "html",
    "css": "css",
    "scss": "scss",
    "json": "json",
    "xml": "xml",
    "yaml": "yml",
    "yml": "yml",
    "sql": "sql",
    "bash": "sh",
    "sh": "sh",
    "shell": "sh",
    "powershell": "ps1",
    "dockerfile": "dockerfile",
    "markdown": "md",
    "text": "txt",
}


def file_extension(language: str) -> str:
    """Map a code fence language to a file extension (``txt`` if unknown)."""
    return _FILE_EXTENSIONS.get(language.lower(), "txt")


def gist_filename(language: str, index: int) -> str:
    """Deterministic gist file name for the *index*-th code block."""
    return f"code-example-{index + 1}.{file_extension(language)}"


def gist_description(language: str) -> str:
    return f"Code example from Medium article - {language}"


class GistAPI:
    """Synchronous wrapper for the GitHub Gists API.

    Parameters
    ----------
    transport:
        A configured :class:`GistTransport` instance.
    """

    def __init__(self, transport: GistTransport) -> None:
        self._transport = transport

    def create_gist(
        self,
        code_block: CodeBlock,
        index: int,
        public: bool = True,
    ) -> ArtifactRef:
        """Create a single-file gist holding *code_block*.

        Parameters
        ----------
        code_block:
            The code to publish.
        index:
            Ordinal of *code_block* in the document; carried into
            :attr:`ArtifactRef.block_index`.
        public:
            Gist visibility.
        """
        filename = gist_filename(code_block.language, index)
        body: dict[str, Any] = {
            "description": gist_description(code_block.language),
            "public": public,
            "files": {filename: {"content": code_block.code}},
        }
        data = self._transport.request("POST", "/gists", json=body)
        return _to_artifact(data, code_block, index, filename)

    def update_gist(
        self,
        gist_id: str,
        code_block: CodeBlock,
        index: int,
    ) -> ArtifactRef:
        """Replace the file content of an existing gist."""
        filename = gist_filename(code_block.language, index)
        body: dict[str, Any] = {
            "files": {filename: {"content": code_block.code}},
        }
        data = self._transport.request("PATCH", f"/gists/{gist_id}", json=body)
        return _to_artifact(data, code_block, index, filename)

    def delete_gist(self, gist_id: str) -> None:
        """Delete a gist."""
        self._transport.request("DELETE", f"/gists/{gist_id}")


def _to_artifact(
    data: dict[str, Any],
    code_block: CodeBlock,
    index: int,
    filename: str,
) -> ArtifactRef:
    gist_id = data.get("id")
    url = data.get("html_url")
    if not gist_id or not url:
        raise MediumifyGistError(
            message="GitHub response is missing the gist id or html_url",
            context={"block_index": index, "reason": "incomplete_response"},
        )
    return ArtifactRef(
        id=gist_id,
        url=url,
        embed_url=GIST_EMBED_URL.format(gist_id=gist_id),
        language=code_block.language,
        block_index=index,
        filename=filename,
        description=data.get("description") or "",
    )
