"""mediumify.gist_api -- GitHub Gist client used to externalize code blocks.

This sub-package provides:

* :mod:`.rate_limit` -- minimum-spacing request pacing.
* :mod:`.retries` -- GitHub retry policy, rate-limit headers and backoff.
* :mod:`.transport` -- HTTP transport with auth and retries.
* :mod:`.gists` -- gist create/update/delete wrappers.
* :mod:`.publisher` -- batch creation with partial-failure tolerance.
"""

from __future__ import annotations

from .gists import GistAPI, file_extension, gist_filename
from .publisher import publish_code_blocks
from .rate_limit import RequestSpacer
from .retries import RetryPolicy, server_delay
from .transport import GistTransport

__all__ = [
    "GistAPI",
    "GistTransport",
    "RequestSpacer",
    "RetryPolicy",
    "file_extension",
    "gist_filename",
    "publish_code_blocks",
    "server_delay",
]
