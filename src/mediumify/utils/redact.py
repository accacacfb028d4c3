"""Token / payload redaction for safe logging.

Before any GitHub API payload is written to logs or debug dumps the
:func:`redact` function must be applied.  It enforces the following rules:

* **Authorization headers** (``token <tok>`` or ``Bearer <tok>``) are masked.
* **GitHub tokens** (``ghp_``, ``ghs_``, ``github_pat_`` ...) are scrubbed
  from every string value, known or not.
* **Gist file contents** are replaced with ``<content:N_chars>``; the code
  itself is in the source document and only bloats the dump.
* The full *token* is never present in the output.
"""

from __future__ import annotations

import copy
import re
from typing import Any

_AUTH_SCHEME_RE = re.compile(r"\b((?:token|Bearer)\s+)\S+", re.IGNORECASE)
_GITHUB_TOKEN_RE = re.compile(r"\b(?:gh[pousr]_|github_pat_)[A-Za-z0-9_]{10,}")

# If any of these appear in a key name (case-insensitive), the value is
# redacted.
_SENSITIVE_KEY_PATTERNS: frozenset[str] = frozenset({
    "token",
    "secret",
    "password",
    "credential",
    "authorization",
    "cookie",
})


def _mask_token(value: str, token: str | None) -> str:
    """Replace auth strings in *value* with a safe placeholder."""
    if token and token in value:
        suffix = token[-4:] if len(token) >= 4 else "****"
        placeholder = f"<redacted:...{suffix}>"
        if token in placeholder:
            placeholder = "<redacted>"
        value = value.replace(token, placeholder)
    value = _AUTH_SCHEME_RE.sub(lambda m: f"{m.group(1)}<redacted>", value)
    return _GITHUB_TOKEN_RE.sub("<redacted>", value)


def _redact_files(files: Any) -> Any:
    if not isinstance(files, dict):
        return files
    result: dict = {}
    for name, entry in files.items():
        if isinstance(entry, dict) and isinstance(entry.get("content"), str):
            entry = {**entry, "content": f"<content:{len(entry['content'])}_chars>"}
        result[name] = entry
    return result


def _redact_value(value: Any, token: str | None) -> Any:
    if isinstance(value, dict):
        return _redact_dict(value, token)
    if isinstance(value, list):
        return [_redact_value(item, token) for item in value]
    if isinstance(value, str):
        return _mask_token(value, token)
    if isinstance(value, (bytes, bytearray)):
        return f"<binary:{len(value)}_bytes>"
    return value


def _redact_dict(d: dict, token: str | None) -> dict:
    result: dict = {}
    for key, value in d.items():
        key_lower = key.lower() if isinstance(key, str) else ""
        if key_lower == "files":
            value = _redact_files(value)
        if any(pat in key_lower for pat in _SENSITIVE_KEY_PATTERNS):
            if isinstance(value, str):
                result[key] = _mask_token(value, token)
            else:
                result[key] = "<redacted>"
        else:
            result[key] = _redact_value(value, token)
    return result


def redact(payload: dict, token: str | None = None) -> dict:
    """Return a deep copy of *payload* with sensitive data redacted.

    Parameters
    ----------
    payload:
        The dictionary to sanitize (a request/response dump or headers).
    token:
        The GitHub token.  If supplied, any occurrence of this exact string
        is replaced with a placeholder showing its last four characters.

    Returns
    -------
    dict
        A new dictionary; *payload* is never mutated.

    Examples
    --------
    >>> redact({"Authorization": "token ghp_abc"})
    {'Authorization': 'token <redacted>'}
    """
    safe = copy.deepcopy(payload)
    return _redact_dict(safe, token)
