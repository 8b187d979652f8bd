"""Helpers for safe debug logging.

Conference URLs routinely carry credentials (``jwt=...``) and the state
tree may hold tokens handed over by the embedding application.  This module
redacts such values before they are emitted in DEBUG logs.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from typing import Any

_SENSITIVE_VALUE_KEYS: frozenset[str] = frozenset(
    {
        "jwt",
        "token",
        "accesstoken",
        "refreshtoken",
        "password",
        "authorization",
        "cookie",
        "secret",
    }
)

# ``name=value`` pairs inside a query string or fragment.
_URL_PARAM_RE = re.compile(r"(?P<prefix>[?#&])(?P<name>[^=&#]+)=(?P<value>[^&#]*)")


def redact_url(url: str) -> str:
    """Return *url* with the values of sensitive parameters replaced."""

    def _replace(match: re.Match[str]) -> str:
        name = match.group("name")
        if name.lower() in _SENSITIVE_VALUE_KEYS:
            return f"{match.group('prefix')}{name}=<redacted>"
        return match.group(0)

    return _URL_PARAM_RE.sub(_replace, url)


def redact_for_log(value: Any, *, max_string: int = 512, _depth: int = 0) -> Any:
    """Return a redacted copy of *value* suitable for debug logs."""
    if _depth > 20:
        return "<max-depth>"

    if value is None:
        return None

    if isinstance(value, str):
        if "=" in value and ("?" in value or "#" in value):
            value = redact_url(value)
        if len(value) > max_string:
            return f"{value[:max_string]}…<truncated>"
        return value

    if isinstance(value, (int, float, bool)):
        return value

    if isinstance(value, Mapping):
        redacted: dict[str, Any] = {}
        for k, v in value.items():
            key = str(k)
            if key.lower() in _SENSITIVE_VALUE_KEYS:
                redacted[key] = "<redacted>"
            else:
                redacted[key] = redact_for_log(v, max_string=max_string, _depth=_depth + 1)
        return redacted

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return [redact_for_log(v, max_string=max_string, _depth=_depth + 1) for v in value]

    # Pydantic models and other objects: log their public dump when available.
    dump = getattr(value, "model_dump", None)
    if callable(dump):
        return redact_for_log(dump(), max_string=max_string, _depth=_depth + 1)

    return repr(value)
