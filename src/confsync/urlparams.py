"""URL parameter extraction.

Conference links carry configuration overrides as ``name=value`` pairs in the
query string and, more commonly, in the fragment::

    https://meet.example.org/room#config.startAudioOnly=true&devices.audioInput="mic7"

Values are JSON-decoded when they parse as JSON, which lets links express
booleans and numbers.  Anything else is kept as the (percent-decoded) string.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from typing import Any
from urllib.parse import unquote, urlsplit

from confsync._redact import redact_url

_logger = logging.getLogger(__name__)

DEFAULT_SOURCES: tuple[str, ...] = ("search", "hash")


def _decode_value(value: str, *, dont_parse: bool) -> Any:
    decoded = unquote(value)
    if dont_parse:
        return decoded
    try:
        return json.loads(decoded)
    except (ValueError, RecursionError):
        # Deeply nested arrays exhaust the decoder's recursion limit.
        return decoded


def parse_param_string(raw: str, *, dont_parse: bool = False) -> dict[str, Any]:
    """Parse an ``a=1&b=2`` style string into a dict.

    Later occurrences of a name win.  Parameters with an empty name are
    skipped; a parameter without ``=`` maps to an empty string.
    """
    params: dict[str, Any] = {}
    for part in raw.lstrip("?#").split("&"):
        if not part:
            continue
        name, _, value = part.partition("=")
        name = unquote(name).strip()
        if not name:
            continue
        params[name] = _decode_value(value, dont_parse=dont_parse)
    return params


def parse_url_params(
    url: str | None,
    *,
    dont_parse: bool = False,
    sources: Iterable[str] = DEFAULT_SOURCES,
) -> dict[str, Any]:
    """Return the parameters of *url* as a flat mapping.

    ``sources`` lists the URL parts to read, ``"search"`` (query string) and/or
    ``"hash"`` (fragment), in increasing precedence.  A missing or unparsable
    URL yields an empty mapping; this function never raises for bad input.
    """
    if not url:
        return {}

    try:
        parts = urlsplit(str(url))
    except ValueError:
        _logger.debug("Ignoring unparsable location url=%s", redact_url(str(url)))
        return {}

    params: dict[str, Any] = {}
    for source in sources:
        if source == "search":
            params.update(parse_param_string(parts.query, dont_parse=dont_parse))
        elif source == "hash":
            params.update(parse_param_string(parts.fragment, dont_parse=dont_parse))
    return params
