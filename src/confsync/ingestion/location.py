"""Device preferences carried by the conference location URL.

A link such as ``https://meet.example.org/room#devices.audioInput="mic7"``
asks the client to preselect a media device.  This module reads those
parameters and turns them into a :class:`~confsync.models.devices.DeviceSelection`.

Device ids are opaque: they are read from the raw percent-decoded parameter
text and only unwrapped when written as a JSON string.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from confsync._redact import redact_for_log
from confsync.models.devices import DeviceSelection
from confsync.models.state import AppState
from confsync.urlparams import DEFAULT_SOURCES, parse_url_params

_logger = logging.getLogger(__name__)

# URL parameter name -> DeviceSelection field.
_DEVICE_PARAMS: tuple[tuple[str, str], ...] = (
    ("devices.audioOutput", "audio_output_device_id"),
    ("devices.videoInput", "camera_device_id"),
    ("devices.audioInput", "mic_device_id"),
)

ParamParser = Callable[..., Mapping[str, Any]]


def _device_id(value: Any) -> str | None:
    if not value:
        return None
    if not isinstance(value, str):
        return str(value)
    if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
        try:
            decoded = json.loads(value)
        except ValueError:
            return value
        if isinstance(decoded, str):
            return decoded or None
    return value


def devices_from_url_params(params: Mapping[str, Any]) -> DeviceSelection | None:
    """Build a selection from extracted URL parameters.

    Empty values are skipped.  Returns ``None`` when no device parameter
    qualifies.
    """
    fields: dict[str, str] = {}
    for param, field_name in _DEVICE_PARAMS:
        device_id = _device_id(params.get(param))
        if device_id is not None:
            fields[field_name] = device_id

    if not fields:
        return None
    return DeviceSelection(**fields)


def get_devices_from_url(
    state: AppState,
    *,
    sources: Iterable[str] = DEFAULT_SOURCES,
    parse: ParamParser = parse_url_params,
) -> DeviceSelection | None:
    """Resolve the device selection requested by the current location URL."""
    location_url = state.connection.location_url
    params = parse(location_url, sources=sources, dont_parse=True)
    _logger.debug(
        "Location url=%s params=%s",
        redact_for_log(location_url),
        redact_for_log(params),
    )
    return devices_from_url_params(params)
