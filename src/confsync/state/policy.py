"""Cross-feature consistency rules for settings.

Pure functions only: no dispatching and no state access.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from confsync.models.state import ParticipantRecord

START_AUDIO_ONLY = "startAudioOnly"

# Settings fields whose participant field has a different name.
_SETTINGS_TO_PARTICIPANT_FIELDS: dict[str, str] = {
    "displayName": "name",
}


def map_settings_field_to_participant(settings_field: str) -> str:
    """Return the participant field name for *settings_field*.

    Names missing from the table map to themselves.
    """
    return _SETTINGS_TO_PARTICIPANT_FIELDS.get(settings_field, settings_field)


def audio_only_from_settings(settings: Mapping[str, Any]) -> bool | None:
    """Return the requested audio-only value, or ``None`` when not requested.

    Only a real boolean counts; ``"true"``, ``1`` or ``None`` do not.
    """
    value = settings.get(START_AUDIO_ONLY)
    if isinstance(value, bool):
        return value
    return None


def merge_settings_into_participant(
    participant: Mapping[str, Any] | None,
    settings: Mapping[str, Any],
) -> ParticipantRecord:
    """Return a new participant record with *settings* applied on top.

    The input record is never modified.  Keys are applied in the settings'
    insertion order and overwrite existing values.
    """
    merged: ParticipantRecord = dict(participant) if participant else {}
    for key, value in settings.items():
        merged[map_settings_field_to_participant(key)] = value
    return merged
