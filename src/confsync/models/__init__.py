"""Data models for state slices and derived records."""

from confsync.models._base import ConfsyncBaseModel
from confsync.models.devices import DeviceSelection
from confsync.models.state import (
    LOCAL_MARKER,
    AppState,
    ConferenceState,
    ConnectionState,
    ParticipantRecord,
    ParticipantsState,
    PartialSettings,
    SettingsState,
    get_local_participant,
)

__all__ = [
    "LOCAL_MARKER",
    "AppState",
    "ConferenceState",
    "ConfsyncBaseModel",
    "ConnectionState",
    "DeviceSelection",
    "ParticipantRecord",
    "ParticipantsState",
    "PartialSettings",
    "SettingsState",
    "get_local_participant",
]
