"""Application state slices.

Every slice is an immutable snapshot.  Reducers replace slices wholesale with
``model_copy(update=...)``; nothing mutates a snapshot after it is published
by the store.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

PartialSettings = dict[str, Any]
"""Only the settings fields being changed, keyed by settings field name."""

ParticipantRecord = dict[str, Any]
"""A participant's fields, keyed by participant field name."""

LOCAL_MARKER = "local"
"""Field flagging the record that represents the current user."""


class ConnectionState(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    location_url: str | None = None


class SettingsState(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    values: dict[str, Any] = Field(default_factory=dict)


class ConferenceState(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    audio_only: bool = False
    audio_only_from_settings: bool = False


class ParticipantsState(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    records: tuple[ParticipantRecord, ...] = ()


class AppState(BaseModel):
    """Root of the state tree."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    connection: ConnectionState = Field(default_factory=ConnectionState)
    settings: SettingsState = Field(default_factory=SettingsState)
    conference: ConferenceState = Field(default_factory=ConferenceState)
    participants: ParticipantsState = Field(default_factory=ParticipantsState)


def get_local_participant(state: AppState) -> ParticipantRecord | None:
    """Return the local participant's stored record, or ``None``."""
    for record in state.participants.records:
        if record.get(LOCAL_MARKER):
            return record
    return None
