"""Reducers: ``(state, event) -> state``.

Each reducer returns the same snapshot object when the event does not concern
its slice, so the store can tell whether anything changed.
"""

from __future__ import annotations

import logging

from confsync.models.state import LOCAL_MARKER, AppState, ParticipantRecord
from confsync.state.events import (
    AudioOnlySet,
    BaseEvent,
    LocationSet,
    ParticipantUpdated,
    SettingsUpdated,
    SettingsUpdateRequested,
)

_logger = logging.getLogger(__name__)


def _matches(existing: ParticipantRecord, incoming: ParticipantRecord) -> bool:
    if incoming.get(LOCAL_MARKER):
        return bool(existing.get(LOCAL_MARKER))
    incoming_id = incoming.get("id")
    return incoming_id is not None and existing.get("id") == incoming_id


def reduce_connection(state: AppState, event: BaseEvent) -> AppState:
    if not isinstance(event, LocationSet):
        return state
    connection = state.connection.model_copy(update={"location_url": event.location_url})
    return state.model_copy(update={"connection": connection})


def reduce_settings(state: AppState, event: BaseEvent) -> AppState:
    if not isinstance(event, (SettingsUpdated, SettingsUpdateRequested)):
        return state
    if not event.settings:
        return state
    values = {**state.settings.values, **event.settings}
    settings = state.settings.model_copy(update={"values": values})
    return state.model_copy(update={"settings": settings})


def reduce_conference(state: AppState, event: BaseEvent) -> AppState:
    if not isinstance(event, AudioOnlySet):
        return state
    conference = state.conference.model_copy(
        update={"audio_only": event.value, "audio_only_from_settings": event.from_settings}
    )
    return state.model_copy(update={"conference": conference})


def reduce_participants(state: AppState, event: BaseEvent) -> AppState:
    """Replace the matching participant record.

    Local records match on the local marker, remote ones on ``id``.  The
    incoming record replaces the stored one as a whole.
    """
    if not isinstance(event, ParticipantUpdated):
        return state

    incoming = dict(event.participant)
    records = list(state.participants.records)
    for index, existing in enumerate(records):
        if _matches(existing, incoming):
            records[index] = incoming
            break
    else:
        _logger.debug("Ignoring update for unknown participant id=%s", incoming.get("id"))
        return state

    participants = state.participants.model_copy(update={"records": tuple(records)})
    return state.model_copy(update={"participants": participants})


_REDUCERS = (reduce_connection, reduce_settings, reduce_conference, reduce_participants)


def reduce(state: AppState, event: BaseEvent) -> AppState:
    """Run every slice reducer over *event*."""
    for reducer in _REDUCERS:
        state = reducer(state, event)
    return state
