"""Settings propagation.

Distributes changes of the settings slice to the slices that are computed
from it:

* ``startAudioOnly`` drives the conference audio-only flag;
* every settings field is mirrored on the local participant record
  (``displayName`` becomes ``name``);
* device preferences found in the location URL are fed back into settings.

The rules live in :func:`follow_ups`, a generator that can be exercised
without a store.  :func:`settings_middleware` plugs them into the dispatch
pipeline.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Mapping, Sequence
from typing import Any

from confsync.config import SyncConfig
from confsync.ingestion.location import get_devices_from_url
from confsync.models.state import AppState, get_local_participant
from confsync.state.events import (
    AudioOnlySet,
    BaseEvent,
    LocationSet,
    ParticipantUpdated,
    SettingsUpdated,
    SettingsUpdateRequested,
)
from confsync.state.policy import audio_only_from_settings, merge_settings_into_participant
from confsync.state.store import Dispatch, Middleware, Store, StoreHandle
from confsync.urlparams import DEFAULT_SOURCES

_logger = logging.getLogger(__name__)


def maybe_set_audio_only(settings: Mapping[str, Any]) -> AudioOnlySet | None:
    """Return the audio-only change requested by *settings*, if any."""
    value = audio_only_from_settings(settings)
    if value is None:
        return None
    return AudioOnlySet(value=value, from_settings=True)


def update_local_participant(state: AppState, settings: Mapping[str, Any]) -> ParticipantUpdated:
    """Return the local participant record with *settings* merged in."""
    participant = merge_settings_into_participant(get_local_participant(state), settings)
    return ParticipantUpdated(participant=participant)


def follow_ups(
    get_state: Callable[[], AppState],
    event: BaseEvent,
    *,
    url_param_sources: Sequence[str] = DEFAULT_SOURCES,
) -> Iterator[BaseEvent]:
    """Yield the events that must follow *event*, in dispatch order.

    Evaluation is lazy: state is read only when the next follow-up is
    requested, so a caller that dispatches each event before asking for the
    next one sees the effects of the earlier dispatch.
    """
    if isinstance(event, LocationSet):
        devices = get_devices_from_url(get_state(), sources=url_param_sources)
        if devices is not None:
            yield SettingsUpdateRequested(settings=devices.to_partial_settings())
    elif isinstance(event, SettingsUpdated):
        audio_only = maybe_set_audio_only(event.settings)
        if audio_only is not None:
            yield audio_only
        yield update_local_participant(get_state(), event.settings)


def settings_middleware(store: StoreHandle) -> Callable[[Dispatch], Dispatch]:
    """Middleware applying :func:`follow_ups` after every event.

    The wrapped dispatch runs first and its result is returned unchanged.
    """
    sources = store.config.url_param_sources

    def wrap(next_dispatch: Dispatch) -> Dispatch:
        def dispatch(event: BaseEvent) -> Any:
            result = next_dispatch(event)
            for follow_up in follow_ups(store.get_state, event, url_param_sources=sources):
                _logger.debug("Propagating %s after %s", follow_up.kind, event.kind)
                store.dispatch(follow_up)
            return result

        return dispatch

    return wrap


def create_store(
    *,
    initial_state: AppState | None = None,
    middleware: Sequence[Middleware] = (),
    config: SyncConfig | None = None,
) -> Store:
    """Create a store with settings propagation installed.

    Extra *middleware* are placed inside the settings middleware.
    """
    return Store(
        initial_state=initial_state,
        middleware=(settings_middleware, *middleware),
        config=config,
    )
