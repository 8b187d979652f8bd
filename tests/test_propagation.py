from __future__ import annotations

from typing import Any, Literal

import pytest

from confsync.config import SyncConfig
from confsync.models.state import AppState, ConnectionState, ParticipantsState, get_local_participant
from confsync.propagation import (
    create_store,
    follow_ups,
    maybe_set_audio_only,
    settings_middleware,
    update_local_participant,
)
from confsync.state.events import (
    AudioOnlySet,
    BaseEvent,
    LocationSet,
    ParticipantUpdated,
    SettingsUpdated,
    SettingsUpdateRequested,
)
from confsync.state.store import Dispatch, Store, StoreHandle


class _ConferenceJoined(BaseEvent):
    kind: Literal["conference_joined"] = "conference_joined"


def _with_local(**fields: Any) -> AppState:
    record = {"id": "local-1", "local": True, **fields}
    return AppState(participants=ParticipantsState(records=(record,)))


class _Recorder:
    """Inner middleware recording every event that reaches the reducer."""

    def __init__(self) -> None:
        self.events: list[BaseEvent] = []

    def __call__(self, store: StoreHandle) -> Any:
        def wrap(next_dispatch: Dispatch) -> Dispatch:
            def dispatch(event: BaseEvent) -> Any:
                self.events.append(event)
                return next_dispatch(event)

            return dispatch

        return wrap


def _store(state: AppState | None = None, **kwargs: Any) -> tuple[Store, _Recorder]:
    recorder = _Recorder()
    return create_store(initial_state=state, middleware=(recorder,), **kwargs), recorder


# ---------------------------------------------------------------------------
# Reactors
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("value", [True, False])
def test_audio_only_reactor_fires_for_booleans(value: bool) -> None:
    assert maybe_set_audio_only({"startAudioOnly": value}) == AudioOnlySet(value=value, from_settings=True)


@pytest.mark.parametrize("value", ["true", 1, None])
def test_audio_only_reactor_ignores_non_booleans(value: Any) -> None:
    assert maybe_set_audio_only({"startAudioOnly": value}) is None


def test_participant_reactor_merges_into_local_record() -> None:
    state = _with_local(name="Old", email="old@example.org")

    event = update_local_participant(state, {"displayName": "X", "email": "new@example.org"})

    assert event.participant == {"id": "local-1", "local": True, "name": "X", "email": "new@example.org"}


def test_participant_reactor_copies_stored_record() -> None:
    state = _with_local(name="Old")
    stored = get_local_participant(state)

    event = update_local_participant(state, {"displayName": "X"})

    assert stored == {"id": "local-1", "local": True, "name": "Old"}
    assert event.participant is not stored


def test_participant_reactor_without_local_participant() -> None:
    event = update_local_participant(AppState(), {"displayName": "Ann"})

    assert event.participant == {"name": "Ann"}


# ---------------------------------------------------------------------------
# follow_ups
# ---------------------------------------------------------------------------


def test_follow_ups_for_settings_update_in_order() -> None:
    state = _with_local(name="Old")
    event = SettingsUpdated(settings={"startAudioOnly": True, "displayName": "Ann"})

    result = list(follow_ups(lambda: state, event))

    assert result == [
        AudioOnlySet(value=True, from_settings=True),
        ParticipantUpdated(
            participant={"id": "local-1", "local": True, "name": "Ann", "startAudioOnly": True},
        ),
    ]


def test_follow_ups_for_location_with_devices() -> None:
    state = AppState(connection=ConnectionState(location_url="https://x/?devices.audioInput=mic7"))

    result = list(follow_ups(lambda: state, LocationSet(location_url="https://x/?devices.audioInput=mic7")))

    assert result == [SettingsUpdateRequested(settings={"micDeviceId": "mic7"})]


def test_follow_ups_for_location_without_devices() -> None:
    state = AppState(connection=ConnectionState(location_url="https://x/?room=abc"))

    assert list(follow_ups(lambda: state, LocationSet(location_url="https://x/?room=abc"))) == []


def test_follow_ups_for_other_events() -> None:
    assert list(follow_ups(AppState, _ConferenceJoined())) == []
    assert list(follow_ups(AppState, AudioOnlySet(value=True))) == []


def test_follow_ups_respect_url_param_sources() -> None:
    url = "https://x/?devices.audioInput=mic7"
    state = AppState(connection=ConnectionState(location_url=url))

    assert list(follow_ups(lambda: state, LocationSet(location_url=url), url_param_sources=("hash",))) == []


# ---------------------------------------------------------------------------
# Middleware through a live store
# ---------------------------------------------------------------------------


def test_settings_update_dispatches_audio_only_then_participant() -> None:
    store, recorder = _store(_with_local(name="Old", email="me@example.org"))

    store.dispatch(SettingsUpdated(settings={"startAudioOnly": True, "displayName": "Ann"}))

    assert recorder.events[1:] == [
        AudioOnlySet(value=True, from_settings=True),
        ParticipantUpdated(
            participant={
                "id": "local-1",
                "local": True,
                "name": "Ann",
                "email": "me@example.org",
                "startAudioOnly": True,
            }
        ),
    ]
    state = store.get_state()
    assert state.conference.audio_only is True
    assert state.conference.audio_only_from_settings is True
    assert get_local_participant(state)["name"] == "Ann"
    assert state.settings.values == {"startAudioOnly": True, "displayName": "Ann"}


def test_string_audio_only_skips_audio_dispatch() -> None:
    store, recorder = _store(_with_local())

    store.dispatch(SettingsUpdated(settings={"startAudioOnly": "true"}))

    assert [event.kind for event in recorder.events] == ["settings_updated", "participant_updated"]
    assert store.get_state().conference.audio_only is False


def test_location_set_dispatches_device_settings() -> None:
    store, recorder = _store()

    store.dispatch(LocationSet(location_url="https://x/?devices.audioInput=mic7"))

    assert recorder.events == [
        LocationSet(location_url="https://x/?devices.audioInput=mic7"),
        SettingsUpdateRequested(settings={"micDeviceId": "mic7"}),
    ]
    assert store.get_state().settings.values == {"micDeviceId": "mic7"}


def test_location_set_without_devices_dispatches_nothing_more() -> None:
    store, recorder = _store()

    store.dispatch(LocationSet(location_url=None))

    assert len(recorder.events) == 1


def test_location_with_only_camera_dispatches_camera_setting() -> None:
    store, recorder = _store()

    store.dispatch(LocationSet(location_url="https://x/?devices.videoInput=cam1"))

    assert recorder.events[1:] == [SettingsUpdateRequested(settings={"cameraDeviceId": "cam1"})]
    assert store.get_state().settings.values == {"cameraDeviceId": "cam1"}


def test_numeric_looking_device_id_reaches_settings_verbatim() -> None:
    store, recorder = _store()

    store.dispatch(LocationSet(location_url="https://x/?devices.videoInput=1e3"))

    assert recorder.events[1:] == [SettingsUpdateRequested(settings={"cameraDeviceId": "1e3"})]


def test_deeply_nested_url_value_does_not_break_dispatch() -> None:
    store, recorder = _store()
    url = "https://x/?junk=" + "[" * 100_000 + "&devices.audioInput=mic7"

    store.dispatch(LocationSet(location_url=url))

    assert recorder.events[1:] == [SettingsUpdateRequested(settings={"micDeviceId": "mic7"})]
    assert store.get_state().settings.values == {"micDeviceId": "mic7"}


def test_device_settings_do_not_reach_local_participant() -> None:
    store, _ = _store(_with_local(name="Me"))

    store.dispatch(LocationSet(location_url="https://x/#devices.videoInput=cam1"))

    assert get_local_participant(store.get_state()) == {"id": "local-1", "local": True, "name": "Me"}


def test_middleware_returns_pass_through_result() -> None:
    store, _ = _store(_with_local())
    event = SettingsUpdated(settings={"startAudioOnly": False})

    assert store.dispatch(event) is event


def test_applying_same_settings_twice_is_idempotent() -> None:
    store, _ = _store(_with_local(name="Old"))
    event = SettingsUpdated(settings={"displayName": "Ann", "email": "ann@example.org"})

    store.dispatch(event)
    once = store.get_state()
    store.dispatch(event)

    assert store.get_state() == once


def test_nested_dispatch_completes_before_next_follow_up() -> None:
    """A dispatch triggered by the audio-only event is visible to the participant reactor."""

    def tag_on_audio_only(store: StoreHandle) -> Any:
        def wrap(next_dispatch: Dispatch) -> Dispatch:
            def dispatch(event: BaseEvent) -> Any:
                result = next_dispatch(event)
                if isinstance(event, AudioOnlySet):
                    local = dict(get_local_participant(store.get_state()) or {})
                    store.dispatch(ParticipantUpdated(participant={**local, "videoMuted": event.value}))
                return result

            return dispatch

        return wrap

    store = create_store(initial_state=_with_local(name="Old"), middleware=(tag_on_audio_only,))

    store.dispatch(SettingsUpdated(settings={"startAudioOnly": True, "displayName": "Ann"}))

    assert get_local_participant(store.get_state()) == {
        "id": "local-1",
        "local": True,
        "name": "Ann",
        "videoMuted": True,
        "startAudioOnly": True,
    }


def test_settings_middleware_reads_sources_from_config() -> None:
    store = Store(middleware=(settings_middleware,), config=SyncConfig(url_param_sources=("hash",)))

    store.dispatch(LocationSet(location_url="https://x/?devices.audioInput=mic7"))

    assert store.get_state().settings.values == {}
