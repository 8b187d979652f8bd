"""confsync - settings propagation for conference client state."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("confsync")
except PackageNotFoundError:
    __version__ = "0+local"
from confsync.config import SyncConfig
from confsync.exceptions import (
    ConfsyncConfigError,
    ConfsyncDispatchError,
    ConfsyncDispatchLoopError,
    ConfsyncError,
)
from confsync.models import (
    AppState,
    ConferenceState,
    ConnectionState,
    DeviceSelection,
    ParticipantsState,
    SettingsState,
    get_local_participant,
)
from confsync.propagation import create_store, follow_ups, settings_middleware
from confsync.state.events import (
    AudioOnlySet,
    BaseEvent,
    EventKind,
    LocationSet,
    ParticipantUpdated,
    SettingsUpdated,
    SettingsUpdateRequested,
    parse_event,
)
from confsync.state.store import Store

__all__ = [
    "__version__",
    "AppState",
    "AudioOnlySet",
    "BaseEvent",
    "ConferenceState",
    "ConfsyncConfigError",
    "ConfsyncDispatchError",
    "ConfsyncDispatchLoopError",
    "ConfsyncError",
    "ConnectionState",
    "DeviceSelection",
    "EventKind",
    "LocationSet",
    "ParticipantUpdated",
    "ParticipantsState",
    "SettingsState",
    "SettingsUpdateRequested",
    "SettingsUpdated",
    "Store",
    "SyncConfig",
    "create_store",
    "follow_ups",
    "get_local_participant",
    "parse_event",
    "settings_middleware",
]
