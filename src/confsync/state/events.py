"""State-change events.

Every change to the state tree is requested by dispatching one of these
events.  Only the store's reducers are allowed to turn them into new
snapshots.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, StrictBool, TypeAdapter


class EventKind(StrEnum):
    LOCATION_SET = "location_set"
    SETTINGS_UPDATED = "settings_updated"
    SETTINGS_UPDATE_REQUESTED = "settings_update_requested"
    AUDIO_ONLY_SET = "audio_only_set"
    PARTICIPANT_UPDATED = "participant_updated"


class BaseEvent(BaseModel):
    """Common base for everything that travels through the dispatch pipeline.

    Other features may subclass this with their own ``kind``; such events pass
    through the pipeline untouched by the reducers defined here.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: str


class LocationSet(BaseEvent):
    """The conference location (page URL) changed."""

    kind: Literal["location_set"] = "location_set"
    location_url: str | None = None


class SettingsUpdated(BaseEvent):
    """User-facing settings changed.

    ``settings`` carries only the changed fields.  Values are kept verbatim;
    no coercion happens here.
    """

    kind: Literal["settings_updated"] = "settings_updated"
    settings: dict[str, Any] = Field(default_factory=dict)


class SettingsUpdateRequested(BaseEvent):
    """A request to merge fields into the canonical settings."""

    kind: Literal["settings_update_requested"] = "settings_update_requested"
    settings: dict[str, Any] = Field(default_factory=dict)


class AudioOnlySet(BaseEvent):
    """Set the conference audio-only flag.

    ``from_settings`` is True when the change was driven by a settings update
    rather than an explicit user toggle.
    """

    kind: Literal["audio_only_set"] = "audio_only_set"
    value: StrictBool
    from_settings: bool = False


class ParticipantUpdated(BaseEvent):
    """Replace a participant record.

    ``participant`` is the complete record, not a patch.
    """

    kind: Literal["participant_updated"] = "participant_updated"
    participant: dict[str, Any] = Field(default_factory=dict)


Event = Annotated[
    LocationSet | SettingsUpdated | SettingsUpdateRequested | AudioOnlySet | ParticipantUpdated,
    Field(discriminator="kind"),
]

_EVENT_ADAPTER: TypeAdapter[Event] = TypeAdapter(Event)


def parse_event(data: Any) -> BaseEvent:
    """Validate a plain mapping into the matching event variant.

    Raises :class:`pydantic.ValidationError` for unknown kinds or bad fields.
    """
    return _EVENT_ADAPTER.validate_python(data)
