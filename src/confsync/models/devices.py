"""Media device selection derived from the location URL."""

from __future__ import annotations

from pydantic import model_validator

from confsync.models._base import ConfsyncBaseModel


class DeviceSelection(ConfsyncBaseModel):
    """Preferred media devices.

    At least one device id is always present; "no preference" is expressed by
    the absence of a selection, never by an empty one.
    """

    audio_output_device_id: str | None = None
    camera_device_id: str | None = None
    mic_device_id: str | None = None

    @model_validator(mode="after")
    def _require_one_device(self) -> DeviceSelection:
        if self.audio_output_device_id is None and self.camera_device_id is None and self.mic_device_id is None:
            raise ValueError("DeviceSelection requires at least one device id")
        return self
