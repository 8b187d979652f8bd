"""Base model for records exchanged with other features.

Settings and participant records use camelCase keys on the wire (for example
``audioOutputDeviceId``).  :class:`ConfsyncBaseModel` maps them to snake_case
attributes via ``alias_generator=to_camel`` and accepts either spelling on
input.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ConfsyncBaseModel(BaseModel):
    """Frozen camelCase-aliased model."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    def to_partial_settings(self) -> dict[str, Any]:
        """Return the set fields as a settings patch keyed by camelCase names."""
        return self.model_dump(by_alias=True, exclude_none=True)
