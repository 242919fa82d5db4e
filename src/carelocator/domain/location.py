"""
Location provider outcomes.

A location lookup either yields a fix or an "unavailable" signal with a reason.
The core only cares whether a coordinate exists; the reason text is carried
along for list views and API responses.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from carelocator.domain.models import Coordinate


class LocationErrorReason(str, Enum):
    PERMISSION_DENIED = "permission_denied"
    POSITION_UNAVAILABLE = "position_unavailable"
    TIMEOUT = "timeout"
    UNSUPPORTED = "unsupported"


LOCATION_ERROR_MESSAGES: dict[LocationErrorReason, str] = {
    LocationErrorReason.PERMISSION_DENIED: "Location access denied. Please enable location services.",
    LocationErrorReason.POSITION_UNAVAILABLE: "Location information is unavailable.",
    LocationErrorReason.TIMEOUT: "Location request timed out.",
    LocationErrorReason.UNSUPPORTED: "Geolocation is not supported by this browser.",
}


class LocationFix(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["fix"] = "fix"
    coordinate: Coordinate


class LocationUnavailable(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["unavailable"] = "unavailable"
    reason: LocationErrorReason

    @property
    def message(self) -> str:
        return LOCATION_ERROR_MESSAGES[self.reason]


LocationOutcome = Annotated[Union[LocationFix, LocationUnavailable], Field(discriminator="kind")]

