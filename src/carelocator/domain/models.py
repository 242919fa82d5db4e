"""
Domain models (Pydantic).

These types are the contract between the core and its collaborators:
- location + facility inputs (`Coordinate`, `Facility`)
- ranked output consumed by list views and the map renderer (`RankedFacility`)

Range checks live here, at construction time. The geo math, ranker and renderer
assume they receive already-validated values.
"""

from __future__ import annotations

import math
from enum import Enum

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, computed_field


class Coordinate(BaseModel):
    """A geographic point in decimal degrees."""

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)


class FacilityCategory(str, Enum):
    HOSPITAL = "hospital"
    AMBULANCE = "ambulance"
    BLOOD_BANK = "blood_bank"


class Facility(BaseModel):
    """An emergency facility from the fixed facility list."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    name: str
    # Catalog files written for the web client use `type` / `coordinates`.
    category: FacilityCategory = Field(..., validation_alias=AliasChoices("category", "type"))
    coordinate: Coordinate = Field(..., validation_alias=AliasChoices("coordinate", "coordinates"))
    phone: str = ""
    address: str = ""

    @computed_field  # type: ignore[prop-decorator]
    @property
    def category_label(self) -> str:
        """Human-readable category, e.g. `Blood Bank`."""
        return self.category.value.replace("_", " ").title()

    @computed_field  # type: ignore[prop-decorator]
    @property
    def directions_url(self) -> str:
        return f"https://maps.google.com/?q={self.coordinate.latitude},{self.coordinate.longitude}"


class RankedFacility(Facility):
    """A facility annotated with its distance (miles) from the user."""

    distance: float = Field(..., ge=0)

    @classmethod
    def from_facility(cls, facility: Facility, *, distance: float) -> "RankedFacility":
        return cls(
            id=facility.id,
            name=facility.name,
            category=facility.category,
            coordinate=facility.coordinate,
            phone=facility.phone,
            address=facility.address,
            distance=distance,
        )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def distance_label(self) -> str:
        return f"{self.distance:.1f} mi"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def eta_minutes(self) -> int:
        """Rough travel estimate shown next to the distance (3 minutes per mile)."""
        return math.ceil(self.distance * 3)
