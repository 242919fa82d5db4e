from __future__ import annotations

# Orchestration for list views: turn a location outcome + the fixed facility list
# into what the presentation layer shows.
#
# - With a fix: the distance-ranked list.
# - Without one: the facility list as supplied (no distances), plus the reason text
#   so the caller can explain why the list is not sorted.

import logging
from typing import Sequence, Union

from pydantic import BaseModel, Field

from carelocator.domain.location import LocationFix, LocationOutcome
from carelocator.domain.models import Coordinate, Facility, RankedFacility
from carelocator.ranking.rank import rank_facilities

logger = logging.getLogger(__name__)


class NearbyResult(BaseModel):
    """Ranked facilities when located, otherwise the facilities in input order."""

    user: Coordinate | None = None
    located: bool
    # Ranked entries carry `distance`; unranked ones are plain facilities.
    facilities: list[Union[RankedFacility, Facility]] = Field(default_factory=list)
    message: str | None = None


def find_nearby(outcome: LocationOutcome, facilities: Sequence[Facility]) -> NearbyResult:
    if isinstance(outcome, LocationFix):
        user = outcome.coordinate
        return NearbyResult(user=user, located=True, facilities=rank_facilities(user, facilities))

    logger.info("Location unavailable (%s); returning %d facilities unranked", outcome.reason.value, len(facilities))
    return NearbyResult(located=False, facilities=list(facilities), message=outcome.message)
