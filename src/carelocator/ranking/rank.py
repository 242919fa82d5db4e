"""
Distance ranking.

Annotates every facility with its great-circle distance from the user and orders
the result nearest-first. `list.sort` is stable, so facilities at the same
distance keep the order they had in the input list.
"""

from __future__ import annotations

import logging
from typing import Sequence

from carelocator.core.geo import haversine_mi
from carelocator.domain.models import Coordinate, Facility, RankedFacility

logger = logging.getLogger(__name__)


def rank_facilities(user: Coordinate, facilities: Sequence[Facility]) -> list[RankedFacility]:
    """Return a new list of `RankedFacility`, sorted ascending by distance."""
    ranked = [
        RankedFacility.from_facility(facility, distance=haversine_mi(user, facility.coordinate))
        for facility in facilities
    ]
    ranked.sort(key=lambda r: r.distance)

    if ranked:
        logger.debug(
            "Ranked %d facilities (nearest=%s %.2f mi, farthest=%.2f mi)",
            len(ranked),
            ranked[0].id,
            ranked[0].distance,
            ranked[-1].distance,
        )
    else:
        logger.debug("No facilities to rank")
    return ranked
