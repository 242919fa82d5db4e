"""
Geospatial helpers.

A tiny spherical-earth layer: distances are good to a fraction of a percent at
city scale, which is all the ranking needs.
"""

from __future__ import annotations

from math import asin, cos, radians, sin, sqrt
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from carelocator.domain.models import Coordinate

EARTH_RADIUS_MI = 3959.0


def haversine_mi(a: Coordinate, b: Coordinate) -> float:
    """Compute great-circle distance in miles between two coordinates."""
    lat1 = radians(a.latitude)
    lon1 = radians(a.longitude)
    lat2 = radians(b.latitude)
    lon2 = radians(b.longitude)

    dlat = lat2 - lat1
    dlon = lon2 - lon1

    h = sin(dlat / 2) ** 2 + cos(lat1) * cos(lat2) * sin(dlon / 2) ** 2
    # Rounding can push h a hair above 1 for antipodal points.
    return 2 * EARTH_RADIUS_MI * asin(sqrt(min(1.0, h)))
