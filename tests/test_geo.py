import math

import pytest

from carelocator.core.geo import EARTH_RADIUS_MI, haversine_mi
from carelocator.domain.models import Coordinate

TIMES_SQUARE = Coordinate(latitude=40.7589, longitude=-73.9851)
NEARBY_HOSPITAL = Coordinate(latitude=40.7614, longitude=-73.9776)

MILES_PER_DEGREE = EARTH_RADIUS_MI * math.pi / 180


@pytest.mark.parametrize(
    "point",
    [
        TIMES_SQUARE,
        Coordinate(latitude=0, longitude=0),
        Coordinate(latitude=90, longitude=0),
        Coordinate(latitude=-33.8688, longitude=151.2093),
        Coordinate(latitude=12.5, longitude=-180),
    ],
)
def test_distance_to_self_is_zero(point):
    assert haversine_mi(point, point) == 0


def test_distance_is_symmetric():
    pairs = [
        (TIMES_SQUARE, NEARBY_HOSPITAL),
        (Coordinate(latitude=51.5074, longitude=-0.1278), Coordinate(latitude=48.8566, longitude=2.3522)),
        (Coordinate(latitude=-45, longitude=170), Coordinate(latitude=60, longitude=-170)),
    ]
    for a, b in pairs:
        assert haversine_mi(a, b) == pytest.approx(haversine_mi(b, a), rel=1e-9)


def test_one_degree_along_meridian_and_equator():
    # On a sphere both are exactly R * pi / 180.
    d_lat = haversine_mi(Coordinate(latitude=10, longitude=20), Coordinate(latitude=11, longitude=20))
    d_lng = haversine_mi(Coordinate(latitude=0, longitude=20), Coordinate(latitude=0, longitude=21))
    assert d_lat == pytest.approx(MILES_PER_DEGREE, abs=1e-6)
    assert d_lng == pytest.approx(MILES_PER_DEGREE, abs=1e-6)


def test_city_block_scale_distance_matches_reference():
    # ~0.43 mi between Times Square and a facility a few blocks north-east.
    assert haversine_mi(TIMES_SQUARE, NEARBY_HOSPITAL) == pytest.approx(0.429, abs=0.05)


def test_antipodal_points_do_not_fail():
    d = haversine_mi(Coordinate(latitude=0, longitude=0), Coordinate(latitude=0, longitude=180))
    assert d == pytest.approx(math.pi * EARTH_RADIUS_MI, rel=1e-9)


def test_distinct_points_have_positive_distance():
    a = Coordinate(latitude=40.0, longitude=-73.0)
    b = Coordinate(latitude=40.0, longitude=-73.00001)
    assert haversine_mi(a, b) > 0
