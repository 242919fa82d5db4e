import random

from carelocator.core.geo import haversine_mi
from carelocator.domain.models import Coordinate, Facility, FacilityCategory, RankedFacility
from carelocator.ranking.rank import rank_facilities

USER = Coordinate(latitude=40.7589, longitude=-73.9851)


def _facility(fid: str, lat: float, lng: float, category: str = "hospital") -> Facility:
    return Facility(
        id=fid,
        name=f"Facility {fid}",
        category=category,
        coordinate=Coordinate(latitude=lat, longitude=lng),
        phone="+1-555-0000",
        address=f"{fid} Main St",
    )


def test_rank_empty_list_returns_empty_list():
    assert rank_facilities(USER, []) == []


def test_rank_end_to_end_example_orders_by_computed_distance():
    a = _facility("A", 40.7614, -73.9776, "hospital")
    b = _facility("B", 40.7505, -73.9934, "ambulance")

    ranked = rank_facilities(USER, [a, b])

    expected = sorted([a, b], key=lambda f: haversine_mi(USER, f.coordinate))
    assert [r.id for r in ranked] == [f.id for f in expected]
    # A is ~0.43 mi away, B ~0.72 mi.
    assert [r.id for r in ranked] == ["A", "B"]
    assert ranked[0].distance < ranked[1].distance


def test_rank_preserves_length_and_sorts_random_inputs():
    rng = random.Random(7)
    facilities = [
        _facility(str(i), 40.7 + rng.uniform(-0.2, 0.2), -73.98 + rng.uniform(-0.2, 0.2))
        for i in range(50)
    ]

    ranked = rank_facilities(USER, facilities)

    assert len(ranked) == len(facilities)
    assert sorted(r.id for r in ranked) == sorted(f.id for f in facilities)
    distances = [r.distance for r in ranked]
    assert distances == sorted(distances)
    # Repeated calls agree.
    assert [r.id for r in rank_facilities(USER, facilities)] == [r.id for r in ranked]


def test_rank_is_stable_for_equal_distances():
    first = _facility("first", 40.76, -73.98)
    second = _facility("second", 40.76, -73.98)
    near = _facility("near", 40.7589, -73.9851)

    assert [r.id for r in rank_facilities(USER, [first, second, near])] == ["near", "first", "second"]
    assert [r.id for r in rank_facilities(USER, [second, first, near])] == ["near", "second", "first"]


def test_rank_returns_new_objects_and_leaves_input_untouched():
    facilities = [_facility("x", 40.8, -73.9), _facility("y", 40.7589, -73.9851)]
    snapshot = list(facilities)

    ranked = rank_facilities(USER, facilities)

    assert facilities == snapshot
    assert all(isinstance(r, RankedFacility) for r in ranked)
    assert all(not isinstance(f, RankedFacility) for f in facilities)
    assert ranked[0].id == "y"
    assert ranked[0].distance == 0
    assert ranked[0].category == FacilityCategory.HOSPITAL
    assert ranked[0].coordinate == facilities[1].coordinate
