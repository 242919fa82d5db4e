import pytest

from carelocator.domain.models import Coordinate
from carelocator.render.projection import GeoBounds, compute_bounds, make_projection


def test_compute_bounds_pads_single_point():
    p = Coordinate(latitude=40.0, longitude=-73.0)

    b = compute_bounds(p, [p])

    assert b.min_lat < 40.0 < b.max_lat
    assert b.min_lng < -73.0 < b.max_lng
    assert b.max_lat - b.min_lat == pytest.approx(0.02)
    assert b.max_lng - b.min_lng == pytest.approx(0.02)


def test_compute_bounds_without_user_uses_facilities_only():
    b = compute_bounds(
        None,
        [Coordinate(latitude=10, longitude=20), Coordinate(latitude=12, longitude=25)],
        padding_deg=0.5,
    )
    assert b == GeoBounds(min_lat=9.5, max_lat=12.5, min_lng=19.5, max_lng=25.5)


def test_compute_bounds_rejects_empty_input_and_bad_padding():
    with pytest.raises(ValueError):
        compute_bounds(None, [])
    with pytest.raises(ValueError):
        compute_bounds(Coordinate(latitude=0, longitude=0), [], padding_deg=0)


def test_projection_maps_every_bounding_coordinate_inside_surface():
    user = Coordinate(latitude=40.7589, longitude=-73.9851)
    facilities = [
        Coordinate(latitude=40.7614, longitude=-73.9776),
        Coordinate(latitude=40.7505, longitude=-73.9934),
        Coordinate(latitude=40.7549, longitude=-73.9840),
    ]
    bounds = compute_bounds(user, facilities)
    proj = make_projection(bounds, 640, 320)

    for c in [user, *facilities]:
        assert bounds.contains(c)
        x, y = proj.project(c)
        assert 0 <= x <= 640
        assert 0 <= y <= 320


def test_projection_is_affine_with_north_up():
    proj = make_projection(GeoBounds(min_lat=0, max_lat=10, min_lng=100, max_lng=120), 200, 100)

    assert proj.x(100) == 0
    assert proj.x(120) == 200
    assert proj.x(110) == pytest.approx(100)
    assert proj.y(0) == 100
    assert proj.y(10) == 0
    assert proj.y(5) == pytest.approx(50)
    # No clamping outside the bounds.
    assert proj.x(130) == pytest.approx(300)
    assert proj.y(-10) == pytest.approx(200)


def test_make_projection_rejects_zero_extent():
    with pytest.raises(ValueError):
        make_projection(GeoBounds(min_lat=1, max_lat=1, min_lng=0, max_lng=1), 10, 10)
