import json

import pytest
from pydantic import ValidationError

from carelocator.catalog.loader import load_catalog, load_facilities, load_sample_facilities
from carelocator.config.settings import CatalogSettings, Settings
from carelocator.domain.location import LocationErrorReason, LocationFix, LocationUnavailable
from carelocator.domain.models import Coordinate, RankedFacility
from carelocator.ranking.nearby import find_nearby

USER = Coordinate(latitude=40.7589, longitude=-73.9851)


def test_sample_catalog_loads_all_categories():
    facilities = load_sample_facilities()
    assert [f.id for f in facilities] == ["1", "2", "3", "4"]
    assert {f.category.value for f in facilities} == {"hospital", "ambulance", "blood_bank"}


def test_find_nearby_with_fix_ranks_sample_catalog():
    result = find_nearby(LocationFix(coordinate=USER), load_sample_facilities())

    assert result.located is True
    assert result.user == USER
    assert result.message is None
    # Facility 1 sits exactly at the user; 4 is ~0.28 mi, 2 ~0.43 mi, 3 ~0.72 mi.
    assert [f.id for f in result.facilities] == ["1", "4", "2", "3"]
    assert result.facilities[0].distance == 0


def test_find_nearby_without_fix_returns_catalog_order_and_reason():
    facilities = load_sample_facilities()

    result = find_nearby(LocationUnavailable(reason=LocationErrorReason.PERMISSION_DENIED), facilities)

    assert result.located is False
    assert result.user is None
    assert [f.id for f in result.facilities] == ["1", "2", "3", "4"]
    assert not any(isinstance(f, RankedFacility) for f in result.facilities)
    assert result.message == "Location access denied. Please enable location services."


def test_find_nearby_with_empty_catalog():
    result = find_nearby(LocationFix(coordinate=USER), [])
    assert result.located is True
    assert result.facilities == []


def _write_catalog(path, records):
    path.write_text(json.dumps(records), encoding="utf-8")
    return path


def _record(fid, category="hospital"):
    return {
        "id": fid,
        "name": f"Facility {fid}",
        "category": category,
        "coordinate": {"latitude": 40.0, "longitude": -73.0},
    }


def test_load_facilities_from_file(tmp_path):
    path = _write_catalog(tmp_path / "facilities.json", [_record("a"), _record("b", "ambulance")])

    facilities = load_facilities(path)

    assert [f.id for f in facilities] == ["a", "b"]
    assert facilities[0].phone == ""


def test_load_facilities_rejects_duplicate_ids(tmp_path):
    path = _write_catalog(tmp_path / "facilities.json", [_record("a"), _record("a")])
    with pytest.raises(ValueError, match="Duplicate facility id 'a'"):
        load_facilities(path)


def test_load_facilities_rejects_invalid_records(tmp_path):
    bad = _record("a")
    bad["coordinate"]["latitude"] = 120
    path = _write_catalog(tmp_path / "facilities.json", [bad])
    with pytest.raises(ValidationError):
        load_facilities(path)


def test_load_catalog_prefers_explicit_path_then_settings(tmp_path):
    configured = _write_catalog(tmp_path / "configured.json", [_record("configured")])
    explicit = _write_catalog(tmp_path / "explicit.json", [_record("explicit")])
    settings = Settings(catalog=CatalogSettings(path=str(configured)))

    assert [f.id for f in load_catalog(settings)] == ["configured"]
    assert [f.id for f in load_catalog(settings, path=explicit)] == ["explicit"]
    assert len(load_catalog(Settings())) == 4
