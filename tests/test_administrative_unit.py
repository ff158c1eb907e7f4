from __future__ import annotations

import pytest

from janpad.domain import GEOCODABLE_LEVELS, LEVELS, AdministrativeUnit


def test_from_document_maps_census_fields() -> None:
    unit = AdministrativeUnit.from_document(
        {
            "_id": "abc",
            "level": "village",
            "areaName": "Bhatauli",
            "residence": "rural",
            "state": "Uttar Pradesh",
            "stateLgd": "9",
            "district": "Budaun",
            "districtLgd": 134,
            "subdistrict": " Bisauli ",
            "subdistrictLgd": 781,
            "townVillageCode": 128456,
            "latitude": "28.1",
            "longitude": 79.0,
            "isGeocoded": True,
            "totalPopulation": 2311,
        }
    )

    assert unit.state_code == 9
    assert unit.subdistrict == "Bisauli"
    assert unit.unit_code == "128456"
    assert (unit.latitude, unit.longitude) == (28.1, 79.0)
    assert unit.identifier == "village:128456:rural"
    assert unit.is_geocoded is True


@pytest.mark.parametrize("flag", [None, False, "true", 1])
def test_only_boolean_true_marks_unit_as_geocoded(flag) -> None:
    unit = AdministrativeUnit.from_document(
        {"_id": 1, "level": "town", "areaName": "Ujhani", "isGeocoded": flag, "latitude": 28.0, "longitude": 79.0}
    )

    assert unit.is_geocoded is False


def test_identifier_falls_back_to_document_id() -> None:
    unit = AdministrativeUnit.from_document({"_id": 42, "level": "ward", "areaName": "Ward 3"})

    assert unit.identifier == "42"
    assert unit.residence == "total"


def test_from_document_requires_level() -> None:
    with pytest.raises(ValueError):
        AdministrativeUnit.from_document({"_id": 1, "areaName": "Ujhani"})


def test_geocodable_levels_are_a_subset_of_levels() -> None:
    assert set(GEOCODABLE_LEVELS) <= set(LEVELS)
