from __future__ import annotations

import logging
from typing import Any, Optional

import pytest

from janpad.domain import Coordinate, GeocodingProvider
from janpad.services.geocoding.config import GeocodingConfig
from janpad.services.geocoding.errors import ConfigurationError
from janpad.services.geocoding.infrastructure import MongoAdministrativeUnitRepository
from janpad.services.geocoding.jobs import BatchGeocodingJob
from janpad.services.geocoding.validation import BoundaryValidator

_INSIDE = Coordinate(27.85, 78.75, "Sahaswan, Uttar Pradesh, India")


class FakeProvider(GeocodingProvider):
    def __init__(self, responses: dict[str, Any] | None = None, default: Any = _INSIDE) -> None:
        self._responses = responses or {}
        self._default = default
        self.calls: list[tuple[str, Optional[str], Optional[str], Optional[str]]] = []

    def geocode(self, place, locality, district, state):
        self.calls.append((place, locality, district, state))
        response = self._responses.get(place, self._default)
        if isinstance(response, Exception):
            raise response
        return response


class FailingWriteCollection:
    """Delegates to a fake collection but fails to persist one document."""

    def __init__(self, collection, failing_id: int) -> None:
        self._collection = collection
        self._failing_id = failing_id

    def __getattr__(self, name: str):
        return getattr(self._collection, name)

    def update_one(self, criteria, update):
        if criteria.get("_id") == self._failing_id:
            raise RuntimeError("write timeout")
        return self._collection.update_one(criteria, update)


def _build_job(collection, provider, config: GeocodingConfig, sleeps: list[float] | None = None):
    repository = MongoAdministrativeUnitRepository(collection)
    validator = BoundaryValidator(config.envelope, config.district_name)
    recorder = sleeps if sleeps is not None else []
    return BatchGeocodingJob(repository, provider, validator, config, sleep=recorder.append)


def test_geocodes_pending_units_and_skips_them_on_next_run(make_collection, make_unit, config) -> None:
    collection = make_collection(
        [
            make_unit(1, "Sahaswan (NP)"),
            make_unit(2, "Ujhani"),
            make_unit(3, "Bisauli", isGeocoded=False),
        ]
    )
    provider = FakeProvider()
    job = _build_job(collection, provider, config)

    first = job.run("town", 10)

    assert first.to_summary() == {"success": 3, "failed": 0, "total": 3}
    for document in collection.documents:
        assert document["isGeocoded"] is True
        assert document["latitude"] == 27.85
        assert document["longitude"] == 78.75

    second = job.run("town", 10)

    assert second.to_summary() == {"success": 0, "failed": 0, "total": 0}
    assert len(provider.calls) == 3


def test_strips_qualifier_and_writes_coordinates(make_collection, make_unit, config) -> None:
    collection = make_collection([make_unit(7, "Sahaswan (NP)", subdistrict="Sahaswan")])
    provider = FakeProvider({"Sahaswan": Coordinate(27.85, 78.75)}, default=None)
    job = _build_job(collection, provider, config)

    result = job.run("town", 5)

    assert result.success == 1
    assert provider.calls == [("Sahaswan", "Sahaswan", "Budaun", "Uttar Pradesh")]
    document = collection.get(7)
    assert document["latitude"] == 27.85
    assert document["longitude"] == 78.75
    assert document["isGeocoded"] is True
    assert "geocodedAt" in document
    assert document["areaName"] == "Sahaswan (NP)"


def test_write_failure_does_not_stop_the_batch(make_collection, make_unit, config) -> None:
    base = make_collection([make_unit(index, f"Town {index}") for index in range(1, 6)])
    collection = FailingWriteCollection(base, failing_id=3)
    job = _build_job(collection, FakeProvider(), config)

    result = job.run("town", 5)

    assert (result.success, result.failed, result.total) == (4, 1, 5)
    identifier, reason = result.failures[0]
    assert identifier == "town:800003:total"
    assert reason.startswith("store-write-error")

    third = base.get(3)
    assert "latitude" not in third
    assert third.get("isGeocoded") is not True
    assert all(base.get(index)["isGeocoded"] is True for index in (1, 2, 4, 5))


def test_rejects_coordinates_outside_the_district(make_collection, make_unit, config) -> None:
    collection = make_collection(
        [
            make_unit(1, "Rampur"),
            make_unit(2, "Nowhere"),
            make_unit(3, "Ujhani"),
        ]
    )
    provider = FakeProvider(
        {
            "Rampur": Coordinate(28.81, 79.03),
            "Nowhere": Coordinate(0.0, 0.0),
        }
    )
    job = _build_job(collection, provider, config)

    result = job.run("town", 10)

    assert (result.success, result.failed) == (1, 2)
    reasons = dict(result.failures)
    assert reasons["town:800001:total"].startswith("validation-rejected")
    assert "outside Budaun district bounds" in reasons["town:800001:total"]
    assert "no-match sentinel" in reasons["town:800002:total"]
    assert "latitude" not in collection.get(1)
    assert "latitude" not in collection.get(2)
    assert collection.get(3)["isGeocoded"] is True


def test_provider_miss_and_exception_are_counted_as_failures(make_collection, make_unit, config) -> None:
    collection = make_collection(
        [
            make_unit(1, "Unknown"),
            make_unit(2, "Broken"),
            make_unit(3, "Ujhani"),
        ]
    )
    provider = FakeProvider({"Unknown": None, "Broken": RuntimeError("socket closed")})
    job = _build_job(collection, provider, config)

    result = job.run("town", 10)

    assert (result.success, result.failed, result.total) == (1, 2, 3)
    reasons = dict(result.failures)
    assert reasons["town:800001:total"] == "provider-miss"
    assert reasons["town:800002:total"] == "unexpected-error: socket closed"


def test_unit_without_area_name_fails_without_calling_provider(make_collection, make_unit, config) -> None:
    collection = make_collection([make_unit(1, ""), make_unit(2, "Ujhani")])
    provider = FakeProvider()
    job = _build_job(collection, provider, config)

    result = job.run("town", 10)

    assert result.failures == (("town:800001:total", "missing-area-name"),)
    assert [call[0] for call in provider.calls] == ["Ujhani"]


def test_selects_candidates_in_id_order_up_to_batch_size(make_collection, make_unit, config) -> None:
    collection = make_collection(
        [
            make_unit(5, "Five"),
            make_unit(2, "Two"),
            make_unit(4, "Four", isGeocoded=True, latitude=28.0, longitude=79.0),
            make_unit(1, "One"),
            make_unit(3, "Three", isGeocoded=True, latitude=None, longitude=79.0),
            make_unit(6, "Village", level="village"),
        ]
    )
    provider = FakeProvider()
    job = _build_job(collection, provider, config)

    result = job.run("town", 3)

    assert result.total == 3
    assert [call[0] for call in provider.calls] == ["One", "Two", "Three"]


def test_throttles_between_calls_only(make_collection, make_unit, config) -> None:
    collection = make_collection([make_unit(index, f"Town {index}") for index in range(1, 4)])
    sleeps: list[float] = []
    job = _build_job(collection, FakeProvider(), config, sleeps)

    job.run("town", 10)

    assert sleeps == [0.25, 0.25]


def test_units_without_name_do_not_trigger_the_throttle(make_collection, make_unit, config) -> None:
    collection = make_collection(
        [
            make_unit(1, ""),
            make_unit(2, "Ujhani"),
            make_unit(3, "  "),
            make_unit(4, "Bisauli"),
            make_unit(5, ""),
        ]
    )
    sleeps: list[float] = []
    provider = FakeProvider()
    job = _build_job(collection, provider, config, sleeps)

    result = job.run("town", 10)

    assert (result.success, result.failed) == (2, 3)
    assert len(provider.calls) == 2
    assert sleeps == [0.25]


def test_logs_provider_address_on_success(make_collection, make_unit, config, caplog) -> None:
    collection = make_collection([make_unit(1, "Sahaswan (NP)")])
    job = _build_job(collection, FakeProvider(), config)

    with caplog.at_level(logging.INFO, logger="janpad.batch_geocoding_job"):
        job.run("town", 1)

    assert "Sahaswan, Uttar Pradesh, India" in caplog.text


def test_dry_run_validates_without_writing(make_collection, make_unit, config) -> None:
    collection = make_collection([make_unit(1, "Ujhani"), make_unit(2, "Rampur")])
    provider = FakeProvider({"Rampur": Coordinate(28.81, 79.03)})
    job = _build_job(collection, provider, config)

    result = job.run("town", 10, dry_run=True)

    assert (result.success, result.failed) == (1, 1)
    assert result.dry_run is True
    assert collection.updates == []
    assert job.run("town", 10, dry_run=True).total == 2


@pytest.mark.parametrize(
    ("level", "batch_size"),
    [
        ("district", 10),
        ("town", 0),
        ("town", -1),
        ("town", 501),
        ("town", True),
        ("town", "10"),
    ],
)
def test_rejects_invalid_input_before_any_call(make_collection, make_unit, config, level, batch_size) -> None:
    collection = make_collection([make_unit(1, "Ujhani")])
    provider = FakeProvider()
    job = _build_job(collection, provider, config)

    with pytest.raises(ValueError):
        job.run(level, batch_size)

    assert provider.calls == []
    assert collection.updates == []


def test_missing_api_key_is_a_configuration_error(make_collection, make_unit) -> None:
    collection = make_collection([make_unit(1, "Ujhani")])
    provider = FakeProvider()
    job = _build_job(collection, provider, GeocodingConfig(provider="google", api_key=None))

    with pytest.raises(ConfigurationError):
        job.run("town", 10)

    assert provider.calls == []


def test_result_mapping_lists_failures(make_collection, make_unit, config) -> None:
    collection = make_collection([make_unit(1, "Unknown")])
    job = _build_job(collection, FakeProvider(default=None), config)

    payload = job.run("town", 1).to_mapping()

    assert payload["level"] == "town"
    assert payload["failures"] == [["town:800001:total", "provider-miss"]]
    assert payload["elapsed_ms_total"] >= 0
