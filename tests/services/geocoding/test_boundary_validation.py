from __future__ import annotations

import math

import pytest

from janpad.services.geocoding.errors import ConfigurationError
from janpad.services.geocoding.validation import BoundaryValidator, Envelope

BUDAUN = Envelope(south=27.8, north=28.5, west=78.35, east=79.45)


@pytest.fixture
def validator() -> BoundaryValidator:
    return BoundaryValidator(BUDAUN, "Budaun")


def test_accepts_points_inside_the_envelope(validator: BoundaryValidator) -> None:
    result = validator.validate(28.03, 79.12, "Budaun")

    assert result.valid is True
    assert result.reason is None


@pytest.mark.parametrize(
    ("latitude", "longitude"),
    [(27.8, 78.35), (28.5, 79.45), (27.8, 79.45), (28.5, 78.35)],
)
def test_edges_are_inclusive(validator: BoundaryValidator, latitude: float, longitude: float) -> None:
    assert validator.validate(latitude, longitude, "edge").valid is True


@pytest.mark.parametrize(
    ("latitude", "longitude"),
    [(28.81, 79.03), (27.79, 79.0), (28.0, 79.46), (28.0, 78.34), (26.85, 80.95)],
)
def test_rejects_points_outside_the_envelope(validator: BoundaryValidator, latitude: float, longitude: float) -> None:
    result = validator.validate(latitude, longitude, "Rampur")

    assert result.valid is False
    assert "outside Budaun district bounds" in result.reason
    assert "Rampur" in result.reason


def test_rejects_zero_sentinel_even_when_envelope_contains_it() -> None:
    validator = BoundaryValidator(Envelope(south=-1.0, north=1.0, west=-1.0, east=1.0), "Test")

    result = validator.validate(0.0, 0.0, "Ghost")

    assert result.valid is False
    assert "zero coordinates" in result.reason


@pytest.mark.parametrize(
    ("latitude", "longitude"),
    [(math.nan, 79.0), (28.0, math.inf), (None, 79.0), ("abc", 79.0), (True, 79.0)],
)
def test_rejects_non_finite_values(validator: BoundaryValidator, latitude, longitude) -> None:
    result = validator.validate(latitude, longitude, "Broken")

    assert result.valid is False
    assert "not finite" in result.reason


def test_accepts_numeric_strings(validator: BoundaryValidator) -> None:
    assert validator.validate("28.0", "79.0", "text").valid is True


def test_envelope_parse_and_serialization() -> None:
    envelope = Envelope.parse(" 27.8, 28.5 ,78.35,79.45")

    assert envelope == BUDAUN
    assert Envelope.parse(envelope.to_env()) == envelope
    assert envelope.to_mapping() == {"north": 28.5, "south": 27.8, "east": 79.45, "west": 78.35}


@pytest.mark.parametrize("raw", ["27.8,28.5,78.35", "a,b,c,d", ""])
def test_envelope_parse_rejects_malformed_values(raw: str) -> None:
    with pytest.raises(ConfigurationError):
        Envelope.parse(raw)


@pytest.mark.parametrize(
    "envelope",
    [
        Envelope(south=28.5, north=27.8, west=78.35, east=79.45),
        Envelope(south=27.8, north=28.5, west=79.45, east=78.35),
        Envelope(south=-91.0, north=28.5, west=78.35, east=79.45),
        Envelope(south=27.8, north=28.5, west=78.35, east=math.nan),
    ],
)
def test_envelope_validate_rejects_malformed_boxes(envelope: Envelope) -> None:
    with pytest.raises(ConfigurationError):
        envelope.validate()
