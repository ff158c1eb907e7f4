"""Validação de coordenadas contra o envelope retangular do distrito."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .errors import ConfigurationError


@dataclass(frozen=True)
class Envelope:
    """Caixa ``[south, north] x [west, east]`` em graus decimais."""

    south: float
    north: float
    west: float
    east: float

    @classmethod
    def parse(cls, raw: str) -> "Envelope":
        """Interpreta ``"south,north,west,east"`` vindo de variável de ambiente."""

        parts = [part.strip() for part in raw.split(",")]
        if len(parts) != 4:
            raise ConfigurationError(
                f"Envelope deve ter quatro valores 'south,north,west,east': {raw!r}"
            )
        try:
            south, north, west, east = (float(part) for part in parts)
        except ValueError as exc:
            raise ConfigurationError(f"Envelope com valor não numérico: {raw!r}") from exc
        return cls(south=south, north=north, west=west, east=east)

    def validate(self) -> None:
        """Levanta ``ConfigurationError`` quando o envelope é malformado."""

        values = (self.south, self.north, self.west, self.east)
        if not all(isinstance(value, (int, float)) and math.isfinite(value) for value in values):
            raise ConfigurationError(f"Envelope com valores não finitos: {self}")
        if not (-90.0 <= self.south <= self.north <= 90.0):
            raise ConfigurationError(
                f"Envelope com latitudes inválidas (south={self.south}, north={self.north})"
            )
        if not (-180.0 <= self.west <= self.east <= 180.0):
            raise ConfigurationError(
                f"Envelope com longitudes inválidas (west={self.west}, east={self.east})"
            )

    def contains(self, latitude: float, longitude: float) -> bool:
        return self.south <= latitude <= self.north and self.west <= longitude <= self.east

    def to_mapping(self) -> Dict[str, float]:
        return {
            "north": self.north,
            "south": self.south,
            "east": self.east,
            "west": self.west,
        }

    def to_env(self) -> str:
        return f"{self.south},{self.north},{self.west},{self.east}"


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    reason: Optional[str] = None


_ACCEPTED = ValidationResult(valid=True)


def _as_finite(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


class BoundaryValidator:
    """Filtro barato contra erros grosseiros de geocodificação.

    Não é um teste de pertencimento ao polígono do distrito: a caixa é
    conservadora e pode aceitar pontos próximos à divisa.
    """

    def __init__(self, envelope: Envelope, district_name: str) -> None:
        self._envelope = envelope
        self._district_name = district_name

    @property
    def envelope(self) -> Envelope:
        return self._envelope

    def validate(self, latitude: Any, longitude: Any, label: str) -> ValidationResult:
        lat = _as_finite(latitude)
        lon = _as_finite(longitude)
        if lat is None or lon is None:
            return ValidationResult(
                valid=False,
                reason=f"Coordinates are not finite numbers for {label}: ({latitude}, {longitude})",
            )
        if lat == 0 and lon == 0:
            return ValidationResult(
                valid=False,
                reason=f"Coordinates for {label} are zero coordinates (0, 0), a no-match sentinel",
            )
        if not self._envelope.contains(lat, lon):
            return ValidationResult(
                valid=False,
                reason=(
                    f"Coordinates ({lat}, {lon}) for {label} are outside "
                    f"{self._district_name} district bounds; may be a different "
                    "place with the same name"
                ),
            )
        return _ACCEPTED


__all__ = ["BoundaryValidator", "Envelope", "ValidationResult"]
