"""Entidade que representa uma unidade administrativa do censo."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

LEVELS: tuple[str, ...] = ("state", "district", "subdistrict", "town", "village", "ward")
GEOCODABLE_LEVELS: tuple[str, ...] = ("village", "town", "ward")
RESIDENCES: tuple[str, ...] = ("total", "urban", "rural")


def _optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _optional_int(value: Any) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _optional_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True)
class AdministrativeUnit:
    """Representa uma vila, cidade ou ward cadastrada pela importação do censo."""

    #: Identificador do documento no armazenamento (``_id`` no MongoDB).
    id: Any
    #: Nível hierárquico da unidade (``village``, ``town``, ``ward``...).
    level: str
    #: Nome exibido da área, usado como entrada da geocodificação.
    area_name: str
    #: Classificação ``total``/``urban``/``rural`` do registro.
    residence: str = "total"
    state: Optional[str] = None
    state_code: Optional[int] = None
    district: Optional[str] = None
    district_code: Optional[int] = None
    subdistrict: Optional[str] = None
    subdistrict_code: Optional[int] = None
    #: Código da vila/cidade/ward, único dentro do nível.
    unit_code: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    #: Indicador oficial de que as coordenadas foram validadas.
    is_geocoded: bool = False
    total_population: Optional[int] = None
    total_households: Optional[int] = None

    @classmethod
    def from_document(cls, data: Mapping[str, Any]) -> "AdministrativeUnit":
        """Reconstrói a unidade a partir do documento persistido no Mongo."""

        level = _optional_str(data.get("level"))
        if level is None:
            raise ValueError("missing level for administrative unit")
        return cls(
            id=data.get("_id"),
            level=level,
            area_name=str(data.get("areaName") or ""),
            residence=_optional_str(data.get("residence")) or "total",
            state=_optional_str(data.get("state")),
            state_code=_optional_int(data.get("stateLgd")),
            district=_optional_str(data.get("district")),
            district_code=_optional_int(data.get("districtLgd")),
            subdistrict=_optional_str(data.get("subdistrict")),
            subdistrict_code=_optional_int(data.get("subdistrictLgd")),
            unit_code=_optional_str(data.get("townVillageCode")),
            latitude=_optional_float(data.get("latitude")),
            longitude=_optional_float(data.get("longitude")),
            is_geocoded=data.get("isGeocoded") is True,
            total_population=_optional_int(data.get("totalPopulation")),
            total_households=_optional_int(data.get("totalHouseholds")),
        )

    @property
    def identifier(self) -> str:
        """Rótulo estável usado em logs e relatórios."""

        if self.unit_code:
            return f"{self.level}:{self.unit_code}:{self.residence}"
        if self.id is not None:
            return str(self.id)
        return self.area_name or "unknown-unit"


__all__ = [
    "AdministrativeUnit",
    "GEOCODABLE_LEVELS",
    "LEVELS",
    "RESIDENCES",
]
