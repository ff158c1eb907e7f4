"""Consultas somente leitura sobre o andamento da geocodificação."""
from __future__ import annotations

from typing import Any

from janpad.domain import GEOCODABLE_LEVELS, AdministrativeUnitRepository

from ..clients import compose_address_query
from ..config import GeocodingConfig
from ..normalization import normalize_area_name

#: Chave de cada nível no payload de status.
STATUS_KEYS: dict[str, str] = {
    "village": "villages",
    "town": "towns",
    "ward": "wards",
}


def format_percentage(geocoded: int, total: int) -> str | int:
    """Percentual com uma casa decimal, ou ``0`` quando não há unidades."""

    if total <= 0:
        return 0
    return f"{geocoded / total * 100:.1f}"


def level_status(total: int, geocoded: int) -> dict[str, Any]:
    return {
        "total": total,
        "geocoded": geocoded,
        "pending": total - geocoded,
        "percentage": format_percentage(geocoded, total),
    }


class GeocodingStatusService:
    """Agrega contagens por nível a partir do repositório."""

    def __init__(self, repository: AdministrativeUnitRepository, config: GeocodingConfig) -> None:
        self._repository = repository
        self._config = config

    def status(self) -> dict[str, Any]:
        """Retorna ``total/geocoded/pending/percentage`` por nível e no geral."""

        payload: dict[str, Any] = {}
        overall_total = 0
        overall_geocoded = 0
        for level in GEOCODABLE_LEVELS:
            total = self._repository.count(level)
            geocoded = self._repository.count_geocoded(level)
            payload[STATUS_KEYS[level]] = level_status(total, geocoded)
            overall_total += total
            overall_geocoded += geocoded
        payload["overall"] = level_status(overall_total, overall_geocoded)
        return payload

    def pending_report(self, level: str, limit: int = 10) -> dict[str, Any]:
        """Lista candidatos do nível com a consulta que seria enviada ao provedor."""

        if level not in GEOCODABLE_LEVELS:
            raise ValueError(
                f"Nível não geocodificável: {level!r} (use um de {', '.join(GEOCODABLE_LEVELS)})"
            )
        if limit <= 0:
            raise ValueError("limit deve ser maior que zero")

        total = self._repository.count(level)
        geocoded = self._repository.count_geocoded(level)
        samples = []
        for unit in self._repository.find_candidates(level, limit):
            query_name = normalize_area_name(unit.area_name)
            samples.append(
                {
                    "identifier": unit.identifier,
                    "name": unit.area_name,
                    "normalizedName": query_name,
                    "subdistrict": unit.subdistrict,
                    "unitCode": unit.unit_code,
                    "residence": unit.residence,
                    "totalPopulation": unit.total_population,
                    "query": compose_address_query(
                        query_name,
                        unit.subdistrict,
                        self._config.district_name,
                        self._config.state_name,
                        self._config.country_name,
                    ),
                }
            )

        return {
            "level": level,
            **level_status(total, geocoded),
            "samples": samples,
            "dataQuality": {
                "missingAreaName": self._repository.count_missing(GEOCODABLE_LEVELS, "areaName"),
                "missingSubdistrict": self._repository.count_missing(GEOCODABLE_LEVELS, "subdistrict"),
            },
        }


__all__ = [
    "GeocodingStatusService",
    "STATUS_KEYS",
    "format_percentage",
    "level_status",
]
