"""Implementação MongoDB do repositório de unidades administrativas."""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Iterable, Sequence

from pymongo import ASCENDING
from pymongo.collection import Collection

from janpad.domain import AdministrativeUnit, AdministrativeUnitRepository, Coordinate

log = logging.getLogger(__name__)

_PRESENT = {"$exists": True, "$ne": None}


def candidate_criteria(level: str) -> dict[str, Any]:
    """Unidades sem coordenadas validadas; complemento exato de ``geocoded_criteria``."""

    return {
        "level": level,
        "$or": [
            {"isGeocoded": {"$ne": True}},
            {"latitude": {"$exists": False}},
            {"latitude": None},
            {"longitude": {"$exists": False}},
            {"longitude": None},
        ],
    }


def geocoded_criteria(level: str) -> dict[str, Any]:
    return {
        "level": level,
        "isGeocoded": True,
        "latitude": dict(_PRESENT),
        "longitude": dict(_PRESENT),
    }


class MongoAdministrativeUnitRepository(AdministrativeUnitRepository):
    """Lê e atualiza os documentos de unidades gravados pela importação do censo."""

    def __init__(self, collection: Collection) -> None:
        self._collection: Collection = collection
        """Coleção MongoDB com os documentos de demografia."""

    def find_candidates(self, level: str, limit: int) -> list[AdministrativeUnit]:
        cursor = self._collection.find(candidate_criteria(level)).sort("_id", ASCENDING).limit(limit)
        try:
            return self._parse_many(cursor)
        finally:
            close = getattr(cursor, "close", None)
            if callable(close):
                close()

    def find_flagged_geocoded(self, levels: Sequence[str]) -> Iterable[AdministrativeUnit]:
        criteria = {"level": {"$in": list(levels)}, "isGeocoded": True}
        cursor = self._collection.find(criteria).sort("_id", ASCENDING)
        try:
            yield from self._parse_many(cursor)
        finally:
            close = getattr(cursor, "close", None)
            if callable(close):
                close()

    def mark_geocoded(self, unit_id: Any, coordinate: Coordinate) -> bool:
        update = {
            "$set": {
                "latitude": coordinate.latitude,
                "longitude": coordinate.longitude,
                "isGeocoded": True,
                "geocodedAt": datetime.now(timezone.utc),
            }
        }
        result = self._collection.update_one({"_id": unit_id}, update)
        return bool(getattr(result, "matched_count", 0))

    def reset_coordinates(self, unit_id: Any) -> bool:
        update = {
            "$unset": {"latitude": "", "longitude": "", "geocodedAt": ""},
            "$set": {"isGeocoded": False},
        }
        result = self._collection.update_one({"_id": unit_id}, update)
        return bool(getattr(result, "matched_count", 0))

    def count(self, level: str) -> int:
        return self._collection.count_documents({"level": level})

    def count_geocoded(self, level: str) -> int:
        return self._collection.count_documents(geocoded_criteria(level))

    def count_missing(self, levels: Sequence[str], field: str) -> int:
        criteria = {
            "level": {"$in": list(levels)},
            "$or": [
                {field: {"$exists": False}},
                {field: None},
                {field: ""},
            ],
        }
        return self._collection.count_documents(criteria)

    @staticmethod
    def _parse_many(documents: Iterable[dict[str, Any]]) -> list[AdministrativeUnit]:
        units: list[AdministrativeUnit] = []
        for document in documents:
            try:
                units.append(AdministrativeUnit.from_document(document))
            except ValueError:
                log.warning("Ignorando documento sem nível: %s", document.get("_id"))
        return units


__all__ = [
    "MongoAdministrativeUnitRepository",
    "candidate_criteria",
    "geocoded_criteria",
]
