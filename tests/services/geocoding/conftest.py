from __future__ import annotations

from types import SimpleNamespace
from typing import Any, Callable, Iterable

import pytest

from janpad.services.geocoding.config import GeocodingConfig
from janpad.services.geocoding.validation import Envelope

_MISSING = object()


class FakeCursor:
    def __init__(self, documents: list[dict[str, Any]]) -> None:
        self._documents = documents
        self.closed = False

    def sort(self, key: str, direction: int) -> "FakeCursor":
        reverse = direction < 0
        self._documents.sort(key=lambda doc: doc.get(key), reverse=reverse)
        return self

    def limit(self, size: int) -> "FakeCursor":
        if size:
            self._documents = self._documents[:size]
        return self

    def __iter__(self) -> Iterable[dict[str, Any]]:
        return iter(self._documents)

    def close(self) -> None:
        self.closed = True


class FakeCollection:
    def __init__(self, documents: list[dict[str, Any]] | None = None) -> None:
        self._documents = [doc.copy() for doc in documents or []]
        self.updates: list[tuple[dict[str, Any], dict[str, Any]]] = []

    @property
    def documents(self) -> list[dict[str, Any]]:
        return self._documents

    def get(self, document_id: Any) -> dict[str, Any]:
        return next(doc for doc in self._documents if doc.get("_id") == document_id)

    def find(self, criteria: dict[str, Any]) -> FakeCursor:
        return FakeCursor([doc.copy() for doc in self._documents if _matches(doc, criteria)])

    def count_documents(self, criteria: dict[str, Any]) -> int:
        return sum(1 for doc in self._documents if _matches(doc, criteria))

    def update_one(self, criteria: dict[str, Any], update: dict[str, Any]):
        self.updates.append((criteria, update))
        for document in self._documents:
            if _matches(document, criteria):
                for field, value in update.get("$set", {}).items():
                    document[field] = value
                for field in update.get("$unset", {}):
                    document.pop(field, None)
                return SimpleNamespace(matched_count=1, modified_count=1)
        return SimpleNamespace(matched_count=0, modified_count=0)


def _matches(document: dict[str, Any], criteria: dict[str, Any]) -> bool:
    for key, expected in criteria.items():
        if key == "$or":
            if not any(_matches(document, branch) for branch in expected):
                return False
            continue
        if key == "$and":
            if not all(_matches(document, branch) for branch in expected):
                return False
            continue
        value = document.get(key, _MISSING)
        if isinstance(expected, dict) and any(op.startswith("$") for op in expected):
            if not _matches_operators(value, expected):
                return False
            continue
        if expected is None:
            if value is not _MISSING and value is not None:
                return False
            continue
        if value is _MISSING or value != expected:
            return False
    return True


def _matches_operators(value: Any, operators: dict[str, Any]) -> bool:
    for operator, operand in operators.items():
        if operator == "$exists":
            if (value is not _MISSING) != bool(operand):
                return False
        elif operator == "$ne":
            current = None if value is _MISSING else value
            if current == operand:
                return False
        elif operator == "$in":
            if value is _MISSING or value not in operand:
                return False
        else:
            raise NotImplementedError(operator)
    return True


def unit_document(
    _id: int,
    name: str,
    *,
    level: str = "town",
    code: str | None = None,
    residence: str = "total",
    subdistrict: str | None = "Sahaswan",
    **extra: Any,
) -> dict[str, Any]:
    document = {
        "_id": _id,
        "level": level,
        "areaName": name,
        "residence": residence,
        "state": "Uttar Pradesh",
        "stateLgd": 9,
        "district": "Budaun",
        "districtLgd": 134,
        "subdistrict": subdistrict,
        "townVillageCode": code or f"{800000 + _id}",
        "totalPopulation": 1000 + _id,
    }
    document.update(extra)
    return document


@pytest.fixture
def make_collection() -> Callable[..., FakeCollection]:
    return FakeCollection


@pytest.fixture
def make_unit() -> Callable[..., dict[str, Any]]:
    return unit_document


@pytest.fixture
def config() -> GeocodingConfig:
    return GeocodingConfig(
        provider="google",
        api_key="test-key",
        envelope=Envelope(south=27.8, north=28.5, west=78.35, east=79.45),
        throttle_seconds=0.25,
    )
