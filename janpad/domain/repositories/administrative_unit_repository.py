"""Contratos de persistência das unidades administrativas geocodificáveis."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Iterable, Sequence

from ..entities import AdministrativeUnit, Coordinate


class AdministrativeUnitRepository(ABC):
    """Define as consultas e atualizações que a geocodificação pode emitir.

    O repositório nunca cria nem remove unidades; apenas altera os campos de
    coordenadas e o indicador ``isGeocoded`` de documentos existentes.
    """

    @abstractmethod
    def find_candidates(self, level: str, limit: int) -> list[AdministrativeUnit]:
        """Retorna até ``limit`` unidades do nível ainda sem coordenadas validadas."""

    @abstractmethod
    def find_flagged_geocoded(self, levels: Sequence[str]) -> Iterable[AdministrativeUnit]:
        """Percorre as unidades dos níveis marcadas com ``isGeocoded = true``."""

    @abstractmethod
    def mark_geocoded(self, unit_id: Any, coordinate: Coordinate) -> bool:
        """Grava as coordenadas e ``isGeocoded = true`` em uma única atualização."""

    @abstractmethod
    def reset_coordinates(self, unit_id: Any) -> bool:
        """Remove as coordenadas e volta ``isGeocoded`` para ``false``."""

    @abstractmethod
    def count(self, level: str) -> int:
        """Quantidade total de unidades do nível."""

    @abstractmethod
    def count_geocoded(self, level: str) -> int:
        """Quantidade de unidades do nível com coordenadas validadas."""

    @abstractmethod
    def count_missing(self, levels: Sequence[str], field: str) -> int:
        """Quantidade de unidades dos níveis sem valor para ``field``."""


__all__ = ["AdministrativeUnitRepository"]
