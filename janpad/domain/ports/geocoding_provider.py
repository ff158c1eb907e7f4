"""Porta de saída para provedores externos de geocodificação."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from janpad.domain.entities import Coordinate


class GeocodingProvider(ABC):
    """Define como a aplicação consulta coordenadas em um serviço externo."""

    @abstractmethod
    def geocode(
        self,
        place: str,
        locality: Optional[str],
        district: Optional[str],
        state: Optional[str],
    ) -> Optional[Coordinate]:
        """Buscar a melhor coordenada para o lugar informado.

        Retorna ``None`` quando o provedor não encontra resultado, recusa a
        requisição ou a comunicação falha. Nunca deve levantar exceção por
        esses motivos.
        """

    def close(self) -> None:
        """Libera recursos de rede mantidos pelo provedor."""


__all__ = ["GeocodingProvider"]
