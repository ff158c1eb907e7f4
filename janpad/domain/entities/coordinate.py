"""Par de coordenadas devolvido por um provedor de geocodificação."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Coordinate:
    """Melhor correspondência encontrada pelo provedor para uma consulta."""

    latitude: float
    longitude: float
    #: Endereço formatado pelo provedor, útil apenas para auditoria.
    formatted_address: Optional[str] = None


__all__ = ["Coordinate"]
