"""Montagem da consulta textual enviada aos provedores."""
from __future__ import annotations

from typing import Optional


def compose_address_query(
    place: str,
    locality: Optional[str],
    district: Optional[str],
    state: Optional[str],
    country: Optional[str] = "India",
) -> str:
    """Junta os componentes do mais específico para o mais geral."""

    parts = []
    for value in (place, locality, district, state, country):
        text = (value or "").strip()
        if text:
            parts.append(text)
    return ", ".join(parts)


__all__ = ["compose_address_query"]
