"""Normalização de nomes de áreas antes da consulta ao provedor."""
from __future__ import annotations

import re
from typing import Iterable

#: Siglas de status cívico usadas pelo censo indiano entre parênteses.
DEFAULT_QUALIFIERS: tuple[str, ...] = (
    "NP",
    "NPP",
    "MB",
    "M",
    "M Corp.",
    "CT",
    "CB",
    "OG",
    "NA",
    "ITS",
)


def build_qualifier_pattern(qualifiers: Iterable[str]) -> re.Pattern[str]:
    """Compila a expressão que localiza os qualificadores com o espaço ao redor."""

    # Mais longos primeiro para "M Corp." vencer "M"
    ordered = sorted({item.strip() for item in qualifiers if item.strip()}, key=len, reverse=True)
    if not ordered:
        raise ValueError("at least one qualifier is required")
    alternatives = "|".join(
        r"\s*".join(re.escape(part) for part in item.split()) for item in ordered
    )
    return re.compile(rf"\s*\(\s*(?:{alternatives})\s*\)\s*", re.IGNORECASE)


_DEFAULT_PATTERN = build_qualifier_pattern(DEFAULT_QUALIFIERS)


def normalize_area_name(raw: str, *, pattern: re.Pattern[str] | None = None) -> str:
    """Remove qualificadores administrativos como ``(NP)`` do nome da área.

    Nomes sem qualificador são devolvidos sem alteração. Se nada sobrar após
    a limpeza, o nome original é devolvido.
    """

    if not raw:
        return raw
    regex = pattern or _DEFAULT_PATTERN
    cleaned, replaced = regex.subn(" ", raw)
    if not replaced:
        return raw
    cleaned = " ".join(cleaned.split())
    return cleaned or raw


__all__ = ["DEFAULT_QUALIFIERS", "build_qualifier_pattern", "normalize_area_name"]
