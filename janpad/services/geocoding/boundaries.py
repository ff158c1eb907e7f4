"""Derivação do envelope de validação a partir do polígono do distrito."""
from __future__ import annotations

import json
import math
from pathlib import Path
from typing import Any, Iterable, Iterator, Mapping

import requests

from .validation import Envelope

#: Margem padrão em graus (~5 km) somada a cada lado da caixa.
DEFAULT_BUFFER_DEGREES = 0.05


class BoundaryFileError(RuntimeError):
    """Erro ao carregar ou interpretar o GeoJSON de limites do distrito."""


def load_feature_collection(source: str | Path, *, timeout: float = 60.0) -> Mapping[str, Any]:
    """Lê um FeatureCollection de um caminho local ou de uma URL ``http(s)``."""

    text_source = str(source)
    if text_source.startswith(("http://", "https://")):
        try:
            response = requests.get(text_source, timeout=timeout)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise BoundaryFileError(f"Falha ao acessar {text_source}: {exc}") from exc
        try:
            payload = response.json()
        except ValueError as exc:
            raise BoundaryFileError(
                f"Resposta inválida de {text_source}: JSON não pôde ser decodificado"
            ) from exc
    else:
        path = Path(text_source)
        if not path.exists():
            raise BoundaryFileError(f"Arquivo de limites não encontrado: {path}")
        try:
            with path.open("r", encoding="utf-8") as stream:
                payload = json.load(stream)
        except json.JSONDecodeError as exc:
            raise BoundaryFileError(f"GeoJSON inválido em {path}") from exc

    if not isinstance(payload, Mapping) or payload.get("type") != "FeatureCollection":
        raise BoundaryFileError(f"{text_source}: não é um FeatureCollection")
    return payload


def _iter_rings(geometry: Mapping[str, Any]) -> Iterator[Iterable[Any]]:
    kind = geometry.get("type")
    coordinates = geometry.get("coordinates") or []
    if kind == "Polygon":
        yield from coordinates
    elif kind == "MultiPolygon":
        for polygon in coordinates:
            yield from polygon


def envelope_from_geojson(
    collection: Mapping[str, Any], *, buffer: float = DEFAULT_BUFFER_DEGREES
) -> Envelope:
    """Calcula a caixa mínima dos polígonos e a alarga por ``buffer`` graus."""

    if buffer < 0:
        raise ValueError("buffer não pode ser negativo")

    south = west = math.inf
    north = east = -math.inf
    for feature in collection.get("features") or ():
        geometry = feature.get("geometry") if isinstance(feature, Mapping) else None
        if not isinstance(geometry, Mapping):
            continue
        for ring in _iter_rings(geometry):
            for position in ring:
                try:
                    lon, lat = float(position[0]), float(position[1])
                except (TypeError, ValueError, IndexError):
                    continue
                south = min(south, lat)
                north = max(north, lat)
                west = min(west, lon)
                east = max(east, lon)

    if not math.isfinite(south):
        raise BoundaryFileError("Nenhum polígono encontrado no FeatureCollection")

    return Envelope(
        south=round(max(south - buffer, -90.0), 6),
        north=round(min(north + buffer, 90.0), 6),
        west=round(max(west - buffer, -180.0), 6),
        east=round(min(east + buffer, 180.0), 6),
    )


__all__ = [
    "BoundaryFileError",
    "DEFAULT_BUFFER_DEGREES",
    "envelope_from_geojson",
    "load_feature_collection",
]
