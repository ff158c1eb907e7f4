"""Janpad - geocodificação e validação espacial de unidades administrativas."""
from .domain import AdministrativeUnit, Coordinate, GEOCODABLE_LEVELS
from .services.geocoding import GeocodingContainer, build_geocoding_container

__all__ = [
    "AdministrativeUnit",
    "Coordinate",
    "GEOCODABLE_LEVELS",
    "GeocodingContainer",
    "build_geocoding_container",
]
