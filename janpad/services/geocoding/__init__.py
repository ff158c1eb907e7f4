"""Geocoding service dependency container."""

from .container import GeocodingContainer, assemble_geocoding_container, build_geocoding_container

__all__ = [
    "GeocodingContainer",
    "assemble_geocoding_container",
    "build_geocoding_container",
]
