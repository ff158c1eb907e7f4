"""Portas de integração com serviços externos."""
from .geocoding_provider import GeocodingProvider

__all__ = ["GeocodingProvider"]
