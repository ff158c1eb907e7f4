"""Clientes dos provedores externos de geocodificação."""
from __future__ import annotations

from janpad.domain import GeocodingProvider

from ..config import PROVIDER_NOMINATIM, GeocodingConfig
from ._query import compose_address_query
from .google_geocoding_client import GoogleGeocodingClient
from .nominatim_client import NominatimGeocodingClient


def build_geocoding_provider(config: GeocodingConfig) -> GeocodingProvider:
    """Instancia o cliente do provedor escolhido na configuração.

    Provedores desconhecidos caem no Google; ``GeocodingConfig.ensure_ready``
    rejeita o nome antes de qualquer lote.
    """

    if config.provider == PROVIDER_NOMINATIM:
        return NominatimGeocodingClient(
            config.user_agent,
            timeout=config.request_timeout,
            country=config.country_name,
        )
    return GoogleGeocodingClient(
        config.api_key,
        timeout=config.request_timeout,
        country=config.country_name,
    )


__all__ = [
    "GoogleGeocodingClient",
    "NominatimGeocodingClient",
    "build_geocoding_provider",
    "compose_address_query",
]
