"""Cliente HTTP do Nominatim (OpenStreetMap), alternativa sem chave de API."""
from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

import httpx

from janpad.domain import Coordinate, GeocodingProvider

from ._query import compose_address_query

NOMINATIM_SEARCH_URL = "https://nominatim.openstreetmap.org/search"

log = logging.getLogger("janpad.geocoding.nominatim")


class NominatimGeocodingClient(GeocodingProvider):
    """Consulta o endpoint ``/search`` do Nominatim restrito à Índia."""

    def __init__(
        self,
        user_agent: str,
        *,
        client: httpx.Client | None = None,
        timeout: float | None = 10.0,
        country_codes: str = "in",
        country: str = "India",
        endpoint: str = NOMINATIM_SEARCH_URL,
    ) -> None:
        self._country_codes = country_codes
        self._country = country
        self._endpoint = endpoint
        self._owns_client = client is None
        # A política de uso do Nominatim exige User-Agent identificável
        self._headers = {"User-Agent": user_agent}
        self._client: httpx.Client = client or httpx.Client(timeout=timeout)

    def geocode(
        self,
        place: str,
        locality: Optional[str],
        district: Optional[str],
        state: Optional[str],
    ) -> Optional[Coordinate]:
        query = compose_address_query(place, locality, district, state, self._country)
        log.info("Nominatim geocoding: %s", query)

        try:
            response = self._client.get(
                self._endpoint,
                params={
                    "q": query,
                    "format": "json",
                    "limit": 1,
                    "countrycodes": self._country_codes,
                },
                headers=self._headers,
            )
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPError as exc:
            log.error("Falha de comunicação ao geocodificar %s: %s", query, exc)
            return None
        except ValueError as exc:
            log.error("Resposta inválida do Nominatim para %s: %s", query, exc)
            return None

        if not isinstance(payload, list) or not payload:
            log.warning("Nenhum resultado para: %s", query)
            return None

        return self._coordinate_from_result(payload[0])

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    @staticmethod
    def _coordinate_from_result(result: Any) -> Optional[Coordinate]:
        if not isinstance(result, Mapping):
            return None
        try:
            latitude = float(result["lat"])
            longitude = float(result["lon"])
        except (KeyError, TypeError, ValueError):
            return None
        address = result.get("display_name")
        return Coordinate(
            latitude=latitude,
            longitude=longitude,
            formatted_address=str(address) if address else None,
        )


__all__ = ["NOMINATIM_SEARCH_URL", "NominatimGeocodingClient"]
