"""Cliente HTTP da Google Maps Geocoding API."""
from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

import httpx

from janpad.domain import Coordinate, GeocodingProvider

from ._query import compose_address_query

GOOGLE_GEOCODE_URL = "https://maps.googleapis.com/maps/api/geocode/json"

log = logging.getLogger("janpad.geocoding.google")


class GoogleGeocodingClient(GeocodingProvider):
    """Consulta a Google Maps Geocoding API com viés para resultados na Índia."""

    def __init__(
        self,
        api_key: str | None,
        *,
        client: httpx.Client | None = None,
        timeout: float | None = 10.0,
        region: str = "in",
        country: str = "India",
        endpoint: str = GOOGLE_GEOCODE_URL,
    ) -> None:
        """Cria o cliente configurando a credencial e o cliente HTTP interno.

        Parameters
        ----------
        api_key:
            Chave da API do Google Maps. A ausência é verificada pela
            configuração antes de cada lote.
        client:
            Instância de :class:`httpx.Client` reutilizável. Quando omitida, o
            cliente cria e gerencia uma instância própria.
        timeout:
            Tempo máximo de espera de cada requisição.
        """

        self._api_key = api_key or ""
        self._region = region
        self._country = country
        self._endpoint = endpoint
        self._owns_client = client is None
        self._client: httpx.Client = client or httpx.Client(timeout=timeout)

    def geocode(
        self,
        place: str,
        locality: Optional[str],
        district: Optional[str],
        state: Optional[str],
    ) -> Optional[Coordinate]:
        query = compose_address_query(place, locality, district, state, self._country)
        log.info("Google Maps geocoding: %s", query)

        try:
            response = self._client.get(
                self._endpoint,
                params={"address": query, "key": self._api_key, "region": self._region},
            )
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPError as exc:
            log.error("Falha de comunicação ao geocodificar %s: %s", query, exc)
            return None
        except ValueError as exc:
            log.error("Resposta inválida do Google Maps para %s: %s", query, exc)
            return None

        if not isinstance(payload, Mapping):
            log.warning("Resposta inesperada do Google Maps para %s", query)
            return None

        status = payload.get("status")
        results = payload.get("results") or []
        if status == "OK" and results:
            coordinate = self._coordinate_from_result(results[0])
            if coordinate is None:
                log.warning("Resultado sem geometria utilizável para %s", query)
            return coordinate

        message = payload.get("error_message") or "N/A"
        if status == "ZERO_RESULTS":
            log.warning("Nenhum resultado para: %s", query)
        elif status == "REQUEST_DENIED":
            log.error(
                "Google Maps REQUEST_DENIED para %s: %s. Verifique se a chave é "
                "válida e se a Geocoding API e o faturamento estão habilitados",
                query,
                message,
            )
        elif status == "OVER_QUERY_LIMIT":
            log.error("Cota da Google Maps API excedida ao consultar %s", query)
        else:
            log.warning("Geocodificação falhou para %s, status=%s, mensagem=%s", query, status, message)
        return None

    def close(self) -> None:
        """Fecha o cliente HTTP quando a instância é de responsabilidade local."""

        if self._owns_client:
            self._client.close()

    @staticmethod
    def _coordinate_from_result(result: Any) -> Optional[Coordinate]:
        if not isinstance(result, Mapping):
            return None
        geometry = result.get("geometry")
        location = geometry.get("location") if isinstance(geometry, Mapping) else None
        if not isinstance(location, Mapping):
            return None
        try:
            latitude = float(location["lat"])
            longitude = float(location["lng"])
        except (KeyError, TypeError, ValueError):
            return None
        address = result.get("formatted_address")
        return Coordinate(
            latitude=latitude,
            longitude=longitude,
            formatted_address=str(address) if address else None,
        )


__all__ = ["GOOGLE_GEOCODE_URL", "GoogleGeocodingClient"]
