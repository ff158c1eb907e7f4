"""Rotas FastAPI que disparam e acompanham a geocodificação."""
from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ConfigDict, Field

from janpad.domain import GEOCODABLE_LEVELS

from .container import GeocodingContainer
from .errors import ConfigurationError

log = logging.getLogger("janpad.geocoding.api")


class GeocodeBatchRequest(BaseModel):
    """Corpo aceito pelas rotas que executam um lote."""

    model_config = ConfigDict(populate_by_name=True)

    #: Quantidade máxima de candidatos processados na chamada.
    batch_size: int | None = Field(default=None, ge=1, alias="batchSize")
    #: Quando verdadeiro, valida sem gravar coordenadas.
    dry_run: bool = Field(default=False, alias="dryRun")


class GeocodeBatchResponse(BaseModel):
    """Contagem de um lote executado."""

    success: int
    failed: int
    total: int


class CoordinateAuditRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    level: str | None = None
    dry_run: bool = Field(default=False, alias="dryRun")


class LevelStatusResponse(BaseModel):
    total: int
    geocoded: int
    pending: int
    #: Percentual com uma casa decimal (``"37.0"``) ou ``0`` sem unidades.
    percentage: str | int


class GeocodingStatusResponse(BaseModel):
    villages: LevelStatusResponse
    towns: LevelStatusResponse
    wards: LevelStatusResponse
    overall: LevelStatusResponse


def configure_cors(app: FastAPI) -> None:
    """Configura o CORS padrão utilizado pelos serviços do Janpad."""

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def include_routes(
    app: FastAPI, container: GeocodingContainer, *, prefix: str = "/api/v1"
) -> None:
    """Registra as rotas de geocodificação na aplicação."""

    demographics = APIRouter(prefix=f"{prefix}/demographics", tags=["Geocodificação"])
    villages = APIRouter(prefix=f"{prefix}/villages", tags=["Geocodificação"])

    def run_batch(level: str, payload: GeocodeBatchRequest | None) -> GeocodeBatchResponse:
        payload = payload or GeocodeBatchRequest()
        batch_size = (
            payload.batch_size if payload.batch_size is not None else container.config.default_batch_size
        )
        try:
            result = container.batch_job.run(level, batch_size, dry_run=payload.dry_run)
        except ConfigurationError as exc:
            log.error("Geocodificação indisponível: %s", exc)
            raise HTTPException(status_code=503, detail=str(exc)) from exc
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return GeocodeBatchResponse(**result.to_summary())

    @demographics.post("/geocode-towns", response_model=GeocodeBatchResponse)
    def geocode_towns(payload: GeocodeBatchRequest | None = None) -> GeocodeBatchResponse:
        """Geocodifica um lote de cidades pendentes."""

        return run_batch("town", payload)

    @demographics.post("/geocode-wards", response_model=GeocodeBatchResponse)
    def geocode_wards(payload: GeocodeBatchRequest | None = None) -> GeocodeBatchResponse:
        """Geocodifica um lote de wards pendentes."""

        return run_batch("ward", payload)

    @villages.post("/geocode", response_model=GeocodeBatchResponse)
    def geocode_villages(payload: GeocodeBatchRequest | None = None) -> GeocodeBatchResponse:
        """Geocodifica um lote de vilas pendentes."""

        return run_batch("village", payload)

    @demographics.get("/geocoding-status", response_model=GeocodingStatusResponse)
    def geocoding_status() -> dict[str, Any]:
        """Resumo de unidades geocodificadas e pendentes por nível."""

        return container.status_service.status()

    @demographics.get("/geocoding-pending")
    def geocoding_pending(
        level: str = Query(..., description=f"Um de {', '.join(GEOCODABLE_LEVELS)}"),
        limit: int = Query(10, ge=1, le=500),
    ) -> dict[str, Any]:
        """Lista candidatos pendentes com a consulta que seria enviada."""

        try:
            return container.status_service.pending_report(level, limit)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc

    @demographics.post("/geocoding-audit")
    def geocoding_audit(payload: CoordinateAuditRequest | None = None) -> dict[str, Any]:
        """Revalida coordenadas gravadas e limpa as reprovadas."""

        payload = payload or CoordinateAuditRequest()
        try:
            result = container.audit_job.run(level=payload.level, dry_run=payload.dry_run)
        except ConfigurationError as exc:
            raise HTTPException(status_code=503, detail=str(exc)) from exc
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return result.to_mapping()

    app.include_router(demographics)
    app.include_router(villages)


__all__ = [
    "CoordinateAuditRequest",
    "GeocodeBatchRequest",
    "GeocodeBatchResponse",
    "GeocodingStatusResponse",
    "LevelStatusResponse",
    "configure_cors",
    "include_routes",
]
