"""Ponto de entrada REST que agrega os serviços do Janpad."""
from __future__ import annotations

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI

from janpad.services.geocoding import build_geocoding_container
from janpad.services.geocoding.api import (
    configure_cors as configure_default_cors,
    include_routes as include_geocoding_routes,
)
from janpad.settings import get_api_bind_host, get_api_port


def create_app() -> FastAPI:
    """Cria a aplicação FastAPI com todas as rotas de serviços configuradas."""

    geocoding_container = build_geocoding_container()

    app = FastAPI(
        title="Janpad API",
        version="1.0.0",
        description=(
            "Geocodificação em lote, acompanhamento e auditoria das coordenadas "
            "das vilas, cidades e wards do distrito."
        ),
    )
    configure_default_cors(app)
    include_geocoding_routes(app, geocoding_container)
    return app


def run() -> None:
    """Executa a API agregada utilizando o Uvicorn."""

    load_dotenv()
    uvicorn.run(
        "janpad.api:create_app",
        host=get_api_bind_host(),
        port=get_api_port(),
        factory=True,
    )


__all__ = ["create_app", "run"]
