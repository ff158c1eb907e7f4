"""Configurações compartilhadas carregadas a partir de variáveis de ambiente."""
from __future__ import annotations

import os
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()

_DEFAULT_API_BIND_HOST = "0.0.0.0"
_DEFAULT_API_PORT = 5000
_DEFAULT_LOG_LEVEL = "INFO"


@lru_cache(maxsize=None)
def get_api_port() -> int:
    """Retorna a porta configurada para expor a API."""

    return int(os.getenv("JANPAD_API_PORT", os.getenv("PORT", _DEFAULT_API_PORT)))


@lru_cache(maxsize=None)
def get_api_bind_host() -> str:
    """Retorna o host utilizado pelo Uvicorn para escutar conexões."""

    return os.getenv("JANPAD_API_BIND_HOST", _DEFAULT_API_BIND_HOST)


@lru_cache(maxsize=None)
def get_log_level() -> str:
    """Retorna o nível de log padrão dos processos do Janpad."""

    return os.getenv("JANPAD_LOG_LEVEL", _DEFAULT_LOG_LEVEL).upper()


__all__ = [
    "get_api_bind_host",
    "get_api_port",
    "get_log_level",
]
