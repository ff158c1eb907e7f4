"""Erros e motivos de falha do pipeline de geocodificação."""
from __future__ import annotations


class ConfigurationError(RuntimeError):
    """Configuração ausente ou inválida que impede qualquer lote de rodar."""


#: Prefixos dos motivos registrados para cada candidato que falhou.
PROVIDER_MISS = "provider-miss"
VALIDATION_REJECTED = "validation-rejected"
STORE_WRITE_ERROR = "store-write-error"
MISSING_AREA_NAME = "missing-area-name"
UNEXPECTED_ERROR = "unexpected-error"


__all__ = [
    "ConfigurationError",
    "MISSING_AREA_NAME",
    "PROVIDER_MISS",
    "STORE_WRITE_ERROR",
    "UNEXPECTED_ERROR",
    "VALIDATION_REJECTED",
]
