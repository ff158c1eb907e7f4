"""Adaptadores de infraestrutura do serviço de geocodificação."""

from .mongo_administrative_unit_repository import MongoAdministrativeUnitRepository

__all__ = ["MongoAdministrativeUnitRepository"]
