"""Contratos de repositório do domínio."""
from .administrative_unit_repository import AdministrativeUnitRepository

__all__ = ["AdministrativeUnitRepository"]
