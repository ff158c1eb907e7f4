"""Entidades de domínio utilizadas na geocodificação de unidades administrativas."""
from .administrative_unit import GEOCODABLE_LEVELS, LEVELS, RESIDENCES, AdministrativeUnit
from .coordinate import Coordinate

__all__ = [
    "AdministrativeUnit",
    "Coordinate",
    "GEOCODABLE_LEVELS",
    "LEVELS",
    "RESIDENCES",
]
