"""API pública do domínio do Janpad.

O módulo centraliza as entidades, portas e repositórios mais utilizados
para que possam ser importados diretamente de ``janpad.domain``.
"""

from .entities import GEOCODABLE_LEVELS, LEVELS, RESIDENCES, AdministrativeUnit, Coordinate
from .ports import GeocodingProvider
from .repositories import AdministrativeUnitRepository

__all__ = [
    "AdministrativeUnit",
    "AdministrativeUnitRepository",
    "Coordinate",
    "GEOCODABLE_LEVELS",
    "GeocodingProvider",
    "LEVELS",
    "RESIDENCES",
]
