"""Job que revalida coordenadas já gravadas e limpa as que não passam mais."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from janpad.domain import GEOCODABLE_LEVELS, AdministrativeUnitRepository

from ..validation import BoundaryValidator


@dataclass(frozen=True)
class InvalidCoordinate:
    """Unidade cujas coordenadas gravadas falharam na validação."""

    identifier: str
    area_name: str
    level: str
    latitude: float | None
    longitude: float | None
    reason: str

    def to_mapping(self) -> dict[str, Any]:
        return {
            "identifier": self.identifier,
            "name": self.area_name,
            "level": self.level,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "reason": self.reason,
        }


@dataclass(frozen=True)
class CoordinateAuditResult:
    checked: int
    invalid: tuple[InvalidCoordinate, ...]
    errors: tuple[tuple[str, str], ...] = ()
    dry_run: bool = False

    @property
    def invalid_found(self) -> int:
        return len(self.invalid)

    def to_mapping(self) -> dict[str, Any]:
        return {
            "checked": self.checked,
            "invalidFound": self.invalid_found,
            "invalidList": [item.to_mapping() for item in self.invalid],
            "errors": [list(item) for item in self.errors],
            "dryRun": self.dry_run,
        }


class CoordinateAuditJob:
    """Reaplica o ``BoundaryValidator`` às unidades geocodificadas.

    Toda unidade reprovada tem as duas coordenadas removidas e ``isGeocoded``
    volta para ``false``, tornando-se candidata no próximo lote.
    """

    def __init__(
        self,
        repository: AdministrativeUnitRepository,
        validator: BoundaryValidator,
        *,
        logger: logging.Logger | None = None,
    ) -> None:
        self._repository = repository
        self._validator = validator
        self._log = logger or logging.getLogger("janpad.coordinate_audit_job")

    def run(self, *, level: str | None = None, dry_run: bool = False) -> CoordinateAuditResult:
        if level is not None and level not in GEOCODABLE_LEVELS:
            raise ValueError(
                f"Nível não geocodificável: {level!r} (use um de {', '.join(GEOCODABLE_LEVELS)})"
            )
        self._validator.envelope.validate()

        levels = (level,) if level else GEOCODABLE_LEVELS
        # Materializa antes de escrever para não alterar o cursor em uso
        units = list(self._repository.find_flagged_geocoded(levels))
        self._log.info("Validando %d unidade(s) com coordenadas", len(units))

        invalid: list[InvalidCoordinate] = []
        errors: list[tuple[str, str]] = []
        for unit in units:
            validation = self._validator.validate(unit.latitude, unit.longitude, unit.area_name or unit.identifier)
            if validation.valid:
                continue
            invalid.append(
                InvalidCoordinate(
                    identifier=unit.identifier,
                    area_name=unit.area_name,
                    level=unit.level,
                    latitude=unit.latitude,
                    longitude=unit.longitude,
                    reason=validation.reason or "",
                )
            )
            if dry_run:
                self._log.info("[dry-run] Limparia coordenadas de %s: %s", unit.identifier, validation.reason)
                continue
            try:
                if not self._repository.reset_coordinates(unit.id):
                    errors.append((unit.identifier, "documento não encontrado"))
                    continue
            except Exception as exc:
                self._log.exception("Falha ao limpar coordenadas de %s", unit.identifier)
                errors.append((unit.identifier, str(exc)))
                continue
            self._log.warning(
                "Coordenadas removidas de %s (%s): %s",
                unit.area_name,
                unit.level,
                validation.reason,
            )

        self._log.info(
            "Auditoria concluída. Verificadas: %d, Inválidas: %d, Mantidas: %d",
            len(units),
            len(invalid),
            len(units) - len(invalid),
        )
        return CoordinateAuditResult(
            checked=len(units),
            invalid=tuple(invalid),
            errors=tuple(errors),
            dry_run=dry_run,
        )


__all__ = ["CoordinateAuditJob", "CoordinateAuditResult", "InvalidCoordinate"]
