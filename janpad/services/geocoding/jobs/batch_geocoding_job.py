"""Job que geocodifica em lote as unidades pendentes de um nível."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable

from janpad.domain import GEOCODABLE_LEVELS, AdministrativeUnit, AdministrativeUnitRepository, GeocodingProvider

from ..config import GeocodingConfig
from ..errors import (
    MISSING_AREA_NAME,
    PROVIDER_MISS,
    STORE_WRITE_ERROR,
    UNEXPECTED_ERROR,
    VALIDATION_REJECTED,
)
from ..normalization import normalize_area_name
from ..validation import BoundaryValidator


@dataclass(frozen=True)
class BatchGeocodingResult:
    """Resumo das métricas coletadas ao executar um lote de geocodificação."""

    level: str
    success: int
    failed: int
    total: int
    failures: tuple[tuple[str, str], ...]
    elapsed_ms_total: int
    dry_run: bool = False

    def to_mapping(self) -> dict[str, Any]:
        """Serializa o resultado completo para inspeção ou logs."""

        return {
            "level": self.level,
            "success": self.success,
            "failed": self.failed,
            "total": self.total,
            "failures": [list(item) for item in self.failures],
            "elapsed_ms_total": self.elapsed_ms_total,
            "dry_run": self.dry_run,
        }

    def to_summary(self) -> dict[str, int]:
        """Retorna o formato exposto pela API REST."""

        return {
            "success": self.success,
            "failed": self.failed,
            "total": self.total,
        }


class BatchGeocodingJob:
    """Seleciona candidatos, consulta o provedor, valida e grava as coordenadas.

    Cada candidato é processado em sequência com uma pausa fixa entre as
    chamadas. A falha de um candidato nunca interrompe o lote: ela é contada
    em ``failed`` e o candidato permanece pendente para a próxima execução.
    """

    def __init__(
        self,
        repository: AdministrativeUnitRepository,
        provider: GeocodingProvider,
        validator: BoundaryValidator,
        config: GeocodingConfig,
        *,
        sleep: Callable[[float], None] = time.sleep,
        logger: logging.Logger | None = None,
    ) -> None:
        self._repository = repository
        self._provider = provider
        self._validator = validator
        self._config = config
        self._sleep = sleep
        self._log = logger or logging.getLogger("janpad.batch_geocoding_job")

    def run(self, level: str, batch_size: int, *, dry_run: bool = False) -> BatchGeocodingResult:
        """Executa um lote para ``level`` com até ``batch_size`` candidatos."""

        if level not in GEOCODABLE_LEVELS:
            raise ValueError(
                f"Nível não geocodificável: {level!r} (use um de {', '.join(GEOCODABLE_LEVELS)})"
            )
        if isinstance(batch_size, bool) or not isinstance(batch_size, int) or batch_size <= 0:
            raise ValueError("batch_size deve ser um inteiro maior que zero")
        if batch_size > self._config.max_batch_size:
            raise ValueError(
                f"batch_size deve ser no máximo {self._config.max_batch_size}"
            )

        self._config.ensure_ready()

        job_start = time.perf_counter()
        candidates = self._repository.find_candidates(level, batch_size)
        self._log.info("Iniciando geocodificação de %d unidade(s) do nível %s", len(candidates), level)

        success = 0
        failures: list[tuple[str, str]] = []

        provider_called = False
        for unit in candidates:
            if not unit.area_name.strip():
                self._log.warning("Unidade %s sem nome de área", unit.identifier)
                failures.append((unit.identifier, MISSING_AREA_NAME))
                continue
            # Pausa apenas entre chamadas efetivas ao provedor
            if provider_called:
                self._sleep(self._config.throttle_seconds)
            provider_called = True
            try:
                reason = self._process(unit, dry_run=dry_run)
            except Exception as exc:
                self._log.exception("Erro ao geocodificar %s", unit.identifier)
                reason = f"{UNEXPECTED_ERROR}: {exc}"
            if reason is None:
                success += 1
            else:
                failures.append((unit.identifier, reason))

        elapsed_ms = int((time.perf_counter() - job_start) * 1000)
        self._log.info(
            "Geocodificação do nível %s concluída. Sucesso: %d, Falhas: %d",
            level,
            success,
            len(failures),
        )

        return BatchGeocodingResult(
            level=level,
            success=success,
            failed=len(failures),
            total=len(candidates),
            failures=tuple(failures),
            elapsed_ms_total=elapsed_ms,
            dry_run=dry_run,
        )

    def _process(self, unit: AdministrativeUnit, *, dry_run: bool) -> str | None:
        """Processa um candidato e devolve o motivo da falha ou ``None``."""

        query_name = normalize_area_name(unit.area_name)
        self._log.debug("Tentando geocodificar %s -> %s", unit.area_name, query_name)

        coordinate = self._provider.geocode(
            query_name,
            unit.subdistrict,
            self._config.district_name,
            self._config.state_name,
        )
        if coordinate is None:
            self._log.warning("Falha ao geocodificar %s", unit.area_name)
            return PROVIDER_MISS

        validation = self._validator.validate(coordinate.latitude, coordinate.longitude, unit.area_name)
        if not validation.valid:
            self._log.warning("Rejeitado %s: %s", unit.area_name, validation.reason)
            return f"{VALIDATION_REJECTED}: {validation.reason}"

        if dry_run:
            self._log.info(
                "[dry-run] Atualizaria %s com %s, %s",
                unit.area_name,
                coordinate.latitude,
                coordinate.longitude,
            )
            return None

        try:
            updated = self._repository.mark_geocoded(unit.id, coordinate)
        except Exception as exc:
            self._log.exception("Falha ao gravar coordenadas de %s", unit.identifier)
            return f"{STORE_WRITE_ERROR}: {exc}"
        if not updated:
            return f"{STORE_WRITE_ERROR}: documento não encontrado"

        self._log.info(
            "Geocodificado %s (%s) -> %s, %s [%s]",
            unit.area_name,
            unit.level,
            coordinate.latitude,
            coordinate.longitude,
            coordinate.formatted_address or "sem endereço",
        )
        return None


__all__ = ["BatchGeocodingJob", "BatchGeocodingResult"]
