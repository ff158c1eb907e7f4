"""Dependency container for the geocoding service."""
from __future__ import annotations

from dataclasses import dataclass

from janpad.domain import AdministrativeUnitRepository, GeocodingProvider
from janpad.infrastructure.database import MongoClientFactory

from .application import GeocodingStatusService
from .clients import build_geocoding_provider
from .config import GeocodingConfig
from .infrastructure import MongoAdministrativeUnitRepository
from .jobs import BatchGeocodingJob, CoordinateAuditJob
from .validation import BoundaryValidator


@dataclass
class GeocodingContainer:
    """Container exposing the service dependencies for geocoding."""

    config: GeocodingConfig
    repository: AdministrativeUnitRepository
    provider: GeocodingProvider
    validator: BoundaryValidator
    batch_job: BatchGeocodingJob
    audit_job: CoordinateAuditJob
    status_service: GeocodingStatusService

    def close(self) -> None:
        self.provider.close()


def assemble_geocoding_container(
    repository: AdministrativeUnitRepository,
    provider: GeocodingProvider,
    config: GeocodingConfig,
    **job_options,
) -> GeocodingContainer:
    """Wire the jobs around an already built repository and provider."""

    validator = BoundaryValidator(config.envelope, config.district_name)
    return GeocodingContainer(
        config=config,
        repository=repository,
        provider=provider,
        validator=validator,
        batch_job=BatchGeocodingJob(repository, provider, validator, config, **job_options),
        audit_job=CoordinateAuditJob(repository, validator),
        status_service=GeocodingStatusService(repository, config),
    )


def build_geocoding_container(
    factory: MongoClientFactory | None = None,
    config: GeocodingConfig | None = None,
) -> GeocodingContainer:
    """Build the geocoding service container."""

    factory = factory or MongoClientFactory()
    config = config or GeocodingConfig.from_env()

    repository = MongoAdministrativeUnitRepository(factory.get_units_collection())
    provider = build_geocoding_provider(config)
    return assemble_geocoding_container(repository, provider, config)


__all__ = [
    "GeocodingContainer",
    "assemble_geocoding_container",
    "build_geocoding_container",
]
