from .batch_geocoding_job import BatchGeocodingJob, BatchGeocodingResult
from .coordinate_audit_job import CoordinateAuditJob, CoordinateAuditResult, InvalidCoordinate

__all__ = [
    "BatchGeocodingJob",
    "BatchGeocodingResult",
    "CoordinateAuditJob",
    "CoordinateAuditResult",
    "InvalidCoordinate",
]
