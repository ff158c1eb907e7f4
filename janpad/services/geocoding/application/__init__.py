from .status_service import GeocodingStatusService, format_percentage

__all__ = ["GeocodingStatusService", "format_percentage"]
