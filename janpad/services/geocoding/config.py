"""Configuração explícita do pipeline de geocodificação."""
from __future__ import annotations

import os
from dataclasses import dataclass, field

from .errors import ConfigurationError
from .validation import Envelope

PROVIDER_GOOGLE = "google"
PROVIDER_NOMINATIM = "nominatim"
PROVIDERS: tuple[str, ...] = (PROVIDER_GOOGLE, PROVIDER_NOMINATIM)

# Google permite 50 req/s; a política do Nominatim exige 1 req/s
_DEFAULT_THROTTLE_SECONDS = {
    PROVIDER_GOOGLE: 0.1,
    PROVIDER_NOMINATIM: 1.1,
}

DEFAULT_ENVELOPE = Envelope(south=27.8, north=28.5, west=78.35, east=79.45)
DEFAULT_USER_AGENT = "Janpad/1.0 (district administrative unit mapping)"


@dataclass
class GeocodingConfig:
    """Parâmetros do distrito, do provedor e do lote usados pelos jobs."""

    provider: str = PROVIDER_GOOGLE
    api_key: str | None = None
    district_name: str = "Budaun"
    state_name: str = "Uttar Pradesh"
    country_name: str = "India"
    envelope: Envelope = field(default_factory=lambda: DEFAULT_ENVELOPE)
    throttle_seconds: float | None = None
    request_timeout: float = 10.0
    default_batch_size: int = 10
    max_batch_size: int = 500
    user_agent: str = DEFAULT_USER_AGENT

    def __post_init__(self) -> None:
        self.provider = (self.provider or PROVIDER_GOOGLE).strip().lower()
        if self.throttle_seconds is None:
            self.throttle_seconds = _DEFAULT_THROTTLE_SECONDS.get(self.provider, 1.0)

    @classmethod
    def from_env(cls) -> "GeocodingConfig":
        """Build a configuration instance from environment variables."""

        def _float_env(name: str, default: float | None) -> float | None:
            raw = os.getenv(name)
            if raw in (None, ""):
                return default
            try:
                return float(raw)
            except ValueError as exc:
                raise ConfigurationError(f"Invalid number in environment variable {name!r}: {raw}") from exc

        def _int_env(name: str, default: int) -> int:
            raw = os.getenv(name)
            if raw in (None, ""):
                return default
            try:
                return int(raw)
            except ValueError as exc:
                raise ConfigurationError(f"Invalid integer in environment variable {name!r}: {raw}") from exc

        raw_envelope = os.getenv("GEOCODING_ENVELOPE")
        envelope = Envelope.parse(raw_envelope) if raw_envelope else DEFAULT_ENVELOPE
        throttle_ms = _float_env("GEOCODING_THROTTLE_MS", None)

        return cls(
            provider=os.getenv("GEOCODING_PROVIDER", PROVIDER_GOOGLE),
            api_key=os.getenv("GOOGLE_MAPS_API_KEY") or None,
            district_name=os.getenv("GEOCODING_DISTRICT", "Budaun"),
            state_name=os.getenv("GEOCODING_STATE", "Uttar Pradesh"),
            envelope=envelope,
            throttle_seconds=throttle_ms / 1000.0 if throttle_ms is not None else None,
            request_timeout=_float_env("GEOCODING_TIMEOUT_SECONDS", 10.0),
            default_batch_size=_int_env("GEOCODING_DEFAULT_BATCH_SIZE", 10),
            max_batch_size=_int_env("GEOCODING_MAX_BATCH_SIZE", 500),
            user_agent=os.getenv("GEOCODING_USER_AGENT", DEFAULT_USER_AGENT),
        )

    def ensure_ready(self) -> None:
        """Falha com ``ConfigurationError`` antes de qualquer chamada externa."""

        if self.provider not in PROVIDERS:
            raise ConfigurationError(
                f"Provedor de geocodificação desconhecido: {self.provider!r} "
                f"(use um de {', '.join(PROVIDERS)})"
            )
        if self.provider == PROVIDER_GOOGLE and not self.api_key:
            raise ConfigurationError("GOOGLE_MAPS_API_KEY não configurada")
        if not self.district_name:
            raise ConfigurationError("Nome do distrito não configurado")
        self.envelope.validate()
        if self.throttle_seconds is None or self.throttle_seconds < 0:
            raise ConfigurationError("Intervalo entre chamadas não pode ser negativo")
        if self.request_timeout <= 0:
            raise ConfigurationError("Timeout das chamadas deve ser positivo")
        if self.max_batch_size < 1:
            raise ConfigurationError("GEOCODING_MAX_BATCH_SIZE deve ser maior que zero")


__all__ = [
    "DEFAULT_ENVELOPE",
    "GeocodingConfig",
    "PROVIDERS",
    "PROVIDER_GOOGLE",
    "PROVIDER_NOMINATIM",
]
