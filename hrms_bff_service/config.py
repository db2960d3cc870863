"""Configuration for HRMS BFF Service.

Uses Pydantic settings for environment-based configuration. The upstream
gateway never reads settings directly; it receives an immutable
`UpstreamConfig` built once from them.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType

from pydantic import AliasChoices, Field
from pydantic_settings import SettingsConfigDict

from hrms_service_libs.config import ServiceSettings


class HRMSBFFSettings(ServiceSettings):
    """Configuration settings for HRMS BFF Service."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="HRMS_BFF_SERVICE_",
        case_sensitive=False,
        extra="ignore",
    )

    # Service identity
    SERVICE_NAME: str = "hrms-bff-service"

    # HTTP server configuration
    HOST: str = Field(default="0.0.0.0", description="HTTP server host")
    PORT: int = Field(default=5001, description="HTTP server port")
    API_PREFIX: str = Field(default="/api", description="Prefix for all HR routes")

    # CORS configuration for the HRMS web client
    CORS_ORIGINS: list[str] = Field(
        default=[
            "http://localhost:85",
            "http://localhost:5173",
            "http://127.0.0.1:5173",
            "http://127.0.0.1:85",
        ],
        description="Allowed CORS origins for the frontend",
    )
    CORS_ALLOW_CREDENTIALS: bool = Field(
        default=True, description="Allow credentials in CORS requests"
    )
    CORS_ALLOW_METHODS: list[str] = Field(
        default=["GET", "POST", "OPTIONS"],
        description="Allowed HTTP methods for CORS",
    )
    CORS_ALLOW_HEADERS: list[str] = Field(
        default=["*"], description="Allowed headers for CORS requests"
    )

    # Upstream WCF service
    UPSTREAM_BASE_URL: str = Field(
        default="http://localhost:84/ASTL_HRMS_WCF.WCF_ASTL_HRMS.svc",
        description="Base URL of the upstream HR WCF service",
    )

    # HTTP client configuration
    HTTP_CLIENT_TIMEOUT_SECONDS: float = Field(
        default=10.0,
        description="Default upstream request timeout in seconds",
    )
    HTTP_CLIENT_CONNECT_TIMEOUT_SECONDS: float = Field(
        default=10.0,
        description="HTTP client connection timeout in seconds",
    )
    UPSTREAM_TIMEOUTS: dict[str, float | None] = Field(
        default={"GetLeaveTypes": 5.0, "PaySlipGenerate": 300.0},
        description="Per-endpoint timeout overrides in seconds; null disables the timeout",
    )

    # Reverse geocoding
    GOOGLE_MAPS_API_KEY: str | None = Field(
        default=None,
        validation_alias=AliasChoices("HRMS_BFF_SERVICE_GOOGLE_MAPS_API_KEY", "GOOGLE_MAPS_API_KEY"),
        description="Google Maps Geocoding API key",
    )
    GEOCODE_URL: str = Field(
        default="https://maps.googleapis.com/maps/api/geocode/json",
        description="Google Geocoding API endpoint",
    )

    # Allowance attachments
    ALLOWANCE_UPLOAD_DIR: Path = Field(
        default=Path("uploads/allowance"),
        description="Directory where allowance attachments are stored",
    )
    ALLOWANCE_UPSTREAM_ROOT: str = Field(
        default="D:\\Allowence",
        description="Root path the upstream service expects attachment paths under",
    )
    ALLOWANCE_MAX_FILE_BYTES: int = Field(
        default=10 * 1024 * 1024, description="Maximum size of one attachment"
    )

    # Error envelopes
    EXPOSE_ERROR_DETAILS: bool = Field(
        default=True,
        description="Include raw upstream error text under `error` in failure envelopes",
    )

    def upstream_config(self) -> UpstreamConfig:
        """Snapshot the upstream-facing settings into an immutable value."""
        return UpstreamConfig(
            base_url=self.UPSTREAM_BASE_URL.rstrip("/"),
            default_timeout=self.HTTP_CLIENT_TIMEOUT_SECONDS,
            timeouts=MappingProxyType(dict(self.UPSTREAM_TIMEOUTS)),
        )


@dataclass(frozen=True)
class UpstreamConfig:
    """Immutable request configuration for the upstream WCF service."""

    base_url: str
    default_timeout: float | None = 10.0
    timeouts: Mapping[str, float | None] = field(default_factory=lambda: MappingProxyType({}))
    headers: Mapping[str, str] = field(
        default_factory=lambda: MappingProxyType({"Content-Type": "application/json"})
    )

    def url_for(self, endpoint: str) -> str:
        return f"{self.base_url}/{endpoint.lstrip('/')}"

    def timeout_for(self, endpoint: str) -> float | None:
        """Per-endpoint override if configured, else the default timeout."""
        if endpoint in self.timeouts:
            return self.timeouts[endpoint]
        return self.default_timeout


# Global settings instance
settings = HRMSBFFSettings()
