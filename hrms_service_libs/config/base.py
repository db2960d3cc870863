"""Shared settings base for HRMS services."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from hrms_service_libs.config_enums import Environment


class ServiceSettings(BaseSettings):
    """Environment-driven settings common to every HRMS service.

    Subclasses set their own `env_prefix`; `ENVIRONMENT` is always read
    unprefixed so one variable switches a whole deployment.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    SERVICE_NAME: str = "hrms-service"

    ENVIRONMENT: Environment = Field(
        default=Environment.DEVELOPMENT,
        validation_alias="ENVIRONMENT",
        description="Runtime environment for the service",
    )

    LOG_LEVEL: str = Field(default="INFO", description="Logging level")

    def is_development(self) -> bool:
        return self.ENVIRONMENT == Environment.DEVELOPMENT

    def is_production(self) -> bool:
        return self.ENVIRONMENT == Environment.PRODUCTION
