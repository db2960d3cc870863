"""
Standardized, pure error data model shared by HRMS services.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from hrms_service_libs.error_enums import ErrorCode


class ErrorDetail(BaseModel):
    """
    The canonical data model for an error raised inside an HRMS service.

    `status_code` is the HTTP status the error renders with; `details` carries
    structured context (field names, upstream status, raw error text).
    """

    error_code: ErrorCode
    message: str
    correlation_id: UUID
    timestamp: datetime
    service: str
    operation: str
    status_code: int = 500
    details: dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)
