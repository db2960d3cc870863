"""
hrms_service_libs.error_enums - Centralized error code definitions.
"""

from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    MISSING_REQUIRED_FIELD = "MISSING_REQUIRED_FIELD"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    AUTHENTICATION_ERROR = "AUTHENTICATION_ERROR"
    NOT_IMPLEMENTED = "NOT_IMPLEMENTED"

    # Upstream HR service failures
    UPSTREAM_BUSINESS_ERROR = "UPSTREAM_BUSINESS_ERROR"  # Transport ok, status flag says no
    EXTERNAL_SERVICE_ERROR = "EXTERNAL_SERVICE_ERROR"  # Non-2xx from upstream
    TIMEOUT = "TIMEOUT"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    PROCESSING_ERROR = "PROCESSING_ERROR"


# Default HTTP status per error code; factories may override per call
ERROR_CODE_TO_HTTP_STATUS: dict[ErrorCode, int] = {
    ErrorCode.UNKNOWN_ERROR: 500,
    ErrorCode.VALIDATION_ERROR: 400,
    ErrorCode.MISSING_REQUIRED_FIELD: 400,
    ErrorCode.RESOURCE_NOT_FOUND: 404,
    ErrorCode.CONFIGURATION_ERROR: 500,
    ErrorCode.AUTHENTICATION_ERROR: 401,
    ErrorCode.NOT_IMPLEMENTED: 501,
    ErrorCode.UPSTREAM_BUSINESS_ERROR: 400,
    ErrorCode.EXTERNAL_SERVICE_ERROR: 500,
    ErrorCode.TIMEOUT: 500,
    ErrorCode.CONNECTION_ERROR: 500,
    ErrorCode.PROCESSING_ERROR: 500,
}
