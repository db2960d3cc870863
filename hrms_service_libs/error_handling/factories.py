"""
Factory functions that build an ErrorDetail and raise HrmsError.

Each factory fixes the error code and default HTTP status so call sites only
describe what went wrong. All factories are typed NoReturn.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, NoReturn
from uuid import UUID

from hrms_service_libs.error_enums import ERROR_CODE_TO_HTTP_STATUS, ErrorCode
from hrms_service_libs.error_handling.error_detail import ErrorDetail
from hrms_service_libs.error_handling.hrms_error import HrmsError


def create_error_detail(
    error_code: ErrorCode,
    message: str,
    service: str,
    operation: str,
    correlation_id: UUID,
    *,
    status_code: int | None = None,
    details: dict[str, Any] | None = None,
) -> ErrorDetail:
    """Build an ErrorDetail stamped with the current UTC time."""
    return ErrorDetail(
        error_code=error_code,
        message=message,
        correlation_id=correlation_id,
        timestamp=datetime.now(timezone.utc),
        service=service,
        operation=operation,
        status_code=status_code or ERROR_CODE_TO_HTTP_STATUS[error_code],
        details=details or {},
    )


def _raise(
    error_code: ErrorCode,
    *,
    service: str,
    operation: str,
    message: str,
    correlation_id: UUID,
    status_code: int | None = None,
    **additional_context: Any,
) -> NoReturn:
    raise HrmsError(
        create_error_detail(
            error_code,
            message,
            service,
            operation,
            correlation_id,
            status_code=status_code,
            details=additional_context,
        )
    )


def raise_validation_error(
    service: str,
    operation: str,
    field: str,
    message: str,
    correlation_id: UUID,
    value: Any = None,
    **additional_context: Any,
) -> NoReturn:
    """Client input is invalid (400)."""
    details: dict[str, Any] = {"field": field}
    if value is not None:
        details["value"] = value
    details.update(additional_context)
    _raise(
        ErrorCode.VALIDATION_ERROR,
        service=service,
        operation=operation,
        message=message,
        correlation_id=correlation_id,
        **details,
    )


def raise_missing_required_field(
    service: str,
    operation: str,
    missing_fields: list[str],
    message: str,
    correlation_id: UUID,
    **additional_context: Any,
) -> NoReturn:
    """One or more required inputs are absent (400)."""
    _raise(
        ErrorCode.MISSING_REQUIRED_FIELD,
        service=service,
        operation=operation,
        message=message,
        correlation_id=correlation_id,
        missing_fields=missing_fields,
        **additional_context,
    )


def raise_authentication_error(
    service: str,
    operation: str,
    message: str,
    correlation_id: UUID,
    **additional_context: Any,
) -> NoReturn:
    """Credentials were rejected (401)."""
    _raise(
        ErrorCode.AUTHENTICATION_ERROR,
        service=service,
        operation=operation,
        message=message,
        correlation_id=correlation_id,
        **additional_context,
    )


def raise_resource_not_found(
    service: str,
    operation: str,
    resource_type: str,
    resource_id: str,
    correlation_id: UUID,
    message: str | None = None,
    **additional_context: Any,
) -> NoReturn:
    """A local resource (file, image) is missing (404)."""
    _raise(
        ErrorCode.RESOURCE_NOT_FOUND,
        service=service,
        operation=operation,
        message=message or f"{resource_type} with ID '{resource_id}' not found",
        correlation_id=correlation_id,
        resource_type=resource_type,
        resource_id=resource_id,
        **additional_context,
    )


def raise_configuration_error(
    service: str,
    operation: str,
    config_key: str,
    message: str,
    correlation_id: UUID,
    **additional_context: Any,
) -> NoReturn:
    """Required configuration is missing (500)."""
    _raise(
        ErrorCode.CONFIGURATION_ERROR,
        service=service,
        operation=operation,
        message=message,
        correlation_id=correlation_id,
        config_key=config_key,
        **additional_context,
    )


def raise_not_implemented(
    service: str,
    operation: str,
    message: str,
    correlation_id: UUID,
    **additional_context: Any,
) -> NoReturn:
    """The route has no upstream integration behind it yet (501)."""
    _raise(
        ErrorCode.NOT_IMPLEMENTED,
        service=service,
        operation=operation,
        message=message,
        correlation_id=correlation_id,
        **additional_context,
    )


def raise_upstream_business_error(
    service: str,
    operation: str,
    message: str,
    correlation_id: UUID,
    status_code: int = 400,
    **additional_context: Any,
) -> NoReturn:
    """Upstream answered, but its embedded status flag signals failure."""
    _raise(
        ErrorCode.UPSTREAM_BUSINESS_ERROR,
        service=service,
        operation=operation,
        message=message,
        correlation_id=correlation_id,
        status_code=status_code,
        **additional_context,
    )


def raise_upstream_transport_error(
    service: str,
    operation: str,
    message: str,
    correlation_id: UUID,
    status_code: int,
    error_code: ErrorCode = ErrorCode.EXTERNAL_SERVICE_ERROR,
    **additional_context: Any,
) -> NoReturn:
    """The upstream call itself failed: connection, timeout or non-2xx."""
    _raise(
        error_code,
        service=service,
        operation=operation,
        message=message,
        correlation_id=correlation_id,
        status_code=status_code,
        **additional_context,
    )


def raise_processing_error(
    service: str,
    operation: str,
    message: str,
    correlation_id: UUID,
    **additional_context: Any,
) -> NoReturn:
    """Local processing failed in a way the client cannot fix (500)."""
    _raise(
        ErrorCode.PROCESSING_ERROR,
        service=service,
        operation=operation,
        message=message,
        correlation_id=correlation_id,
        **additional_context,
    )
