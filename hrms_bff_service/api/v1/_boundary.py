"""Route boundary for upstream calls.

Business failures reported inside an upstream reply and transport failures
(connection, timeout, non-2xx) become HrmsError, which the registered
handler renders as the failure envelope.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any
from uuid import UUID

import httpx

from hrms_bff_service import SERVICE_NAME
from hrms_bff_service.upstream.errors import (
    describe_transport_error,
    normalize_upstream_error,
    upstream_error_body,
)
from hrms_bff_service.upstream.status import StatusConvention, UpstreamOutcome, interpret
from hrms_service_libs.error_enums import ErrorCode
from hrms_service_libs.error_handling import (
    raise_upstream_business_error,
    raise_upstream_transport_error,
)
from hrms_service_libs.logging_utils import create_service_logger

logger = create_service_logger("hrms_bff.boundary")


def _error_code_for(error: httpx.HTTPError) -> ErrorCode:
    if isinstance(error, httpx.TimeoutException):
        return ErrorCode.TIMEOUT
    if isinstance(error, httpx.ConnectError):
        return ErrorCode.CONNECTION_ERROR
    return ErrorCode.EXTERNAL_SERVICE_ERROR


def _reply_content(error: httpx.HTTPError) -> Any:
    """The failed reply's body: parsed JSON object, else raw text, else None."""
    if not isinstance(error, httpx.HTTPStatusError) or not error.response.content:
        return None
    body = upstream_error_body(error)
    return body if body is not None else error.response.text


@contextmanager
def upstream_boundary(
    operation: str,
    default_message: str,
    correlation_id: UUID,
    *,
    error_reply_status: int | None = None,
    describe: bool = False,
) -> Iterator[None]:
    """Convert `httpx.HTTPError` raised inside the block into an HrmsError.

    Args:
        operation: Route operation name for logs and error details
        default_message: Message used when upstream supplies none
        correlation_id: Request correlation ID
        error_reply_status: When set, an error reply that carries a body
            renders with this status and the body itself as `error`
        describe: Use a diagnostic message naming the transport failure kind
    """
    try:
        yield
    except httpx.HTTPError as e:
        status_code, envelope = normalize_upstream_error(e, default_message)
        error_detail: Any = envelope["error"]
        message = envelope["message"]

        reply = _reply_content(e)
        if error_reply_status is not None and reply is not None:
            status_code, error_detail = error_reply_status, reply
        elif describe:
            message = describe_transport_error(e, message)

        logger.error(
            "Upstream call failed",
            operation=operation,
            error_type=type(e).__name__,
            error=str(e),
            status_code=status_code,
            correlation_id=str(correlation_id),
        )
        raise_upstream_transport_error(
            service=SERVICE_NAME,
            operation=operation,
            message=message,
            correlation_id=correlation_id,
            status_code=status_code,
            error_code=_error_code_for(e),
            error=error_detail,
        )


def check_outcome(
    body: dict[str, Any],
    convention: StatusConvention,
    *,
    operation: str,
    default_message: str,
    correlation_id: UUID,
    list_field: str | None = None,
    status_code: int = 400,
    envelope: dict[str, Any] | None = None,
) -> UpstreamOutcome:
    """Interpret `body` with the endpoint's convention; raise when it reports failure.

    Extra `envelope` keys (such as the upstream reply) are rendered alongside
    the failure message.
    """
    outcome = interpret(body, convention, list_field)
    if not outcome.success:
        logger.warning(
            "Upstream reported failure",
            operation=operation,
            convention=convention.value,
            upstream_message=outcome.message,
            correlation_id=str(correlation_id),
        )
        details: dict[str, Any] = {"convention": convention.value}
        if envelope:
            details["envelope"] = envelope
        raise_upstream_business_error(
            service=SERVICE_NAME,
            operation=operation,
            message=outcome.message or default_message,
            correlation_id=correlation_id,
            status_code=status_code,
            **details,
        )
    return outcome
