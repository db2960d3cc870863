"""Presence checks for route inputs, run before any upstream call."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any
from uuid import UUID

from hrms_bff_service.api.v1._boundary import SERVICE_NAME
from hrms_service_libs.error_handling import raise_missing_required_field


def is_blank(value: Any) -> bool:
    """True for absent inputs: None, empty string, False, zero."""
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (int, float)):
        return value == 0 or value != value
    return False


def require_fields(
    source: Mapping[str, Any],
    fields: Sequence[str],
    *,
    operation: str,
    correlation_id: UUID,
    message: str | None = None,
) -> None:
    """Raise a 400 naming every blank field; `message` overrides the default text."""
    missing = [field for field in fields if is_blank(source.get(field))]
    if missing:
        raise_missing_required_field(
            service=SERVICE_NAME,
            operation=operation,
            missing_fields=missing,
            message=message or f"Missing fields: {', '.join(missing)}",
            correlation_id=correlation_id,
        )
