"""
Core exception class carrying a structured ErrorDetail.
"""

from __future__ import annotations

from typing import Any

from hrms_service_libs.error_handling.error_detail import ErrorDetail


class HrmsError(Exception):
    """Exception raised by HRMS services, rendered as a failure envelope at the edge."""

    def __init__(self, error_detail: ErrorDetail) -> None:
        super().__init__(error_detail.message)
        self.error_detail = error_detail

    def __str__(self) -> str:
        return f"[{self.error_detail.error_code.value}] {self.error_detail.message}"

    @property
    def correlation_id(self) -> str:
        return str(self.error_detail.correlation_id)

    @property
    def error_code(self) -> str:
        return self.error_detail.error_code.value

    @property
    def service(self) -> str:
        return self.error_detail.service

    @property
    def operation(self) -> str:
        return self.error_detail.operation

    @property
    def status_code(self) -> int:
        return self.error_detail.status_code

    @property
    def message(self) -> str:
        return self.error_detail.message

    def to_envelope(self, *, include_error: bool = True) -> dict[str, Any]:
        """Render the client-facing failure envelope.

        Keys under `details["envelope"]` (for example the upstream reply as
        `data`) are merged in. The raw upstream error, when present in
        `details["error"]`, is only included when `include_error` is set.
        """
        envelope: dict[str, Any] = {"success": False, "message": self.message}
        envelope.update(self.error_detail.details.get("envelope") or {})
        if include_error and "error" in self.error_detail.details:
            envelope["error"] = self.error_detail.details["error"]
        return envelope
