"""Response envelope shared by every HRMS route: `{success, message, ...payload}`."""

from __future__ import annotations

from typing import Any

from fastapi.responses import JSONResponse


def envelope(success: bool, message: str, **payload: Any) -> JSONResponse:
    """Build a 200 envelope; payload values must already be JSON-ready."""
    return JSONResponse(content={"success": success, "message": message, **payload})


def ok(message: str, **payload: Any) -> JSONResponse:
    return envelope(True, message, **payload)
