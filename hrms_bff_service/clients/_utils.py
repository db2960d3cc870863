"""Shared utilities for HRMS BFF Service HTTP clients."""

from __future__ import annotations

from typing import Any

import httpx

from hrms_service_libs.logging_utils import create_service_logger

logger = create_service_logger("hrms_bff.clients")


def decode_json_object(response: httpx.Response) -> dict[str, Any]:
    """Decode a JSON object body.

    Args:
        response: A successful httpx response

    Returns:
        The decoded object, or {} when the body is not JSON or not an object
    """
    try:
        data = response.json()
    except ValueError:
        logger.warning(
            "Non-JSON response body",
            status_code=response.status_code,
            content_type=response.headers.get("content-type"),
        )
        return {}
    return data if isinstance(data, dict) else {}
