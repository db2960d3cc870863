"""Translate failed upstream calls into failure envelopes."""

from __future__ import annotations

from typing import Any

import httpx


def _response_of(error: BaseException) -> httpx.Response | None:
    if isinstance(error, httpx.HTTPStatusError):
        return error.response
    return None


def upstream_error_body(error: BaseException) -> dict[str, Any] | None:
    """Return the JSON object carried by a failed reply, or None.

    Never raises: unreadable and non-object bodies yield None.
    """
    response = _response_of(error)
    if response is None:
        return None
    try:
        body = response.json()
    except ValueError:
        return None
    return body if isinstance(body, dict) else None


def _first_text(body: dict[str, Any] | None, *keys: str) -> str | None:
    if not body:
        return None
    for key in keys:
        value = body.get(key)
        if isinstance(value, str) and value:
            return value
    return None


def normalize_upstream_error(
    error: BaseException,
    default_message: str,
    *,
    include_error: bool = True,
) -> tuple[int, dict[str, Any]]:
    """Map a failed upstream call to `(status, envelope)`.

    The status is the upstream HTTP status when the error carries a reply,
    else 500. The message prefers the upstream `ls_Message`, then `message`,
    then `default_message`.
    """
    response = _response_of(error)
    status = response.status_code if response is not None else 500
    body = upstream_error_body(error)

    envelope: dict[str, Any] = {
        "success": False,
        "message": _first_text(body, "ls_Message", "message") or default_message,
    }
    if include_error:
        envelope["error"] = str(error)
    return status, envelope


def describe_transport_error(error: BaseException, default_message: str) -> str:
    """Diagnostic message naming the kind of transport failure."""
    if isinstance(error, httpx.ConnectError):
        return "Unable to connect to the HR service. Please check that it is running."
    if isinstance(error, httpx.TimeoutException):
        return "The HR service did not respond in time. Please try again later."
    response = _response_of(error)
    if response is not None and response.status_code == 404:
        return "The HR service endpoint was not found."
    if response is not None and response.status_code == 500:
        return "The HR service reported an internal error."
    return default_message
