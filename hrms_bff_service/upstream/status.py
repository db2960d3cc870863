"""Status conventions of the upstream HR service.

Each upstream operation reports success its own way. The set of conventions
is closed; routes pick one per endpoint and never mix them.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class StatusConvention(str, Enum):
    """How an upstream reply signals success."""

    TOP_LEVEL_STATUS = "top_level_status"
    """`ls_Status == "S"` on the reply itself."""

    NESTED_STATUS = "nested_status"
    """`l_ClsErrorStatus.ls_Status == "S"`."""

    NESTED_INT_ERROR_CODE = "nested_int_error_code"
    """`l_ClsErrorStatus.li_ErrorCode == 0`, compared as an integer."""

    NESTED_STR_ERROR_CODE = "nested_str_error_code"
    """`l_ClsErrorStatus.ls_ErrorCode == "0"`, compared as a string."""

    EITHER_STATUS = "either_status"
    """Top-level or nested `ls_Status == "S"`."""

    LIST_PRESENCE = "list_presence"
    """The named list field is present in the reply."""


@dataclass(frozen=True)
class UpstreamOutcome:
    """Result of interpreting an upstream reply.

    `message` is the upstream-supplied text next to the status flag, or None.
    """

    success: bool
    message: str | None = None


def _nested(body: dict[str, Any]) -> dict[str, Any]:
    status = body.get("l_ClsErrorStatus")
    return status if isinstance(status, dict) else {}


def _text(value: Any) -> str | None:
    # Empty strings fall through to the caller's default message
    return value if isinstance(value, str) and value else None


def interpret(
    body: dict[str, Any],
    convention: StatusConvention,
    list_field: str | None = None,
) -> UpstreamOutcome:
    """Apply `convention` to an upstream reply.

    Args:
        body: Raw upstream JSON object
        convention: The endpoint's status convention
        list_field: Required for LIST_PRESENCE, the `lst_...` key to look for

    Returns:
        UpstreamOutcome with the success flag and upstream message
    """
    nested = _nested(body)

    if convention is StatusConvention.TOP_LEVEL_STATUS:
        return UpstreamOutcome(body.get("ls_Status") == "S", _text(body.get("ls_Message")))

    if convention is StatusConvention.NESTED_STATUS:
        return UpstreamOutcome(nested.get("ls_Status") == "S", _text(nested.get("ls_Message")))

    if convention is StatusConvention.NESTED_INT_ERROR_CODE:
        error_code = nested.get("li_ErrorCode")
        success = isinstance(error_code, int) and not isinstance(error_code, bool) and error_code == 0
        return UpstreamOutcome(success, _text(nested.get("ls_Message")))

    if convention is StatusConvention.NESTED_STR_ERROR_CODE:
        return UpstreamOutcome(nested.get("ls_ErrorCode") == "0", _text(nested.get("ls_Message")))

    if convention is StatusConvention.EITHER_STATUS:
        success = body.get("ls_Status") == "S" or nested.get("ls_Status") == "S"
        return UpstreamOutcome(
            success, _text(body.get("ls_Message")) or _text(nested.get("ls_Message"))
        )

    if convention is StatusConvention.LIST_PRESENCE:
        if list_field is None:
            raise ValueError("LIST_PRESENCE requires list_field")
        return UpstreamOutcome(body.get(list_field) is not None)

    raise ValueError(f"Unknown status convention: {convention!r}")
