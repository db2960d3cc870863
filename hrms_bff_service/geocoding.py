"""Readable place names from Google reverse-geocode results."""

from __future__ import annotations

import re
from typing import Any

PREFERRED_COMPONENT_TYPES = frozenset({"establishment", "point_of_interest", "premise", "subpremise"})

_POSTAL_CODE = re.compile(r"\b\d{5,6}\b")
_TRAILING_COUNTRY_CODE = re.compile(r",\s*[A-Z]{2,3}$")
_EMPTY_SEGMENT = re.compile(r",\s+,")


def clean_formatted_address(formatted: str) -> str:
    """Strip postal codes and a trailing country code, then collapse empty segments."""
    cleaned = _POSTAL_CODE.sub("", formatted)
    cleaned = _TRAILING_COUNTRY_CODE.sub("", cleaned)
    cleaned = _EMPTY_SEGMENT.sub(",", cleaned)
    return cleaned.strip()


def normalize_address(result: dict[str, Any]) -> str:
    """Build a short location name from one geocode result.

    A named place (establishment, point of interest, premise) wins and is
    followed by the last two segments of the formatted address. Otherwise
    the formatted address is cleaned up.
    """
    formatted: str = result.get("formatted_address") or ""
    location = formatted

    for component in result.get("address_components") or []:
        types = component.get("types") or []
        if any(t in PREFERRED_COMPONENT_TYPES for t in types):
            tail = ",".join(formatted.split(",")[-2:])
            location = f"{component.get('long_name', '')}, {tail}"
            break

    if location == formatted:
        location = clean_formatted_address(formatted)
    return location
