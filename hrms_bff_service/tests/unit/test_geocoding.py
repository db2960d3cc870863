"""Tests for reverse-geocode address normalization."""

from __future__ import annotations

from hrms_bff_service.geocoding import clean_formatted_address, normalize_address


def test_named_place_is_followed_by_last_two_segments() -> None:
    result = {
        "formatted_address": "Tech Park, MG Road, Bengaluru, Karnataka 560001, India",
        "address_components": [
            {"long_name": "12", "types": ["street_number"]},
            {"long_name": "Tech Park", "types": ["point_of_interest", "establishment"]},
        ],
    }

    assert normalize_address(result) == "Tech Park,  Karnataka 560001, India"


def test_first_preferred_component_wins() -> None:
    result = {
        "formatted_address": "A, B, C",
        "address_components": [
            {"long_name": "Tower 2", "types": ["subpremise"]},
            {"long_name": "Campus", "types": ["establishment"]},
        ],
    }

    assert normalize_address(result) == "Tower 2,  B, C"


def test_without_named_place_formatted_address_is_cleaned() -> None:
    result = {
        "formatted_address": "12, MG Road, Bengaluru, Karnataka 560001, IN",
        "address_components": [{"long_name": "MG Road", "types": ["route"]}],
    }

    assert normalize_address(result) == "12, MG Road, Bengaluru, Karnataka"


def test_missing_fields_yield_empty_address() -> None:
    assert normalize_address({}) == ""


def test_clean_collapses_segments_left_by_postal_codes() -> None:
    assert clean_formatted_address("Sector 5, 400001, Mumbai") == "Sector 5, Mumbai"
