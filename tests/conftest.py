"""Pytest configuration and fixtures."""

import json
from typing import Any, Callable, Optional
from unittest.mock import Mock

import pytest
import requests


def build_placemark(
    coordinates=(37.4, -122.1, 0),
    address: str = "1600 Amphitheatre Pkwy",
    state: str = "California",
    city: Optional[str] = "Mountain View",
    zip_code: Optional[str] = "94043",
    fallback_city: Optional[str] = None,
    fallback_zip: Optional[str] = None,
) -> dict:
    """Build a placemark in the geocoder's nested AddressDetails layout."""
    admin_area: dict = {"AdministrativeAreaName": state}

    if city is not None or zip_code is not None:
        locality: dict = {"LocalityName": city}
        if zip_code is not None:
            locality["PostalCode"] = {"PostalCodeNumber": zip_code}
        admin_area["SubAdministrativeArea"] = {"Locality": locality}

    if fallback_city is not None or fallback_zip is not None:
        locality = {"LocalityName": fallback_city}
        if fallback_zip is not None:
            locality["PostalCode"] = {"PostalCodeNumber": fallback_zip}
        admin_area["Locality"] = locality

    placemark = {
        "address": address,
        "AddressDetails": {"Country": {"AdministrativeArea": admin_area}},
    }
    if coordinates is not None:
        placemark["Point"] = {"coordinates": list(coordinates)}
    return placemark


@pytest.fixture
def placemark() -> Callable[..., dict]:
    """Factory for placemark dicts."""
    return build_placemark


@pytest.fixture
def make_response() -> Callable[..., requests.Response]:
    """Factory for real requests.Response objects with a canned body."""

    def _make(status_code: int = 200, payload: Any = None, text: Optional[str] = None) -> requests.Response:
        response = requests.Response()
        response.status_code = status_code
        body = text if text is not None else json.dumps(payload if payload is not None else {})
        response._content = body.encode("utf-8")
        response.encoding = "utf-8"
        return response

    return _make


@pytest.fixture
def session() -> Mock:
    """Mocked requests session; set session.get.return_value per test."""
    return Mock(spec=requests.Session)
