"""
Placemark Parsing
---------------
Extracts a GeocodeResult from a decoded geocoder response.
Every field is taken from the first placemark that supplies it, so one result can combine several placemarks.
"""
import logging
from typing import Any, Optional

from src.geocoding.exceptions import MalformedResponseError
from src.models.geocode import GeocodeResult

logger = logging.getLogger(__name__)

ADMIN_AREA_PATH = ("AddressDetails", "Country", "AdministrativeArea")
STATE_PATH = ADMIN_AREA_PATH + ("AdministrativeAreaName",)
CITY_PATHS = (
    ADMIN_AREA_PATH + ("SubAdministrativeArea", "Locality", "LocalityName"),
    ADMIN_AREA_PATH + ("Locality", "LocalityName"),
)
ZIP_PATHS = (
    ADMIN_AREA_PATH + ("SubAdministrativeArea", "Locality", "PostalCode", "PostalCodeNumber"),
    ADMIN_AREA_PATH + ("Locality", "PostalCode", "PostalCodeNumber"),
)


def _dig(node: Any, path) -> Any:
    # Missing levels of the address hierarchy are normal, not an error
    for key in path:
        if not isinstance(node, dict):
            return None
        node = node.get(key)
    return node


def _is_empty(value) -> bool:
    return value is None or value == ""


def _first_non_empty(placemark: dict, paths) -> Optional[str]:
    for path in paths:
        value = _dig(placemark, path)
        if not _is_empty(value):
            return str(value)
    return None


def _coordinates(placemark: dict, index: int):
    coordinates = _dig(placemark, ("Point", "coordinates"))
    if not isinstance(coordinates, (list, tuple)) or len(coordinates) < 2:
        return None
    try:
        # First element is exposed as lat, second as lng
        return float(coordinates[0]), float(coordinates[1])
    except (TypeError, ValueError):
        raise MalformedResponseError(f"Placemark {index} has non-numeric coordinates: {coordinates!r}")


def parse_placemarks(data: Any) -> Optional[GeocodeResult]:
    """
    Build a GeocodeResult from the decoded JSON body.

    Args:
        data: Decoded response body, expected to hold a top-level "Placemark" list

    Returns:
        GeocodeResult, or None when the placemark list is empty

    Raises:
        MalformedResponseError: if the body does not follow the placemark schema
            or no placemark carries a coordinate pair
    """
    if not isinstance(data, dict):
        raise MalformedResponseError(f"Expected a JSON object, got {type(data).__name__}")

    placemarks = data.get("Placemark")
    if placemarks is None:
        raise MalformedResponseError("Response has no Placemark list")
    if not isinstance(placemarks, list):
        raise MalformedResponseError(f"Placemark is a {type(placemarks).__name__}, not a list")
    if not placemarks:
        return None

    fields = {"address": None, "state": None, "city": None, "zip": None}
    point = None

    for index, placemark in enumerate(placemarks):
        if not isinstance(placemark, dict):
            raise MalformedResponseError(f"Placemark {index} is not an object")

        if point is None:
            point = _coordinates(placemark, index)

        if fields["address"] is None:
            fields["address"] = _first_non_empty(placemark, (("address",),))
        if fields["state"] is None:
            fields["state"] = _first_non_empty(placemark, (STATE_PATH,))
        if fields["city"] is None:
            fields["city"] = _first_non_empty(placemark, CITY_PATHS)
        if fields["zip"] is None:
            fields["zip"] = _first_non_empty(placemark, ZIP_PATHS)

    if point is None:
        raise MalformedResponseError(f"None of {len(placemarks)} placemarks has a coordinate pair")

    missing = [name for name, value in fields.items() if value is None]
    if missing:
        logger.debug(f"No placemark supplied: {', '.join(missing)}")

    lat, lng = point
    return GeocodeResult(
        lat=lat,
        lng=lng,
        **{name: value or "" for name, value in fields.items()},
    )
