"""
Geocoding Module
--------------
Handles forward geocoding of addresses to coordinates and address components.
Uses the maps/geo JSON geocoder over a requests session.
"""
from src.geocoding.client import STATUS_CODES, GeocodeClient
from src.geocoding.exceptions import GeocodeError, MalformedResponseError
from src.geocoding.parser import parse_placemarks

__all__ = ["GeocodeClient", "GeocodeError", "MalformedResponseError", "STATUS_CODES", "parse_placemarks"]
