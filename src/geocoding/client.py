"""
Geocoding Client
--------------
Forward geocoding of free-text addresses against the maps/geo JSON endpoint.
Each search is a single blocking GET; the outcome of every call is returned as a SearchOutcome
and also kept on the client for the errno / error / query_url accessors.
"""
import logging
from collections.abc import Mapping
from typing import Optional, Union
from urllib.parse import quote_plus, unquote_plus, urlencode

import requests
from pydantic import ValidationError

from src.geocoding.exceptions import GeocodeError, MalformedResponseError
from src.geocoding.parser import parse_placemarks
from src.models.geocode import FailureKind, GeocodeResult, SearchOutcome, SearchParams

# Constants
GEOCODE_BASE_URL = "http://maps.google.com/maps/geo?"
REQUEST_TIMEOUT = 180
OUTPUT_FORMAT = "json"

DEFAULT_PARAMS = {
    "q": "",
    "region": "US",
    "language": "en",
    "sensor": "false",
    "oe": "utf8",
}

STATUS_CODES = {
    200: "G_GEO_SUCCESS",
    400: "G_GEO_BAD_REQUEST",
    500: "G_GEO_SERVER_ERROR",
    601: "G_GEO_MISSING_QUERY",
    602: "G_GEO_UNKNOWN_ADDRESS",
    603: "G_GEO_UNAVAILABLE_ADDRESS",
    604: "G_GEO_UNKNOWN_DIRECTIONS",
    610: "G_GEO_BAD_KEY",
    620: "G_GEO_TOO_MANY_QUERIES",
}
UNKNOWN_STATUS = "UNKNOWN_STATUS"
TRANSPORT_ERROR = "TRANSPORT_ERROR"
TRANSPORT_UNAVAILABLE = "TRANSPORT_UNAVAILABLE"
INVALID_QUERY = "INVALID_QUERY"

# Get logger
logger = logging.getLogger(__name__)

Query = Union[str, Mapping]


class GeocodeClient:
    """Client for the maps/geo geocoding service."""

    def __init__(
        self,
        api_key: str,
        session=None,
        base_url: str = GEOCODE_BASE_URL,
        timeout: float = REQUEST_TIMEOUT,
        throw_exceptions: bool = False,
    ):
        """
        Args:
            api_key: API key appended to every query URL
            session: Optional requests-compatible session; the client creates and owns one if omitted
            base_url: Endpoint prefix, ending in "?"
            timeout: Upper bound in seconds for one request
            throw_exceptions: Raise GeocodeError on failure instead of only returning the outcome
        """
        self.api_key = api_key
        self.base_url = base_url
        self.timeout = timeout
        self.throw_exceptions = throw_exceptions

        self._owns_session = session is None
        self.session = requests.Session() if session is None else session
        self._last_outcome: Optional[SearchOutcome] = None

        if not self.available:
            logger.warning("No usable HTTP transport; searches will fail until a session is provided")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def close(self):
        """Release the HTTP session. Sessions passed in by the caller are left open."""
        if self.session is not None and self._owns_session:
            self.session.close()
        self.session = None

    @property
    def available(self) -> bool:
        return self.session is not None and callable(getattr(self.session, "get", None))

    # Accessors for the most recent search

    @property
    def last_outcome(self) -> Optional[SearchOutcome]:
        return self._last_outcome

    @property
    def errno(self) -> int:
        if self._last_outcome is None or self._last_outcome.status_code is None:
            return 0
        return self._last_outcome.status_code

    @property
    def error(self) -> str:
        return self._last_outcome.error if self._last_outcome else ""

    @property
    def query_url(self) -> str:
        return self._last_outcome.query_url if self._last_outcome else ""

    @property
    def last_result(self) -> Optional[GeocodeResult]:
        return self._last_outcome.result if self._last_outcome else None

    def build_params(self, query: Query) -> dict:
        """
        Normalize a free-text address or a parameter mapping into the full parameter set.

        The text is trimmed and URL-encoded; supplied values win over DEFAULT_PARAMS.
        Keys set to None are left out, so their defaults apply and null extras are not sent.

        Raises:
            pydantic.ValidationError: if a supplied value cannot be sent as text
        """
        if isinstance(query, Mapping):
            supplied = {key: value for key, value in query.items() if value is not None}
        else:
            supplied = {"q": query}

        supplied["q"] = quote_plus(str(supplied.get("q") or "").strip())
        return SearchParams(**{**DEFAULT_PARAMS, **supplied}).model_dump()

    def build_query_url(self, params: dict) -> str:
        return f"{self.base_url}{urlencode(params)}&output={OUTPUT_FORMAT}&key={self.api_key}"

    def search(self, query: Query) -> SearchOutcome:
        """
        Geocode an address.

        Args:
            query: Free-text address, or a mapping with "q" and any of region, language, sensor, oe

        Returns:
            SearchOutcome; outcome.result is set only when the lookup succeeded
        """
        try:
            params = self.build_params(query)
        except ValidationError as e:
            logger.warning(f"Invalid geocoding query: {e.errors()}")
            return self._finish(SearchOutcome(
                query_url="",
                error=INVALID_QUERY,
                failure=FailureKind.INVALID_QUERY,
            ))

        query_url = self.build_query_url(params)
        # The URL carries the API key, so logs name the address only
        address = unquote_plus(params["q"])

        if not self.available:
            return self._finish(SearchOutcome(
                query_url=query_url,
                error=TRANSPORT_UNAVAILABLE,
                failure=FailureKind.TRANSPORT_UNAVAILABLE,
            ))

        # Recorded before sending so query_url is current even if the request raises
        self._last_outcome = SearchOutcome(query_url=query_url)

        try:
            response = self.session.get(query_url, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            # requests messages repeat the URL, key included
            logger.error(f"Network error while geocoding '{address}': {type(e).__name__}")
            return self._finish(SearchOutcome(
                query_url=query_url,
                error=TRANSPORT_ERROR,
                failure=FailureKind.TRANSPORT_ERROR,
            ))

        status_code = response.status_code

        if status_code == 200:
            return self._finish(self._parse_response(query_url, address, response))

        if status_code in STATUS_CODES:
            error = STATUS_CODES[status_code]
            failure = FailureKind.HTTP_STATUS
        else:
            error = UNKNOWN_STATUS
            failure = FailureKind.UNKNOWN_STATUS

        logger.warning(f"Geocoding HTTP error ({status_code} {error}) for '{address}'")
        return self._finish(SearchOutcome(
            query_url=query_url,
            status_code=status_code,
            error=error,
            failure=failure,
        ))

    def _parse_response(self, query_url: str, address: str, response) -> SearchOutcome:
        outcome = SearchOutcome(query_url=query_url, status_code=200, error=STATUS_CODES[200])

        try:
            outcome.raw = response.json()
        except ValueError as e:
            logger.warning(f"Response body is not JSON for '{address}': {e}")
            outcome.failure = FailureKind.MALFORMED_RESPONSE
            return outcome

        try:
            result = parse_placemarks(outcome.raw)
        except MalformedResponseError as e:
            logger.warning(f"Unexpected response shape for '{address}': {e}")
            outcome.failure = FailureKind.MALFORMED_RESPONSE
            return outcome

        if result is None:
            logger.warning(f"No placemarks found for '{address}'")
            outcome.failure = FailureKind.ZERO_RESULTS
            return outcome

        outcome.result = result
        logger.info(f"Successfully geocoded to ({result.lat}, {result.lng}): {result.address}")
        return outcome

    def _finish(self, outcome: SearchOutcome) -> SearchOutcome:
        self._last_outcome = outcome
        if self.throw_exceptions and outcome.failure is not None:
            raise GeocodeError(outcome)
        return outcome
