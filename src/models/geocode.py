from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, model_validator


class FailureKind(str, Enum):
    TRANSPORT_UNAVAILABLE = "transport_unavailable"
    TRANSPORT_ERROR = "transport_error"
    HTTP_STATUS = "http_status"
    UNKNOWN_STATUS = "unknown_status"
    ZERO_RESULTS = "zero_results"
    MALFORMED_RESPONSE = "malformed_response"
    INVALID_QUERY = "invalid_query"


class SearchParams(BaseModel):
    """
    Query parameters sent to the geocoding endpoint.

    Unknown keys are kept and sent after the known ones. Booleans are sent
    as "true"/"false" and numbers as their text.
    """
    model_config = ConfigDict(extra="allow")

    q: str = ""
    region: str = "US"
    language: str = "en"
    sensor: str = "false"
    oe: str = "utf8"

    @model_validator(mode="before")
    @classmethod
    def render_scalars(cls, data):
        if not isinstance(data, dict):
            return data
        rendered = {}
        for key, value in data.items():
            if isinstance(value, bool):
                value = "true" if value else "false"
            elif isinstance(value, (int, float)):
                value = str(value)
            rendered[key] = value
        return rendered


class GeocodeResult(BaseModel):
    lat: float
    lng: float
    address: str = ""
    state: str = ""
    city: str = ""
    zip: str = ""


class SearchOutcome(BaseModel):
    """Everything one search produced: the URL sent, the status seen and the result, if any."""
    query_url: str
    status_code: Optional[int] = None
    error: str = ""
    result: Optional[GeocodeResult] = None
    failure: Optional[FailureKind] = None
    raw: Optional[Any] = None

    @property
    def ok(self) -> bool:
        return self.failure is None and self.result is not None
