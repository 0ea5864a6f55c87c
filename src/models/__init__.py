"""
Data Models Module
----------------
Contains Pydantic models for geocoding queries and results.
Defines the normalized search parameters, the extracted result record and the per-call search outcome.
"""
from src.models.geocode import FailureKind, GeocodeResult, SearchOutcome, SearchParams

__all__ = ["FailureKind", "GeocodeResult", "SearchOutcome", "SearchParams"]
