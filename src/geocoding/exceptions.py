class GeocodeError(Exception):
    """Raised by a client created with throw_exceptions=True when a search fails."""

    def __init__(self, outcome):
        self.outcome = outcome
        super().__init__(f"Geocoding failed ({outcome.failure.value}): {outcome.error} [{outcome.query_url}]")


class MalformedResponseError(ValueError):
    """The response body does not follow the Placemark schema."""
