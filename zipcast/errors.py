"""Error taxonomy for geocoding and forecast retrieval."""


class ForecastError(Exception):
    """Base class for every failure surfaced by a forecast request."""


class InvalidLocationError(ForecastError):
    """Raised when a ZIP code cannot be resolved to a place."""

    def __init__(self, zip_code: str, message: str = "Invalid ZIP"):
        super().__init__(f"{message}: {zip_code}")
        self.zip_code = zip_code


class UpstreamError(ForecastError):
    """Raised when the weather service answers with a non-200 status."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class MalformedResponseError(ForecastError):
    """Raised when a response body lacks the expected JSON structure."""


class NetworkError(ForecastError):
    """Raised on transport failures (DNS, refused connection, protocol)."""


class NetworkTimeoutError(NetworkError):
    """Raised when the connect or read timeout is exceeded."""
