"""Errors raised while fetching weather observations."""

from typing import Optional


# Human-readable explanations for common HTTP errors
HTTP_ERROR_HINTS = {
    400: "Bad request - check the location query",
    401: "Invalid or missing API key",
    404: "Location not found",
    429: "Rate limit exceeded",
    500: "OpenWeather internal error",
    502: "Bad gateway at OpenWeather",
    503: "Service unavailable",
    504: "Gateway timeout",
}


class WeatherClientError(Exception):
    """Base class for recoverable per-location fetch failures."""

    def __init__(self, location: str, message: str) -> None:
        super().__init__(f"{location}: {message}")
        self.location = location


class TransportError(WeatherClientError):
    """Raised when the HTTP request could not be completed."""

    def __init__(self, location: str, cause: Exception) -> None:
        super().__init__(location, f"request failed: {cause}")
        self.cause = cause


class DecodeError(WeatherClientError):
    """Raised when a successful response does not match the expected schema."""

    def __init__(self, location: str, cause: Exception) -> None:
        super().__init__(location, f"invalid response body: {cause}")
        self.cause = cause


class RequestFailedError(WeatherClientError):
    """Raised when the API answers with a non-2xx status code."""

    def __init__(self, location: str, status_code: int, hint: Optional[str] = None) -> None:
        hint = hint or HTTP_ERROR_HINTS.get(status_code)
        message = f"Request failed with status: {status_code}"
        if hint:
            message = f"{message} ({hint})"
        super().__init__(location, message)
        self.status_code = status_code
