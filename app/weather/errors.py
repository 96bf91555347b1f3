"""
Forecast client error taxonomy.

Client errors (4xx) are final and never retried.  Everything else is
treated as transient by :class:`app.weather.client.OpenMeteoClient`.
"""

from __future__ import annotations

from typing import Optional


class WeatherAPIError(Exception):
    """Base error for the forecast collaborator."""

    default_status: Optional[int] = None

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code if status_code is not None else self.default_status

    @property
    def is_client_error(self) -> bool:
        return self.status_code is not None and 400 <= self.status_code < 500


class InvalidCredentialError(WeatherAPIError):
    default_status = 401


class LocationNotFoundError(WeatherAPIError):
    default_status = 404


class RateLimitExceededError(WeatherAPIError):
    default_status = 429


class ServiceUnavailableError(WeatherAPIError):
    default_status = 503


def error_for_status(status_code: int, message: str) -> WeatherAPIError:
    """Map an HTTP status code to the matching error class."""
    if status_code in (401, 403):
        return InvalidCredentialError(message, status_code)
    if status_code == 404:
        return LocationNotFoundError(message, status_code)
    if status_code == 429:
        return RateLimitExceededError(message, status_code)
    if status_code >= 500:
        return ServiceUnavailableError(message, status_code)
    return WeatherAPIError(message, status_code)
