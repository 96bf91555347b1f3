"""
Open-Meteo forecast client.

Open-Meteo is free, needs no key for non-commercial use and serves up to
16 days of hourly data.  This client:

- geocodes a location name (``"lat,lon"`` strings skip geocoding),
- fetches hourly data and aggregates it into one :class:`WeatherSample`
  per day (mean temperature / feels-like / humidity, max precipitation
  probability, max wind, condition at 12:00),
- retries transient failures with exponential backoff
  (``initial_retry_delay * 2**attempt``); 4xx responses are final.

The HTTP client, sleep function and rate limiter are injectable.
"""

from __future__ import annotations

import datetime
import re
import time
from typing import Any, Callable, Optional

import httpx
from loguru import logger

from app.core.config import settings
from app.schemas.weather import Coordinates, HourlyWeather, WeatherSample
from app.weather.errors import (
    LocationNotFoundError,
    ServiceUnavailableError,
    WeatherAPIError,
    error_for_status,
)
from app.weather.rate_limit import RateLimiter

MAX_FORECAST_DAYS = 16
HOURS_PER_DAY = 24
REPRESENTATIVE_HOUR = 12

HOURLY_FIELDS = ["temperature_2m", "apparent_temperature", "precipitation_probability", "precipitation",
                 "weather_code", "wind_speed_10m", "wind_direction_10m", "is_day", "relative_humidity_2m", ]

_COORDINATES_RE = re.compile(r"^(-?\d+(?:\.\d+)?),\s*(-?\d+(?:\.\d+)?)$")
_COUNTRY_SUFFIX_RE = re.compile(r",\s*[A-Za-z]{2,3}\s*$")

# WMO weather interpretation codes.
WMO_CONDITIONS: dict[int, str] = {
    0: "Clear",
    1: "Mainly Clear",
    2: "Partly Cloudy",
    3: "Overcast",
    45: "Foggy",
    48: "Depositing Rime Fog",
    51: "Light Drizzle",
    53: "Moderate Drizzle",
    55: "Dense Drizzle",
    56: "Light Freezing Drizzle",
    57: "Dense Freezing Drizzle",
    61: "Slight Rain",
    63: "Moderate Rain",
    65: "Heavy Rain",
    66: "Light Freezing Rain",
    67: "Heavy Freezing Rain",
    71: "Slight Snow",
    73: "Moderate Snow",
    75: "Heavy Snow",
    77: "Snow Grains",
    80: "Slight Rain Showers",
    81: "Moderate Rain Showers",
    82: "Violent Rain Showers",
    85: "Slight Snow Showers",
    86: "Heavy Snow Showers",
    95: "Thunderstorm",
    96: "Thunderstorm with Slight Hail",
    99: "Thunderstorm with Heavy Hail",
}


def wmo_code_to_condition(code: Optional[int]) -> str:
    if code is None:
        return "Unknown"
    return WMO_CONDITIONS.get(int(code), "Unknown")


def _value(series: Optional[list], index: int, default: float = 0.0) -> float:
    """Read ``series[index]``; Open-Meteo reports gaps as ``null``."""
    if not series or index >= len(series) or series[index] is None:
        return default
    return float(series[index])


# ======================================================================
# Response parsing
# ======================================================================


def parse_hourly(data: dict[str, Any], day_index: int) -> list[HourlyWeather]:
    """Hourly samples of the *day_index*-th day."""
    hourly = data["hourly"]
    times = hourly["time"]
    start = day_index * HOURS_PER_DAY
    samples = []
    for i in range(start, min(start + HOURS_PER_DAY, len(times))):
        samples.append(HourlyWeather(time=datetime.datetime.fromisoformat(times[i]),
                                     condition=wmo_code_to_condition(hourly["weather_code"][i]),
                                     temperature=_value(hourly["temperature_2m"], i),
                                     feels_like=_value(hourly.get("apparent_temperature"), i),
                                     precipitation=_value(hourly.get("precipitation_probability"), i),
                                     humidity=_value(hourly.get("relative_humidity_2m"), i),
                                     wind_speed=_value(hourly.get("wind_speed_10m"), i),
                                     is_day=bool(_value(hourly.get("is_day"), i, 1.0)), ))
    return samples


def parse_forecast(data: dict[str, Any], location: str) -> list[WeatherSample]:
    """Aggregate an Open-Meteo hourly response into daily samples."""
    times = data["hourly"]["time"]
    days: list[WeatherSample] = []

    for day_index in range(len(times) // HOURS_PER_DAY):
        hours = parse_hourly(data, day_index)
        midday_index = day_index * HOURS_PER_DAY + REPRESENTATIVE_HOUR
        condition = wmo_code_to_condition(data["hourly"]["weather_code"][midday_index])
        count = len(hours)

        days.append(WeatherSample(timestamp=hours[0].time, location=location, latitude=data.get("latitude"),
                                  longitude=data.get("longitude"), condition=condition, description=condition,
                                  temperature=round(sum(h.temperature for h in hours) / count, 1),
                                  feels_like=round(sum(h.feels_like or 0.0 for h in hours) / count, 1),
                                  precipitation=max(h.precipitation for h in hours),
                                  humidity=round(sum(h.humidity or 0.0 for h in hours) / count),
                                  wind_speed=round(max(h.wind_speed for h in hours), 1),
                                  wind_direction=_value(data["hourly"].get("wind_direction_10m"), midday_index),
                                  hourly=hours, ))
    return days


# ======================================================================
# Client
# ======================================================================


class OpenMeteoClient:
    """Synchronous Open-Meteo client."""

    def __init__(self, http_client: Optional[httpx.Client] = None, *, forecast_url: str = settings.WEATHER_API_URL,
                 geocoding_url: str = settings.GEOCODING_API_URL, api_key: Optional[str] = None,
                 max_retries: int = 3, initial_retry_delay: float = 1.0, timeout: float = 10.0,
                 rate_limiter: Optional[RateLimiter] = None, sleep: Callable[[float], None] = time.sleep, ) -> None:
        self._http = http_client or httpx.Client(timeout=timeout)
        self.forecast_url = forecast_url
        self.geocoding_url = geocoding_url
        self.api_key = api_key
        self.max_retries = max(max_retries, 1)
        self.initial_retry_delay = initial_retry_delay
        self.rate_limiter = rate_limiter
        self._sleep = sleep

    @classmethod
    def from_settings(cls) -> OpenMeteoClient:
        return cls(forecast_url=settings.WEATHER_API_URL, geocoding_url=settings.GEOCODING_API_URL,
                   api_key=settings.WEATHER_API_KEY, max_retries=settings.WEATHER_MAX_RETRIES,
                   initial_retry_delay=settings.WEATHER_RETRY_DELAY_SECONDS,
                   timeout=settings.WEATHER_TIMEOUT_SECONDS,
                   rate_limiter=RateLimiter(settings.WEATHER_RATE_LIMIT_PER_MINUTE), )

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> OpenMeteoClient:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def _get_json(self, url: str, params: dict[str, str]) -> dict[str, Any]:
        """GET *url* with retries.  Raises :class:`WeatherAPIError`."""
        if self.api_key:
            params = {**params, "apikey": self.api_key}

        last_error: WeatherAPIError = ServiceUnavailableError("Weather service unavailable")
        for attempt in range(self.max_retries):
            if self.rate_limiter is not None:
                self.rate_limiter.acquire()

            try:
                response = self._http.get(url, params=params)
            except httpx.HTTPError as exc:
                last_error = ServiceUnavailableError(f"Weather request failed: {exc}")
            else:
                if response.is_success:
                    return response.json()
                error = error_for_status(response.status_code, f"Open-Meteo API error: {response.reason_phrase}")
                if error.is_client_error:
                    raise error
                last_error = error

            if attempt < self.max_retries - 1:
                delay = self.initial_retry_delay * 2 ** attempt
                logger.warning("Weather request failed ({}), retry {}/{} in {:.1f}s", last_error.message,
                               attempt + 1, self.max_retries - 1, delay)
                self._sleep(delay)

        raise last_error

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def geocode_location(self, location: str) -> tuple[Coordinates, str]:
        """Resolve *location* to coordinates and a display name.

        Raises :class:`LocationNotFoundError` when nothing matches.
        """
        match = _COORDINATES_RE.match(location.strip())
        if match:
            return Coordinates(latitude=float(match.group(1)), longitude=float(match.group(2))), location

        name = _COUNTRY_SUFFIX_RE.sub("", location).strip()
        data = self._get_json(self.geocoding_url, {"name": name, "count": "1", "language": "en", "format": "json"})
        results = data.get("results") or []
        if not results:
            raise LocationNotFoundError(f"Location not found: {location}")

        result = results[0]
        parts = [result["name"], result.get("admin1"), result.get("country")]
        display = ", ".join(p for p in parts if p)
        return Coordinates(latitude=result["latitude"], longitude=result["longitude"]), display

    def fetch_forecast_for_coordinates(self, coords: Coordinates, location: str,
                                       days: int = 7) -> list[WeatherSample]:
        valid_days = min(max(days, 1), MAX_FORECAST_DAYS)
        params = {"latitude": str(coords.latitude), "longitude": str(coords.longitude),
                  "hourly": ",".join(HOURLY_FIELDS), "forecast_days": str(valid_days), "timezone": "auto", }
        data = self._get_json(self.forecast_url, params)
        samples = parse_forecast(data, location)
        logger.info("Fetched {} forecast days for {}", len(samples), location)
        return samples

    def fetch_forecast(self, location: str, days: int = 7) -> list[WeatherSample]:
        """Daily forecast for *location* (1-16 days)."""
        coords, name = self.geocode_location(location)
        return self.fetch_forecast_for_coordinates(coords, name, days)
