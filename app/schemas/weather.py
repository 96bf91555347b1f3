"""
Weather schemas.

A forecast is an ordered list of :class:`WeatherSample`, one per calendar
day, optionally carrying 24 :class:`HourlyWeather` sub-samples used by the
time-window aware scoring.

Units:

- temperature / feels-like: °C
- precipitation: probability 0-100
- humidity: percentage 0-100
- wind speed: km/h
"""

from __future__ import annotations

import datetime
from typing import Optional

from pydantic import BaseModel, Field


class Coordinates(BaseModel):
    """Geographic position used by the forecast client."""

    latitude: float = Field(..., ge=-90.0, le=90.0)
    longitude: float = Field(..., ge=-180.0, le=180.0)


class HourlyWeather(BaseModel):
    """One hour of forecast data."""

    time: datetime.datetime
    condition: str
    temperature: float
    feels_like: Optional[float] = None
    precipitation: float = Field(..., ge=0.0, le=100.0, description="Precipitation probability 0-100")
    humidity: Optional[float] = Field(None, ge=0.0, le=100.0)
    wind_speed: float = Field(..., ge=0.0, description="Wind speed in km/h")
    is_day: bool = True


class WeatherSample(BaseModel):
    """Forecast for a single day."""

    timestamp: datetime.datetime = Field(..., description="Forecast timestamp (start of the day)")
    location: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    condition: str = Field(..., description="Condition text, e.g. 'Clear', 'Light Rain'")
    description: Optional[str] = None
    temperature: float
    feels_like: Optional[float] = None
    precipitation: float = Field(..., ge=0.0, le=100.0, description="Precipitation probability 0-100")
    humidity: Optional[float] = Field(None, ge=0.0, le=100.0)
    wind_speed: float = Field(..., ge=0.0, description="Wind speed in km/h")
    wind_direction: Optional[float] = Field(None, ge=0.0, le=360.0)
    hourly: list[HourlyWeather] = Field(default_factory=list)

    @property
    def date(self) -> datetime.date:
        """Calendar date of the sample (in the timestamp's own timezone)."""
        return self.timestamp.date()


class WeatherSnapshot(BaseModel):
    """The weather actually scored for a suggestion."""

    condition: str
    temperature: float
    precipitation: float = Field(..., ge=0.0, le=100.0)
    wind_speed: float = Field(..., ge=0.0)
    feels_like: Optional[float] = None
    humidity: Optional[float] = Field(None, ge=0.0, le=100.0)

    @classmethod
    def from_sample(cls, sample: WeatherSample | HourlyWeather) -> WeatherSnapshot:
        return cls(condition=sample.condition, temperature=sample.temperature, precipitation=sample.precipitation,
                   wind_speed=sample.wind_speed, feels_like=sample.feels_like, humidity=sample.humidity, )
