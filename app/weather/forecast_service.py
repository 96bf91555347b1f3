"""
Forecast service - a per-day TTL cache in front of the forecast client.

Days are cached by ``(location, date)``.  A day the upstream cannot
supply is simply absent from the returned list; the scheduler treats an
absent day as "no candidate".  When the upstream fails outright, whatever
is still cached is served; only a failure with nothing cached propagates.
"""

from __future__ import annotations

import datetime
import time
from typing import Callable, Optional

from loguru import logger

from app.schemas.weather import WeatherSample
from app.weather.client import OpenMeteoClient
from app.weather.errors import WeatherAPIError


class ForecastService:
    """Cached access to daily forecasts."""

    def __init__(self, client: OpenMeteoClient, ttl_seconds: float = 3600.0,
                 clock: Callable[[], float] = time.monotonic,
                 today: Callable[[], datetime.date] = datetime.date.today, ) -> None:
        self.client = client
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._today = today
        self._cache: dict[tuple[str, datetime.date], tuple[float, WeatherSample]] = {}

    def _cached(self, location: str, day: datetime.date, now: float) -> Optional[WeatherSample]:
        entry = self._cache.get((location, day))
        if entry is None:
            return None
        expires_at, sample = entry
        if expires_at <= now:
            del self._cache[(location, day)]
            return None
        return sample

    def get_forecast(self, location: str, days: int, start: Optional[datetime.date] = None) -> list[WeatherSample]:
        """Daily samples for ``start .. start + days - 1``, sorted by date."""
        if days <= 0:
            return []
        today = self._today()
        first = start or today
        wanted = [first + datetime.timedelta(days=i) for i in range(days)]
        # the upstream always counts from today
        fetch_days = max(days, (wanted[-1] - today).days + 1)
        now = self._clock()

        found: dict[datetime.date, WeatherSample] = {}
        for day in wanted:
            sample = self._cached(location, day, now)
            if sample is not None:
                found[day] = sample

        missing = [d for d in wanted if d not in found]
        if missing:
            try:
                fetched = self.client.fetch_forecast(location, fetch_days)
            except WeatherAPIError as exc:
                if not found:
                    raise
                logger.warning("Forecast fetch failed for {} ({}); serving {} cached days", location, exc.message,
                               len(found))
                fetched = []

            expires_at = now + self.ttl_seconds
            for sample in fetched:
                if sample.date in missing:
                    self._cache[(location, sample.date)] = (expires_at, sample)
                    found[sample.date] = sample

        return [found[d] for d in sorted(found)]

    def clear(self) -> None:
        self._cache.clear()
