"""Tests for the cached forecast service."""

import datetime

import pytest

from app.schemas.weather import WeatherSample
from app.weather.errors import ServiceUnavailableError
from app.weather.forecast_service import ForecastService

MONDAY = datetime.date(2025, 12, 1)


def _make_sample(day: datetime.date) -> WeatherSample:
    return WeatherSample(timestamp=datetime.datetime.combine(day, datetime.time(0)), condition="Clear",
                         temperature=10.0, precipitation=5.0, wind_speed=8.0, )


class _FakeClient:
    def __init__(self, available_days: int = 16):
        self.available_days = available_days
        self.calls: list[tuple[str, int]] = []
        self.error: Exception | None = None

    def fetch_forecast(self, location: str, days: int = 7) -> list[WeatherSample]:
        self.calls.append((location, days))
        if self.error is not None:
            raise self.error
        return [_make_sample(MONDAY + datetime.timedelta(days=i)) for i in range(min(days, self.available_days))]


class _FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def _make_service(client: _FakeClient, clock: _FakeClock | None = None) -> ForecastService:
    return ForecastService(client, ttl_seconds=3600, clock=clock or _FakeClock(), today=lambda: MONDAY)


class TestForecastService:
    def test_fetches_and_sorts(self):
        service = _make_service(_FakeClient())
        days = service.get_forecast("Balbriggan", 3)
        assert [d.date for d in days] == [MONDAY + datetime.timedelta(days=i) for i in range(3)]

    def test_cached_days_are_not_refetched(self):
        client = _FakeClient()
        service = _make_service(client)
        service.get_forecast("Balbriggan", 3)
        service.get_forecast("Balbriggan", 3)
        assert len(client.calls) == 1

    def test_locations_are_cached_separately(self):
        client = _FakeClient()
        service = _make_service(client)
        service.get_forecast("Balbriggan", 3)
        service.get_forecast("Dublin", 3)
        assert [c[0] for c in client.calls] == ["Balbriggan", "Dublin"]

    def test_entries_expire(self):
        client = _FakeClient()
        clock = _FakeClock()
        service = _make_service(client, clock)
        service.get_forecast("Balbriggan", 3)
        clock.now = 3600
        service.get_forecast("Balbriggan", 3)
        assert len(client.calls) == 2

    def test_days_the_upstream_lacks_are_absent(self):
        service = _make_service(_FakeClient(available_days=2))
        assert len(service.get_forecast("Balbriggan", 5)) == 2

    def test_failure_serves_cached_days(self):
        client = _FakeClient()
        service = _make_service(client)
        service.get_forecast("Balbriggan", 3)
        client.error = ServiceUnavailableError("down")
        days = service.get_forecast("Balbriggan", 5)
        assert len(days) == 3

    def test_failure_without_cache_propagates(self):
        client = _FakeClient()
        client.error = ServiceUnavailableError("down")
        with pytest.raises(ServiceUnavailableError):
            _make_service(client).get_forecast("Balbriggan", 3)

    def test_explicit_start(self):
        service = _make_service(_FakeClient())
        days = service.get_forecast("Balbriggan", 2, start=MONDAY + datetime.timedelta(days=1))
        assert [d.date for d in days] == [MONDAY + datetime.timedelta(days=1), MONDAY + datetime.timedelta(days=2)]

    def test_clear(self):
        client = _FakeClient()
        service = _make_service(client)
        service.get_forecast("Balbriggan", 3)
        service.clear()
        service.get_forecast("Balbriggan", 3)
        assert len(client.calls) == 2
