"""Tests for the ZIP-keyed forecast cache."""

from unittest.mock import MagicMock

import httpx
import pytest
import respx

from zipcast.errors import (
    InvalidLocationError,
    NetworkTimeoutError,
    UpstreamError,
)
from zipcast.ingest.forecast_fetcher import ForecastFetcher
from zipcast.ingest.geo_resolver import GeoResolver
from zipcast.ingest.open_meteo_client import OpenMeteoClient
from zipcast.models.forecast import Coordinates, DayForecast, Forecast
from zipcast.service.forecast_cache import ForecastCache

WINDOW = 1_800_000
NYC = Coordinates(40.7128, -74.0060)


def _forecast(current: float = 68.0) -> Forecast:
    return Forecast(
        current_temp=current,
        today_high=50.0,
        today_low=35.6,
        upcoming=(DayForecast("2024-01-02", 53.6, 37.4),),
    )


@pytest.fixture
def resolver() -> MagicMock:
    mock = MagicMock(spec=GeoResolver)
    mock.resolve.return_value = NYC
    return mock


@pytest.fixture
def fetcher() -> MagicMock:
    mock = MagicMock(spec=ForecastFetcher)
    mock.fetch.return_value = _forecast()
    return mock


@pytest.fixture
def cache(resolver, fetcher, clock) -> ForecastCache:
    return ForecastCache(resolver, fetcher, freshness_ms=WINDOW, clock=clock)


class TestMiss:
    def test_first_request_fetches_once(self, cache, resolver, fetcher):
        result = cache.get_forecast("10007")

        resolver.resolve.assert_called_once_with("10007")
        fetcher.fetch.assert_called_once_with(NYC)
        assert result.is_from_cache is False
        assert result.current_temp == 68.0

    def test_entry_stored_live(self, cache, clock):
        cache.get_forecast("10007")
        entry = cache.peek("10007")

        assert entry is not None
        assert entry.fetched_at_ms == clock.now_ms
        assert entry.forecast.is_from_cache is False

    def test_keys_independent(self, cache, resolver):
        cache.get_forecast("10007")
        cache.get_forecast("90210")

        assert resolver.resolve.call_count == 2
        assert len(cache) == 2


class TestHit:
    def test_within_window_served_from_cache(self, cache, resolver, fetcher, clock):
        first = cache.get_forecast("10007")
        clock.advance(WINDOW - 1)
        second = cache.get_forecast("10007")

        assert second.is_from_cache is True
        assert second.current_temp == first.current_temp
        assert second.today_high == first.today_high
        assert second.today_low == first.today_low
        assert second.upcoming == first.upcoming
        assert resolver.resolve.call_count == 1
        assert fetcher.fetch.call_count == 1

    def test_stored_entry_not_marked_cached(self, cache, clock):
        cache.get_forecast("10007")
        clock.advance(1_000)
        cache.get_forecast("10007")

        assert cache.peek("10007").forecast.is_from_cache is False

    def test_stale_read_within_window(self, cache, fetcher, clock):
        cache.get_forecast("10007")
        fetcher.fetch.return_value = _forecast(current=99.0)
        clock.advance(60_000)

        # Upstream changed, but the window has not elapsed
        assert cache.get_forecast("10007").current_temp == 68.0


class TestExpiry:
    def test_clock_step_backwards_keeps_entry(self, cache, fetcher, clock):
        cache.get_forecast("10007")
        clock.advance(-3_600_000)

        assert cache.get_forecast("10007").is_from_cache is True
        assert fetcher.fetch.call_count == 1

    def test_refetch_at_window(self, cache, resolver, fetcher, clock):
        cache.get_forecast("10007")
        fetcher.fetch.return_value = _forecast(current=71.6)
        clock.advance(WINDOW)

        result = cache.get_forecast("10007")
        assert result.is_from_cache is False
        assert result.current_temp == 71.6
        assert resolver.resolve.call_count == 2
        assert fetcher.fetch.call_count == 2
        assert cache.peek("10007").fetched_at_ms == clock.now_ms

    def test_refreshed_entry_then_cached(self, cache, clock):
        cache.get_forecast("10007")
        clock.advance(WINDOW + 5)
        cache.get_forecast("10007")
        clock.advance(10)

        assert cache.get_forecast("10007").is_from_cache is True


class TestFailure:
    def test_error_on_empty_cache_stores_nothing(self, cache, fetcher):
        fetcher.fetch.side_effect = UpstreamError("HTTP 500", 500)

        with pytest.raises(UpstreamError):
            cache.get_forecast("10007")
        assert cache.peek("10007") is None

    def test_failed_refresh_keeps_stale_entry(self, cache, fetcher, clock):
        cache.get_forecast("10007")
        original = cache.peek("10007")
        clock.advance(WINDOW)
        fetcher.fetch.side_effect = UpstreamError("HTTP 500", 500)

        with pytest.raises(UpstreamError):
            cache.get_forecast("10007")
        assert cache.peek("10007") is original

    def test_failed_geocode_keeps_entry(self, cache, resolver, clock):
        cache.get_forecast("10007")
        original = cache.peek("10007")
        clock.advance(WINDOW)
        resolver.resolve.side_effect = NetworkTimeoutError("timed out")

        with pytest.raises(NetworkTimeoutError):
            cache.get_forecast("10007")
        assert cache.peek("10007") is original

    def test_failure_then_fresh_entry_still_served(self, resolver, fetcher, clock):
        # A failure for one request does not disturb a fresh entry
        cache = ForecastCache(resolver, fetcher, freshness_ms=WINDOW, clock=clock)
        cache.get_forecast("10007")
        resolver.resolve.side_effect = InvalidLocationError("00000")

        with pytest.raises(InvalidLocationError):
            cache.get_forecast("00000")
        clock.advance(1_000)
        result = cache.get_forecast("10007")
        assert result.is_from_cache is True
        assert result.current_temp == 68.0

    def test_retry_after_failure(self, cache, fetcher):
        fetcher.fetch.side_effect = [UpstreamError("HTTP 503", 503), _forecast()]

        with pytest.raises(UpstreamError):
            cache.get_forecast("10007")
        assert cache.get_forecast("10007").is_from_cache is False
        assert fetcher.fetch.call_count == 2


class TestClear:
    def test_clear_forces_refetch(self, cache, resolver):
        cache.get_forecast("10007")
        cache.clear()
        assert len(cache) == 0
        cache.get_forecast("10007")
        assert resolver.resolve.call_count == 2


class TestEndToEnd:
    @respx.mock
    def test_scenario(self, geo_payload: dict, weather_payload: dict, clock):
        geo_route = respx.get("https://test-geo.example.com/us/10007").mock(
            return_value=httpx.Response(200, json=geo_payload)
        )
        meteo_route = respx.get("https://test-meteo.example.com/v1/forecast").mock(
            return_value=httpx.Response(200, json=weather_payload)
        )
        cache = ForecastCache(
            GeoResolver(base_url="https://test-geo.example.com"),
            ForecastFetcher(OpenMeteoClient(base_url="https://test-meteo.example.com")),
            clock=clock,
        )

        result = cache.get_forecast("10007")
        assert geo_route.call_count == 1
        assert meteo_route.call_count == 1
        assert result.is_from_cache is False
        assert result.current_temp == pytest.approx(68.0)
        assert result.today_high == pytest.approx(50.0)
        assert result.today_low == pytest.approx(35.6)
        assert [d.date for d in result.upcoming] == [
            "2024-01-02", "2024-01-03", "2024-01-04",
        ]

        clock.advance(10 * 60 * 1000)
        again = cache.get_forecast("10007")
        assert again.is_from_cache is True
        assert geo_route.call_count == 1
        assert meteo_route.call_count == 1

    @respx.mock
    def test_weather_500_leaves_cache_empty(self, geo_payload: dict, clock):
        respx.get("https://test-geo.example.com/us/10007").mock(
            return_value=httpx.Response(200, json=geo_payload)
        )
        respx.get("https://test-meteo.example.com/v1/forecast").mock(
            return_value=httpx.Response(500)
        )
        cache = ForecastCache(
            GeoResolver(base_url="https://test-geo.example.com"),
            ForecastFetcher(OpenMeteoClient(base_url="https://test-meteo.example.com")),
            clock=clock,
        )

        with pytest.raises(UpstreamError):
            cache.get_forecast("10007")
        assert len(cache) == 0
