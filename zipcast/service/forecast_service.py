"""Forecast service: owns the cache and runs lookups off the caller's thread."""

import logging
from concurrent.futures import Future, ThreadPoolExecutor

from zipcast.config.schema import AppConfig
from zipcast.errors import ForecastError
from zipcast.ingest.forecast_fetcher import ForecastFetcher
from zipcast.ingest.geo_resolver import GeoResolver
from zipcast.ingest.open_meteo_client import OpenMeteoClient
from zipcast.ingest.transport import build_timeout
from zipcast.models.forecast import Forecast
from zipcast.service.forecast_cache import ForecastCache

logger = logging.getLogger(__name__)


class ForecastService:
    def __init__(self, cache: ForecastCache, max_workers: int = 1):
        self.cache = cache
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="zipcast-fetch"
        )

    @classmethod
    def from_config(cls, config: AppConfig) -> "ForecastService":
        timeout = build_timeout(
            config.http.connect_timeout_seconds, config.http.read_timeout_seconds
        )
        resolver = GeoResolver(
            base_url=config.geocoding.base_url,
            country=config.geocoding.country,
            timeout=timeout,
            user_agent=config.http.user_agent,
        )
        client = OpenMeteoClient(
            base_url=config.weather.base_url,
            timeout=timeout,
            user_agent=config.http.user_agent,
        )
        fetcher = ForecastFetcher(client, unit=config.display.unit)
        cache = ForecastCache(resolver, fetcher, freshness_ms=config.cache.freshness_ms)
        return cls(cache, max_workers=config.ops.max_workers)

    def get_forecast(self, zip_code: str) -> Forecast:
        """Blocking lookup. Errors are logged, then re-raised unchanged."""
        try:
            return self.cache.get_forecast(zip_code)
        except ForecastError:
            logger.exception("Failed to load forecast for %s", zip_code)
            raise

    def submit(self, zip_code: str) -> "Future[Forecast]":
        """Run a lookup on the worker pool.

        The future resolves to a Forecast or carries the ForecastError. An
        in-flight lookup is never cancelled by a newer one.
        """
        return self._executor.submit(self.get_forecast, zip_code)

    def close(self) -> None:
        self._executor.shutdown(wait=True)

    def __enter__(self) -> "ForecastService":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
