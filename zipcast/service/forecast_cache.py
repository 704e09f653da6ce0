"""ZIP-keyed forecast cache with a freshness window."""

import logging
import threading
from collections.abc import Callable
from dataclasses import replace

from zipcast.ingest.forecast_fetcher import ForecastFetcher
from zipcast.ingest.geo_resolver import GeoResolver
from zipcast.ingest.staleness import FRESHNESS_WINDOW_MS, entry_age_ms, is_fresh
from zipcast.models.common import epoch_millis
from zipcast.models.forecast import CacheEntry, Forecast

logger = logging.getLogger(__name__)


class ForecastCache:
    """Serves cached forecasts inside the window, fetches otherwise.

    Stored entries always carry ``is_from_cache=False``; the flag is set on
    the copy handed back to the caller. A failed refresh leaves any existing
    entry for the ZIP untouched. Concurrent misses on the same ZIP are not
    collapsed, each one hits the upstream services.
    """

    def __init__(
        self,
        resolver: GeoResolver,
        fetcher: ForecastFetcher,
        freshness_ms: int = FRESHNESS_WINDOW_MS,
        clock: Callable[[], int] = epoch_millis,
    ):
        self.resolver = resolver
        self.fetcher = fetcher
        self.freshness_ms = freshness_ms
        self.clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def get_forecast(self, zip_code: str) -> Forecast:
        now = self.clock()
        with self._lock:
            entry = self._entries.get(zip_code)

        if entry is not None and is_fresh(entry.fetched_at_ms, now, self.freshness_ms):
            logger.debug(
                "Cache hit for %s (age %dms)",
                zip_code, entry_age_ms(entry.fetched_at_ms, now),
            )
            return replace(entry.forecast, is_from_cache=True)

        coords = self.resolver.resolve(zip_code)
        forecast = self.fetcher.fetch(coords)
        if forecast.is_from_cache:
            forecast = replace(forecast, is_from_cache=False)

        with self._lock:
            self._entries[zip_code] = CacheEntry(forecast=forecast, fetched_at_ms=now)
        logger.info(
            "Fetched forecast for %s%s",
            zip_code, " (replacing stale entry)" if entry is not None else "",
        )
        return forecast

    def peek(self, zip_code: str) -> CacheEntry | None:
        with self._lock:
            return self._entries.get(zip_code)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
