"""Forecast fetcher: turns an Open-Meteo response into a Forecast."""

import logging

from zipcast.errors import MalformedResponseError
from zipcast.ingest.open_meteo_client import OpenMeteoClient
from zipcast.ingest.units import from_celsius
from zipcast.models.common import TemperatureUnit
from zipcast.models.forecast import Coordinates, DayForecast, Forecast

logger = logging.getLogger(__name__)

UPCOMING_DAYS = 3


class ForecastFetcher:
    def __init__(
        self,
        client: OpenMeteoClient,
        unit: TemperatureUnit = TemperatureUnit.FAHRENHEIT,
    ):
        self.client = client
        self.unit = unit

    def fetch(self, coords: Coordinates) -> Forecast:
        """Fetch and convert the forecast at the given coordinates.

        Errors from the client propagate unchanged; the returned Forecast is
        always marked live.
        """
        raw = self.client.get_forecast(coords.latitude, coords.longitude)
        return _extract_forecast(raw, self.unit)


def _extract_forecast(raw: dict, unit: TemperatureUnit) -> Forecast:
    try:
        current_c = float(raw["current_weather"]["temperature"])
        daily = raw["daily"]
        # Only today plus UPCOMING_DAYS are read; later entries may be null
        span = UPCOMING_DAYS + 1
        dates = list(daily["time"])[:span]
        highs = [float(v) for v in list(daily["temperature_2m_max"])[:span]]
        lows = [float(v) for v in list(daily["temperature_2m_min"])[:span]]
    except (KeyError, TypeError, ValueError) as e:
        raise MalformedResponseError(f"Unexpected weather response shape: {e}") from e

    available = min(len(dates), len(highs), len(lows))
    if available == 0:
        raise MalformedResponseError("Weather response has an empty daily series")

    upcoming = tuple(
        DayForecast(
            date=_date_at(dates, i),
            high_temp=from_celsius(highs[i], unit),
            low_temp=from_celsius(lows[i], unit),
        )
        for i in range(1, available)
    )
    if available < span:
        logger.info(
            "Daily series has %d entries, returning %d upcoming days",
            available, len(upcoming),
        )

    return Forecast(
        current_temp=from_celsius(current_c, unit),
        today_high=from_celsius(highs[0], unit),
        today_low=from_celsius(lows[0], unit),
        upcoming=upcoming,
        is_from_cache=False,
        unit=unit,
    )


def _date_at(dates: list, i: int) -> str:
    value = dates[i]
    if not isinstance(value, str):
        raise MalformedResponseError(f"Daily date at index {i} is not a string: {value!r}")
    return value
