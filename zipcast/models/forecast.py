"""Forecast data models."""

from dataclasses import dataclass

from zipcast.models.common import TemperatureUnit


@dataclass(frozen=True)
class Coordinates:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class DayForecast:
    date: str  # YYYY-MM-DD
    high_temp: float
    low_temp: float


@dataclass(frozen=True)
class Forecast:
    current_temp: float
    today_high: float
    today_low: float
    upcoming: tuple[DayForecast, ...]
    is_from_cache: bool = False
    unit: TemperatureUnit = TemperatureUnit.FAHRENHEIT


@dataclass(frozen=True)
class CacheEntry:
    forecast: Forecast  # stored with is_from_cache=False
    fetched_at_ms: int
