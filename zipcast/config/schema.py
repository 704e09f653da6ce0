"""Pydantic v2 configuration schema with strict validation."""

from pydantic import BaseModel, Field

from zipcast.ingest.geo_resolver import ZIPPOPOTAM_BASE_URL
from zipcast.ingest.open_meteo_client import OPEN_METEO_BASE_URL
from zipcast.ingest.transport import DEFAULT_TIMEOUT_SECONDS, DEFAULT_USER_AGENT
from zipcast.models.common import TemperatureUnit


class GeocodingConfig(BaseModel):
    model_config = {"extra": "forbid"}

    base_url: str = ZIPPOPOTAM_BASE_URL
    country: str = Field(default="us", min_length=2, max_length=2)


class WeatherConfig(BaseModel):
    model_config = {"extra": "forbid"}

    base_url: str = OPEN_METEO_BASE_URL


class HttpConfig(BaseModel):
    model_config = {"extra": "forbid"}

    connect_timeout_seconds: float = Field(default=DEFAULT_TIMEOUT_SECONDS, gt=0.0)
    read_timeout_seconds: float = Field(default=DEFAULT_TIMEOUT_SECONDS, gt=0.0)
    user_agent: str = DEFAULT_USER_AGENT


class CacheConfig(BaseModel):
    model_config = {"extra": "forbid"}

    freshness_minutes: int = Field(default=30, ge=0)

    @property
    def freshness_ms(self) -> int:
        return self.freshness_minutes * 60 * 1000


class DisplayConfig(BaseModel):
    model_config = {"extra": "forbid"}

    unit: TemperatureUnit = TemperatureUnit.FAHRENHEIT


class OpsConfig(BaseModel):
    model_config = {"extra": "forbid"}

    max_workers: int = Field(default=1, ge=1)
    log_level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR)$")


class AppConfig(BaseModel):
    model_config = {"extra": "forbid"}

    geocoding: GeocodingConfig = GeocodingConfig()
    weather: WeatherConfig = WeatherConfig()
    http: HttpConfig = HttpConfig()
    cache: CacheConfig = CacheConfig()
    display: DisplayConfig = DisplayConfig()
    ops: OpsConfig = OpsConfig()
