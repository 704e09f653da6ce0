"""Health checker: reachability of the geocoding and weather services."""

import httpx

from zipcast.config.schema import AppConfig
from zipcast.ingest.transport import build_timeout
from zipcast.models.reporting import HealthStatus

# Known-good ZIP used to probe the geocoding service
PROBE_ZIP = "10001"


class HealthChecker:
    def __init__(self, config: AppConfig):
        self.config = config
        self.timeout = build_timeout(
            config.http.connect_timeout_seconds, config.http.read_timeout_seconds
        )

    def check(self) -> HealthStatus:
        return HealthStatus(
            geocoding_reachable=self._check_geocoding(),
            weather_reachable=self._check_weather(),
        )

    def _check_geocoding(self) -> bool:
        geo = self.config.geocoding
        return self._probe(f"{geo.base_url}/{geo.country}/{PROBE_ZIP}")

    def _check_weather(self) -> bool:
        return self._probe(
            f"{self.config.weather.base_url}/v1/forecast",
            params={"latitude": "0", "longitude": "0", "current_weather": "true"},
        )

    def _probe(self, url: str, params: dict[str, str] | None = None) -> bool:
        try:
            resp = httpx.get(
                url,
                params=params,
                headers={"User-Agent": self.config.http.user_agent},
                timeout=self.timeout,
            )
            return resp.status_code == 200
        except httpx.HTTPError:
            return False
