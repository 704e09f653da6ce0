"""Open-Meteo forecast API client."""

import logging

import httpx

from zipcast.errors import UpstreamError
from zipcast.ingest import transport

logger = logging.getLogger(__name__)

OPEN_METEO_BASE_URL = "https://api.open-meteo.com"
DAILY_FIELDS = "temperature_2m_max,temperature_2m_min"


class OpenMeteoClient:
    def __init__(
        self,
        base_url: str = OPEN_METEO_BASE_URL,
        timeout: httpx.Timeout | None = None,
        user_agent: str = transport.DEFAULT_USER_AGENT,
    ):
        self.base_url = base_url
        self.timeout = timeout or transport.build_timeout()
        self.user_agent = user_agent

    def get_forecast(self, latitude: float, longitude: float) -> dict:
        """Fetch current weather plus daily max/min temperatures (Celsius).

        The timezone is resolved by the service from the coordinates, so
        daily index 0 is "today" at the location.
        """
        url = f"{self.base_url}/v1/forecast"
        params = {
            "latitude": f"{latitude:.6f}",
            "longitude": f"{longitude:.6f}",
            "current_weather": "true",
            "daily": DAILY_FIELDS,
            "timezone": "auto",
        }
        resp = transport.get(
            url, params=params, timeout=self.timeout, user_agent=self.user_agent
        )
        if resp.status_code != 200:
            logger.error(
                "Open-Meteo returned %d for (%s, %s)",
                resp.status_code, latitude, longitude,
            )
            raise UpstreamError(
                f"Weather API error: HTTP {resp.status_code}", resp.status_code
            )
        return transport.decode_json(resp)
