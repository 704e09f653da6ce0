"""Zippopotam.us geocoding: ZIP code to latitude/longitude."""

import logging

import httpx

from zipcast.errors import InvalidLocationError, MalformedResponseError
from zipcast.ingest import transport
from zipcast.models.forecast import Coordinates

logger = logging.getLogger(__name__)

ZIPPOPOTAM_BASE_URL = "https://api.zippopotam.us"


class GeoResolver:
    def __init__(
        self,
        base_url: str = ZIPPOPOTAM_BASE_URL,
        country: str = "us",
        timeout: httpx.Timeout | None = None,
        user_agent: str = transport.DEFAULT_USER_AGENT,
    ):
        self.base_url = base_url
        self.country = country
        self.timeout = timeout or transport.build_timeout()
        self.user_agent = user_agent

    def resolve(self, zip_code: str) -> Coordinates:
        """Look up the first place for a ZIP code.

        The ZIP is passed through as-is; format checks belong to the caller.
        """
        url = f"{self.base_url}/{self.country}/{zip_code}"
        resp = transport.get(url, timeout=self.timeout, user_agent=self.user_agent)
        if resp.status_code != 200:
            logger.warning("Geocoding %s returned %d", zip_code, resp.status_code)
            raise InvalidLocationError(zip_code)

        coords = _extract_coordinates(transport.decode_json(resp), zip_code)
        logger.debug(
            "Resolved %s to (%s, %s)", zip_code, coords.latitude, coords.longitude
        )
        return coords


def _extract_coordinates(raw: dict, zip_code: str) -> Coordinates:
    places = raw.get("places")
    if not isinstance(places, list):
        raise MalformedResponseError(f"No places list in geocoding response for {zip_code}")
    if not places:
        raise InvalidLocationError(zip_code, "No place found for ZIP")

    place = places[0]
    try:
        return Coordinates(
            latitude=float(place["latitude"]),
            longitude=float(place["longitude"]),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise MalformedResponseError(
            f"Unusable coordinates for {zip_code}: {place!r}"
        ) from e
