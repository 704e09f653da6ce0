"""Shared httpx GET helper that maps transport failures onto forecast errors."""

import logging

import httpx

from zipcast.errors import MalformedResponseError, NetworkError, NetworkTimeoutError

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "zipcast/0.1.0"
DEFAULT_TIMEOUT_SECONDS = 8.0


def build_timeout(
    connect_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    read_seconds: float = DEFAULT_TIMEOUT_SECONDS,
) -> httpx.Timeout:
    return httpx.Timeout(read_seconds, connect=connect_seconds)


def get(
    url: str,
    *,
    params: dict[str, str] | None = None,
    timeout: httpx.Timeout,
    user_agent: str = DEFAULT_USER_AGENT,
) -> httpx.Response:
    """Issue a single GET. Status codes are left for the caller to judge."""
    headers = {"User-Agent": user_agent, "Accept": "application/json"}
    try:
        return httpx.get(url, params=params, headers=headers, timeout=timeout)
    except httpx.TimeoutException as e:
        logger.error("Request to %s timed out: %s", url, e)
        raise NetworkTimeoutError(f"Timed out requesting {url}") from e
    except httpx.RequestError as e:
        logger.error("Request to %s failed: %s", url, e)
        raise NetworkError(f"Request failed for {url}: {e}") from e
    except httpx.InvalidURL as e:
        logger.error("Could not build request for %r: %s", url, e)
        raise NetworkError(f"Invalid request URL {url!r}: {e}") from e


def decode_json(resp: httpx.Response) -> dict:
    """Decode a response body that must be a JSON object."""
    try:
        data = resp.json()
    except ValueError as e:
        raise MalformedResponseError(f"Invalid JSON from {resp.request.url}") from e
    if not isinstance(data, dict):
        raise MalformedResponseError(
            f"Expected JSON object from {resp.request.url}, got {type(data).__name__}"
        )
    return data
