"""Freshness checks for cached forecasts."""

FRESHNESS_WINDOW_MS = 30 * 60 * 1000


def entry_age_ms(fetched_at_ms: int, now_ms: int) -> int:
    return now_ms - fetched_at_ms


def is_fresh(
    fetched_at_ms: int, now_ms: int, window_ms: int = FRESHNESS_WINDOW_MS
) -> bool:
    """An entry is fresh while its age is strictly below the window."""
    return entry_age_ms(fetched_at_ms, now_ms) < window_ms
