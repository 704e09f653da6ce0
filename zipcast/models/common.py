"""Common types and helpers shared across models."""

import time
from enum import StrEnum


class TemperatureUnit(StrEnum):
    FAHRENHEIT = "fahrenheit"
    CELSIUS = "celsius"

    @property
    def symbol(self) -> str:
        return "°F" if self is TemperatureUnit.FAHRENHEIT else "°C"


def epoch_millis() -> int:
    """Wall-clock epoch milliseconds.

    Not monotonic: a system clock step backwards makes entries look younger,
    so they stay cached longer; a step forwards expires them early.
    """
    return time.time_ns() // 1_000_000
