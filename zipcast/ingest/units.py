"""Temperature unit conversion."""

from zipcast.models.common import TemperatureUnit


def celsius_to_fahrenheit(celsius: float) -> float:
    return celsius * 9 / 5 + 32


def from_celsius(celsius: float, unit: TemperatureUnit) -> float:
    """Convert a Celsius reading to the display unit. No rounding is applied."""
    if unit is TemperatureUnit.FAHRENHEIT:
        return celsius_to_fahrenheit(celsius)
    return celsius
