"""Operational health models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class HealthStatus:
    geocoding_reachable: bool
    weather_reachable: bool

    @property
    def ok(self) -> bool:
        return self.geocoding_reachable and self.weather_reachable
