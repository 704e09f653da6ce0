"""Shared test fixtures."""

import json
from pathlib import Path

import pytest
import yaml

from zipcast.config.schema import AppConfig

FIXTURE_DIR = Path(__file__).parent / "fixtures"


class FakeClock:
    """Settable epoch-millisecond clock."""

    def __init__(self, now_ms: int = 1_704_110_400_000):
        self.now_ms = now_ms

    def __call__(self) -> int:
        return self.now_ms

    def advance(self, ms: int) -> None:
        self.now_ms += ms


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return FIXTURE_DIR


@pytest.fixture
def geo_payload() -> dict:
    with open(FIXTURE_DIR / "zippopotam_10007.json") as f:
        return json.load(f)


@pytest.fixture
def weather_payload() -> dict:
    with open(FIXTURE_DIR / "open_meteo_forecast.json") as f:
        return json.load(f)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def default_config() -> AppConfig:
    return AppConfig()


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "geocoding": {"base_url": "https://test-geo.example.com"},
        "weather": {"base_url": "https://test-meteo.example.com"},
        "cache": {"freshness_minutes": 10},
        "display": {"unit": "celsius"},
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path
