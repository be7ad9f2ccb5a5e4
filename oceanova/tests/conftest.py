"""Shared test fixtures."""

from pathlib import Path

import pytest
import yaml

from oceanova.config.defaults import DEFAULT_LOCATIONS
from oceanova.config.schema import AppConfig
from oceanova.models.weather import Location
from oceanova.tests.factories import ARABIAN_SEA


@pytest.fixture
def default_config() -> AppConfig:
    """Return default AppConfig with the default location table."""
    return AppConfig(locations=DEFAULT_LOCATIONS)


@pytest.fixture
def arabian_sea() -> Location:
    return ARABIAN_SEA


@pytest.fixture
def bay_of_bengal() -> Location:
    return Location(name="Bay of Bengal", latitude=15, longitude=88)


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "advisory": {"current_speed_knots": 14.0, "retry": {"max_attempts": 3}},
        "marine": {"kind": "static", "wave_height_m": 2.0},
        "refresh": {"default_location": "Red Sea"},
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path


@pytest.fixture
def env_keys() -> dict[str, str]:
    return {"OPENWEATHER_API_KEY": "ow-test-key", "GEMINI_API_KEY": "gm-test-key"}
