"""Tests for config loading, credentials, get and location lookup."""

from pathlib import Path

import pytest
import yaml

from oceanova.config.defaults import DEFAULT_LOCATIONS
from oceanova.config.loader import get_config_value, load_config, load_credentials
from oceanova.config.locations import default_location, location_names, resolve_location
from oceanova.config.schema import MarineSourceKind
from oceanova.errors import ConfigurationError, LocationNotFoundError


class TestLoadConfig:
    def test_load_from_yaml(self, config_yaml_path: Path):
        config = load_config(config_yaml_path)
        assert config.advisory.current_speed_knots == 14.0
        assert config.advisory.retry.max_attempts == 3
        assert config.advisory.retry.base_delay_ms == 1000
        assert config.marine.kind == MarineSourceKind.STATIC

    def test_default_locations_injected(self, config_yaml_path: Path):
        config = load_config(config_yaml_path)
        assert len(config.locations) == len(DEFAULT_LOCATIONS)
        assert config.locations[0].name == "Arabian Sea"

    def test_explicit_locations_not_overridden(self, tmp_path: Path):
        data = {
            "locations": [{"name": "Home Bay", "latitude": 10.5, "longitude": -20.25}],
            "refresh": {"default_location": "Home Bay"},
        }
        path = tmp_path / "custom.yaml"
        with open(path, "w") as f:
            yaml.dump(data, f)
        config = load_config(path)
        assert location_names(config) == ["Home Bay"]
        assert default_location(config).latitude == 10.5

    def test_empty_yaml_uses_defaults(self, tmp_path: Path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        config = load_config(path)
        assert config.advisory.current_speed_knots == 12.5
        assert len(config.locations) == len(DEFAULT_LOCATIONS)

    def test_unknown_default_location(self, tmp_path: Path):
        path = tmp_path / "bad.yaml"
        path.write_text("refresh:\n  default_location: Atlantis\n")
        with pytest.raises(ConfigurationError, match="Atlantis"):
            load_config(path)

    def test_extra_key_is_configuration_error(self, tmp_path: Path):
        path = tmp_path / "bad.yaml"
        path.write_text("bogus: 1\n")
        with pytest.raises(ConfigurationError, match="Extra inputs are not permitted"):
            load_config(path)

    def test_no_path_uses_defaults(self):
        config = load_config()
        assert config.refresh.default_location == "Arabian Sea"
        assert len(config.locations) == 43

    def test_sample_config(self):
        path = Path(__file__).resolve().parents[3] / "ops" / "configs" / "default.yaml"
        config = load_config(path)
        assert config.advisory.retry.max_attempts == 5


class TestLoadCredentials:
    def test_both_present(self, default_config, env_keys):
        creds = load_credentials(default_config, env_keys)
        assert creds.openweather_api_key == "ow-test-key"
        assert creds.gemini_api_key == "gm-test-key"

    def test_missing_one(self, default_config):
        with pytest.raises(ConfigurationError, match="GEMINI_API_KEY") as exc_info:
            load_credentials(default_config, {"OPENWEATHER_API_KEY": "ow"})
        assert "OPENWEATHER_API_KEY" not in str(exc_info.value)

    def test_blank_counts_as_missing(self, default_config):
        with pytest.raises(ConfigurationError, match="OPENWEATHER_API_KEY"):
            load_credentials(
                default_config, {"OPENWEATHER_API_KEY": "  ", "GEMINI_API_KEY": "gm"}
            )

    def test_reads_process_environment(self, default_config, env_keys, monkeypatch):
        for key, value in env_keys.items():
            monkeypatch.setenv(key, value)
        assert load_credentials(default_config).gemini_api_key == "gm-test-key"


class TestGetConfigValue:
    def test_nested(self, default_config):
        assert get_config_value(default_config, "advisory.retry.multiplier") == 2.0

    def test_list_index(self, default_config):
        assert get_config_value(default_config, "locations.1.name") == "Bay of Bengal"

    def test_unknown(self, default_config):
        with pytest.raises(KeyError):
            get_config_value(default_config, "advisory.nope")


class TestResolveLocation:
    def test_exact(self, default_config):
        loc = resolve_location(default_config, "Gulf of Aden")
        assert (loc.latitude, loc.longitude) == (12.5, 47)

    def test_case_and_whitespace_insensitive(self, default_config):
        assert resolve_location(default_config, "  bay of BENGAL ").name == "Bay of Bengal"

    def test_unknown(self, default_config):
        with pytest.raises(LocationNotFoundError) as exc_info:
            resolve_location(default_config, "Atlantis")
        assert exc_info.value.name == "Atlantis"
        assert str(exc_info.value) == (
            "Location not found. Please choose from the suggested list."
        )

    def test_default_location(self, default_config):
        assert default_location(default_config).name == "Arabian Sea"
