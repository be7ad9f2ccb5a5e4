"""YAML config loader, credential lookup and dotted-key get."""

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from oceanova.config.defaults import DEFAULT_LOCATIONS
from oceanova.config.schema import AppConfig
from oceanova.errors import ConfigurationError


@dataclass(frozen=True)
class Credentials:
    openweather_api_key: str
    gemini_api_key: str


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load and validate config from a YAML file.

    If no locations are specified in the YAML, injects DEFAULT_LOCATIONS.
    With no path, returns the defaults.
    Raises ConfigurationError if the file does not validate.
    """
    raw: dict[str, Any] = {}
    if path is not None:
        with open(Path(path)) as f:
            raw = yaml.safe_load(f) or {}

    if "locations" not in raw or not raw["locations"]:
        raw["locations"] = [loc.model_dump() for loc in DEFAULT_LOCATIONS]

    try:
        return AppConfig(**raw)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid config {path or '(defaults)'}: {e}") from e


def load_credentials(
    config: AppConfig, environ: Mapping[str, str] | None = None
) -> Credentials:
    """Read both API keys from the environment variables named in config.

    Raises ConfigurationError naming every missing variable.
    """
    env = os.environ if environ is None else environ
    weather_key = env.get(config.weather.api_key_env, "").strip()
    advisory_key = env.get(config.advisory.api_key_env, "").strip()

    missing = [
        name
        for name, value in (
            (config.weather.api_key_env, weather_key),
            (config.advisory.api_key_env, advisory_key),
        )
        if not value
    ]
    if missing:
        raise ConfigurationError(
            "Please provide valid OpenWeather and Gemini API keys "
            f"(missing: {', '.join(missing)})"
        )
    return Credentials(openweather_api_key=weather_key, gemini_api_key=advisory_key)


def get_config_value(config: AppConfig, dotted_key: str) -> Any:
    """Get a config value by dotted key path. E.g. 'advisory.retry.max_attempts'."""
    parts = dotted_key.split(".")
    obj: Any = config
    for part in parts:
        if isinstance(obj, list):
            obj = obj[int(part)]
        elif hasattr(obj, part):
            obj = getattr(obj, part)
        elif isinstance(obj, dict):
            obj = obj[part]
        else:
            raise KeyError(f"Config key not found: {dotted_key}")
    return obj
