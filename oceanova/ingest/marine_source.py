"""Marine conditions sources: wave height, sea state and surface current.

The weather provider has no sea-surface fields, so the refresh cycle
depends on one of these sources for them.
"""

import logging
import random
from collections.abc import Sequence
from datetime import date, datetime
from typing import Protocol

import httpx

from oceanova.config.schema import MarineSourceConfig, MarineSourceKind
from oceanova.errors import TransportError, WeatherPayloadError
from oceanova.models.weather import Location, MarineConditions

logger = logging.getLogger(__name__)

KMH_TO_KNOTS = 0.539957
OPEN_METEO_MARINE_URL = "https://marine-api.open-meteo.com/v1/marine"

# WMO code 3700 upper bounds (m) for sea states 1..8; above the last is 9.
_SEA_STATE_BOUNDS = (0.1, 0.5, 1.25, 2.5, 4.0, 6.0, 9.0, 14.0)


def sea_state_for_wave_height(wave_height_m: float) -> int:
    """Map significant wave height to the WMO sea state code, clamped to 1-9."""
    for code, upper in enumerate(_SEA_STATE_BOUNDS, start=1):
        if wave_height_m <= upper:
            return code
    return 9


class MarineConditionsSource(Protocol):
    def current(self, location: Location, at: datetime) -> MarineConditions: ...

    def wave_heights(self, location: Location, days: Sequence[date]) -> list[float]: ...


class StaticMarineSource:
    """Returns the same conditions for every location and time."""

    def __init__(self, conditions: MarineConditions):
        self.conditions = conditions

    def current(self, location: Location, at: datetime) -> MarineConditions:
        return self.conditions

    def wave_heights(self, location: Location, days: Sequence[date]) -> list[float]:
        return [self.conditions.wave_height_m for _ in days]


class SimulatedMarineSource:
    """Deterministic stand-in values seeded by location and date.

    Ranges: wave height 1-4 m, current 1-3 kn, any direction. The same
    seed, location and date always give the same values.
    """

    def __init__(self, seed: int = 0):
        self.seed = seed

    def _rng(self, location: Location, key: str) -> random.Random:
        return random.Random(f"{self.seed}:{location.name}:{key}")

    def current(self, location: Location, at: datetime) -> MarineConditions:
        rng = self._rng(location, at.strftime("%Y-%m-%dT%H"))
        wave = round(rng.uniform(1.0, 4.0), 2)
        return MarineConditions(
            wave_height_m=wave,
            sea_state=sea_state_for_wave_height(wave),
            current_speed_knots=round(rng.uniform(1.0, 3.0), 2),
            current_direction_deg=round(rng.uniform(0.0, 359.9), 1),
        )

    def wave_heights(self, location: Location, days: Sequence[date]) -> list[float]:
        return [
            round(self._rng(location, d.isoformat()).uniform(1.0, 4.0), 2)
            for d in days
        ]


class OpenMeteoMarineSource:
    """Open-Meteo marine API (no key required)."""

    SERVICE_NAME = "open-meteo"

    def __init__(self, base_url: str = OPEN_METEO_MARINE_URL, timeout: float = 30.0):
        self.base_url = base_url
        self.timeout = timeout

    def _get(self, location: Location, params: dict) -> dict:
        query = {
            "latitude": location.latitude,
            "longitude": location.longitude,
            "timezone": "UTC",
            **params,
        }
        try:
            resp = httpx.get(self.base_url, params=query, timeout=self.timeout)
        except httpx.RequestError as e:
            raise TransportError(
                f"Marine request failed: {e}", service=self.SERVICE_NAME
            ) from e
        if resp.status_code >= 400:
            raise TransportError(
                f"Marine request failed: HTTP {resp.status_code}",
                service=self.SERVICE_NAME,
                status_code=resp.status_code,
            )
        try:
            return resp.json()
        except ValueError as e:
            raise WeatherPayloadError(f"Marine response is not JSON: {e}") from e

    def current(self, location: Location, at: datetime) -> MarineConditions:
        data = self._get(location, {
            "hourly": "wave_height,ocean_current_velocity,ocean_current_direction",
            "forecast_days": 1,
        })
        hourly = data.get("hourly") or {}
        times = hourly.get("time") or []
        wanted = at.strftime("%Y-%m-%dT%H:00")
        idx = times.index(wanted) if wanted in times else 0

        wave = _value_at(hourly, "wave_height", idx)
        velocity_kmh = _value_at(hourly, "ocean_current_velocity", idx)
        direction = _value_at(hourly, "ocean_current_direction", idx)
        return MarineConditions(
            wave_height_m=wave,
            sea_state=sea_state_for_wave_height(wave),
            current_speed_knots=velocity_kmh * KMH_TO_KNOTS,
            current_direction_deg=direction % 360,
        )

    def wave_heights(self, location: Location, days: Sequence[date]) -> list[float]:
        data = self._get(location, {
            "daily": "wave_height_max",
            "forecast_days": max(len(days), 1) + 1,
        })
        daily = data.get("daily") or {}
        by_date = dict(zip(daily.get("time") or [], daily.get("wave_height_max") or []))
        heights: list[float] = []
        for d in days:
            value = by_date.get(d.isoformat())
            if value is None:
                raise WeatherPayloadError(
                    f"No marine wave height for {location.name} on {d.isoformat()}"
                )
            heights.append(float(value))
        return heights


def _value_at(hourly: dict, key: str, idx: int) -> float:
    values = hourly.get(key) or []
    if idx >= len(values) or values[idx] is None:
        raise WeatherPayloadError(f"Marine data missing '{key}'")
    return float(values[idx])


def build_marine_source(config: MarineSourceConfig) -> MarineConditionsSource:
    if config.kind == MarineSourceKind.STATIC:
        return StaticMarineSource(
            MarineConditions(
                wave_height_m=config.wave_height_m,
                sea_state=sea_state_for_wave_height(config.wave_height_m),
                current_speed_knots=config.current_speed_knots,
                current_direction_deg=config.current_direction_deg,
            )
        )
    if config.kind == MarineSourceKind.OPEN_METEO:
        return OpenMeteoMarineSource(base_url=config.base_url, timeout=config.timeout)
    logger.info("Using simulated marine conditions (seed=%d)", config.seed)
    return SimulatedMarineSource(seed=config.seed)
