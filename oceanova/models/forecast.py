"""Forecast data models."""

from dataclasses import dataclass
from datetime import date, datetime
from enum import StrEnum
from typing import TypeAlias

FORECAST_DAYS = 5


class RiskLevel(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True)
class RawForecastSample:
    """One 3-hourly sample from the weather provider, already in metric units."""

    timestamp: datetime
    temperature_c: float
    wind_speed_knots: float
    wind_direction_deg: float
    visibility_km: float
    pressure_hpa: float
    humidity_pct: float


@dataclass(frozen=True)
class ForecastDay:
    date: date
    day_label: str  # short weekday, e.g. "Mon"
    temp_c: float
    wind_speed_knots: float
    wave_height_m: float
    visibility_km: float
    risk: RiskLevel


Forecast: TypeAlias = tuple[ForecastDay, ...]
