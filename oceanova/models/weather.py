"""Current-conditions data models."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Location:
    name: str
    latitude: float
    longitude: float


@dataclass(frozen=True)
class MarineConditions:
    """Sea-surface values the weather provider does not supply."""

    wave_height_m: float
    sea_state: int  # WMO sea state code, 1-9
    current_speed_knots: float
    current_direction_deg: float


@dataclass(frozen=True)
class WeatherReading:
    location: Location
    observed_at: datetime
    temperature_c: float
    wind_speed_knots: float
    wind_direction_deg: float
    wave_height_m: float
    visibility_km: float
    pressure_hpa: float
    humidity_pct: float
    sea_state: int
    current_speed_knots: float
    current_direction_deg: float
