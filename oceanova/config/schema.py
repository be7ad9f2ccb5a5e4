"""Pydantic v2 configuration schema with strict validation."""

from enum import StrEnum

from pydantic import BaseModel, Field, model_validator


class MarineSourceKind(StrEnum):
    SIMULATED = "simulated"
    STATIC = "static"
    OPEN_METEO = "open-meteo"


class LocationConfig(BaseModel):
    model_config = {"extra": "forbid"}

    name: str
    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=180.0)


class WeatherApiConfig(BaseModel):
    model_config = {"extra": "forbid"}

    base_url: str = "https://api.openweathermap.org/data/2.5/forecast"
    api_key_env: str = "OPENWEATHER_API_KEY"
    timeout: float = Field(default=30.0, gt=0.0)


class RetryConfig(BaseModel):
    model_config = {"extra": "forbid"}

    max_attempts: int = Field(default=5, ge=1)
    base_delay_ms: int = Field(default=1000, ge=0)
    multiplier: float = Field(default=2.0, ge=1.0)


class AdvisoryConfig(BaseModel):
    model_config = {"extra": "forbid"}

    base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    model: str = "gemini-2.5-flash-preview-05-20"
    api_key_env: str = "GEMINI_API_KEY"
    timeout: float = Field(default=60.0, gt=0.0)
    current_speed_knots: float = Field(default=12.5, ge=0.0)
    retry: RetryConfig = RetryConfig()


class MarineSourceConfig(BaseModel):
    model_config = {"extra": "forbid"}

    kind: MarineSourceKind = MarineSourceKind.SIMULATED
    seed: int = 0
    base_url: str = "https://marine-api.open-meteo.com/v1/marine"
    timeout: float = Field(default=30.0, gt=0.0)
    # Values used by the static source
    wave_height_m: float = Field(default=1.5, ge=0.0)
    current_speed_knots: float = Field(default=1.5, ge=0.0)
    current_direction_deg: float = Field(default=0.0, ge=0.0, lt=360.0)


class RefreshConfig(BaseModel):
    model_config = {"extra": "forbid"}

    interval_ms: int = Field(default=600_000, ge=1000)
    default_location: str = "Arabian Sea"


class AppConfig(BaseModel):
    model_config = {"extra": "forbid"}

    weather: WeatherApiConfig = WeatherApiConfig()
    advisory: AdvisoryConfig = AdvisoryConfig()
    marine: MarineSourceConfig = MarineSourceConfig()
    refresh: RefreshConfig = RefreshConfig()
    locations: list[LocationConfig] = []

    @model_validator(mode="after")
    def _default_location_known(self) -> "AppConfig":
        # An empty table is filled in by the loader.
        if not self.locations:
            return self
        wanted = self.refresh.default_location.strip().lower()
        if not any(loc.name.lower() == wanted for loc in self.locations):
            raise ValueError(
                f"refresh.default_location '{self.refresh.default_location}' "
                "is not in the location table"
            )
        return self
