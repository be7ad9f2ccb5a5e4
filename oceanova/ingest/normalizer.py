"""Reading normalizer: OpenWeather samples to canonical readings."""

import logging
from datetime import UTC, datetime

from oceanova.errors import WeatherPayloadError
from oceanova.ingest.marine_source import MarineConditionsSource
from oceanova.models.common import MS_TO_KNOTS
from oceanova.models.forecast import RawForecastSample
from oceanova.models.weather import Location, MarineConditions, WeatherReading

logger = logging.getLogger(__name__)

# OpenWeather omits visibility for some samples; 10 km is its reporting cap.
DEFAULT_VISIBILITY_M = 10_000


class ReadingNormalizer:
    def __init__(self, marine_source: MarineConditionsSource):
        self.marine = marine_source

    def normalize(
        self, location: Location, raw: dict
    ) -> tuple[WeatherReading, list[RawForecastSample]]:
        """Convert a raw forecast response into the current reading and all samples.

        Sample 0 is the current reading. Marine fields come from the
        configured marine source.
        """
        samples = parse_samples(raw)
        current = samples[0]
        marine = self.marine.current(location, current.timestamp)
        reading = build_reading(location, current, marine)
        logger.info(
            "Normalized %s: wind %.1f kn, wave %.1f m, vis %.1f km (%d samples)",
            location.name,
            reading.wind_speed_knots,
            reading.wave_height_m,
            reading.visibility_km,
            len(samples),
        )
        return reading, samples


def parse_samples(raw: dict) -> list[RawForecastSample]:
    """Parse the provider's `list` entries, converting m/s to knots and m to km."""
    entries = raw.get("list")
    if not entries:
        raise WeatherPayloadError("Weather response contains no samples")
    return [_parse_sample(i, entry) for i, entry in enumerate(entries)]


def _parse_sample(index: int, entry: dict) -> RawForecastSample:
    try:
        main = entry["main"]
        wind = entry["wind"]
        return RawForecastSample(
            timestamp=datetime.fromtimestamp(int(entry["dt"]), tz=UTC),
            temperature_c=float(main["temp"]),
            wind_speed_knots=float(wind["speed"]) * MS_TO_KNOTS,
            wind_direction_deg=float(wind.get("deg", 0.0)) % 360,
            visibility_km=float(entry.get("visibility", DEFAULT_VISIBILITY_M)) / 1000,
            pressure_hpa=float(main["pressure"]),
            humidity_pct=float(main["humidity"]),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise WeatherPayloadError(f"Malformed weather sample {index}: {e!r}") from e


def build_reading(
    location: Location, sample: RawForecastSample, marine: MarineConditions
) -> WeatherReading:
    """Combine a weather sample with marine conditions, enforcing value ranges."""
    reading = WeatherReading(
        location=location,
        observed_at=sample.timestamp,
        temperature_c=sample.temperature_c,
        wind_speed_knots=sample.wind_speed_knots,
        wind_direction_deg=sample.wind_direction_deg,
        wave_height_m=marine.wave_height_m,
        visibility_km=sample.visibility_km,
        pressure_hpa=sample.pressure_hpa,
        humidity_pct=sample.humidity_pct,
        sea_state=marine.sea_state,
        current_speed_knots=marine.current_speed_knots,
        current_direction_deg=marine.current_direction_deg % 360,
    )
    _validate(reading)
    return reading


def _validate(r: WeatherReading) -> None:
    problems: list[str] = []
    if r.wind_speed_knots < 0:
        problems.append(f"wind speed {r.wind_speed_knots}")
    if r.wave_height_m < 0:
        problems.append(f"wave height {r.wave_height_m}")
    if r.visibility_km < 0:
        problems.append(f"visibility {r.visibility_km}")
    if not 0 <= r.humidity_pct <= 100:
        problems.append(f"humidity {r.humidity_pct}")
    if not 1 <= r.sea_state <= 9:
        problems.append(f"sea state {r.sea_state}")
    if r.current_speed_knots < 0:
        problems.append(f"current speed {r.current_speed_knots}")
    if problems:
        raise WeatherPayloadError(f"Reading out of range: {', '.join(problems)}")
