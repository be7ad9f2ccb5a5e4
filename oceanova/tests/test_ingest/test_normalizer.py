"""Tests for reading normalization."""

import pytest

from oceanova.errors import WeatherPayloadError
from oceanova.ingest.marine_source import StaticMarineSource
from oceanova.ingest.normalizer import ReadingNormalizer, build_reading, parse_samples
from oceanova.models.weather import MarineConditions
from oceanova.tests.factories import ARABIAN_SEA, START, openweather_payload

MARINE = MarineConditions(
    wave_height_m=2.0, sea_state=4, current_speed_knots=1.5, current_direction_deg=45.0
)


@pytest.fixture
def normalizer() -> ReadingNormalizer:
    return ReadingNormalizer(StaticMarineSource(MARINE))


class TestNormalize:
    def test_unit_conversion(self, normalizer):
        raw = openweather_payload(40, wind_ms=10.0, visibility_m=4500, temp=31.5)
        reading, samples = normalizer.normalize(ARABIAN_SEA, raw)

        assert reading.wind_speed_knots == pytest.approx(19.4384)
        assert reading.visibility_km == pytest.approx(4.5)
        assert reading.temperature_c == 31.5
        assert len(samples) == 40

    def test_marine_fields_from_source(self, normalizer):
        reading, _ = normalizer.normalize(ARABIAN_SEA, openweather_payload(40))
        assert reading.wave_height_m == 2.0
        assert reading.sea_state == 4
        assert reading.current_speed_knots == 1.5
        assert reading.current_direction_deg == 45.0

    def test_observed_at_from_first_sample(self, normalizer):
        reading, _ = normalizer.normalize(ARABIAN_SEA, openweather_payload(40))
        assert reading.observed_at == START
        assert reading.location == ARABIAN_SEA

    def test_wind_direction_wraps(self, normalizer):
        reading, _ = normalizer.normalize(
            ARABIAN_SEA, openweather_payload(40, wind_deg=360)
        )
        assert reading.wind_direction_deg == 0

    def test_empty_list(self, normalizer):
        with pytest.raises(WeatherPayloadError, match="no samples"):
            normalizer.normalize(ARABIAN_SEA, {"cod": "200", "list": []})

    def test_humidity_out_of_range(self, normalizer):
        with pytest.raises(WeatherPayloadError, match="humidity"):
            normalizer.normalize(ARABIAN_SEA, openweather_payload(40, humidity=120))


class TestParseSamples:
    def test_missing_main(self):
        raw = openweather_payload(40)
        del raw["list"][3]["main"]
        with pytest.raises(WeatherPayloadError, match="sample 3"):
            parse_samples(raw)

    def test_missing_visibility_defaults_to_10km(self):
        raw = openweather_payload(40)
        del raw["list"][0]["visibility"]
        samples = parse_samples(raw)
        assert samples[0].visibility_km == 10.0

    def test_timestamps_are_utc(self):
        samples = parse_samples(openweather_payload(40))
        assert samples[0].timestamp == START
        assert (samples[1].timestamp - samples[0].timestamp).total_seconds() == 3 * 3600


class TestBuildReading:
    def test_negative_wave_height_rejected(self):
        sample = parse_samples(openweather_payload(40))[0]
        bad = MarineConditions(
            wave_height_m=-1, sea_state=1, current_speed_knots=0, current_direction_deg=0
        )
        with pytest.raises(WeatherPayloadError, match="wave height"):
            build_reading(ARABIAN_SEA, sample, bad)

    def test_sea_state_range(self):
        sample = parse_samples(openweather_payload(40))[0]
        bad = MarineConditions(
            wave_height_m=1, sea_state=0, current_speed_knots=0, current_direction_deg=0
        )
        with pytest.raises(WeatherPayloadError, match="sea state"):
            build_reading(ARABIAN_SEA, sample, bad)
