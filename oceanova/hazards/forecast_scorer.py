"""Forecast risk scorer: daily representatives with deterministic risk."""

import logging
from collections.abc import Sequence
from datetime import date, timedelta

from oceanova.errors import WeatherPayloadError
from oceanova.hazards.alert_classifier import swell_alert, visibility_alert, wind_alert
from oceanova.models.common import Severity
from oceanova.models.forecast import (
    FORECAST_DAYS,
    Forecast,
    ForecastDay,
    RawForecastSample,
    RiskLevel,
)

logger = logging.getLogger(__name__)

# 3-hourly source resolution: every 8th sample starts a new 24h window.
SAMPLES_PER_DAY = 8

_RISK_FOR_SEVERITY = {
    Severity.HIGH: RiskLevel.HIGH,
    Severity.MEDIUM: RiskLevel.MEDIUM,
    Severity.LOW: RiskLevel.LOW,
}


def risk_level(
    wind_speed_knots: float, wave_height_m: float, visibility_km: float
) -> RiskLevel:
    """Highest severity any alert rule would raise for these values."""
    raised = [
        a.severity
        for a in (
            wind_alert(wind_speed_knots),
            swell_alert(wave_height_m),
            visibility_alert(visibility_km),
        )
        if a is not None
    ]
    if not raised:
        return RiskLevel.LOW
    return _RISK_FOR_SEVERITY[max(raised, key=lambda s: s.rank)]


def daily_representatives(samples: Sequence[RawForecastSample]) -> list[RawForecastSample]:
    """Pick one sample per 24h window, first FORECAST_DAYS windows only."""
    picked = list(samples[::SAMPLES_PER_DAY][:FORECAST_DAYS])
    if len(picked) < FORECAST_DAYS:
        raise WeatherPayloadError(
            f"Need {FORECAST_DAYS} daily samples, got {len(picked)} "
            f"from {len(samples)} raw samples"
        )
    return picked


def forecast_dates(today: date) -> list[date]:
    return [today + timedelta(days=i) for i in range(FORECAST_DAYS)]


def score(
    samples: Sequence[RawForecastSample],
    wave_heights: Sequence[float],
    today: date,
) -> Forecast:
    """Build the 5-day forecast.

    Args:
        samples: Raw 3-hourly samples, oldest first.
        wave_heights: Wave height per forecast day, aligned with forecast_dates(today).
        today: Date of day 0.
    """
    if len(wave_heights) != FORECAST_DAYS:
        raise WeatherPayloadError(
            f"Expected {FORECAST_DAYS} wave heights, got {len(wave_heights)}"
        )
    days: list[ForecastDay] = []
    for sample, wave, day in zip(
        daily_representatives(samples), wave_heights, forecast_dates(today)
    ):
        days.append(
            ForecastDay(
                date=day,
                day_label=day.strftime("%a"),
                temp_c=sample.temperature_c,
                wind_speed_knots=sample.wind_speed_knots,
                wave_height_m=wave,
                visibility_km=sample.visibility_km,
                risk=risk_level(sample.wind_speed_knots, wave, sample.visibility_km),
            )
        )
    logger.debug("Scored forecast: %s", [(d.date.isoformat(), d.risk.value) for d in days])
    return tuple(days)
