"""Alert classifier: runs every hazard rule (no short-circuit) on a reading.

Each rule yields at most one alert, the highest tier that applies.
Thresholds are strict; a value exactly on a threshold raises nothing.
"""

from oceanova.models.alert import Alert, AlertSet, AlertType
from oceanova.models.common import Severity
from oceanova.models.weather import WeatherReading

CYCLONE_WIND_KNOTS = 34.0  # tropical storm force
STRONG_WIND_KNOTS = 25.0
HIGH_SWELL_M = 4.0
MODERATE_SWELL_M = 2.5
FOG_VISIBILITY_KM = 5.0
HEAT_TEMPERATURE_C = 35.0

CYCLONE_ALERT = Alert(
    AlertType.CYCLONE,
    Severity.HIGH,
    "Extreme wind warning! A potential cyclone is developing in the area. "
    "Take immediate action.",
)
WIND_ALERT = Alert(
    AlertType.WIND,
    Severity.MEDIUM,
    "Strong winds detected. Secure all loose equipment and navigate with caution.",
)
HIGH_SWELL_ALERT = Alert(
    AlertType.SWELL,
    Severity.HIGH,
    "Dangerous swells detected. Significant wave heights are impacting "
    "navigation. Reduce speed.",
)
MODERATE_SWELL_ALERT = Alert(
    AlertType.SWELL,
    Severity.MEDIUM,
    "Moderate swells. Expect rough seas and prepare for vessel motion.",
)
FOG_ALERT = Alert(
    AlertType.FOG,
    Severity.LOW,
    "Reduced visibility due to mist or fog. Exercise extreme caution and use "
    "navigation lights.",
)
HEAT_ALERT = Alert(
    AlertType.HEAT,
    Severity.MEDIUM,
    "High temperatures detected. Monitor engine cooling systems and crew well-being.",
)


def wind_alert(wind_speed_knots: float) -> Alert | None:
    if wind_speed_knots > CYCLONE_WIND_KNOTS:
        return CYCLONE_ALERT
    if wind_speed_knots > STRONG_WIND_KNOTS:
        return WIND_ALERT
    return None


def swell_alert(wave_height_m: float) -> Alert | None:
    if wave_height_m > HIGH_SWELL_M:
        return HIGH_SWELL_ALERT
    if wave_height_m > MODERATE_SWELL_M:
        return MODERATE_SWELL_ALERT
    return None


def visibility_alert(visibility_km: float) -> Alert | None:
    if visibility_km < FOG_VISIBILITY_KM:
        return FOG_ALERT
    return None


def heat_alert(temperature_c: float) -> Alert | None:
    if temperature_c > HEAT_TEMPERATURE_C:
        return HEAT_ALERT
    return None


def classify(reading: WeatherReading) -> AlertSet:
    """Return the alerts raised by a reading. Pure and total."""
    candidates = (
        wind_alert(reading.wind_speed_knots),
        swell_alert(reading.wave_height_m),
        visibility_alert(reading.visibility_km),
        heat_alert(reading.temperature_c),
    )
    return frozenset(a for a in candidates if a is not None)


def sort_alerts(alerts: AlertSet) -> list[Alert]:
    """Display order: most severe first, then by type name."""
    return sorted(alerts, key=lambda a: (-a.severity.rank, a.type.value))
