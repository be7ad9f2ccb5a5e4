"""Advisory prompt and request body construction."""

from oceanova.models.forecast import Forecast
from oceanova.models.weather import WeatherReading

ADVISORY_FIELDS = (
    "optimalSpeed",
    "fuelEfficiency",
    "routeDeviation",
    "timeSavings",
    "recommendations",
)

RESPONSE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "optimalSpeed": {"type": "NUMBER"},
        "fuelEfficiency": {"type": "NUMBER"},
        "routeDeviation": {"type": "NUMBER"},
        "timeSavings": {"type": "NUMBER"},
        "recommendations": {
            "type": "ARRAY",
            "items": {"type": "STRING"},
        },
    },
    "required": list(ADVISORY_FIELDS),
    "propertyOrdering": list(ADVISORY_FIELDS),
}


def build_prompt(reading: WeatherReading, forecast: Forecast) -> str:
    loc = reading.location
    forecast_lines = "\n".join(
        f"- Date: {day.date.isoformat()}, Temp: {day.temp_c:.1f}°C, "
        f"Wind: {day.wind_speed_knots:.1f} knots, "
        f"Wave Height: {day.wave_height_m:.1f}m, "
        f"Visibility: {day.visibility_km:.1f}km, Risk: {day.risk.value}"
        for day in forecast
    )
    return (
        f"Based on the following weather data for {loc.name}, provide vessel "
        "optimization recommendations in a JSON object.\n"
        "The JSON object should have the following structure: {\n"
        '  "optimalSpeed": number,\n'
        '  "fuelEfficiency": number,\n'
        '  "routeDeviation": number,\n'
        '  "timeSavings": number,\n'
        '  "recommendations": string[]\n'
        "}.\n"
        "fuelEfficiency is a percentage between 0 and 100, routeDeviation is in "
        "nautical miles and timeSavings is in hours (negative for a delay).\n\n"
        "Current Conditions:\n"
        f"- Location: {loc.name} ({loc.latitude}, {loc.longitude})\n"
        f"- Temperature: {reading.temperature_c:.1f}°C\n"
        f"- Wind Speed: {reading.wind_speed_knots:.1f} knots\n"
        f"- Wind Direction: {reading.wind_direction_deg:.0f}°\n"
        f"- Wave Height: {reading.wave_height_m:.1f}m\n"
        f"- Sea State: {reading.sea_state}\n"
        f"- Current: {reading.current_speed_knots:.1f} knots at "
        f"{reading.current_direction_deg:.0f}°\n"
        f"- Visibility: {reading.visibility_km:.1f}km\n"
        f"- Pressure: {reading.pressure_hpa:.0f} hPa\n"
        f"- Humidity: {reading.humidity_pct:.0f}%\n\n"
        f"Forecast (next {len(forecast)} days):\n"
        f"{forecast_lines}\n\n"
        "Analyze the data and provide realistic, actionable advice. Ensure the "
        "output is a single, valid JSON object with no other text."
    )


def build_request_body(prompt: str) -> dict:
    return {
        "contents": [{"parts": [{"text": prompt}]}],
        "generationConfig": {
            "responseMimeType": "application/json",
            "responseSchema": RESPONSE_SCHEMA,
        },
    }
