"""OpenWeatherMap 5-day/3-hour forecast client.

A single failed request fails the refresh cycle; there is no retry here.
"""

import logging

import httpx

from oceanova.errors import TransportError, WeatherPayloadError

logger = logging.getLogger(__name__)

OPENWEATHER_FORECAST_URL = "https://api.openweathermap.org/data/2.5/forecast"
SERVICE_NAME = "openweather"


class OpenWeatherClient:
    def __init__(
        self,
        api_key: str,
        base_url: str = OPENWEATHER_FORECAST_URL,
        timeout: float = 30.0,
    ):
        self.api_key = api_key
        self.base_url = base_url
        self.timeout = timeout

    def get_forecast(self, latitude: float, longitude: float) -> dict:
        """Fetch the 3-hourly forecast list for a coordinate in metric units."""
        params = {
            "lat": latitude,
            "lon": longitude,
            "appid": self.api_key,
            "units": "metric",
        }
        try:
            resp = httpx.get(self.base_url, params=params, timeout=self.timeout)
        except httpx.RequestError as e:
            logger.error("OpenWeather request failed for %s,%s: %s", latitude, longitude, e)
            raise TransportError(
                f"Failed to fetch weather data: {e}", service=SERVICE_NAME
            ) from e

        if resp.status_code >= 400:
            logger.error(
                "OpenWeather returned %d for %s,%s", resp.status_code, latitude, longitude
            )
            raise TransportError(
                f"Failed to fetch weather data: HTTP {resp.status_code}",
                service=SERVICE_NAME,
                status_code=resp.status_code,
            )
        try:
            return resp.json()
        except ValueError as e:
            raise WeatherPayloadError(f"Weather response is not JSON: {e}") from e
