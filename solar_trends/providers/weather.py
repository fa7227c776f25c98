"""Weather readings for solar-efficiency context (OpenWeatherMap).

Readings are informational: they are not market data points, they only feed
the ``conditions`` block of the trend report.
"""

import random
from typing import Dict, List, Optional

import requests

from solar_trends.core.errors import ParseFailure, TransportFailure
from solar_trends.core.logger import logger
from solar_trends.models.datatypes import AnalysisParams, WeatherReading
from solar_trends.providers.base import SourceAdapter
from solar_trends.providers.fallback import synthetic_reading

DEFAULT_WEATHER_URL = "https://api.openweathermap.org/data/2.5/weather"

REGION_CITIES: Dict[str, List[str]] = {
    "global": ["New York", "London", "Tokyo", "Sydney"],
    "us": ["Los Angeles", "Phoenix", "Miami", "Denver"],
    "eu": ["Madrid", "Rome", "Athens", "Lisbon"],
    "asia": ["Delhi", "Beijing", "Bangkok", "Jakarta"],
}


def cities_for_region(region: str) -> List[str]:
    """Cities sampled for ``region``; unknown regions use the global list."""
    return REGION_CITIES.get(region, REGION_CITIES["global"])


def calculate_solar_efficiency(temp: float, clouds: float, humidity: float) -> float:
    """Simplified panel efficiency (%) under the given conditions.

    Base 20 %, minus 0.4 per degree above 25 C, 0.15 per % cloud cover and
    0.05 per % humidity, floored at 5 %.
    """
    base_efficiency = 20
    temp_factor = 0.4 * (25 - temp) if temp > 25 else 0
    cloud_factor = -0.15 * clouds
    humidity_factor = -0.05 * humidity
    return max(5, base_efficiency + temp_factor + cloud_factor + humidity_factor)


class WeatherAdapter(SourceAdapter):
    """Current conditions per city, with a synthetic reading per failed city."""

    name = "environment"

    def __init__(
        self,
        api_key: Optional[str] = None,
        url: str = DEFAULT_WEATHER_URL,
        timeout: float = 10,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.api_key = api_key
        self.url = url
        self.timeout = timeout
        self.rng = rng

    def fetch(self, params: AnalysisParams) -> List[WeatherReading]:
        readings: List[WeatherReading] = []
        for city in cities_for_region(params.region):
            try:
                readings.append(self.fetch_city(city))
            except Exception as exc:
                logger.warning(f"WeatherAdapter: {city} failed ({exc}), using synthetic reading")
                readings.append(synthetic_reading(city, self.rng))
        return readings

    def fetch_city(self, city: str) -> WeatherReading:
        if not self.api_key:
            raise TransportFailure(self.name, "OPENWEATHER_API_KEY is not set")

        try:
            resp = requests.get(
                self.url,
                params={"q": city, "appid": self.api_key, "units": "metric"},
                timeout=self.timeout,
            )
            resp.raise_for_status()
        except requests.RequestException as exc:
            raise TransportFailure(self.name, f"{city}: {exc}") from exc

        try:
            body = resp.json()
            temperature = float(body["main"]["temp"])
            humidity = float(body["main"]["humidity"])
            cloudiness = float(body["clouds"]["all"])
        except (ValueError, KeyError, TypeError) as exc:
            raise ParseFailure(self.name, f"{city}: {exc}") from exc

        return WeatherReading(
            city=city,
            temperature=temperature,
            humidity=humidity,
            cloudiness=cloudiness,
            solar_efficiency=calculate_solar_efficiency(temperature, cloudiness, humidity),
        )

    def fallback(self, params: AnalysisParams) -> List[WeatherReading]:
        return [synthetic_reading(city, self.rng) for city in cities_for_region(params.region)]
