"""Airport weather from the FlightView weather API.

Weather is shown next to the flight but is not part of the status pipeline;
a failed lookup returns None instead of raising.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests

from flightwatch.config import settings
from flightwatch.errors import ProviderError
from flightwatch.tracking.sources.base import decode_json

logger = logging.getLogger("flightwatch.tracking.sources.weather")

PROVIDER = "flightview-weather"

WEATHER_HEADERS = {
    "origin": "https://www.flightview.com",
    "user-agent": "Mozilla/5.0 (compatible; FlightTracker/1.0)",
    "accept": "application/json",
}


@dataclass(frozen=True)
class WeatherReport:
    """Current conditions at an airport."""

    location: str
    phrase: str
    temperature: Optional[float]
    temperature_units: str
    relative_humidity: Optional[float] = None
    wind_speed: Optional[float] = None
    wind_speed_units: str = ""
    icon: str = ""

    @classmethod
    def from_response(cls, data: Dict[str, Any]) -> "WeatherReport":
        return cls(
            location=data.get("location") or "",
            phrase=data.get("phrase") or "",
            temperature=data.get("temperature"),
            temperature_units=data.get("temperatureUnits") or "",
            relative_humidity=data.get("relativeHumidity"),
            wind_speed=data.get("windSpeed"),
            wind_speed_units=data.get("windSpeedUnits") or "",
            icon=str(data.get("icon") or ""),
        )

    def formatted_temperature(self) -> Optional[str]:
        if self.temperature is None:
            return None
        return format_temperature(self.temperature, self.temperature_units)


def fahrenheit_to_celsius(fahrenheit: float) -> int:
    return round((fahrenheit - 32) * 5 / 9)


def format_temperature(temperature: float, units: str) -> str:
    """Temperature for display, converting Fahrenheit to Celsius."""
    if units == "F":
        return f"{fahrenheit_to_celsius(temperature)}°C"
    return f"{temperature}°{units}"


class WeatherSource:
    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None):
        self.base_url = (base_url or settings.flightview_weather_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.http_timeout

    def fetch_weather(self, airport_iata: str) -> Optional[WeatherReport]:
        if not airport_iata:
            return None
        url = f"{self.base_url}/{airport_iata}/"
        try:
            resp = requests.get(url, headers=WEATHER_HEADERS, timeout=self.timeout)
            data = decode_json(PROVIDER, resp)
        except requests.RequestException as e:
            logger.warning("Weather request for %s failed: %s", airport_iata, e)
            return None
        except ProviderError as e:
            logger.warning("Weather for %s unavailable: %s", airport_iata, e)
            return None

        if not isinstance(data, dict):
            return None
        return WeatherReport.from_response(data)
