"""Weather provider abstractions and implementations."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional

import requests
from pydantic import BaseModel, ValidationError

from models.outfit import WeatherMeta
from tools.observability import instrument_tool

LOGGER = logging.getLogger(__name__)

COLD_BELOW_C = 15.0
WARM_FROM_C = 28.0
_WET_CONDITIONS = {"rain", "drizzle", "thunderstorm", "snow"}


class _WeatherCondition(BaseModel):
    main: str = "Clear"
    description: str = "unknown"
    icon: Optional[str] = None


class _Main(BaseModel):
    temp: float


class _CurrentWeatherResponse(BaseModel):
    name: str = ""
    main: _Main
    weather: List[_WeatherCondition] = []


@dataclass
class WeatherReading:
    """Weather label usable as a selection constraint plus display metadata."""

    label: Optional[str]
    meta: Optional[WeatherMeta] = None


def weather_label(condition: str, temperature_c: float) -> str:
    """Map a raw condition and temperature onto one of the weather options."""

    if condition.strip().lower() in _WET_CONDITIONS:
        return "Rainy"
    if temperature_c < COLD_BELOW_C:
        return "Cold"
    if temperature_c >= WARM_FROM_C:
        return "Warm"
    if condition.strip().lower() == "clouds":
        return "Cloudy"
    return "Sunny"


class WeatherProvider(ABC):
    """Abstract weather provider interface."""

    @abstractmethod
    def get_current_weather(self, location: str) -> WeatherReading:
        """Return the current weather for a free-text location."""


class OpenWeatherProvider(WeatherProvider):
    """OpenWeather provider with schema validation and graceful fallbacks."""

    url = "https://api.openweathermap.org/data/2.5/weather"

    def __init__(self, api_key: str | None = None, timeout_seconds: float = 5.0, units: str = "metric") -> None:
        self.api_key = api_key
        self.timeout_seconds = timeout_seconds
        self.units = units

    def _fallback_reading(self, reason: str) -> WeatherReading:
        LOGGER.warning("Weather unavailable, keeping manual selection", extra={"reason": reason})
        return WeatherReading(label=None)

    @instrument_tool("get_current_weather")
    def get_current_weather(self, location: str) -> WeatherReading:
        if not location or not location.strip():
            raise ValueError("location is required for weather lookups")

        if not self.api_key:
            return self._fallback_reading("missing_api_key")

        params = {"q": location.strip(), "appid": self.api_key, "units": self.units}
        try:
            response = requests.get(self.url, params=params, timeout=self.timeout_seconds)
            response.raise_for_status()
            parsed = _CurrentWeatherResponse.model_validate(response.json())
        except requests.RequestException as exc:
            LOGGER.error("Weather API unreachable", exc_info=exc)
            return self._fallback_reading("request_error")
        except (ValidationError, ValueError) as exc:
            LOGGER.error("Weather payload schema validation failed", exc_info=exc)
            return self._fallback_reading("schema_validation")

        condition = parsed.weather[0] if parsed.weather else _WeatherCondition()
        label = weather_label(condition.main, parsed.main.temp)
        meta = WeatherMeta(
            location=parsed.name or location.strip(),
            temperature=parsed.main.temp,
            description=condition.description,
            icon=condition.icon,
        )
        return WeatherReading(label=label, meta=meta)


class MockWeatherProvider(WeatherProvider):
    """Offline deterministic weather provider for tests."""

    def __init__(self, reading: WeatherReading | None = None) -> None:
        self.reading = reading or WeatherReading(
            label="Sunny",
            meta=WeatherMeta(location="Manila", temperature=24.0, description="clear sky", icon="01d"),
        )

    def get_current_weather(self, location: str) -> WeatherReading:
        LOGGER.info("Returning mock weather")
        return self.reading


__all__ = [
    "WeatherReading",
    "WeatherProvider",
    "OpenWeatherProvider",
    "MockWeatherProvider",
    "weather_label",
]
