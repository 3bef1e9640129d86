"""Configuration settings for flightwatch."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

logger = logging.getLogger("flightwatch.config")


def _get_float(env_var: str, default: float) -> float:
    """Parse an environment variable into a float, keeping the default on bad input."""

    value = os.getenv(env_var)
    if value is None or not value.strip():
        return default
    try:
        return float(value)
    except ValueError:
        logger.warning("Ignoring non-numeric %s=%r", env_var, value)
        return default


@dataclass
class Settings:
    """Application configuration loaded from environment variables."""

    env: str = os.getenv("FLIGHTWATCH_ENV", "local")
    log_level: str = os.getenv("FLIGHTWATCH_LOG_LEVEL", "INFO")
    http_timeout: float = _get_float("FLIGHTWATCH_HTTP_TIMEOUT", 30.0)

    # Schedule provider (FlightView)
    flightview_base_url: str = os.getenv(
        "FLIGHTVIEW_BASE_URL", "https://app-api.flightview.com/api/v2/flight"
    )
    flightview_weather_url: str = os.getenv(
        "FLIGHTVIEW_WEATHER_URL", "https://app-api.flightview.com/api/weather"
    )

    # Tracking-identifier provider (FlightRadar24 flight summary)
    fr24_base_url: str = os.getenv(
        "FR24_BASE_URL", "https://fr24api.flightradar24.com/api/flight-summary/light"
    )
    fr24_api_token: str = os.getenv("FR24_API_TOKEN", "")

    # Live-position provider (PlaneFinder)
    planefinder_base_url: str = os.getenv(
        "PLANEFINDER_BASE_URL",
        "https://planefinder.net/api/v3/aircraft/live/metadata/0",
    )


settings = Settings()

__all__ = ["settings", "Settings"]
