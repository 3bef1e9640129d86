"""Upstream flight data providers."""

from flightwatch.tracking.sources.base import LiveSource, ScheduleSource, TrackingSource
from flightwatch.tracking.sources.flightradar import FlightRadarSource
from flightwatch.tracking.sources.flightview import FlightViewSource
from flightwatch.tracking.sources.planefinder import PlaneFinderSource
from flightwatch.tracking.sources.weather import WeatherReport, WeatherSource

__all__ = [
    "FlightRadarSource",
    "FlightViewSource",
    "LiveSource",
    "PlaneFinderSource",
    "ScheduleSource",
    "TrackingSource",
    "WeatherReport",
    "WeatherSource",
]
