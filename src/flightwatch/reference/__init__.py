"""Bundled airport and airline reference data."""

from flightwatch.reference.airlines import AirlineInfo, get_airline, iata_to_icao
from flightwatch.reference.airports import AirportInfo, get_airport, get_airport_coordinates

__all__ = [
    "AirlineInfo",
    "AirportInfo",
    "get_airline",
    "get_airport",
    "get_airport_coordinates",
    "iata_to_icao",
]
