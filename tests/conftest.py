"""Pytest configuration and fixtures."""

import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

# Ensure src is on path when running tests without installed package
src = Path(__file__).resolve().parent.parent / "src"
if src.exists() and str(src) not in sys.path:
    sys.path.insert(0, str(src))


@pytest.fixture
def schedule_response():
    """FlightView response for AA176 JFK -> LAX, in the air."""
    return {
        "emptyResults": False,
        "flights": [
            {
                "airline": "American Airlines",
                "airlineCode": "AA",
                "flightNumber": 176,
                "displayStatus": "In Air",
            }
        ],
        "flight": {
            "flightStatus": "In Air",
            "titles": {"main": "American Airlines (AA) 176"},
            "aircraft": {"name": "Airbus A321"},
            "departure": {
                "airportCode": "JFK",
                "airport": "John F. Kennedy International Airport",
                "airportCity": "New York",
                "airportCountryCode": "US",
                "departureDateTime": "2025-08-22T18:00:00-04:00",
                "estimatedTime": "18:10, Aug 22",
                "outGateTime": "2025-08-22T18:12:00-04:00",
                "gate": "B22",
                "terminal": "8",
            },
            "arrival": {
                "airportCode": "LAX",
                "airport": "Los Angeles International Airport",
                "airportCity": "Los Angeles",
                "airportCountryCode": "US",
                "arrivalDateTime": "2025-08-22T21:05:00-07:00",
                "estimatedTime": "21:25, Aug 22",
                "inGateTime": None,
                "gate": "41",
                "terminal": "4",
                "timeRemaining": "2h 10m",
            },
        },
    }


@pytest.fixture
def live_response():
    """PlaneFinder response for the same aircraft, airborne over Kansas."""
    return {
        "success": True,
        "payload": {
            "aircraft": {
                "airline": "American Airlines",
                "airlineICAO": "AAL",
                "type": "A321",
                "adshex": "A1B2C3",
            },
            "static": {
                "iata": "AA176",
                "hex": "A1B2C3",
                "flightNumber": {"carrier": "AA", "number": "176"},
            },
            "dynamic": {
                "lat": 38.9,
                "lon": -98.4,
                "altitude": 36000,
                "speed": 460,
                "heading": 265,
                "trackAngle": 263,
            },
            "status": {
                # 2025-08-22 22:00 UTC = 18:00 EDT
                "departureTimeScheduled": 1755900000,
                "departureTimeActual": 1755900720,
                # 2025-08-23 04:05 UTC = 21:05 PDT
                "arrivalTimeScheduled": 1755921900,
                "arrivalTimeEstimated": 1755923100,
                "departureGate": "B22",
                "arrivalTerminal": "4",
                "departureAirport": {
                    "IATA": "JFK",
                    "Name": "John F Kennedy Intl",
                    "City": "New York",
                    "Country": "US",
                    "Latitude": 40.6398,
                    "Longitude": -73.7789,
                    "Timezone": -5,
                    "DST": "A",
                },
                "arrivalAirport": {
                    "IATA": "LAX",
                    "Name": "Los Angeles Intl",
                    "City": "Los Angeles",
                    "Country": "US",
                    "Latitude": 33.9425,
                    "Longitude": -118.408,
                    "Timezone": -8,
                    "DST": "A",
                },
            },
        },
    }


@pytest.fixture
def now():
    """2025-08-22 23:30 UTC, mid-flight for the fixtures above."""
    return datetime(2025, 8, 22, 23, 30, tzinfo=timezone.utc)
