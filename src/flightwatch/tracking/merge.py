"""Combine the schedule-provider flight with live-provider data.

Each step returns a new UnifiedFlightData; nothing is mutated in place.
Airline ICAO codes and airport coordinates are first-writer-wins: once
populated they are never overwritten by a later source.
"""

import logging
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple

from flightwatch.reference.airlines import iata_to_icao
from flightwatch.reference.airports import get_airport_coordinates
from flightwatch.tracking.models import (
    Coordinates,
    LiveData,
    LiveProviderTimes,
    RoutePair,
    UnifiedFlightData,
)
from flightwatch.tracking.status import normalize_flight_status, should_fetch_live_position
from flightwatch.tracking.timestamps import utc_now

logger = logging.getLogger("flightwatch.tracking.merge")


def with_airline_icao(flight: UnifiedFlightData, icao: Optional[str]) -> UnifiedFlightData:
    if not icao or flight.airline_icao:
        return flight
    return replace(flight, airline_icao=icao)


def with_live_data(flight: UnifiedFlightData, live_data: Optional[LiveData]) -> UnifiedFlightData:
    if live_data is None:
        return flight
    return replace(flight, live_data=live_data)


def with_secondary_source(
    flight: UnifiedFlightData,
    times: Optional[LiveProviderTimes],
    aircraft_hex: Optional[str] = None,
) -> UnifiedFlightData:
    return replace(
        flight,
        secondary=times if times is not None else flight.secondary,
        aircraft_hex=flight.aircraft_hex or aircraft_hex,
    )


def with_coordinates(
    flight: UnifiedFlightData,
    departure: Optional[Coordinates] = None,
    arrival: Optional[Coordinates] = None,
) -> UnifiedFlightData:
    """Backfill airport coordinates only where the flight has none."""
    airports = RoutePair(
        departure=flight.airports.departure.with_coordinates(departure),
        arrival=flight.airports.arrival.with_coordinates(arrival),
    )
    if airports == flight.airports:
        return flight
    return replace(flight, airports=airports)


def with_reference_data(flight: UnifiedFlightData) -> UnifiedFlightData:
    """Fill remaining gaps from the bundled airport and airline reference."""
    flight = with_coordinates(
        flight,
        departure=get_airport_coordinates(flight.airports.departure.code),
        arrival=get_airport_coordinates(flight.airports.arrival.code),
    )
    return with_airline_icao(flight, iata_to_icao(flight.airline_iata))


def merge_flight_data(
    primary: UnifiedFlightData,
    live: UnifiedFlightData,
    now: Optional[datetime] = None,
) -> UnifiedFlightData:
    """Enrich a schedule-provider flight with a transformed live-provider flight.

    The airline ICAO is always taken (the schedule provider never carries it).
    Live position is attached only while the aircraft is trackable, i.e. the
    primary's status is Departed, In Air or Landed.
    """
    flight = with_airline_icao(primary, live.airline_icao)

    status = normalize_flight_status(primary.raw_status, primary, now)
    if should_fetch_live_position(status) and live.live_data is not None:
        flight = with_live_data(flight, live.live_data)
        logger.debug(
            "Live position attached: %.4f, %.4f",
            live.live_data.position.lat,
            live.live_data.position.lng,
        )

    flight = with_secondary_source(flight, live.secondary, live.aircraft_hex)
    return with_coordinates(
        flight,
        departure=live.airports.departure.coordinates,
        arrival=live.airports.arrival.coordinates,
    )


def tracking_window(now: Optional[datetime] = None) -> Tuple[datetime, datetime]:
    """Search window for the tracking-identifier lookup.

    Runs from the start of yesterday to the start of the day after tomorrow,
    so flights that took off before midnight are still matched.
    """
    now = now or utc_now()
    today = now.replace(hour=0, minute=0, second=0, microsecond=0)
    return today - timedelta(days=1), today + timedelta(days=2)


def format_window_bound(dt: datetime) -> str:
    """Format a window bound as 'YYYY-MM-DDTHH:MM:SSZ' in UTC."""
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc)
    return dt.strftime("%Y-%m-%dT%H:%M:%SZ")


def is_valid_hex(aircraft_hex: Optional[str]) -> bool:
    """Whether a tracking-provider hex can be used to query the live provider."""
    if not aircraft_hex:
        return False
    value = aircraft_hex.strip()
    return value.lower() != "unknown" and len(value) >= 4
