"""Map raw provider payloads into UnifiedFlightData.

Both transformers are pure: no I/O, no clock reads.
"""

import re
from dataclasses import replace
from typing import Any, Dict, Optional

from flightwatch.errors import MissingFlightDataError, TransformError
from flightwatch.tracking.models import (
    SOURCE_LIVE,
    SOURCE_SCHEDULE,
    AirportClock,
    AirportRef,
    Coordinates,
    LegTimestamps,
    LiveData,
    LiveProviderTimes,
    RoutePair,
    TimeField,
    UnifiedFlightData,
)
from flightwatch.tracking.timestamps import combine_short_time, from_epoch, normalize

LIVE_PROVIDER_STATUS = "In Flight"

# "American Airlines (AA) 176"
_AIRLINE_CODE_RE = re.compile(r"\(([A-Z0-9]{2,3})\)")
_TITLE_NUMBER_RE = re.compile(r"\([A-Z0-9]{2,3}\)\s*(\d+)")
_AIRLINE_SUFFIX_RE = re.compile(r"\s*\([A-Z0-9]{2,3}\).*$")


def schedule_has_no_results(response: Dict[str, Any]) -> bool:
    """True when the schedule provider found nothing at all for the flight."""
    if not isinstance(response, dict):
        return True
    if response.get("emptyResults"):
        return True
    return not response.get("flight") and not response.get("flights")


def schedule_instance_ended(response: Dict[str, Any]) -> bool:
    """True when the structured record is gone but the flight list still has entries."""
    return (
        isinstance(response, dict)
        and not response.get("flight")
        and bool(response.get("flights"))
    )


def parse_title(title: str):
    """Split a schedule title into (airline name, airline code, flight number)."""
    title = (title or "").strip()
    code_match = _AIRLINE_CODE_RE.search(title)
    if code_match:
        number_match = _TITLE_NUMBER_RE.search(title)
        parts = title.split()
        number = number_match.group(1) if number_match else (parts[-1] if parts else "")
        name = _AIRLINE_SUFFIX_RE.sub("", title).strip()
        return name, code_match.group(1), number

    parts = title.split()
    if not parts:
        return "", "", ""
    return " ".join(parts[:-1]), "", parts[-1]


def _str_or_none(value: Any) -> Optional[str]:
    if value is None:
        return None
    s = str(value).strip()
    return s or None


def _schedule_leg(leg: Dict[str, Any], scheduled_key: str, actual_key: str) -> TimeField:
    scheduled = normalize(leg.get(scheduled_key))

    raw_estimated = leg.get("estimatedTime")
    estimated = None
    if raw_estimated and scheduled is not None:
        estimated = combine_short_time(raw_estimated, scheduled) or scheduled

    raw_actual = leg.get(actual_key)
    actual = normalize(raw_actual) if raw_actual else None
    if raw_actual and actual is None:
        actual = combine_short_time(raw_actual, scheduled)

    return TimeField(
        scheduled=scheduled,
        estimated=estimated,
        actual=actual,
        gate=_str_or_none(leg.get("gate")),
        terminal=_str_or_none(leg.get("terminal")),
        time_remaining=_str_or_none(leg.get("timeRemaining")),
    )


def _schedule_airport(leg: Dict[str, Any]) -> AirportRef:
    return AirportRef(
        code=leg.get("airportCode") or "",
        name=leg.get("airport") or "",
        city=leg.get("airportCity") or "",
        country=leg.get("airportCountryCode") or None,
    )


def transform_schedule_response(response: Dict[str, Any]) -> UnifiedFlightData:
    """Transform a schedule-provider (FlightView) response.

    Raises MissingFlightDataError when the ``flight`` record is absent; callers
    treat that as a cue to try the live provider instead.
    """
    flight = response.get("flight") if isinstance(response, dict) else None
    if not flight:
        raise MissingFlightDataError()

    departure = flight.get("departure")
    arrival = flight.get("arrival")
    if not isinstance(departure, dict) or not isinstance(arrival, dict):
        raise TransformError("flightview", "flight record is missing departure or arrival")

    titles = _block(flight, "titles")
    airline_name, airline_code, number = parse_title(titles.get("main", ""))
    flight_number = f"({airline_code}) {number}" if airline_code else number

    aircraft = _block(flight, "aircraft")

    dep_times = _schedule_leg(departure, "departureDateTime", "outGateTime")
    arr_times = _schedule_leg(arrival, "arrivalDateTime", "inGateTime")

    return UnifiedFlightData(
        flight_number=flight_number,
        airline=airline_name,
        aircraft_type=aircraft.get("name") or "",
        raw_status=flight.get("flightStatus") or "",
        # The countdown is only meaningful for the arrival leg
        departure=replace(dep_times, time_remaining=None),
        arrival=arr_times,
        airports=RoutePair(
            departure=_schedule_airport(departure),
            arrival=_schedule_airport(arrival),
        ),
        source=SOURCE_SCHEDULE,
        airline_iata=airline_code or None,
    )


def _block(container: Dict[str, Any], key: str) -> Dict[str, Any]:
    value = container.get(key)
    return value if isinstance(value, dict) else {}


def _airport_clock(airport: Dict[str, Any]) -> AirportClock:
    return AirportClock(utc_offset=airport.get("Timezone"), dst=airport.get("DST"))


def _coordinates(lat: Any, lng: Any) -> Optional[Coordinates]:
    if lat is None or lng is None:
        return None
    try:
        return Coordinates(lat=float(lat), lng=float(lng))
    except (TypeError, ValueError):
        return None


def _epoch(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value) or None
    except (TypeError, ValueError):
        return None


def _live_leg(status: Dict[str, Any], prefix: str, airport: Dict[str, Any]) -> LegTimestamps:
    return LegTimestamps(
        scheduled=_epoch(status.get(f"{prefix}TimeScheduled")),
        estimated=_epoch(status.get(f"{prefix}TimeEstimated")),
        actual=_epoch(status.get(f"{prefix}TimeActual")),
        clock=_airport_clock(airport),
    )


def _live_times(stamps: LegTimestamps, status: Dict[str, Any], prefix: str) -> TimeField:
    offset, dst = stamps.clock.utc_offset, stamps.clock.dst
    return TimeField(
        scheduled=from_epoch(stamps.scheduled, offset, dst),
        estimated=from_epoch(stamps.estimated, offset, dst),
        actual=from_epoch(stamps.actual, offset, dst),
        gate=_str_or_none(
            status.get(f"{prefix}Gate")
            or status.get(f"{prefix}GateActual")
            or status.get(f"{prefix}GateScheduled")
        ),
        terminal=_str_or_none(
            status.get(f"{prefix}Terminal")
            or status.get(f"{prefix}TerminalActual")
            or status.get(f"{prefix}TerminalScheduled")
        ),
    )


def _live_airport(status: Dict[str, Any], prefix: str, airport: Dict[str, Any]) -> AirportRef:
    return AirportRef(
        code=airport.get("IATA") or status.get(f"{prefix}AirportIATA") or "",
        name=airport.get("Name") or "",
        city=airport.get("City") or "",
        country=airport.get("Country") or None,
        coordinates=_coordinates(airport.get("Latitude"), airport.get("Longitude")),
    )


def _carrier(static: Dict[str, Any]) -> Optional[str]:
    flight_number = static.get("flightNumber")
    if isinstance(flight_number, dict):
        return flight_number.get("carrier") or None
    return static.get("carrier") or None


def _live_data(dynamic: Dict[str, Any]) -> Optional[LiveData]:
    position = _coordinates(dynamic.get("lat"), dynamic.get("lon"))
    if position is None:
        return None
    return LiveData(
        position=position,
        altitude=dynamic.get("altitude") or 0,
        speed=dynamic.get("speed") or dynamic.get("groundSpeed") or 0,
        heading=dynamic.get("heading") or 0,
        track_angle=dynamic.get("trackAngle") or None,
    )


def transform_live_response(response: Dict[str, Any]) -> UnifiedFlightData:
    """Transform a live-position provider (PlaneFinder) response.

    Every block of the payload is optional; missing metadata degrades to empty
    strings or None. Only a response without a payload is rejected.
    """
    payload = response.get("payload") if isinstance(response, dict) else None
    if not isinstance(payload, dict):
        raise TransformError("planefinder", "response has no payload")

    aircraft = _block(payload, "aircraft")
    static = _block(payload, "static")
    dynamic = _block(payload, "dynamic")
    status = _block(payload, "status")
    dep_airport = _block(status, "departureAirport")
    arr_airport = _block(status, "arrivalAirport")

    secondary = LiveProviderTimes(
        departure=_live_leg(status, "departure", dep_airport),
        arrival=_live_leg(status, "arrival", arr_airport),
    )

    return UnifiedFlightData(
        flight_number=static.get("iata") or status.get("flightNumber") or "",
        airline=aircraft.get("airline") or "",
        aircraft_type=aircraft.get("type") or status.get("aircraftType") or "",
        raw_status=LIVE_PROVIDER_STATUS,
        departure=_live_times(secondary.departure, status, "departure"),
        arrival=_live_times(secondary.arrival, status, "arrival"),
        airports=RoutePair(
            departure=_live_airport(status, "departure", dep_airport),
            arrival=_live_airport(status, "arrival", arr_airport),
        ),
        source=SOURCE_LIVE,
        airline_icao=aircraft.get("airlineICAO") or None,
        airline_iata=_carrier(static),
        live_data=_live_data(dynamic),
        secondary=secondary,
        aircraft_hex=static.get("hex") or aircraft.get("adshex") or None,
    )
