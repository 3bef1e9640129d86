"""Classify flights into canonical lifecycle statuses."""

import logging
from datetime import datetime
from typing import Dict, Optional, Tuple

from flightwatch.tracking.models import (
    ON_TIME_TOLERANCE_MINUTES,
    CanonicalStatus,
    FlightStatusData,
    UnifiedFlightData,
)
from flightwatch.tracking.timestamps import (
    TimeInput,
    calculate_time_remaining,
    normalize,
    utc_now,
)

logger = logging.getLogger("flightwatch.tracking.status")

# Exact (case-insensitive, trimmed) provider status strings
STATUS_MAP: Dict[str, CanonicalStatus] = {
    "scheduled": CanonicalStatus.SCHEDULED,
    "on time": CanonicalStatus.SCHEDULED,
    "departed": CanonicalStatus.DEPARTED,
    "in air": CanonicalStatus.IN_AIR,
    "in flight": CanonicalStatus.IN_AIR,
    "airborne": CanonicalStatus.IN_AIR,
    "flying": CanonicalStatus.IN_AIR,
    "landed": CanonicalStatus.LANDED,
    "arrived": CanonicalStatus.ARRIVED,
    "completed": CanonicalStatus.ARRIVED,
}

LIVE_POSITION_STATUSES = frozenset(
    {CanonicalStatus.DEPARTED, CanonicalStatus.IN_AIR, CanonicalStatus.LANDED}
)

# Leg whose gate/terminal/times drive the status line
PRIMARY_LEG = {
    CanonicalStatus.SCHEDULED: "departure",
    CanonicalStatus.DEPARTED: "arrival",
    CanonicalStatus.IN_AIR: "arrival",
    CanonicalStatus.LANDED: "arrival",
    CanonicalStatus.ARRIVED: "arrival",
}


def lookup_status(raw_status: Optional[str]) -> Optional[CanonicalStatus]:
    """Map a provider status string through STATUS_MAP. None means unknown."""
    if not raw_status or not isinstance(raw_status, str):
        return None
    return STATUS_MAP.get(raw_status.strip().lower())


def infer_status_from_times(
    flight: UnifiedFlightData, now: Optional[datetime] = None
) -> CanonicalStatus:
    """Infer status from timestamps when the provider string is not recognized.

    Arrival checks run before departure checks: a flight that has landed is
    never reported as merely departed.
    """
    now = now or utc_now()
    actual_arrival = flight.arrival.actual
    scheduled_arrival = flight.arrival.scheduled
    actual_departure = flight.departure.actual
    scheduled_departure = flight.departure.scheduled

    if actual_arrival and actual_arrival <= now:
        return CanonicalStatus.ARRIVED
    if scheduled_arrival and scheduled_arrival <= now and not actual_arrival:
        return CanonicalStatus.LANDED
    if actual_departure and actual_departure <= now:
        return CanonicalStatus.IN_AIR
    if scheduled_departure and scheduled_departure <= now and not actual_departure:
        return CanonicalStatus.DEPARTED
    return CanonicalStatus.SCHEDULED


def normalize_flight_status(
    raw_status: Optional[str],
    flight: Optional[UnifiedFlightData] = None,
    now: Optional[datetime] = None,
) -> CanonicalStatus:
    """Classify a raw status, falling back to timestamp inference, then Scheduled."""
    mapped = lookup_status(raw_status)
    if mapped is not None:
        return mapped
    if flight is not None:
        inferred = infer_status_from_times(flight, now)
        logger.debug("Unmapped status %r inferred as %s", raw_status, inferred.value)
        return inferred
    return CanonicalStatus.SCHEDULED


def flight_status(flight: UnifiedFlightData, now: Optional[datetime] = None) -> CanonicalStatus:
    """Classified status of a flight, deriving it when not yet assigned."""
    if flight.status is not None:
        return flight.status
    return normalize_flight_status(flight.raw_status, flight, now)


def should_fetch_live_position(status: CanonicalStatus) -> bool:
    return status in LIVE_POSITION_STATUSES


def calculate_delay(scheduled: TimeInput, compare: TimeInput) -> Tuple[bool, int]:
    """Return (on_time, delay_minutes) comparing scheduled with estimated or actual.

    Delays up to ON_TIME_TOLERANCE_MINUTES count as on time. Early flights
    report a delay of zero.
    """
    scheduled_dt = normalize(scheduled)
    compare_dt = normalize(compare)
    if scheduled_dt is None or compare_dt is None:
        return True, 0
    delay = int((compare_dt - scheduled_dt).total_seconds() // 60)
    return delay <= ON_TIME_TOLERANCE_MINUTES, max(0, delay)


def extract_flight_status_data(
    flight: UnifiedFlightData, now: Optional[datetime] = None
) -> FlightStatusData:
    """Derive status, time remaining and delay for the flight's primary leg."""
    now = now or utc_now()
    status = normalize_flight_status(flight.raw_status, flight, now)

    time_remaining = None
    on_time, delay_minutes = True, 0

    if status == CanonicalStatus.SCHEDULED:
        departure = flight.departure
        time_remaining = calculate_time_remaining(
            departure.estimated or departure.scheduled, now
        )
        if departure.scheduled and departure.estimated:
            on_time, delay_minutes = calculate_delay(departure.scheduled, departure.estimated)
    elif status in (CanonicalStatus.DEPARTED, CanonicalStatus.IN_AIR):
        arrival = flight.arrival
        time_remaining = arrival.time_remaining or calculate_time_remaining(
            arrival.estimated or arrival.scheduled, now
        )
    else:
        arrival = flight.arrival
        on_time, delay_minutes = calculate_delay(
            arrival.scheduled, arrival.actual or arrival.estimated
        )

    leg = flight.leg(PRIMARY_LEG[status])
    return FlightStatusData(
        status=status,
        time_remaining=time_remaining,
        gate=leg.gate,
        terminal=leg.terminal,
        scheduled_time=leg.scheduled,
        actual_time=leg.actual,
        estimated_time=leg.estimated,
        on_time=on_time,
        delay_minutes=delay_minutes,
    )
