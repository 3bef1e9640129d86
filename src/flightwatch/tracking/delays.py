"""Delay, time-display and duration helpers for the presentation layer.

For In Air and Landed flights that carry live-provider data, times come from
the live provider's UTC epoch timestamps shifted into each airport's own
offset. Every other case reads the schedule provider's times.
"""

import logging
from datetime import datetime
from typing import Optional

from flightwatch.tracking.models import (
    CanonicalStatus,
    DelayInfo,
    Leg,
    LegTimestamps,
    TimeDisplay,
    TimeDisplayProps,
    UnifiedFlightData,
)
from flightwatch.tracking.status import flight_status
from flightwatch.tracking.timestamps import (
    TimeInput,
    calculate_flight_duration,
    format_clock,
    from_epoch,
    normalize,
    parse_time_string,
)

logger = logging.getLogger("flightwatch.tracking.delays")

LATE_COLOR = "#D81C1F"
EARLY_COLOR = "#179C3C"
NEUTRAL_COLOR = "#000000"

LIVE_TIME_STATUSES = frozenset({CanonicalStatus.IN_AIR, CanonicalStatus.LANDED})

ON_TIME = DelayInfo(delay_minutes=0, delay_text="On time", color_tag=EARLY_COLOR)


def _delay_from_minutes(minutes: int) -> DelayInfo:
    if minutes > 0:
        return DelayInfo(minutes, f"{minutes}m Late", LATE_COLOR, "late")
    if minutes < 0:
        return DelayInfo(-minutes, f"{-minutes}m Early", EARLY_COLOR, "early")
    return ON_TIME


def _clock_minutes(value: TimeInput) -> Optional[int]:
    clock = parse_time_string(value)
    if not clock:
        return None
    hours, minutes = clock.split(":")[:2]
    return int(hours) * 60 + int(minutes)


def calculate_delay_info(scheduled: TimeInput, estimated: TimeInput) -> DelayInfo:
    """Compare scheduled and estimated times.

    Instants are compared directly when both can be normalized; otherwise the
    wall-clock HH:MM of each is compared. Anything missing or unreadable is
    reported as on time.
    """
    if not scheduled or not estimated or scheduled == estimated:
        return ON_TIME

    scheduled_dt = normalize(scheduled)
    estimated_dt = normalize(estimated)
    if scheduled_dt is not None and estimated_dt is not None:
        return _delay_from_minutes(int((estimated_dt - scheduled_dt).total_seconds() // 60))

    scheduled_minutes = _clock_minutes(scheduled)
    estimated_minutes = _clock_minutes(estimated)
    if scheduled_minutes is None or estimated_minutes is None:
        return ON_TIME
    return _delay_from_minutes(estimated_minutes - scheduled_minutes)


def _time_color(delay: DelayInfo) -> str:
    if delay.classification == "late":
        return LATE_COLOR
    if delay.classification == "early":
        return EARLY_COLOR
    return NEUTRAL_COLOR


def get_time_display_props(scheduled: TimeInput, estimated: TimeInput) -> TimeDisplayProps:
    """Clock time to show for a leg, colored by its delay."""
    delay = calculate_delay_info(scheduled, estimated)
    return TimeDisplayProps(
        display_time=parse_time_string(estimated or scheduled),
        time_color=_time_color(delay),
        delay_info=delay,
    )


def uses_live_provider_times(flight: UnifiedFlightData) -> bool:
    """Whether the live provider's timestamps should be trusted for this flight.

    Only In Air and Landed flights qualify, and only when live position or an
    aircraft hex confirms the live record belongs to this flight.
    """
    if flight.secondary is None:
        return False
    if flight_status(flight) not in LIVE_TIME_STATUSES:
        return False
    return flight.live_data is not None or bool(flight.aircraft_hex)


def _live_delay(stamps: LegTimestamps) -> DelayInfo:
    if not stamps.scheduled:
        return ON_TIME
    compare = stamps.best()
    if compare == stamps.scheduled:
        return ON_TIME
    return _delay_from_minutes(round((compare - stamps.scheduled) / 60))


def _local_clock(seconds: Optional[int], stamps: LegTimestamps) -> Optional[str]:
    return format_clock(from_epoch(seconds, stamps.clock.utc_offset, stamps.clock.dst))


def calculate_enhanced_delay_info(flight: UnifiedFlightData, leg: Leg) -> DelayInfo:
    if uses_live_provider_times(flight):
        return _live_delay(flight.secondary.leg(leg))
    times = flight.leg(leg)
    return calculate_delay_info(times.scheduled, times.estimated)


def get_enhanced_time_display(flight: UnifiedFlightData, leg: Leg) -> TimeDisplayProps:
    """Time display for one leg, in the airport's local clock."""
    if not uses_live_provider_times(flight):
        times = flight.leg(leg)
        return get_time_display_props(times.scheduled, times.estimated)

    stamps = flight.secondary.leg(leg)
    delay = _live_delay(stamps)
    logger.debug(
        "Using live-provider %s times for %s (offset=%s dst=%s)",
        leg,
        flight.flight_number,
        stamps.clock.utc_offset,
        stamps.clock.dst,
    )
    return TimeDisplayProps(
        display_time=_local_clock(stamps.best(), stamps),
        time_color=_time_color(delay),
        delay_info=delay,
    )


def get_scheduled_time_for_display(flight: UnifiedFlightData, leg: Leg) -> Optional[str]:
    """Scheduled clock time in the same zone as the time shown next to it."""
    if uses_live_provider_times(flight):
        stamps = flight.secondary.leg(leg)
        if stamps.scheduled and stamps.clock.utc_offset is not None:
            return _local_clock(stamps.scheduled, stamps)
    return parse_time_string(flight.leg(leg).scheduled)


def calculate_enhanced_flight_duration(flight: UnifiedFlightData) -> Optional[str]:
    if uses_live_provider_times(flight):
        departure = flight.secondary.departure.best()
        arrival = flight.secondary.arrival.best()
        if departure and arrival:
            return calculate_flight_duration(from_epoch(departure), from_epoch(arrival))

    departure_time: Optional[datetime] = flight.departure.estimated or flight.departure.scheduled
    arrival_time: Optional[datetime] = flight.arrival.estimated or flight.arrival.scheduled
    return calculate_flight_duration(departure_time, arrival_time)


def get_consistent_time_display(
    actual: Optional[str], scheduled: Optional[str], delay_minutes: int
) -> TimeDisplay:
    """One time when nothing changed, otherwise the scheduled time struck through.

    A single time is shown when there is no delay, no scheduled time, or the
    new time equals the scheduled one.
    """
    if delay_minutes == 0 or not scheduled or actual == scheduled:
        return TimeDisplay(show_single_time=True, primary_time=actual or scheduled)
    return TimeDisplay(
        show_single_time=False,
        primary_time=actual,
        secondary_time=scheduled,
        strikethrough=True,
    )
