"""Turn a classified flight into display and map configuration."""

from dataclasses import dataclass
from typing import Dict, Tuple

from flightwatch.tracking.models import (
    CanonicalStatus,
    DisplayConfig,
    FlightStatusData,
    Leg,
    LivePosition,
    MapConfig,
    UnifiedFlightData,
)
from flightwatch.tracking.timestamps import format_clock


@dataclass(frozen=True)
class StatusRule:
    show_plane: bool
    show_route: bool
    primary_leg: Leg
    prefix: str


STATUS_RULES: Dict[CanonicalStatus, StatusRule] = {
    CanonicalStatus.SCHEDULED: StatusRule(False, True, "departure", "Gate departure in"),
    CanonicalStatus.DEPARTED: StatusRule(True, True, "arrival", "Landing in"),
    CanonicalStatus.IN_AIR: StatusRule(True, True, "arrival", "Landing in"),
    CanonicalStatus.LANDED: StatusRule(True, True, "arrival", "Arrived at"),
    CanonicalStatus.ARRIVED: StatusRule(False, True, "arrival", "Arrived"),
}


def _is_late(status_data: FlightStatusData) -> bool:
    return status_data.delay_minutes > 0 and not status_data.on_time


def _status_message(status_data: FlightStatusData, rule: StatusRule) -> str:
    status = status_data.status

    if status == CanonicalStatus.ARRIVED:
        if status_data.on_time:
            return "Arrived on time"
        return f"Arrived {status_data.delay_minutes} min late"

    if status == CanonicalStatus.LANDED:
        arrival_time = (
            status_data.actual_time or status_data.estimated_time or status_data.scheduled_time
        )
        if arrival_time is None:
            return "Just landed"
        # Clock time in the arrival airport's own offset
        message = f"{rule.prefix} {format_clock(arrival_time)}"
        if _is_late(status_data):
            message += f" ({status_data.delay_minutes} min late)"
        return message

    if not status_data.time_remaining:
        return status.value
    message = f"{rule.prefix} {status_data.time_remaining}"
    if _is_late(status_data):
        message += f" ({status_data.delay_minutes} min delay)"
    return message


def get_flight_display_config(status_data: FlightStatusData) -> DisplayConfig:
    rule = STATUS_RULES[status_data.status]
    return DisplayConfig(
        show_plane=rule.show_plane,
        show_airports=True,
        status_message=_status_message(status_data, rule),
        priority=rule.primary_leg,
    )


def get_flight_map_data(flight: UnifiedFlightData, status_data: FlightStatusData) -> MapConfig:
    """Map layers for the flight. Airport coordinates are passed through unchanged."""
    rule = STATUS_RULES[status_data.status]
    live = flight.live_data

    live_position = None
    if live is not None:
        live_position = LivePosition(
            lat=live.position.lat,
            lng=live.position.lng,
            heading=live.heading,
            track_angle=live.track_angle,
        )

    return MapConfig(
        show_live_position=rule.show_plane and live is not None,
        show_route=rule.show_route,
        departure_coords=flight.airports.departure.coordinates,
        arrival_coords=flight.airports.arrival.coordinates,
        live_position=live_position,
    )


def derive_display(
    flight: UnifiedFlightData, status_data: FlightStatusData
) -> Tuple[DisplayConfig, MapConfig]:
    return get_flight_display_config(status_data), get_flight_map_data(flight, status_data)
