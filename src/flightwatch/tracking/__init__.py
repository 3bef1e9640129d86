"""Flight status lookup: normalize provider data, classify, derive display config."""

from flightwatch.tracking.display import derive_display, get_flight_display_config, get_flight_map_data
from flightwatch.tracking.flight_number import is_valid_flight_number, parse_flight_number
from flightwatch.tracking.merge import merge_flight_data
from flightwatch.tracking.models import (
    CanonicalStatus,
    DisplayConfig,
    FlightReport,
    FlightStatusData,
    MapConfig,
    UnifiedFlightData,
)
from flightwatch.tracking.service import FlightStatusService
from flightwatch.tracking.status import extract_flight_status_data, normalize_flight_status
from flightwatch.tracking.transforms import transform_live_response, transform_schedule_response

__all__ = [
    "CanonicalStatus",
    "DisplayConfig",
    "FlightReport",
    "FlightStatusData",
    "FlightStatusService",
    "MapConfig",
    "UnifiedFlightData",
    "derive_display",
    "extract_flight_status_data",
    "get_flight_display_config",
    "get_flight_map_data",
    "is_valid_flight_number",
    "merge_flight_data",
    "normalize_flight_status",
    "parse_flight_number",
    "transform_live_response",
    "transform_schedule_response",
]
