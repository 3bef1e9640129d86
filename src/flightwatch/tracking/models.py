"""Data models for flight status lookups."""

from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Literal, Optional

SOURCE_SCHEDULE = "scheduleProvider"
SOURCE_LIVE = "liveProvider"

Leg = Literal["departure", "arrival"]

# Delays up to this many minutes still count as on time
ON_TIME_TOLERANCE_MINUTES = 15


class CanonicalStatus(str, Enum):
    """Lifecycle states a flight is classified into, in progression order."""

    SCHEDULED = "Scheduled"
    DEPARTED = "Departed"
    IN_AIR = "In Air"
    LANDED = "Landed"
    ARRIVED = "Arrived"

    @property
    def rank(self) -> int:
        return list(CanonicalStatus).index(self)


@dataclass(frozen=True)
class ParsedFlightNumber:
    """Flight code split into carrier and number. carrier_code is empty when unparsable."""

    carrier_code: str
    number: str
    original: str


@dataclass(frozen=True)
class Coordinates:
    lat: float
    lng: float


@dataclass(frozen=True)
class TimeField:
    """Times and gate info for one leg (departure or arrival)."""

    scheduled: Optional[datetime] = None
    estimated: Optional[datetime] = None
    actual: Optional[datetime] = None
    gate: Optional[str] = None
    terminal: Optional[str] = None
    # Provider-supplied countdown, arrival leg only
    time_remaining: Optional[str] = None

    def best(self) -> Optional[datetime]:
        """Authoritative time: actual, then estimated, then scheduled."""
        return self.actual or self.estimated or self.scheduled


@dataclass(frozen=True)
class AirportRef:
    """Airport reference. Coordinates may be backfilled once and never overwritten."""

    code: str
    name: str = ""
    city: str = ""
    country: Optional[str] = None
    coordinates: Optional[Coordinates] = None

    def with_coordinates(self, coordinates: Optional[Coordinates]) -> "AirportRef":
        """Return a copy with coordinates set, unless they are already present."""
        if self.coordinates is not None or coordinates is None:
            return self
        return replace(self, coordinates=coordinates)


@dataclass(frozen=True)
class RoutePair:
    departure: AirportRef
    arrival: AirportRef


@dataclass(frozen=True)
class LiveData:
    """Live ADS-B telemetry for a trackable aircraft."""

    position: Coordinates
    altitude: float = 0
    speed: float = 0
    heading: float = 0
    track_angle: Optional[float] = None


@dataclass(frozen=True)
class AirportClock:
    """Airport timezone info from the live provider: UTC offset in hours and DST flag."""

    utc_offset: Optional[float] = None
    dst: Optional[str] = None


@dataclass(frozen=True)
class LegTimestamps:
    """UTC epoch-second timestamps for one leg, as reported by the live provider."""

    scheduled: Optional[int] = None
    estimated: Optional[int] = None
    actual: Optional[int] = None
    clock: AirportClock = AirportClock()

    def best(self) -> Optional[int]:
        return self.actual or self.estimated or self.scheduled


@dataclass(frozen=True)
class LiveProviderTimes:
    """Secondary timing source kept on the aggregate for timezone-aware recomputation."""

    departure: LegTimestamps = LegTimestamps()
    arrival: LegTimestamps = LegTimestamps()

    def leg(self, leg: Leg) -> LegTimestamps:
        return self.departure if leg == "departure" else self.arrival


@dataclass(frozen=True)
class UnifiedFlightData:
    """Provider-independent flight record; the aggregate root of one lookup."""

    flight_number: str
    airline: str
    aircraft_type: str
    raw_status: str
    departure: TimeField
    arrival: TimeField
    airports: RoutePair
    source: str
    status: Optional[CanonicalStatus] = None
    airline_icao: Optional[str] = None
    airline_iata: Optional[str] = None
    live_data: Optional[LiveData] = None
    secondary: Optional[LiveProviderTimes] = None
    aircraft_hex: Optional[str] = None

    def leg(self, leg: Leg) -> TimeField:
        return self.departure if leg == "departure" else self.arrival

    def airport(self, leg: Leg) -> AirportRef:
        return self.airports.departure if leg == "departure" else self.airports.arrival

    def route(self) -> str:
        """Return route as ORIGIN-DESTINATION."""
        return f"{self.airports.departure.code}-{self.airports.arrival.code}"


@dataclass(frozen=True)
class FlightStatusData:
    """Status-derived figures for the primary leg."""

    status: CanonicalStatus
    time_remaining: Optional[str] = None
    gate: Optional[str] = None
    terminal: Optional[str] = None
    scheduled_time: Optional[datetime] = None
    actual_time: Optional[datetime] = None
    estimated_time: Optional[datetime] = None
    on_time: bool = True
    delay_minutes: int = 0


@dataclass(frozen=True)
class DelayInfo:
    """Delay magnitude with its late/early classification."""

    delay_minutes: int
    delay_text: str
    color_tag: str
    classification: Literal["late", "early", "on_time"] = "on_time"

    @property
    def on_time(self) -> bool:
        return self.classification != "late" or self.delay_minutes <= ON_TIME_TOLERANCE_MINUTES


@dataclass(frozen=True)
class TimeDisplay:
    """Single time, or struck-through scheduled time next to the new time."""

    show_single_time: bool
    primary_time: Optional[str]
    secondary_time: Optional[str] = None
    strikethrough: bool = False


@dataclass(frozen=True)
class TimeDisplayProps:
    display_time: Optional[str]
    time_color: str
    delay_info: DelayInfo


@dataclass(frozen=True)
class DisplayConfig:
    show_plane: bool
    show_airports: bool
    status_message: str
    priority: Leg


@dataclass(frozen=True)
class LivePosition:
    lat: float
    lng: float
    heading: Optional[float] = None
    track_angle: Optional[float] = None


@dataclass(frozen=True)
class MapConfig:
    show_live_position: bool
    show_route: bool
    departure_coords: Optional[Coordinates] = None
    arrival_coords: Optional[Coordinates] = None
    live_position: Optional[LivePosition] = None


# Shown in place of a missing time or gate in printed tables
MISSING_PLACEHOLDER = "-"

REPORT_COLUMNS = [
    "leg",
    "airport",
    "name",
    "scheduled",
    "estimated",
    "actual",
    "gate",
    "terminal",
    "delay",
]


@dataclass(frozen=True)
class FlightReport:
    """Result of one lookup: the flight plus everything derived from it."""

    flight: UnifiedFlightData
    status_data: FlightStatusData
    display: DisplayConfig
    map_config: MapConfig

    def to_dataframe(self):
        """Convert to a pandas DataFrame with one row per leg."""
        import pandas as pd

        from flightwatch.tracking.delays import calculate_enhanced_delay_info
        from flightwatch.tracking.timestamps import format_clock

        rows = []
        for leg in ("departure", "arrival"):
            times = self.flight.leg(leg)
            airport = self.flight.airport(leg)
            rows.append(
                {
                    "leg": leg,
                    "airport": airport.code,
                    "name": airport.name,
                    "scheduled": format_clock(times.scheduled),
                    "estimated": format_clock(times.estimated),
                    "actual": format_clock(times.actual),
                    "gate": times.gate,
                    "terminal": times.terminal,
                    "delay": calculate_enhanced_delay_info(self.flight, leg).delay_text,
                }
            )
        # object dtype keeps None for missing times instead of NaN
        return pd.DataFrame(rows, columns=REPORT_COLUMNS, dtype=object)
