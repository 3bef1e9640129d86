"""Interfaces for the upstream flight data providers."""

from datetime import datetime
from typing import Any, Dict, List, Optional, Protocol, runtime_checkable

import requests

from flightwatch.errors import ProviderError
from flightwatch.tracking.models import ParsedFlightNumber


@runtime_checkable
class ScheduleSource(Protocol):
    """Schedule provider: airline, gate and timetable data for one flight."""

    def fetch_flight(self, parsed: ParsedFlightNumber, departure_date: str) -> Dict[str, Any]:
        """Return the raw ``{flights, flight, emptyResults}`` body."""
        ...


@runtime_checkable
class TrackingSource(Protocol):
    """Tracking-identifier provider: maps a flight designator to an aircraft hex."""

    def fetch_summaries(
        self, designator: str, start: datetime, end: datetime
    ) -> List[Dict[str, Any]]:
        ...

    def find_aircraft_hex(self, designator: str, now: Optional[datetime] = None) -> Optional[str]:
        ...


@runtime_checkable
class LiveSource(Protocol):
    """Live-position provider: ADS-B telemetry keyed by aircraft hex."""

    def fetch_live(
        self, aircraft_hex: str, designator: str, now: Optional[datetime] = None
    ) -> Dict[str, Any]:
        """Return the raw ``{success, payload}`` body. Raises ProviderError on success=false."""
        ...


def decode_json(provider: str, resp: requests.Response) -> Any:
    """Check the HTTP status and decode the body, raising ProviderError on either failure."""
    try:
        resp.raise_for_status()
    except requests.HTTPError as e:
        raise ProviderError(provider, f"HTTP error: {e}") from e
    try:
        return resp.json()
    except ValueError as e:
        raise ProviderError(provider, "invalid JSON response") from e
