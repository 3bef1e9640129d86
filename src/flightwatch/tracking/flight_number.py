"""Parse user-entered flight codes like 'AA176' or 'ba123'."""

import re
from datetime import date, datetime
from typing import Optional, Union

from flightwatch.tracking.models import ParsedFlightNumber

_FLIGHT_RE = re.compile(r"^([A-Z]{2,3})(\d+)$")


def parse_flight_number(flight_number: str) -> ParsedFlightNumber:
    """Split a flight code into carrier code and number.

    Codes matching two or three letters followed by digits split on that
    boundary. Anything else of length 3 or more treats the first two
    characters as the carrier. Shorter input yields an empty carrier code,
    which callers treat as an invalid format.
    """
    trimmed = (flight_number or "").strip().upper()

    m = _FLIGHT_RE.match(trimmed)
    if m:
        return ParsedFlightNumber(carrier_code=m.group(1), number=m.group(2), original=trimmed)

    if len(trimmed) >= 3:
        return ParsedFlightNumber(carrier_code=trimmed[:2], number=trimmed[2:], original=trimmed)

    return ParsedFlightNumber(carrier_code="", number=trimmed, original=trimmed)


def is_valid_flight_number(flight_number: Union[str, ParsedFlightNumber]) -> bool:
    """True when the code has a carrier of at least two characters and a number."""
    parsed = (
        flight_number
        if isinstance(flight_number, ParsedFlightNumber)
        else parse_flight_number(flight_number)
    )
    return len(parsed.carrier_code) >= 2 and len(parsed.number) > 0


def designator(parsed: ParsedFlightNumber) -> str:
    """Return the flight designator used by the tracking providers (e.g. 'AA176')."""
    return f"{parsed.carrier_code}{parsed.number}"


def format_departure_date(d: Optional[Union[date, datetime]] = None) -> str:
    """Format a departure date as YYYY-MM-DD, defaulting to today."""
    if d is None:
        d = date.today()
    if isinstance(d, datetime):
        d = d.date()
    return d.isoformat()
