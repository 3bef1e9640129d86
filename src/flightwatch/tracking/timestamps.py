"""Normalize the timestamp encodings used by the flight providers.

Three encodings show up:

* ISO-8601 with an explicit offset (``2025-08-22T22:06:00-04:00``). The offset
  is the airport's, so it is kept as the tzinfo and used for display.
* Locale strings (``22/08/2025, 21:13:00``) with no zone of their own.
* UTC epoch seconds paired with an airport UTC offset (hours) and a DST flag.

Every function here returns ``None`` for input it cannot read. Nothing raises.
"""

import logging
import re
from datetime import datetime, timedelta, timezone
from typing import Optional, Union

logger = logging.getLogger("flightwatch.tracking.timestamps")

TimeInput = Union[datetime, str, int, float, None]

DST_ACTIVE = "A"

# DD/MM/YYYY, HH:MM:SS
_LOCALE_RE = re.compile(r"^(\d{2})/(\d{2})/(\d{4}),\s*(\d{2}):(\d{2}):(\d{2})$")
# HH:MM, Mon DD
_SHORT_RE = re.compile(r"^(\d{1,2}):(\d{2}),\s*([A-Za-z]{3})\s+(\d{1,2})$")
_CLOCK_RE = re.compile(r"^(\d{1,2}):(\d{2})")
_ISO_CLOCK_RE = re.compile(r"T(\d{2}:\d{2})")

_MONTHS = {
    "Jan": 1,
    "Feb": 2,
    "Mar": 3,
    "Apr": 4,
    "May": 5,
    "Jun": 6,
    "Jul": 7,
    "Aug": 8,
    "Sep": 9,
    "Oct": 10,
    "Nov": 11,
    "Dec": 12,
}


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def effective_offset(utc_offset: float, dst: Optional[str] = None) -> float:
    """Airport offset in hours, one hour ahead when the DST flag is 'A'."""
    if dst == DST_ACTIVE:
        return utc_offset + 1
    return utc_offset


def fixed_zone(utc_offset: Optional[float], dst: Optional[str] = None) -> Optional[timezone]:
    """Fixed-offset tzinfo for an airport, or None when the offset is unknown or invalid."""
    if utc_offset is None:
        return None
    try:
        return timezone(timedelta(hours=effective_offset(float(utc_offset), dst)))
    except (TypeError, ValueError):
        logger.debug("Invalid airport UTC offset: %r (dst=%r)", utc_offset, dst)
        return None


def from_epoch(
    seconds: Union[int, float, None],
    utc_offset: Optional[float] = None,
    dst: Optional[str] = None,
) -> Optional[datetime]:
    """Convert UTC epoch seconds to an instant, shown in the airport's local offset if known."""
    if not seconds or isinstance(seconds, bool):
        return None
    try:
        instant = datetime.fromtimestamp(float(seconds), tz=timezone.utc)
    except (TypeError, ValueError, OverflowError, OSError):
        logger.debug("Failed to parse epoch timestamp: %r", seconds)
        return None
    zone = fixed_zone(utc_offset, dst)
    return instant.astimezone(zone) if zone else instant


def parse_iso(
    value: Optional[str],
    utc_offset: Optional[float] = None,
    dst: Optional[str] = None,
) -> Optional[datetime]:
    """Parse an ISO-8601 string, keeping its embedded offset.

    Naive values take the airport offset when given, UTC otherwise.
    """
    if not value or not isinstance(value, str):
        return None
    s = value.strip()
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    try:
        dt = datetime.fromisoformat(s)
    except ValueError:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=fixed_zone(utc_offset, dst) or timezone.utc)
    return dt


def parse_locale(
    value: Optional[str],
    utc_offset: Optional[float] = None,
    dst: Optional[str] = None,
) -> Optional[datetime]:
    """Parse 'DD/MM/YYYY, HH:MM:SS' as airport-local time (UTC when no offset is known)."""
    if not value or not isinstance(value, str):
        return None
    m = _LOCALE_RE.match(value.strip())
    if not m:
        return None
    day, month, year, hours, minutes, seconds = (int(g) for g in m.groups())
    try:
        return datetime(
            year,
            month,
            day,
            hours,
            minutes,
            seconds,
            tzinfo=fixed_zone(utc_offset, dst) or timezone.utc,
        )
    except ValueError:
        return None


def normalize(
    value: TimeInput,
    utc_offset: Optional[float] = None,
    dst: Optional[str] = None,
) -> Optional[datetime]:
    """Convert any supported encoding to a timezone-aware instant.

    An aware datetime is returned unchanged (naive ones are taken as UTC), so
    normalizing twice gives the same result.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if isinstance(value, (int, float)):
        return from_epoch(value, utc_offset, dst)
    if isinstance(value, str):
        s = value.strip()
        if not s:
            return None
        if _LOCALE_RE.match(s):
            return parse_locale(s, utc_offset, dst)
        if s.isdigit():
            return from_epoch(int(s), utc_offset, dst)
        return parse_iso(s, utc_offset, dst)
    return None


def combine_short_time(value: Optional[str], context: Optional[datetime]) -> Optional[datetime]:
    """Rebuild 'HH:MM, Mon DD' into a full instant using the context's year and offset.

    The year follows the context, shifted by one when the month is more than six
    months away so that "Jan 01" next to a Dec 31 context lands in the next year.
    """
    if not value or context is None:
        return None
    m = _SHORT_RE.match(value.strip())
    if not m:
        return None
    hours, minutes = int(m.group(1)), int(m.group(2))
    month = _MONTHS.get(m.group(3).title())
    if month is None:
        return None
    year = context.year
    if month - context.month > 6:
        year -= 1
    elif context.month - month > 6:
        year += 1
    try:
        return datetime(
            year,
            month,
            int(m.group(4)),
            hours,
            minutes,
            tzinfo=context.tzinfo,
        )
    except ValueError:
        logger.debug("Failed to combine %r with %s", value, context.isoformat())
        return None


def format_clock(dt: Optional[datetime]) -> Optional[str]:
    """HH:MM (24-hour) in the instant's own offset."""
    if dt is None:
        return None
    return dt.strftime("%H:%M")


def parse_time_string(value: TimeInput) -> Optional[str]:
    """Extract the wall-clock HH:MM of a timestamp without converting timezones."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return format_clock(value)
    if isinstance(value, (int, float)):
        return format_clock(from_epoch(value))
    if not isinstance(value, str) or not value.strip():
        return None

    s = value.strip()
    if "," in s:
        m = _LOCALE_RE.match(s)
        if m:
            return f"{m.group(4)}:{m.group(5)}"
        # FlightView short form: the clock precedes the comma
        clock = _CLOCK_RE.match(s.split(",")[0].strip())
        if clock:
            return f"{int(clock.group(1)):02d}:{clock.group(2)}"
        return None

    dt = parse_iso(s)
    if dt is None:
        return None
    m = _ISO_CLOCK_RE.search(s)
    if m:
        return m.group(1)
    return format_clock(dt)


def format_duration(total_minutes: int) -> str:
    hours, minutes = divmod(total_minutes, 60)
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"


def calculate_time_remaining(
    target: TimeInput, now: Optional[datetime] = None
) -> Optional[str]:
    """Time until target as 'Xh Ym' or 'Ym'; None once it has passed."""
    target_dt = normalize(target)
    if target_dt is None:
        return None
    now = now or utc_now()
    diff = (target_dt - now).total_seconds()
    if diff <= 0:
        return None
    return format_duration(int(diff // 60))


def calculate_flight_duration(departure: TimeInput, arrival: TimeInput) -> Optional[str]:
    """Duration between two instants as 'Xh Ym'; None if either is unknown or not increasing."""
    dep = normalize(departure)
    arr = normalize(arrival)
    if dep is None or arr is None:
        return None
    diff = (arr - dep).total_seconds()
    if diff <= 0:
        return None
    hours, minutes = divmod(int(diff // 60), 60)
    return f"{hours}h {minutes}m"
