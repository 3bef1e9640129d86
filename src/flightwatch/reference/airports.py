"""Airport lookup by IATA code, used as a fallback source of coordinates."""

from dataclasses import dataclass
from importlib import resources
from typing import Optional

import json
import logging

logger = logging.getLogger("flightwatch.reference.airports")


@dataclass
class AirportInfo:
    """Airport details from reference data."""

    iata: str
    name: str
    city: str
    country: str
    latitude: float
    longitude: float
    utc_offset: Optional[float] = None
    dst: Optional[str] = None

    def coordinates(self):
        from flightwatch.tracking.models import Coordinates

        return Coordinates(lat=self.latitude, lng=self.longitude)


_airports_cache: Optional[dict[str, dict]] = None


def _load_airports() -> dict[str, dict]:
    global _airports_cache
    if _airports_cache is None:
        try:
            data_path = resources.files("flightwatch.reference").joinpath("data").joinpath("airports.json")
            with data_path.open() as f:
                _airports_cache = json.load(f)
        except (FileNotFoundError, json.JSONDecodeError) as exc:
            logger.warning("Airport reference data unavailable: %s", exc)
            _airports_cache = {}
    return _airports_cache


def get_airport(iata: str) -> Optional[AirportInfo]:
    """Look up airport by IATA code. Returns None if not found."""
    if not iata:
        return None
    iata = iata.upper().strip()
    row = _load_airports().get(iata)
    if not row:
        return None
    return AirportInfo(
        iata=row.get("iata", iata),
        name=row.get("name", ""),
        city=row.get("city", ""),
        country=row.get("country", ""),
        latitude=float(row.get("latitude", 0)),
        longitude=float(row.get("longitude", 0)),
        utc_offset=row.get("utc_offset"),
        dst=row.get("dst"),
    )


def get_airport_coordinates(iata: str):
    """Coordinates for an airport, or None when unknown or unplaced (0, 0)."""
    info = get_airport(iata)
    if info is None or (info.latitude == 0 and info.longitude == 0):
        return None
    return info.coordinates()
