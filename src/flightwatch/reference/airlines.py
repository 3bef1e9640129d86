"""Airline lookup by IATA or ICAO code."""

from dataclasses import dataclass
from importlib import resources
from typing import Optional

import json
import logging

logger = logging.getLogger("flightwatch.reference.airlines")


@dataclass
class AirlineInfo:
    """Airline details from reference data."""

    icao: str
    iata: str
    name: str
    country: str


_airlines_cache: Optional[dict[str, dict]] = None
_iata_to_icao_cache: Optional[dict[str, str]] = None


def _load_airlines() -> dict[str, dict]:
    global _airlines_cache
    if _airlines_cache is None:
        try:
            data_path = resources.files("flightwatch.reference").joinpath("data").joinpath("airlines.json")
            with data_path.open() as f:
                _airlines_cache = json.load(f)
        except (FileNotFoundError, json.JSONDecodeError) as exc:
            logger.warning("Airline reference data unavailable: %s", exc)
            _airlines_cache = {}
    return _airlines_cache


def _build_iata_index() -> dict[str, str]:
    global _iata_to_icao_cache
    if _iata_to_icao_cache is None:
        _iata_to_icao_cache = {}
        for icao_code, row in _load_airlines().items():
            iata = row.get("iata", "")
            # First entry wins for IATA codes shared by defunct carriers
            if iata and iata not in _iata_to_icao_cache:
                _iata_to_icao_cache[iata] = icao_code
    return _iata_to_icao_cache


def iata_to_icao(iata: Optional[str]) -> Optional[str]:
    """Convert an IATA 2-letter airline code to its ICAO 3-letter code."""
    if not iata:
        return None
    return _build_iata_index().get(iata.upper().strip())


def get_airline(icao: str) -> Optional[AirlineInfo]:
    """Look up airline by ICAO code. Returns None if not found."""
    if not icao:
        return None
    icao = icao.upper().strip()
    row = _load_airlines().get(icao)
    if not row:
        return None
    return AirlineInfo(
        icao=row.get("icao", icao),
        iata=row.get("iata", ""),
        name=row.get("name", ""),
        country=row.get("country", ""),
    )
