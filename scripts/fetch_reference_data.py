#!/usr/bin/env python3
"""
Download OpenFlights airport and airline data, parse to JSON, and save
into src/flightwatch/reference/data/ for bundled package use.

Airports keep their UTC offset and DST flag so schedule times can be shown
in airport-local time. Only airlines with both an IATA and an ICAO code are
kept, since the lookup pipeline maps one to the other.

Usage:
    uv run python scripts/fetch_reference_data.py
"""

import argparse
import csv
import json
import logging
from pathlib import Path

import requests

AIRPORTS_URL = "https://raw.githubusercontent.com/jpatokal/openflights/master/data/airports.dat"
AIRLINES_URL = "https://raw.githubusercontent.com/jpatokal/openflights/master/data/airlines.dat"
DATA_DIR = Path(__file__).resolve().parent.parent / "src" / "flightwatch" / "reference" / "data"
MISSING = "\\N"

logger = logging.getLogger("flightwatch.scripts.fetch_reference_data")


def _fetch_rows(url: str, timeout: float) -> list[list[str]]:
    resp = requests.get(url, timeout=timeout)
    resp.raise_for_status()
    return list(csv.reader(resp.text.strip().splitlines()))


def _field(row: list[str], idx: int) -> str:
    value = row[idx].strip() if len(row) > idx else ""
    return "" if value == MISSING else value


def parse_airports(rows: list[list[str]]) -> dict[str, dict]:
    # ID, Name, City, Country, IATA, ICAO, Lat, Lon, Alt, TZ, DST, TZ_name, Type, Source
    airports: dict[str, dict] = {}
    for row in rows:
        if len(row) < 11:
            continue
        iata = _field(row, 4)
        if not iata or iata in airports:
            continue
        try:
            lat = float(row[6])
            lon = float(row[7])
        except ValueError:
            continue
        try:
            utc_offset = float(row[9])
        except ValueError:
            utc_offset = None
        airports[iata] = {
            "iata": iata,
            "name": _field(row, 1),
            "city": _field(row, 2),
            "country": _field(row, 3),
            "latitude": lat,
            "longitude": lon,
            "utc_offset": utc_offset,
            "dst": _field(row, 10) or None,
        }
    return airports


def parse_airlines(rows: list[list[str]]) -> dict[str, dict]:
    # ID, Name, Alias, IATA, ICAO, Callsign, Country, Active
    airlines: dict[str, dict] = {}
    for row in rows:
        if len(row) < 8:
            continue
        icao = _field(row, 4).upper()
        iata = _field(row, 3).upper()
        if not icao or icao == "N/A" or not iata or icao in airlines:
            continue
        airlines[icao] = {
            "icao": icao,
            "iata": iata,
            "name": _field(row, 1),
            "country": _field(row, 6),
        }
    return airlines


def main() -> None:
    parser = argparse.ArgumentParser(description="Refresh bundled airport/airline reference data")
    parser.add_argument("--timeout", type=float, default=30.0, help="HTTP timeout in seconds")
    args = parser.parse_args()
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")

    DATA_DIR.mkdir(parents=True, exist_ok=True)

    logger.info("Fetching airports.dat...")
    airports = parse_airports(_fetch_rows(AIRPORTS_URL, args.timeout))
    airports_path = DATA_DIR / "airports.json"
    with open(airports_path, "w") as f:
        json.dump(airports, f, indent=0)
    logger.info("Wrote %d airports to %s", len(airports), airports_path)

    logger.info("Fetching airlines.dat...")
    airlines = parse_airlines(_fetch_rows(AIRLINES_URL, args.timeout))
    airlines_path = DATA_DIR / "airlines.json"
    with open(airlines_path, "w") as f:
        json.dump(airlines, f, indent=0)
    logger.info("Wrote %d airlines to %s", len(airlines), airlines_path)


if __name__ == "__main__":
    main()
