"""CLI for flight status lookups."""

import argparse
import logging
import sys
from datetime import date

from flightwatch.config import settings
from flightwatch.errors import FlightLookupError
from flightwatch.tracking.delays import calculate_enhanced_flight_duration
from flightwatch.tracking.models import MISSING_PLACEHOLDER
from flightwatch.tracking.service import FlightStatusService


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Look up the live status of a flight")
    parser.add_argument("flight_number", help="Flight code (e.g. AA176)")
    parser.add_argument(
        "--date",
        "-d",
        help="Departure date (YYYY-MM-DD), defaults to today",
    )
    parser.add_argument(
        "--weather",
        "-w",
        action="store_true",
        help="Show weather at the departure and arrival airports",
    )
    parser.add_argument(
        "--output",
        "-o",
        help="Write the per-leg table to a CSV file",
    )
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        help="Logging level (default: %(default)s)",
    )
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    departure_date = None
    if args.date:
        try:
            departure_date = date.fromisoformat(args.date)
        except ValueError:
            print(f"Error: Invalid date format: {args.date}", file=sys.stderr)
            sys.exit(1)

    service = FlightStatusService()
    try:
        report = service.lookup(args.flight_number, departure_date)
    except FlightLookupError as e:
        logging.getLogger("flightwatch.tracking.cli").debug("Lookup failed: %s", e)
        print(f"Error: {e.user_message}", file=sys.stderr)
        sys.exit(1)

    flight = report.flight
    print(f"\n{flight.flight_number}  {flight.airline}  {flight.route()}")
    if flight.aircraft_type:
        print(f"Aircraft: {flight.aircraft_type}")
    print(f"Status: {report.status_data.status.value} - {report.display.status_message}")
    duration = calculate_enhanced_flight_duration(flight)
    if duration:
        print(f"Duration: {duration}")
    if report.map_config.show_live_position and flight.live_data:
        live = flight.live_data
        print(
            f"Position: {live.position.lat:.4f}, {live.position.lng:.4f} "
            f"alt {live.altitude} ft, {live.speed} kt"
        )
    print()

    df = report.to_dataframe()
    print(df.fillna(MISSING_PLACEHOLDER).to_string(index=False))

    if args.weather:
        from flightwatch.tracking.sources.weather import WeatherSource

        weather = WeatherSource()
        print()
        for airport in (flight.airports.departure, flight.airports.arrival):
            w = weather.fetch_weather(airport.code)
            if w is None:
                print(f"  {airport.code}: weather unavailable")
            else:
                print(f"  {airport.code}: {w.formatted_temperature() or '-'} {w.phrase}")

    if args.output:
        df.to_csv(args.output, index=False)
        print(f"\nWrote {len(df)} rows to {args.output}", file=sys.stderr)


if __name__ == "__main__":
    main()
