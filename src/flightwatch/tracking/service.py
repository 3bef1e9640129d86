"""Flight status service - runs one lookup from flight number to display config."""

import logging
from dataclasses import replace
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Union

from flightwatch.errors import (
    FlightDataUnavailableError,
    InvalidFlightNumberError,
    NoFlightDataError,
    ProviderError,
)
from flightwatch.tracking.display import derive_display
from flightwatch.tracking.flight_number import (
    designator,
    format_departure_date,
    is_valid_flight_number,
    parse_flight_number,
)
from flightwatch.tracking.merge import is_valid_hex, merge_flight_data, with_reference_data
from flightwatch.tracking.models import FlightReport, ParsedFlightNumber, UnifiedFlightData
from flightwatch.tracking.status import extract_flight_status_data
from flightwatch.tracking.timestamps import normalize, utc_now
from flightwatch.tracking.transforms import (
    schedule_has_no_results,
    schedule_instance_ended,
    transform_live_response,
    transform_schedule_response,
)


class FlightStatusService:
    """Sequential lookup pipeline over the schedule, tracking and live providers.

    The schedule provider is the primary source. The tracking and live
    providers only enrich it, except when the schedule record has ended, in
    which case the live provider supplies the whole flight.
    """

    def __init__(
        self,
        schedule_source=None,
        tracking_source=None,
        live_source=None,
        logger: Optional[logging.Logger] = None,
    ):
        if schedule_source is None or tracking_source is None or live_source is None:
            from flightwatch.tracking.sources import (
                FlightRadarSource,
                FlightViewSource,
                PlaneFinderSource,
            )

            schedule_source = schedule_source or FlightViewSource()
            tracking_source = tracking_source or FlightRadarSource()
            live_source = live_source or PlaneFinderSource()
        self._schedule = schedule_source
        self._tracking = tracking_source
        self._live = live_source
        self._log = logger or logging.getLogger("flightwatch.tracking.service")

    def lookup(
        self,
        flight_number: str,
        departure_date: Union[str, date, None] = None,
        now: Optional[datetime] = None,
    ) -> FlightReport:
        """Load, classify and derive display configuration for one flight."""
        now = normalize(now) if now else utc_now()
        flight = self.load_flight(flight_number, departure_date, now)

        status_data = extract_flight_status_data(flight, now)
        flight = replace(flight, status=status_data.status)
        self._log.info(
            "Classified %s as %s (raw status %r)",
            flight.flight_number,
            status_data.status.value,
            flight.raw_status,
        )

        display, map_config = derive_display(flight, status_data)
        self._log.debug(
            "Display for %s: %r, live position shown=%s",
            flight.flight_number,
            display.status_message,
            map_config.show_live_position,
        )
        return FlightReport(
            flight=flight,
            status_data=status_data,
            display=display,
            map_config=map_config,
        )

    def load_flight(
        self,
        flight_number: str,
        departure_date: Union[str, date, None] = None,
        now: Optional[datetime] = None,
    ) -> UnifiedFlightData:
        """Fetch and merge provider data into one unclassified flight."""
        now = normalize(now) if now else utc_now()

        parsed = parse_flight_number(flight_number)
        if not is_valid_flight_number(parsed):
            raise InvalidFlightNumberError(flight_number)
        if not isinstance(departure_date, str):
            departure_date = format_departure_date(departure_date)
        self._log.debug("Parsed %r as %s %s", flight_number, parsed.carrier_code, parsed.number)

        response = self._schedule.fetch_flight(parsed, departure_date)
        if schedule_has_no_results(response):
            raise NoFlightDataError(f"No schedule data for {parsed.original} on {departure_date}")

        if schedule_instance_ended(response):
            self._log.info(
                "Schedule record for %s has ended; using live provider", parsed.original
            )
            return self._load_from_live_provider(parsed, response.get("flights") or [], now)

        # TransformError is the one failure that aborts the load
        primary = transform_schedule_response(response)
        self._log.debug("Transformed schedule data for %s (%s)", primary.flight_number, primary.route())

        flight = self._enrich(primary, designator(parsed), now)
        return with_reference_data(flight)

    def _enrich(
        self, primary: UnifiedFlightData, flight_designator: str, now: datetime
    ) -> UnifiedFlightData:
        """Merge live-provider data into the primary flight; failures leave it unchanged."""
        try:
            live = self._fetch_live_flight(flight_designator, now)
        except ProviderError as e:
            self._log.warning("Enrichment for %s skipped: %s", flight_designator, e)
            return primary
        if live is None:
            return primary

        merged = merge_flight_data(primary, live, now)
        self._log.debug(
            "Merged live data for %s: icao=%s live_position=%s",
            flight_designator,
            merged.airline_icao,
            merged.live_data is not None,
        )
        return merged

    def _fetch_live_flight(
        self, flight_designator: str, now: datetime
    ) -> Optional[UnifiedFlightData]:
        aircraft_hex = self._tracking.find_aircraft_hex(flight_designator, now)
        if not is_valid_hex(aircraft_hex):
            self._log.info("No usable aircraft hex for %s", flight_designator)
            return None
        response = self._live.fetch_live(aircraft_hex, flight_designator, now)
        return transform_live_response(response)

    def _load_from_live_provider(
        self, parsed: ParsedFlightNumber, flights: List[Dict[str, Any]], now: datetime
    ) -> UnifiedFlightData:
        flight_designator = _list_designator(flights) or designator(parsed)
        try:
            flight = self._fetch_live_flight(flight_designator, now)
        except ProviderError as e:
            self._log.warning("Live provider fallback for %s failed: %s", flight_designator, e)
            raise FlightDataUnavailableError(str(e)) from e
        if flight is None:
            raise FlightDataUnavailableError(f"No live data for {flight_designator}")
        return with_reference_data(flight)


def _list_designator(flights: List[Dict[str, Any]]) -> Optional[str]:
    """Designator of the first entry in the schedule provider's flat flight list."""
    if not flights or not isinstance(flights[0], dict):
        return None
    entry = flights[0]
    code = str(entry.get("airlineCode") or "").strip().upper()
    number = str(entry.get("flightNumber") or "").strip()
    if not code or not number:
        return None
    return f"{code}{number}"
