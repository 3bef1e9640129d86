"""Error taxonomy for flight lookups.

Every error carries a fixed ``user_message`` that presentation code can show
as-is. The class tells callers whether the request itself was wrong
(``InvalidFlightNumberError``), the flight does not exist (``NoFlightDataError``)
or an upstream provider misbehaved (``ProviderError`` and its subclasses).
"""

ERROR_MESSAGES = {
    "INVALID_FLIGHT_NUMBER": "Invalid flight number format. Please enter a code like AA176.",
    "FLIGHT_NOT_FOUND": "Flight not found. Please check the flight number and try again.",
    "FLIGHT_DATA_UNAVAILABLE": (
        "Flight data not available. The flight may have ended or be out of range."
    ),
    "GENERAL_ERROR": "Unable to load flight data. Please try again later.",
}


class FlightLookupError(Exception):
    """Base class for all lookup failures."""

    user_message = ERROR_MESSAGES["GENERAL_ERROR"]


class InvalidFlightNumberError(FlightLookupError):
    """The flight number could not be parsed; no provider was called."""

    user_message = ERROR_MESSAGES["INVALID_FLIGHT_NUMBER"]

    def __init__(self, flight_number: str):
        super().__init__(f"Invalid flight number format: {flight_number!r}")
        self.flight_number = flight_number


class NoFlightDataError(FlightLookupError):
    """The schedule provider returned no results for the flight."""

    user_message = ERROR_MESSAGES["FLIGHT_NOT_FOUND"]


class FlightDataUnavailableError(FlightLookupError):
    """The flight exists but no provider could supply usable data for it."""

    user_message = ERROR_MESSAGES["FLIGHT_DATA_UNAVAILABLE"]


class ProviderError(FlightLookupError):
    """An upstream provider call failed or returned an unusable body."""

    def __init__(self, provider: str, message: str):
        super().__init__(f"{provider}: {message}")
        self.provider = provider


class TransformError(ProviderError):
    """A provider payload was missing fields required to build a flight."""


class MissingFlightDataError(TransformError):
    """The schedule provider response has no ``flight`` record."""

    def __init__(self, message: str = "flight record is null in schedule response"):
        super().__init__("flightview", message)


__all__ = [
    "ERROR_MESSAGES",
    "FlightDataUnavailableError",
    "FlightLookupError",
    "InvalidFlightNumberError",
    "MissingFlightDataError",
    "NoFlightDataError",
    "ProviderError",
    "TransformError",
]
