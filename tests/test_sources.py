"""Unit tests for the provider HTTP clients."""

from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

import pytest
import requests

from flightwatch.errors import ProviderError
from flightwatch.tracking.flight_number import parse_flight_number
from flightwatch.tracking.sources import (
    FlightRadarSource,
    FlightViewSource,
    LiveSource,
    PlaneFinderSource,
    ScheduleSource,
    TrackingSource,
    WeatherSource,
)
from flightwatch.tracking.sources.weather import (
    WeatherReport,
    fahrenheit_to_celsius,
    format_temperature,
)

NOW = datetime(2025, 8, 22, 14, 0, tzinfo=timezone.utc)


def _response(data, status_error: Exception | None = None) -> MagicMock:
    resp = MagicMock()
    resp.json.return_value = data
    resp.raise_for_status = MagicMock(side_effect=status_error)
    return resp


class TestProtocols:
    def test_clients_satisfy_protocols(self) -> None:
        assert isinstance(FlightViewSource(), ScheduleSource)
        assert isinstance(FlightRadarSource(api_token="t"), TrackingSource)
        assert isinstance(PlaneFinderSource(), LiveSource)


class TestFlightViewSource:
    """Tests for FlightViewSource.fetch_flight."""

    @patch("flightwatch.tracking.sources.flightview.requests.get")
    def test_fetch_flight(self, mock_get, schedule_response) -> None:
        mock_get.return_value = _response(schedule_response)
        source = FlightViewSource(base_url="https://fv.example/api/v2/flight/", timeout=5)

        data = source.fetch_flight(parse_flight_number("AA176"), "2025-08-22")

        assert data == schedule_response
        args, kwargs = mock_get.call_args
        assert args[0] == "https://fv.example/api/v2/flight/AA/176"
        assert kwargs["params"] == {"departureDate": "2025-08-22"}
        assert kwargs["headers"]["origin"] == "https://www.flightview.com"
        assert kwargs["timeout"] == 5

    @patch("flightwatch.tracking.sources.flightview.requests.get")
    def test_http_error(self, mock_get) -> None:
        mock_get.return_value = _response({}, requests.HTTPError("503 Server Error"))
        with pytest.raises(ProviderError) as exc_info:
            FlightViewSource().fetch_flight(parse_flight_number("AA176"), "2025-08-22")
        assert exc_info.value.provider == "flightview"

    @patch("flightwatch.tracking.sources.flightview.requests.get")
    def test_connection_error(self, mock_get) -> None:
        mock_get.side_effect = requests.ConnectionError("refused")
        with pytest.raises(ProviderError):
            FlightViewSource().fetch_flight(parse_flight_number("AA176"), "2025-08-22")

    @patch("flightwatch.tracking.sources.flightview.requests.get")
    def test_invalid_json(self, mock_get) -> None:
        resp = _response(None)
        resp.json.side_effect = ValueError("Expecting value")
        mock_get.return_value = resp
        with pytest.raises(ProviderError, match="invalid JSON"):
            FlightViewSource().fetch_flight(parse_flight_number("AA176"), "2025-08-22")


class TestFlightRadarSource:
    """Tests for FlightRadarSource."""

    @patch("flightwatch.tracking.sources.flightradar.requests.get")
    def test_find_hex_latest_wins(self, mock_get) -> None:
        mock_get.return_value = _response(
            {
                "data": [
                    {"flight": "AA176", "hex": "AAAAAA", "datetime_takeoff": "2025-08-21T22:01:00Z"},
                    {"flight": "AA176", "hex": "A1B2C3", "datetime_takeoff": "2025-08-22T22:12:00Z"},
                ]
            }
        )
        source = FlightRadarSource(base_url="https://fr24.example/summary", api_token="secret")

        assert source.find_aircraft_hex("AA176", NOW) == "A1B2C3"

        args, kwargs = mock_get.call_args
        assert args[0] == "https://fr24.example/summary"
        assert kwargs["params"] == {
            "flight_datetime_from": "2025-08-21T00:00:00Z",
            "flight_datetime_to": "2025-08-24T00:00:00Z",
            "flights": "AA176",
        }
        assert kwargs["headers"]["Authorization"] == "Bearer secret"
        assert kwargs["headers"]["Accept-Version"] == "v1"

    @patch("flightwatch.tracking.sources.flightradar.requests.get")
    def test_no_matches(self, mock_get) -> None:
        mock_get.return_value = _response({"data": []})
        assert FlightRadarSource(api_token="t").find_aircraft_hex("AA176", NOW) is None

    @patch("flightwatch.tracking.sources.flightradar.requests.get")
    def test_missing_token_sends_no_auth(self, mock_get, caplog) -> None:
        mock_get.return_value = _response({"data": []})
        FlightRadarSource(api_token="").fetch_summaries("AA176", NOW, NOW)
        assert "Authorization" not in mock_get.call_args[1]["headers"]
        assert "FR24_API_TOKEN" in caplog.text

    @patch("flightwatch.tracking.sources.flightradar.requests.get")
    def test_http_error(self, mock_get) -> None:
        mock_get.return_value = _response({}, requests.HTTPError("401 Unauthorized"))
        with pytest.raises(ProviderError):
            FlightRadarSource(api_token="t").find_aircraft_hex("AA176", NOW)


class TestPlaneFinderSource:
    """Tests for PlaneFinderSource.fetch_live."""

    @patch("flightwatch.tracking.sources.planefinder.requests.get")
    def test_fetch_live(self, mock_get, live_response) -> None:
        mock_get.return_value = _response(live_response)
        source = PlaneFinderSource(base_url="https://pf.example/metadata/0")

        assert source.fetch_live("A1B2C3", "AA176", NOW) == live_response
        expected_ts = int(NOW.timestamp())
        assert mock_get.call_args[0][0] == f"https://pf.example/metadata/0/A1B2C3/{expected_ts}/AA176"

    @patch("flightwatch.tracking.sources.planefinder.requests.get")
    def test_success_false_is_failure(self, mock_get) -> None:
        mock_get.return_value = _response({"success": False})
        with pytest.raises(ProviderError) as exc_info:
            PlaneFinderSource().fetch_live("A1B2C3", "AA176", NOW)
        assert exc_info.value.provider == "planefinder"

    @patch("flightwatch.tracking.sources.planefinder.requests.get")
    def test_timeout(self, mock_get) -> None:
        mock_get.side_effect = requests.Timeout("timed out")
        with pytest.raises(ProviderError):
            PlaneFinderSource().fetch_live("A1B2C3", "AA176", NOW)


class TestWeather:
    def test_fahrenheit_to_celsius(self) -> None:
        assert fahrenheit_to_celsius(32) == 0
        assert fahrenheit_to_celsius(86) == 30
        assert fahrenheit_to_celsius(75) == 24

    def test_format_temperature(self) -> None:
        assert format_temperature(86, "F") == "30°C"
        assert format_temperature(21, "C") == "21°C"

    @patch("flightwatch.tracking.sources.weather.requests.get")
    def test_fetch_weather(self, mock_get) -> None:
        mock_get.return_value = _response(
            {
                "location": "New York, NY",
                "phrase": "Partly Cloudy",
                "temperature": 86,
                "temperatureUnits": "F",
                "relativeHumidity": 60,
                "icon": "30",
            }
        )
        report = WeatherSource(base_url="https://fv.example/api/weather").fetch_weather("JFK")

        assert isinstance(report, WeatherReport)
        assert report.phrase == "Partly Cloudy"
        assert report.formatted_temperature() == "30°C"
        assert mock_get.call_args[0][0] == "https://fv.example/api/weather/JFK/"

    @patch("flightwatch.tracking.sources.weather.requests.get")
    def test_fetch_weather_failure_returns_none(self, mock_get) -> None:
        mock_get.return_value = _response({}, requests.HTTPError("404 Not Found"))
        assert WeatherSource().fetch_weather("XXX") is None

    @patch("flightwatch.tracking.sources.weather.requests.get")
    def test_fetch_weather_connection_error(self, mock_get) -> None:
        mock_get.side_effect = requests.ConnectionError("refused")
        assert WeatherSource().fetch_weather("JFK") is None
