"""FlightView schedule API client."""

import logging
from typing import Any, Dict, Optional

import requests

from flightwatch.config import settings
from flightwatch.errors import ProviderError
from flightwatch.tracking.models import ParsedFlightNumber
from flightwatch.tracking.sources.base import decode_json

logger = logging.getLogger("flightwatch.tracking.sources.flightview")

PROVIDER = "flightview"

# The API only answers requests that look like they come from its own site
BROWSER_HEADERS = {
    "accept": "*/*",
    "accept-language": "en-GB",
    "origin": "https://www.flightview.com",
    "referer": "https://www.flightview.com/",
    "user-agent": (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    ),
}


class FlightViewSource:
    """Schedule provider backed by the FlightView app API."""

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None):
        self.base_url = (base_url or settings.flightview_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.http_timeout

    def fetch_flight(self, parsed: ParsedFlightNumber, departure_date: str) -> Dict[str, Any]:
        """Fetch the raw schedule response for one flight on one departure date."""
        url = f"{self.base_url}/{parsed.carrier_code}/{parsed.number}"
        logger.info("Fetching %s%s on %s", parsed.carrier_code, parsed.number, departure_date)
        try:
            resp = requests.get(
                url,
                params={"departureDate": departure_date},
                headers=BROWSER_HEADERS,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise ProviderError(PROVIDER, f"request failed: {e}") from e

        data = decode_json(PROVIDER, resp)
        if not isinstance(data, dict):
            raise ProviderError(PROVIDER, "unexpected response shape")
        return data
