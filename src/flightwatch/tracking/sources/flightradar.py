"""FlightRadar24 flight-summary client, used to find the aircraft flying a flight."""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

import requests

from flightwatch.config import settings
from flightwatch.errors import ProviderError
from flightwatch.tracking.merge import format_window_bound, tracking_window
from flightwatch.tracking.sources.base import decode_json

logger = logging.getLogger("flightwatch.tracking.sources.flightradar")

PROVIDER = "flightradar24"


class FlightRadarSource:
    """Tracking-identifier provider backed by the FR24 flight-summary API."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_token: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.base_url = base_url or settings.fr24_base_url
        self.api_token = api_token if api_token is not None else settings.fr24_api_token
        self.timeout = timeout if timeout is not None else settings.http_timeout

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept-Version": "v1", "Accept": "application/json"}
        if self.api_token:
            headers["Authorization"] = f"Bearer {self.api_token}"
        else:
            logger.warning("FR24_API_TOKEN is not set; the request will likely be rejected")
        return headers

    def fetch_summaries(
        self, designator: str, start: datetime, end: datetime
    ) -> List[Dict[str, Any]]:
        """Flight summaries for a designator within [start, end]."""
        params = {
            "flight_datetime_from": format_window_bound(start),
            "flight_datetime_to": format_window_bound(end),
            "flights": designator,
        }
        try:
            resp = requests.get(
                self.base_url, params=params, headers=self._headers(), timeout=self.timeout
            )
        except requests.RequestException as e:
            raise ProviderError(PROVIDER, f"request failed: {e}") from e

        data = decode_json(PROVIDER, resp)
        summaries = data.get("data") if isinstance(data, dict) else None
        if not isinstance(summaries, list):
            return []
        return [s for s in summaries if isinstance(s, dict)]

    def find_aircraft_hex(self, designator: str, now: Optional[datetime] = None) -> Optional[str]:
        """Aircraft hex of the latest matching summary, or None when nothing matches."""
        start, end = tracking_window(now)
        summaries = self.fetch_summaries(designator, start, end)
        if not summaries:
            logger.info("No flight summaries for %s", designator)
            return None

        # Latest wins when the window holds several legs
        latest = summaries[-1]
        logger.debug(
            "Summary for %s: hex=%s reg=%s %s->%s",
            designator,
            latest.get("hex"),
            latest.get("reg"),
            latest.get("orig_icao"),
            latest.get("dest_icao"),
        )
        return latest.get("hex") or None
