"""PlaneFinder live aircraft metadata client."""

import logging
from datetime import datetime
from typing import Any, Dict, Optional

import requests

from flightwatch.config import settings
from flightwatch.errors import ProviderError
from flightwatch.tracking.sources.base import decode_json
from flightwatch.tracking.timestamps import utc_now

logger = logging.getLogger("flightwatch.tracking.sources.planefinder")

PROVIDER = "planefinder"


class PlaneFinderSource:
    """Live-position provider backed by PlaneFinder."""

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None):
        self.base_url = (base_url or settings.planefinder_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.http_timeout

    def fetch_live(
        self, aircraft_hex: str, designator: str, now: Optional[datetime] = None
    ) -> Dict[str, Any]:
        timestamp = int((now or utc_now()).timestamp())
        url = f"{self.base_url}/{aircraft_hex}/{timestamp}/{designator}"
        logger.info("Fetching live data for %s (hex %s)", designator, aircraft_hex)
        try:
            resp = requests.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            raise ProviderError(PROVIDER, f"request failed: {e}") from e

        data = decode_json(PROVIDER, resp)
        if not isinstance(data, dict) or not data.get("success"):
            raise ProviderError(PROVIDER, f"no live data for {designator}")
        return data
