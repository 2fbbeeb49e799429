"""HTTP client for the vehicle aggregate data source.

The data source serves one JSON array of records per metric at
`{base_url}/api/{metric_id}` and the unaggregated ratings table at
`{base_url}/api/fuel_consumption_ratings`. This module only fetches and
validates payload shape; charting decisions live in `analysis`.
"""

from __future__ import annotations

import json
import logging
import urllib.parse
import urllib.request
from dataclasses import dataclass
from typing import Final

from django.conf import settings

logger = logging.getLogger(__name__)

RAW_RECORDS_ENDPOINT: Final[str] = "fuel_consumption_ratings"


class DataSourceError(Exception):
    """Raised when the data source cannot be reached or read."""


class MalformedResponse(DataSourceError):
    """Raised when the data source returns something other than a JSON array."""


@dataclass(frozen=True, slots=True)
class VehicleStatsClient:
    """Fetch aggregate and raw records from the data source.

    Args:
        base_url: Scheme and host of the data source (no trailing slash).
        timeout: Socket timeout in seconds.
    """

    base_url: str
    timeout: int = 30

    def fetch_metric(self, metric_id: str) -> list[dict[str, object]]:
        """Return the aggregate records for one metric.

        Raises:
            MalformedResponse: When the payload is not a JSON array.
            DataSourceError: When the request fails.
        """

        return self._fetch_records(metric_id)

    def fetch_raw_records(self) -> list[dict[str, object]]:
        """Return the unaggregated fuel consumption ratings."""

        return self._fetch_records(RAW_RECORDS_ENDPOINT)

    def url_for(self, endpoint: str) -> str:
        """Return the absolute URL for an API endpoint."""

        return f"{self.base_url.rstrip('/')}/api/{urllib.parse.quote(endpoint, safe='')}"

    def _fetch_records(self, endpoint: str) -> list[dict[str, object]]:
        """Fetch an endpoint and validate that it returned a list of records."""

        url = self.url_for(endpoint)
        payload = _fetch_json(url, timeout=self.timeout)
        if not isinstance(payload, list):
            logger.warning("Data source returned %s instead of a list for %s.", type(payload).__name__, url)
            raise MalformedResponse("Unexpected data format")
        if not all(isinstance(item, dict) for item in payload):
            logger.warning("Data source returned non-object records for %s.", url)
            raise MalformedResponse("Unexpected data format")
        logger.info("Fetched %d records from %s.", len(payload), url)
        return payload


def _fetch_json(url: str, *, timeout: int) -> object:
    """Fetch and decode a JSON document.

    Raises:
        MalformedResponse: When the body is not valid JSON.
        DataSourceError: When the request fails.
    """

    request = urllib.request.Request(
        url,
        headers={
            "User-Agent": "vehicleStats (dashboard)",
            "Accept": "application/json",
        },
    )
    try:
        with urllib.request.urlopen(request, timeout=timeout) as response:
            content_type = response.headers.get("Content-Type", "")
            charset = "utf-8"
            if "charset=" in content_type:
                charset = content_type.split("charset=", 1)[1].split(";", 1)[0].strip() or "utf-8"
            body = response.read().decode(charset, errors="replace")
    except Exception as exc:  # noqa: BLE001 - user-visible error wrapper
        logger.warning("Request to %s failed: %s", url, exc)
        raise DataSourceError(f"Failed to fetch {url}") from exc

    try:
        return json.loads(body)
    except json.JSONDecodeError as exc:
        logger.warning("Data source returned invalid JSON for %s.", url)
        raise MalformedResponse("Unexpected data format") from exc


def default_client() -> VehicleStatsClient:
    """Return a client configured from Django settings."""

    return VehicleStatsClient(
        base_url=settings.VEHICLE_STATS_API_BASE_URL,
        timeout=settings.VEHICLE_STATS_API_TIMEOUT_SECONDS,
    )
