"""HTTP source that polls a backend for telemetry points."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import requests

from et_monitor.sources.base import DataSourceError
from et_monitor.telemetry.point import Point

logger = logging.getLogger(__name__)

REMOTE_POLL_INTERVAL_MS = 15_000


class RemoteSource:
    """Fetches a JSON array of points from ``url``.

    The request carries ``since=<ms>`` when the caller already holds points;
    the response is still filtered client-side so a backend that ignores the
    parameter works too.
    """

    def __init__(
        self,
        url: str,
        session: Optional[requests.Session] = None,
        timeout: float = 10.0,
        poll_interval_ms: int = REMOTE_POLL_INTERVAL_MS,
    ) -> None:
        self.url = url
        self.session = session or requests.Session()
        self.timeout = timeout
        self.poll_interval_ms = poll_interval_ms

    def close(self) -> None:
        self.session.close()

    def _fetch(self, since: Optional[int]) -> Any:
        params: Dict[str, int] = {} if since is None else {"since": since}
        try:
            resp = self.session.get(
                self.url,
                params=params,
                timeout=self.timeout,
                headers={"accept": "application/json"},
            )
            resp.raise_for_status()
        except requests.RequestException as exc:
            raise DataSourceError(f"Request to {self.url} failed: {exc}") from exc
        try:
            return resp.json()
        except ValueError as exc:
            raise DataSourceError(f"Invalid JSON from {self.url}: {exc}") from exc

    def pull(self, since: Optional[int]) -> List[Point]:
        payload = self._fetch(since)
        if not isinstance(payload, list):
            raise DataSourceError(f"Expected a JSON array from {self.url}, got {type(payload).__name__}")
        try:
            points = [Point.from_dict(item) for item in payload]
        except ValueError as exc:
            raise DataSourceError(f"Malformed point from {self.url}: {exc}") from exc

        if since is not None:
            points = [p for p in points if p.timestamp > since]
        points.sort(key=lambda p: p.timestamp)
        logger.debug("Fetched %d new point(s) from %s", len(points), self.url)
        return points
