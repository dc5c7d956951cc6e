from __future__ import annotations

import logging
import os
import time
from dataclasses import dataclass, field
from typing import Callable

import httpx

from src.app.ports.output import IFeedSource
from src.domain.exceptions import FeedFetchError

logger = logging.getLogger(__name__)

DEFAULT_FEED_URL = "https://stlrealtimevehicles.alligator.workers.dev/"


def _epoch_ms() -> int:
    return int(time.time() * 1000)


def parse_headers(raw: str | None) -> dict[str, str]:
    """Parse 'Key:Value;Key2:Value2' into a header dict."""

    raw = (raw or "").strip()
    if not raw:
        return {}
    headers: dict[str, str] = {}
    for part in raw.split(";"):
        part = part.strip()
        if not part or ":" not in part:
            continue
        k, v = part.split(":", 1)
        k = k.strip()
        if k:
            headers[k] = v.strip()
    return headers


@dataclass(slots=True)
class HttpGtfsRealtimeFeedSource(IFeedSource):
    """Downloads a GTFS-Realtime VehiclePositions payload over HTTP.

    Every request carries `cacheBust=<epoch-millis>` so proxies never
    serve a stale copy.

    Env vars:
      - FEED_URL: base URL of the feed (or its reverse proxy)
      - FEED_HEADERS: optional headers, as 'Key:Value;Key2:Value2'
      - FEED_TIMEOUT_S: request timeout (default 10)

    A non-2xx status or a transport error is logged and yields None; the
    caller skips the cycle.
    """

    url: str | None = None
    headers_raw: str | None = None
    timeout_s: float | None = None
    transport: httpx.AsyncBaseTransport | None = field(default=None, repr=False)
    now_ms: Callable[[], int] = field(default=_epoch_ms, repr=False)

    def __post_init__(self) -> None:
        if self.url is None:
            self.url = os.getenv("FEED_URL", DEFAULT_FEED_URL)
        if self.headers_raw is None:
            self.headers_raw = os.getenv("FEED_HEADERS")
        if self.timeout_s is None:
            self.timeout_s = float(os.getenv("FEED_TIMEOUT_S") or 10.0)

    async def fetch(self) -> bytes | None:
        try:
            return await self._get()
        except FeedFetchError as exc:
            if exc.status_code is not None:
                logger.error("Feed request failed: HTTP %s from %s", exc.status_code, exc.url)
            else:
                logger.error("Feed request failed: %s", exc)
            return None

    async def _get(self) -> bytes:
        url = str(self.url)
        params = {"cacheBust": str(self.now_ms())}

        async with httpx.AsyncClient(timeout=self.timeout_s, transport=self.transport) as client:
            try:
                resp = await client.get(url, params=params, headers=parse_headers(self.headers_raw))
            except httpx.HTTPError as exc:
                raise FeedFetchError(f"{type(exc).__name__}: {exc}", url=url) from exc

        if not resp.is_success:
            raise FeedFetchError(
                f"Unexpected status {resp.status_code}", url=url, status_code=resp.status_code
            )
        return resp.content
