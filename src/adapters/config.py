from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import tzinfo
from zoneinfo import ZoneInfo

from src.adapters.realtime.http_gtfs_realtime_feed_source import DEFAULT_FEED_URL


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_str(name: str) -> str | None:
    raw = os.getenv(name)
    if raw is None:
        return None
    return raw.strip() or None


@dataclass(frozen=True, slots=True)
class MapRuntimeConfig:
    feed_url: str = DEFAULT_FEED_URL
    feed_headers: str | None = None
    feed_timeout_s: float = 10.0

    refresh_interval_s: float = 15.0
    countdown_start: int = 15
    countdown_tick_s: float = 1.0
    refresh_on_startup: bool = True

    center_lon: float = -90.3
    center_lat: float = 38.6
    zoom: int = 10
    basemap: str = "streets-vector"

    display_tz: str | None = None

    @staticmethod
    def from_env() -> "MapRuntimeConfig":
        d = MapRuntimeConfig()
        cfg = MapRuntimeConfig(
            feed_url=_env_str("FEED_URL") or d.feed_url,
            feed_headers=_env_str("FEED_HEADERS"),
            feed_timeout_s=float(os.getenv("FEED_TIMEOUT_S") or d.feed_timeout_s),
            refresh_interval_s=float(os.getenv("REFRESH_INTERVAL_S") or d.refresh_interval_s),
            countdown_start=int(os.getenv("COUNTDOWN_START") or d.countdown_start),
            countdown_tick_s=float(os.getenv("COUNTDOWN_TICK_S") or d.countdown_tick_s),
            refresh_on_startup=_env_bool("REFRESH_ON_STARTUP", d.refresh_on_startup),
            center_lon=float(os.getenv("MAP_CENTER_LON") or d.center_lon),
            center_lat=float(os.getenv("MAP_CENTER_LAT") or d.center_lat),
            zoom=int(os.getenv("MAP_ZOOM") or d.zoom),
            basemap=_env_str("MAP_BASEMAP") or d.basemap,
            display_tz=_env_str("DISPLAY_TZ"),
        )
        cfg.validate()
        return cfg

    def validate(self) -> None:
        if self.refresh_interval_s <= 0:
            raise ValueError(f"Invalid REFRESH_INTERVAL_S: {self.refresh_interval_s}")
        if self.countdown_tick_s <= 0:
            raise ValueError(f"Invalid COUNTDOWN_TICK_S: {self.countdown_tick_s}")
        if self.countdown_start < 0:
            raise ValueError(f"Invalid COUNTDOWN_START: {self.countdown_start}")

    def resolved_tz(self) -> tzinfo | None:
        """Display time zone; None means the host's local zone."""

        if not self.display_tz:
            return None
        return ZoneInfo(self.display_tz)
