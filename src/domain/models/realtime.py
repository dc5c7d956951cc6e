from __future__ import annotations

from dataclasses import dataclass

from .geo import GeoPoint


@dataclass(frozen=True, slots=True)
class VehiclePosition:
    """One decoded GTFS-realtime vehicle position.

    `timestamp` is seconds since the UNIX epoch, as carried on the wire
    (0 when the feed omits it). `start_time` is the scheduled trip start
    in GTFS `HH:MM:SS` form.
    """

    label: str | None
    position: GeoPoint
    timestamp: int = 0
    route_id: str | None = None
    start_time: str | None = None
    vehicle_id: str | None = None
    trip_id: str | None = None
    start_date: str | None = None
    bearing: float | None = None
    speed_mps: float | None = None
    stop_id: str | None = None
