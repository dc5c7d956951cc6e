from __future__ import annotations

from datetime import datetime, timezone, tzinfo
from typing import Iterable

from src.domain.models.feature import DisplayFeature, FeatureAttributes
from src.domain.models.realtime import VehiclePosition


def format_time_string(epoch_s: int, tz: tzinfo | None = None) -> str:
    """Render a UNIX timestamp like a browser's `Date.toTimeString()`.

    e.g. `"00:00:00 GMT+0000 (UTC)"`. With `tz=None` the host's local
    time zone is used.
    """

    instant = datetime.fromtimestamp(int(epoch_s), tz=timezone.utc)
    local = instant.astimezone(tz) if tz is not None else instant.astimezone()
    return local.strftime("%H:%M:%S GMT%z ") + f"({local.tzname()})"


def to_display_feature(
    vehicle: VehiclePosition, *, tz: tzinfo | None = None
) -> DisplayFeature:
    return DisplayFeature(
        geometry=vehicle.position,
        attributes=FeatureAttributes(
            name=vehicle.label,
            timestamp=format_time_string(vehicle.timestamp, tz),
            route=vehicle.route_id,
            route_start=vehicle.start_time,
        ),
    )


def project_vehicles(
    vehicles: Iterable[VehiclePosition], *, tz: tzinfo | None = None
) -> tuple[DisplayFeature, ...]:
    # 1:1, order preserving; no filtering happens here.
    return tuple(to_display_feature(v, tz=tz) for v in vehicles)
