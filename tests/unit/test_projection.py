from __future__ import annotations

from datetime import datetime, timedelta, timezone

from src.domain.algorithms.projection import (
    format_time_string,
    project_vehicles,
    to_display_feature,
)
from src.domain.models import GeoPoint, VehiclePosition


def _vehicle(label: str, ts: int = 0) -> VehiclePosition:
    return VehiclePosition(
        label=label,
        position=GeoPoint(lat=38.6, lon=-90.3),
        timestamp=ts,
        route_id="11",
        start_time="07:45:00",
    )


def test_epoch_renders_as_epoch_instant_in_utc() -> None:
    assert format_time_string(0, timezone.utc) == "00:00:00 GMT+0000 (UTC)"


def test_time_string_uses_display_zone_offset() -> None:
    cst = timezone(timedelta(hours=-6), "CST")
    assert format_time_string(0, cst) == "18:00:00 GMT-0600 (CST)"
    assert format_time_string(3600 * 14 + 61, cst) == "08:01:01 GMT-0600 (CST)"


def test_time_string_defaults_to_local_zone() -> None:
    local = datetime.fromtimestamp(0, tz=timezone.utc).astimezone()
    assert format_time_string(0).startswith(local.strftime("%H:%M:%S GMT%z"))


def test_display_feature_maps_label_route_and_start() -> None:
    f = to_display_feature(_vehicle("2104", ts=0), tz=timezone.utc)

    assert f.geometry == GeoPoint(lat=38.6, lon=-90.3)
    assert f.object_id is None
    assert f.attributes.as_dict() == {
        "name": "2104",
        "timestamp": "00:00:00 GMT+0000 (UTC)",
        "route": "11",
        "route_start": "07:45:00",
    }


def test_projection_is_one_to_one_and_keeps_order() -> None:
    vehicles = [_vehicle(str(i)) for i in range(5)] + [_vehicle("0")]
    features = project_vehicles(vehicles, tz=timezone.utc)

    assert len(features) == len(vehicles)
    assert [f.attributes.name for f in features] == ["0", "1", "2", "3", "4", "0"]


def test_projection_of_nothing_is_empty() -> None:
    assert project_vehicles([]) == ()
