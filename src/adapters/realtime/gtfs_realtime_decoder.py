from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone

from google.protobuf.message import DecodeError
from google.transit import gtfs_realtime_pb2

from src.app.ports.output import IFeedDecoder
from src.domain.exceptions import FeedDecodeError
from src.domain.models import GeoPoint, VehiclePosition

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class GtfsRealtimeDecoder(IFeedDecoder):
    """Decodes a GTFS-realtime FeedMessage with gtfs-realtime-bindings.

    One VehiclePosition per entity that carries a vehicle with a position,
    in feed order.
    """

    def decode(self, content: bytes) -> tuple[VehiclePosition, ...]:
        feed = gtfs_realtime_pb2.FeedMessage()
        try:
            feed.ParseFromString(content)
        except DecodeError as exc:
            raise FeedDecodeError(f"Invalid GTFS-realtime payload: {exc}") from exc

        out: list[VehiclePosition] = []
        skipped = 0

        for ent in feed.entity:
            if not ent.HasField("vehicle") or not ent.vehicle.HasField("position"):
                skipped += 1
                continue

            v = ent.vehicle
            pos = v.position
            try:
                point = GeoPoint(lat=float(pos.latitude), lon=float(pos.longitude))
            except ValueError as exc:
                raise FeedDecodeError(f"Entity {ent.id!r}: {exc}") from exc

            timestamp = int(v.timestamp)
            try:
                # uint64 on the wire; must fit what datetime can render.
                datetime.fromtimestamp(timestamp, tz=timezone.utc)
            except (OverflowError, ValueError, OSError) as exc:
                raise FeedDecodeError(
                    f"Entity {ent.id!r}: timestamp {timestamp} out of range"
                ) from exc

            label = vehicle_id = None
            if v.HasField("vehicle"):
                label = v.vehicle.label or None
                vehicle_id = v.vehicle.id or None

            route_id = start_time = trip_id = start_date = None
            if v.HasField("trip"):
                route_id = v.trip.route_id or None
                start_time = v.trip.start_time or None
                trip_id = v.trip.trip_id or None
                start_date = v.trip.start_date or None

            out.append(
                VehiclePosition(
                    label=label,
                    position=point,
                    timestamp=timestamp,
                    route_id=route_id,
                    start_time=start_time,
                    vehicle_id=vehicle_id,
                    trip_id=trip_id,
                    start_date=start_date,
                    bearing=float(pos.bearing) if pos.HasField("bearing") else None,
                    speed_mps=float(pos.speed) if pos.HasField("speed") else None,
                    stop_id=v.stop_id or None,
                )
            )

        if skipped:
            logger.debug("Skipped %d entities without a vehicle position", skipped)
        return tuple(out)
