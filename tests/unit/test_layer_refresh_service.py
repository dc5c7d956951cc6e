from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from datetime import timezone
from typing import Sequence

from google.transit import gtfs_realtime_pb2

from src.adapters.layers.in_memory_feature_layer import InMemoryFeatureLayer
from src.adapters.realtime.gtfs_realtime_decoder import GtfsRealtimeDecoder
from src.app.services.layer_refresh_service import LayerRefreshService
from src.domain.algorithms.projection import project_vehicles
from src.domain.exceptions import FeedDecodeError, LayerEditError
from src.domain.models import (
    DisplayFeature,
    EditResult,
    GeoPoint,
    RefreshStatus,
    VehiclePosition,
)


def _vehicle(label: str, ts: int = 0) -> VehiclePosition:
    return VehiclePosition(
        label=label,
        position=GeoPoint(lat=38.6, lon=-90.3),
        timestamp=ts,
        route_id="R" + label,
        start_time="08:00:00",
    )


@dataclass(slots=True)
class FakeFeedSource:
    payloads: list[bytes | None]
    calls: int = 0

    async def fetch(self) -> bytes | None:
        self.calls += 1
        return self.payloads.pop(0) if self.payloads else None


@dataclass(slots=True)
class FakeDecoder:
    records: dict[bytes, tuple[VehiclePosition, ...]] = field(default_factory=dict)

    def decode(self, content: bytes) -> tuple[VehiclePosition, ...]:
        if content not in self.records:
            raise FeedDecodeError("Invalid GTFS-realtime payload")
        return self.records[content]


class RejectingFeatureLayer(InMemoryFeatureLayer):
    async def apply_edits(
        self,
        *,
        adds: Sequence[DisplayFeature] = (),
        deletes: Sequence[DisplayFeature] = (),
    ) -> EditResult:
        raise LayerEditError("Edit rejected by layer")


SET_A = tuple(_vehicle(f"A{i}") for i in range(3))
SET_B = tuple(_vehicle(f"B{i}") for i in range(2))


def _service(payloads, layer=None) -> LayerRefreshService:
    return LayerRefreshService(
        feed_source=FakeFeedSource(list(payloads)),
        decoder=FakeDecoder({b"A": SET_A, b"B": SET_B, b"empty": ()}),
        layer=layer if layer is not None else InMemoryFeatureLayer(),
        tz=timezone.utc,
    )


async def _names(layer) -> list[str | None]:
    return [f.attributes.name for f in await layer.query_features()]


def test_added_features_match_decoded_records() -> None:
    svc = _service([b"A"])

    outcome = asyncio.run(svc.refresh())

    assert outcome.status is RefreshStatus.REFRESHED
    assert outcome.added == len(SET_A)
    assert outcome.deleted == 0
    assert asyncio.run(_names(svc.layer)) == ["A0", "A1", "A2"]


def test_second_cycle_fully_replaces_first() -> None:
    svc = _service([b"A", b"B"])

    async def scenario():
        await svc.refresh()
        second = await svc.refresh()
        return second, await _names(svc.layer)

    second, names = asyncio.run(scenario())

    assert second.added == 2
    assert second.deleted == 3
    assert names == ["B0", "B1"]


def test_failed_fetch_leaves_layer_unchanged() -> None:
    svc = _service([b"A", None])

    async def scenario():
        await svc.refresh()
        before = await svc.layer.query_features()
        outcome = await svc.refresh()
        return before, outcome, await svc.layer.query_features()

    before, outcome, after = asyncio.run(scenario())

    assert outcome.status is RefreshStatus.SKIPPED
    assert after == before


def test_malformed_payload_fails_cycle_and_keeps_layer() -> None:
    svc = _service([b"A", b"garbage"])

    async def scenario():
        await svc.refresh()
        outcome = await svc.refresh()
        return outcome, await _names(svc.layer)

    outcome, names = asyncio.run(scenario())

    assert outcome.status is RefreshStatus.FAILED
    assert "Invalid" in (outcome.error or "")
    assert names == ["A0", "A1", "A2"]


def test_empty_record_set_clears_layer() -> None:
    svc = _service([b"A", b"empty"])

    async def scenario():
        await svc.refresh()
        outcome = await svc.refresh()
        return outcome, await svc.layer.query_features()

    outcome, features = asyncio.run(scenario())

    assert outcome.status is RefreshStatus.REFRESHED
    assert outcome.deleted == 3
    assert features == ()


def test_rejected_edit_fails_cycle_without_partial_clear() -> None:
    layer = RejectingFeatureLayer()
    svc = _service([b"B"], layer=layer)

    async def scenario():
        # Seed through the base implementation, then let the refresh be rejected.
        seed = project_vehicles(SET_A, tz=timezone.utc)
        await InMemoryFeatureLayer.apply_edits(layer, adds=seed)
        outcome = await svc.refresh()
        return outcome, await _names(layer)

    outcome, names = asyncio.run(scenario())

    assert outcome.status is RefreshStatus.FAILED
    assert outcome.error == "Edit rejected by layer"
    assert names == ["A0", "A1", "A2"]


def test_replace_features_renders_timestamp() -> None:
    svc = _service([])

    async def scenario():
        await svc.replace_features([_vehicle("X", ts=0)])
        return await svc.layer.query_features()

    (feature,) = asyncio.run(scenario())

    assert feature.object_id == 1
    assert feature.attributes.timestamp == "00:00:00 GMT+0000 (UTC)"
    assert feature.attributes.route == "RX"


def test_out_of_range_timestamp_fails_cycle_and_keeps_layer() -> None:
    feed = gtfs_realtime_pb2.FeedMessage()
    feed.header.gtfs_realtime_version = "2.0"
    ent = feed.entity.add()
    ent.id = "1"
    ent.vehicle.vehicle.label = "2104"
    ent.vehicle.position.latitude = 38.6
    ent.vehicle.position.longitude = -90.3
    ent.vehicle.timestamp = 2**63

    svc = LayerRefreshService(
        feed_source=FakeFeedSource([b"A", feed.SerializeToString()]),
        decoder=GtfsRealtimeDecoder(),
        layer=InMemoryFeatureLayer(),
        tz=timezone.utc,
    )
    seed = LayerRefreshService(
        feed_source=svc.feed_source,
        decoder=FakeDecoder({b"A": SET_A}),
        layer=svc.layer,
        tz=timezone.utc,
    )

    async def scenario():
        await seed.refresh()
        outcome = await svc.refresh()
        return outcome, await _names(svc.layer)

    outcome, names = asyncio.run(scenario())

    assert outcome.status is RefreshStatus.FAILED
    assert "out of range" in (outcome.error or "")
    assert names == ["A0", "A1", "A2"]
