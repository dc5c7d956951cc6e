from __future__ import annotations

from dataclasses import dataclass, replace

from .geo import GeoPoint


@dataclass(frozen=True, slots=True)
class FeatureAttributes:
    name: str | None
    timestamp: str
    route: str | None
    route_start: str | None

    def as_dict(self) -> dict[str, str | None]:
        return {
            "name": self.name,
            "timestamp": self.timestamp,
            "route": self.route,
            "route_start": self.route_start,
        }


@dataclass(frozen=True, slots=True)
class DisplayFeature:
    """A point graphic on the bus layer.

    `object_id` is None until the layer stores the feature.
    """

    geometry: GeoPoint
    attributes: FeatureAttributes
    object_id: int | None = None

    def with_object_id(self, object_id: int) -> "DisplayFeature":
        return replace(self, object_id=object_id)


@dataclass(frozen=True, slots=True)
class EditResult:
    added_ids: tuple[int, ...] = ()
    deleted_ids: tuple[int, ...] = ()
