from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Literal, Mapping

from .geo import GeoPoint

FieldType = Literal["oid", "string"]

_PLACEHOLDER = re.compile(r"\{(\w+)\}")
_FEATURE_REF = re.compile(r"^\$feature\.(\w+)$")


@dataclass(frozen=True, slots=True)
class FieldDefinition:
    name: str
    alias: str
    type: FieldType = "string"


@dataclass(frozen=True, slots=True)
class MarkerSymbol:
    style: str = "circle"
    color: str = "blue"
    size_px: int = 15
    outline_color: tuple[int, int, int] = (255, 255, 255)
    outline_width_pt: float = 1.0


@dataclass(frozen=True, slots=True)
class PopupTemplate:
    title: str = "{name}"
    content: str = "Updated: {timestamp}<br />Route: {route} (Started {route_start})"

    def render(self, attributes: Mapping[str, object]) -> tuple[str, str]:
        return _fill(self.title, attributes), _fill(self.content, attributes)


@dataclass(frozen=True, slots=True)
class LabelClass:
    expression: str = "$feature.name"
    placement: str = "center-right"
    color: str = "black"
    font_size_pt: int = 10
    font_weight: str = "bold"
    min_scale: int = 100000
    max_scale: int = 0

    def label_for(self, attributes: Mapping[str, object]) -> str | None:
        """Evaluate the label expression.

        Only plain `$feature.<field>` references are supported.
        """

        m = _FEATURE_REF.match(self.expression.strip())
        if m is None:
            raise ValueError(f"Unsupported label expression: {self.expression!r}")
        value = attributes.get(m.group(1))
        return None if value is None else str(value)


def _fill(template: str, attributes: Mapping[str, object]) -> str:
    def sub(m: re.Match[str]) -> str:
        value = attributes.get(m.group(1))
        return "" if value is None else str(value)

    return _PLACEHOLDER.sub(sub, template)


def _bus_fields() -> tuple[FieldDefinition, ...]:
    return (
        FieldDefinition(name="ObjectID", alias="ObjectID", type="oid"),
        FieldDefinition(name="name", alias="Name"),
        FieldDefinition(name="timestamp", alias="timestamp"),
        FieldDefinition(name="route", alias="route"),
        FieldDefinition(name="route_start", alias="route_start"),
    )


@dataclass(frozen=True, slots=True)
class LayerDefinition:
    """Schema and drawing info of a point feature layer."""

    id: str = "buses"
    title: str = "Buses"
    fields: tuple[FieldDefinition, ...] = field(default_factory=_bus_fields)
    object_id_field: str = "ObjectID"
    geometry_type: Literal["point"] = "point"
    symbol: MarkerSymbol = field(default_factory=MarkerSymbol)
    popup: PopupTemplate = field(default_factory=PopupTemplate)
    labels: tuple[LabelClass, ...] = field(default_factory=lambda: (LabelClass(),))

    def __post_init__(self) -> None:
        oid_fields = [f.name for f in self.fields if f.type == "oid"]
        if oid_fields != [self.object_id_field]:
            raise ValueError(
                f"Layer {self.id!r} must have exactly one oid field named {self.object_id_field!r}"
            )

    @property
    def attribute_fields(self) -> tuple[str, ...]:
        return tuple(f.name for f in self.fields if f.type != "oid")


@dataclass(frozen=True, slots=True)
class MapView:
    center: GeoPoint
    zoom: int = 10
    basemap: str = "streets-vector"
    container: str = "viewDiv"
    layers: tuple[LayerDefinition, ...] = ()
