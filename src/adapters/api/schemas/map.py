from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field

from src.adapters.api.schemas.geo import GeoPointSchema


class FieldSchema(BaseModel):
    name: str
    alias: str
    type: Literal["oid", "string"]


class MarkerSymbolSchema(BaseModel):
    type: Literal["simple-marker"] = "simple-marker"
    style: str
    color: str
    size: str
    outline_color: list[int]
    outline_width: float


class PopupTemplateSchema(BaseModel):
    title: str
    content: str


class LabelClassSchema(BaseModel):
    expression: str
    placement: str
    color: str
    font_size: int
    font_weight: str
    min_scale: int
    max_scale: int


class LayerDefinitionSchema(BaseModel):
    id: str
    title: str
    fields: list[FieldSchema]
    object_id_field: str
    geometry_type: Literal["point"]
    symbol: MarkerSymbolSchema
    popup: PopupTemplateSchema
    labels: list[LabelClassSchema]


class MapViewSchema(BaseModel):
    container: str
    basemap: str
    center: GeoPointSchema
    zoom: int
    layers: list[LayerDefinitionSchema]


class PointGeometrySchema(BaseModel):
    type: Literal["Point"] = "Point"
    coordinates: tuple[float, float]


class FeatureSchema(BaseModel):
    type: Literal["Feature"] = "Feature"
    id: int | None = None
    geometry: PointGeometrySchema
    properties: dict[str, Any]


class FeatureCollectionSchema(BaseModel):
    type: Literal["FeatureCollection"] = "FeatureCollection"
    layer_id: str
    features: list[FeatureSchema]


class CountdownSchema(BaseModel):
    remaining_s: int = Field(..., ge=0)
    start_s: int = Field(..., ge=0)


class RefreshStatusSchema(BaseModel):
    in_flight: bool
    skipped_triggers: int = 0
    status: Literal["refreshed", "skipped", "failed"] | None = None
    finished_at: datetime | None = None
    added: int | None = None
    deleted: int | None = None
    error: str | None = None


class TriggerResponseSchema(BaseModel):
    triggered: bool
