from __future__ import annotations

from fastapi import APIRouter, Depends

from src.adapters.api.dependencies import get_map_runtime
from src.adapters.api.schemas.geo import GeoPointSchema
from src.adapters.api.schemas.map import (
    CountdownSchema,
    FeatureCollectionSchema,
    FeatureSchema,
    FieldSchema,
    LabelClassSchema,
    LayerDefinitionSchema,
    MapViewSchema,
    MarkerSymbolSchema,
    PointGeometrySchema,
    PopupTemplateSchema,
    RefreshStatusSchema,
    TriggerResponseSchema,
)
from src.adapters.runtime import MapRuntime
from src.domain.models import DisplayFeature, LayerDefinition

router = APIRouter(prefix="/map", tags=["map"])


def _layer_to_schema(layer: LayerDefinition) -> LayerDefinitionSchema:
    return LayerDefinitionSchema(
        id=layer.id,
        title=layer.title,
        fields=[FieldSchema(name=f.name, alias=f.alias, type=f.type) for f in layer.fields],
        object_id_field=layer.object_id_field,
        geometry_type=layer.geometry_type,
        symbol=MarkerSymbolSchema(
            style=layer.symbol.style,
            color=layer.symbol.color,
            size=f"{layer.symbol.size_px}px",
            outline_color=list(layer.symbol.outline_color),
            outline_width=layer.symbol.outline_width_pt,
        ),
        popup=PopupTemplateSchema(title=layer.popup.title, content=layer.popup.content),
        labels=[
            LabelClassSchema(
                expression=lc.expression,
                placement=lc.placement,
                color=lc.color,
                font_size=lc.font_size_pt,
                font_weight=lc.font_weight,
                min_scale=lc.min_scale,
                max_scale=lc.max_scale,
            )
            for lc in layer.labels
        ],
    )


def _feature_to_schema(feature: DisplayFeature, layer: LayerDefinition) -> FeatureSchema:
    values = feature.attributes.as_dict()
    attrs = {name: values.get(name) for name in layer.attribute_fields}
    title, content = layer.popup.render(attrs)
    return FeatureSchema(
        id=feature.object_id,
        geometry=PointGeometrySchema(coordinates=feature.geometry.coordinates),
        properties={
            layer.object_id_field: feature.object_id,
            **attrs,
            "popup": {"title": title, "content": content},
            "label": layer.labels[0].label_for(attrs) if layer.labels else None,
        },
    )


@router.get("", response_model=MapViewSchema)
def get_map_view(runtime: MapRuntime = Depends(get_map_runtime)) -> MapViewSchema:
    view = runtime.view
    return MapViewSchema(
        container=view.container,
        basemap=view.basemap,
        center=GeoPointSchema(lat=view.center.lat, lon=view.center.lon),
        zoom=view.zoom,
        layers=[_layer_to_schema(layer) for layer in view.layers],
    )


@router.get("/layers/buses/features", response_model=FeatureCollectionSchema)
async def get_bus_features(
    runtime: MapRuntime = Depends(get_map_runtime),
) -> FeatureCollectionSchema:
    layer = runtime.layer.definition
    features = await runtime.layer.query_features()
    return FeatureCollectionSchema(
        layer_id=layer.id,
        features=[_feature_to_schema(f, layer) for f in features],
    )


@router.get("/countdown", response_model=CountdownSchema)
def get_countdown(runtime: MapRuntime = Depends(get_map_runtime)) -> CountdownSchema:
    countdown = runtime.scheduler.countdown
    return CountdownSchema(remaining_s=countdown.remaining, start_s=countdown.start)


@router.get("/refresh", response_model=RefreshStatusSchema)
async def get_refresh_status(
    runtime: MapRuntime = Depends(get_map_runtime),
) -> RefreshStatusSchema:
    scheduler = runtime.scheduler
    out = scheduler.last_outcome
    if out is None:
        return RefreshStatusSchema(
            in_flight=scheduler.in_flight, skipped_triggers=scheduler.skipped_triggers
        )
    return RefreshStatusSchema(
        in_flight=scheduler.in_flight,
        skipped_triggers=scheduler.skipped_triggers,
        status=out.status.value,
        finished_at=out.finished_at,
        added=out.added,
        deleted=out.deleted,
        error=out.error,
    )


@router.post("/refresh", response_model=TriggerResponseSchema)
async def trigger_refresh(
    runtime: MapRuntime = Depends(get_map_runtime),
) -> TriggerResponseSchema:
    return TriggerResponseSchema(triggered=runtime.scheduler.trigger())
