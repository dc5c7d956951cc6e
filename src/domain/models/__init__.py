from .feature import DisplayFeature, EditResult, FeatureAttributes
from .geo import GeoPoint
from .layer import (
    FieldDefinition,
    LabelClass,
    LayerDefinition,
    MapView,
    MarkerSymbol,
    PopupTemplate,
)
from .realtime import VehiclePosition
from .refresh import RefreshOutcome, RefreshStatus

__all__ = [
    "DisplayFeature",
    "EditResult",
    "FeatureAttributes",
    "FieldDefinition",
    "GeoPoint",
    "LabelClass",
    "LayerDefinition",
    "MapView",
    "MarkerSymbol",
    "PopupTemplate",
    "RefreshOutcome",
    "RefreshStatus",
    "VehiclePosition",
]
