from __future__ import annotations

import logging
from dataclasses import dataclass

from src.adapters.config import MapRuntimeConfig
from src.adapters.layers.in_memory_feature_layer import InMemoryFeatureLayer
from src.adapters.realtime.gtfs_realtime_decoder import GtfsRealtimeDecoder
from src.adapters.realtime.http_gtfs_realtime_feed_source import (
    HttpGtfsRealtimeFeedSource,
)
from src.app.ports.output import IFeatureLayer, IFeedDecoder, IFeedSource
from src.app.services.layer_refresh_service import LayerRefreshService
from src.app.services.refresh_scheduler import RefreshScheduler
from src.domain.algorithms.countdown import Countdown
from src.domain.models import GeoPoint, LayerDefinition, MapView

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class MapRuntime:
    """Everything bootstrap builds; the owner starts and stops the scheduler."""

    config: MapRuntimeConfig
    view: MapView
    layer: IFeatureLayer
    refresher: LayerRefreshService
    scheduler: RefreshScheduler


def bootstrap_map(
    config: MapRuntimeConfig | None = None,
    *,
    feed_source: IFeedSource | None = None,
    decoder: IFeedDecoder | None = None,
    layer: IFeatureLayer | None = None,
) -> MapRuntime:
    """Build the map view, the empty bus layer and the refresh machinery.

    Nothing is fetched here; call `runtime.scheduler.start()` inside the
    event loop to begin refreshing.
    """

    cfg = config or MapRuntimeConfig.from_env()

    if layer is None:
        layer = InMemoryFeatureLayer(layer_definition=LayerDefinition())
    if feed_source is None:
        feed_source = HttpGtfsRealtimeFeedSource(
            url=cfg.feed_url,
            headers_raw=cfg.feed_headers or "",
            timeout_s=cfg.feed_timeout_s,
        )
    if decoder is None:
        decoder = GtfsRealtimeDecoder()

    view = MapView(
        center=GeoPoint.from_lon_lat(cfg.center_lon, cfg.center_lat),
        zoom=cfg.zoom,
        basemap=cfg.basemap,
        layers=(layer.definition,),
    )

    refresher = LayerRefreshService(
        feed_source=feed_source,
        decoder=decoder,
        layer=layer,
        tz=cfg.resolved_tz(),
    )
    scheduler = RefreshScheduler(
        refresher=refresher,
        countdown=Countdown(start=cfg.countdown_start),
        interval_s=cfg.refresh_interval_s,
        tick_s=cfg.countdown_tick_s,
    )

    logger.info(
        "Map ready at (%s, %s) zoom %s; feed %s",
        view.center.lon,
        view.center.lat,
        view.zoom,
        cfg.feed_url,
    )
    return MapRuntime(
        config=cfg, view=view, layer=layer, refresher=refresher, scheduler=scheduler
    )
