from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone, tzinfo
from typing import Sequence

from src.app.ports.output import IFeatureLayer, IFeedDecoder, IFeedSource
from src.domain.algorithms.projection import project_vehicles
from src.domain.exceptions import FeedDecodeError, LayerEditError
from src.domain.models import RefreshOutcome, RefreshStatus, VehiclePosition

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(slots=True)
class LayerRefreshService:
    """Keeps the bus layer equal to the latest decoded feed.

    - Fetches the payload; no data means the cycle is skipped.
    - Decodes it; a malformed payload fails the cycle.
    - Replaces the layer contents with one combined delete+add edit.

    Every failure leaves the layer as it was; the next cycle is the retry.
    """

    feed_source: IFeedSource
    decoder: IFeedDecoder
    layer: IFeatureLayer
    tz: tzinfo | None = None

    async def refresh(self) -> RefreshOutcome:
        content = await self.feed_source.fetch()
        if content is None:
            logger.info("No feed data; keeping %s layer as is", self.layer.definition.id)
            return RefreshOutcome(status=RefreshStatus.SKIPPED, finished_at=_now())

        try:
            vehicles = self.decoder.decode(content)
        except FeedDecodeError as exc:
            logger.error("Could not decode feed: %s", exc)
            return RefreshOutcome(
                status=RefreshStatus.FAILED, finished_at=_now(), error=str(exc)
            )

        return await self.replace_features(vehicles)

    async def replace_features(
        self, vehicles: Sequence[VehiclePosition]
    ) -> RefreshOutcome:
        adds = project_vehicles(vehicles, tz=self.tz)

        try:
            current = await self.layer.query_features()
            # Deletes and adds go in one edit so the map never shows an empty layer.
            result = await self.layer.apply_edits(adds=adds, deletes=current)
        except LayerEditError as exc:
            logger.error("Layer edit rejected: %s", exc)
            return RefreshOutcome(
                status=RefreshStatus.FAILED, finished_at=_now(), error=str(exc)
            )

        logger.info(
            "Refreshed %s layer: %d added, %d deleted",
            self.layer.definition.id,
            len(result.added_ids),
            len(result.deleted_ids),
        )
        return RefreshOutcome(
            status=RefreshStatus.REFRESHED,
            finished_at=_now(),
            added=len(result.added_ids),
            deleted=len(result.deleted_ids),
        )
