from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from src.domain.models import DisplayFeature, EditResult, LayerDefinition


class IFeatureLayer(ABC):
    """Port for the map's point feature layer."""

    @property
    @abstractmethod
    def definition(self) -> LayerDefinition:
        raise NotImplementedError

    @abstractmethod
    async def query_features(self) -> tuple[DisplayFeature, ...]:
        """Return the currently displayed features, with object ids."""

    @abstractmethod
    async def apply_edits(
        self,
        *,
        adds: Sequence[DisplayFeature] = (),
        deletes: Sequence[DisplayFeature] = (),
    ) -> EditResult:
        """Apply deletes and adds as one edit.

        Either both are applied or neither; raise LayerEditError on rejection.
        """
