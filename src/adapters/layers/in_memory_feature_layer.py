from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Sequence

from src.app.ports.output import IFeatureLayer
from src.domain.exceptions import LayerEditError
from src.domain.models import DisplayFeature, EditResult, LayerDefinition


@dataclass(slots=True)
class InMemoryFeatureLayer(IFeatureLayer):
    """Client-side feature layer (a `source: []` layer in map terms).

    Object ids are assigned on add and never reused. Edits are validated
    before anything is mutated so a rejected edit leaves the layer as it was.
    """

    layer_definition: LayerDefinition = field(default_factory=LayerDefinition)

    _lock: asyncio.Lock = field(default_factory=asyncio.Lock, init=False, repr=False)
    _features: dict[int, DisplayFeature] = field(default_factory=dict, init=False, repr=False)
    _next_object_id: int = field(default=1, init=False, repr=False)

    @property
    def definition(self) -> LayerDefinition:
        return self.layer_definition

    def __len__(self) -> int:
        return len(self._features)

    async def query_features(self) -> tuple[DisplayFeature, ...]:
        async with self._lock:
            return tuple(self._features.values())

    async def apply_edits(
        self,
        *,
        adds: Sequence[DisplayFeature] = (),
        deletes: Sequence[DisplayFeature] = (),
    ) -> EditResult:
        async with self._lock:
            delete_ids: list[int] = []
            for f in deletes:
                if f.object_id is None:
                    raise LayerEditError("Cannot delete a feature without an object id")
                if f.object_id not in self._features:
                    raise LayerEditError(f"Unknown object id: {f.object_id}")
                delete_ids.append(f.object_id)
            if len(set(delete_ids)) != len(delete_ids):
                raise LayerEditError("Duplicate object ids in deletes")

            for oid in delete_ids:
                del self._features[oid]

            added_ids: list[int] = []
            for f in adds:
                oid = self._next_object_id
                self._next_object_id += 1
                self._features[oid] = f.with_object_id(oid)
                added_ids.append(oid)

            return EditResult(added_ids=tuple(added_ids), deleted_ids=tuple(delete_ids))
