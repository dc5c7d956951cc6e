from __future__ import annotations

from abc import ABC, abstractmethod

from src.domain.models.realtime import VehiclePosition


class IFeedDecoder(ABC):
    """Port for turning a raw feed payload into vehicle positions."""

    @abstractmethod
    def decode(self, content: bytes) -> tuple[VehiclePosition, ...]:
        """Decode `content`; raise FeedDecodeError on malformed input."""
