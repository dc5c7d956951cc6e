from __future__ import annotations

from abc import ABC, abstractmethod


class IFeedSource(ABC):
    """Port for downloading the raw GTFS-realtime vehicle positions payload."""

    @abstractmethod
    async def fetch(self) -> bytes | None:
        """Return the payload, or None when this cycle has no data."""
