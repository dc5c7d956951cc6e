class FeedError(Exception):
    """Base exception for vehicle feed refresh failures."""


class FeedFetchError(FeedError):
    """Raised when the feed could not be downloaded."""

    def __init__(self, message: str, *, url: str = "", status_code: int | None = None) -> None:
        self.url = url
        self.status_code = status_code
        super().__init__(message)


class FeedDecodeError(FeedError):
    """Raised when a payload is not a decodable GTFS-realtime FeedMessage."""


class LayerEditError(FeedError):
    """Raised when a combined layer edit is rejected; nothing was applied."""
