from .feed import FeedDecodeError, FeedError, FeedFetchError, LayerEditError

__all__ = ["FeedDecodeError", "FeedError", "FeedFetchError", "LayerEditError"]
