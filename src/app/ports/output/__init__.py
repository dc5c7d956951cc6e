from .feature_layer import IFeatureLayer
from .feed_decoder import IFeedDecoder
from .feed_source import IFeedSource

__all__ = [
    "IFeatureLayer",
    "IFeedDecoder",
    "IFeedSource",
]
