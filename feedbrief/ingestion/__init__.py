"""Feed normalization and article content extraction."""

from .content_extractor import ContentExtractor
from .feed_normalizer import FeedNormalizer, merge_items
from .models import (
    CanonicalItem,
    ExtractedContent,
    ExtractionStatus,
    FeedResult,
    FeedShape,
)

__all__ = [
    "FeedNormalizer",
    "ContentExtractor",
    "CanonicalItem",
    "ExtractedContent",
    "ExtractionStatus",
    "FeedResult",
    "FeedShape",
    "merge_items",
]
