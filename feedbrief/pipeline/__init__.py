"""Batch pipeline orchestration."""

from .models import FeedDigest, ProcessedItem
from .orchestrator import BatchPipeline, parse_pub_date, sort_by_date

__all__ = [
    "BatchPipeline",
    "FeedDigest",
    "ProcessedItem",
    "parse_pub_date",
    "sort_by_date",
]
