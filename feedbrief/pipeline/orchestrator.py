"""Batch pipeline: feeds -> items -> article content -> summaries."""

import asyncio
import logging
import time
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from functools import cmp_to_key
from typing import List, Optional, Sequence, Tuple

import pendulum

from ..config import ConfigModel
from ..exceptions import ItemNotFoundError, PipelineError
from ..ingestion import CanonicalItem, ContentExtractor, FeedNormalizer, merge_items
from ..ingestion.content_extractor import html_to_text
from ..ingestion.models import NO_DATE
from ..summarization import ExtractiveSummarizer, fit_words
from .models import FeedDigest, ProcessedItem

logger = logging.getLogger(__name__)

NO_CONTENT_TEXT = "No content to summarize."
FAILED_CONTENT_TEXT = "Summarization failed."


def parse_pub_date(value: Optional[str]) -> Optional[datetime]:
    """Parse an RFC 822 or ISO-8601 style date into an aware datetime, or None."""
    if not value or value == NO_DATE:
        return None

    parsed = None
    try:
        parsed = parsedate_to_datetime(value)
    except (TypeError, ValueError, IndexError):
        parsed = None

    if parsed is None:
        try:
            parsed = pendulum.parse(value, strict=False)
        except (ValueError, OverflowError, TypeError):
            return None

    if not isinstance(parsed, datetime):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _compare_dated(a: Tuple[CanonicalItem, Optional[datetime]], b: Tuple[CanonicalItem, Optional[datetime]]) -> int:
    date_a, date_b = a[1], b[1]
    if date_a is None or date_b is None:
        return 0
    return (date_b > date_a) - (date_b < date_a)


def sort_by_date(items: Sequence[CanonicalItem]) -> List[CanonicalItem]:
    """Newest first; an unparseable date on either side leaves the pair in place."""
    dated = [(item, parse_pub_date(item.pub_date)) for item in items]
    return [item for item, _ in sorted(dated, key=cmp_to_key(_compare_dated))]


class BatchPipeline:
    """Orchestrates normalization, extraction and summarization over all sources."""

    def __init__(
        self,
        config: ConfigModel,
        normalizer: Optional[FeedNormalizer] = None,
        extractor: Optional[ContentExtractor] = None,
        summarizer: Optional[ExtractiveSummarizer] = None,
    ) -> None:
        """Initialize pipeline from an immutable configuration."""
        self.config = config
        self.normalizer = normalizer or FeedNormalizer(
            timeout=config.feeds.timeout_ms / 1000,
            user_agent=config.extraction.user_agent,
        )
        self.extractor = extractor or ContentExtractor(
            timeout=config.extraction.timeout_ms / 1000,
            user_agent=config.extraction.user_agent,
        )
        self.summarizer = summarizer or ExtractiveSummarizer(**config.summarizer.model_dump())

    async def collect_items(self) -> List[CanonicalItem]:
        """Normalize every enabled source concurrently and merge the items."""
        results = await self.normalizer.fetch_all_feeds(self.config.enabled_sources)
        failed = [r.source_url for r in results if not r.success]
        items = merge_items(results)
        logger.info(
            "Fetched %d items from %d feeds (%d failed)", len(items), len(results), len(failed)
        )
        return items

    def _summarize_fallback(self, item: CanonicalItem, default: str) -> str:
        text = html_to_text(item.description) or default
        try:
            return self.summarizer.summarize(text)
        except Exception:
            logger.exception("Error summarizing description of %s", item.guid)
            return fit_words(text, self.summarizer.min_words, self.summarizer.max_words)

    async def process_item(self, item: CanonicalItem) -> ProcessedItem:
        """Extract and summarize one item, degrading to its description. Never raises."""
        if not item.has_link:
            return ProcessedItem.from_item(item, self._summarize_fallback(item, NO_CONTENT_TEXT))

        try:
            logger.info('Processing "%s" from: %s', item.title, item.link)
            content = await self.extractor.extract(item.link)
            if not content.ok:
                logger.warning(
                    "Using feed description for %s: %s", item.link, content.error or content.text
                )
                summary = self._summarize_fallback(item, FAILED_CONTENT_TEXT)
            else:
                summary = self.summarizer.summarize(content.text)
        except Exception:
            logger.exception("Failed to process %s", item.link)
            summary = self._summarize_fallback(item, FAILED_CONTENT_TEXT)

        return ProcessedItem.from_item(item, summary)

    async def _pause(self) -> None:
        delay = self.config.pipeline.batch_delay_ms / 1000
        if delay > 0:
            logger.info("Waiting %.1f seconds before next batch...", delay)
            await asyncio.sleep(delay)

    async def process_batches(self, items: Sequence[CanonicalItem]) -> List[ProcessedItem]:
        """Process items in fixed-size concurrent batches, pausing between batches."""
        size = self.config.pipeline.batch_size
        batches = [items[i : i + size] for i in range(0, len(items), size)]

        processed: List[ProcessedItem] = []
        for number, batch in enumerate(batches, start=1):
            logger.info("Processing batch %d of %d", number, len(batches))
            results = await asyncio.gather(*(self.process_item(item) for item in batch))
            processed.extend(results)
            if number < len(batches):
                await self._pause()
        return processed

    async def process_all(self) -> FeedDigest:
        """Fetch, sort, extract and summarize every item of every source."""
        start = time.monotonic()
        try:
            items = sort_by_date(await self.collect_items())
            processed = await self.process_batches(items)
        except Exception as e:
            logger.exception("Error processing feeds")
            raise PipelineError(f"Failed to process feeds: {e}") from e

        logger.info("Processed %d items in %.1f seconds", len(processed), time.monotonic() - start)
        return FeedDigest(
            sources=self.config.source_urls,
            last_updated=pendulum.now("UTC").to_iso8601_string(),
            items=processed,
        )

    async def process_one(self, guid: str) -> ProcessedItem:
        """Locate the item carrying ``guid`` across all sources and process it."""
        try:
            items = await self.collect_items()
        except Exception as e:
            logger.exception("Error fetching item %s", guid)
            raise PipelineError(f"Failed to fetch item: {e}") from e

        item = next((i for i in items if i.guid == guid), None)
        if item is None:
            raise ItemNotFoundError(guid)
        return await self.process_item(item)
