"""Feed fetcher and normalizer for RSS and Atom documents."""

import asyncio
import logging
import re
from typing import Any, Iterable, List, Optional, Sequence, Union
from urllib.parse import urlparse

import feedparser
import httpx

from ..config import SourceConfig
from ..exceptions import FeedFetchError, FeedParseError
from .models import (
    NO_DATE,
    NO_DESCRIPTION,
    NO_LINK,
    NO_TITLE,
    CanonicalItem,
    FeedResult,
    FeedShape,
)

logger = logging.getLogger(__name__)

UNKNOWN_SOURCE = "Unknown Source"

_IMG_SRC_RE = re.compile(r'<img[^>]+src="([^">]+)"')


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def resolve_source_name(source_url: str, feed_title: Optional[str], override: Optional[str] = None) -> str:
    """Display name: override, feed title, URL hostname, the URL itself, then a fixed label."""
    for candidate in (override, feed_title):
        candidate = _text(candidate)
        if candidate:
            return candidate
    try:
        hostname = urlparse(source_url).hostname
    except ValueError:
        hostname = None
    if hostname:
        return hostname
    return _text(source_url) or UNKNOWN_SOURCE


def _is_image_type(mime_type: Any) -> bool:
    return _text(mime_type).lower().startswith("image/")


def resolve_image_url(entry: Any, description: str) -> Optional[str]:
    """First match of: image enclosure, image media:content, media:thumbnail, <img> in description."""
    for enclosure in entry.get("enclosures") or []:
        url = enclosure.get("href") or enclosure.get("url")
        if url and _is_image_type(enclosure.get("type")):
            return url

    for media in entry.get("media_content") or []:
        url = media.get("url")
        if url and _is_image_type(media.get("type")):
            return url

    for thumbnail in entry.get("media_thumbnail") or []:
        url = thumbnail.get("url")
        if url:
            return url

    if description and "<img" in description:
        match = _IMG_SRC_RE.search(description)
        if match:
            return match.group(1)

    return None


def resolve_link(entry: Any, shape: FeedShape) -> str:
    """Bare-text <link> for RSS, attributed <link href> elements for Atom."""
    if shape is FeedShape.ATOM:
        links = entry.get("links") or []
        for link in links:
            if link.get("rel", "alternate") == "alternate" and link.get("href"):
                return link["href"]
        for link in links:
            if link.get("href"):
                return link["href"]
        return NO_LINK

    link = _text(entry.get("link"))
    # feedparser copies a permalink <guid> into .link when the item has no <link>
    if entry.get("guidislink") and link == _text(entry.get("id")):
        return NO_LINK
    return link or NO_LINK


def resolve_guid(entry: Any, link: str, source_url: str, title: str, pub_date: str) -> str:
    guid = _text(entry.get("id")) or _text(entry.get("guid"))
    if guid:
        return guid
    if link and link != NO_LINK:
        return link
    return f"{source_url}-{title}-{pub_date}"


class FeedNormalizer:
    """Fetch feeds and normalize their entries into canonical items."""

    def __init__(
        self,
        timeout: float = 15.0,
        user_agent: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """Initialize feed normalizer."""
        self.timeout = timeout
        self.user_agent = user_agent
        self.transport = transport

    def normalize_entry(
        self,
        entry: Any,
        shape: FeedShape,
        source_url: str,
        source_name: str,
    ) -> CanonicalItem:
        """Map one parsed entry to a canonical item, substituting sentinels for gaps."""
        title = _text(entry.get("title")) or NO_TITLE
        description = _text(entry.get("description") or entry.get("summary")) or NO_DESCRIPTION
        pub_date = _text(entry.get("published") or entry.get("updated")) or NO_DATE
        link = resolve_link(entry, shape)

        return CanonicalItem(
            guid=resolve_guid(entry, link, source_url, title, pub_date),
            title=title,
            description=description,
            link=link,
            pub_date=pub_date,
            image_url=resolve_image_url(entry, description),
            source=source_url,
            source_name=source_name,
        )

    def parse_feed(
        self,
        content: Union[bytes, str],
        source_url: str,
        source_name: Optional[str] = None,
    ) -> FeedResult:
        """Parse one feed document into canonical items, in document order."""
        # feedparser treats str arguments as URLs or file paths when they look like one
        if isinstance(content, str):
            content = content.encode("utf-8")

        feed = feedparser.parse(content)
        entries = feed.get("entries") or []
        version = feed.get("version")

        if not entries and not version:
            msg = f"Invalid RSS/Atom feed: {source_url}"
            if feed.get("bozo_exception"):
                msg += f" ({feed.get('bozo_exception')})"
            raise FeedParseError(msg)
        if feed.get("bozo"):
            logger.warning(
                "Feed %s is malformed but usable: %s", source_url, feed.get("bozo_exception")
            )

        shape = FeedShape.from_version(version)
        name = resolve_source_name(source_url, feed.get("feed", {}).get("title"), source_name)
        items = [self.normalize_entry(entry, shape, source_url, name) for entry in entries]

        return FeedResult(
            source_url=source_url,
            source_name=name,
            shape=shape,
            success=True,
            items=items,
            item_count=len(items),
        )

    async def _download(self, url: str) -> bytes:
        headers = {"Accept": "application/rss+xml, application/atom+xml, application/xml, text/xml, */*"}
        if self.user_agent:
            headers["User-Agent"] = self.user_agent

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                follow_redirects=True,
                headers=headers,
                transport=self.transport,
            ) as client:
                response = await client.get(url)
                response.raise_for_status()
        except httpx.HTTPError as e:
            raise FeedFetchError(f"HTTP error: {e}") from e
        return response.content

    async def fetch_feed(self, source: Union[SourceConfig, str]) -> FeedResult:
        """Fetch and normalize a single feed. Failures yield an empty, unsuccessful result."""
        if isinstance(source, str):
            source = SourceConfig(url=source)
        fallback_name = resolve_source_name(source.url, None, source.name)

        try:
            content = await self._download(source.url)
            return self.parse_feed(content, source.url, source.name)

        except FeedFetchError as e:
            logger.error("Error fetching RSS feed from %s: %s", source.url, e)
            error = str(e)
        except FeedParseError as e:
            logger.error("Error parsing RSS feed from %s: %s", source.url, e)
            error = str(e)
        except Exception as e:
            logger.exception("Unexpected error processing RSS feed from %s", source.url)
            error = f"Unexpected error: {e}"

        return FeedResult(
            source_url=source.url,
            source_name=fallback_name,
            success=False,
            error=error,
        )

    async def fetch_all_feeds(self, sources: Sequence[Union[SourceConfig, str]]) -> List[FeedResult]:
        """Fetch all feeds concurrently; results follow source order."""
        if not sources:
            return []
        return list(await asyncio.gather(*(self.fetch_feed(s) for s in sources)))


def merge_items(results: Iterable[FeedResult]) -> List[CanonicalItem]:
    """Concatenate the items of every feed result, in result order."""
    items: List[CanonicalItem] = []
    for result in results:
        items.extend(result.items)
    return items
