"""Data models for ingestion."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

NO_TITLE = "No Title"
NO_DESCRIPTION = "No Description"
NO_DATE = "No Date"
NO_LINK = "#"


class FeedShape(str, Enum):
    """Feed dialect detected at parse time."""

    RSS = "rss"
    ATOM = "atom"
    UNKNOWN = "unknown"

    @classmethod
    def from_version(cls, version: Optional[str]) -> "FeedShape":
        """Map a feedparser version string (``rss20``, ``atom10`` ...) to a shape."""
        version = (version or "").lower()
        if version.startswith("rss"):
            return cls.RSS
        if version.startswith("atom"):
            return cls.ATOM
        return cls.UNKNOWN


class CanonicalItem(BaseModel):
    """Feed entry normalized into one shape regardless of dialect."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    guid: str = Field(..., description="Identifier unique within its source")
    title: str = Field(NO_TITLE, description="Entry title")
    description: str = Field(NO_DESCRIPTION, description="Feed-supplied summary/teaser")
    link: str = Field(NO_LINK, description="Article URL, '#' when unresolvable")
    pub_date: str = Field(NO_DATE, alias="pubDate", description="Source-native date string")
    image_url: Optional[str] = Field(None, alias="imageUrl", description="Lead image URL")
    source: str = Field(..., description="Feed URL")
    source_name: str = Field(..., alias="sourceName", description="Display name of the feed")

    @property
    def has_link(self) -> bool:
        return bool(self.link) and self.link != NO_LINK


class FeedResult(BaseModel):
    """Result of fetching one feed."""

    source_url: str = Field(..., description="RSS/Atom feed URL")
    source_name: str = Field(..., description="Source name")
    shape: FeedShape = Field(FeedShape.UNKNOWN, description="Detected feed dialect")
    success: bool = Field(..., description="Whether fetch and parse succeeded")
    items: List[CanonicalItem] = Field(default_factory=list, description="Normalized entries")
    error: Optional[str] = Field(None, description="Error message if failed")
    item_count: int = Field(0, description="Number of items parsed")


class ExtractionStatus(str, Enum):
    """Outcome of the content extraction cascade."""

    OK = "ok"
    INSUFFICIENT = "insufficient"
    ERROR = "error"


class ExtractedContent(BaseModel):
    """Extracted article text, or a human-readable failure sentinel."""

    url: str = Field(..., description="Article URL")
    text: str = Field(..., description="Article text or failure sentinel")
    status: ExtractionStatus = Field(ExtractionStatus.OK, description="Cascade outcome")
    error: Optional[str] = Field(None, description="Error message if failed")

    @property
    def ok(self) -> bool:
        return self.status is ExtractionStatus.OK
