"""Pipeline output models."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..ingestion.models import CanonicalItem


class ProcessedItem(BaseModel):
    """Feed item with its summarized content, as returned to clients."""

    model_config = ConfigDict(populate_by_name=True)

    guid: str = Field(..., description="Item identifier")
    title: str = Field(..., description="Item title")
    description: str = Field(..., description="Feed-supplied description")
    summarized_content: str = Field(..., description="Extractive summary")
    image_url: Optional[str] = Field(None, alias="imageUrl", description="Lead image URL")
    source_name: str = Field(..., alias="sourceName", description="Feed display name")
    pub_date: str = Field(..., alias="pubDate", description="Source-native date string")

    @classmethod
    def from_item(cls, item: CanonicalItem, summary: str) -> "ProcessedItem":
        return cls(
            guid=item.guid,
            title=item.title,
            description=item.description,
            summarized_content=summary,
            image_url=item.image_url,
            source_name=item.source_name,
            pub_date=item.pub_date,
        )


class FeedDigest(BaseModel):
    """Result of processing every configured source."""

    model_config = ConfigDict(populate_by_name=True)

    sources: List[str] = Field(default_factory=list, description="Configured feed URLs")
    last_updated: str = Field(..., alias="lastUpdated", description="ISO-8601 completion time")
    items: List[ProcessedItem] = Field(default_factory=list, description="Processed items")
