"""Configuration models."""

import logging
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)


class FrozenModel(BaseModel):
    """Base for immutable configuration values."""

    model_config = ConfigDict(frozen=True)


class SourceConfig(FrozenModel):
    """A single feed source."""

    url: str = Field(..., description="RSS/Atom feed URL")
    name: Optional[str] = Field(None, description="Display name override")
    enabled: bool = Field(True, description="Whether source is enabled")

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Require an absolute http(s) URL."""
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"Feed URL must start with http:// or https://, got {v!r}")
        return v


class PipelineConfig(FrozenModel):
    """Batch scheduling parameters."""

    batch_size: int = Field(3, description="Items processed concurrently per batch", ge=1, le=50)
    batch_delay_ms: int = Field(2000, description="Pause between consecutive batches", ge=0)


class ExtractionConfig(FrozenModel):
    """Article fetch parameters."""

    timeout_ms: int = Field(15000, description="Article fetch timeout", ge=1)
    user_agent: str = Field(DEFAULT_USER_AGENT, description="User agent sent to article hosts")


class FeedsConfig(FrozenModel):
    """Feed fetch parameters."""

    timeout_ms: int = Field(15000, description="Feed fetch timeout", ge=1)


class SummarizerConfig(FrozenModel):
    """Extractive summarizer bounds."""

    min_words: int = Field(55, description="Lower word bound", ge=1)
    max_words: int = Field(60, description="Upper word bound", ge=1)
    top_sentences: int = Field(5, description="Sentences selected by score", ge=1)
    extra_sentences: int = Field(5, description="Next-ranked sentences used to fill short summaries", ge=0)

    @model_validator(mode="after")
    def validate_bounds(self) -> "SummarizerConfig":
        """Validate that min_words <= max_words."""
        if self.min_words > self.max_words:
            raise ValueError(
                f"min_words ({self.min_words}) must not exceed max_words ({self.max_words})"
            )
        return self


class ServerConfig(FrozenModel):
    """HTTP service binding."""

    host: str = Field("127.0.0.1", description="Bind address")
    port: int = Field(3000, description="Bind port", ge=1, le=65535)


def default_sources() -> List[SourceConfig]:
    """Sources used when no configuration file exists."""
    return [
        SourceConfig(url="https://rss.nytimes.com/services/xml/rss/nyt/World.xml"),
        SourceConfig(url="https://feeds.bbci.co.uk/news/rss.xml"),
        SourceConfig(url="https://moxie.foxnews.com/google-publisher/latest.xml"),
    ]


class ConfigModel(FrozenModel):
    """Main configuration model."""

    sources: List[SourceConfig] = Field(default_factory=default_sources)
    pipeline: PipelineConfig = Field(default_factory=PipelineConfig)
    extraction: ExtractionConfig = Field(default_factory=ExtractionConfig)
    feeds: FeedsConfig = Field(default_factory=FeedsConfig)
    summarizer: SummarizerConfig = Field(default_factory=SummarizerConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    log_level: str = Field("INFO", description="Root log level")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Require a standard logging level name."""
        v = v.strip().upper()
        if not isinstance(logging.getLevelName(v), int):
            raise ValueError(f"Unknown log level: {v!r}")
        return v

    @property
    def enabled_sources(self) -> List[SourceConfig]:
        return [s for s in self.sources if s.enabled]

    @property
    def source_urls(self) -> List[str]:
        return [s.url for s in self.enabled_sources]
