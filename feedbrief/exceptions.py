"""Error taxonomy for feedbrief."""


class FeedbriefError(Exception):
    """Base class for all feedbrief errors."""


class ConfigError(FeedbriefError):
    """Raised when the configuration file is unreadable or invalid."""


class FeedFetchError(FeedbriefError):
    """Raised when a feed document cannot be downloaded."""


class FeedParseError(FeedbriefError):
    """Raised when a downloaded document is not a usable RSS/Atom feed."""


class ExtractionError(FeedbriefError):
    """Raised when no tier of the content extraction cascade yields text."""


class SummarizationError(FeedbriefError):
    """Raised when sentence scoring fails internally."""


class ItemNotFoundError(FeedbriefError):
    """Raised when no feed item carries the requested identifier."""

    def __init__(self, guid: str) -> None:
        super().__init__(f"Item not found: {guid}")
        self.guid = guid


class PipelineError(FeedbriefError):
    """Raised when merging, sorting or orchestration itself fails."""
