"""feedbrief - fetch news feeds and summarize every article."""

__version__ = "0.1.0"
