"""Extractive summarization."""

from .models import ScoredSentence
from .summarizer import (
    ExtractiveSummarizer,
    fit_words,
    rank_sentences,
    split_sentences,
)

__all__ = [
    "ExtractiveSummarizer",
    "ScoredSentence",
    "fit_words",
    "rank_sentences",
    "split_sentences",
]
