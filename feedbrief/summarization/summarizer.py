"""Frequency-based extractive summarizer with word-count bounds."""

import logging
import re
from collections import Counter
from typing import Dict, List, Optional, Tuple

from ..exceptions import SummarizationError
from .models import ScoredSentence

logger = logging.getLogger(__name__)

STOPWORDS = frozenset({
    "a", "an", "the", "and", "or", "but", "is", "are", "was", "were",
    "in", "on", "at", "to", "for", "with", "by", "about", "from", "of",
    "that", "this", "these", "those", "it", "its",
})

ELLIPSIS = "..."
ADDITIONAL_CONTEXT = "Additional context:"

SHORT_TEXT_CHARS = 100
MAX_UNSCORED_SENTENCES = 3

# Sentence = shortest run ending in terminal punctuation (plus closing quotes or
# brackets) that is followed by whitespace, or the remainder of the text.
_SENTENCE_RE = re.compile(
    r"\S.*?(?:[.!?…]+[\"'”’)\]]*(?=\s|$)|$)",
    re.DOTALL,
)
_TOKEN_SPLIT_RE = re.compile(r"\W+")


def collapse_whitespace(text: str) -> str:
    return " ".join(text.split())


def split_sentences(text: str) -> List[str]:
    """Split whitespace-collapsed text into sentences."""
    return [s.strip() for s in _SENTENCE_RE.findall(text) if s.strip()]


def tokenize(sentence: str) -> List[str]:
    """Lowercase word tokens longer than one character."""
    return [w for w in _TOKEN_SPLIT_RE.split(sentence.lower()) if len(w) > 1]


def pad_words(words: List[str], target: int) -> List[str]:
    """Repeat leading words until ``target`` words are reached."""
    padded = list(words)
    i = 0
    while words and len(padded) < target:
        padded.append(words[i % len(words)])
        i += 1
    return padded


def fit_words(text: str, min_words: int, max_words: int) -> str:
    """Return text unchanged when within bounds, otherwise pad or truncate it."""
    words = text.split()
    if not words:
        return text.strip()
    if min_words <= len(words) <= max_words:
        return " ".join(words)
    if len(words) < min_words:
        return " ".join(pad_words(words, min_words)[:max_words])
    return " ".join(words[:max_words]) + ELLIPSIS


def word_frequencies(sentences: List[str]) -> Dict[str, int]:
    """Global frequency of non-stopword tokens."""
    freq: Counter = Counter()
    for sentence in sentences:
        freq.update(w for w in tokenize(sentence) if w not in STOPWORDS)
    return freq


def rank_sentences(sentences: List[str]) -> List[ScoredSentence]:
    """
    Score sentences and order them by relevance.

    A sentence's score is the summed frequency of its non-stopword tokens
    divided by its token count (stopwords included). Ties keep document order.
    """
    freq = word_frequencies(sentences)
    scored = []
    for index, sentence in enumerate(sentences):
        tokens = tokenize(sentence)
        total = sum(freq[w] for w in tokens if w not in STOPWORDS)
        scored.append(ScoredSentence(
            index=index,
            text=sentence,
            score=total / len(tokens) if tokens else 0.0,
            word_count=len(sentence.split()),
        ))
    return sorted(scored, key=lambda s: (-s.score, s.index))


def _in_document_order(sentences: List[ScoredSentence]) -> List[ScoredSentence]:
    return sorted(sentences, key=lambda s: s.index)


class ExtractiveSummarizer:
    """Select and reorder existing sentences into a word-bounded summary."""

    def __init__(
        self,
        min_words: int = 55,
        max_words: int = 60,
        top_sentences: int = 5,
        extra_sentences: int = 5,
    ) -> None:
        """
        Initialize summarizer.

        Args:
            min_words: Lower word bound
            max_words: Upper word bound
            top_sentences: Number of best-scoring sentences selected
            extra_sentences: Next-ranked sentences used to fill short summaries
        """
        self._check_bounds(min_words, max_words)
        self.min_words = min_words
        self.max_words = max_words
        self.top_sentences = top_sentences
        self.extra_sentences = extra_sentences

    @staticmethod
    def _check_bounds(min_words: int, max_words: int) -> None:
        if min_words < 1 or min_words > max_words:
            raise ValueError(f"Invalid word bounds: min={min_words}, max={max_words}")

    def summarize(
        self,
        text: Optional[str],
        min_words: Optional[int] = None,
        max_words: Optional[int] = None,
    ) -> str:
        """
        Summarize text to roughly ``min_words``..``max_words`` words.

        Deterministic; internal failures degrade to plain padding/truncation
        instead of raising.
        """
        min_words = self.min_words if min_words is None else min_words
        max_words = self.max_words if max_words is None else max_words
        self._check_bounds(min_words, max_words)

        text = text or ""
        if len(text) < SHORT_TEXT_CHARS:
            words = text.split()
            if words and len(words) < min_words:
                return " ".join(pad_words(words, min_words))
            return text.strip()

        try:
            return self._summarize(collapse_whitespace(text), min_words, max_words)
        except SummarizationError as e:
            logger.error("Error summarizing text: %s", e)
        except Exception:
            logger.exception("Unexpected error summarizing text")
        return fit_words(text, min_words, max_words)

    def _summarize(self, text: str, min_words: int, max_words: int) -> str:
        sentences = split_sentences(text)
        if len(sentences) <= MAX_UNSCORED_SENTENCES:
            return fit_words(text, min_words, max_words)

        try:
            ranked = rank_sentences(sentences)
        except Exception as e:
            raise SummarizationError(f"Sentence scoring failed: {e}") from e
        top = _in_document_order(ranked[: self.top_sentences])

        summary = " ".join(s.text for s in top)
        word_count = len(summary.split())

        if word_count > max_words:
            summary, word_count = self._trim_to_budget(top, min_words, max_words)

        if word_count < min_words:
            summary, word_count = self._fill_shortfall(summary, word_count, ranked, min_words, max_words)

        return summary.strip()

    @staticmethod
    def _trim_to_budget(
        top: List[ScoredSentence], min_words: int, max_words: int
    ) -> Tuple[str, int]:
        parts: List[str] = []
        current = 0
        for sentence in top:
            if current + sentence.word_count <= max_words:
                parts.append(sentence.text)
                current += sentence.word_count
                continue
            if not parts or current < min_words:
                needed = min(max_words - current, sentence.word_count)
                parts.append(" ".join(sentence.text.split()[:needed]) + ELLIPSIS)
                current += needed
            break
        return " ".join(parts), current

    def _fill_shortfall(
        self,
        summary: str,
        word_count: int,
        ranked: List[ScoredSentence],
        min_words: int,
        max_words: int,
    ) -> Tuple[str, int]:
        start = self.top_sentences
        extra = _in_document_order(ranked[start : start + self.extra_sentences])
        for sentence in extra:
            if word_count + sentence.word_count <= max_words:
                summary += " " + sentence.text
                word_count += sentence.word_count
                if word_count >= min_words:
                    break

        if word_count < min_words:
            # the label itself counts two words towards the shortfall
            label_words = len(ADDITIONAL_CONTEXT.split())
            wanted = max(min_words - word_count - label_words, 1)
            lead = ranked[0].text.split()[:wanted]
            summary += f" {ADDITIONAL_CONTEXT} " + " ".join(lead).rstrip(".!?…") + "."
            word_count += label_words + len(lead)

        return summary, word_count
