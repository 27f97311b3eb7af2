"""Summarization models."""

from pydantic import BaseModel, Field


class ScoredSentence(BaseModel):
    """Sentence with its frequency score."""

    index: int = Field(..., description="Position in the source text", ge=0)
    text: str = Field(..., description="Sentence text")
    score: float = Field(0.0, description="Length-normalized frequency score", ge=0.0)
    word_count: int = Field(0, description="Whitespace-delimited word count", ge=0)
