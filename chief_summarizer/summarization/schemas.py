"""
Schemas for the summarization pipeline.
"""
from enum import Enum
from dataclasses import dataclass
from typing import Optional

from pydantic import BaseModel, Field

from .config import SUMMARIZATION_SHORT_MAX_CHARS, SUMMARIZATION_MEDIUM_MAX_CHARS


class LengthCategory(str, Enum):
    """Document length class; drives the structure of the merged summary."""
    SHORT = "SHORT"
    MEDIUM = "MEDIUM"
    LONG = "LONG"

    @classmethod
    def from_length(cls, char_count: int) -> "LengthCategory":
        if char_count < SUMMARIZATION_SHORT_MAX_CHARS:
            return cls.SHORT
        if char_count < SUMMARIZATION_MEDIUM_MAX_CHARS:
            return cls.MEDIUM
        return cls.LONG


def classify_length(text: str) -> LengthCategory:
    """Classify a (trimmed) document by its code-point count."""
    return LengthCategory.from_length(len(text))


@dataclass(frozen=True)
class ChunkSummary:
    """Post-processed oracle output for one chunk (0-based index)."""
    index: int
    text: str


class DocumentSummary(BaseModel):
    """Final summary of one document plus run metadata."""
    summary: str = Field(..., description="Merged, post-processed summary text")
    model: str = Field(..., description="Model used for every oracle call")
    total_chunks: int = Field(..., description="Number of chunks summarized")
    total_chars: int = Field(..., description="Code points in the trimmed document")
    length_category: LengthCategory = Field(..., description="SHORT, MEDIUM or LONG")
    elapsed_seconds: float = Field(0.0, description="Wall time for the whole document")
    source: Optional[str] = Field(None, description="Source path, if known")
