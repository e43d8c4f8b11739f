"""
Schemas for Chunking Module

Overlapping character windows over a single document.
"""

from dataclasses import dataclass

from .config import (
    CHUNKING_DEFAULT_SIZE,
    CHUNKING_DEFAULT_OVERLAP,
)


@dataclass(frozen=True)
class Chunk:
    """
    A contiguous slice of a document.

    ``start`` and ``end`` are code-point offsets into the parent text
    (half-open, ``text == parent[start:end]``).
    """
    index: int
    start: int
    end: int
    text: str

    @property
    def length(self) -> int:
        return self.end - self.start


@dataclass
class ChunkConfig:
    """Window size and overlap, in code points."""
    chunk_size: int = CHUNKING_DEFAULT_SIZE
    chunk_overlap: int = CHUNKING_DEFAULT_OVERLAP
