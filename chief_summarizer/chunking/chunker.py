"""
Chunker

Splits a document into overlapping fixed-size windows so each window fits
the oracle's context budget.

Guarantees for non-empty input:
- at least one chunk
- strictly increasing start offsets
- chunks cover the whole text
- every chunk is at most ``size`` code points
- consecutive chunks share exactly ``overlap`` code points, except that the
  last chunk simply ends at the end of the text
"""

import logging
from typing import List, Optional, Tuple

from .schemas import Chunk, ChunkConfig
from .config import CHUNKING_FALLBACK_SIZE, CHUNKING_OVERLAP_DIVISOR

logger = logging.getLogger(__name__)


def normalize_chunk_params(size: int, overlap: int) -> Tuple[int, int]:
    """
    Clamp size/overlap into a combination that always makes progress.

    - size <= 0 falls back to CHUNKING_FALLBACK_SIZE
    - negative overlap becomes 0
    - overlap >= size becomes size // 4
    """
    if size <= 0:
        size = CHUNKING_FALLBACK_SIZE
    if overlap < 0:
        overlap = 0
    if overlap >= size:
        overlap = size // CHUNKING_OVERLAP_DIVISOR
    return size, overlap


def chunk_text(text: str, size: int, overlap: int) -> List[Chunk]:
    """
    Split text into overlapping windows.

    Args:
        text: Document text (already trimmed by the caller)
        size: Maximum chunk length in code points
        overlap: Code points repeated between consecutive chunks

    Returns:
        Chunks in document order; empty for empty text
    """
    size, overlap = normalize_chunk_params(size, overlap)
    length = len(text)

    chunks: List[Chunk] = []
    start = 0
    while start < length:
        end = min(start + size, length)
        chunks.append(Chunk(index=len(chunks), start=start, end=end, text=text[start:end]))
        if end == length:
            break
        start = max(end - overlap, 0)

    return chunks


class Chunker:
    """Chunker bound to a ChunkConfig."""

    def __init__(self, config: Optional[ChunkConfig] = None):
        self.config = config or ChunkConfig()
        size, overlap = normalize_chunk_params(
            self.config.chunk_size, self.config.chunk_overlap
        )
        if (size, overlap) != (self.config.chunk_size, self.config.chunk_overlap):
            logger.debug(
                f"[CHUNKER] Adjusted parameters | requested={self.config.chunk_size}/"
                f"{self.config.chunk_overlap} | effective={size}/{overlap}"
            )
        self.size = size
        self.overlap = overlap

    def chunk(self, text: str) -> List[Chunk]:
        chunks = chunk_text(text, self.size, self.overlap)
        logger.debug(
            f"[CHUNKER] chars={len(text)} | size={self.size} | overlap={self.overlap} | "
            f"chunks={len(chunks)}"
        )
        return chunks
