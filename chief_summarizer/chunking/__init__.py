"""
Chunking Module

Fixed-size character windows with overlap, ready for per-chunk summarization.
"""

from .schemas import Chunk, ChunkConfig
from .chunker import Chunker, chunk_text, normalize_chunk_params
from .config import (
    CHUNKING_DEFAULT_SIZE,
    CHUNKING_DEFAULT_OVERLAP,
    CHUNKING_FALLBACK_SIZE,
)

__all__ = [
    # Schemas
    "Chunk",
    "ChunkConfig",
    # Chunker
    "Chunker",
    "chunk_text",
    "normalize_chunk_params",
    # Config
    "CHUNKING_DEFAULT_SIZE",
    "CHUNKING_DEFAULT_OVERLAP",
    "CHUNKING_FALLBACK_SIZE",
]
