"""
Chunking Configuration

Module-specific settings for text chunking.
Sizes are measured in Unicode code points.
"""
import os

from ..config import DEFAULT_CHUNK_SIZE, DEFAULT_CHUNK_OVERLAP

# =========================
# Chunking Settings
# =========================

CHUNKING_DEFAULT_SIZE = int(os.getenv("CHUNKING_DEFAULT_SIZE", str(DEFAULT_CHUNK_SIZE)))
CHUNKING_DEFAULT_OVERLAP = int(os.getenv("CHUNKING_DEFAULT_OVERLAP", str(DEFAULT_CHUNK_OVERLAP)))

# Used when a non-positive chunk size is requested
CHUNKING_FALLBACK_SIZE = 1000

# When overlap >= size, overlap becomes size // CHUNKING_OVERLAP_DIVISOR
CHUNKING_OVERLAP_DIVISOR = 4
