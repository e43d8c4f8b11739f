"""
Summarization Module

Hierarchical summarization of one document using a map-reduce approach:
- Splits the document into overlapping chunks
- Summarizes each chunk
- Merges the chunk summaries into a length-aware final summary
"""

from .summarizer import DocumentSummarizer, summarize_document
from .post_processor import PostProcessor, compile_strip_patterns
from .prompts import get_chunk_prompt, get_merge_prompt
from .schemas import (
    LengthCategory,
    ChunkSummary,
    DocumentSummary,
    classify_length,
)

__all__ = [
    # Summarizer
    "DocumentSummarizer",
    "summarize_document",
    # Post-processing
    "PostProcessor",
    "compile_strip_patterns",
    # Prompts
    "get_chunk_prompt",
    "get_merge_prompt",
    # Schemas
    "LengthCategory",
    "ChunkSummary",
    "DocumentSummary",
    "classify_length",
]
