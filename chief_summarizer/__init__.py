"""
Chief Summarizer (Async)

Provides:
- Overlapping fixed-size chunking of Markdown documents
- Map-reduce summarization through a local Ollama server
- Model selection with preferred-model fallback and closest-match lookup
- A command-line run over a directory tree with *_summary.md output
"""

__version__ = "1.0.0"

from .errors import (
    SummarizerError,
    ConfigError,
    LockError,
    ModelSelectionError,
    OracleError,
    ConnectivityError,
    ProtocolError,
    EmptyResponseError,
    DocumentError,
    EmptyDocumentError,
    DocumentReadError,
    ChunkSummarizationError,
    MergeError,
    WriteError,
)
from .chunking import Chunk, ChunkConfig, Chunker, chunk_text
from .core import OllamaClient, LLMConfig
from .selection import ModelSelection, select_model, resolve_model
from .summarization import (
    DocumentSummarizer,
    DocumentSummary,
    LengthCategory,
    PostProcessor,
    summarize_document,
    get_chunk_prompt,
    get_merge_prompt,
)

__all__ = [
    "__version__",
    # Errors
    "SummarizerError",
    "ConfigError",
    "LockError",
    "ModelSelectionError",
    "OracleError",
    "ConnectivityError",
    "ProtocolError",
    "EmptyResponseError",
    "DocumentError",
    "EmptyDocumentError",
    "DocumentReadError",
    "ChunkSummarizationError",
    "MergeError",
    "WriteError",
    # Chunking
    "Chunk",
    "ChunkConfig",
    "Chunker",
    "chunk_text",
    # Oracle client
    "OllamaClient",
    "LLMConfig",
    # Model selection
    "ModelSelection",
    "select_model",
    "resolve_model",
    # Summarization
    "DocumentSummarizer",
    "DocumentSummary",
    "LengthCategory",
    "PostProcessor",
    "summarize_document",
    "get_chunk_prompt",
    "get_merge_prompt",
]
