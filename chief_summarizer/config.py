"""
Global Configuration

Shared settings used across all modules.
Module-specific settings are in each module's config.py file.

All settings can be overridden via environment variables or a .env file.
Values from the YAML config file and the command line are layered on top
of these defaults by chief_summarizer.settings.
"""
import os
import re
from pathlib import Path
from functools import lru_cache

import tiktoken
from dotenv import load_dotenv

# Load .env file before any os.getenv() calls
load_dotenv()

# =========================
# Ollama Configuration
# =========================

OLLAMA_URL = os.getenv("OLLAMA_URL", "http://localhost:11434")

# Ordered priority list used when no model is pinned explicitly
DEFAULT_PREFERRED_MODELS = [
    m.strip()
    for m in os.getenv("PREFERRED_MODELS", "qwen3:14b,deepseek-r1:14b,llama3").split(",")
    if m.strip()
]

# Optional sampling temperature; unset means the server default
_temperature = os.getenv("OLLAMA_TEMPERATURE")
OLLAMA_TEMPERATURE = float(_temperature) if _temperature else None

# =========================
# Processing Defaults
# =========================

DEFAULT_CHUNK_SIZE = int(os.getenv("DEFAULT_CHUNK_SIZE", "4000"))
DEFAULT_CHUNK_OVERLAP = int(os.getenv("DEFAULT_CHUNK_OVERLAP", "400"))
DEFAULT_REQUEST_TIMEOUT = 10 * 60  # seconds

SUMMARY_SUFFIX = "_summary"
MARKDOWN_EXTENSION = ".md"

# =========================
# Config File
# =========================

CONFIG_FILE_PATH = os.getenv(
    "CHIEF_CONFIG_PATH",
    str(Path.home() / ".config" / "chiefsummarizer.yaml")
)

LOCK_FILE_NAME = "chief-summarizer.lock"

# =========================
# Model Context Lengths
# =========================

MODEL_CONTEXT_LENGTHS = {
    "qwen3:14b": 40960,
    "deepseek-r1:14b": 131072,
    "llama3": 8192,
}

DEFAULT_CONTEXT_LENGTH = 8192  # Fallback for unknown models

# Context usage warning thresholds (percentage)
CONTEXT_WARNING_THRESHOLD = 80
CONTEXT_ERROR_THRESHOLD = 95

TIKTOKEN_ENCODING = os.getenv("TIKTOKEN_ENCODING", "cl100k_base")


# =========================
# Utility Functions
# =========================

@lru_cache(maxsize=32)
def get_model_context_length(model: str) -> int:
    """Get context length for a model (cached)."""
    return MODEL_CONTEXT_LENGTHS.get(model, DEFAULT_CONTEXT_LENGTH)


@lru_cache(maxsize=1)
def _get_encoder():
    # Airgapped hosts cannot download the BPE file; set TIKTOKEN_CACHE_DIR
    # to a directory holding the cached encoding, or fall back to char counts.
    try:
        return tiktoken.get_encoding(TIKTOKEN_ENCODING)
    except Exception:
        return None


def estimate_tokens(text: str) -> int:
    """
    Estimate token count using tiktoken, otherwise fallback to char-based estimation.

    Fallback uses ~4 chars per token approximation.
    """
    encoder = _get_encoder()
    if encoder is not None:
        return len(encoder.encode(text))
    return len(text) // 4


_DURATION_PART = re.compile(r"(\d+(?:\.\d+)?)(ns|us|µs|ms|s|m|h)")
_DURATION_UNITS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}


def parse_duration(value: str) -> float:
    """
    Parse a duration string into seconds.

    Accepts unit-suffixed values such as "600s", "10m", "1h30m", "1.5h" or
    "250ms", and bare numbers which are taken as seconds.

    Raises:
        ValueError: If the string is not a valid duration
    """
    text = value.strip()
    if not text:
        raise ValueError("empty duration")

    try:
        return float(text)
    except ValueError:
        pass

    pos = 0
    total = 0.0
    for match in _DURATION_PART.finditer(text):
        if match.start() != pos:
            break
        total += float(match.group(1)) * _DURATION_UNITS[match.group(2)]
        pos = match.end()

    if pos == 0 or pos != len(text):
        raise ValueError(f"invalid duration {value!r}")
    return total
