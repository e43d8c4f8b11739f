"""
Summarization Configuration

Module-specific settings for per-chunk summaries and the final merge.
"""
import os

# =========================
# Length Categories
# =========================

# Code-point thresholds; fixed so the category is a pure function of length
SUMMARIZATION_SHORT_MAX_CHARS = 8000
SUMMARIZATION_MEDIUM_MAX_CHARS = 25000

# =========================
# Chunk Summary Settings
# =========================

SUMMARIZATION_CHUNK_MAX_WORDS = int(os.getenv("SUMMARIZATION_CHUNK_MAX_WORDS", "120"))

# =========================
# Concurrency
# =========================

# In-flight chunk calls per document; 1 keeps calls strictly sequential
SUMMARIZATION_CHUNK_CONCURRENCY = int(os.getenv("SUMMARIZATION_CHUNK_CONCURRENCY", "1"))

# =========================
# Post-processing
# =========================

# Named patterns removed from every oracle response (regex, DOTALL | IGNORECASE | MULTILINE)
SUMMARIZATION_BUILTIN_STRIP_PATTERNS = {
    "think": r"<think>.*?</think>\s*",
    "reasoning": r"<reasoning>.*?</reasoning>\s*",
    "thinking_section": r"^#{1,6}\s*thinking\b.*?(?=^#{1,6}\s|\Z)",
}

SUMMARIZATION_STRIP_PATTERNS = [
    name.strip()
    for name in os.getenv("SUMMARIZATION_STRIP_PATTERNS", "think").split(",")
    if name.strip()
]
