"""
Core Module

Shared infrastructure components for all modules:
- Oracle (Ollama) client
- Validators
"""

from .llm_client_base import OllamaClient, OracleClient, LLMConfig
from .validators import (
    validate_document_text,
    validate_exclude_patterns,
    validate_positive,
)

__all__ = [
    "OllamaClient",
    "OracleClient",
    "LLMConfig",
    "validate_document_text",
    "validate_exclude_patterns",
    "validate_positive",
]
