"""
Core Validators

Shared validation functions for all modules.
"""

import re
from typing import List, Optional, Pattern

from ..errors import ConfigError, EmptyDocumentError


def validate_document_text(text: Optional[str]) -> str:
    """
    Trim a document and make sure something is left.

    Args:
        text: Raw document text

    Returns:
        The trimmed text

    Raises:
        EmptyDocumentError: If the text is empty or whitespace only
    """
    trimmed = (text or "").strip()
    if not trimmed:
        raise EmptyDocumentError()
    return trimmed


def validate_exclude_patterns(patterns: Optional[List[str]]) -> List[Pattern]:
    """
    Compile exclude regular expressions.

    Raises:
        ConfigError: If any pattern is not a valid regular expression (exit code 2)
    """
    compiled = []
    for pattern in patterns or []:
        try:
            compiled.append(re.compile(pattern))
        except re.error as e:
            raise ConfigError(f"invalid --exclude pattern {pattern!r}: {e}", exit_code=2) from e
    return compiled


def validate_positive(value: int, field_name: str, module_name: str = "Settings") -> None:
    """
    Validate that a numeric option is strictly positive.

    Raises:
        ConfigError: If value is zero or negative (exit code 2)
    """
    if value <= 0:
        raise ConfigError(
            f"{module_name}: {field_name} must be greater than zero (got {value}).",
            exit_code=2
        )
