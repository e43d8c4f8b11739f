"""
Post-processing of oracle responses.

Reasoning models wrap their chain of thought in meta blocks such as
``<think>...</think>``. Which blocks get removed is configurable: each entry
is either the name of a built-in pattern or a raw regular expression.
"""

import re
import logging
from typing import Iterable, List, Optional, Pattern

from ..errors import ConfigError
from .config import SUMMARIZATION_BUILTIN_STRIP_PATTERNS, SUMMARIZATION_STRIP_PATTERNS

logger = logging.getLogger(__name__)

PATTERN_FLAGS = re.DOTALL | re.IGNORECASE | re.MULTILINE


def compile_strip_patterns(entries: Optional[Iterable[str]]) -> List[Pattern]:
    """
    Resolve built-in names and compile raw expressions.

    Raises:
        ConfigError: If an entry is neither a known name nor a valid regex
    """
    compiled = []
    for entry in entries or []:
        source = SUMMARIZATION_BUILTIN_STRIP_PATTERNS.get(entry, entry)
        try:
            compiled.append(re.compile(source, PATTERN_FLAGS))
        except re.error as e:
            raise ConfigError(f"invalid strip pattern {entry!r}: {e}", exit_code=2) from e
    return compiled


class PostProcessor:
    """
    Removes meta output from oracle responses and trims the result.

    Example:
        processor = PostProcessor.from_entries(["think", r"^Note:.*$"])
        clean = processor.clean(raw_response)
    """

    def __init__(self, patterns: Optional[List[Pattern]] = None):
        self.patterns = list(patterns) if patterns is not None else compile_strip_patterns(
            SUMMARIZATION_STRIP_PATTERNS
        )

    @classmethod
    def from_entries(cls, entries: Optional[Iterable[str]]) -> "PostProcessor":
        return cls(compile_strip_patterns(entries))

    def clean(self, text: str) -> str:
        cleaned = text
        for pattern in self.patterns:
            cleaned = pattern.sub("", cleaned)
        cleaned = cleaned.strip()
        if len(cleaned) != len(text.strip()):
            logger.debug(f"[POSTPROCESS] removed {len(text) - len(cleaned)} chars of meta output")
        return cleaned
