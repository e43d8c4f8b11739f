"""
Runner Module

Everything around the summarization core for a command-line run:
- Document discovery and summary file I/O
- Single-instance process lock
- The sequential run loop and its status output
"""

from .runner import SummarizationRunner, RunReport, run_summarization
from .lock import ProcessLock, default_lock_path
from .files import (
    discover_documents,
    display_path,
    is_markdown,
    is_summary_file,
    matches_exclude,
    read_document,
    summary_path_for,
    write_summary,
)

__all__ = [
    "SummarizationRunner",
    "RunReport",
    "run_summarization",
    "ProcessLock",
    "default_lock_path",
    "discover_documents",
    "display_path",
    "is_markdown",
    "is_summary_file",
    "matches_exclude",
    "read_document",
    "summary_path_for",
    "write_summary",
]
