"""
Error Taxonomy

Run-scoped errors stop the whole run before any document is processed.
Document-scoped errors (subclasses of DocumentError) abort one document only;
the run loop reports them and moves on to the next file.
"""

from typing import Optional


class SummarizerError(RuntimeError):
    """Base class for all errors raised by chief_summarizer."""


# =========================
# Run-scoped errors
# =========================

class ConfigError(SummarizerError):
    """Invalid configuration (config file, CLI options, root path)."""

    def __init__(self, message: str, exit_code: int = 1):
        super().__init__(message)
        self.exit_code = exit_code


class LockError(SummarizerError):
    """Another instance already holds the process lock."""


class ModelSelectionError(SummarizerError):
    """No usable model could be resolved."""


# =========================
# Oracle errors
# =========================

class OracleError(SummarizerError):
    """Base class for failures talking to the text-generation service."""


class ConnectivityError(OracleError):
    """Service unreachable, connection dropped or request timed out."""


class ProtocolError(OracleError):
    """Service answered with an error status or an unreadable payload."""


class EmptyResponseError(OracleError):
    """Service answered successfully but the generated text is blank."""


# =========================
# Document-scoped errors
# =========================

class DocumentError(SummarizerError):
    """Failure that aborts a single document."""


class EmptyDocumentError(DocumentError):
    def __init__(self, message: str = "file is empty"):
        super().__init__(message)


class DocumentReadError(DocumentError):
    pass


class ChunkSummarizationError(DocumentError):
    """Oracle call for one chunk failed. ``index`` is 1-based."""

    def __init__(self, index: int, cause: Optional[BaseException] = None):
        self.index = index
        self.cause = cause
        super().__init__(f"chunk {index} summarization failed: {cause}")


class MergeError(DocumentError):
    """Final merge call failed."""

    def __init__(self, cause: Optional[BaseException] = None):
        self.cause = cause
        super().__init__(f"final summary failed: {cause}")


class WriteError(DocumentError):
    pass
