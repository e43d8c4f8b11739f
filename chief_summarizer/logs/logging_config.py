"""
Logging setup for the summarizer.

- Console handler on stderr (WARNING by default, DEBUG when verbose)
- Optional rotating file handlers when LOG_OUTPUT_DIR is set
- Per-document request ids carried in a ContextVar and injected into
  every record by RequestIdFilter
- Helpers for logging oracle requests, responses and context usage
"""
import logging
import uuid
from contextvars import ContextVar
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Dict, Any

from ..config import (
    estimate_tokens,
    get_model_context_length,
    CONTEXT_WARNING_THRESHOLD,
    CONTEXT_ERROR_THRESHOLD,
)
from .config import (
    LOG_OUTPUT_DIR,
    LOG_MAX_BYTES,
    LOG_BACKUP_COUNT,
    LOG_PREVIEW_LENGTH,
    LOG_DATE_FORMAT,
    LOG_DETAILED_FORMAT,
    LOG_CONSOLE_FORMAT,
    LOG_FILE_MAIN,
    LOG_FILE_ERRORS,
)

ROOT_LOGGER_NAME = "chief_summarizer"
LLM_LOGGER_NAME = "chief_summarizer.llm"

_request_id: ContextVar[str] = ContextVar("request_id", default="-")


# =========================
# Request context
# =========================

def generate_request_id() -> str:
    return uuid.uuid4().hex[:12]


def get_request_id() -> str:
    return _request_id.get()


class RequestContext:
    """
    Scope a request id to a block of work (one document).

    Example:
        with RequestContext() as request_id:
            await summarizer.summarize(text)
    """

    def __init__(self, request_id: Optional[str] = None):
        self.request_id = request_id or generate_request_id()
        self._token = None

    def __enter__(self) -> str:
        self._token = _request_id.set(self.request_id)
        return self.request_id

    def __exit__(self, exc_type, exc, tb):
        _request_id.reset(self._token)
        return False


class RequestIdFilter(logging.Filter):
    """Attach the current request id to each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = _request_id.get()
        return True


# =========================
# Setup
# =========================

def setup_logging(verbose: bool = False, log_dir: Optional[str] = None) -> logging.Logger:
    """
    Configure the package logger. Safe to call more than once.

    Args:
        verbose: Emit DEBUG records on the console
        log_dir: Directory for rotating log files (defaults to LOG_OUTPUT_DIR)

    Returns:
        The package root logger
    """
    directory = log_dir if log_dir is not None else LOG_OUTPUT_DIR

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    # DEBUG records are only produced when something consumes them
    logger.setLevel(logging.DEBUG if verbose or directory else logging.WARNING)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    request_filter = RequestIdFilter()

    console = logging.StreamHandler()
    console.setLevel(logging.DEBUG if verbose else logging.WARNING)
    console.setFormatter(logging.Formatter(LOG_CONSOLE_FORMAT))
    console.addFilter(request_filter)
    logger.addHandler(console)

    if directory:
        path = Path(directory)
        path.mkdir(parents=True, exist_ok=True)
        formatter = logging.Formatter(LOG_DETAILED_FORMAT, datefmt=LOG_DATE_FORMAT)

        main_handler = RotatingFileHandler(
            path / LOG_FILE_MAIN,
            maxBytes=LOG_MAX_BYTES,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8"
        )
        main_handler.setLevel(logging.DEBUG)
        main_handler.setFormatter(formatter)
        main_handler.addFilter(request_filter)
        logger.addHandler(main_handler)

        error_handler = RotatingFileHandler(
            path / LOG_FILE_ERRORS,
            maxBytes=LOG_MAX_BYTES,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8"
        )
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(formatter)
        error_handler.addFilter(request_filter)
        logger.addHandler(error_handler)

    return logger


def get_llm_logger() -> logging.Logger:
    return logging.getLogger(LLM_LOGGER_NAME)


# =========================
# LLM call logging
# =========================

def _preview(text: str) -> str:
    text = text.replace("\n", " ")
    if len(text) <= LOG_PREVIEW_LENGTH:
        return text
    return text[:LOG_PREVIEW_LENGTH] + "..."


def log_llm_request(model: str, task: str, prompt: str) -> None:
    get_llm_logger().debug(
        f"[LLM_REQUEST] task={task} | model={model} | prompt_chars={len(prompt)} | "
        f"preview={_preview(prompt)}"
    )


def log_llm_response(
    model: str,
    task: str,
    response: str,
    latency_ms: float,
    status: str = "success",
    error_message: Optional[str] = None
) -> None:
    logger = get_llm_logger()
    if status == "success":
        logger.debug(
            f"[LLM_RESPONSE] task={task} | model={model} | latency_ms={latency_ms:.0f} | "
            f"response_chars={len(response)} | preview={_preview(response)}"
        )
    else:
        logger.error(
            f"[LLM_RESPONSE] task={task} | model={model} | latency_ms={latency_ms:.0f} | "
            f"status={status} | error={error_message}"
        )


def log_context_usage(model: str, prompt: str) -> Optional[Dict[str, Any]]:
    """
    Log how much of the model's context window a prompt uses.

    Token estimation is skipped unless DEBUG is enabled, since loading the
    tokenizer can be slow on first use.

    Returns:
        Dict with 'estimated_tokens', 'context_limit' and 'usage_percent',
        or None when skipped
    """
    logger = get_llm_logger()
    if not logger.isEnabledFor(logging.DEBUG):
        return None

    context_limit = get_model_context_length(model)
    estimated = estimate_tokens(prompt)
    usage = (estimated / context_limit) * 100 if context_limit else 0.0
    stats = {
        "estimated_tokens": estimated,
        "context_limit": context_limit,
        "usage_percent": round(usage, 2),
    }

    message = (
        f"[CONTEXT] model={model} | tokens={estimated} | limit={context_limit} | "
        f"usage={usage:.1f}%"
    )
    if usage >= CONTEXT_ERROR_THRESHOLD:
        logger.error(message + " | prompt may be truncated")
    elif usage >= CONTEXT_WARNING_THRESHOLD:
        logger.warning(message)
    else:
        logger.debug(message)
    return stats
