"""
Logs Module

Provides:
- Logging configuration for the run and for oracle calls
- Request/Response logging with latency
- Per-document request id tracking
"""

from .logging_config import (
    setup_logging,
    get_llm_logger,
    log_llm_request,
    log_llm_response,
    log_context_usage,
    RequestContext,
    RequestIdFilter,
    get_request_id,
    generate_request_id,
)

__all__ = [
    "setup_logging",
    "get_llm_logger",
    "log_llm_request",
    "log_llm_response",
    "log_context_usage",
    "RequestContext",
    "RequestIdFilter",
    "get_request_id",
    "generate_request_id",
]
