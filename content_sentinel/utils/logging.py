"""Structured logging utilities using structlog for request context and tracing."""

import os
import sys
import uuid
from typing import Any, Optional

import structlog
from structlog.contextvars import merge_contextvars
from structlog.processors import JSONRenderer

IS_TTY = sys.stderr.isatty()
LOG_FORMAT = os.getenv("LOG_FORMAT", "json").lower()
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


def configure_structured_logging() -> None:
    """
    Configure structured logging with appropriate processors and renderers.

    Uses:
    - Console renderer for development (colorized, human-readable)
    - JSON renderer for production (structured, machine-readable)
    - Context binding for request_id and provider names
    """
    processors = [
        merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if IS_TTY and LOG_FORMAT == "console":
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=True,
                exception_formatter=structlog.dev.plain_traceback,
            )
        )
    else:
        processors.append(JSONRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(LOG_LEVEL),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def get_structured_logger(
    name: str,
    request_id: Optional[str] = None,
    **additional_context: Any,
) -> structlog.BoundLogger:
    """
    Get a structured logger with bound context.

    Args:
        name: Logger name (typically component name)
        request_id: Optional request correlation ID to bind
        **additional_context: Additional context to bind

    Returns:
        Configured BoundLogger instance with context

    Example:
        >>> logger = get_structured_logger("ConsensusAnalyzer", request_id="abc-123")
        >>> logger.info("provider_failed", provider="gemini", reason="timeout")
    """
    logger = structlog.get_logger(name).bind(component=name)

    if request_id:
        logger = logger.bind(request_id=request_id)

    if additional_context:
        logger = logger.bind(**additional_context)

    return logger


def get_correlation_id() -> str:
    """
    Generate a correlation ID for tracing one analysis request.

    Returns:
        UUID string for correlation
    """
    return str(uuid.uuid4())


# Configure on module import
configure_structured_logging()


__all__ = [
    "configure_structured_logging",
    "get_correlation_id",
    "get_structured_logger",
]
