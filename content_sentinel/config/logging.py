"""Production-grade logging configuration using loguru with automatic dev/prod detection."""

import sys

from loguru import logger

from content_sentinel.config.settings import settings


def configure_logging(level: str | None = None, log_format: str | None = None) -> None:
    """
    Configure loguru based on environment settings.

    Behavior:
    - Development (TTY + console format): Colorized, human-readable output
    - Production (non-TTY or json format): JSON-structured logs to stdout
    - Respects LOG_LEVEL from settings unless overridden

    Args:
        level: Optional level override (e.g. from a CLI --verbose flag)
        log_format: Optional format override ("json" or "console")
    """
    level = (level or settings.log_level).upper()
    log_format = (log_format or settings.log_format).lower()

    # Remove default handler
    logger.remove()
    logger.configure(extra={"component": "content_sentinel"})

    is_tty = sys.stderr.isatty()

    if is_tty and log_format == "console":
        logger.add(
            sys.stderr,
            format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{extra[component]}</cyan> | <level>{message}</level>",
            level=level,
            colorize=True,
        )
    else:
        logger.add(
            sys.stdout,
            format="{message}",
            level=level,
            serialize=True,  # Output as JSON
            diagnose=False,  # Disable variable inspection for security
        )


def get_logger(component: str):
    """
    Get a logger instance bound to a specific component name.

    Args:
        component: Component/module name for log context

    Returns:
        Logger instance with component context

    Example:
        >>> log = get_logger("sifters.lexical")
        >>> log.info("Classifying submission")
    """
    return logger.bind(component=component)


# Configure logging on module import
configure_logging()

__all__ = ["logger", "get_logger", "configure_logging"]
