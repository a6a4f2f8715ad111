"""Structured logging utilities with alarm context management."""

import contextvars
import sys
from typing import Any

from loguru import logger

from alarmeval.config import LoggingConfig

# Context variables for the alarm currently being evaluated
alarm_context: contextvars.ContextVar[dict[str, Any]] = contextvars.ContextVar(
    "alarm_context", default={}
)


class LoggingContext:
    """
    Context manager for structured logging with automatic context injection.

    Example:
        with LoggingContext(tenant_id="t1", alarm_id="a1"):
            logger.info("Evaluating alarm")  # Will include tenant_id and alarm_id
    """

    def __init__(self, **context_data):
        self.context_data = context_data
        self.token = None

    def __enter__(self):
        current = get_logging_context()
        current.update(self.context_data)
        self.token = alarm_context.set(current)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.token:
            alarm_context.reset(self.token)


def get_logging_context() -> dict[str, Any]:
    """Get a copy of the current logging context."""
    return alarm_context.get().copy()


def _context_filter(record) -> bool:
    record["extra"].update(alarm_context.get())
    return True


def configure_logging(config: LoggingConfig | None = None) -> None:
    """
    Configure loguru to include the alarm context in all log messages.

    This should be called once by the service embedding the evaluator.
    """
    config = config or LoggingConfig()

    logger.remove()
    logger.add(
        sink=sys.stderr,
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{extra}</cyan> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
            "<level>{message}</level>"
        ),
        filter=_context_filter,
        level=config.level,
        colorize=True,
    )

    if config.file_path:
        logger.add(
            sink=config.file_path,
            format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level} | {extra} | {name}:{function}:{line} | {message}",
            filter=_context_filter,
            level=config.level,
            rotation=config.rotation,
            retention=config.retention,
            compression="zip",
        )


def log_with_context(level: str, message: str, **extra_context):
    """
    Log a message with additional context.

    Args:
        level: Log level (debug, info, warning, error, critical)
        message: Log message
        **extra_context: Additional context to include in this log only
    """
    context = get_logging_context()
    context.update(extra_context)
    logger.bind(**context).log(level.upper(), message)
