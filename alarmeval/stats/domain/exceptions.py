"""Custom exceptions for the statistics layer."""


class StatsException(Exception):
    """Base exception for all statistics errors."""

    def __init__(self, message: str, details: dict | None = None):
        """
        Initialize statistics exception.

        Args:
            message: Human-readable error message
            details: Optional dict with additional error context
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)


class OutOfWindowError(StatsException, LookupError):
    """Raised when a read targets a timestamp not covered by the current window."""

    def __init__(self, timestamp: int, window_start: int, window_end: int):
        super().__init__(
            message=f"{timestamp} is outside of the window [{window_start}, {window_end})",
            details={
                "timestamp": timestamp,
                "window_start": window_start,
                "window_end": window_end,
            },
        )
