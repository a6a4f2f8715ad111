"""Custom exceptions for the alarm expression layer."""


class ExpressionException(Exception):
    """Base exception for all alarm expression errors."""

    def __init__(self, message: str, details: dict | None = None):
        """
        Initialize expression exception.

        Args:
            message: Human-readable error message
            details: Optional dict with additional error context
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ExpressionSyntaxError(ExpressionException, ValueError):
    """Raised when alarm expression text cannot be parsed."""

    def __init__(self, expression: str, position: int, reason: str):
        super().__init__(
            message=f"Syntax error in alarm expression at position {position}: {reason}",
            details={"expression": expression, "position": position, "reason": reason},
        )


class InvalidArgumentError(ExpressionException, ValueError):
    """Raised when an expression is evaluated without a truth value for each of its leaves."""

    def __init__(self, missing: list[str]):
        super().__init__(
            message=f"No truth value supplied for sub-expressions: {', '.join(missing)}",
            details={"missing_sub_expressions": missing},
        )
