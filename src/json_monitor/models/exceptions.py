"""
Custom exception classes for the JSON monitor.

Provides specific exception types for the failure modes of reading, parsing,
and monitoring a JSON file so callers can branch on the type rather than on
message text.
"""

from typing import Any


class BaseError(Exception):
    """
    Base exception class for all JSON monitor errors.

    All custom exceptions in the package inherit from this base class
    to enable consistent error handling and logging.
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ):
        """
        Initialize the error.

        Args:
            message: Human-readable error description
            error_code: Optional error code for programmatic handling
            context: Optional dictionary with error context information
            cause: Optional underlying exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.context = context or {}
        self.cause = cause

    def __str__(self) -> str:
        """String representation including error code if present."""
        if self.error_code:
            return f"[{self.error_code}] {self.message}"
        return self.message

    def __repr__(self) -> str:
        """Detailed representation for debugging."""
        return (
            f"{self.__class__.__name__}("
            f"message='{self.message}', "
            f"error_code='{self.error_code}', "
            f"context={self.context})"
        )


class ConfigurationError(BaseError):
    """Raised when there are configuration or settings issues."""

    def __init__(
        self,
        message: str,
        config_key: str | None = None,
        expected_type: str | None = None,
        actual_value: Any | None = None,
    ):
        context = {}
        if config_key:
            context["config_key"] = config_key
        if expected_type:
            context["expected_type"] = expected_type
        if actual_value is not None:
            context["actual_value"] = str(actual_value)

        super().__init__(message, error_code="CONFIG_ERROR", context=context)


class InvalidArgumentError(BaseError, ValueError):
    """Raised when an operation is called with an argument it cannot accept."""

    def __init__(
        self,
        message: str,
        argument: str | None = None,
        actual_value: Any | None = None,
    ):
        context = {}
        if argument:
            context["argument"] = argument
        if actual_value is not None:
            context["actual_value"] = str(actual_value)

        super().__init__(message, error_code="INVALID_ARGUMENT", context=context)


class DocumentNotFoundError(BaseError):
    """Describes a monitored file that does not exist."""

    def __init__(self, message: str, file_path: str | None = None):
        context = {}
        if file_path:
            context["file_path"] = file_path

        super().__init__(message, error_code="NOT_FOUND", context=context)


class ParsingError(BaseError):
    """Raised when file content cannot be parsed into a document."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        file_path: str | None = None,
        line_number: int | None = None,
        underlying_error: Exception | None = None,
    ):
        context = {}
        if operation:
            context["operation"] = operation
        if file_path:
            context["file_path"] = file_path
        if line_number:
            context["line_number"] = line_number

        super().__init__(message, error_code="PARSING_ERROR", context=context, cause=underlying_error)


class MonitoringError(BaseError):
    """Raised when file monitoring operations fail."""

    def __init__(
        self,
        message: str,
        path: str | None = None,
        operation: str | None = None,
        underlying_error: Exception | None = None,
    ):
        context = {}
        if path:
            context["path"] = path
        if operation:
            context["operation"] = operation

        super().__init__(
            message,
            error_code="MONITORING_ERROR",
            context=context,
            cause=underlying_error,
        )


def raise_invalid_argument(message: str, argument: str, actual_value: Any | None = None) -> None:
    """Raise an invalid argument error with context."""
    raise InvalidArgumentError(message=message, argument=argument, actual_value=actual_value)
