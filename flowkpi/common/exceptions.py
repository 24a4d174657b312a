"""Common exceptions for FlowKPI.

The analysis engine never raises for JSON-valid input. These exceptions
belong to the layers around it: reading flow documents from disk and the
command line interface.
"""

from typing import Any


class FlowKPIError(Exception):
    """Base exception for all FlowKPI-related errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        """Initialize exception with message and optional context."""
        super().__init__(message)
        self.context = context or {}


class LoadError(FlowKPIError):
    """Raised when a flow document cannot be read or parsed."""

    def __init__(
        self,
        message: str,
        file_path: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        """Initialize load error with the offending file path."""
        super().__init__(message, context)
        self.file_path = file_path


class OutputError(FlowKPIError):
    """Raised when a report cannot be written."""

    def __init__(
        self,
        message: str,
        file_path: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        """Initialize output error with the target file path."""
        super().__init__(message, context)
        self.file_path = file_path
