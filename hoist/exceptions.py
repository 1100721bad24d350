"""
Hoist CLI Exception Hierarchy

Clean exception hierarchy for consistent error handling across the CLI.
"""

from typing import Optional


class HoistError(Exception):
    """Base exception for all Hoist errors."""

    def __init__(self, message: str, context: Optional[str] = None):
        self.message = message
        self.context = context
        super().__init__(self.format_message())

    def format_message(self) -> str:
        """Format error message with optional context."""
        if self.context:
            return f"{self.message}\nContext: {self.context}"
        return self.message


class ConfigurationError(HoistError):
    """Raised when configuration is invalid or missing."""

    pass


class ValidationError(HoistError):
    """Raised when command arguments fail validation."""

    pass


class RetrievalError(HoistError):
    """Raised when a remote log fetch or stream fails."""

    def __init__(
        self,
        message: str,
        context: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        self.status_code = status_code
        super().__init__(message, context)


class StreamClosedError(RetrievalError):
    """Raised when pumping a log stream that has already ended."""

    def __init__(self, scope: str):
        self.scope = scope
        message = f"Log stream for '{scope}' has already ended"
        context = "Open a new stream to keep following logs"
        super().__init__(message, context)


class MetadataError(HoistError):
    """Raised when no local project descriptor can be read."""

    def __init__(self, path: str, reason: Optional[str] = None):
        self.path = path
        message = f"No project metadata found in {path}"
        super().__init__(message, reason)


class PromptError(HoistError):
    """Raised when interactive input fails or is cancelled."""

    pass
