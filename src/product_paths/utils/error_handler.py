"""Error reporting abstractions."""

from __future__ import annotations

from abc import ABC, abstractmethod

import logfire


class ErrorHandler(ABC):
    """Interface for reporting errors before they are re-raised.

    Implementations should avoid raising further exceptions and should emit
    concise diagnostics suitable for production logs.
    """

    @abstractmethod
    def handle(self, message: str, exc: Exception | None = None) -> None:
        """Record ``message`` with optional ``exc`` context."""


class LoggingErrorHandler(ErrorHandler):
    """Error handler that logs via ``logfire``."""

    def handle(self, message: str, exc: Exception | None = None) -> None:
        """Log ``message`` with the exception type and text as attributes.

        Args:
            message: Description of the error to record.
            exc: Exception instance providing additional context.
        """
        if exc is None:
            logfire.error(message)
            return
        logfire.error(message, error=str(exc), error_type=type(exc).__name__)


class CollectingErrorHandler(ErrorHandler):
    """Error handler that keeps reported messages in memory.

    Used by callers that want to surface every problem at once, e.g. a
    preflight check that reports all unresolvable directories.
    """

    def __init__(self) -> None:
        self.messages: list[str] = []

    def handle(self, message: str, exc: Exception | None = None) -> None:
        """Append ``message`` (and ``exc`` when given) to :attr:`messages`."""
        self.messages.append(f"{message}: {exc}" if exc else message)
