"""Base exception class for memloop.

Every memloop error carries two messages: a short `user_message` for display
and a `technical_message` for logs. Errors raised from a buffer or reader also
record the numbers that caused them in `context` (loop bounds, cursor,
buffer length), so a handler can inspect them without parsing the message.
"""

from collections.abc import Mapping
from typing import Any, Optional


class MemLoopError(Exception):
    """
    Base exception for all memloop errors.

    Attributes:
        user_message: Human-friendly message for display
        technical_message: Detailed message for logging
        recoverable: Whether the caller can fix the inputs and retry
        recovery_hint: Optional hint for how to fix the issue
        context: Values describing the failed call, keyed by name
    """

    def __init__(
        self,
        user_message: str,
        technical_message: Optional[str] = None,
        recoverable: bool = False,
        recovery_hint: Optional[str] = None,
        context: Optional[Mapping[str, Any]] = None,
    ):
        """
        Initialize a memloop error.

        Args:
            user_message: Message to show to users
            technical_message: Detailed message for logs (defaults to
                user_message). Context values are appended to it.
            recoverable: True if the call can succeed once its inputs change
            recovery_hint: Suggestion for how to fix the issue
            context: Values describing the failed call
        """
        super().__init__(user_message)
        self.user_message = user_message
        self.context: dict[str, Any] = dict(context or {})
        self.technical_message = self._describe(technical_message or user_message)
        self.recoverable = recoverable
        self.recovery_hint = recovery_hint

    def _describe(self, message: str) -> str:
        if not self.context:
            return message
        return f"{message} ({self._format_context()})"

    def _format_context(self) -> str:
        return ", ".join(f"{key}={value!r}" for key, value in self.context.items())

    def __str__(self) -> str:
        """Return user-friendly message."""
        return self.user_message

    def __repr__(self) -> str:
        if self.context:
            return f"{type(self).__name__}({self.user_message!r}, {self._format_context()})"
        return f"{type(self).__name__}({self.user_message!r})"

    def get_full_message(self) -> str:
        """Get complete error message with recovery hint."""
        msg = self.user_message
        if self.recovery_hint:
            msg += f"\n\nSuggestion: {self.recovery_hint}"
        return msg
