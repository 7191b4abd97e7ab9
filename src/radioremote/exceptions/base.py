"""Base exception for radioremote.

Every error raised on purpose derives from RadioRemoteError, so the CLI can
print it without a traceback and the orchestrator can tell an expected
failure (a vanished speaker, an expired token, an unplugged remote) apart
from a bug.
"""

from typing import ClassVar, Optional


class RadioRemoteError(Exception):
    """
    Base exception for all radioremote errors.

    Subclasses set ``default_hint`` and ``default_recoverable`` rather than
    repeating them at every raise site.

    Attributes:
        user_message: One line for the terminal
        technical_message: Detail for the log file (defaults to user_message)
        recoverable: True if the radio keeps running after this error
        recovery_hint: What the user can do about it, if anything
    """

    default_hint: ClassVar[Optional[str]] = None
    default_recoverable: ClassVar[bool] = False

    def __init__(
        self,
        user_message: str,
        technical_message: Optional[str] = None,
        recoverable: Optional[bool] = None,
        recovery_hint: Optional[str] = None,
    ):
        super().__init__(user_message)
        self.user_message = user_message
        self.technical_message = technical_message or user_message
        self.recoverable = self.default_recoverable if recoverable is None else recoverable
        self.recovery_hint = recovery_hint or self.default_hint

    def __str__(self) -> str:
        return self.user_message

    def get_full_message(self) -> str:
        """User message followed by the hint, the way the CLI prints it."""
        if not self.recovery_hint:
            return self.user_message
        return f"{self.user_message}\n\nSuggestion: {self.recovery_hint}"
