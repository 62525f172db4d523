"""Exception hierarchy shared by the selection algebra and its hosts."""

from __future__ import annotations

from typing import Optional


class KakselError(RuntimeError):
    """Base error; ``detail`` is echoed to the editor's debug log."""

    def __init__(self, message: str, *, detail: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail


class UsageError(KakselError):
    """The user asked for something that cannot be done with these inputs."""


class ParseError(UsageError):
    """A descriptor, register name, or editor response could not be parsed."""


class EmptySelectionsError(UsageError):
    """Raised when a selection list that must be non-empty is empty."""

    def __init__(
        self, message: str = "Attempted to set an empty selection list"
    ) -> None:
        super().__init__(message)


class ConsistencyError(KakselError):
    """The editor reported data that violates an invariant of the algebra."""


class ChannelError(KakselError):
    """Communication with the editor or a child process failed."""


class EnvironmentVariableError(ChannelError):
    """A required ``kak_*`` environment variable is missing."""


__all__ = [
    "KakselError",
    "UsageError",
    "ParseError",
    "EmptySelectionsError",
    "ConsistencyError",
    "ChannelError",
    "EnvironmentVariableError",
]
