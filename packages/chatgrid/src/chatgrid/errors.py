"""Exception hierarchy for chatgrid."""
from __future__ import annotations


class ChatgridError(Exception):
    """Base class for every error raised by chatgrid."""


class BackendError(ChatgridError):
    """A chat backend call failed (auth, network, unknown channel)."""

    def __init__(self, operation: str, message: str) -> None:
        super().__init__(f"{operation}: {message}")
        self.operation = operation


class ConfigError(ChatgridError):
    """The configuration file is unreadable or holds invalid values."""
