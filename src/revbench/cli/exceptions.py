"""Exceptions for the CLI module."""

from revbench.exceptions import RevbenchError

__all__ = ["CLIError", "CommandError"]


class CLIError(RevbenchError):
    """Base exception for CLI-related errors."""

    pass


class CommandError(CLIError):
    """Raised when an unknown command is dispatched."""

    pass
