"""Exceptions for the external tool adapters.

This module defines exceptions raised when spawning or running an
external program (git, the package manager, the timing tool) fails.
"""

from revbench.exceptions import RevbenchError

__all__ = [
    "ProcessExitError",
    "ProcessSpawnError",
    "TimingToolNotFoundError",
    "ToolError",
]


class ToolError(RevbenchError):
    """Base exception for external tool failures."""

    pass


class ProcessSpawnError(ToolError):
    """Raised when a program cannot be started at all.

    Attributes:
        program: The program that failed to start.
        reason: The operating system's reason.

    """

    def __init__(self, program: str, reason: str) -> None:
        """Initialize ProcessSpawnError.

        Args:
            program: The program that failed to start.
            reason: The operating system's reason.

        """
        self.program = program
        self.reason = reason
        super().__init__(f"Failed to execute {program}: {reason}")


class ProcessExitError(ToolError):
    """Raised when a program exits with a non-zero code.

    Attributes:
        program: The program that failed.
        returncode: Its exit code.
        stderr: Captured standard error, None when output was not captured.

    """

    def __init__(
        self,
        program: str,
        returncode: int | None,
        error_message: str,
        stderr: str | None = None,
    ) -> None:
        """Initialize ProcessExitError.

        Args:
            program: The program that failed.
            returncode: Its exit code.
            error_message: Human-readable summary of the failed operation.
            stderr: Captured standard error, if output was captured.

        """
        self.program = program
        self.returncode = returncode
        self.stderr = stderr
        if stderr is not None:
            message = f"{error_message}: {stderr}"
        else:
            message = f"{error_message} (exit code {returncode})"
        super().__init__(message)


class TimingToolNotFoundError(ToolError):
    """Raised when the timing tool executable is not installed."""

    pass
