"""Domain-specific exceptions for the benchmark pipeline.

This module defines exceptions for repository preconditions, revision
resolution, per-revision execution, and result file handling.
"""

from revbench.exceptions import RevbenchError

__all__ = [
    "BenchmarkError",
    "CheckoutError",
    "DirtyRepositoryError",
    "InstallError",
    "InvalidRevisionStateError",
    "RepositoryBusyError",
    "ResolutionError",
    "ResultFileError",
    "RevisionExecutionError",
    "TimingToolError",
]


class BenchmarkError(RevbenchError):
    """Base exception for benchmark orchestration errors."""

    pass


class DirtyRepositoryError(BenchmarkError):
    """Raised when the repository has uncommitted changes before a run."""

    def __init__(self) -> None:
        super().__init__(
            "Repository has uncommitted changes. "
            "Please commit or stash your changes before running benchmarks."
        )


class ResolutionError(BenchmarkError):
    """Raised when a revision cannot be resolved to a commit.

    Attributes:
        revision_key: Key of the revision that failed to resolve.

    """

    def __init__(self, revision_key: str, reason: str) -> None:
        self.revision_key = revision_key
        super().__init__(f"Failed to resolve revision '{revision_key}': {reason}")


class RevisionExecutionError(BenchmarkError):
    """Base exception for failures scoped to a single revision."""

    pass


class CheckoutError(RevisionExecutionError):
    """Raised when a revision's commit cannot be checked out."""

    pass


class InstallError(RevisionExecutionError):
    """Raised when dependency installation fails for a revision."""

    pass


class TimingToolError(RevisionExecutionError):
    """Raised when the timing tool fails or produces no output."""

    pass


class ResultFileError(BenchmarkError):
    """Raised when a raw result file cannot be read or does not match the plan."""

    pass


class RepositoryBusyError(BenchmarkError):
    """Raised when the working tree is acquired while already in use."""

    pass


class InvalidRevisionStateError(BenchmarkError):
    """Raised when an invalid revision state transition is attempted."""

    pass
