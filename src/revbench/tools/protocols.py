"""Capability protocols for the external tools the pipeline drives.

Services receive implementations of these protocols at construction, so
tests can substitute in-memory doubles for git, the package manager and
the timing tool.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from revbench.models.invocation import TimingInvocation

__all__ = ["PackageManager", "TimingTool", "VersionControl"]


@runtime_checkable
class VersionControl(Protocol):
    """Protocol for the version control system holding the code under test."""

    async def is_clean(self, repository: Path) -> bool:
        """Whether the working tree has no uncommitted changes."""
        ...

    async def resolve_reference(self, reference: str, repository: Path) -> str:
        """Resolve a branch, tag or commit reference to a commit hash."""
        ...

    async def resolve_merge_base(
        self, target_branch: str, merge_base_from: str, repository: Path
    ) -> str:
        """Resolve the common ancestor of two branches to a commit hash."""
        ...

    async def checkout(self, commit: str, repository: Path) -> None:
        """Check out a commit in the working tree."""
        ...

    async def get_head_revision(self, path: Path) -> str | None:
        """Commit checked out at path, or None if path is not under version control."""
        ...


@runtime_checkable
class PackageManager(Protocol):
    """Protocol for installing a repository's dependencies."""

    async def install(self, repository: Path) -> None:
        """Install dependencies for the currently checked-out revision."""
        ...


@runtime_checkable
class TimingTool(Protocol):
    """Protocol for the external benchmarking tool."""

    async def run(self, invocation: TimingInvocation) -> None:
        """Time every command of the invocation and write the JSON export."""
        ...
