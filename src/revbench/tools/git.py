"""Git operations used to resolve and check out revisions.

Functions here shell out to the system git CLI through run_process.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from revbench.logging_config import get_logger
from revbench.tools.exceptions import ToolError
from revbench.tools.process import ProcessRunner, run_process

__all__ = ["GitRepository"]

logger = get_logger(__name__)


class GitRepository:
    """VersionControl implementation backed by the git CLI."""

    def __init__(self, runner: ProcessRunner = run_process) -> None:
        """Initialize the adapter.

        Args:
            runner: Callable used to run git (default: run_process).

        """
        self._runner = runner

    async def _git(self, args: Sequence[str], cwd: Path) -> str:
        return await self._runner(
            "git",
            list(args),
            cwd=cwd,
            error_message=f"git {args[0]} failed",
        )

    async def is_clean(self, repository: Path) -> bool:
        """Check whether the repository has uncommitted changes.

        Args:
            repository: Path to the git repository.

        Returns:
            True if ``git status --porcelain`` reports nothing.

        Raises:
            ProcessExitError: If git status fails.

        """
        status = await self._git(["status", "--porcelain"], repository)
        return status == ""

    async def resolve_reference(self, reference: str, repository: Path) -> str:
        return await self._git(["rev-parse", reference], repository)

    async def resolve_merge_base(
        self, target_branch: str, merge_base_from: str, repository: Path
    ) -> str:
        return await self._git(
            ["merge-base", target_branch, merge_base_from], repository
        )

    async def checkout(self, commit: str, repository: Path) -> None:
        await self._git(["checkout", commit], repository)

    async def get_head_revision(self, path: Path) -> str | None:
        """Get the commit checked out in a directory.

        Args:
            path: Any directory, not necessarily inside a git repository.

        Returns:
            The HEAD commit hash, or None if it cannot be determined.

        """
        try:
            return await self._git(["rev-parse", "HEAD"], path)
        except ToolError as e:
            logger.debug("head_revision_unavailable", path=str(path), error=str(e))
            return None
