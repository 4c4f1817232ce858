"""Resolution of declared revisions to concrete commits."""

from __future__ import annotations

from pathlib import Path

from revbench.benchmark.exceptions import ResolutionError
from revbench.logging_config import get_logger
from revbench.models.configuration import Configuration, Revision
from revbench.models.plan import ResolvedRevision
from revbench.tools.exceptions import ToolError
from revbench.tools.protocols import VersionControl

__all__ = ["RevisionResolver"]

logger = get_logger(__name__)


class RevisionResolver:
    """Resolves every configured revision to a commit hash.

    Revisions are resolved one after another in declaration order. The
    first failure aborts resolution.
    """

    def __init__(self, vcs: VersionControl) -> None:
        """Initialize the resolver.

        Args:
            vcs: Version control used to run rev-parse and merge-base.

        """
        self._vcs = vcs

    async def resolve_all(
        self,
        config: Configuration,
        repository_path: Path,
    ) -> list[ResolvedRevision]:
        """Resolve all revisions of a configuration.

        Args:
            config: The benchmark configuration.
            repository_path: Path to the git repository.

        Returns:
            Resolved revisions in declaration order.

        Raises:
            ResolutionError: If any revision fails to resolve.

        """
        resolved: list[ResolvedRevision] = []
        for revision in config.revisions:
            commit_hash = await self._resolve(revision, repository_path)
            logger.info(
                "revision_resolved",
                revision=revision.key,
                strategy=revision.strategy.value,
                commit=commit_hash,
            )
            resolved.append(
                ResolvedRevision(
                    key=revision.key,
                    name=revision.name,
                    commit_hash=commit_hash,
                )
            )
        return resolved

    async def _resolve(self, revision: Revision, repository_path: Path) -> str:
        try:
            if revision.is_direct():
                commit_hash = await self._vcs.resolve_reference(
                    revision.git_reference, repository_path
                )
            else:
                commit_hash = await self._vcs.resolve_merge_base(
                    revision.target_branch,
                    revision.merge_base_from,
                    repository_path,
                )
        except ToolError as e:
            raise ResolutionError(revision.key, str(e)) from e

        if not commit_hash:
            raise ResolutionError(revision.key, "empty commit hash")
        return commit_hash
