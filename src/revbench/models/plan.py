"""Execution plan models.

The execution plan records which benchmarks run against which resolved
revisions. It is produced once per run and shared by every project
directory.
"""

from __future__ import annotations

from pydantic import Field

from revbench.models.base import FrozenSchema
from revbench.models.configuration import GroupMembership

__all__ = [
    "BenchmarkExecution",
    "ExecutionPlan",
    "ResolvedRevision",
    "RevisionPlan",
]


class ResolvedRevision(FrozenSchema):
    """A declared revision bound to a concrete commit.

    Attributes:
        key: Revision key from the configuration.
        name: Display name of the revision.
        commit_hash: Full commit hash the revision resolved to.

    """

    key: str
    name: str
    commit_hash: str = Field(min_length=1)


class BenchmarkExecution(FrozenSchema):
    """One benchmark scheduled against one revision.

    Attributes:
        index: Index of the benchmark in the configuration.
        command: The command under test.
        prepare: Optional setup command.
        group_memberships: Group memberships in declaration order.

    """

    index: int
    command: str
    prepare: str | None = None
    group_memberships: tuple[GroupMembership, ...]

    @property
    def first_display_name(self) -> str:
        """Display name in the first declared group."""
        return self.group_memberships[0].display_name


class RevisionPlan(FrozenSchema):
    """Benchmarks scheduled for a single revision, in declaration order."""

    revision_key: str
    name: str
    commit_hash: str
    benchmarks: tuple[BenchmarkExecution, ...] = ()

    def is_empty(self) -> bool:
        return not self.benchmarks


class ExecutionPlan(FrozenSchema):
    """Revision plans keyed by revision key, in resolved revision order."""

    revisions: tuple[RevisionPlan, ...] = ()

    def get(self, revision_key: str) -> RevisionPlan | None:
        for revision_plan in self.revisions:
            if revision_plan.revision_key == revision_key:
                return revision_plan
        return None

    def revision_keys(self) -> list[str]:
        return [p.revision_key for p in self.revisions]

    def total_benchmarks(self) -> int:
        """Count scheduled (revision, benchmark) pairs."""
        return sum(len(p.benchmarks) for p in self.revisions)
