"""Execution and aggregation result models.

Covers the per-revision outcome reported by the executor, the raw timing
entries read from the timing tool's export, and the revision-centric and
group-centric views built by the aggregator.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import ConfigDict, Field

from revbench.models.base import FrozenSchema

__all__ = [
    "AggregatedResults",
    "BenchmarkResult",
    "FailureInfo",
    "GroupBenchmarkResult",
    "GroupResult",
    "GroupRevisionEntry",
    "RevisionExecutionResult",
    "RevisionResult",
    "RunOutcome",
    "TimingResult",
]


class TimingResult(FrozenSchema):
    """Statistics for one command as exported by the timing tool.

    Values are in seconds and taken verbatim from the export. Additional
    keys in the export (e.g. ``times``, ``user``, ``system``) are kept.

    Attributes:
        command: The label the command was run under.
        mean: Mean wall-clock time.
        stddev: Standard deviation, None for a single run.
        min: Fastest run.
        max: Slowest run.
        median: Median run.

    """

    model_config = ConfigDict(extra="allow")

    command: str | None = None
    mean: float
    stddev: float | None = None
    min: float
    max: float
    median: float


class RevisionExecutionResult(FrozenSchema):
    """Outcome of executing one revision's benchmarks.

    Attributes:
        revision_key: Key of the executed revision.
        success: Whether checkout, install and timing all succeeded.
        result_file_path: Path of the raw export, None when nothing ran
            or execution failed.
        error: Failure reason when success is False.

    """

    revision_key: str
    success: bool
    result_file_path: Path | None = None
    error: str | None = None


class BenchmarkResult(FrozenSchema):
    """One benchmark's result within one group for one revision."""

    index: int
    command: str
    display_name: str
    group_key: str
    result: TimingResult | None = None


class RevisionResult(FrozenSchema):
    """Revision-centric view of a revision's results.

    Attributes:
        revision_key: Revision key.
        name: Revision display name.
        commit_hash: Resolved commit.
        success: Whether the revision succeeded.
        error: Failure reason, None on success.
        benchmarks: One entry per (benchmark, group membership), empty on
            failure.

    """

    revision_key: str
    name: str
    commit_hash: str
    success: bool
    error: str | None = None
    benchmarks: tuple[BenchmarkResult, ...] = ()


class GroupRevisionEntry(FrozenSchema):
    """A single revision column of a group row."""

    revision_name: str
    commit_hash: str
    success: bool
    result: TimingResult | None = None


class GroupBenchmarkResult(FrozenSchema):
    """A row of a group table, keyed by display name.

    Attributes:
        display_name: Row label.
        revisions: Revision key to entry. Revisions the row did not run
            on are absent.

    """

    display_name: str
    revisions: dict[str, GroupRevisionEntry] = Field(default_factory=dict)


class GroupResult(FrozenSchema):
    """Group-centric view of all benchmarks in one group."""

    group_key: str
    group_name: str
    benchmarks: tuple[GroupBenchmarkResult, ...] = ()


class FailureInfo(FrozenSchema):
    """A failed revision and the reason it failed."""

    revision_key: str
    revision_name: str
    commit_hash: str
    error: str


class AggregatedResults(FrozenSchema):
    """Complete aggregated output of one project directory.

    Attributes:
        revisions: Revision key to RevisionResult, in plan order.
        groups: Group key to GroupResult, in declaration order.
        failures: Failed revisions in plan order.

    """

    revisions: dict[str, RevisionResult] = Field(default_factory=dict)
    groups: dict[str, GroupResult] = Field(default_factory=dict)
    failures: tuple[FailureInfo, ...] = ()

    @property
    def has_failures(self) -> bool:
        return bool(self.failures)


class RunOutcome(FrozenSchema):
    """Final status of a complete run across all project directories."""

    success: bool
    failures: tuple[FailureInfo, ...] = ()
