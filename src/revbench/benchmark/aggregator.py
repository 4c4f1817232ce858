"""Aggregation of raw timing exports into revision and group views."""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path

from pydantic import ValidationError

from revbench.benchmark.exceptions import ResultFileError
from revbench.benchmark.utils import build_command_name
from revbench.logging_config import get_logger
from revbench.models.configuration import Configuration
from revbench.models.plan import ExecutionPlan, RevisionPlan
from revbench.models.results import (
    AggregatedResults,
    BenchmarkResult,
    FailureInfo,
    GroupBenchmarkResult,
    GroupResult,
    GroupRevisionEntry,
    RevisionExecutionResult,
    RevisionResult,
    TimingResult,
)

__all__ = ["ResultAggregator", "load_timing_results"]

logger = get_logger(__name__)

UNKNOWN_ERROR = "Unknown error"


def load_timing_results(path: Path, revision_plan: RevisionPlan) -> list[TimingResult]:
    """Read a timing export and align its entries with the planned benchmarks.

    Entries are matched to benchmarks by their command-name label. A
    benchmark whose label is not found takes the entry at the same position,
    provided no other benchmark claimed that entry by label.

    Args:
        path: Path of the JSON export.
        revision_plan: The plan the export was produced for.

    Returns:
        One TimingResult per planned benchmark, in plan order.

    Raises:
        ResultFileError: If the file cannot be read or parsed, its entry
            count differs from the number of planned benchmarks, or an
            entry would be assigned to two benchmarks.

    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ResultFileError(f"Failed to read result file: {e}") from e

    raw_entries = data.get("results") if isinstance(data, dict) else None
    if not isinstance(raw_entries, list):
        raise ResultFileError(
            f"Failed to read result file: {path} has no 'results' list"
        )

    expected = len(revision_plan.benchmarks)
    if len(raw_entries) != expected:
        raise ResultFileError(
            f"Result file {path} has {len(raw_entries)} entries, "
            f"expected {expected}"
        )

    try:
        entries = [TimingResult.model_validate(entry) for entry in raw_entries]
    except ValidationError as e:
        raise ResultFileError(f"Failed to read result file: {e}") from e

    label_positions: dict[str, int] = {}
    for position, entry in enumerate(entries):
        if entry.command is not None:
            label_positions.setdefault(entry.command, position)

    labels = [
        build_command_name(revision_plan.name, revision_plan.revision_key, benchmark)
        for benchmark in revision_plan.benchmarks
    ]
    assigned: list[int | None] = [label_positions.get(label) for label in labels]
    used = {position for position in assigned if position is not None}

    for position, label in enumerate(labels):
        if assigned[position] is not None:
            continue
        if position in used:
            raise ResultFileError(
                f"Result file {path} has no entry labelled '{label}' and entry "
                f"{position} already belongs to another benchmark"
            )
        logger.warning(
            "result_label_not_found",
            revision=revision_plan.revision_key,
            label=label,
            position=position,
        )
        assigned[position] = position
        used.add(position)

    return [entries[position] for position in assigned if position is not None]


class ResultAggregator:
    """Builds AggregatedResults for one project directory."""

    def aggregate(
        self,
        config: Configuration,
        plan: ExecutionPlan,
        execution_results: Mapping[str, RevisionExecutionResult],
    ) -> AggregatedResults:
        """Aggregate execution results.

        A benchmark that belongs to several groups yields one BenchmarkResult
        per group, all sharing the same timing entry. A revision whose result
        file cannot be used is reported as failed.

        Args:
            config: The benchmark configuration.
            plan: The execution plan.
            execution_results: Revision key to execution result.

        Returns:
            Revision-centric and group-centric views plus failures.

        """
        revisions: dict[str, RevisionResult] = {}
        failures: list[FailureInfo] = []

        for revision_plan in plan.revisions:
            key = revision_plan.revision_key
            execution = execution_results.get(key)
            if execution is None:
                continue

            if not execution.success:
                error = execution.error or UNKNOWN_ERROR
            else:
                try:
                    revisions[key] = self._successful_revision(
                        revision_plan, execution
                    )
                    continue
                except ResultFileError as e:
                    logger.error("result_file_unusable", revision=key, error=str(e))
                    error = str(e)

            failures.append(
                FailureInfo(
                    revision_key=key,
                    revision_name=revision_plan.name,
                    commit_hash=revision_plan.commit_hash,
                    error=error,
                )
            )
            revisions[key] = RevisionResult(
                revision_key=key,
                name=revision_plan.name,
                commit_hash=revision_plan.commit_hash,
                success=False,
                error=error,
            )

        return AggregatedResults(
            revisions=revisions,
            groups=self._organize_by_groups(config, revisions),
            failures=tuple(failures),
        )

    def _successful_revision(
        self,
        revision_plan: RevisionPlan,
        execution: RevisionExecutionResult,
    ) -> RevisionResult:
        timings: list[TimingResult | None]
        if execution.result_file_path is None:
            timings = [None] * len(revision_plan.benchmarks)
        else:
            timings = list(
                load_timing_results(execution.result_file_path, revision_plan)
            )

        benchmarks = [
            BenchmarkResult(
                index=benchmark.index,
                command=benchmark.command,
                display_name=membership.display_name,
                group_key=membership.group_key,
                result=timing,
            )
            for benchmark, timing in zip(revision_plan.benchmarks, timings)
            for membership in benchmark.group_memberships
        ]

        return RevisionResult(
            revision_key=revision_plan.revision_key,
            name=revision_plan.name,
            commit_hash=revision_plan.commit_hash,
            success=True,
            benchmarks=tuple(benchmarks),
        )

    def _organize_by_groups(
        self,
        config: Configuration,
        revisions: Mapping[str, RevisionResult],
    ) -> dict[str, GroupResult]:
        """Build one GroupResult per declared group, rows keyed by display name."""
        rows: dict[str, dict[str, dict[str, GroupRevisionEntry]]] = {
            group_key: {} for group_key in config.group_keys()
        }

        for revision_key, revision in revisions.items():
            for benchmark in revision.benchmarks:
                group_rows = rows.get(benchmark.group_key)
                if group_rows is None:
                    continue
                row = group_rows.setdefault(benchmark.display_name, {})
                if revision_key in row:
                    logger.warning(
                        "group_row_collision",
                        group=benchmark.group_key,
                        display_name=benchmark.display_name,
                        revision=revision_key,
                        index=benchmark.index,
                    )
                row[revision_key] = GroupRevisionEntry(
                    revision_name=revision.name,
                    commit_hash=revision.commit_hash,
                    success=revision.success,
                    result=benchmark.result,
                )

        return {
            group.key: GroupResult(
                group_key=group.key,
                group_name=group.name,
                benchmarks=tuple(
                    GroupBenchmarkResult(display_name=display_name, revisions=entries)
                    for display_name, entries in rows[group.key].items()
                ),
            )
            for group in config.groups
        }
