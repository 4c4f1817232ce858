"""Execution planning: which benchmarks run on which revisions.

Planning is pure. The same plan is reused for every project directory.
"""

from __future__ import annotations

from collections.abc import Sequence

from revbench.config.defaults import SHORT_HASH_LENGTH
from revbench.logging_config import get_logger
from revbench.models.configuration import Configuration
from revbench.models.plan import (
    BenchmarkExecution,
    ExecutionPlan,
    ResolvedRevision,
    RevisionPlan,
)

__all__ = ["ExecutionPlanner", "format_plan_summary"]

logger = get_logger(__name__)


class ExecutionPlanner:
    """Builds the execution matrix from a configuration."""

    def plan(
        self,
        config: Configuration,
        resolved: Sequence[ResolvedRevision],
    ) -> ExecutionPlan:
        """Plan all benchmarks across all resolved revisions.

        Benchmarks are visited in declaration order and appended to every
        revision they apply to, so each revision's list preserves
        declaration order and contains each benchmark at most once.

        Args:
            config: The benchmark configuration.
            resolved: Resolved revisions, in the order they will execute.

        Returns:
            The execution plan, one RevisionPlan per resolved revision.

        """
        scheduled: dict[str, list[BenchmarkExecution]] = {r.key: [] for r in resolved}

        for spec in config.benchmarks:
            execution = BenchmarkExecution(
                index=spec.index,
                command=spec.command,
                prepare=spec.prepare,
                group_memberships=spec.memberships,
            )
            for revision in resolved:
                if spec.should_run_on_revision(revision.key):
                    scheduled[revision.key].append(execution)

        revision_plans = []
        for revision in resolved:
            benchmarks = scheduled[revision.key]
            if not benchmarks:
                logger.warning(
                    "revision_without_benchmarks",
                    revision=revision.key,
                    name=revision.name,
                )
            revision_plans.append(
                RevisionPlan(
                    revision_key=revision.key,
                    name=revision.name,
                    commit_hash=revision.commit_hash,
                    benchmarks=tuple(benchmarks),
                )
            )

        return ExecutionPlan(revisions=tuple(revision_plans))


def format_plan_summary(plan: ExecutionPlan, command_prefix: str = "") -> str:
    """Render a human-readable summary of an execution plan.

    Args:
        plan: The plan to summarize.
        command_prefix: Prefix shown before each benchmark command.

    Returns:
        A multi-line summary. The same plan always renders identically.

    """
    lines = ["Execution Plan:"]
    for revision_plan in plan.revisions:
        short_hash = revision_plan.commit_hash[:SHORT_HASH_LENGTH]
        lines.append("")
        lines.append(
            f"  {revision_plan.name} ({revision_plan.revision_key}): {short_hash}"
        )
        lines.append(f"    {len(revision_plan.benchmarks)} benchmark(s):")
        for benchmark in revision_plan.benchmarks:
            command = f"{command_prefix} {benchmark.command}".strip()
            line = f"      [{benchmark.index}] {command}"
            if benchmark.prepare:
                line += f" (prepare: {benchmark.prepare})"
            lines.append(line)
            groups = ", ".join(
                f'{m.group_key}: "{m.display_name}"'
                for m in benchmark.group_memberships
            )
            lines.append(f"        Groups: {groups}")
    return "\n".join(lines) + "\n"
