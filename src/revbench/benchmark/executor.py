"""Benchmark execution for a single project directory.

For every revision with at least one planned benchmark the executor checks
out the revision's commit, installs its dependencies and runs the timing
tool once with all of the revision's benchmarks batched together.
Failures are scoped to the revision: they are recorded and execution
continues with the next revision.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Mapping
from contextlib import asynccontextmanager
from pathlib import Path

from revbench.benchmark.exceptions import (
    CheckoutError,
    InstallError,
    RepositoryBusyError,
    RevisionExecutionError,
    TimingToolError,
)
from revbench.benchmark.state_machine import RevisionRun
from revbench.benchmark.utils import (
    build_command_name,
    resolve_command,
    result_file_path,
)
from revbench.logging_config import get_logger
from revbench.models.enums import RevisionState
from revbench.models.invocation import TimingCommand, TimingInvocation
from revbench.models.plan import ExecutionPlan, RevisionPlan
from revbench.models.results import RevisionExecutionResult
from revbench.tools.exceptions import ToolError
from revbench.tools.protocols import PackageManager, TimingTool, VersionControl

__all__ = ["BenchmarkExecutor", "WorkingTree"]

logger = get_logger(__name__)


class WorkingTree:
    """Exclusive handle on the repository working tree.

    Only one holder may check out and install at a time. Acquiring the
    tree while it is held raises instead of waiting.

    Attributes:
        path: Path to the repository.

    """

    def __init__(self, path: Path) -> None:
        self.path = path
        self._lock = asyncio.Lock()
        self._checked_out: str | None = None

    @property
    def checked_out(self) -> str | None:
        """Commit most recently checked out through this handle."""
        return self._checked_out

    @property
    def in_use(self) -> bool:
        return self._lock.locked()

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[WorkingTree]:
        """Hold the working tree for the duration of the block.

        Raises:
            RepositoryBusyError: If the tree is already held.

        """
        if self._lock.locked():
            raise RepositoryBusyError(f"Working tree {self.path} is already in use")
        async with self._lock:
            yield self

    def record_checkout(self, commit: str) -> None:
        self._checked_out = commit


class BenchmarkExecutor:
    """Runs planned benchmarks with the timing tool.

    Attributes:
        command_prefix: Prefix prepended to each benchmark command.
        extra_env: Variables passed to the timing tool on top of ours.
        verbose: Whether to print progress output.

    """

    def __init__(
        self,
        vcs: VersionControl,
        package_manager: PackageManager,
        timing_tool: TimingTool,
        *,
        command_prefix: str = "",
        extra_env: Mapping[str, str] | None = None,
        verbose: bool = False,
    ) -> None:
        """Initialize the executor.

        Args:
            vcs: Version control used to check out revisions.
            package_manager: Installs dependencies after each checkout.
            timing_tool: Times the benchmark commands.
            command_prefix: Prefix prepended to each benchmark command. The
                placeholder ``{repository}`` is replaced with the repository path.
            extra_env: Variables passed to the timing tool on top of ours.
            verbose: Whether to print progress output.

        """
        self._vcs = vcs
        self._package_manager = package_manager
        self._timing_tool = timing_tool
        self.command_prefix = command_prefix
        self.extra_env = dict(extra_env or {})
        self.verbose = verbose

    async def run_all(
        self,
        plan: ExecutionPlan,
        *,
        warmup: int,
        runs: int,
        working_tree: WorkingTree,
        project_dir: Path,
        results_dir: Path | None = None,
    ) -> dict[str, RevisionExecutionResult]:
        """Execute every revision of a plan, one after another.

        Args:
            plan: The execution plan.
            warmup: Warmup runs per benchmark.
            runs: Timed runs per benchmark.
            working_tree: The repository working tree.
            project_dir: Directory the benchmarks run in.
            results_dir: Directory for raw result files (default: project_dir).

        Returns:
            Revision key to execution result, in plan order.

        """
        results: dict[str, RevisionExecutionResult] = {}
        for revision_plan in plan.revisions:
            results[revision_plan.revision_key] = await self.run(
                revision_plan,
                warmup=warmup,
                runs=runs,
                working_tree=working_tree,
                project_dir=project_dir,
                results_dir=results_dir,
            )
        return results

    async def run(
        self,
        revision_plan: RevisionPlan,
        *,
        warmup: int,
        runs: int,
        working_tree: WorkingTree,
        project_dir: Path,
        results_dir: Path | None = None,
    ) -> RevisionExecutionResult:
        """Execute one revision's benchmarks.

        Args:
            revision_plan: The revision and its scheduled benchmarks.
            warmup: Warmup runs per benchmark.
            runs: Timed runs per benchmark.
            working_tree: The repository working tree.
            project_dir: Directory the benchmarks run in.
            results_dir: Directory for the raw result file (default: project_dir).

        Returns:
            The outcome. Failures are reported here, not raised.

        Raises:
            RepositoryBusyError: If the working tree is already in use.

        """
        key = revision_plan.revision_key
        name = revision_plan.name
        commit = revision_plan.commit_hash
        state = RevisionRun(key)

        if self.verbose:
            print(f"\n=== Running benchmarks for {name} ({key}): {commit} ===\n")

        if revision_plan.is_empty():
            if self.verbose:
                print("No benchmarks to run for this revision.")
            logger.info("revision_skipped", revision=key, reason="no_benchmarks")
            state.transition_to(RevisionState.succeeded_empty)
            return RevisionExecutionResult(revision_key=key, success=True)

        output_path = result_file_path(
            results_dir or project_dir, project_dir, key, commit
        )

        async with working_tree.acquire():
            state.transition_to(RevisionState.executing)
            try:
                await self._checkout(working_tree, commit)
                await self._install(working_tree)
                await self._time(
                    revision_plan,
                    warmup=warmup,
                    runs=runs,
                    repository=working_tree.path,
                    project_dir=project_dir,
                    output_path=output_path,
                )
            except RevisionExecutionError as e:
                state.transition_to(RevisionState.failed)
                logger.error(
                    "revision_failed",
                    revision=key,
                    commit=commit,
                    error=str(e),
                )
                if self.verbose:
                    print(f"\n❌ Benchmarks failed for {name}: {e}\n")
                return RevisionExecutionResult(
                    revision_key=key, success=False, error=str(e)
                )

        state.transition_to(RevisionState.succeeded_with_results)
        logger.info(
            "revision_completed",
            revision=key,
            commit=commit,
            benchmarks=len(revision_plan.benchmarks),
            result_file=str(output_path),
        )
        if self.verbose:
            print(f"\n✅ Benchmarks completed successfully for {name}\n")
        return RevisionExecutionResult(
            revision_key=key, success=True, result_file_path=output_path
        )

    async def _checkout(self, working_tree: WorkingTree, commit: str) -> None:
        if self.verbose:
            print(f"Checking out {commit}...")
        try:
            await self._vcs.checkout(commit, working_tree.path)
        except ToolError as e:
            raise CheckoutError(str(e)) from e
        working_tree.record_checkout(commit)

    async def _install(self, working_tree: WorkingTree) -> None:
        if self.verbose:
            print("Installing dependencies...")
        try:
            await self._package_manager.install(working_tree.path)
        except ToolError as e:
            raise InstallError(str(e)) from e

    async def _time(
        self,
        revision_plan: RevisionPlan,
        *,
        warmup: int,
        runs: int,
        repository: Path,
        project_dir: Path,
        output_path: Path,
    ) -> None:
        """Run the timing tool for a revision and check its export exists.

        Raises:
            TimingToolError: If the tool fails, is missing, or writes no export.

        """
        commands = tuple(
            TimingCommand(
                command_name=build_command_name(
                    revision_plan.name, revision_plan.revision_key, benchmark
                ),
                command=resolve_command(
                    benchmark.command, self.command_prefix, repository
                ),
                prepare=benchmark.prepare,
            )
            for benchmark in revision_plan.benchmarks
        )
        invocation = TimingInvocation(
            warmup=warmup,
            runs=runs,
            commands=commands,
            export_path=output_path,
            working_directory=project_dir,
            env=self.extra_env,
        )

        try:
            output_path.unlink(missing_ok=True)
        except OSError as e:
            raise TimingToolError(
                f"Failed to remove stale result file {output_path}: {e}"
            ) from e

        if self.verbose:
            print(f"Executing timing tool with {len(commands)} benchmark(s)...")
        try:
            await self._timing_tool.run(invocation)
        except ToolError as e:
            raise TimingToolError(str(e)) from e

        if not output_path.is_file():
            raise TimingToolError(
                f"Timing tool finished but wrote no result file: {output_path}"
            )
