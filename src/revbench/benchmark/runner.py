"""Benchmark runner orchestrating a complete run.

This module provides the BenchmarkRunner class that validates the
repository, loads the configuration, resolves and plans revisions, and
then executes, aggregates and reports once per project directory.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, timezone
from pathlib import Path

import structlog

from revbench.benchmark.aggregator import ResultAggregator
from revbench.benchmark.exceptions import DirtyRepositoryError
from revbench.benchmark.executor import BenchmarkExecutor, WorkingTree
from revbench.benchmark.planner import ExecutionPlanner, format_plan_summary
from revbench.benchmark.resolver import RevisionResolver
from revbench.config.loaders.benchmark import load_configuration
from revbench.logging_config import get_logger
from revbench.models.configuration import Configuration
from revbench.models.plan import ExecutionPlan
from revbench.models.results import FailureInfo, RunOutcome
from revbench.report.formatting import (
    json_report_path,
    summary_report_path,
    write_report,
)
from revbench.report.json_reporter import JsonReporter
from revbench.report.markdown_reporter import MarkdownReporter
from revbench.tools.protocols import PackageManager, TimingTool, VersionControl

__all__ = ["BenchmarkRunner"]

logger = get_logger(__name__)

BANNER_WIDTH = 80


class BenchmarkRunner:
    """Runs benchmarks across revisions and writes reports.

    Attributes:
        command_prefix: Prefix prepended to each benchmark command.
        results_dir: Directory for raw result files, None for each project
            directory.
        verbose: Whether to print progress output.

    """

    def __init__(
        self,
        vcs: VersionControl,
        package_manager: PackageManager,
        timing_tool: TimingTool,
        *,
        command_prefix: str = "",
        extra_env: dict[str, str] | None = None,
        results_dir: Path | None = None,
        verbose: bool = False,
    ) -> None:
        """Initialize the benchmark runner.

        Args:
            vcs: Version control for the repository under test.
            package_manager: Installs dependencies after each checkout.
            timing_tool: Times the benchmark commands.
            command_prefix: Prefix prepended to each benchmark command.
            extra_env: Variables passed to the timing tool on top of ours.
            results_dir: Directory for raw result files (default: each
                project directory).
            verbose: Whether to print progress output.

        """
        self._vcs = vcs
        self.command_prefix = command_prefix
        self.results_dir = results_dir
        self.verbose = verbose
        self._resolver = RevisionResolver(vcs)
        self._planner = ExecutionPlanner()
        self._executor = BenchmarkExecutor(
            vcs,
            package_manager,
            timing_tool,
            command_prefix=command_prefix,
            extra_env=extra_env,
            verbose=verbose,
        )
        self._aggregator = ResultAggregator()
        self._markdown_reporter = MarkdownReporter()
        self._json_reporter = JsonReporter()

    async def run(
        self,
        config_path: Path,
        repository_path: Path,
        project_dirs: Sequence[Path] | None = None,
        timestamp: datetime | None = None,
    ) -> RunOutcome:
        """Run all benchmarks of a configuration file.

        Args:
            config_path: Path to the YAML configuration.
            repository_path: Path to the git repository under test.
            project_dirs: Directories to benchmark in (default: current directory).
            timestamp: Time of the run (default: now).

        Returns:
            RunOutcome, successful when no revision failed in any project.

        Raises:
            DirtyRepositoryError: If the repository has uncommitted changes.
            ConfigurationError: If the configuration is invalid.
            ResolutionError: If a revision cannot be resolved.
            ReportGenerationError: If a report cannot be written.

        """
        project_dirs = list(project_dirs) if project_dirs else [Path.cwd()]
        timestamp = timestamp or datetime.now(timezone.utc)

        self._banner("Revision Benchmark Tool")

        await self._validate_repository(repository_path)

        if self.verbose:
            print(f"Loading configuration from: {config_path}")
        config = load_configuration(config_path)
        if self.verbose:
            print("✓ Configuration loaded successfully\n")

        plan = await self._prepare_plan(config, repository_path)

        working_tree = WorkingTree(repository_path)
        failures: list[FailureInfo] = []
        for project_dir in project_dirs:
            self._banner(f"Benchmarking project: {project_dir}")
            with structlog.contextvars.bound_contextvars(project=str(project_dir)):
                failures.extend(
                    await self._run_for_project(
                        config, plan, working_tree, project_dir, timestamp
                    )
                )

        if self.verbose:
            print("\n" + "=" * BANNER_WIDTH)
            if failures:
                print(f"⚠️ Completed with {len(failures)} failure(s)")
            else:
                print("✅ All benchmarks completed successfully!")
            print("=" * BANNER_WIDTH + "\n")

        logger.info(
            "run_complete",
            projects=len(project_dirs),
            failures=len(failures),
        )
        return RunOutcome(success=not failures, failures=tuple(failures))

    async def _validate_repository(self, repository_path: Path) -> None:
        """Ensure the repository has no uncommitted changes.

        Raises:
            DirtyRepositoryError: If it does.

        """
        if self.verbose:
            print(f"Checking repository status: {repository_path}")
        if not await self._vcs.is_clean(repository_path):
            raise DirtyRepositoryError()
        if self.verbose:
            print("✓ Repository is clean\n")

    async def _prepare_plan(
        self, config: Configuration, repository_path: Path
    ) -> ExecutionPlan:
        if self.verbose:
            print("Resolving revisions...")
        resolved = await self._resolver.resolve_all(config, repository_path)
        if self.verbose:
            for revision in resolved:
                print(f"  {revision.name} ({revision.key}): {revision.commit_hash}")
            print(f"✓ Resolved {len(resolved)} revision(s)\n")
            print("Planning benchmark execution...")

        plan = self._planner.plan(config, resolved)
        logger.info(
            "execution_planned",
            revisions=len(plan.revisions),
            benchmarks=plan.total_benchmarks(),
        )
        if self.verbose:
            print(format_plan_summary(plan, self.command_prefix))
        return plan

    async def _run_for_project(
        self,
        config: Configuration,
        plan: ExecutionPlan,
        working_tree: WorkingTree,
        project_dir: Path,
        timestamp: datetime,
    ) -> tuple[FailureInfo, ...]:
        """Execute, aggregate and report for one project directory.

        Returns:
            Failures recorded for this project.

        """
        project_revision = await self._vcs.get_head_revision(project_dir)
        if self.verbose:
            if project_revision:
                print(f"Project Git Revision: {project_revision}\n")
            else:
                print("Project is not a git repository\n")

        execution_results = await self._executor.run_all(
            plan,
            warmup=config.warmup,
            runs=config.runs,
            working_tree=working_tree,
            project_dir=project_dir,
            results_dir=self.results_dir,
        )

        if self.verbose:
            print("\nAggregating results...")
        results = self._aggregator.aggregate(config, plan, execution_results)

        markdown_path = summary_report_path(project_dir, timestamp)
        write_report(
            self._markdown_reporter.generate(
                results, project_revision, project_dir, timestamp
            ),
            markdown_path,
        )
        json_path = json_report_path(project_dir, timestamp)
        write_report(
            self._json_reporter.generate(results, project_revision, timestamp),
            json_path,
        )

        logger.info(
            "project_complete",
            project=str(project_dir),
            failures=len(results.failures),
            markdown_report=str(markdown_path),
            json_report=str(json_path),
        )
        if self.verbose:
            print(f"  ✓ Markdown report: {markdown_path}")
            print(f"  ✓ JSON report: {json_path}")
        return results.failures

    def _banner(self, title: str) -> None:
        if self.verbose:
            print("=" * BANNER_WIDTH)
            print(title)
            print("=" * BANNER_WIDTH)
            print()
