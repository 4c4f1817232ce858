"""Run benchmarks command implementation.

This module implements the command that runs a benchmark configuration
against a repository and writes reports.
"""

from argparse import Namespace
from pathlib import Path

from revbench.benchmark.runner import BenchmarkRunner
from revbench.cli.commands.base import BaseCommand, CommandResult
from revbench.config.settings import Settings, get_settings
from revbench.logging_config import get_logger
from revbench.tools.git import GitRepository
from revbench.tools.hyperfine import HyperfineTool
from revbench.tools.npm import NpmPackageManager

__all__ = ["RunBenchmarksCommand"]

logger = get_logger(__name__)


class RunBenchmarksCommand(BaseCommand):
    """Command to run a benchmark configuration."""

    def __init__(self, settings: Settings | None = None) -> None:
        """Initialize the command.

        Args:
            settings: Runtime settings (default: from the environment).

        """
        self._settings = settings

    @property
    def name(self) -> str:
        """Get the command name."""
        return "run"

    def build_runner(self, args: Namespace) -> BenchmarkRunner:
        """Create a runner wired to the real tools, CLI flags over settings.

        Args:
            args: Parsed arguments.

        Returns:
            A configured BenchmarkRunner.

        """
        settings = self._settings or get_settings()

        command_prefix = getattr(args, "command_prefix", None)
        if command_prefix is None:
            command_prefix = settings.command_prefix

        results_dir = getattr(args, "results_dir", None)
        resolved_results_dir = (
            Path(results_dir).resolve()
            if results_dir is not None
            else settings.results_dir
        )

        return BenchmarkRunner(
            GitRepository(),
            NpmPackageManager(settings.package_manager, settings.install_args),
            HyperfineTool(settings.timing_tool),
            command_prefix=command_prefix,
            extra_env=settings.extra_env,
            results_dir=resolved_results_dir,
            verbose=getattr(args, "verbose", False),
        )

    async def execute(self, args: Namespace) -> CommandResult:
        """Execute the run command.

        Args:
            args: Parsed arguments with config path, project dirs and repository.

        Returns:
            CommandResult, exit code 1 if any revision failed.

        """
        runner = self.build_runner(args)
        project_dirs = [Path(d).resolve() for d in getattr(args, "project_dirs", [])]

        outcome = await runner.run(
            config_path=Path(args.config),
            repository_path=Path(args.repository).resolve(),
            project_dirs=project_dirs or None,
        )

        if outcome.success:
            return CommandResult(
                exit_code=0,
                message="All benchmarks completed successfully",
            )

        return CommandResult(
            exit_code=1,
            failures=list(outcome.failures),
            message=f"Completed with {len(outcome.failures)} failure(s)",
        )
