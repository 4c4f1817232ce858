"""Timing tool adapter for hyperfine.

hyperfine is invoked once per revision with every benchmark batched into
a single call, and writes its statistics to a JSON export file.
"""

from __future__ import annotations

import os
import shutil

from revbench.config.defaults import DEFAULT_TIMING_TOOL, TIMING_TOOL_INSTALL_HINT
from revbench.models.invocation import TimingInvocation
from revbench.tools.exceptions import ProcessSpawnError, TimingToolNotFoundError
from revbench.tools.process import ProcessRunner, run_process

__all__ = ["HyperfineTool", "build_arguments"]


def build_arguments(invocation: TimingInvocation) -> list[str]:
    """Build the hyperfine argument list for an invocation.

    Each command contributes a ``--prepare`` (empty when the benchmark has
    none), ``--command-name`` and command triple, in invocation order.

    Args:
        invocation: The invocation to translate.

    Returns:
        Arguments, excluding the executable itself.

    Example:
        >>> build_arguments(invocation)
        ['--warmup', '1', '--runs', '5', '--prepare', '', '--command-name',
         'Current (current): build [#0]', 'ui5 build', '--export-json',
         '/tmp/benchmark-raw-app-1a2b3c4d-current-abc123.json']

    """
    args = ["--warmup", str(invocation.warmup), "--runs", str(invocation.runs)]
    for command in invocation.commands:
        args.extend(["--prepare", command.prepare or ""])
        args.extend(["--command-name", command.command_name, command.command])
    args.extend(["--export-json", str(invocation.export_path)])
    return args


class HyperfineTool:
    """TimingTool implementation running the hyperfine CLI."""

    def __init__(
        self,
        executable: str = DEFAULT_TIMING_TOOL,
        runner: ProcessRunner = run_process,
    ) -> None:
        self.executable = executable
        self._runner = runner

    async def run(self, invocation: TimingInvocation) -> None:
        """Run hyperfine with its output streamed to the terminal.

        Args:
            invocation: Commands, options and export location.

        Raises:
            TimingToolNotFoundError: If hyperfine is not installed.
            ProcessSpawnError: If hyperfine is installed but cannot be started,
                e.g. because the working directory is missing.
            ProcessExitError: If hyperfine exits non-zero.

        """
        env = {**os.environ, **invocation.env}
        try:
            await self._runner(
                self.executable,
                build_arguments(invocation),
                cwd=invocation.working_directory,
                env=env,
                capture_output=False,
                error_message=f"{self.executable} exited with non-zero code",
            )
        except ProcessSpawnError as e:
            if shutil.which(self.executable) is None:
                raise TimingToolNotFoundError(TIMING_TOOL_INSTALL_HINT) from e
            raise
