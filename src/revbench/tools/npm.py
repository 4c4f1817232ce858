"""Dependency installation through npm."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from revbench.config.defaults import DEFAULT_INSTALL_ARGS, DEFAULT_PACKAGE_MANAGER
from revbench.tools.process import ProcessRunner, run_process

__all__ = ["NpmPackageManager"]


class NpmPackageManager:
    """PackageManager implementation running a clean npm install.

    Attributes:
        executable: Package manager executable.
        install_args: Arguments for the install call.

    """

    def __init__(
        self,
        executable: str = DEFAULT_PACKAGE_MANAGER,
        install_args: Sequence[str] = DEFAULT_INSTALL_ARGS,
        runner: ProcessRunner = run_process,
    ) -> None:
        self.executable = executable
        self.install_args = list(install_args)
        self._runner = runner

    async def install(self, repository: Path) -> None:
        """Install dependencies in the repository.

        Raises:
            ProcessSpawnError: If the executable cannot be started.
            ProcessExitError: If the install exits non-zero.

        """
        await self._runner(
            self.executable,
            self.install_args,
            cwd=repository,
            error_message=f"{self.executable} {' '.join(self.install_args)} failed",
        )
