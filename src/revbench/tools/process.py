"""Asynchronous execution of external programs.

All external tools are started through run_process so that spawn and
exit failures surface as the same exception types.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Mapping, Sequence
from pathlib import Path
from typing import Protocol

from revbench.logging_config import get_logger
from revbench.tools.exceptions import ProcessExitError, ProcessSpawnError

__all__ = ["ProcessRunner", "run_process"]

logger = get_logger(__name__)


class ProcessRunner(Protocol):
    """Callable signature shared by run_process and its test doubles."""

    def __call__(
        self,
        program: str,
        args: Sequence[str],
        *,
        cwd: Path | None = None,
        env: Mapping[str, str] | None = None,
        capture_output: bool = True,
        error_message: str | None = None,
    ) -> Awaitable[str]: ...


async def run_process(
    program: str,
    args: Sequence[str],
    *,
    cwd: Path | None = None,
    env: Mapping[str, str] | None = None,
    capture_output: bool = True,
    error_message: str | None = None,
) -> str:
    """Run a program to completion.

    Args:
        program: Executable name or path.
        args: Arguments passed to the program.
        cwd: Working directory, defaults to the current one.
        env: Complete environment for the child, defaults to inheriting ours.
        capture_output: If True, capture stdout and stderr. Otherwise the
            child writes directly to our terminal.
        error_message: Summary used when the program exits non-zero
            (default: "<program> failed").

    Returns:
        Captured stdout with surrounding whitespace removed, or an empty
        string when output is not captured.

    Raises:
        ProcessSpawnError: If the program cannot be started.
        ProcessExitError: If the program exits with a non-zero code.

    """
    pipe = asyncio.subprocess.PIPE if capture_output else None
    logger.debug("process_starting", program=program, args=list(args), cwd=str(cwd))

    try:
        process = await asyncio.create_subprocess_exec(
            program,
            *args,
            cwd=cwd,
            env=dict(env) if env is not None else None,
            stdout=pipe,
            stderr=pipe,
        )
    except OSError as e:
        raise ProcessSpawnError(program, e.strerror or str(e)) from e

    stdout, stderr = await process.communicate()

    if process.returncode != 0:
        raise ProcessExitError(
            program,
            process.returncode,
            error_message or f"{program} failed",
            stderr=stderr.decode("utf-8", errors="replace").strip()
            if capture_output
            else None,
        )

    if not capture_output:
        return ""
    return stdout.decode("utf-8", errors="replace").strip()
