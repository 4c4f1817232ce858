"""Adapters for the external tools driven by the pipeline.

- protocols: VersionControl, PackageManager, TimingTool
- git: GitRepository
- npm: NpmPackageManager
- hyperfine: HyperfineTool
- process: run_process
"""

from revbench.tools.exceptions import (
    ProcessExitError,
    ProcessSpawnError,
    TimingToolNotFoundError,
    ToolError,
)
from revbench.tools.git import GitRepository
from revbench.tools.hyperfine import HyperfineTool, build_arguments
from revbench.tools.npm import NpmPackageManager
from revbench.tools.process import ProcessRunner, run_process
from revbench.tools.protocols import PackageManager, TimingTool, VersionControl

__all__ = [
    "GitRepository",
    "HyperfineTool",
    "NpmPackageManager",
    "PackageManager",
    "ProcessExitError",
    "ProcessRunner",
    "ProcessSpawnError",
    "TimingTool",
    "TimingToolNotFoundError",
    "ToolError",
    "VersionControl",
    "build_arguments",
    "run_process",
]
