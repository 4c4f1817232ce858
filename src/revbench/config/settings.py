"""Application settings using pydantic-settings.

This module provides environment variable support for runtime options
that are not part of a benchmark configuration file. Settings can be
overridden via environment variables with the ``REVBENCH_`` prefix.

Environment Variables:
    REVBENCH_TIMING_TOOL: Timing tool executable (default: hyperfine)
    REVBENCH_PACKAGE_MANAGER: Package manager executable (default: npm)
    REVBENCH_INSTALL_ARGS: JSON list of install arguments (default: ["ci"])
    REVBENCH_COMMAND_PREFIX: Prefix prepended to every benchmark command
    REVBENCH_EXTRA_ENV: JSON mapping merged into the timing tool environment
    REVBENCH_RESULTS_DIR: Directory for raw result files
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from revbench.config.defaults import (
    DEFAULT_INSTALL_ARGS,
    DEFAULT_PACKAGE_MANAGER,
    DEFAULT_TIMING_TOOL,
)

__all__ = ["Settings", "get_settings"]


class Settings(BaseSettings):
    """Runtime settings for a benchmark run.

    Attributes:
        timing_tool: Executable used to time benchmark commands.
        package_manager: Executable used to install repository dependencies.
        install_args: Arguments passed to the package manager install call.
        command_prefix: Prefix prepended to each benchmark command. The
            placeholder ``{repository}`` is replaced with the repository path.
        extra_env: Variables merged over the inherited environment for the
            timing tool invocation.
        results_dir: Directory for raw result files. Defaults to each
            project directory when unset.

    """

    model_config = SettingsConfigDict(
        env_prefix="REVBENCH_",
        extra="ignore",
    )

    timing_tool: str = Field(
        default=DEFAULT_TIMING_TOOL,
        min_length=1,
        description="Executable used to time benchmark commands",
    )
    package_manager: str = Field(
        default=DEFAULT_PACKAGE_MANAGER,
        min_length=1,
        description="Executable used to install repository dependencies",
    )
    install_args: list[str] = Field(
        default_factory=lambda: list(DEFAULT_INSTALL_ARGS),
        description="Arguments for the dependency install command",
    )
    command_prefix: str = Field(
        default="",
        description="Prefix prepended to every benchmark command",
    )
    extra_env: dict[str, str] = Field(
        default_factory=dict,
        description="Environment variables for the timing tool invocation",
    )
    results_dir: Path | None = Field(
        default=None,
        description="Directory for raw result files (default: project directory)",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the cached settings singleton.

    Returns:
        The Settings instance with values from environment variables.

    """
    return Settings()
