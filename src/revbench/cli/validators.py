"""Validation utilities for CLI arguments."""

import argparse
from pathlib import Path

__all__ = ["validate_args"]

YAML_SUFFIXES = (".yaml", ".yml")


def validate_args(args: argparse.Namespace) -> str | None:
    """Validate CLI arguments for consistency.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Error message if validation fails, None if valid.

    """
    config = getattr(args, "config", None)
    if config is not None:
        config_path = Path(config)
        if not config_path.is_file():
            return f"Error: Configuration file not found: {config}"
        if config_path.suffix not in YAML_SUFFIXES:
            return f"Error: Configuration file must be YAML: {config}"

    repository = getattr(args, "repository", None)
    if repository is not None and not Path(repository).is_dir():
        return f"Error: Repository directory not found: {repository}"

    for project_dir in getattr(args, "project_dirs", None) or []:
        if not Path(project_dir).is_dir():
            return f"Error: Project directory not found: {project_dir}"

    return None
