"""YAML reading shared by the configuration loaders."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from revbench.config.exceptions import ConfigurationError

__all__ = ["load_yaml_file"]


def load_yaml_file(
    path: Path,
    error_class: type[Exception] = ConfigurationError,
    label: str = "File",
) -> dict[str, Any]:
    """Read a YAML document whose top level must be a mapping.

    Args:
        path: Path to the YAML file.
        error_class: Exception raised for every failure below.
        label: Names the file in the not-found message, e.g. "Configuration file".

    Returns:
        The top-level mapping.

    Raises:
        error_class: If the file does not exist, cannot be read or parsed,
            is empty, or is not a mapping.

    """
    if not path.is_file():
        raise error_class(f"{label} not found: {path}")

    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise error_class(f"Failed to parse YAML file {path}: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise error_class(f"Failed to read YAML file {path}: {e}") from e

    if data is None:
        raise error_class(f"Empty YAML file: {path}")

    if not isinstance(data, dict):
        raise error_class(
            f"Invalid YAML structure: expected mapping, got {type(data).__name__}"
        )

    return data
