"""Shared utilities for the benchmark pipeline.

The executor and the aggregator both rely on build_command_name, so a
label written into a result file can always be matched back to its
planned benchmark.
"""

from __future__ import annotations

import hashlib
from pathlib import Path

from revbench.config.defaults import PROJECT_DIGEST_LENGTH, RESULT_FILE_PREFIX
from revbench.models.plan import BenchmarkExecution

__all__ = [
    "build_command_name",
    "project_slug",
    "resolve_command",
    "result_file_path",
    "sanitize_path_component",
]

REPOSITORY_PLACEHOLDER = "{repository}"


def sanitize_path_component(name: str) -> str:
    """Sanitize a string for safe use in filesystem paths.

    Prevents path traversal by replacing dangerous characters.

    Args:
        name: The string to sanitize.

    Returns:
        A filesystem-safe version of the string.

    """
    if not name:
        return "unnamed"

    replacements = {"/": "-", "\\": "-", "..": "_"}
    safe = name
    for old, new in replacements.items():
        safe = safe.replace(old, new)

    safe = "".join(c if c.isalnum() or c in "-_." else "_" for c in safe)

    while safe and safe[0] in ".-":
        safe = safe[1:]

    return safe or "unnamed"


def project_slug(project_dir: Path) -> str:
    """Build a short identifier unique to a project directory.

    Args:
        project_dir: The project directory.

    Returns:
        The sanitized directory name followed by a digest of its absolute path,
        e.g. ``"app-1a2b3c4d"``.

    """
    resolved = project_dir.resolve()
    digest = hashlib.sha1(str(resolved).encode("utf-8")).hexdigest()
    return f"{sanitize_path_component(resolved.name)}-{digest[:PROJECT_DIGEST_LENGTH]}"


def result_file_path(
    results_dir: Path,
    project_dir: Path,
    revision_key: str,
    commit_hash: str,
) -> Path:
    """Get the path of a revision's raw result file.

    Args:
        results_dir: Directory result files are written to.
        project_dir: Project directory the benchmarks run in.
        revision_key: Key of the revision.
        commit_hash: Commit the revision resolved to.

    Returns:
        Absolute path of the result file.

    """
    name = (
        f"{RESULT_FILE_PREFIX}-{project_slug(project_dir)}-"
        f"{sanitize_path_component(revision_key)}-{commit_hash}.json"
    )
    return (results_dir / name).resolve()


def build_command_name(
    revision_name: str,
    revision_key: str,
    benchmark: BenchmarkExecution,
) -> str:
    """Build the label a benchmark is run under.

    The label is unique within a revision because it carries the
    benchmark's configuration index.

    Args:
        revision_name: Display name of the revision.
        revision_key: Key of the revision.
        benchmark: The scheduled benchmark.

    Returns:
        A label like ``"Current (current): build [#0]"``.

    """
    return (
        f"{revision_name} ({revision_key}): "
        f"{benchmark.first_display_name} [#{benchmark.index}]"
    )


def resolve_command(command: str, command_prefix: str, repository: Path) -> str:
    """Prepend the configured prefix to a benchmark command.

    Args:
        command: The benchmark command.
        command_prefix: Prefix, possibly containing ``{repository}``.
        repository: Repository path substituted for ``{repository}``.

    Returns:
        The full command line passed to the timing tool.

    """
    if not command_prefix:
        return command
    prefix = command_prefix.replace(REPOSITORY_PLACEHOLDER, str(repository))
    return f"{prefix} {command}"
