"""Benchmark configuration loader.

This module provides functionality to load benchmark configurations
from YAML files, parsing them into strongly-typed models with validation.

Expected structure::

    hyperfine:
      warmup: 1
      runs: 5
    revisions:
      baseline:
        name: "Baseline"
        revision:
          merge_base_from: feature
          target_branch: main
      current:
        name: "Current"
        revision: HEAD
    groups:
      build:
        name: "Build"
    benchmarks:
      - command: "build"
        prepare: "rm -rf dist"
        groups:
          build:
            name: "build (clean)"
        revisions: [current]
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import ValidationError

from revbench.config.defaults import RUNS_MIN, WARMUP_MIN
from revbench.config.exceptions import ConfigurationError
from revbench.config.loaders._common import load_yaml_file
from revbench.config.validators import FieldValidator
from revbench.logging_config import get_logger
from revbench.models.configuration import (
    BenchmarkSpec,
    Configuration,
    Group,
    GroupMembership,
    Revision,
)

__all__ = ["load_configuration", "parse_configuration"]

logger = get_logger(__name__)


def load_configuration(path: Path | str) -> Configuration:
    """Load and validate a benchmark configuration from a YAML file.

    Args:
        path: Path to the YAML file to load. Can be a string or Path object.

    Returns:
        Configuration: The parsed and validated configuration.

    Raises:
        ConfigurationError: If the file is missing, unreadable, not valid
            YAML, or the content is invalid.

    Example:
        >>> config = load_configuration("benchmarks/build.yaml")
        >>> config.revision_keys()
        ['baseline', 'current']

    """
    path = Path(path)
    data = load_yaml_file(path, label="Configuration file")
    configuration = parse_configuration(data, context=f"configuration: {path}")
    logger.debug(
        "configuration_loaded",
        path=str(path),
        revisions=len(configuration.revisions),
        groups=len(configuration.groups),
        benchmarks=len(configuration.benchmarks),
    )
    return configuration


def parse_configuration(data: Any, context: str = "configuration") -> Configuration:
    """Parse an untyped object graph into a Configuration.

    Validation fails fast on the first problem found, in this order:
    hyperfine options, revisions, groups, benchmarks, cross-references.

    Args:
        data: The raw object, typically a dict from YAML parsing.
        context: Context string for error messages.

    Returns:
        Configuration: The parsed configuration.

    Raises:
        ConfigurationError: If required fields are missing or invalid, or
            a benchmark references an undeclared group or revision.

    """
    v = FieldValidator(data, context)
    v.require_mapping()

    hyperfine = v.require_mapping_field("hyperfine", non_empty=False)
    hv = FieldValidator(hyperfine, f"hyperfine in {context}")
    warmup = hv.require_int("warmup", minimum=WARMUP_MIN)
    runs = hv.require_int("runs", minimum=RUNS_MIN)

    revisions = [
        _parse_revision(key, value, context)
        for key, value in v.require_mapping_field("revisions").items()
    ]
    groups = [
        _parse_group(key, value, context)
        for key, value in v.require_mapping_field("groups").items()
    ]

    benchmarks_data = v.require("benchmarks", list)
    if not benchmarks_data:
        raise ConfigurationError(
            f"Empty 'benchmarks': at least one benchmark required in {context}"
        )
    benchmarks = [
        _parse_benchmark(item, index, context)
        for index, item in enumerate(benchmarks_data)
    ]

    _check_references(benchmarks, revisions, groups)

    try:
        return Configuration(
            warmup=warmup,
            runs=runs,
            revisions=tuple(revisions),
            groups=tuple(groups),
            benchmarks=tuple(benchmarks),
        )
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration in {context}: {e}") from e


def _parse_revision(key: str, data: Any, context: str) -> Revision:
    """Parse one entry of the revisions mapping.

    A string ``revision`` is a direct git reference; a mapping must carry
    both ``merge_base_from`` and ``target_branch``.

    """
    revision_context = f"revision '{key}' in {context}"
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Invalid revision '{key}': expected mapping, "
            f"got {type(data).__name__} in {context}"
        )
    v = FieldValidator(data, revision_context)
    name = v.require("name", str, transform=str.strip, empty_check=True)

    definition = data.get("revision")
    if definition is None or definition == "":
        raise ConfigurationError(
            f"Missing required field 'revision' in {revision_context}"
        )

    try:
        if isinstance(definition, str):
            reference = definition.strip()
            if not reference:
                raise ConfigurationError(
                    f"Invalid 'revision': must be a non-empty string in {revision_context}"
                )
            return Revision.from_reference(key, name, reference)

        if isinstance(definition, dict):
            mv = FieldValidator(definition, f"merge base of {revision_context}")
            merge_base_from = mv.require(
                "merge_base_from", str, transform=str.strip, empty_check=True
            )
            target_branch = mv.require(
                "target_branch", str, transform=str.strip, empty_check=True
            )
            return Revision.from_merge_base(key, name, merge_base_from, target_branch)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid revision '{key}' in {context}: {e}") from e

    raise ConfigurationError(
        f"Invalid 'revision': expected string or mapping, "
        f"got {type(definition).__name__} in {revision_context}"
    )


def _parse_group(key: str, data: Any, context: str) -> Group:
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Invalid group '{key}': expected mapping, "
            f"got {type(data).__name__} in {context}"
        )
    v = FieldValidator(data, f"group '{key}' in {context}")
    name = v.require("name", str, transform=str.strip, empty_check=True)
    return Group(key=key, name=name)


def _parse_benchmark(data: Any, index: int, context: str) -> BenchmarkSpec:
    """Parse one entry of the benchmarks list.

    Args:
        data: The raw benchmark entry.
        index: Position of the entry in the benchmarks list.
        context: Context string for error messages.

    Returns:
        BenchmarkSpec: The parsed benchmark, cross-references unchecked.

    Raises:
        ConfigurationError: If the entry is malformed.

    """
    benchmark_context = f"benchmark[{index}] in {context}"
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Invalid benchmark[{index}]: expected mapping, "
            f"got {type(data).__name__} in {context}"
        )
    v = FieldValidator(data, benchmark_context)

    command = v.require("command", str, transform=str.strip, empty_check=True)
    prepare = v.optional("prepare", str, transform=str.strip) or None

    memberships = []
    for group_key, membership in v.require_mapping_field("groups").items():
        if not isinstance(membership, dict):
            raise ConfigurationError(
                f"Invalid group '{group_key}': expected mapping, "
                f"got {type(membership).__name__} in {benchmark_context}"
            )
        mv = FieldValidator(membership, f"group '{group_key}' of {benchmark_context}")
        display_name = mv.require("name", str, transform=str.strip, empty_check=True)
        memberships.append(
            GroupMembership(group_key=group_key, display_name=display_name)
        )

    revision_keys = v.optional_list("revisions", str, non_empty=True)

    try:
        return BenchmarkSpec(
            index=index,
            command=command,
            prepare=prepare,
            memberships=tuple(memberships),
            revision_keys=tuple(revision_keys) if revision_keys is not None else None,
        )
    except ValidationError as e:
        raise ConfigurationError(f"Invalid {benchmark_context}: {e}") from e


def _check_references(
    benchmarks: list[BenchmarkSpec],
    revisions: list[Revision],
    groups: list[Group],
) -> None:
    """Ensure every group and revision a benchmark names is declared.

    Raises:
        ConfigurationError: On the first unknown reference.

    """
    revision_keys = {r.key for r in revisions}
    group_keys = {g.key for g in groups}
    for spec in benchmarks:
        for group_key in spec.group_keys():
            if group_key not in group_keys:
                raise ConfigurationError(
                    f"Benchmark {spec.index} references unknown group '{group_key}'"
                )
        for revision_key in spec.revision_keys or ():
            if revision_key not in revision_keys:
                raise ConfigurationError(
                    f"Benchmark {spec.index} references unknown revision "
                    f"'{revision_key}'"
                )
