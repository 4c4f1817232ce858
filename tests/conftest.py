"""Pytest configuration and shared fixtures for the revbench test suite.

This module provides a sample configuration, resolved revisions, and
AsyncMock doubles for git, the package manager and the timing tool. The
timing tool double writes a hyperfine-shaped export so the full pipeline
can run without external programs.
"""

import json
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock

import pytest
import yaml

from revbench.benchmark.aggregator import ResultAggregator
from revbench.benchmark.planner import ExecutionPlanner
from revbench.benchmark.utils import build_command_name
from revbench.config.loaders.benchmark import parse_configuration
from revbench.models.configuration import Configuration
from revbench.models.invocation import TimingInvocation
from revbench.models.plan import ExecutionPlan, ResolvedRevision
from revbench.models.results import AggregatedResults, RevisionExecutionResult

BASELINE_COMMIT = "a" * 40
CURRENT_COMMIT = "b" * 40


@pytest.fixture
def baseline_commit() -> str:
    """Provide the commit the baseline revision resolves to."""
    return BASELINE_COMMIT


@pytest.fixture
def current_commit() -> str:
    """Provide the commit the current revision resolves to."""
    return CURRENT_COMMIT


def timing_entry(command: str, mean: float, stddev: float | None = 0.01) -> dict[str, Any]:
    """Build one entry of a hyperfine JSON export."""
    return {
        "command": command,
        "mean": mean,
        "stddev": stddev,
        "median": mean,
        "user": mean / 2,
        "system": mean / 4,
        "min": mean - 0.05,
        "max": mean + 0.05,
        "times": [mean - 0.05, mean, mean + 0.05],
    }


def write_export(invocation: TimingInvocation, base_mean: float = 1.0) -> None:
    """Write a hyperfine export for every command of an invocation."""
    results = [
        timing_entry(command.command_name, base_mean + position)
        for position, command in enumerate(invocation.commands)
    ]
    invocation.export_path.write_text(json.dumps({"results": results}), encoding="utf-8")


@pytest.fixture
def config_data() -> dict[str, Any]:
    """Provide a raw configuration with both revision strategies.

    Benchmark 0 runs everywhere in one group. Benchmark 1 is restricted to
    ``current`` and belongs to two groups.
    """
    return {
        "hyperfine": {"warmup": 1, "runs": 5},
        "revisions": {
            "baseline": {
                "name": "Baseline",
                "revision": {"merge_base_from": "feature", "target_branch": "main"},
            },
            "current": {"name": "Current", "revision": "HEAD"},
        },
        "groups": {
            "build": {"name": "Build"},
            "serve": {"name": "Serve"},
        },
        "benchmarks": [
            {
                "command": "build",
                "groups": {"build": {"name": "build"}},
            },
            {
                "command": "build --all",
                "prepare": "rm -rf dist",
                "groups": {
                    "build": {"name": "build all"},
                    "serve": {"name": "serve after build"},
                },
                "revisions": ["current"],
            },
        ],
    }


@pytest.fixture
def configuration(config_data: dict[str, Any]) -> Configuration:
    """Provide the parsed sample configuration."""
    return parse_configuration(config_data)


@pytest.fixture
def config_file(tmp_path: Path, config_data: dict[str, Any]) -> Path:
    """Write the sample configuration to a YAML file."""
    path = tmp_path / "benchmarks.yaml"
    path.write_text(yaml.safe_dump(config_data, sort_keys=False), encoding="utf-8")
    return path


@pytest.fixture
def resolved_revisions() -> list[ResolvedRevision]:
    """Provide resolved revisions in declaration order."""
    return [
        ResolvedRevision(key="baseline", name="Baseline", commit_hash=BASELINE_COMMIT),
        ResolvedRevision(key="current", name="Current", commit_hash=CURRENT_COMMIT),
    ]


@pytest.fixture
def execution_plan(
    configuration: Configuration, resolved_revisions: list[ResolvedRevision]
) -> ExecutionPlan:
    """Provide the plan for the sample configuration."""
    return ExecutionPlanner().plan(configuration, resolved_revisions)


@pytest.fixture
def mock_vcs() -> AsyncMock:
    """Provide a clean repository double that resolves both revisions."""
    vcs = AsyncMock()
    vcs.is_clean.return_value = True
    vcs.resolve_reference.return_value = CURRENT_COMMIT
    vcs.resolve_merge_base.return_value = BASELINE_COMMIT
    vcs.checkout.return_value = None
    vcs.get_head_revision.return_value = None
    return vcs


@pytest.fixture
def mock_package_manager() -> AsyncMock:
    """Provide a package manager double whose installs succeed."""
    package_manager = AsyncMock()
    package_manager.install.return_value = None
    return package_manager


@pytest.fixture
def mock_timing_tool() -> AsyncMock:
    """Provide a timing tool double that writes a hyperfine export."""
    timing_tool = AsyncMock()
    timing_tool.run.side_effect = write_export
    return timing_tool


@pytest.fixture
def make_timing_entry():
    """Provide a factory for hyperfine export entries."""
    return timing_entry


@pytest.fixture
def aggregated_results(
    tmp_path: Path,
    configuration: Configuration,
    execution_plan: ExecutionPlan,
) -> AggregatedResults:
    """Provide aggregated results for a successful run.

    Means are 1.0 for baseline ``build``, 0.8 for current ``build`` and
    2.0 for current ``build all``.
    """
    means = {"baseline": [1.0], "current": [0.8, 2.0]}
    execution_results = {}
    for revision_plan in execution_plan.revisions:
        key = revision_plan.revision_key
        entries = [
            timing_entry(build_command_name(revision_plan.name, key, benchmark), mean)
            for benchmark, mean in zip(revision_plan.benchmarks, means[key])
        ]
        path = tmp_path / f"{key}.json"
        path.write_text(json.dumps({"results": entries}), encoding="utf-8")
        execution_results[key] = RevisionExecutionResult(
            revision_key=key, success=True, result_file_path=path
        )
    return ResultAggregator().aggregate(configuration, execution_plan, execution_results)
