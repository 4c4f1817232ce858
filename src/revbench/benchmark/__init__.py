"""Benchmark pipeline: resolve, plan, execute, aggregate.

- resolver: RevisionResolver
- planner: ExecutionPlanner, format_plan_summary
- executor: BenchmarkExecutor, WorkingTree
- aggregator: ResultAggregator
- runner: BenchmarkRunner orchestrating a complete run
"""

from revbench.benchmark.aggregator import ResultAggregator
from revbench.benchmark.exceptions import (
    BenchmarkError,
    CheckoutError,
    DirtyRepositoryError,
    InstallError,
    RepositoryBusyError,
    ResolutionError,
    ResultFileError,
    RevisionExecutionError,
    TimingToolError,
)
from revbench.benchmark.executor import BenchmarkExecutor, WorkingTree
from revbench.benchmark.planner import ExecutionPlanner, format_plan_summary
from revbench.benchmark.resolver import RevisionResolver
from revbench.benchmark.runner import BenchmarkRunner

__all__ = [
    "BenchmarkError",
    "BenchmarkExecutor",
    "BenchmarkRunner",
    "CheckoutError",
    "DirtyRepositoryError",
    "ExecutionPlanner",
    "InstallError",
    "RepositoryBusyError",
    "ResolutionError",
    "ResultAggregator",
    "ResultFileError",
    "RevisionExecutionError",
    "RevisionResolver",
    "TimingToolError",
    "WorkingTree",
    "format_plan_summary",
]
