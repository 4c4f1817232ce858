"""Models module for revbench.

This module contains the data models used across the pipeline:
- base: BaseSchema and FrozenSchema for Pydantic models
- enums: RevisionStrategy, RevisionState
- configuration: Revision, Group, BenchmarkSpec, Configuration
- invocation: TimingCommand, TimingInvocation
- plan: ResolvedRevision, BenchmarkExecution, RevisionPlan, ExecutionPlan
- results: execution outcomes and aggregated views
"""

from revbench.models.base import BaseSchema, FrozenSchema
from revbench.models.configuration import (
    BenchmarkSpec,
    Configuration,
    Group,
    GroupMembership,
    MergeBaseReference,
    Revision,
)
from revbench.models.enums import RevisionState, RevisionStrategy
from revbench.models.invocation import TimingCommand, TimingInvocation
from revbench.models.plan import (
    BenchmarkExecution,
    ExecutionPlan,
    ResolvedRevision,
    RevisionPlan,
)
from revbench.models.results import (
    AggregatedResults,
    BenchmarkResult,
    FailureInfo,
    GroupBenchmarkResult,
    GroupResult,
    GroupRevisionEntry,
    RevisionExecutionResult,
    RevisionResult,
    RunOutcome,
    TimingResult,
)

__all__ = [
    "AggregatedResults",
    "BaseSchema",
    "BenchmarkExecution",
    "BenchmarkResult",
    "BenchmarkSpec",
    "Configuration",
    "ExecutionPlan",
    "FailureInfo",
    "FrozenSchema",
    "Group",
    "GroupBenchmarkResult",
    "GroupMembership",
    "GroupResult",
    "GroupRevisionEntry",
    "MergeBaseReference",
    "ResolvedRevision",
    "Revision",
    "RevisionExecutionResult",
    "RevisionPlan",
    "RevisionResult",
    "RevisionState",
    "RevisionStrategy",
    "RunOutcome",
    "TimingCommand",
    "TimingInvocation",
    "TimingResult",
]
