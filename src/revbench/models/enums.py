"""Enumeration types for revbench.

This module defines the enum types used throughout the benchmark
pipeline, including revision resolution strategies and per-revision
execution states.
"""

from enum import Enum

__all__ = [
    "RevisionStrategy",
    "RevisionState",
]


class RevisionStrategy(str, Enum):
    """How a declared revision is turned into a commit.

    Attributes:
        direct: A git reference (branch, tag or commit) resolved with rev-parse.
        merge_base: The common ancestor of two branches.
    """

    direct = "direct"
    merge_base = "merge_base"


class RevisionState(str, Enum):
    """Lifecycle of a single revision within a run.

    Attributes:
        planned: Revision has a plan but nothing has been executed yet.
        executing: Checkout, install or timing is in progress.
        succeeded_with_results: Timing tool finished and wrote a result file.
        succeeded_empty: Revision had no benchmarks and was skipped.
        failed: Checkout, install or timing failed.
    """

    planned = "planned"
    executing = "executing"
    succeeded_with_results = "succeeded_with_results"
    succeeded_empty = "succeeded_empty"
    failed = "failed"
