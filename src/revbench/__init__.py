"""revbench - compare benchmark timings across git revisions.

Resolves declared revisions to commits, plans which benchmarks run on which
revision, drives hyperfine once per revision and aggregates the raw timings
into per-revision and per-group views for reporting.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
