"""JSON report generation from aggregated results."""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any

from revbench.models.results import (
    AggregatedResults,
    GroupResult,
    RevisionResult,
    TimingResult,
)
from revbench.report.formatting import iso_timestamp

__all__ = ["JsonReporter"]


class JsonReporter:
    """Serializes AggregatedResults to a machine-readable JSON document.

    Example:
        reporter = JsonReporter()
        content = reporter.generate(results, project_revision="abc123", timestamp=now)
    """

    def generate(
        self,
        results: AggregatedResults,
        project_revision: str | None,
        timestamp: datetime,
        indent: int = 2,
    ) -> str:
        """Generate the JSON report.

        Args:
            results: Aggregated results of one project directory.
            project_revision: Commit of the project directory, if any.
            timestamp: Time of the run.
            indent: JSON indentation level (default 2).

        Returns:
            The report as a JSON string.

        """
        report = {
            "timestamp": iso_timestamp(timestamp),
            "projectRevision": project_revision or None,
            "revisions": {
                key: self._revision_to_dict(revision)
                for key, revision in results.revisions.items()
            },
            "groups": {
                key: self._group_to_dict(group) for key, group in results.groups.items()
            },
            "failures": [
                {
                    "revisionKey": failure.revision_key,
                    "revisionName": failure.revision_name,
                    "commitHash": failure.commit_hash,
                    "error": failure.error,
                }
                for failure in results.failures
            ],
        }
        return json.dumps(report, indent=indent, ensure_ascii=False)

    def _revision_to_dict(self, revision: RevisionResult) -> dict[str, Any]:
        return {
            "name": revision.name,
            "commitHash": revision.commit_hash,
            "success": revision.success,
            "error": revision.error,
            "benchmarks": [
                {
                    "index": benchmark.index,
                    "command": benchmark.command,
                    "displayName": benchmark.display_name,
                    "groupKey": benchmark.group_key,
                    "result": _timing_to_dict(benchmark.result),
                }
                for benchmark in revision.benchmarks
            ],
        }

    def _group_to_dict(self, group: GroupResult) -> dict[str, Any]:
        return {
            "name": group.group_name,
            "benchmarks": [
                {
                    "displayName": row.display_name,
                    "revisions": {
                        key: {
                            "name": entry.revision_name,
                            "commitHash": entry.commit_hash,
                            "success": entry.success,
                            "result": _timing_to_dict(entry.result),
                        }
                        for key, entry in row.revisions.items()
                    },
                }
                for row in group.benchmarks
            ],
        }


def _timing_to_dict(result: TimingResult | None) -> dict[str, Any] | None:
    """Raw timing entry as exported by the timing tool, extra keys included."""
    if result is None:
        return None
    return result.model_dump(mode="json")
