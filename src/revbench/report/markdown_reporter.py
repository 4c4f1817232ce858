"""Markdown report generation from aggregated results.

The report contains run metadata, a failures section when any revision
failed, one section per group (comparison table, Mermaid bar chart and
detailed statistics) and a closing list of revisions.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from revbench.config.defaults import SHORT_HASH_LENGTH
from revbench.models.results import (
    AggregatedResults,
    FailureInfo,
    GroupRevisionEntry,
    GroupResult,
    RevisionResult,
)
from revbench.report.formatting import iso_timestamp

__all__ = ["MarkdownReporter"]

CHART_HEADROOM = 1.1
FAILED_MARK = "❌ Failed"


def _seconds(value: float) -> str:
    return f"{value:.3f}"


def _stddev(entry: GroupRevisionEntry, unit: str = "") -> str:
    if entry.result is None or entry.result.stddev is None:
        return "N/A"
    return f"{_seconds(entry.result.stddev)}{unit}"


class MarkdownReporter:
    """Renders AggregatedResults as a human-readable Markdown document."""

    def generate(
        self,
        results: AggregatedResults,
        project_revision: str | None,
        working_directory: Path,
        timestamp: datetime,
    ) -> str:
        """Generate the Markdown report.

        Args:
            results: Aggregated results of one project directory.
            project_revision: Commit of the project directory, if any.
            working_directory: Directory the benchmarks ran in.
            timestamp: Time of the run.

        Returns:
            The report as Markdown text.

        """
        parts = ["# Benchmark Results\n\n"]
        parts.append(
            self._metadata(timestamp, working_directory, project_revision, results)
        )

        if results.failures:
            parts.append(self._failures_section(results.failures))

        for group in results.groups.values():
            parts.append(self._group_section(group, results.revisions))

        parts.append("## Revisions\n\n")
        for key, revision in results.revisions.items():
            line = f"- **{revision.name}** (`{key}`): `{revision.commit_hash}`"
            if not revision.success:
                line += f" {FAILED_MARK}"
            parts.append(line + "\n")
        parts.append("\n")

        return "".join(parts)

    def _metadata(
        self,
        timestamp: datetime,
        working_directory: Path,
        project_revision: str | None,
        results: AggregatedResults,
    ) -> str:
        lines = [
            f"**Generated:** {iso_timestamp(timestamp)}\n\n",
            f"**Benchmark Directory:** `{working_directory}`\n\n",
        ]
        if project_revision:
            lines.append(f"**Project Git Revision:** `{project_revision}`\n\n")
        lines.append("**Revisions Benchmarked:**\n")
        for key, revision in results.revisions.items():
            lines.append(f"- {revision.name} (`{key}`): `{revision.commit_hash}`\n")
        lines.append("\n")
        return "".join(lines)

    def _failures_section(self, failures: tuple[FailureInfo, ...]) -> str:
        lines = [
            "## ⚠️ Failures\n\n",
            "The following revisions encountered errors during benchmarking:\n\n",
        ]
        for failure in failures:
            lines.append(f"### {failure.revision_name} (`{failure.revision_key}`)\n\n")
            lines.append(f"**Commit:** `{failure.commit_hash}`\n\n")
            lines.append(f"**Error:**\n```\n{failure.error}\n```\n\n")
        return "".join(lines)

    def _group_section(
        self,
        group: GroupResult,
        revisions: dict[str, RevisionResult],
    ) -> str:
        section = f"## {group.group_name}\n\n"
        if not group.benchmarks:
            return section + "*No benchmarks in this group.*\n\n"
        return (
            section
            + self._comparison_table(group, revisions)
            + self._mermaid_chart(group, revisions)
            + self._detailed_results(group)
        )

    def _comparison_table(
        self,
        group: GroupResult,
        revisions: dict[str, RevisionResult],
    ) -> str:
        """Table with one row per display name and one column per revision.

        Cells are ``mean ± stddev``, ``-`` when the row did not run on that
        revision, or a failure mark.

        """
        header = "| Benchmark |" + "".join(f" {r.name} (s) |" for r in revisions.values())
        separator = "|-----------|" + "--------------|" * len(revisions)
        rows = []
        for row in group.benchmarks:
            cells = []
            for key in revisions:
                entry = row.revisions.get(key)
                if entry is None:
                    cells.append(" - |")
                elif not entry.success or entry.result is None:
                    cells.append(f" {FAILED_MARK} |")
                else:
                    cells.append(f" {_seconds(entry.result.mean)} ± {_stddev(entry)} |")
            rows.append(f"| {row.display_name} |" + "".join(cells))
        return "\n".join([header, separator, *rows]) + "\n\n"

    def _mermaid_chart(
        self,
        group: GroupResult,
        revisions: dict[str, RevisionResult],
    ) -> str:
        names: list[str] = []
        values: list[float] = []
        for row in group.benchmarks:
            for key in revisions:
                entry = row.revisions.get(key)
                if entry is not None and entry.success and entry.result is not None:
                    names.append(f"{row.display_name} ({entry.revision_name})")
                    values.append(entry.result.mean)

        if not names:
            return ""

        x_axis = ", ".join(f'"{name}"' for name in names)
        y_max = max(values) * CHART_HEADROOM
        bars = ", ".join(_seconds(v) for v in values)
        return (
            "\n### Performance Comparison Chart\n\n"
            "```mermaid\n"
            "---\n"
            "config:\n"
            "  xyChart:\n"
            '    chartOrientation: "horizontal"\n'
            "---\n"
            "xychart-beta\n"
            '  title "Benchmark Execution Time (seconds)"\n'
            f"  x-axis [{x_axis}]\n"
            f'  y-axis "Time (seconds)" 0 --> {y_max:.1f}\n'
            f"  bar [{bars}]\n"
            "```\n\n"
        )

    def _detailed_results(self, group: GroupResult) -> str:
        lines = ["### Detailed Results\n\n"]
        for row in group.benchmarks:
            lines.append(f"#### {row.display_name}\n\n")
            for key, entry in row.revisions.items():
                short_hash = entry.commit_hash[:SHORT_HASH_LENGTH]
                lines.append(f"**{entry.revision_name}** (`{key}` - `{short_hash}`):\n")
                if not entry.success or entry.result is None:
                    lines.append(f"- {FAILED_MARK}\n\n")
                    continue
                result = entry.result
                lines.append(
                    f"- Mean: {_seconds(result.mean)}s ± {_stddev(entry, 's')}\n"
                )
                lines.append(f"- Min: {_seconds(result.min)}s\n")
                lines.append(f"- Max: {_seconds(result.max)}s\n")
                lines.append(f"- Median: {_seconds(result.median)}s\n\n")
        return "".join(lines)
