"""Timestamp and file name helpers shared by the reporters."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

from revbench.config.defaults import JSON_REPORT_PREFIX, SUMMARY_REPORT_PREFIX
from revbench.report.exceptions import ReportGenerationError

__all__ = [
    "file_timestamp",
    "iso_timestamp",
    "json_report_path",
    "summary_report_path",
    "write_report",
]


def iso_timestamp(timestamp: datetime) -> str:
    """Format a timestamp as UTC ISO-8601 with milliseconds.

    Naive timestamps are taken to be UTC.

    Example:
        >>> iso_timestamp(datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc))
        '2024-01-15T10:30:00.000Z'

    """
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=timezone.utc)
    utc = timestamp.astimezone(timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


def file_timestamp(timestamp: datetime) -> str:
    """ISO timestamp with ':' and '.' replaced, safe for file names."""
    return iso_timestamp(timestamp).replace(":", "-").replace(".", "-")


def summary_report_path(project_dir: Path, timestamp: datetime) -> Path:
    return (project_dir / f"{SUMMARY_REPORT_PREFIX}-{file_timestamp(timestamp)}.md").resolve()


def json_report_path(project_dir: Path, timestamp: datetime) -> Path:
    return (project_dir / f"{JSON_REPORT_PREFIX}-{file_timestamp(timestamp)}.json").resolve()


def write_report(content: str, path: Path) -> None:
    """Write a report file, creating parent directories if needed.

    Raises:
        ReportGenerationError: If the file cannot be written.

    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise ReportGenerationError(f"Failed to save report to {path}: {e}") from e
