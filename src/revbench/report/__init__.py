"""Report generation for aggregated benchmark results.

- json_reporter: JsonReporter for machine consumption
- markdown_reporter: MarkdownReporter for humans (tables and Mermaid charts)
- formatting: timestamps, report file names and writing
"""

from revbench.report.exceptions import ReportError, ReportGenerationError
from revbench.report.formatting import (
    json_report_path,
    summary_report_path,
    write_report,
)
from revbench.report.json_reporter import JsonReporter
from revbench.report.markdown_reporter import MarkdownReporter

__all__ = [
    "JsonReporter",
    "MarkdownReporter",
    "ReportError",
    "ReportGenerationError",
    "json_report_path",
    "summary_report_path",
    "write_report",
]
