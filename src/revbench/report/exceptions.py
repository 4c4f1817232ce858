"""Exceptions for report module.

This module defines exceptions related to report generation
and writing report files.
"""

from revbench.exceptions import RevbenchError

__all__ = [
    "ReportError",
    "ReportGenerationError",
]


class ReportError(RevbenchError):
    """Base exception for report errors."""

    pass


class ReportGenerationError(ReportError):
    """Raised when a report cannot be generated or written."""

    pass
