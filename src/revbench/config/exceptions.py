"""Exceptions for config module.

This module defines exceptions related to configuration loading,
parsing, and validation errors.
"""

from revbench.exceptions import RevbenchError

__all__ = ["ConfigurationError", "RevisionStrategyError"]


class ConfigurationError(RevbenchError):
    """Base exception for configuration-related errors."""

    pass


class RevisionStrategyError(ConfigurationError):
    """Raised when a revision field of the other resolution strategy is read."""

    pass
