"""Base exceptions for revbench.

This module defines the root exception hierarchy for the entire
revbench package. All domain-specific exceptions should inherit
from RevbenchError.
"""

__all__ = ["RevbenchError"]


class RevbenchError(Exception):
    """Base exception for all revbench errors.

    Provides a common exception type for clients to catch framework errors.
    """

    pass
