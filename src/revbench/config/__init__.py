"""Configuration module for YAML-based benchmark definitions.

This module provides loaders that parse and validate benchmark
configuration files, and centralized runtime settings via
pydantic-settings.

Note: the loaders are lazily imported to avoid circular imports with
revbench.models. Import directly from revbench.config.loaders when needed.
"""

from revbench.config.exceptions import ConfigurationError, RevisionStrategyError
from revbench.config.settings import Settings, get_settings


def __getattr__(name: str):
    """Lazy import for the loaders to avoid circular imports."""
    if name in ("load_configuration", "parse_configuration"):
        from revbench.config import loaders

        return getattr(loaders, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "ConfigurationError",
    "RevisionStrategyError",
    "Settings",
    "get_settings",
    "load_configuration",
    "parse_configuration",
]
