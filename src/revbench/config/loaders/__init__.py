"""Configuration loaders.

This module provides the loader for benchmark configuration files.
"""

from revbench.config.loaders.benchmark import load_configuration, parse_configuration

__all__ = ["load_configuration", "parse_configuration"]
