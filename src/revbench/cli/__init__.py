"""Command-line interface for revbench."""

from revbench.cli.main import CommandDispatcher, main

__all__ = ["CommandDispatcher", "main"]
