"""CLI command implementations.

This module exports the command classes for the CLI.
"""

from revbench.cli.commands.base import BaseCommand, CommandResult
from revbench.cli.commands.run import RunBenchmarksCommand
from revbench.cli.commands.validate import ValidateConfigCommand

__all__ = [
    "BaseCommand",
    "CommandResult",
    "RunBenchmarksCommand",
    "ValidateConfigCommand",
]
