"""Command interface shared by the revbench subcommands."""

from abc import ABC, abstractmethod
from argparse import Namespace

from revbench.models.base import BaseSchema
from revbench.models.results import FailureInfo

__all__ = ["BaseCommand", "CommandResult"]


class CommandResult(BaseSchema):
    """Outcome of one subcommand, turned into the process exit code by main.

    Attributes:
        exit_code: Exit code for the CLI (0 for success).
        failures: Revisions that failed during the command.
        message: Optional message to display.

    """

    exit_code: int
    failures: list[FailureInfo] = []
    message: str | None = None


class BaseCommand(ABC):
    """A subcommand registered with the CommandDispatcher."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Subcommand name, as typed on the command line."""

    @abstractmethod
    async def execute(self, args: Namespace) -> CommandResult:
        """Execute the command.

        Args:
            args: Parsed command-line arguments.

        Returns:
            CommandResult with exit code and any failures.

        """
