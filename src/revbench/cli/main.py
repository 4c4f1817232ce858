"""CLI main entry point.

This module provides the main entry point for the revbench CLI.
"""

import argparse
import asyncio
import sys
import traceback

from revbench.cli.commands import (
    BaseCommand,
    RunBenchmarksCommand,
    ValidateConfigCommand,
)
from revbench.cli.exceptions import CommandError
from revbench.cli.parser import create_parser
from revbench.cli.validators import validate_args
from revbench.exceptions import RevbenchError
from revbench.logging_config import configure_logging, get_logger

__all__ = ["main", "CommandDispatcher"]

logger = get_logger(__name__)


class CommandDispatcher:
    """Dispatches CLI commands to appropriate handlers.

    Attributes:
        _commands: Command handlers keyed by command name.

    """

    def __init__(self, commands: list[BaseCommand] | None = None) -> None:
        """Initialize the command dispatcher with all command handlers.

        Args:
            commands: Handlers to register (default: run and validate).

        """
        if commands is None:
            commands = [RunBenchmarksCommand(), ValidateConfigCommand()]
        self._commands = {command.name: command for command in commands}

    async def dispatch(self, args: argparse.Namespace) -> int:
        """Dispatch to the command named in the arguments.

        Args:
            args: Parsed command-line arguments.

        Returns:
            Exit code (0 for success, non-zero for errors).

        Raises:
            CommandError: If no handler is registered for the command.

        """
        command = self._commands.get(args.command)
        if command is None:
            raise CommandError(f"Unknown command: '{args.command}'")

        result = await command.execute(args)

        for failure in result.failures:
            print(
                f"Failed: {failure.revision_name} ({failure.revision_key}) "
                f"at {failure.commit_hash}: {failure.error}",
                file=sys.stderr,
            )
        if result.message and getattr(args, "verbose", False):
            print(result.message)
        return result.exit_code


def main(argv: list[str] | None = None) -> int:
    """Run the CLI application.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:]).

    Returns:
        Exit code (0 for success, 1 for errors, 130 when interrupted).

    """
    parser = create_parser()
    args = parser.parse_args(argv)

    verbose = getattr(args, "verbose", False)
    configure_logging(verbose=verbose, json_output=getattr(args, "json_logs", False))

    error = validate_args(args)
    if error:
        print(error, file=sys.stderr)
        return 1

    try:
        dispatcher = CommandDispatcher()
        return asyncio.run(dispatcher.dispatch(args))

    except KeyboardInterrupt:
        print("\nInterrupted by user")
        return 130

    except RevbenchError as e:
        logger.error("fatal_error", error=str(e), error_type=type(e).__name__)
        print(f"Error: {e}", file=sys.stderr)
        if verbose:
            traceback.print_exc()
        return 1

    except Exception as e:
        logger.exception("unexpected_error", error=str(e))
        print(f"Unexpected error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
