"""Validate configuration command implementation.

This module implements the command for validating a benchmark
configuration file without touching git.
"""

from argparse import Namespace
from pathlib import Path

from revbench.cli.commands.base import BaseCommand, CommandResult
from revbench.config.exceptions import ConfigurationError
from revbench.config.loaders.benchmark import load_configuration

__all__ = ["ValidateConfigCommand"]


class ValidateConfigCommand(BaseCommand):
    """Command to validate a benchmark configuration."""

    @property
    def name(self) -> str:
        """Get the command name."""
        return "validate"

    async def execute(self, args: Namespace) -> CommandResult:
        """Execute the validate command.

        Args:
            args: Parsed arguments with the config path.

        Returns:
            CommandResult with validation status.

        """
        success = self.validate_config(
            config_path=Path(args.config),
            verbose=getattr(args, "verbose", False),
        )

        return CommandResult(
            exit_code=0 if success else 1,
            message="Validation successful" if success else "Validation failed",
        )

    def validate_config(self, config_path: Path, verbose: bool = False) -> bool:
        """Validate a configuration file.

        Args:
            config_path: Path to the YAML configuration.
            verbose: Whether to print the parsed contents.

        Returns:
            True if valid, False otherwise.

        """
        try:
            config = load_configuration(config_path)
        except ConfigurationError as e:
            print(f"Validation failed: {e}")
            return False

        if verbose:
            print(f"Hyperfine: warmup={config.warmup}, runs={config.runs}")
            print()
            print("Revisions:")
            for revision in config.revisions:
                if revision.is_direct():
                    target = revision.git_reference
                else:
                    target = (
                        f"merge-base {revision.target_branch} "
                        f"{revision.merge_base_from}"
                    )
                print(f"  - {revision.key}: {revision.name} [{target}]")
            print("Groups:")
            for group in config.groups:
                print(f"  - {group.key}: {group.name}")
            print("Benchmarks:")
            for spec in config.benchmarks:
                restriction = (
                    ", ".join(spec.revision_keys) if spec.revision_keys else "all"
                )
                print(f"  [{spec.index}] {spec.command}")
                print(f"    Groups: {', '.join(spec.group_keys())}")
                print(f"    Revisions: {restriction}")

        print(f"\nValidation successful: {config_path}")
        return True
