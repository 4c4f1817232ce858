"""CLI argument parser configuration.

This module provides the argument parser for the revbench CLI.
"""

import argparse

from revbench import __version__

__all__ = ["create_parser"]


def _add_common_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose output with detailed progress",
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        dest="json_logs",
        help="Emit log records as JSON instead of console output",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the CLI argument parser.

    Returns:
        An ArgumentParser configured with the run and validate commands.

    """
    parser = argparse.ArgumentParser(
        prog="revbench",
        description=(
            "revbench - Compare benchmark timings across git revisions "
            "using hyperfine."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Benchmark the current directory against the revisions in a config
  revbench run benchmarks.yaml --repository ../my-tool

  # Benchmark several project directories in one run
  revbench run benchmarks.yaml app-a app-b --repository ../my-tool --verbose

  # Invoke the tool under test through node
  revbench run benchmarks.yaml --repository ../my-tool \\
      --command-prefix "node {repository}/bin/cli.js"

  # Check a configuration file without touching git
  revbench validate benchmarks.yaml
""",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    run_parser = subparsers.add_parser(
        "run",
        help="Run benchmarks and write reports",
        description="Run all benchmarks of a configuration across its revisions.",
    )
    run_parser.add_argument(
        "config",
        metavar="CONFIG",
        help="Path to the benchmark YAML configuration",
    )
    run_parser.add_argument(
        "project_dirs",
        nargs="*",
        metavar="PROJECT_DIR",
        help="Directories to run benchmarks in (default: current directory)",
    )
    run_parser.add_argument(
        "--repository",
        "-r",
        required=True,
        metavar="PATH",
        help="Path to the git repository whose revisions are compared",
    )
    run_parser.add_argument(
        "--command-prefix",
        metavar="STR",
        dest="command_prefix",
        default=None,
        help=(
            "Prefix prepended to every benchmark command; "
            "{repository} is replaced with the repository path"
        ),
    )
    run_parser.add_argument(
        "--results-dir",
        metavar="DIR",
        dest="results_dir",
        default=None,
        help="Directory for raw result files (default: each project directory)",
    )
    _add_common_options(run_parser)

    validate_parser = subparsers.add_parser(
        "validate",
        help="Validate a configuration file",
        description="Validate a benchmark configuration without running it.",
    )
    validate_parser.add_argument(
        "config",
        metavar="CONFIG",
        help="Path to the benchmark YAML configuration",
    )
    _add_common_options(validate_parser)

    return parser
