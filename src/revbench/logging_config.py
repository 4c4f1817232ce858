"""Structured logging for revbench using structlog.

Log records go to stderr so that hyperfine's progress output and the
verbose plan summary on stdout stay readable. Records carry any context
bound with ``structlog.contextvars``; the runner binds the project
directory while it benchmarks one.
"""

import logging
import sys

import structlog

__all__ = ["configure_logging", "get_logger"]


def _processors(json_output: bool) -> list[structlog.types.Processor]:
    renderer: structlog.types.Processor
    if json_output:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        renderer,
    ]


def configure_logging(verbose: bool = False, json_output: bool = False) -> None:
    """Configure logging for a CLI invocation.

    Debug records (state transitions, spawned processes) are shown only in
    verbose mode.

    Args:
        verbose: Enable debug-level records.
        json_output: Render one JSON object per record, for CI logs.

    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=logging.DEBUG if verbose else logging.INFO,
        force=True,
    )
    structlog.contextvars.clear_contextvars()
    structlog.configure(
        processors=_processors(json_output),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger.

    Example:
        logger = get_logger(__name__)
        logger.info("revision_resolved", revision="baseline", commit="a1b2c3d")

    """
    return structlog.get_logger(name)
