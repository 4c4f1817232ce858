"""Timing tool invocation models."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field

from revbench.models.base import FrozenSchema

__all__ = ["TimingCommand", "TimingInvocation"]


class TimingCommand(FrozenSchema):
    """One command to time, with its label and optional setup command."""

    command_name: str
    command: str
    prepare: str | None = None


class TimingInvocation(FrozenSchema):
    """A single batched run of the timing tool.

    Attributes:
        warmup: Warmup runs per command.
        runs: Timed runs per command.
        commands: Commands in the order they are passed to the tool.
        export_path: Where the tool writes its JSON export.
        working_directory: Directory the tool runs in.
        env: Variables merged over the inherited environment.

    """

    warmup: int = Field(ge=0)
    runs: int = Field(ge=1)
    commands: tuple[TimingCommand, ...] = Field(min_length=1)
    export_path: Path
    working_directory: Path
    env: dict[str, str] = Field(default_factory=dict)
