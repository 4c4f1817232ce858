"""Unit tests for the revbench CLI.

Tests cover the argument parser, argument validation, command
dispatching and the exit codes returned by main.
"""

import argparse
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from revbench import __version__
from revbench.benchmark.exceptions import DirtyRepositoryError
from revbench.benchmark.runner import BenchmarkRunner
from revbench.cli.commands import RunBenchmarksCommand, ValidateConfigCommand
from revbench.cli.exceptions import CommandError
from revbench.cli.main import CommandDispatcher, main
from revbench.cli.parser import create_parser
from revbench.cli.validators import validate_args
from revbench.config.settings import Settings
from revbench.models.results import FailureInfo, RunOutcome


@pytest.fixture
def repository(tmp_path: Path) -> Path:
    """Provide a directory standing in for the repository."""
    path = tmp_path / "repo"
    path.mkdir()
    return path


class TestCreateParser:
    """Tests for the create_parser function."""

    def test_parser_returns_argumentparser(self) -> None:
        """Test that create_parser returns an ArgumentParser instance."""
        assert isinstance(create_parser(), argparse.ArgumentParser)

    def test_parser_has_version_flag(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test that --version prints the version and exits."""
        with pytest.raises(SystemExit) as exc:
            create_parser().parse_args(["--version"])

        assert exc.value.code == 0
        assert __version__ in capsys.readouterr().out

    def test_run_command(self) -> None:
        """Test the run command with all options."""
        args = create_parser().parse_args(
            [
                "run",
                "bench.yaml",
                "app-a",
                "app-b",
                "-r",
                "../tool",
                "--command-prefix",
                "node {repository}/cli.js",
                "--results-dir",
                "out",
                "-v",
                "--json-logs",
            ]
        )

        assert args.command == "run"
        assert args.config == "bench.yaml"
        assert args.project_dirs == ["app-a", "app-b"]
        assert args.repository == "../tool"
        assert args.command_prefix == "node {repository}/cli.js"
        assert args.results_dir == "out"
        assert args.verbose is True
        assert args.json_logs is True

    def test_run_defaults(self) -> None:
        """Test optional run arguments default to None or empty."""
        args = create_parser().parse_args(["run", "bench.yaml", "--repository", "."])

        assert args.project_dirs == []
        assert args.command_prefix is None
        assert args.results_dir is None
        assert args.verbose is False

    def test_run_requires_repository(self) -> None:
        """Test that run without --repository is rejected."""
        with pytest.raises(SystemExit):
            create_parser().parse_args(["run", "bench.yaml"])

    def test_command_is_required(self) -> None:
        """Test that a subcommand must be given."""
        with pytest.raises(SystemExit):
            create_parser().parse_args([])


class TestValidateArgs:
    """Tests for the validate_args function."""

    def test_valid_run_returns_none(self, config_file: Path, repository: Path) -> None:
        """Test that existing paths pass validation."""
        args = argparse.Namespace(
            config=str(config_file),
            repository=str(repository),
            project_dirs=[str(repository)],
        )

        assert validate_args(args) is None

    def test_error_config_not_found(self, tmp_path: Path) -> None:
        """Test that a missing configuration file is reported."""
        args = argparse.Namespace(config=str(tmp_path / "missing.yaml"))

        assert validate_args(args) == (
            f"Error: Configuration file not found: {tmp_path / 'missing.yaml'}"
        )

    def test_error_config_not_yaml(self, tmp_path: Path) -> None:
        """Test that a non-YAML configuration file is reported."""
        path = tmp_path / "bench.json"
        path.write_text("{}", encoding="utf-8")

        error = validate_args(argparse.Namespace(config=str(path)))

        assert error is not None
        assert "must be YAML" in error

    def test_error_repository_not_found(self, config_file: Path, tmp_path: Path) -> None:
        """Test that a missing repository directory is reported."""
        args = argparse.Namespace(
            config=str(config_file), repository=str(tmp_path / "nope"), project_dirs=[]
        )

        error = validate_args(args)

        assert error is not None
        assert "Repository directory not found" in error

    def test_error_project_dir_not_found(
        self, config_file: Path, repository: Path, tmp_path: Path
    ) -> None:
        """Test that a missing project directory is reported."""
        args = argparse.Namespace(
            config=str(config_file),
            repository=str(repository),
            project_dirs=[str(tmp_path / "gone")],
        )

        error = validate_args(args)

        assert error is not None
        assert "Project directory not found" in error


class TestRunBenchmarksCommand:
    """Tests for the run command."""

    def test_build_runner_prefers_flags(self) -> None:
        """Test CLI flags override settings."""
        settings = Settings(command_prefix="from-settings", timing_tool="hf")
        args = argparse.Namespace(
            command_prefix="from-flag", results_dir=None, verbose=True
        )

        runner = RunBenchmarksCommand(settings).build_runner(args)

        assert runner.command_prefix == "from-flag"
        assert runner.results_dir is None
        assert runner.verbose is True

    def test_build_runner_falls_back_to_settings(self, tmp_path: Path) -> None:
        """Test settings apply when flags are absent."""
        settings = Settings(command_prefix="npx", results_dir=tmp_path)
        args = argparse.Namespace(command_prefix=None, results_dir=None, verbose=False)

        runner = RunBenchmarksCommand(settings).build_runner(args)

        assert runner.command_prefix == "npx"
        assert runner.results_dir == tmp_path

    @pytest.mark.asyncio
    async def test_execute_reports_failures(self, config_file: Path, repository: Path) -> None:
        """Test a run with failures returns exit code 1 and the failures."""
        failure = FailureInfo(
            revision_key="baseline",
            revision_name="Baseline",
            commit_hash="a" * 40,
            error="boom",
        )
        runner = AsyncMock(spec=BenchmarkRunner)
        runner.run.return_value = RunOutcome(success=False, failures=(failure,))
        command = RunBenchmarksCommand(Settings())
        args = argparse.Namespace(
            config=str(config_file), repository=str(repository), project_dirs=[]
        )

        with patch.object(command, "build_runner", return_value=runner):
            result = await command.execute(args)

        assert result.exit_code == 1
        assert result.failures == [failure]
        assert result.message == "Completed with 1 failure(s)"
        runner.run.assert_awaited_once_with(
            config_path=config_file,
            repository_path=repository.resolve(),
            project_dirs=None,
        )


class TestValidateConfigCommand:
    """Tests for the validate command."""

    def test_valid_config(
        self, config_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test a valid configuration prints details in verbose mode."""
        assert ValidateConfigCommand().validate_config(config_file, verbose=True)

        out = capsys.readouterr().out
        assert "baseline: Baseline [merge-base main feature]" in out
        assert "current: Current [HEAD]" in out
        assert f"Validation successful: {config_file}" in out

    def test_invalid_config(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test an invalid configuration prints the error."""
        path = tmp_path / "bad.yaml"
        path.write_text("hyperfine: {}\n", encoding="utf-8")

        assert not ValidateConfigCommand().validate_config(path)
        assert "Validation failed:" in capsys.readouterr().out

    def test_undecodable_config(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test a file that is not valid UTF-8 is reported as a validation failure."""
        path = tmp_path / "binary.yaml"
        path.write_bytes(b"\xff\xfe\x00\x01")

        assert not ValidateConfigCommand().validate_config(path)
        assert "Failed to read YAML file" in capsys.readouterr().out


class TestCommandDispatcher:
    """Tests for CommandDispatcher."""

    @pytest.mark.asyncio
    async def test_unknown_command(self) -> None:
        """Test dispatching an unregistered command raises."""
        dispatcher = CommandDispatcher(commands=[ValidateConfigCommand()])

        with pytest.raises(CommandError, match="Unknown command: 'run'"):
            await dispatcher.dispatch(argparse.Namespace(command="run"))


class TestMain:
    """Tests for main exit codes."""

    def test_validate_success(self, config_file: Path) -> None:
        """Test validating a good configuration exits 0."""
        assert main(["validate", str(config_file)]) == 0

    def test_validate_failure(self, tmp_path: Path) -> None:
        """Test validating a bad configuration exits 1."""
        path = tmp_path / "bad.yaml"
        path.write_text("revisions: {}\n", encoding="utf-8")

        assert main(["validate", str(path)]) == 1

    def test_invalid_arguments(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test argument validation errors exit 1."""
        assert main(["validate", str(tmp_path / "missing.yaml")]) == 1
        assert "Configuration file not found" in capsys.readouterr().err

    def test_fatal_error(
        self,
        config_file: Path,
        repository: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """Test a pipeline error exits 1 with its message."""
        runner = AsyncMock(spec=BenchmarkRunner)
        runner.run.side_effect = DirtyRepositoryError()

        with patch.object(RunBenchmarksCommand, "build_runner", return_value=runner):
            code = main(["run", str(config_file), "--repository", str(repository)])

        assert code == 1
        assert "Repository has uncommitted changes" in capsys.readouterr().err

    def test_run_with_failures(
        self,
        config_file: Path,
        repository: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """Test failed revisions are printed and exit 1."""
        runner = AsyncMock(spec=BenchmarkRunner)
        runner.run.return_value = RunOutcome(
            success=False,
            failures=(
                FailureInfo(
                    revision_key="current",
                    revision_name="Current",
                    commit_hash="b" * 40,
                    error="npm ci failed",
                ),
            ),
        )

        with patch.object(RunBenchmarksCommand, "build_runner", return_value=runner):
            code = main(["run", str(config_file), "-r", str(repository)])

        assert code == 1
        assert "Failed: Current (current)" in capsys.readouterr().err

    def test_keyboard_interrupt(self, config_file: Path) -> None:
        """Test an interrupted run exits 130."""
        with patch.object(
            CommandDispatcher, "dispatch", new=AsyncMock(side_effect=KeyboardInterrupt)
        ):
            assert main(["validate", str(config_file)]) == 130
