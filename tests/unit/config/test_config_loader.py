"""Unit tests for the benchmark configuration loader.

Tests parse_configuration against valid and invalid object graphs and
load_configuration against files on disk.
"""

import copy
from pathlib import Path
from typing import Any

import pytest

from revbench.config.exceptions import ConfigurationError
from revbench.config.loaders.benchmark import load_configuration, parse_configuration
from revbench.models.enums import RevisionStrategy


class TestParseConfigurationValid:
    """Tests for parsing a valid configuration."""

    def test_parses_hyperfine_options(self, config_data: dict[str, Any]) -> None:
        """Test warmup and runs are read from the hyperfine section."""
        config = parse_configuration(config_data)

        assert config.warmup == 1
        assert config.runs == 5

    def test_preserves_declaration_order(self, config_data: dict[str, Any]) -> None:
        """Test revisions, groups and benchmarks keep declaration order."""
        config = parse_configuration(config_data)

        assert config.revision_keys() == ["baseline", "current"]
        assert config.group_keys() == ["build", "serve"]
        assert [b.index for b in config.benchmarks] == [0, 1]

    def test_parses_both_revision_strategies(self, config_data: dict[str, Any]) -> None:
        """Test a string is a direct reference and a mapping is a merge base."""
        config = parse_configuration(config_data)

        baseline = config.get_revision("baseline")
        current = config.get_revision("current")
        assert baseline.strategy == RevisionStrategy.merge_base
        assert baseline.merge_base_from == "feature"
        assert baseline.target_branch == "main"
        assert current.strategy == RevisionStrategy.direct
        assert current.git_reference == "HEAD"

    def test_parses_benchmark_fields(self, config_data: dict[str, Any]) -> None:
        """Test command, prepare, memberships and revision restriction."""
        config = parse_configuration(config_data)
        spec = config.benchmarks[1]

        assert spec.command == "build --all"
        assert spec.prepare == "rm -rf dist"
        assert spec.group_memberships() == {
            "build": "build all",
            "serve": "serve after build",
        }
        assert spec.revision_keys == ("current",)

    def test_optional_fields_default_to_none(self, config_data: dict[str, Any]) -> None:
        """Test prepare and revisions are None when omitted."""
        config = parse_configuration(config_data)
        spec = config.benchmarks[0]

        assert spec.prepare is None
        assert spec.revision_keys is None

    def test_empty_prepare_is_none(self, config_data: dict[str, Any]) -> None:
        """Test an empty prepare string is treated as absent."""
        config_data["benchmarks"][0]["prepare"] = ""

        config = parse_configuration(config_data)

        assert config.benchmarks[0].prepare is None

    def test_does_not_alias_input(self, config_data: dict[str, Any]) -> None:
        """Test later changes to the input do not affect the configuration."""
        original = copy.deepcopy(config_data)
        config = parse_configuration(config_data)

        config_data["benchmarks"][1]["revisions"].append("baseline")
        config_data["revisions"]["current"]["name"] = "Changed"

        assert config.benchmarks[1].revision_keys == tuple(
            original["benchmarks"][1]["revisions"]
        )
        assert config.get_revision("current").name == "Current"

    def test_zero_warmup_allowed(self, config_data: dict[str, Any]) -> None:
        """Test warmup may be zero."""
        config_data["hyperfine"]["warmup"] = 0

        assert parse_configuration(config_data).warmup == 0


class TestParseConfigurationInvalid:
    """Tests for rejected configurations."""

    def test_non_mapping_root(self) -> None:
        """Test the root must be a mapping."""
        with pytest.raises(ConfigurationError, match="expected mapping"):
            parse_configuration(["not", "a", "mapping"])

    def test_missing_hyperfine(self, config_data: dict[str, Any]) -> None:
        """Test the hyperfine section is required."""
        del config_data["hyperfine"]

        with pytest.raises(ConfigurationError, match="Missing required field 'hyperfine'"):
            parse_configuration(config_data)

    def test_negative_warmup(self, config_data: dict[str, Any]) -> None:
        """Test warmup must be non-negative."""
        config_data["hyperfine"]["warmup"] = -1

        with pytest.raises(ConfigurationError, match="'warmup': must be >= 0"):
            parse_configuration(config_data)

    def test_zero_runs(self, config_data: dict[str, Any]) -> None:
        """Test runs must be at least one."""
        config_data["hyperfine"]["runs"] = 0

        with pytest.raises(ConfigurationError, match="'runs': must be >= 1"):
            parse_configuration(config_data)

    def test_boolean_runs(self, config_data: dict[str, Any]) -> None:
        """Test a boolean is not accepted as an integer."""
        config_data["hyperfine"]["runs"] = True

        with pytest.raises(ConfigurationError, match="expected int, got bool"):
            parse_configuration(config_data)

    def test_empty_revisions(self, config_data: dict[str, Any]) -> None:
        """Test at least one revision is required."""
        config_data["revisions"] = {}

        with pytest.raises(ConfigurationError, match="Empty 'revisions'"):
            parse_configuration(config_data)

    def test_empty_groups(self, config_data: dict[str, Any]) -> None:
        """Test at least one group is required."""
        config_data["groups"] = {}

        with pytest.raises(ConfigurationError, match="Empty 'groups'"):
            parse_configuration(config_data)

    def test_empty_benchmarks(self, config_data: dict[str, Any]) -> None:
        """Test at least one benchmark is required."""
        config_data["benchmarks"] = []

        with pytest.raises(ConfigurationError, match="Empty 'benchmarks'"):
            parse_configuration(config_data)

    def test_revision_without_name(self, config_data: dict[str, Any]) -> None:
        """Test a revision requires a name."""
        del config_data["revisions"]["current"]["name"]

        with pytest.raises(ConfigurationError, match="Missing required field 'name'"):
            parse_configuration(config_data)

    def test_revision_without_definition(self, config_data: dict[str, Any]) -> None:
        """Test a revision requires a revision definition."""
        del config_data["revisions"]["current"]["revision"]

        with pytest.raises(
            ConfigurationError, match="Missing required field 'revision' in revision 'current'"
        ):
            parse_configuration(config_data)

    def test_merge_base_missing_target(self, config_data: dict[str, Any]) -> None:
        """Test a merge base needs both branches."""
        del config_data["revisions"]["baseline"]["revision"]["target_branch"]

        with pytest.raises(ConfigurationError, match="'target_branch'"):
            parse_configuration(config_data)

    def test_revision_of_wrong_type(self, config_data: dict[str, Any]) -> None:
        """Test a revision definition must be a string or mapping."""
        config_data["revisions"]["current"]["revision"] = 42

        with pytest.raises(ConfigurationError, match="expected string or mapping"):
            parse_configuration(config_data)

    def test_benchmark_without_command(self, config_data: dict[str, Any]) -> None:
        """Test a benchmark requires a command."""
        del config_data["benchmarks"][0]["command"]

        with pytest.raises(ConfigurationError, match="Missing required field 'command'"):
            parse_configuration(config_data)

    def test_prepare_of_wrong_type(self, config_data: dict[str, Any]) -> None:
        """Test prepare must be a string when present."""
        config_data["benchmarks"][0]["prepare"] = ["rm", "-rf"]

        with pytest.raises(ConfigurationError, match="Invalid 'prepare'"):
            parse_configuration(config_data)

    def test_benchmark_without_groups(self, config_data: dict[str, Any]) -> None:
        """Test a benchmark must belong to at least one group."""
        config_data["benchmarks"][0]["groups"] = {}

        with pytest.raises(ConfigurationError, match="Empty 'groups'"):
            parse_configuration(config_data)

    def test_membership_without_name(self, config_data: dict[str, Any]) -> None:
        """Test a group membership requires a display name."""
        config_data["benchmarks"][0]["groups"]["build"] = {}

        with pytest.raises(ConfigurationError, match="Missing required field 'name'"):
            parse_configuration(config_data)

    def test_empty_revision_restriction(self, config_data: dict[str, Any]) -> None:
        """Test a present revisions list must not be empty."""
        config_data["benchmarks"][1]["revisions"] = []

        with pytest.raises(ConfigurationError, match="Empty 'revisions' list"):
            parse_configuration(config_data)

    def test_non_string_revision_restriction(self, config_data: dict[str, Any]) -> None:
        """Test revision keys in a restriction must be strings."""
        config_data["benchmarks"][1]["revisions"] = [1]

        with pytest.raises(ConfigurationError, match="all items must be str"):
            parse_configuration(config_data)

    def test_unknown_group_reference(self, config_data: dict[str, Any]) -> None:
        """Test referencing an undeclared group fails."""
        config_data["benchmarks"][0]["groups"]["missing"] = {"name": "x"}

        with pytest.raises(
            ConfigurationError, match="Benchmark 0 references unknown group 'missing'"
        ):
            parse_configuration(config_data)

    def test_unknown_revision_reference(self, config_data: dict[str, Any]) -> None:
        """Test referencing an undeclared revision fails."""
        config_data["benchmarks"][1]["revisions"] = ["nightly"]

        with pytest.raises(
            ConfigurationError, match="Benchmark 1 references unknown revision 'nightly'"
        ):
            parse_configuration(config_data)

    def test_non_string_key(self, config_data: dict[str, Any]) -> None:
        """Test revision keys must be strings."""
        config_data["revisions"][1] = {"name": "One", "revision": "v1"}

        with pytest.raises(ConfigurationError, match="keys must be non-empty strings"):
            parse_configuration(config_data)


class TestLoadConfiguration:
    """Tests for loading configuration files."""

    def test_loads_yaml_file(self, config_file: Path) -> None:
        """Test a valid YAML file is loaded."""
        config = load_configuration(config_file)

        assert config.revision_keys() == ["baseline", "current"]

    def test_accepts_string_path(self, config_file: Path) -> None:
        """Test a string path is accepted."""
        config = load_configuration(str(config_file))

        assert len(config.benchmarks) == 2

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test a missing file raises ConfigurationError."""
        with pytest.raises(ConfigurationError, match="Configuration file not found"):
            load_configuration(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        """Test a YAML syntax error raises ConfigurationError."""
        path = tmp_path / "broken.yaml"
        path.write_text("revisions: [unclosed\n", encoding="utf-8")

        with pytest.raises(ConfigurationError, match="Failed to parse YAML"):
            load_configuration(path)

    def test_empty_file(self, tmp_path: Path) -> None:
        """Test an empty file raises ConfigurationError."""
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")

        with pytest.raises(ConfigurationError, match="Empty YAML file"):
            load_configuration(path)

    def test_non_mapping_document(self, tmp_path: Path) -> None:
        """Test a list document raises ConfigurationError."""
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")

        with pytest.raises(ConfigurationError, match="expected mapping, got list"):
            load_configuration(path)

    def test_non_utf8_file(self, tmp_path: Path) -> None:
        """Test a file that is not valid UTF-8 raises ConfigurationError."""
        path = tmp_path / "latin1.yaml"
        path.write_bytes(b"runs: \xff\xfe\n")

        with pytest.raises(ConfigurationError, match="Failed to read YAML file"):
            load_configuration(path)
