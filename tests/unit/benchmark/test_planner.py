"""Unit tests for ExecutionPlanner and the plan summary."""

from typing import Any

from revbench.benchmark.planner import ExecutionPlanner, format_plan_summary
from revbench.config.loaders.benchmark import parse_configuration
from revbench.models.configuration import Configuration
from revbench.models.plan import ExecutionPlan, ResolvedRevision


class TestExecutionPlanner:
    """Tests for planning benchmarks across revisions."""

    def test_one_plan_per_revision(self, execution_plan: ExecutionPlan) -> None:
        """Test the plan follows resolved revision order."""
        assert execution_plan.revision_keys() == ["baseline", "current"]

    def test_restrictions_are_honored(self, execution_plan: ExecutionPlan) -> None:
        """Test restricted benchmarks only appear on listed revisions."""
        baseline = execution_plan.get("baseline")
        current = execution_plan.get("current")

        assert baseline is not None and current is not None
        assert [b.index for b in baseline.benchmarks] == [0]
        assert [b.index for b in current.benchmarks] == [0, 1]
        assert execution_plan.total_benchmarks() == 3

    def test_carries_benchmark_fields(
        self, execution_plan: ExecutionPlan, current_commit: str
    ) -> None:
        """Test commands, prepare steps and memberships reach the plan."""
        current = execution_plan.get("current")

        assert current is not None
        assert current.commit_hash == current_commit
        benchmark = current.benchmarks[1]
        assert benchmark.command == "build --all"
        assert benchmark.prepare == "rm -rf dist"
        assert [m.group_key for m in benchmark.group_memberships] == ["build", "serve"]

    def test_revision_without_benchmarks(
        self,
        config_data: dict[str, Any],
        resolved_revisions: list[ResolvedRevision],
    ) -> None:
        """Test a revision no benchmark applies to gets an empty plan."""
        config_data["benchmarks"][0]["revisions"] = ["current"]
        config = parse_configuration(config_data)

        plan = ExecutionPlanner().plan(config, resolved_revisions)

        baseline = plan.get("baseline")
        assert baseline is not None
        assert baseline.is_empty()

    def test_is_deterministic(
        self,
        configuration: Configuration,
        resolved_revisions: list[ResolvedRevision],
    ) -> None:
        """Test planning twice yields equal plans."""
        planner = ExecutionPlanner()

        assert planner.plan(configuration, resolved_revisions) == planner.plan(
            configuration, resolved_revisions
        )


class TestFormatPlanSummary:
    """Tests for the human-readable plan summary."""

    def test_summary_layout(self, execution_plan: ExecutionPlan) -> None:
        """Test the summary lists revisions, benchmarks and groups."""
        expected = (
            "Execution Plan:\n"
            "\n"
            "  Baseline (baseline): aaaaaaaa\n"
            "    1 benchmark(s):\n"
            "      [0] build\n"
            '        Groups: build: "build"\n'
            "\n"
            "  Current (current): bbbbbbbb\n"
            "    2 benchmark(s):\n"
            "      [0] build\n"
            '        Groups: build: "build"\n'
            "      [1] build --all (prepare: rm -rf dist)\n"
            '        Groups: build: "build all", serve: "serve after build"\n'
        )

        assert format_plan_summary(execution_plan) == expected

    def test_command_prefix_is_shown(self, execution_plan: ExecutionPlan) -> None:
        """Test the prefix appears before each command."""
        summary = format_plan_summary(execution_plan, command_prefix="npx")

        assert "      [0] npx build\n" in summary
        assert "      [1] npx build --all (prepare: rm -rf dist)\n" in summary
