"""Configuration models for benchmark runs.

This module defines the immutable, validated in-memory representation of
a benchmark configuration: revisions to compare, groups used to cluster
results, and the benchmark definitions themselves.

Collections are stored as tuples and exposed through accessor methods that
return fresh copies, so callers can never mutate shared configuration state.
"""

from __future__ import annotations

from pydantic import Field, model_validator

from revbench.config.exceptions import ConfigurationError, RevisionStrategyError
from revbench.models.base import FrozenSchema
from revbench.models.enums import RevisionStrategy

__all__ = [
    "BenchmarkSpec",
    "Configuration",
    "Group",
    "GroupMembership",
    "MergeBaseReference",
    "Revision",
]


class MergeBaseReference(FrozenSchema):
    """Pair of branches whose common ancestor identifies a revision.

    Attributes:
        merge_base_from: Branch to find the merge base from.
        target_branch: Branch the merge base is computed against.

    """

    merge_base_from: str = Field(min_length=1)
    target_branch: str = Field(min_length=1)


class Revision(FrozenSchema):
    """A declared revision, resolved later to a concrete commit.

    Exactly one resolution strategy is populated. Reading a field that
    belongs to the other strategy raises RevisionStrategyError.

    Attributes:
        key: Unique identifier of the revision within a run.
        name: Display name.
        strategy: Resolution strategy.
        reference: Git reference for the direct strategy.
        merge_base: Branch pair for the merge_base strategy.

    """

    key: str = Field(min_length=1)
    name: str = Field(min_length=1)
    strategy: RevisionStrategy
    reference: str | None = None
    merge_base: MergeBaseReference | None = None

    @model_validator(mode="after")
    def validate_strategy_fields(self) -> Revision:
        """Ensure exactly the fields of the declared strategy are populated."""
        if self.strategy == RevisionStrategy.direct:
            if not self.reference or self.merge_base is not None:
                raise ValueError(
                    f"Revision '{self.key}' with direct strategy requires "
                    "a reference and no merge_base"
                )
        elif self.merge_base is None or self.reference is not None:
            raise ValueError(
                f"Revision '{self.key}' with merge_base strategy requires "
                "a merge_base and no reference"
            )
        return self

    @classmethod
    def from_reference(cls, key: str, name: str, reference: str) -> Revision:
        """Create a revision resolved from a direct git reference."""
        return cls(
            key=key,
            name=name,
            strategy=RevisionStrategy.direct,
            reference=reference,
        )

    @classmethod
    def from_merge_base(
        cls, key: str, name: str, merge_base_from: str, target_branch: str
    ) -> Revision:
        """Create a revision resolved from the merge base of two branches."""
        return cls(
            key=key,
            name=name,
            strategy=RevisionStrategy.merge_base,
            merge_base=MergeBaseReference(
                merge_base_from=merge_base_from,
                target_branch=target_branch,
            ),
        )

    def is_direct(self) -> bool:
        return self.strategy == RevisionStrategy.direct

    def is_merge_base(self) -> bool:
        return self.strategy == RevisionStrategy.merge_base

    @property
    def git_reference(self) -> str:
        """Git reference of a direct revision.

        Raises:
            RevisionStrategyError: If this is not a direct revision.

        """
        if not self.is_direct() or self.reference is None:
            raise RevisionStrategyError(
                f"Revision '{self.key}' is not a direct reference"
            )
        return self.reference

    @property
    def merge_base_from(self) -> str:
        """Branch the merge base is computed from.

        Raises:
            RevisionStrategyError: If this is not a merge_base revision.

        """
        return self._require_merge_base().merge_base_from

    @property
    def target_branch(self) -> str:
        """Target branch of the merge base computation.

        Raises:
            RevisionStrategyError: If this is not a merge_base revision.

        """
        return self._require_merge_base().target_branch

    def _require_merge_base(self) -> MergeBaseReference:
        if not self.is_merge_base() or self.merge_base is None:
            raise RevisionStrategyError(
                f"Revision '{self.key}' is not a merge_base reference"
            )
        return self.merge_base


class Group(FrozenSchema):
    """Organizational label used to cluster benchmark results.

    Attributes:
        key: Unique identifier of the group.
        name: Display name.

    """

    key: str = Field(min_length=1)
    name: str = Field(min_length=1)


class GroupMembership(FrozenSchema):
    """A benchmark's membership in one group.

    Attributes:
        group_key: Key of the group.
        display_name: Name of the benchmark within that group.

    """

    group_key: str = Field(min_length=1)
    display_name: str = Field(min_length=1)


class BenchmarkSpec(FrozenSchema):
    """A single declared benchmark.

    Attributes:
        index: Position in the declared benchmark list.
        command: The command under test.
        prepare: Optional setup command run before each timed invocation.
        memberships: Group memberships in declaration order (at least one).
        revision_keys: Revisions this benchmark is restricted to, or None
            to run on every revision.

    """

    index: int = Field(ge=0)
    command: str = Field(min_length=1)
    prepare: str | None = None
    memberships: tuple[GroupMembership, ...] = Field(min_length=1)
    revision_keys: tuple[str, ...] | None = None

    @model_validator(mode="after")
    def validate_memberships_and_revisions(self) -> BenchmarkSpec:
        """Reject duplicate group keys and empty revision restrictions."""
        keys = [m.group_key for m in self.memberships]
        if len(keys) != len(set(keys)):
            raise ValueError(
                f"Benchmark {self.index} lists the same group more than once"
            )
        if self.revision_keys is not None and not self.revision_keys:
            raise ValueError(
                f"Benchmark {self.index} revisions must not be empty if provided"
            )
        return self

    def should_run_on_revision(self, revision_key: str) -> bool:
        """Check whether this benchmark applies to a revision.

        Args:
            revision_key: The revision key to check.

        Returns:
            True if no restriction is declared or the key is in the restriction.

        """
        if self.revision_keys is None:
            return True
        return revision_key in self.revision_keys

    def group_keys(self) -> list[str]:
        return [m.group_key for m in self.memberships]

    def group_memberships(self) -> dict[str, str]:
        """Get a copy of the group key to display name mapping."""
        return {m.group_key: m.display_name for m in self.memberships}

    def get_group_display_name(self, group_key: str) -> str:
        """Get this benchmark's display name within a group.

        Raises:
            ConfigurationError: If the benchmark is not a member of the group.

        """
        for membership in self.memberships:
            if membership.group_key == group_key:
                return membership.display_name
        raise ConfigurationError(
            f"Benchmark {self.index} is not a member of group '{group_key}'"
        )


class Configuration(FrozenSchema):
    """Complete, validated benchmark configuration for one run.

    Attributes:
        warmup: Warmup runs per benchmark before timing.
        runs: Timed runs per benchmark.
        revisions: Declared revisions in declaration order.
        groups: Declared groups in declaration order.
        benchmarks: Declared benchmarks in declaration order.

    """

    warmup: int = Field(ge=0)
    runs: int = Field(ge=1)
    revisions: tuple[Revision, ...] = Field(min_length=1)
    groups: tuple[Group, ...] = Field(min_length=1)
    benchmarks: tuple[BenchmarkSpec, ...] = Field(min_length=1)

    @model_validator(mode="after")
    def validate_references(self) -> Configuration:
        """Ensure unique keys and that every benchmark reference resolves."""
        revision_keys = [r.key for r in self.revisions]
        group_keys = [g.key for g in self.groups]
        if len(revision_keys) != len(set(revision_keys)):
            raise ValueError("Revision keys must be unique")
        if len(group_keys) != len(set(group_keys)):
            raise ValueError("Group keys must be unique")

        known_revisions = set(revision_keys)
        known_groups = set(group_keys)
        for position, spec in enumerate(self.benchmarks):
            if spec.index != position:
                raise ValueError(
                    f"Benchmark at position {position} has index {spec.index}"
                )
            for group_key in spec.group_keys():
                if group_key not in known_groups:
                    raise ValueError(
                        f"Benchmark {spec.index} references unknown group '{group_key}'"
                    )
            for revision_key in spec.revision_keys or ():
                if revision_key not in known_revisions:
                    raise ValueError(
                        f"Benchmark {spec.index} references unknown revision "
                        f"'{revision_key}'"
                    )
        return self

    def revision_keys(self) -> list[str]:
        return [r.key for r in self.revisions]

    def group_keys(self) -> list[str]:
        return [g.key for g in self.groups]

    def revisions_map(self) -> dict[str, Revision]:
        """Get a copy of the revision key to Revision mapping."""
        return {r.key: r for r in self.revisions}

    def groups_map(self) -> dict[str, Group]:
        """Get a copy of the group key to Group mapping."""
        return {g.key: g for g in self.groups}

    def get_revision(self, key: str) -> Revision:
        """Get a revision by key.

        Raises:
            ConfigurationError: If the key is not declared.

        """
        for revision in self.revisions:
            if revision.key == key:
                return revision
        raise ConfigurationError(f"Unknown revision key: {key}")

    def get_group(self, key: str) -> Group:
        """Get a group by key.

        Raises:
            ConfigurationError: If the key is not declared.

        """
        for group in self.groups:
            if group.key == key:
                return group
        raise ConfigurationError(f"Unknown group key: {key}")
