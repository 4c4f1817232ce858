"""State tracking for revisions during a run.

This module provides a generic mixin for state machine functionality and
the RevisionRun entity that tracks one revision from planning to its
terminal outcome.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Generic, TypeVar

from revbench.benchmark.exceptions import InvalidRevisionStateError
from revbench.logging_config import get_logger
from revbench.models.enums import RevisionState

__all__ = ["RevisionRun", "StateMachineMixin"]

StateT = TypeVar("StateT")

logger = get_logger(__name__)


class StateMachineMixin(Generic[StateT]):
    """Mixin providing common state machine operations.

    Entities using this mixin define their own state storage and
    transition rules.

    Usage:
        Define class attributes:
        - _VALID_TRANSITIONS: dict[StateT, set[StateT]] - transition rules
        - _TERMINAL_STATES: set[StateT] - states with no outgoing transitions

        Define abstract methods to access current state:
        - _get_current_state() -> StateT

    """

    _VALID_TRANSITIONS: dict[StateT, set[StateT]]
    _TERMINAL_STATES: set[StateT]

    @abstractmethod
    def _get_current_state(self) -> StateT:
        """Get the current state of the entity."""
        ...

    def can_transition_to(self, new_state: StateT) -> bool:
        """Check if a transition to the given state is valid.

        Args:
            new_state: The target state to check.

        Returns:
            True if the transition is allowed, False otherwise.

        """
        current = self._get_current_state()
        return new_state in self._VALID_TRANSITIONS.get(current, set())

    def is_terminal(self) -> bool:
        return self._get_current_state() in self._TERMINAL_STATES

    def get_valid_transitions(self) -> list[StateT]:
        current = self._get_current_state()
        return list(self._VALID_TRANSITIONS.get(current, set()))


class RevisionRun(StateMachineMixin[RevisionState]):
    """Lifecycle of one revision within a project directory.

    A revision starts ``planned``, moves to ``executing`` and ends in exactly
    one terminal state. A revision with no benchmarks goes straight to
    ``succeeded_empty``.

    Attributes:
        revision_key: Key of the tracked revision.

    """

    _VALID_TRANSITIONS: dict[RevisionState, set[RevisionState]] = {
        RevisionState.planned: {
            RevisionState.executing,
            RevisionState.succeeded_empty,
        },
        RevisionState.executing: {
            RevisionState.succeeded_with_results,
            RevisionState.failed,
        },
    }
    _TERMINAL_STATES: set[RevisionState] = {
        RevisionState.succeeded_with_results,
        RevisionState.succeeded_empty,
        RevisionState.failed,
    }

    def __init__(self, revision_key: str) -> None:
        self.revision_key = revision_key
        self._state = RevisionState.planned

    @property
    def state(self) -> RevisionState:
        return self._state

    def _get_current_state(self) -> RevisionState:
        return self._state

    def transition_to(self, new_state: RevisionState) -> None:
        """Move to a new state.

        Args:
            new_state: The target state.

        Raises:
            InvalidRevisionStateError: If the transition is not allowed.

        """
        if not self.can_transition_to(new_state):
            raise InvalidRevisionStateError(
                f"Cannot transition revision '{self.revision_key}' "
                f"from {self._state.value} to {new_state.value}"
            )
        logger.debug(
            "revision_state_changed",
            revision=self.revision_key,
            from_state=self._state.value,
            to_state=new_state.value,
        )
        self._state = new_state
