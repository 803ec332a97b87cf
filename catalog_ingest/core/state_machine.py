"""Generic State Machine for stage transitions.

This module provides a reusable state machine pattern for managing
ordered stage transitions, used by the ingest run (Init → Parse → Group →
Channels → Cleanup → Done).

Example:
    # Define transitions
    TRANSITIONS: TransitionMap[str] = {
        "init": ["parse", "cleanup"],
        "parse": ["cleanup"],
        "cleanup": [],
    }

    # Create state machine
    sm = StateMachine("init", TRANSITIONS)

    # Check and perform transitions
    if sm.can_transition("parse"):
        sm.transition("parse")

    # Or use transition_to for simpler API
    sm.transition_to("cleanup")
"""

from enum import Enum
from typing import Generic, TypeVar

from catalog_ingest.core.exceptions import CatalogIngestError

T = TypeVar("T", bound=str | Enum)

# Type alias for transition maps
TransitionMap = dict[T, list[T]]


class InvalidTransitionError(CatalogIngestError):
    """Raised when an invalid state transition is attempted."""

    def __init__(self, current: T, target: T, allowed: list[T] | None = None):
        self.current = current
        self.target = target
        self.allowed = allowed or []
        self.error_code = "INVALID_TRANSITION"
        allowed_str = ", ".join(str(s) for s in self.allowed) if self.allowed else "none"
        super().__init__(
            message=f"Invalid transition from '{current}' to '{target}'. "
            f"Allowed transitions: {allowed_str}",
            context={
                "current": str(current),
                "target": str(target),
                "allowed": [str(s) for s in self.allowed],
            },
        )


class StateMachine(Generic[T]):
    """Generic state machine for stage transitions.

    Provides a type-safe way to manage transitions with
    explicit allowed transitions defined upfront.

    Attributes:
        current: Current state
        transitions: Map of allowed transitions from each state
    """

    def __init__(self, initial: T, transitions: TransitionMap[T]):
        """Initialize state machine.

        Args:
            initial: Initial state
            transitions: Map of state -> list of allowed target states
        """
        self._current = initial
        self._transitions = transitions

    @property
    def current(self) -> T:
        """Get current state."""
        return self._current

    @property
    def allowed_transitions(self) -> list[T]:
        """Get list of states we can transition to from current state."""
        return self._transitions.get(self._current, [])

    def can_transition(self, target: T) -> bool:
        """Check if transition to target state is allowed.

        Args:
            target: Target state to check

        Returns:
            True if transition is allowed, False otherwise
        """
        return target in self.allowed_transitions

    def transition(self, target: T) -> None:
        """Perform transition to target state.

        Args:
            target: Target state

        Raises:
            InvalidTransitionError: If transition is not allowed
        """
        if not self.can_transition(target):
            raise InvalidTransitionError(
                current=self._current,
                target=target,
                allowed=self.allowed_transitions,
            )
        self._current = target

    def transition_to(self, target: T) -> T:
        """Perform transition and return new state.

        Args:
            target: Target state

        Returns:
            The new current state (same as target)

        Raises:
            InvalidTransitionError: If transition is not allowed
        """
        self.transition(target)
        return self._current

    def __str__(self) -> str:
        return f"StateMachine(current={self._current})"

    def __repr__(self) -> str:
        return f"StateMachine(current={self._current!r}, allowed={self.allowed_transitions!r})"


# ============================================
# Predefined Transition Maps
# ============================================


def get_run_transitions() -> TransitionMap:
    """Get transition map for RunStage.

    Every stage before CLEANUP may jump straight to CLEANUP so a fatal
    error still releases the scratch directory.
    """
    from catalog_ingest.services.ingest.context import RunStage

    return {
        RunStage.INIT: [RunStage.PARSE, RunStage.CLEANUP],
        RunStage.PARSE: [RunStage.GROUP, RunStage.CLEANUP],
        RunStage.GROUP: [RunStage.CHANNELS, RunStage.CLEANUP],
        RunStage.CHANNELS: [RunStage.CLEANUP],
        RunStage.CLEANUP: [RunStage.DONE],
        RunStage.DONE: [],  # Terminal state
    }


def create_run_state_machine() -> StateMachine:
    """Create a state machine for an ingest run, starting at INIT.

    Returns:
        Configured StateMachine for RunStage
    """
    from catalog_ingest.services.ingest.context import RunStage

    return StateMachine(RunStage.INIT, get_run_transitions())


__all__ = [
    "InvalidTransitionError",
    "StateMachine",
    "TransitionMap",
    "create_run_state_machine",
    "get_run_transitions",
]
