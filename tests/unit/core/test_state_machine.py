"""Unit tests for StateMachine."""

import pytest

from catalog_ingest.core.state_machine import (
    InvalidTransitionError,
    StateMachine,
    create_run_state_machine,
    get_run_transitions,
)
from catalog_ingest.services.ingest.context import RunStage


class TestStateMachine:
    """Tests for generic StateMachine."""

    @pytest.fixture
    def simple_transitions(self):
        """Create simple transition map for testing."""
        return {
            "start": ["middle", "end"],
            "middle": ["end"],
            "end": [],
        }

    @pytest.fixture
    def state_machine(self, simple_transitions):
        """Create state machine with simple transitions."""
        return StateMachine("start", simple_transitions)

    def test_initial_state(self, state_machine):
        """Test that initial state is set correctly."""
        assert state_machine.current == "start"
        assert state_machine.allowed_transitions == ["middle", "end"]

    def test_can_transition(self, state_machine):
        """Test can_transition for allowed and unknown targets."""
        assert state_machine.can_transition("middle") is True
        assert state_machine.can_transition("nonexistent") is False

    def test_transition_invalid_raises(self, state_machine):
        """Test invalid transition raises error with context."""
        state_machine.transition("middle")

        with pytest.raises(InvalidTransitionError) as exc_info:
            state_machine.transition("start")

        assert exc_info.value.current == "middle"
        assert exc_info.value.target == "start"
        assert exc_info.value.allowed == ["end"]
        assert exc_info.value.context["allowed"] == ["end"]
        assert state_machine.current == "middle"

    def test_transition_to_returns_new_state(self, state_machine):
        """Test transition_to returns the new state."""
        assert state_machine.transition_to("end") == "end"
        assert state_machine.allowed_transitions == []

    def test_unknown_state_has_no_transitions(self):
        """Test a state missing from the map has no transitions."""
        sm = StateMachine("orphan", {"start": ["end"]})

        assert sm.allowed_transitions == []

    def test_error_message_without_allowed(self):
        """Test error message when nothing is allowed."""
        error = InvalidTransitionError("end", "start")

        assert "none" in str(error)


class TestRunStateMachine:
    """Tests for the ingest run stage machine."""

    def test_starts_at_init(self):
        sm = create_run_state_machine()

        assert sm.current == RunStage.INIT

    def test_happy_path(self):
        """Test the full ordered sequence of stages."""
        sm = create_run_state_machine()

        for stage in (
            RunStage.PARSE,
            RunStage.GROUP,
            RunStage.CHANNELS,
            RunStage.CLEANUP,
            RunStage.DONE,
        ):
            sm.transition(stage)

        assert sm.current == RunStage.DONE
        assert sm.allowed_transitions == []

    @pytest.mark.parametrize(
        "stage", [RunStage.INIT, RunStage.PARSE, RunStage.GROUP, RunStage.CHANNELS]
    )
    def test_every_working_stage_can_clean_up(self, stage):
        """Test a fatal error in any working stage can reach cleanup."""
        assert RunStage.CLEANUP in get_run_transitions()[stage]

    def test_cannot_skip_stages(self):
        sm = create_run_state_machine()

        with pytest.raises(InvalidTransitionError):
            sm.transition(RunStage.CHANNELS)

    def test_done_only_after_cleanup(self):
        sm = create_run_state_machine()
        sm.transition(RunStage.PARSE)

        assert sm.can_transition(RunStage.DONE) is False

    def test_instances_are_independent(self):
        first = create_run_state_machine()
        second = create_run_state_machine()

        first.transition(RunStage.PARSE)

        assert second.current == RunStage.INIT
