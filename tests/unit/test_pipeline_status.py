"""
Unit tests for the pipeline status state machine.
"""

import pytest

from contract_analyzer.exceptions import ErrorKind, InvalidTransitionError, ServerRejected
from contract_analyzer.pipeline.models import PipelineError, PipelineState, PipelineStatus
from contract_analyzer.pipeline.status import (
    ALLOWED_TRANSITIONS,
    can_start,
    is_terminal,
    validate_transition,
)


class TestPipelineStatusEnum:
    """Tests for PipelineStatus enum."""

    def test_all_statuses_defined(self):
        assert PipelineStatus.IDLE.value == "idle"
        assert PipelineStatus.EXTRACTING.value == "extracting"
        assert PipelineStatus.UPLOADING.value == "uploading"
        assert PipelineStatus.SUCCEEDED.value == "succeeded"
        assert PipelineStatus.FAILED.value == "failed"

    def test_every_status_has_transitions_entry(self):
        assert set(ALLOWED_TRANSITIONS) == set(PipelineStatus)


class TestStateMachine:
    """Tests for state machine transition validation."""

    @pytest.mark.parametrize(
        "from_status, to_status",
        [
            (PipelineStatus.IDLE, PipelineStatus.EXTRACTING),
            (PipelineStatus.EXTRACTING, PipelineStatus.UPLOADING),
            (PipelineStatus.EXTRACTING, PipelineStatus.FAILED),
            (PipelineStatus.UPLOADING, PipelineStatus.SUCCEEDED),
            (PipelineStatus.UPLOADING, PipelineStatus.FAILED),
            (PipelineStatus.SUCCEEDED, PipelineStatus.IDLE),
            (PipelineStatus.FAILED, PipelineStatus.IDLE),
        ],
    )
    def test_allowed(self, from_status, to_status):
        validate_transition(from_status, to_status)

    @pytest.mark.parametrize(
        "from_status, to_status",
        [
            (PipelineStatus.IDLE, PipelineStatus.UPLOADING),
            (PipelineStatus.IDLE, PipelineStatus.SUCCEEDED),
            (PipelineStatus.EXTRACTING, PipelineStatus.SUCCEEDED),
            (PipelineStatus.EXTRACTING, PipelineStatus.IDLE),
            (PipelineStatus.UPLOADING, PipelineStatus.EXTRACTING),
            (PipelineStatus.UPLOADING, PipelineStatus.IDLE),
            (PipelineStatus.SUCCEEDED, PipelineStatus.EXTRACTING),
            (PipelineStatus.FAILED, PipelineStatus.UPLOADING),
        ],
    )
    def test_forbidden(self, from_status, to_status):
        with pytest.raises(InvalidTransitionError) as exc_info:
            validate_transition(from_status, to_status)
        assert from_status.value in str(exc_info.value)

    def test_terminal_statuses(self):
        assert is_terminal(PipelineStatus.SUCCEEDED)
        assert is_terminal(PipelineStatus.FAILED)
        assert not is_terminal(PipelineStatus.IDLE)
        assert not is_terminal(PipelineStatus.EXTRACTING)
        assert not is_terminal(PipelineStatus.UPLOADING)

    def test_can_start(self):
        assert can_start(PipelineStatus.IDLE)
        assert can_start(PipelineStatus.SUCCEEDED)
        assert can_start(PipelineStatus.FAILED)
        assert not can_start(PipelineStatus.EXTRACTING)
        assert not can_start(PipelineStatus.UPLOADING)


class TestPipelineState:
    """PipelineState snapshot helpers."""

    def test_default_is_idle(self):
        state = PipelineState()
        assert state.status == PipelineStatus.IDLE
        assert not state.is_busy
        assert not state.is_terminal

    def test_busy_states(self):
        assert PipelineState.extracting("a.pdf").is_busy
        assert PipelineState.uploading("a.pdf").is_busy

    def test_failed_state_carries_error(self):
        error = PipelineError.from_exception(ServerRejected(500))
        state = PipelineState.failed("a.pdf", error)

        assert state.is_terminal
        assert not state.is_busy
        assert state.error.kind == ErrorKind.SERVER_REJECTED
        assert state.error.status_code == 500
        assert state.result is None

    def test_error_without_status_code(self):
        from contract_analyzer.exceptions import EmptyResponse

        error = PipelineError.from_exception(EmptyResponse())
        assert error.status_code is None
        assert error.reason == "Server returned an empty response"
