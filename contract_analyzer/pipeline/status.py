"""
Pipeline status state machine.

Defines allowed status transitions and validation logic.
"""

from typing import Set

from contract_analyzer.exceptions import InvalidTransitionError

from .models import PipelineStatus, TERMINAL_STATUSES


# State machine: allowed transitions from each status
ALLOWED_TRANSITIONS: dict[PipelineStatus, Set[PipelineStatus]] = {
    PipelineStatus.IDLE: {
        PipelineStatus.EXTRACTING,
    },
    PipelineStatus.EXTRACTING: {
        PipelineStatus.UPLOADING,
        PipelineStatus.FAILED,
    },
    PipelineStatus.UPLOADING: {
        PipelineStatus.SUCCEEDED,
        PipelineStatus.FAILED,
    },
    # Terminal for one analysis; only an explicit reset / new start leaves them
    PipelineStatus.SUCCEEDED: {PipelineStatus.IDLE},
    PipelineStatus.FAILED: {PipelineStatus.IDLE},
}


def validate_transition(from_status: PipelineStatus, to_status: PipelineStatus) -> None:
    """
    Validate that a status transition is allowed by the state machine.

    Args:
        from_status: Current status
        to_status: Target status

    Raises:
        InvalidTransitionError: If transition is not allowed

    Example:
        >>> validate_transition(PipelineStatus.IDLE, PipelineStatus.EXTRACTING)  # OK
        >>> validate_transition(PipelineStatus.UPLOADING, PipelineStatus.IDLE)  # Raises
    """
    allowed = ALLOWED_TRANSITIONS.get(from_status, set())
    if to_status not in allowed:
        raise InvalidTransitionError(
            f"Invalid transition: {from_status.value} → {to_status.value}"
        )


def is_terminal(status: PipelineStatus) -> bool:
    """
    Check if a status ends an analysis.

    Returns:
        True for SUCCEEDED and FAILED
    """
    return status in TERMINAL_STATUSES


def can_start(status: PipelineStatus) -> bool:
    """A new analysis may start from IDLE or from a terminal status."""
    return status == PipelineStatus.IDLE or is_terminal(status)
