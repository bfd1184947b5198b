"""
Pipeline module - one contract analysis from file selection to result.

Usage:
    from contract_analyzer.pipeline import PipelineController

    controller = PipelineController(client)
    controller.subscribe(lambda state: print(state.status))
    final_state = await controller.run_analysis(SelectedFile(path=Path("contract.pdf")))
"""

from contract_analyzer.pipeline.models import (
    PipelineStatus,
    PipelineError,
    PipelineState,
)
from contract_analyzer.pipeline.status import (
    ALLOWED_TRANSITIONS,
    validate_transition,
    is_terminal,
    can_start,
)
from contract_analyzer.pipeline.controller import PipelineController

__all__ = [
    "PipelineStatus",
    "PipelineError",
    "PipelineState",
    "ALLOWED_TRANSITIONS",
    "validate_transition",
    "is_terminal",
    "can_start",
    "PipelineController",
]
