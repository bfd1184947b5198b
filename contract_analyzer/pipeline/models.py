"""
Pydantic models for the analysis pipeline state.

PipelineState is the single source of truth the UI observes. It replaces
ad-hoc "is analyzing" / "show error" flags.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from contract_analyzer.analysis.models import AnalysisResult
from contract_analyzer.exceptions import AnalysisError, ErrorKind


class PipelineStatus(str, Enum):
    """
    Pipeline statuses (in-memory only).
    """
    IDLE = "idle"              # Waiting for a file
    EXTRACTING = "extracting"  # Reading the PDF text layer
    UPLOADING = "uploading"    # Waiting on the analysis service
    SUCCEEDED = "succeeded"    # Result available (terminal)
    FAILED = "failed"          # Error reported (terminal)


BUSY_STATUSES = frozenset({PipelineStatus.EXTRACTING, PipelineStatus.UPLOADING})
TERMINAL_STATUSES = frozenset({PipelineStatus.SUCCEEDED, PipelineStatus.FAILED})


class PipelineError(BaseModel):
    """Failure reported to the UI: structured kind plus readable reason."""

    model_config = ConfigDict(frozen=True)

    kind: ErrorKind
    reason: str
    status_code: Optional[int] = Field(default=None, description="HTTP status for server_rejected")

    @classmethod
    def from_exception(cls, error: AnalysisError) -> "PipelineError":
        return cls(
            kind=error.kind,
            reason=error.reason,
            status_code=getattr(error, "status_code", None),
        )


class PipelineState(BaseModel):
    """
    Snapshot of the pipeline.

    ``result`` is set only when SUCCEEDED, ``error`` only when FAILED.
    """

    model_config = ConfigDict(frozen=True)

    status: PipelineStatus = PipelineStatus.IDLE
    file_name: Optional[str] = None
    result: Optional[AnalysisResult] = None
    error: Optional[PipelineError] = None

    @property
    def is_busy(self) -> bool:
        """True while the busy indicator should be shown."""
        return self.status in BUSY_STATUSES

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    @classmethod
    def extracting(cls, file_name: str) -> "PipelineState":
        return cls(status=PipelineStatus.EXTRACTING, file_name=file_name)

    @classmethod
    def uploading(cls, file_name: str) -> "PipelineState":
        return cls(status=PipelineStatus.UPLOADING, file_name=file_name)

    @classmethod
    def succeeded(cls, file_name: str, result: AnalysisResult) -> "PipelineState":
        return cls(status=PipelineStatus.SUCCEEDED, file_name=file_name, result=result)

    @classmethod
    def failed(cls, file_name: Optional[str], error: PipelineError) -> "PipelineState":
        return cls(status=PipelineStatus.FAILED, file_name=file_name, error=error)
