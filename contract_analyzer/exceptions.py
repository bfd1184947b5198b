"""
Error taxonomy for the contract analysis pipeline.

Every stage raises a subclass of AnalysisError. Each error carries a
structured ``kind`` and a human-readable ``reason`` so the caller can both
branch on it and show it to the user.
"""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Structured failure kinds reported by the pipeline."""
    EXTRACTION_FAILURE = "extraction_failure"
    PAYLOAD_BUILD_FAILED = "payload_build_failed"
    NETWORK_FAILURE = "network_failure"
    SERVER_REJECTED = "server_rejected"
    EMPTY_RESPONSE = "empty_response"
    MALFORMED_RESPONSE = "malformed_response"
    UNEXPECTED = "unexpected"  # non-taxonomy exception escaped a stage


class AnalysisError(Exception):
    """Base class for all pipeline failures."""

    kind: ErrorKind = ErrorKind.UNEXPECTED

    def __init__(self, reason: str, cause: Optional[BaseException] = None):
        super().__init__(reason)
        self.reason = reason
        self.cause = cause


class ExtractionFailure(AnalysisError):
    """
    The file could not be opened as a document at all.

    An image-only PDF is NOT an extraction failure: it yields empty text.
    """
    kind = ErrorKind.EXTRACTION_FAILURE


class PayloadBuildFailed(AnalysisError):
    """The multipart body could not be built (missing or unreadable file)."""
    kind = ErrorKind.PAYLOAD_BUILD_FAILED


class NetworkFailure(AnalysisError):
    """Transport-level failure: DNS, connection refused, timeout."""
    kind = ErrorKind.NETWORK_FAILURE


class ServerRejected(AnalysisError):
    """The analysis service answered with anything other than HTTP 200."""
    kind = ErrorKind.SERVER_REJECTED

    def __init__(self, status_code: int, reason: Optional[str] = None):
        super().__init__(reason or f"Server rejected the request (HTTP {status_code})")
        self.status_code = status_code


class EmptyResponse(AnalysisError):
    """HTTP 200 with no body."""
    kind = ErrorKind.EMPTY_RESPONSE

    def __init__(self, reason: str = "Server returned an empty response"):
        super().__init__(reason)


class MalformedResponse(AnalysisError):
    """The response body is not a complete, well-typed analysis result."""
    kind = ErrorKind.MALFORMED_RESPONSE


class InvalidTransitionError(ValueError):
    """
    Raised when attempting an illegal pipeline status transition.

    Example:
        >>> from contract_analyzer.pipeline.models import PipelineStatus
        >>> from contract_analyzer.pipeline.status import validate_transition
        >>> validate_transition(PipelineStatus.UPLOADING, PipelineStatus.EXTRACTING)
        InvalidTransitionError: Invalid transition: uploading → extracting
    """
    pass


class ConfigurationError(ValueError):
    """Raised when an environment setting has an invalid value."""
    pass
