"""
Contract Analyzer: submit a PDF contract, get a structured analysis back.

Exports:
- documents: selected file handle and PDF text extraction
- upload: multipart/form-data payload builder
- analysis: analysis service client and result model
- pipeline: controller and state machine for one analysis at a time
- exceptions: error taxonomy
"""

from contract_analyzer.exceptions import (
    ErrorKind,
    AnalysisError,
    ExtractionFailure,
    PayloadBuildFailed,
    NetworkFailure,
    ServerRejected,
    EmptyResponse,
    MalformedResponse,
)
from contract_analyzer.documents import SelectedFile, PdfTextExtractor
from contract_analyzer.upload import MultipartPayload, MultipartPayloadBuilder
from contract_analyzer.analysis import AnalysisClient, AnalysisResult
from contract_analyzer.pipeline import PipelineController, PipelineState, PipelineStatus

__all__ = [
    # Errors
    "ErrorKind",
    "AnalysisError",
    "ExtractionFailure",
    "PayloadBuildFailed",
    "NetworkFailure",
    "ServerRejected",
    "EmptyResponse",
    "MalformedResponse",
    # Documents
    "SelectedFile",
    "PdfTextExtractor",
    # Upload
    "MultipartPayload",
    "MultipartPayloadBuilder",
    # Analysis
    "AnalysisClient",
    "AnalysisResult",
    # Pipeline
    "PipelineController",
    "PipelineState",
    "PipelineStatus",
]
