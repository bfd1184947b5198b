"""
Decoding of the analysis service's response body.
"""

from typing import Optional, Union

import structlog
from pydantic import ValidationError

from contract_analyzer.exceptions import EmptyResponse, MalformedResponse

from .models import AnalysisResult

logger = structlog.get_logger("analysis")

MAX_REPORTED_ERRORS = 3


def _summarize_validation_error(error: ValidationError) -> str:
    parts = []
    for item in error.errors()[:MAX_REPORTED_ERRORS]:
        loc = ".".join(str(p) for p in item.get("loc", ())) or "<root>"
        parts.append(f"{loc}: {item.get('msg', 'invalid')}")
    extra = error.error_count() - MAX_REPORTED_ERRORS
    if extra > 0:
        parts.append(f"... and {extra} more")
    return "; ".join(parts)


def decode_analysis_result(body: Optional[Union[bytes, str]]) -> AnalysisResult:
    """
    Decode a response body into an AnalysisResult.

    Args:
        body: Raw response body

    Returns:
        AnalysisResult with every field populated

    Raises:
        EmptyResponse: If the body is missing or blank
        MalformedResponse: If the body is not valid JSON or misses/mistypes a field
    """
    if body is None or not body.strip():
        raise EmptyResponse()

    try:
        result = AnalysisResult.model_validate_json(body)
    except ValidationError as e:
        summary = _summarize_validation_error(e)
        logger.warning("Malformed analysis response", errors=e.error_count(), summary=summary)
        raise MalformedResponse(f"Malformed analysis response: {summary}", cause=e) from e

    logger.debug(
        "Analysis response decoded",
        key_metrics=len(result.key_metrics),
        tasks=result.task_count,
        suggestions=len(result.suggestions),
    )
    return result
