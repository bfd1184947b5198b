"""
Upload payloads for the analysis service.
"""

from .multipart import (
    MultipartPayload,
    MultipartPayloadBuilder,
    DEFAULT_FIELD_NAME,
    PDF_CONTENT_TYPE,
)

__all__ = [
    "MultipartPayload",
    "MultipartPayloadBuilder",
    "DEFAULT_FIELD_NAME",
    "PDF_CONTENT_TYPE",
]
