"""
multipart/form-data body builder for a single file part.

Body layout (byte-exact):

    --{boundary}\\r\\n
    Content-Disposition: form-data; name="{field}"; filename="{filename}"\\r\\n
    Content-Type: application/pdf\\r\\n
    \\r\\n
    <file bytes>\\r\\n
    --{boundary}--\\r\\n
"""

import re
import uuid
from pathlib import Path
from typing import Callable, NamedTuple, Optional, Union

import structlog

from contract_analyzer.exceptions import PayloadBuildFailed

logger = structlog.get_logger("upload")

CRLF = b"\r\n"
DEFAULT_FIELD_NAME = "file"
PDF_CONTENT_TYPE = "application/pdf"

# RFC 2046 bchars, 1..70 characters, must not end with a space
_BOUNDARY_RE = re.compile(r"^[0-9A-Za-z'()+_,\-./:=? ]{0,69}[0-9A-Za-z'()+_,\-./:=?]$")
_FORBIDDEN_HEADER_CHARS = ("\r", "\n", "\x00")


class MultipartPayload(NamedTuple):
    """A built request body and the boundary that delimits it."""

    body: bytes
    boundary: str

    @property
    def content_type(self) -> str:
        """Value for the request's Content-Type header."""
        return f"multipart/form-data; boundary={self.boundary}"


def _quote_header_param(value: str, what: str) -> str:
    """Escape a Content-Disposition parameter value."""
    if not value:
        raise PayloadBuildFailed(f"Cannot build upload payload: {what} is empty")
    if any(ch in value for ch in _FORBIDDEN_HEADER_CHARS):
        raise PayloadBuildFailed(
            f"Cannot build upload payload: {what} contains control characters"
        )
    # Same escaping browsers apply to form-data names
    return value.replace('"', "%22")


class MultipartPayloadBuilder:
    """
    Builds a one-part multipart/form-data body.

    Stateless. A fresh UUID boundary is generated per call unless one is
    supplied; the payload is never scanned for collisions.
    """

    def __init__(
        self,
        content_type: str = PDF_CONTENT_TYPE,
        boundary_factory: Optional[Callable[[], str]] = None,
    ):
        self.content_type = content_type
        self._boundary_factory = boundary_factory or (lambda: str(uuid.uuid4()))

    def build(
        self,
        file_bytes: Optional[Union[bytes, bytearray, memoryview]],
        file_name: str,
        field_name: str = DEFAULT_FIELD_NAME,
        boundary: Optional[str] = None,
    ) -> MultipartPayload:
        """
        Build the body for one file part.

        Args:
            file_bytes: Raw file content. ``None`` means the file could not be read.
            file_name: Value of the ``filename`` parameter
            field_name: Value of the ``name`` parameter
            boundary: Boundary token; generated when omitted

        Returns:
            MultipartPayload(body, boundary)

        Raises:
            PayloadBuildFailed: If there is no file content or a header value is unusable
        """
        if file_bytes is None:
            raise PayloadBuildFailed("Cannot build upload payload: file data is missing")
        if not isinstance(file_bytes, (bytes, bytearray, memoryview)):
            raise PayloadBuildFailed(
                f"Cannot build upload payload: expected bytes, got {type(file_bytes).__name__}"
            )

        name = _quote_header_param(field_name, "field name")
        filename = _quote_header_param(file_name, "file name")

        if boundary is None:
            boundary = self._boundary_factory()
        if not _BOUNDARY_RE.match(boundary):
            raise PayloadBuildFailed(f"Cannot build upload payload: invalid boundary {boundary!r}")

        head = (
            f"--{boundary}\r\n"
            f'Content-Disposition: form-data; name="{name}"; filename="{filename}"\r\n'
            f"Content-Type: {self.content_type}\r\n\r\n"
        ).encode("utf-8")
        tail = f"\r\n--{boundary}--\r\n".encode("ascii")

        body = head + bytes(file_bytes) + tail

        logger.debug(
            "Multipart payload built",
            filename=file_name,
            file_size=len(file_bytes),
            body_size=len(body),
        )
        return MultipartPayload(body=body, boundary=boundary)

    def build_from_path(
        self,
        path: Union[str, Path],
        field_name: str = DEFAULT_FIELD_NAME,
        boundary: Optional[str] = None,
    ) -> MultipartPayload:
        """
        Read a file and build its payload.

        Raises:
            PayloadBuildFailed: If the file is missing or unreadable
        """
        path = Path(path)
        try:
            file_bytes = path.read_bytes()
        except OSError as e:
            logger.error("Cannot read upload file", path=str(path), error=str(e))
            raise PayloadBuildFailed(
                f"Cannot build upload payload: failed to read {path.name}: {e}", cause=e
            ) from e

        return self.build(file_bytes, path.name, field_name=field_name, boundary=boundary)
