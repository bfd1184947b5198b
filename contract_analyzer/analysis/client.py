"""
Client for the remote contract analysis service.

Uploads the original PDF as multipart/form-data and decodes the JSON answer.
Single-shot: failed requests are reported, never retried.
"""

import logging
from pathlib import Path
from typing import Optional, Union

import httpx

from contract_analyzer.config.settings import (
    AnalyzerSettings,
    DEFAULT_CONNECT_TIMEOUT_SECONDS,
    DEFAULT_TIMEOUT_SECONDS,
)
from contract_analyzer.exceptions import NetworkFailure, ServerRejected
from contract_analyzer.upload.multipart import MultipartPayload, MultipartPayloadBuilder

from .decoder import decode_analysis_result
from .models import AnalysisResult


class AnalysisClient:
    """Async client for the ``/upload`` endpoint."""

    def __init__(
        self,
        endpoint_url: str,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        connect_timeout: float = DEFAULT_CONNECT_TIMEOUT_SECONDS,
        payload_builder: Optional[MultipartPayloadBuilder] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.endpoint_url = endpoint_url
        self.timeout = httpx.Timeout(timeout, connect=connect_timeout)
        self.payload_builder = payload_builder or MultipartPayloadBuilder()
        self._log = logging.getLogger("analysis")
        self._http_client = http_client
        self._owns_http_client = http_client is None

    @classmethod
    def from_settings(cls, settings: AnalyzerSettings, **kwargs) -> "AnalysisClient":
        return cls(
            endpoint_url=settings.endpoint_url,
            timeout=settings.timeout_seconds,
            connect_timeout=settings.connect_timeout_seconds,
            **kwargs,
        )

    async def analyze(self, file_bytes: Optional[bytes], file_name: str) -> AnalysisResult:
        """
        Upload a PDF and return the decoded analysis.

        Args:
            file_bytes: Original file content (sent as-is)
            file_name: File name reported in the multipart part

        Returns:
            AnalysisResult

        Raises:
            PayloadBuildFailed: If the body cannot be built
            NetworkFailure: On DNS, connection or timeout errors
            ServerRejected: On any status other than 200
            EmptyResponse: On a 200 with no body
            MalformedResponse: If the body is not a complete analysis result
        """
        payload = self.payload_builder.build(file_bytes, file_name)
        return await self._exchange(payload, file_name)

    async def analyze_file(self, path: Union[str, Path]) -> AnalysisResult:
        """Read ``path`` and analyze it. Unreadable files raise PayloadBuildFailed."""
        path = Path(path)
        payload = self.payload_builder.build_from_path(path)
        return await self._exchange(payload, path.name)

    def _get_http_client(self) -> httpx.AsyncClient:
        """Get or create a reusable httpx client."""
        if self._http_client is None or self._http_client.is_closed:
            self._http_client = httpx.AsyncClient(
                limits=httpx.Limits(max_connections=1, max_keepalive_connections=1),
            )
            self._owns_http_client = True
        return self._http_client

    async def _exchange(self, payload: MultipartPayload, file_name: str) -> AnalysisResult:
        response = await self._post(payload, file_name)

        if response.status_code != 200:
            detail = (response.text or "")[:200]
            self._log.error(
                f"Analysis service rejected upload: status={response.status_code}, detail={detail}"
            )
            raise ServerRejected(response.status_code)

        return decode_analysis_result(response.content)

    async def _post(self, payload: MultipartPayload, file_name: str) -> httpx.Response:
        """Send the request. Transport errors become NetworkFailure."""
        client = self._get_http_client()
        headers = {"Content-Type": payload.content_type}

        self._log.info(
            f"Uploading {file_name} ({len(payload.body)} bytes) to {self.endpoint_url}"
        )
        try:
            response = await client.post(
                self.endpoint_url,
                content=payload.body,
                headers=headers,
                timeout=self.timeout,
            )
        except httpx.TimeoutException as e:
            self._log.error(f"Upload timed out: {e!r}")
            raise NetworkFailure(f"Network error: request timed out ({e})", cause=e) from e
        except httpx.RequestError as e:
            self._log.error(f"Upload failed: {e!r}")
            raise NetworkFailure(f"Network error: {e}", cause=e) from e

        self._log.info(
            f"Analysis service responded: status={response.status_code}, bytes={len(response.content)}"
        )
        return response

    async def aclose(self) -> None:
        if self._http_client is not None and self._owns_http_client:
            await self._http_client.aclose()
            self._http_client = None

    async def __aenter__(self) -> "AnalysisClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
