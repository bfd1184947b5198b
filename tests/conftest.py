"""
Shared fixtures for Contract Analyzer tests
"""

import json
import os
import sys
from pathlib import Path
from typing import Callable, List

import fitz
import httpx
import pytest
import structlog

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from contract_analyzer.analysis.client import AnalysisClient


TEST_ENDPOINT = "http://analysis.test:3000/upload"


@pytest.fixture(autouse=True, scope="session")
def _structlog_to_stdlib():
    """Route structlog through stdlib logging so output lands in caplog, not stdout."""
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )
    yield
    structlog.reset_defaults()


# ============ SAMPLE DATA FIXTURES ============

@pytest.fixture
def sample_analysis_payload() -> dict:
    """A complete analysis service response."""
    return {
        "keyMetrics": [
            {"key": "Contract Value", "value": "$250,000"},
            {"key": "Term", "value": "24 months"},
            {"key": "Payment Terms", "value": "Net 30"},
        ],
        "businessOverview": [
            {"key": "Parties", "value": "Acme Corp and Globex Ltd"},
            {"key": "Scope", "value": "Supply of industrial sensors"},
        ],
        "mustDoTasks": {
            "Legal": ["Sign NDA before kickoff", "Register contract with counsel"],
            "Finance": ["Issue first invoice by March 1"],
        },
        "partnerRelationships": [
            {"partner": "Globex Ltd", "details": "Exclusive distributor in EMEA"},
        ],
        "opportunities": [
            {"opportunity": "Volume discount", "details": "5% off above 10,000 units"},
        ],
        "suggestions": [
            "Negotiate a longer warranty period",
            "Clarify the termination notice",
            "Add a force majeure clause",
        ],
    }


@pytest.fixture
def sample_analysis_json(sample_analysis_payload) -> bytes:
    return json.dumps(sample_analysis_payload).encode("utf-8")


# ============ PDF FIXTURES ============

def make_pdf_bytes(*page_texts: str) -> bytes:
    """Build a PDF in memory, one page per text (empty string = blank page)."""
    doc = fitz.open()
    for text in page_texts:
        page = doc.new_page()
        if text:
            page.insert_text((72, 72), text)
    data = doc.tobytes()
    doc.close()
    return data


@pytest.fixture
def pdf_bytes() -> bytes:
    return make_pdf_bytes("Supply Agreement between Acme Corp and Globex Ltd", "Payment terms: net 30")


@pytest.fixture
def blank_pdf_bytes() -> bytes:
    return make_pdf_bytes("")


@pytest.fixture
def pdf_file(tmp_path: Path, pdf_bytes: bytes) -> Path:
    path = tmp_path / "supply_agreement.pdf"
    path.write_bytes(pdf_bytes)
    return path


@pytest.fixture
def corrupt_pdf_file(tmp_path: Path) -> Path:
    path = tmp_path / "broken.pdf"
    path.write_bytes(b"this is definitely not a PDF document")
    return path


# ============ HTTP FIXTURES ============

class RecordingHandler:
    """httpx.MockTransport handler that records requests and returns a canned response."""

    def __init__(self, responder: Callable[[httpx.Request], httpx.Response]):
        self.responder = responder
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)

    @property
    def call_count(self) -> int:
        return len(self.requests)


@pytest.fixture
def make_client():
    """Factory: AnalysisClient backed by a MockTransport."""
    def _make_client(responder: Callable[[httpx.Request], httpx.Response]):
        handler = RecordingHandler(responder)
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        client = AnalysisClient(TEST_ENDPOINT, timeout=5.0, http_client=http_client)
        return client, handler
    return _make_client
