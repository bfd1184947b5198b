"""
Tests for contract_analyzer/cli/report.py
"""

import io

import pytest
from rich.console import Console

from contract_analyzer.analysis.models import AnalysisResult
from contract_analyzer.cli.report import SECTION_TITLES, render_analysis, render_failure
from contract_analyzer.exceptions import ErrorKind
from contract_analyzer.pipeline.models import PipelineError


@pytest.fixture
def console():
    return Console(record=True, width=120, file=io.StringIO(), color_system=None)


EMPTY_PAYLOAD = {
    "keyMetrics": [],
    "businessOverview": [],
    "mustDoTasks": {},
    "partnerRelationships": [],
    "opportunities": [],
    "suggestions": [],
}


class TestRenderAnalysis:
    """Rendering a successful analysis."""

    def test_sections_in_display_order(self, console, sample_analysis_payload):
        result = AnalysisResult.model_validate(sample_analysis_payload)

        render_analysis(result, console=console, file_name="supply_agreement.pdf")
        text = console.export_text()

        positions = [text.index(title) for title in SECTION_TITLES]
        assert positions == sorted(positions)
        assert "supply_agreement.pdf" in text

    def test_content_shown(self, console, sample_analysis_payload):
        result = AnalysisResult.model_validate(sample_analysis_payload)

        render_analysis(result, console=console)
        text = console.export_text()

        assert "Contract Value" in text
        assert "$250,000" in text
        assert "Legal" in text
        assert "Sign NDA before kickoff" in text
        assert "Globex Ltd" in text
        assert "Volume discount" in text
        assert "1. Negotiate a longer warranty period" in text
        assert "3. Add a force majeure clause" in text

    def test_empty_sections_still_listed(self, console):
        result = AnalysisResult.model_validate(EMPTY_PAYLOAD)

        render_analysis(result, console=console)
        text = console.export_text()

        for title in SECTION_TITLES:
            assert title in text
        assert text.count("None") == len(SECTION_TITLES)

    def test_task_category_without_tasks_is_skipped(self, console):
        payload = dict(EMPTY_PAYLOAD, mustDoTasks={"Legal": [], "HR": ["Hire a project lead"]})
        result = AnalysisResult.model_validate(payload)

        render_analysis(result, console=console)
        text = console.export_text()

        assert "HR" in text
        assert "Legal" not in text


class TestRenderFailure:
    """Rendering a failure."""

    def test_server_rejected(self, console):
        error = PipelineError(kind=ErrorKind.SERVER_REJECTED, reason="Server rejected the request (HTTP 500)", status_code=500)

        render_failure(error, console=console)
        text = console.export_text()

        assert "Error" in text
        assert "Server rejected the request (HTTP 500)" in text
        assert "kind: server_rejected" in text
        assert "HTTP status: 500" in text

    def test_without_status_code(self, console):
        error = PipelineError(kind=ErrorKind.NETWORK_FAILURE, reason="Connection refused")

        render_failure(error, console=console)
        text = console.export_text()

        assert "Connection refused" in text
        assert "HTTP status" not in text


class TestServiceTextIsLiteral:
    """Bracketed text from the service or the file name is printed as-is."""

    def test_unbalanced_closing_tags(self, console):
        payload = dict(
            EMPTY_PAYLOAD,
            keyMetrics=[{"key": "Clause [/b] 4", "value": "[/red] 30 days"}],
        )
        result = AnalysisResult.model_validate(payload)

        render_analysis(result, console=console)
        text = console.export_text()

        assert "Clause [/b] 4" in text
        assert "[/red] 30 days" in text

    def test_markup_like_values_kept_verbatim(self, console):
        payload = dict(
            EMPTY_PAYLOAD,
            businessOverview=[{"key": "Currency", "value": "[bold]USD[/bold] 5 [note]"}],
            partnerRelationships=[{"partner": "[i]Initech[/i]", "details": "see [appendix]"}],
            opportunities=[{"opportunity": "[link]", "details": "[/]"}],
            mustDoTasks={"[Legal]": ["File [form 7]"]},
            suggestions=["Use [brackets] carefully"],
        )
        result = AnalysisResult.model_validate(payload)

        render_analysis(result, console=console)
        text = console.export_text()

        for fragment in (
            "[bold]USD[/bold] 5 [note]",
            "[i]Initech[/i]",
            "see [appendix]",
            "[link]",
            "[/]",
            "[Legal]",
            "File [form 7]",
            "Use [brackets] carefully",
        ):
            assert fragment in text

    def test_file_name_with_markup(self, console):
        result = AnalysisResult.model_validate(EMPTY_PAYLOAD)

        render_analysis(result, console=console, file_name="x[/i].pdf")

        assert "x[/i].pdf" in console.export_text()

    def test_failure_reason_with_markup(self, console):
        error = PipelineError(kind=ErrorKind.MALFORMED_RESPONSE, reason="bad field [/keyMetrics]")

        render_failure(error, console=console)

        assert "bad field [/keyMetrics]" in console.export_text()
