"""
Command line entry point.

Usage:
    contract-analyzer analyze contract.pdf
    contract-analyzer analyze contract.pdf --json
    contract-analyzer check
"""

import asyncio
import json
import sys
from pathlib import Path

import click
import structlog
from rich.console import Console

from contract_analyzer.analysis.client import AnalysisClient
from contract_analyzer.config.settings import AnalyzerSettings, load_settings
from contract_analyzer.documents.models import SelectedFile
from contract_analyzer.exceptions import ConfigurationError
from contract_analyzer.logging_config import setup_logging
from contract_analyzer.pipeline.controller import PipelineController
from contract_analyzer.pipeline.models import PipelineState, PipelineStatus

from .healthcheck import run_healthcheck
from .report import render_analysis, render_failure

logger = structlog.get_logger("cli")

STATUS_MESSAGES = {
    PipelineStatus.EXTRACTING: "Reading contract...",
    PipelineStatus.UPLOADING: "Analyzing contract... Please wait while we analyze your contract.",
}


async def analyze_contract(
    selected: SelectedFile,
    settings: AnalyzerSettings,
    console: Console,
) -> PipelineState:
    """Run one analysis, keeping a spinner up while the pipeline is busy."""
    async with AnalysisClient.from_settings(settings) as client:
        controller = PipelineController(client)

        with console.status("Starting...", spinner="dots") as status:
            def _on_state(state: PipelineState) -> None:
                message = STATUS_MESSAGES.get(state.status)
                if message:
                    status.update(message)

            controller.subscribe(_on_state)
            return await controller.run_analysis(selected)


@click.group()
@click.option("--log-level", default=None, help="DEBUG, INFO, WARNING, ERROR")
@click.pass_context
def cli(ctx: click.Context, log_level: str):
    """Contract Analyzer: submit a PDF contract for structured analysis."""
    ctx.ensure_object(dict)
    ctx.obj["log_level"] = log_level


@cli.command()
@click.argument("pdf_path", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--json", "as_json", is_flag=True, help="Print the raw analysis JSON")
@click.pass_context
def analyze(ctx: click.Context, pdf_path: Path, as_json: bool):
    """Analyze PDF_PATH and print the result."""
    console = Console(stderr=as_json)

    try:
        settings = load_settings()
    except ConfigurationError as e:
        console.print(f"[red]❌ Configuration error: {e}[/red]")
        sys.exit(2)

    setup_logging("cli", level=ctx.obj.get("log_level") or settings.log_level, logs_dir=settings.log_dir)

    if pdf_path.suffix.lower() != ".pdf":
        console.print(f"[red]❌ Please select a PDF file (got {pdf_path.name})[/red]")
        sys.exit(2)

    selected = SelectedFile(path=pdf_path)
    logger.info("analyze_requested", file=selected.name, endpoint=settings.endpoint_url)

    state = asyncio.run(analyze_contract(selected, settings, console))

    if state.status == PipelineStatus.SUCCEEDED and state.result is not None:
        if as_json:
            click.echo(json.dumps(state.result.to_json_dict(), ensure_ascii=False, indent=2))
        else:
            render_analysis(state.result, console=console, file_name=selected.name)
        return

    if state.error is not None:
        render_failure(state.error, console=console)
    sys.exit(1)


@cli.command()
@click.pass_context
def check(ctx: click.Context):
    """Check dependencies, configuration and service reachability."""
    try:
        settings = load_settings()
    except ConfigurationError:
        # The health check itself reports the bad value
        settings = AnalyzerSettings()

    setup_logging("check", level=ctx.obj.get("log_level") or settings.log_level, logs_dir=settings.log_dir)
    ok = run_healthcheck()
    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    cli()
