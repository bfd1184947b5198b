"""
Health check for the contract analyzer: dependencies, settings and the
analysis service connection.
"""

import asyncio
from typing import Dict, Optional
from urllib.parse import urlsplit

import httpx
from rich.console import Console
from rich.table import Table

from contract_analyzer.config.settings import (
    AnalyzerSettings,
    describe_settings,
    load_settings,
)
from contract_analyzer.exceptions import ConfigurationError

DEPENDENCIES = [
    ("fitz", "PyMuPDF text extraction"),
    ("httpx", "HTTP client"),
    ("pydantic", "Pydantic models"),
    ("rich", "Rich CLI"),
    ("structlog", "Structured logging"),
    ("dotenv", "python-dotenv"),
    ("click", "Command line"),
]


class SystemHealthCheck:
    """Runs the checks and collects a pass/fail per component."""

    def __init__(self, console: Optional[Console] = None, probe_timeout: float = 5.0):
        self.console = console or Console()
        self.probe_timeout = probe_timeout
        self.results: Dict[str, bool] = {}
        self.settings: Optional[AnalyzerSettings] = None

    def check_settings(self) -> bool:
        self.console.print("\n[yellow]🔍 Checking configuration...[/yellow]")
        try:
            self.settings = load_settings()
        except ConfigurationError as e:
            self.console.print(f"  [red]✗[/red] {e}")
            self.results["settings"] = False
            return False

        for key, value in describe_settings(self.settings).items():
            self.console.print(f"  [green]✓[/green] {key}: {value}")
        self.results["settings"] = True
        return True

    def check_python_dependencies(self) -> bool:
        self.console.print("\n[yellow]📦 Checking Python dependencies...[/yellow]")

        all_ok = True
        for module, description in DEPENDENCIES:
            try:
                __import__(module)
                self.console.print(f"  [green]✓[/green] {module}: OK ({description})")
            except ImportError:
                self.console.print(f"  [red]✗[/red] {module}: MISSING ({description})")
                all_ok = False

        self.results["dependencies"] = all_ok
        return all_ok

    async def check_service(self) -> bool:
        """Any HTTP answer from the service host counts as reachable."""
        self.console.print("\n[yellow]🌐 Checking analysis service...[/yellow]")

        if self.settings is None:
            self.console.print("  [yellow]⚠[/yellow] skipped: configuration invalid")
            self.results["service"] = False
            return False

        parts = urlsplit(self.settings.endpoint_url)
        base_url = f"{parts.scheme}://{parts.netloc}/"

        try:
            async with httpx.AsyncClient(timeout=self.probe_timeout) as client:
                response = await client.get(base_url)
        except httpx.RequestError as e:
            self.console.print(f"  [red]✗[/red] {base_url} unreachable: {e!r}")
            self.results["service"] = False
            return False

        self.console.print(
            f"  [green]✓[/green] {base_url} reachable (HTTP {response.status_code})"
        )
        self.results["service"] = True
        return True

    def print_summary(self) -> None:
        table = Table(title="Health check", show_header=True, header_style="bold")
        table.add_column("Component")
        table.add_column("Status")
        for name, ok in self.results.items():
            table.add_row(name, "[green]OK[/green]" if ok else "[red]FAIL[/red]")
        self.console.print()
        self.console.print(table)

    async def run_all(self) -> bool:
        self.check_python_dependencies()
        self.check_settings()
        await self.check_service()
        self.print_summary()
        return all(self.results.values())


def run_healthcheck(console: Optional[Console] = None) -> bool:
    return asyncio.run(SystemHealthCheck(console=console).run_all())
