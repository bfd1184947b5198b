"""
Rich rendering of analysis results and failures for the terminal.
"""

from typing import Optional

from rich.console import Console, Group
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from contract_analyzer.analysis.models import AnalysisResult
from contract_analyzer.pipeline.models import PipelineError

SECTION_TITLES = (
    "Key Metrics",
    "Business Overview",
    "Must-Do Tasks",
    "Partner Relationships",
    "Opportunities",
    "Suggestions",
)

_NONE = Text("None", style="dim")


def _pairs_table(first: str, second: str, rows) -> Table:
    table = Table(show_header=True, header_style="bold", expand=True)
    table.add_column(first, style="cyan", ratio=1)
    table.add_column(second, style="white", ratio=3)
    for left, right in rows:
        # Service text is shown verbatim, never parsed as markup
        table.add_row(Text(left), Text(right))
    return table


def _bullets(items, numbered: bool = False) -> Text:
    text = Text()
    for i, item in enumerate(items, start=1):
        marker = f"{i}. " if numbered else "• "
        text.append(marker, style="bold")
        text.append(f"{item}\n")
    text.rstrip()
    return text


def _tasks(result: AnalysisResult):
    if not result.task_count:
        return _NONE
    parts = []
    for category, tasks in result.must_do_tasks.items():
        if not tasks:
            continue
        parts.append(Text(category, style="bold yellow"))
        parts.append(_bullets(tasks))
    return Group(*parts)


def render_analysis(
    result: AnalysisResult,
    console: Optional[Console] = None,
    file_name: Optional[str] = None,
) -> None:
    """
    Print every section of the analysis, in display order.

    Empty sections are still shown so the reader knows they were checked.
    """
    console = console or Console()

    title = "📄 Contract Analysis"
    if file_name:
        title += f": {escape(file_name)}"
    console.rule(f"[bold blue]{title}[/bold blue]")

    sections = {
        "Key Metrics": _pairs_table(
            "Metric", "Value", ((m.key, m.value) for m in result.key_metrics)
        ) if result.key_metrics else _NONE,
        "Business Overview": _pairs_table(
            "Topic", "Details", ((o.key, o.value) for o in result.business_overview)
        ) if result.business_overview else _NONE,
        "Must-Do Tasks": _tasks(result),
        "Partner Relationships": _pairs_table(
            "Partner", "Details", ((p.partner, p.details) for p in result.partner_relationships)
        ) if result.partner_relationships else _NONE,
        "Opportunities": _pairs_table(
            "Opportunity", "Details", ((o.opportunity, o.details) for o in result.opportunities)
        ) if result.opportunities else _NONE,
        "Suggestions": _bullets(result.suggestions, numbered=True) if result.suggestions else _NONE,
    }

    for name in SECTION_TITLES:
        console.print(Panel(sections[name], title=f"[bold]{name}[/bold]", border_style="blue"))


def render_failure(error: PipelineError, console: Optional[Console] = None) -> None:
    """Print a failure the way the app's error alert shows it."""
    console = console or Console()

    body = Text(error.reason)
    body.append(f"\n\nkind: {error.kind.value}", style="dim")
    if error.status_code is not None:
        body.append(f"\nHTTP status: {error.status_code}", style="dim")

    console.print(Panel(body, title="[bold red]❌ Error[/bold red]", border_style="red"))
