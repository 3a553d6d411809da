"""Rich terminal formatter for codegauge."""

from io import StringIO
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ..models import AnalysisResult
from .base import BaseFormatter

# Rows shown in the per-file and duplication tables
TOP_N = 10


def _health_color(health: str) -> str:
    return {
        "Excellent": "green",
        "Good": "cyan",
        "Fair": "yellow",
    }.get(health, "red")


def _score_label(score: float, higher_is_better: bool = True) -> str:
    value = score if higher_is_better else 100 - score
    if value >= 70:
        return f"[green]{score:.0f}[/green]"
    elif value >= 50:
        return f"[yellow]{score:.0f}[/yellow]"
    else:
        return f"[red]{score:.0f}[/red]"


class RichFormatter(BaseFormatter):
    """Rich terminal output: overview panel, score table, hot files, duplicates."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def render(self, result: AnalysisResult) -> None:
        self._print_overview(result, self.console)
        self._print_files(result, self.console)
        self._print_duplication(result, self.console)
        self._print_recommendations(result, self.console)

    def format(self, result: AnalysisResult) -> str:
        buffer = StringIO()
        console = Console(file=buffer, width=100, color_system=None)
        self._print_overview(result, console)
        self._print_files(result, console)
        self._print_duplication(result, console)
        self._print_recommendations(result, console)
        return buffer.getvalue()

    # -- private helpers --

    def _print_overview(self, result: AnalysisResult, console: Console) -> None:
        overview = result.overview
        color = _health_color(result.health)
        summary = (
            f"Analyzed [bold]{overview.total_files}[/bold] files, "
            f"[bold]{overview.total_lines}[/bold] lines  |  "
            f"Overall [{color}]{result.overall_score}[/{color}] "
            f"([{color}]{result.health}[/{color}])  |  "
            f"Debt ratio: [blue]{overview.technical_debt_ratio:.2%}[/blue]\n"
            f"Critical issues: [yellow]{result.critical_issues}[/yellow]"
        )
        console.print(Panel(summary, title="[bold cyan]Summary[/bold cyan]", expand=False))

        scores = Table(show_header=True, expand=False)
        scores.add_column("Metric", style="bold")
        scores.add_column("Score", justify="right")
        scores.add_row("Complexity", _score_label(result.complexity_score, higher_is_better=False))
        scores.add_row("Maintainability", _score_label(result.maintainability_score))
        scores.add_row(
            "Duplication",
            f"{_score_label(result.duplication.percentage, higher_is_better=False)}%",
        )
        console.print(scores)

        if overview.skipped_files:
            console.print(
                f"[yellow]Skipped {len(overview.skipped_files)} unreadable files:[/yellow] "
                + escape(", ".join(overview.skipped_files))
            )
        console.print()

    def _print_files(self, result: AnalysisResult, console: Console) -> None:
        if not result.details:
            return

        ranked = sorted(result.details, key=lambda m: m.complexity, reverse=True)[:TOP_N]
        table = Table(title=f"Top {len(ranked)} Most Complex Files", expand=True)
        table.add_column("#", style="dim", width=4)
        table.add_column("File", style="yellow", no_wrap=False, ratio=3)
        table.add_column("Lines", justify="right", width=7)
        table.add_column("Complexity", justify="right", width=11)
        table.add_column("Maint.", justify="right", width=7)
        table.add_column("Primary Issue", style="white", ratio=2)

        for i, metric in enumerate(ranked, 1):
            table.add_row(
                str(i),
                escape(metric.file),
                str(metric.line_count),
                _score_label(metric.complexity, higher_is_better=False),
                _score_label(metric.maintainability),
                escape(metric.issues[0]) if metric.issues else "-",
            )
        console.print(table)
        console.print()

    def _print_duplication(self, result: AnalysisResult, console: Console) -> None:
        instances = result.duplication.instances
        if not instances:
            console.print("[green]No cross-file duplication found.[/green]")
            console.print()
            return

        table = Table(title=f"Duplicated Fragments ({len(instances)})", expand=True)
        table.add_column("Lines", justify="right", width=7)
        table.add_column("Files", style="yellow", ratio=3)
        table.add_column("Fragment", style="dim", ratio=2, no_wrap=True)
        for instance in instances[:TOP_N]:
            first_line = instance.fragment.split("\n", 1)[0]
            table.add_row(str(instance.lines), escape(", ".join(instance.files)), escape(first_line))
        console.print(table)
        if len(instances) > TOP_N:
            console.print(f"[dim]... and {len(instances) - TOP_N} more[/dim]")
        console.print()

    def _print_recommendations(self, result: AnalysisResult, console: Console) -> None:
        if not result.recommendations:
            return
        console.print("[bold]Recommendations:[/bold]")
        for rec in result.recommendations:
            console.print(f"  [green]->[/green] {escape(rec)}", highlight=False)
        console.print()
