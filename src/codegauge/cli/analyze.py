"""Analyze command: run one analysis and render the result."""

from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape

from ..api import analyze as run_analyze
from ..exceptions import CodeGaugeError
from ..formatters import FORMATTERS, get_formatter
from ..logging_config import setup_logging
from . import app
from ._common import err_console, resolve_config


@app.command()
def analyze(
    path: Path = typer.Argument(
        Path("."),
        help="Project root to analyze (default: current directory)",
        file_okay=False,
        dir_okay=True,
    ),
    output_format: str = typer.Option(
        "rich",
        "--format",
        "-f",
        help=f"Output format: {', '.join(sorted(FORMATTERS))}",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="TOML configuration file",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    workers: Optional[int] = typer.Option(
        None,
        "-w",
        "--workers",
        help="Parallel workers (default: auto-detect)",
        min=1,
        max=32,
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        "-t",
        help="Abort the run after this many seconds",
        min=0.0,
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the report to a file instead of stdout",
        dir_okay=False,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Only log errors",
    ),
):
    """
    Score a TypeScript / JavaScript project for complexity, maintainability
    and cross-file duplication.

    [bold cyan]Examples:[/bold cyan]

      codegauge analyze

      codegauge analyze ./web --format json

      codegauge analyze ./web -w 4 --timeout 60 -o report.json -f json
    """
    logger = setup_logging(verbose=verbose, quiet=quiet)

    try:
        formatter = get_formatter(output_format)
    except ValueError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(2)

    try:
        settings = resolve_config(config=config, workers=workers, timeout=timeout)
        result = run_analyze(path, config=settings)
    except CodeGaugeError as e:
        logger.debug(f"Analysis failed: {e!r}")
        err_console.print(f"[red]Error:[/red] {escape(e.message)}")
        raise typer.Exit(1)

    if output is not None:
        output.write_text(formatter.format(result), encoding="utf-8")
        err_console.print(f"[green]Report written to[/green] {output}")
    else:
        formatter.render(result)
