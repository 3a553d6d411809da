"""Version command."""

from .. import __version__
from . import app
from ._common import console


@app.command()
def version():
    """Show version and exit."""
    console.print(f"[bold cyan]codegauge[/bold cyan] version [green]{__version__}[/green]")
