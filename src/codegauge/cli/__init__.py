"""CLI entry point: registers all subcommands."""

import typer

app = typer.Typer(
    name="codegauge",
    help="codegauge - code-quality scores for TypeScript and JavaScript projects",
    add_completion=False,
    rich_markup_mode="rich",
    no_args_is_help=True,
)


# Import subcommands to register them
from .analyze import analyze as _analyze  # noqa: F401, E402
from .version import version as _version  # noqa: F401, E402


def main() -> None:
    app()


__all__ = ["app", "main"]
