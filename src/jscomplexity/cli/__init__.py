"""CLI entry point: registers all subcommands."""

import typer

from ._common import console

app = typer.Typer(
    name="jscomplexity",
    help="jscomplexity - Complexity metrics for JavaScript modules and projects",
    add_completion=False,
    rich_markup_mode="rich",
)


# Import subcommands to register them
from .analyze import analyze as _analyze, formats as _formats  # noqa: F401, E402


def main() -> None:
    app()
