"""Analysis commands: ``analyze`` and ``formats``."""

from pathlib import Path
from typing import List, Optional

import typer
from rich.table import Table

from ..api import analyze_paths
from ..exceptions import JsComplexityError
from ..formatters import RichFormatter, create_default_registry
from ..logging_config import setup_logging
from . import app
from ._common import console, resolve_config


def _version_callback(value: bool) -> None:
    if value:
        from .. import __version__

        console.print(f"[bold cyan]jscomplexity[/bold cyan] version [green]{__version__}[/green]")
        raise typer.Exit(0)


@app.callback()
def callback(
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
):
    """Complexity metrics for JavaScript modules and projects."""


@app.command()
def analyze(
    paths: List[Path] = typer.Argument(
        ...,
        help="JavaScript files or directories to analyze",
    ),
    output_format: Optional[str] = typer.Option(
        None,
        "-f",
        "--format",
        help="Output format (see 'jscomplexity formats'); default is a summary table",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "-c",
        "--config",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    commonjs: bool = typer.Option(
        False,
        "--commonjs",
        help="Record require() calls as dependencies",
    ),
    newmi: bool = typer.Option(
        False,
        "--newmi",
        help="Rebase the maintainability index onto 0-100",
    ),
    ignore_errors: bool = typer.Option(
        False,
        "--ignore-errors",
        help="Skip modules that fail to parse or analyze",
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
    Analyze JavaScript sources as one project.

    Directories are scanned recursively for .js, .mjs and .cjs files;
    node_modules is never entered.

    [bold cyan]Examples:[/bold cyan]

      jscomplexity analyze src

      jscomplexity analyze src --commonjs --format json

      jscomplexity analyze lib/index.js --format markdown-minimal
    """
    logger = setup_logging(verbose=verbose, quiet=quiet)

    try:
        settings = resolve_config(
            config=config,
            output_format=output_format,
            commonjs=commonjs,
            newmi=newmi,
            ignore_errors=ignore_errors,
            verbose=verbose,
            quiet=quiet,
        )

        registry = create_default_registry()
        formatter = registry.get(settings.format) if settings.format else None

        report = analyze_paths(paths, config=settings)

        if formatter is None:
            RichFormatter().render(report, console)
        else:
            typer.echo(formatter.format_report(report, {"spacing": 2}))

    except typer.Exit:
        raise

    except (JsComplexityError, ValueError) as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    except KeyboardInterrupt:
        logger.info("Analysis interrupted by user")
        console.print("\n[yellow]Analysis interrupted[/yellow]")
        raise typer.Exit(130)


@app.command()
def formats():
    """List the available output formats."""
    table = Table(title="Output formats")
    table.add_column("Name", style="cyan")
    table.add_column("Type")
    table.add_column("Extension", style="dim")

    for formatter in create_default_registry():
        table.add_row(formatter.name, formatter.type, formatter.extension)

    console.print(table)
