"""Rich terminal summary for project reports."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..reports import AbstractReport, ModuleReport, ProjectReport, ReportType
from .base import ReportFormatter


def _maintainability_label(value: float) -> str:
    if value < 90:
        return f"[red bold]{value:.1f}[/red bold]"
    elif value < 100:
        return f"[red]{value:.1f}[/red]"
    elif value < 115:
        return f"[yellow]{value:.1f}[/yellow]"
    else:
        return f"[green]{value:.1f}[/green]"


def _cyclomatic_label(value: float) -> str:
    if value >= 12:
        return f"[red bold]{value:.2f}[/red bold]"
    elif value >= 7:
        return f"[red]{value:.2f}[/red]"
    elif value >= 3:
        return f"[yellow]{value:.2f}[/yellow]"
    else:
        return f"[green]{value:.2f}[/green]"


class RichFormatter(ReportFormatter):
    """Summary panel plus one table row per module.

    Maintainability colours assume the 0-171 scale; with ``newmi`` every
    module lands in the low bands.
    """

    name = "rich"
    extension = "txt"
    type = "summary"
    supported_types = frozenset({ReportType.MODULE, ReportType.PROJECT})

    def render(self, report: AbstractReport, console: Console) -> None:
        """Print the summary straight to ``console``."""
        if isinstance(report, ModuleReport):
            report = ProjectReport([report])
        if not isinstance(report, ProjectReport):
            self._unsupported(report)
            return

        modules = report.module_reports()
        average = report.module_average
        summary_text = (
            f"Analyzed [bold]{len(report.modules)}[/bold] modules  |  "
            f"Maintainability: {_maintainability_label(average.maintainability)}  |  "
            f"Change cost: [cyan]{report.change_cost:.1f}%[/cyan]  |  "
            f"Core size: [cyan]{report.core_size:.1f}%[/cyan]  |  "
            f"Density: [cyan]{report.first_order_density:.1f}%[/cyan]"
        )
        console.print(Panel(summary_text, title="[bold cyan]Summary[/bold cyan]", expand=False))

        if not modules:
            return

        table = Table(expand=True)
        table.add_column("#", style="dim", width=4)
        table.add_column("Module", style="yellow", no_wrap=False, ratio=3)
        table.add_column("LLOC", justify="right", width=6)
        table.add_column("Functions", justify="right", width=9)
        table.add_column("Avg cyclomatic", justify="right", width=14)
        table.add_column("Avg effort", justify="right", width=12)
        table.add_column("Maintainability", justify="right", width=15)
        table.add_column("Errors", justify="right", width=6)

        for i, module in enumerate(modules, 1):
            errors = module.get_errors()
            table.add_row(
                str(i),
                module.src_path or "<unknown>",
                f"{module.aggregate.sloc.logical:g}",
                str(len(module.all_methods())),
                _cyclomatic_label(module.method_average.cyclomatic),
                f"{module.method_average.halstead.effort:.1f}",
                _maintainability_label(module.maintainability),
                f"[red]{len(errors)}[/red]" if errors else "0",
            )

        console.print(table)

    def format_report(self, report: AbstractReport, options: Optional[Mapping[str, Any]] = None) -> str:
        console = Console(width=(options or {}).get("width", 120), force_terminal=False)
        with console.capture() as capture:
            self.render(report, console)
        return capture.get()
