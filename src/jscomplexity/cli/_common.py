"""Shared CLI helpers."""

from pathlib import Path
from typing import Optional

from rich.console import Console

from ..config import AnalysisConfig, load_config

console = Console()


def resolve_config(
    config: Optional[Path] = None,
    output_format: Optional[str] = None,
    commonjs: bool = False,
    newmi: bool = False,
    ignore_errors: bool = False,
    verbose: bool = False,
    quiet: bool = False,
) -> AnalysisConfig:
    """Build the analysis config from CLI options.

    Flags left off keep whatever the config files or environment set.
    """
    overrides = {}
    if output_format is not None:
        overrides["format"] = output_format
    if commonjs:
        overrides["commonjs"] = True
    if newmi:
        overrides["newmi"] = True
    if ignore_errors:
        overrides["ignore_errors"] = True
    return load_config(config_file=config, verbose=verbose, quiet=quiet, **overrides)
