"""Public API for jscomplexity.

Example:
    >>> from jscomplexity import analyze_paths
    >>>
    >>> report = analyze_paths(["src"], newmi=True)
    >>> report.module_average.maintainability
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable, Mapping, Optional, Union

from .analyzer import ModuleAnalyzer, ProjectAnalyzer
from .config import AnalysisConfig, load_config
from .exceptions import JsComplexityError, ParsingError
from .logging_config import get_logger
from .parser import parse_source
from .reports import ModuleReport, ProjectReport

logger = get_logger(__name__)

PathLike = Union[str, Path]


def collect_sources(paths: Iterable[PathLike], config: Optional[AnalysisConfig] = None) -> list[Path]:
    """Expand files and directories into the JavaScript files to analyze.

    Directories are walked recursively, skipping ``config.exclude_dirs``.
    Files named explicitly are kept whatever their suffix.

    Raises:
        JsComplexityError: If a path does not exist
    """
    config = config or AnalysisConfig()
    extensions = {extension.lower() for extension in config.extensions}
    skip_dirs = set(config.exclude_dirs)

    found: list[Path] = []
    for raw_path in paths:
        path = Path(raw_path)
        if path.is_file():
            found.append(path)
        elif path.is_dir():
            for candidate in path.rglob("*"):
                relative_parts = candidate.relative_to(path).parts[:-1]
                if any(part in skip_dirs for part in relative_parts):
                    continue
                if candidate.is_file() and candidate.suffix.lower() in extensions:
                    found.append(candidate)
        else:
            raise JsComplexityError(f"Path not found: {path}")

    unique = sorted(set(found))
    logger.debug(f"Collected {len(unique)} source files")
    return unique


def src_path_for(path: Path, root: Optional[Path] = None) -> str:
    """POSIX-style ``srcPath``: relative to ``root`` (default cwd) when possible."""
    root = root or Path.cwd()
    try:
        return path.resolve().relative_to(root.resolve()).as_posix()
    except ValueError:
        return path.resolve().as_posix()


def analyze_source(code: str, config: Optional[AnalysisConfig] = None, src_path: Optional[str] = None) -> ModuleReport:
    """Analyze one source string into a finalized module report."""
    config = config or AnalysisConfig()
    ast = parse_source(code, source_type=config.source_type, tolerant=config.tolerant, src_path=src_path)
    report = ModuleAnalyzer().analyze(ast, config.module_options())
    report.src_path = src_path
    return report


def analyze_paths(
    paths: Iterable[PathLike],
    config_file: Optional[Path] = None,
    config: Optional[AnalysisConfig] = None,
    **overrides: Any,
) -> ProjectReport:
    """Parse and analyze every JavaScript file under ``paths`` as one project.

    Args:
        paths: Files and/or directories
        config_file: Optional explicit config file path, ignored with ``config``
        config: Ready-made configuration; otherwise :func:`load_config` runs
        **overrides: Configuration overrides (e.g. ``newmi=True``)

    Returns:
        Finalized project report

    Raises:
        JsComplexityError: If a path is missing, a file fails to parse
            (without ``ignore_errors``) or configuration is invalid
    """
    config = config or load_config(config_file, **overrides)
    sources = collect_sources(paths, config)

    modules: list[Mapping[str, Any]] = []
    for source in sources:
        src_path = src_path_for(source)
        try:
            code = source.read_text(encoding="utf-8", errors="replace")
            ast = parse_source(code, source_type=config.source_type, tolerant=config.tolerant, src_path=src_path)
        except (OSError, ParsingError) as e:
            if not config.ignore_errors:
                if isinstance(e, OSError):
                    raise JsComplexityError(f"Cannot read {source}: {e}") from e
                raise
            logger.warning(f"Skipping {src_path}: {e}")
            continue
        modules.append({"ast": ast, "filePath": str(source), "srcPath": src_path})

    logger.info(f"Analyzing {len(modules)} modules")
    return ProjectAnalyzer().analyze(modules, config.project_options())
