"""
jscomplexity - Complexity metrics for JavaScript

Walks ESTree syntax trees to measure cyclomatic complexity, Halstead
metrics, logical lines and maintainability per function, class and module,
then relates modules through their dependency graph.
"""

__version__ = "0.1.0"

from .analyzer import ModuleAnalyzer, ProjectAnalyzer
from .api import analyze_paths, analyze_source, collect_sources
from .config import AnalysisConfig, load_config
from .formatters import FormatterRegistry, create_default_registry
from .reports import ModuleReport, ProjectReport, ReportType

__all__ = [
    "analyze_paths",  # Main entry point
    "analyze_source",
    "collect_sources",
    "ModuleAnalyzer",  # Advanced usage (plugins, raw ASTs)
    "ProjectAnalyzer",
    "AnalysisConfig",
    "load_config",
    "FormatterRegistry",
    "create_default_registry",
    "ModuleReport",
    "ProjectReport",
    "ReportType",
]
