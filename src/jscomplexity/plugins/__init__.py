"""Analysis plugins and the hook dispatcher that drives them."""

from .manager import PluginEvent, PluginManager
from .module_metrics import (
    ModuleMetricAverage,
    ModuleMetricCalculate,
    ModuleMetricPostAverage,
    ModuleMetricProcess,
    PluginMetricsModule,
)
from .project_metrics import DependencyGraph, PluginMetricsProject, ProjectMetricAverage, ProjectMetricCalculate
from .syntax import SYNTAX_DEFAULTS, PluginSyntaxBabel, PluginSyntaxESTree


def get_default_module_plugins() -> list:
    """Return the plugins every module analysis loads unless told otherwise.

    1. PluginSyntaxBabel: ESTree rules plus Babel node types
    2. PluginMetricsModule: counting, calculation, averages, maintainability
    """
    return [PluginSyntaxBabel(), PluginMetricsModule()]


def get_default_project_plugins() -> list:
    return [PluginMetricsProject()]


__all__ = [
    "DependencyGraph",
    "ModuleMetricAverage",
    "ModuleMetricCalculate",
    "ModuleMetricPostAverage",
    "ModuleMetricProcess",
    "PluginEvent",
    "PluginManager",
    "PluginMetricsModule",
    "PluginMetricsProject",
    "PluginSyntaxBabel",
    "PluginSyntaxESTree",
    "ProjectMetricAverage",
    "ProjectMetricCalculate",
    "SYNTAX_DEFAULTS",
    "get_default_module_plugins",
    "get_default_project_plugins",
]
