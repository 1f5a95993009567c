"""Report model: module, class, method and project reports."""

from .aggregate import AggregateReport
from .averages import HalsteadAverage, MethodAverage, ModuleAverage, Sloc
from .base import AbstractReport
from .class_report import ClassReport
from .error import AnalyzeError
from .halstead import HalsteadCounts, HalsteadData
from .method import ClassMethodReport, MethodReport, ModuleMethodReport
from .module_report import ModuleReport
from .project_report import ProjectReport, sort_modules
from .scope import ModuleScopeControl
from .types import ReportType

__all__ = [
    "AbstractReport",
    "AggregateReport",
    "AnalyzeError",
    "ClassMethodReport",
    "ClassReport",
    "HalsteadAverage",
    "HalsteadCounts",
    "HalsteadData",
    "MethodAverage",
    "MethodReport",
    "ModuleAverage",
    "ModuleMethodReport",
    "ModuleReport",
    "ModuleScopeControl",
    "ProjectReport",
    "ReportType",
    "Sloc",
    "sort_modules",
]
