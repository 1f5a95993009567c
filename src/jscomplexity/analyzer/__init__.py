"""Analysis runtimes for single modules and whole projects."""

from .module import ModuleAnalyzer
from .project import ProjectAnalyzer

__all__ = ["ModuleAnalyzer", "ProjectAnalyzer"]
