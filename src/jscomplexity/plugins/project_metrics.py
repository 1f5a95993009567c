"""Project metrics: dependency graph, visibility, change cost, core size and module averages."""

from __future__ import annotations

import posixpath
from typing import Any, Callable, Mapping, Optional, Sequence

import numpy as np

from ..logging_config import get_logger
from ..reports import ModuleReport, ProjectReport
from ..utils import MathUtil, ObjectUtil

logger = get_logger(__name__)

DependencyResolver = Callable[[str], Optional[str]]


class DependencyGraph:
    """Resolve module dependency paths against the sorted module list."""

    @staticmethod
    def normalize(path: str) -> str:
        return posixpath.normpath(path) if path else path

    @staticmethod
    def resolve_path(dependency_path: str, src_path: str) -> str:
        """Join a relative dependency onto the dependent module's directory."""
        if dependency_path.startswith("."):
            return posixpath.normpath(posixpath.join(posixpath.dirname(src_path), dependency_path))
        return DependencyGraph.normalize(dependency_path)

    @staticmethod
    def matches(resolved: str, target: ModuleReport) -> bool:
        candidates = [target.src_path, target.src_path_alias]
        _, extension = posixpath.splitext(resolved)
        for candidate in candidates:
            if not candidate:
                continue
            candidate = DependencyGraph.normalize(candidate)
            if candidate == resolved:
                return True
            if not extension and candidate == resolved + posixpath.splitext(candidate)[1]:
                return True
        return False

    @staticmethod
    def adjacency_matrix(
        modules: Sequence[ModuleReport], dependency_resolver: Optional[DependencyResolver] = None
    ) -> np.ndarray:
        """
        Build the direct dependency matrix.

        ``matrix[i, j] == 1`` when module ``i`` depends on module ``j``.

        Args:
            modules: Modules in project order
            dependency_resolver: Optional mapping applied to every dependency path first

        Returns:
            N x N int8 matrix
        """
        size = len(modules)
        matrix = np.zeros((size, size), dtype=np.int8)

        for i, module in enumerate(modules):
            src_path = module.src_path or ""
            for dependency in module.dependencies:
                path = dependency.get("path")
                if dependency_resolver is not None and isinstance(path, str):
                    path = dependency_resolver(path) or path
                if not isinstance(path, str):
                    continue
                resolved = DependencyGraph.resolve_path(path, src_path)
                for j, target in enumerate(modules):
                    if i != j and DependencyGraph.matches(resolved, target):
                        matrix[i, j] = 1

        return matrix

    @staticmethod
    def reachability_matrix(adjacency: np.ndarray) -> np.ndarray:
        """Transitive closure of ``adjacency`` including the diagonal (Floyd-Warshall)."""
        reach = adjacency.astype(bool) | np.eye(adjacency.shape[0], dtype=bool)
        for k in range(reach.shape[0]):
            reach |= np.outer(reach[:, k], reach[k, :])
        return reach.astype(np.int8)


class ProjectMetricCalculate:
    """Graph metrics over the modules of a project report."""

    @staticmethod
    def calculate(
        project_report: ProjectReport,
        settings: Mapping[str, Any],
        dependency_resolver: Optional[DependencyResolver] = None,
    ) -> None:
        modules = project_report.module_reports()
        size = len(modules)

        adjacency = DependencyGraph.adjacency_matrix(modules, dependency_resolver)
        project_report.adjacency_list = MathUtil.compact_matrix(adjacency)
        project_report.first_order_density = ProjectMetricCalculate.first_order_density(adjacency)

        reach = DependencyGraph.reachability_matrix(adjacency)
        project_report.change_cost = MathUtil.get_percent(int(reach.sum()), size * size)

        if settings.get("no_core_size"):
            project_report.core_size = 0
            project_report.visibility_list = []
        else:
            # Row i of the visibility matrix lists the modules that reach i.
            project_report.visibility_list = MathUtil.compact_matrix(reach.T)
            project_report.core_size = ProjectMetricCalculate.core_size(reach)

        logger.debug(
            f"Project graph: {size} modules, {int(adjacency.sum())} edges, "
            f"change cost {project_report.change_cost:.3f}"
        )

    @staticmethod
    def first_order_density(adjacency: np.ndarray) -> float:
        """Direct edges as a percentage of the N * (N - 1) possible edges."""
        size = adjacency.shape[0]
        if size <= 1:
            return 0.0
        return MathUtil.get_percent(int(adjacency.sum()), size * (size - 1))

    @staticmethod
    def core_size(reach: np.ndarray) -> float:
        """
        Percentage of modules in the core.

        A core module is reached by at least the median number of modules
        and reaches at least the median number, with real edges both ways
        (the diagonal alone does not count).
        """
        size = reach.shape[0]
        if size == 0:
            return 0.0

        fan_in = reach.sum(axis=0)
        fan_out = reach.sum(axis=1)
        fan_in_boundary = MathUtil.get_median(fan_in.tolist())
        fan_out_boundary = MathUtil.get_median(fan_out.tolist())

        core = (fan_in >= fan_in_boundary) & (fan_out >= fan_out_boundary) & (fan_in > 1) & (fan_out > 1)
        return MathUtil.get_percent(int(core.sum()), size)


class ProjectMetricAverage:
    """Means of each module's method averages and maintainability."""

    @staticmethod
    def calculate(project_report: ProjectReport) -> None:
        average = project_report.module_average
        modules = project_report.module_reports()
        for accessor in average.keys:
            if not modules:
                average.set(accessor, 0)
                continue
            values = [ObjectUtil.safe_access(module, accessor, 0) for module in modules]
            average.set(accessor, float(np.mean(values)))


class PluginMetricsProject:
    """Default project plugin."""

    name = "metrics-project"

    def on_configure(self, event) -> None:
        no_core_size = event.data["options"].get("no_core_size")
        event.data["settings"]["no_core_size"] = no_core_size if isinstance(no_core_size, bool) else False

    def on_project_calculate(self, event) -> None:
        ProjectMetricCalculate.calculate(
            event.data["project_report"],
            event.data["settings"],
            event.data.get("dependency_resolver"),
        )

    def on_project_average(self, event) -> None:
        ProjectMetricAverage.calculate(event.data["project_report"])
