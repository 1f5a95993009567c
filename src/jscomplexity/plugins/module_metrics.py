"""Module metrics: per-node counting, Halstead/density calculation, averages and maintainability."""

from __future__ import annotations

import math
from typing import Any, Iterable, Mapping, Optional

import numpy as np

from ..logging_config import get_logger
from ..reports import AggregateReport, HalsteadData, MethodAverage, ModuleReport
from ..reports.scope import ModuleScopeControl
from ..traits import SyntaxEntry, TraitUtil
from ..utils import ObjectUtil

logger = get_logger(__name__)

MAX_MAINTAINABILITY = 171


class ModuleMetricProcess:
    """Feeds node rule values into every open report during the walk."""

    @staticmethod
    def process_syntax(
        module_report: ModuleReport,
        scope_control: ModuleScopeControl,
        syntax: SyntaxEntry,
        node: Mapping[str, Any],
        parent: Optional[Mapping[str, Any]],
    ) -> None:
        lloc = syntax.lloc.resolve(node, parent) if syntax.lloc is not None else 0
        cyclomatic = syntax.cyclomatic.resolve(node, parent) if syntax.cyclomatic is not None else 0
        operators = syntax.operators.resolve(node, parent) if syntax.operators is not None else []
        operands = syntax.operands.resolve(node, parent) if syntax.operands is not None else []

        for report in scope_control.open_reports():
            report.sloc.logical += lloc or 0
            report.cyclomatic += cyclomatic or 0
            for identifier in operators:
                report.halstead.operators.add(identifier)
            for identifier in operands:
                report.halstead.operands.add(identifier)

        if syntax.dependencies is not None:
            dependencies = syntax.dependencies.resolve(node, parent)
            if dependencies:
                module_report.dependencies.extend(TraitUtil.safe_array(dependencies))

    @staticmethod
    def pre_scope_created(scope_control: ModuleScopeControl, new_scope: Mapping[str, Any]) -> None:
        """Each method adds a path to the module aggregate and the enclosing class."""
        if new_scope.get("type") != "method":
            return
        scope_control.report.aggregate.cyclomatic += 1
        class_report = scope_control.get_current_class_report()
        if class_report is not None:
            class_report.aggregate.cyclomatic += 1

    @staticmethod
    def post_scope_created(scope_control: ModuleScopeControl, new_scope: Mapping[str, Any]) -> None:
        if new_scope.get("type") != "method":
            return
        param_count = len(new_scope.get("param_names") or [])
        scope_control.report.aggregate.param_count += param_count
        class_report = scope_control.get_current_class_report()
        if class_report is not None:
            class_report.aggregate.param_count += param_count


class ModuleMetricCalculate:
    """Derived Halstead metrics and cyclomatic density for every report level."""

    @staticmethod
    def calculate(module_report: ModuleReport) -> None:
        ModuleMetricCalculate.calculate_report(module_report.aggregate)
        for method in module_report.methods:
            ModuleMetricCalculate.calculate_report(method)
        for class_report in module_report.classes:
            ModuleMetricCalculate.calculate_report(class_report.aggregate)
            for method in class_report.methods:
                ModuleMetricCalculate.calculate_report(method)

    @staticmethod
    def calculate_report(report: AggregateReport) -> None:
        ModuleMetricCalculate.calculate_halstead(report.halstead)
        logical = report.sloc.logical
        report.cyclomatic_density = 0 if logical == 0 else (report.cyclomatic / logical) * 100

    @staticmethod
    def calculate_halstead(halstead: HalsteadData) -> None:
        """
        Fill the derived Halstead fields from the operator/operand tallies.

        length = N1 + N2, vocabulary = n1 + n2,
        volume = length * log2(vocabulary),
        difficulty = (n1 / 2) * (N2 / n2),
        effort = difficulty * volume, bugs = volume / 3000, time = effort / 18.

        Args:
            halstead: Report Halstead data, updated in place
        """
        operators = halstead.operators
        operands = halstead.operands

        length = operators.total + operands.total
        if length == 0:
            halstead.reset()
            return

        halstead.length = length
        halstead.vocabulary = operators.distinct + operands.distinct
        halstead.difficulty = (operators.distinct / 2) * (
            1 if operands.distinct == 0 else operands.total / operands.distinct
        )
        halstead.volume = length * math.log2(halstead.vocabulary)
        halstead.effort = halstead.difficulty * halstead.volume
        halstead.bugs = halstead.volume / 3000
        halstead.time = halstead.effort / 18


class ModuleMetricAverage:
    """Arithmetic means across methods for classes and the module."""

    @staticmethod
    def calculate(module_report: ModuleReport) -> None:
        for class_report in module_report.classes:
            ModuleMetricAverage.average_into(class_report.method_average, class_report.methods)
            ModuleMetricAverage.average_into(
                class_report.aggregate_average, [class_report.aggregate, *class_report.methods]
            )

        methods = module_report.all_methods()
        ModuleMetricAverage.average_into(module_report.method_average, methods)
        ModuleMetricAverage.average_into(module_report.aggregate_average, [module_report.aggregate, *methods])

    @staticmethod
    def average_into(average: MethodAverage, reports: Iterable[Any]) -> MethodAverage:
        """Set every average key to the mean over ``reports``; zero when empty."""
        reports = list(reports)
        for accessor in average.keys:
            if not reports:
                average.set(accessor, 0)
                continue
            values = [ObjectUtil.safe_access(report, accessor, 0) for report in reports]
            average.set(accessor, float(np.mean(values)))
        return average


class ModuleMetricPostAverage:
    """Maintainability index from the module's averaged metrics."""

    @staticmethod
    def calculate(module_report: ModuleReport) -> None:
        average = module_report.aggregate_average
        module_report.maintainability = ModuleMetricPostAverage.maintainability(
            average.halstead.volume,
            average.cyclomatic,
            average.sloc.logical,
            bool(module_report.get_setting("newmi", False)),
        )

    @staticmethod
    def maintainability(volume: float, cyclomatic: float, logical_sloc: float, newmi: bool = False) -> float:
        """
        Compute the maintainability index.

        MI = 171 - 5.2 * ln(V) - 0.23 * G - 16.2 * ln(L)

        A logarithm of a non-positive input contributes nothing, and the
        result never exceeds 171. ``newmi`` rebases onto 0-100.

        Args:
            volume: Average Halstead volume
            cyclomatic: Average cyclomatic complexity
            logical_sloc: Average logical lines of code
            newmi: Rebase the score onto a 0-100 scale

        Returns:
            Maintainability index
        """
        mi = MAX_MAINTAINABILITY - 0.23 * cyclomatic
        if volume > 0:
            mi -= 5.2 * math.log(volume)
        if logical_sloc > 0:
            mi -= 16.2 * math.log(logical_sloc)
        mi = min(mi, MAX_MAINTAINABILITY)

        if newmi:
            mi = max(0.0, (mi * 100) / MAX_MAINTAINABILITY)
        return mi


class PluginMetricsModule:
    """Default module plugin gathering every built-in metric."""

    name = "metrics-module"

    def on_configure(self, event) -> None:
        newmi = event.data["options"].get("newmi")
        event.data["settings"]["newmi"] = newmi if isinstance(newmi, bool) else False

    def on_enter_node(self, event) -> None:
        data = event.data
        syntax = data["syntaxes"].get(data["node"].get("type"))
        if syntax is not None:
            ModuleMetricProcess.process_syntax(
                data["module_report"], data["scope_control"], syntax, data["node"], data["parent"]
            )

    def on_module_pre_scope_created(self, event) -> None:
        ModuleMetricProcess.pre_scope_created(event.data["scope_control"], event.data["new_scope"])

    def on_module_post_scope_created(self, event) -> None:
        ModuleMetricProcess.post_scope_created(event.data["scope_control"], event.data["new_scope"])

    def on_module_calculate(self, event) -> None:
        ModuleMetricCalculate.calculate(event.data["module_report"])

    def on_module_average(self, event) -> None:
        ModuleMetricAverage.calculate(event.data["module_report"])

    def on_module_post_average(self, event) -> None:
        report = event.data["module_report"]
        ModuleMetricPostAverage.calculate(report)
        logger.debug(f"Maintainability for {report.src_path or '<module>'}: {report.maintainability:.3f}")
