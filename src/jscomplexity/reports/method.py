"""Method reports: functions declared at module level or inside a class."""

from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from ..exceptions import ReportParseError
from .aggregate import AggregateReport
from .base import AbstractReport
from .types import ReportType


class MethodReport(AggregateReport, AbstractReport):
    """Metrics for one function or method body."""

    def __init__(
        self,
        name: str = "",
        param_names: Optional[Sequence[str]] = None,
        line_start: int = 0,
        line_end: int = 0,
    ):
        AggregateReport.__init__(self, line_start, line_end, base_cyclomatic=1)
        AbstractReport.__init__(self)
        self.name = name
        self.param_names: list[str] = list(param_names or [])
        self.param_count = len(self.param_names)
        self.line_start = line_start
        self.line_end = line_end
        self.nested_methods: list[str] = []
        self.max_nested_method_depth = 0

    def get_name(self) -> str:
        return self.name

    def to_dict(self) -> dict:
        data = self._metrics_dict()
        data.update(
            {
                "errors": [error.to_dict() for error in self.errors],
                "lineStart": self.line_start,
                "lineEnd": self.line_end,
                "name": self.name,
                "paramNames": list(self.param_names),
                "nestedMethods": list(self.nested_methods),
                "maxNestedMethodDepth": self.max_nested_method_depth,
            }
        )
        return data

    @classmethod
    def parse(cls, data: Mapping[str, Any]) -> "MethodReport":
        if not isinstance(data, Mapping):
            raise ReportParseError(cls.__name__, "'data' is not a mapping")
        report = cls(data.get("name", ""), data.get("paramNames", []), data.get("lineStart", 0), data.get("lineEnd", 0))
        report._parse_metrics(data)
        report.errors = cls._parse_errors(data)
        report.nested_methods = list(data.get("nestedMethods", []))
        report.max_nested_method_depth = data.get("maxNestedMethodDepth", 0)
        return report

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r}, lines {self.line_start}-{self.line_end})"


class ClassMethodReport(MethodReport):
    """A method created while a class scope was open."""

    @property
    def type(self) -> ReportType:
        return ReportType.CLASS_METHOD


class ModuleMethodReport(MethodReport):
    """A function created with no class scope open."""

    @property
    def type(self) -> ReportType:
        return ReportType.MODULE_METHOD
