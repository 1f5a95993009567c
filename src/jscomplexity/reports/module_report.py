"""Module report: one analyzed source file."""

from __future__ import annotations

from typing import Any, Iterator, Mapping, Optional

from ..exceptions import ReportParseError
from ..utils import MathUtil
from .aggregate import AggregateReport
from .averages import MethodAverage
from .base import AbstractReport
from .class_report import ClassReport
from .method import MethodReport, ModuleMethodReport
from .types import ReportType

DEFAULT_MAINTAINABILITY = 171


class ModuleReport(AbstractReport):
    """Per-file metrics: module aggregate, classes, module-level methods and dependencies."""

    error_context_key = "module"

    def __init__(self, line_start: int = 0, line_end: int = 0, settings: Optional[Mapping[str, Any]] = None):
        super().__init__()
        self.line_start = line_start
        self.line_end = line_end
        self.settings: dict[str, Any] = dict(settings or {})
        self.aggregate = AggregateReport(line_start, line_end, base_cyclomatic=1)
        self.aggregate_average = MethodAverage()
        self.method_average = MethodAverage()
        self.classes: list[ClassReport] = []
        self.dependencies: list[dict] = []
        self.file_path: Optional[str] = None
        self.src_path: Optional[str] = None
        self.src_path_alias: Optional[str] = None
        self.maintainability: float = DEFAULT_MAINTAINABILITY
        self.methods: list[ModuleMethodReport] = []

    @property
    def type(self) -> ReportType:
        return ReportType.MODULE

    def get_name(self) -> str:
        return self.src_path or ""

    def get_setting(self, key: str, default: Any = None) -> Any:
        return self.settings.get(key, default)

    def set_setting(self, key: str, value: Any) -> None:
        self.settings[key] = value

    def child_reports(self) -> Iterator[AbstractReport]:
        yield from self.classes
        yield from self.methods

    def all_methods(self) -> list[MethodReport]:
        """Module-level methods followed by every class method."""
        methods: list[MethodReport] = list(self.methods)
        for class_report in self.classes:
            methods.extend(class_report.methods)
        return methods

    def finalize(self) -> "ModuleReport":
        """Round every numeric field to three decimals."""
        self.aggregate.finalize()
        self.aggregate_average.finalize()
        self.method_average.finalize()
        for class_report in self.classes:
            class_report.finalize()
        for method in self.methods:
            method.finalize()
        self.maintainability = MathUtil.to_fixed(self.maintainability)
        return self

    def to_dict(self) -> dict:
        return {
            "aggregate": self.aggregate.to_dict(),
            "aggregateAverage": self.aggregate_average.to_dict(),
            "classes": [class_report.to_dict() for class_report in self.classes],
            "dependencies": [dict(dependency) for dependency in self.dependencies],
            "errors": [error.to_dict() for error in self.errors],
            "filePath": self.file_path,
            "lineEnd": self.line_end,
            "lineStart": self.line_start,
            "maintainability": self.maintainability,
            "methodAverage": self.method_average.to_dict(),
            "methods": [method.to_dict() for method in self.methods],
            "settings": dict(self.settings),
            "srcPath": self.src_path,
            "srcPathAlias": self.src_path_alias,
        }

    @classmethod
    def parse(cls, data: Mapping[str, Any]) -> "ModuleReport":
        if not isinstance(data, Mapping):
            raise ReportParseError("ModuleReport", "'data' is not a mapping")
        report = cls(data.get("lineStart", 0), data.get("lineEnd", 0), data.get("settings"))
        report.aggregate = AggregateReport.parse(data.get("aggregate", {}))
        report.aggregate_average = MethodAverage.parse(data.get("aggregateAverage", {}))
        report.method_average = MethodAverage.parse(data.get("methodAverage", {}))
        report.classes = [ClassReport.parse(class_data) for class_data in data.get("classes", [])]
        report.dependencies = [dict(dependency) for dependency in data.get("dependencies", [])]
        report.errors = cls._parse_errors(data)
        report.file_path = data.get("filePath")
        report.src_path = data.get("srcPath")
        report.src_path_alias = data.get("srcPathAlias")
        report.maintainability = data.get("maintainability", DEFAULT_MAINTAINABILITY)
        report.methods = [ModuleMethodReport.parse(method) for method in data.get("methods", [])]
        return report

    def __repr__(self) -> str:
        return f"ModuleReport({self.src_path!r}, {len(self.methods)} methods, {len(self.classes)} classes)"
