"""Class report: a class body and the methods declared in it."""

from __future__ import annotations

from typing import Any, Iterator, Mapping, Optional

from ..exceptions import ReportParseError
from .aggregate import AggregateReport
from .averages import MethodAverage
from .base import AbstractReport
from .method import ClassMethodReport
from .types import ReportType


class ClassReport(AbstractReport):
    error_context_key = "class"

    def __init__(
        self,
        name: str = "",
        super_class_name: Optional[str] = None,
        line_start: int = 0,
        line_end: int = 0,
    ):
        super().__init__()
        self.name = name
        self.super_class_name = super_class_name
        self.line_start = line_start
        self.line_end = line_end
        self.aggregate = AggregateReport(line_start, line_end, base_cyclomatic=0)
        self.aggregate_average = MethodAverage()
        self.method_average = MethodAverage()
        self.methods: list[ClassMethodReport] = []

    @property
    def type(self) -> ReportType:
        return ReportType.CLASS

    def get_name(self) -> str:
        return self.name

    def child_reports(self) -> Iterator[AbstractReport]:
        return iter(self.methods)

    def finalize(self) -> "ClassReport":
        self.aggregate.finalize()
        self.aggregate_average.finalize()
        self.method_average.finalize()
        for method in self.methods:
            method.finalize()
        return self

    def to_dict(self) -> dict:
        return {
            "aggregate": self.aggregate.to_dict(),
            "aggregateAverage": self.aggregate_average.to_dict(),
            "errors": [error.to_dict() for error in self.errors],
            "lineEnd": self.line_end,
            "lineStart": self.line_start,
            "methodAverage": self.method_average.to_dict(),
            "methods": [method.to_dict() for method in self.methods],
            "name": self.name,
            "superClassName": self.super_class_name,
        }

    @classmethod
    def parse(cls, data: Mapping[str, Any]) -> "ClassReport":
        if not isinstance(data, Mapping):
            raise ReportParseError("ClassReport", "'data' is not a mapping")
        report = cls(data.get("name", ""), data.get("superClassName"), data.get("lineStart", 0), data.get("lineEnd", 0))
        report.aggregate = AggregateReport.parse(data.get("aggregate", {}))
        report.aggregate_average = MethodAverage.parse(data.get("aggregateAverage", {}))
        report.method_average = MethodAverage.parse(data.get("methodAverage", {}))
        report.methods = [ClassMethodReport.parse(method) for method in data.get("methods", [])]
        report.errors = cls._parse_errors(data)
        return report

    def __repr__(self) -> str:
        return f"ClassReport({self.name!r}, {len(self.methods)} methods)"
