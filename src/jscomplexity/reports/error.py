"""Structured analysis error attached to a report."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from ..exceptions import ReportParseError
from .types import ReportType


class AnalyzeError:
    """A recoverable problem found while analyzing one scope.

    Location and identity are copied from the report that owns the error so
    the error still reads correctly once detached from the tree.
    """

    def __init__(self, severity: str = "<unknown>", message: str = "", source_report: Any = None):
        self.severity = severity
        self.message = message
        self.line_start: int = getattr(source_report, "line_start", 0) or 0
        self.line_end: int = getattr(source_report, "line_end", 0) or 0
        self.name: str = source_report.get_name() if source_report is not None else ""
        self.type: Optional[ReportType] = getattr(source_report, "type", None)

    def to_dict(self) -> dict:
        return {
            "lineStart": self.line_start,
            "lineEnd": self.line_end,
            "severity": self.severity,
            "message": self.message,
            "name": self.name,
            "type": self.type.name if self.type is not None else None,
        }

    @classmethod
    def parse(cls, data: Mapping[str, Any]) -> "AnalyzeError":
        if not isinstance(data, Mapping):
            raise ReportParseError("AnalyzeError", "'data' is not a mapping")

        error = cls(data.get("severity", "<unknown>"), data.get("message", ""))
        error.line_start = data.get("lineStart", 0)
        error.line_end = data.get("lineEnd", 0)
        error.name = data.get("name", "")

        report_type = data.get("type")
        if isinstance(report_type, Mapping):
            report_type = report_type.get("name")
        error.type = ReportType.from_name(report_type) if report_type else None
        return error

    def __str__(self) -> str:
        description = self.type.description if self.type is not None else "<unknown>"
        name = f"- {self.name} " if self.name else ""
        return f"({self.severity}) {self.message} @ {description} {name}({self.line_start} - {self.line_end})"

    def __repr__(self) -> str:
        return f"AnalyzeError({self.severity!r}, {self.message!r}, line_start={self.line_start})"
