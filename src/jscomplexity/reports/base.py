"""Error bookkeeping shared by every report kind."""

from __future__ import annotations

import json
from typing import Any, Iterator, Mapping, Optional

from ..utils import ObjectUtil
from .error import AnalyzeError
from .types import ReportType


class AbstractReport:
    """Base for reports that own an ``errors`` list and may contain child reports."""

    #: Key added to error entries collected through this report when reports are requested.
    error_context_key: Optional[str] = None

    def __init__(self) -> None:
        self.errors: list[AnalyzeError] = []

    @property
    def type(self) -> ReportType:
        raise NotImplementedError

    def get_name(self) -> str:
        return ""

    def child_reports(self) -> Iterator["AbstractReport"]:
        """Contained reports whose errors roll up into this one."""
        return iter(())

    def add_error(self, severity: str, message: str) -> AnalyzeError:
        error = AnalyzeError(severity, message, self)
        self.errors.append(error)
        return error

    def clear_errors(self, include_children: bool = True) -> None:
        self.errors = []
        if include_children:
            for child in self.child_reports():
                child.clear_errors(include_children=True)

    def get_errors(
        self,
        query: Optional[Mapping[str, Any]] = None,
        include_children: bool = True,
        include_reports: bool = False,
    ) -> list:
        """Collect errors, optionally filtered by a structural ``query``.

        Args:
            query: Mapping whose every leaf must equal the same field on an error.
                Keys may use attribute names (``line_start``) or the wire names
                of ``AnalyzeError.to_dict`` (``lineStart``), e.g.
                ``{"severity": "warning", "lineStart": 22}``.
            include_children: Also collect from contained reports.
            include_reports: Return ``{"error", "source", ...}`` entries instead
                of bare errors; entries gathered through a module or class carry
                ``module`` / ``class`` keys.

        Returns:
            List of ``AnalyzeError`` or entry dicts
        """
        entries = self._error_entries(include_children)
        if query:
            entries = [entry for entry in entries if _error_matches(query, entry["error"])]
        if include_reports:
            return entries
        return [entry["error"] for entry in entries]

    def _error_entries(self, include_children: bool) -> list[dict]:
        entries = [{"error": error, "source": self} for error in self.errors]
        if include_children:
            for child in self.child_reports():
                entries.extend(child._error_entries(include_children=True))
        if self.error_context_key:
            for entry in entries:
                entry.setdefault(self.error_context_key, self)
        return entries

    def to_dict(self) -> dict:
        raise NotImplementedError

    def to_json(self, indent: Optional[int] = None) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    @staticmethod
    def _parse_errors(data: Mapping[str, Any]) -> list[AnalyzeError]:
        return [AnalyzeError.parse(error) for error in data.get("errors", [])]


def _error_matches(query: Mapping[str, Any], error: Any) -> bool:
    if ObjectUtil.safe_equal(query, error):
        return True
    return ObjectUtil.safe_equal(query, error.to_dict())
