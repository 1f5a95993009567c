"""Base formatter interface for rendering finalized reports."""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional

from ..logging_config import get_logger
from ..reports import AbstractReport, ReportType

logger = get_logger(__name__)

ALL_REPORT_TYPES = frozenset(ReportType)
METHOD_REPORT_TYPES = frozenset({ReportType.CLASS_METHOD, ReportType.MODULE_METHOD, ReportType.NESTED_METHOD})


class ReportFormatter(ABC):
    """Abstract base class for report formatters.

    Subclasses set ``name`` (registry key), ``extension`` (file suffix
    without the dot) and ``type`` (``full``, ``minimal``, ``modules``,
    ``checkstyle``, ``adjacency`` or ``visibility``).
    """

    name: str = ""
    extension: str = ""
    type: str = ""
    supported_types: frozenset = ALL_REPORT_TYPES

    def is_supported(self, report_type: ReportType) -> bool:
        return report_type in self.supported_types

    @abstractmethod
    def format_report(self, report: AbstractReport, options: Optional[Mapping[str, Any]] = None) -> str:
        """Return the whole document for one finalized report."""

    def _unsupported(self, report: AbstractReport) -> str:
        logger.warning(f"Formatter '{self.name}' does not support {report.type.description} reports")
        return ""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


def dump_json(data: Any, options: Optional[Mapping[str, Any]] = None) -> str:
    """Serialize ``data``; an integer ``spacing`` option pretty-prints."""
    spacing = (options or {}).get("spacing")
    if isinstance(spacing, int) and not isinstance(spacing, bool):
        return json.dumps(data, indent=spacing)
    return json.dumps(data, separators=(",", ":"))


def format_number(value: Any) -> Any:
    """Drop a trailing ``.0`` so whole numbers print as integers."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value
