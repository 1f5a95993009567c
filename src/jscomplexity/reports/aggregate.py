"""Raw metric counters accumulated for one scope."""

from __future__ import annotations

from typing import Any, Mapping

from ..utils import MathUtil
from .averages import Sloc
from .halstead import HalsteadData


class AggregateReport:
    """Cyclomatic, Halstead, parameter and SLOC counters.

    Module and method aggregates start at a cyclomatic base of 1; class
    aggregates start at 0 and gain 1 per contained method.
    """

    def __init__(self, line_start: int = 0, line_end: int = 0, base_cyclomatic: int = 1):
        self.cyclomatic: float = base_cyclomatic
        self.cyclomatic_density: float = 0
        self.halstead = HalsteadData()
        self.param_count: float = 0
        self.sloc = Sloc(0, line_end - line_start + 1)

    def finalize(self) -> None:
        self.cyclomatic = MathUtil.to_fixed(self.cyclomatic)
        self.cyclomatic_density = MathUtil.to_fixed(self.cyclomatic_density)
        self.halstead.finalize()

    def _metrics_dict(self) -> dict:
        return {
            "cyclomatic": self.cyclomatic,
            "cyclomaticDensity": self.cyclomatic_density,
            "halstead": self.halstead.to_dict(),
            "paramCount": self.param_count,
            "sloc": self.sloc.to_dict(),
        }

    def _parse_metrics(self, data: Mapping[str, Any]) -> None:
        self.cyclomatic = data.get("cyclomatic", 0)
        self.cyclomatic_density = data.get("cyclomaticDensity", 0)
        self.halstead = HalsteadData.parse(data.get("halstead", {}))
        self.param_count = data.get("paramCount", 0)
        self.sloc = Sloc.parse(data.get("sloc", {}))

    def to_dict(self) -> dict:
        return self._metrics_dict()

    @classmethod
    def parse(cls, data: Mapping[str, Any]) -> "AggregateReport":
        report = cls()
        report._parse_metrics(data)
        return report
