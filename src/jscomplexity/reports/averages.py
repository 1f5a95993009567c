"""Average containers for methods and modules."""

from __future__ import annotations

from typing import Any, Mapping

from ..utils import MathUtil, ObjectUtil
from .halstead import DERIVED_FIELDS, HalsteadCounts


class Sloc:
    """Source lines of code: ``logical`` statements and ``physical`` lines."""

    __slots__ = ("logical", "physical")

    def __init__(self, logical: float = 0, physical: float = 0):
        self.logical = logical
        self.physical = physical

    def to_dict(self) -> dict:
        return {"logical": self.logical, "physical": self.physical}

    @classmethod
    def parse(cls, data: Mapping[str, Any]) -> "Sloc":
        return cls(data.get("logical", 0), data.get("physical", 0))


class HalsteadAverage:
    """Halstead metrics averaged over several reports; identifiers are not kept."""

    def __init__(self) -> None:
        for name in DERIVED_FIELDS:
            setattr(self, name, 0)
        self.operands = HalsteadCounts()
        self.operators = HalsteadCounts()

    def to_dict(self) -> dict:
        data = {name: getattr(self, name) for name in DERIVED_FIELDS}
        data["operands"] = self.operands.to_dict(include_identifiers=False)
        data["operators"] = self.operators.to_dict(include_identifiers=False)
        return data

    @classmethod
    def parse(cls, data: Mapping[str, Any]) -> "HalsteadAverage":
        average = cls()
        for name in DERIVED_FIELDS:
            setattr(average, name, data.get(name, 0))
        average.operands = HalsteadCounts.parse(data.get("operands", {}))
        average.operators = HalsteadCounts.parse(data.get("operators", {}))
        average.operands.identifiers = []
        average.operators.identifiers = []
        return average


class MethodAverage:
    """Mean cyclomatic, density, Halstead, parameter count and SLOC."""

    KEYS = (
        "cyclomatic",
        "cyclomatic_density",
        "halstead.bugs",
        "halstead.difficulty",
        "halstead.effort",
        "halstead.length",
        "halstead.time",
        "halstead.vocabulary",
        "halstead.volume",
        "halstead.operands.distinct",
        "halstead.operands.total",
        "halstead.operators.distinct",
        "halstead.operators.total",
        "param_count",
        "sloc.logical",
        "sloc.physical",
    )

    def __init__(self) -> None:
        self.cyclomatic: float = 0
        self.cyclomatic_density: float = 0
        self.halstead = HalsteadAverage()
        self.param_count: float = 0
        self.sloc = Sloc()

    @property
    def keys(self) -> tuple:
        return self.KEYS

    def get(self, accessor: str) -> float:
        return ObjectUtil.safe_access(self, accessor, 0)

    def set(self, accessor: str, value: float) -> None:
        ObjectUtil.safe_set(self, accessor, value)

    def reset(self) -> None:
        for accessor in self.KEYS:
            self.set(accessor, 0)

    def finalize(self) -> None:
        for accessor in self.KEYS:
            self.set(accessor, MathUtil.to_fixed(self.get(accessor)))

    def to_dict(self) -> dict:
        return {
            "cyclomatic": self.cyclomatic,
            "cyclomaticDensity": self.cyclomatic_density,
            "halstead": self.halstead.to_dict(),
            "paramCount": self.param_count,
            "sloc": self.sloc.to_dict(),
        }

    @classmethod
    def parse(cls, data: Mapping[str, Any]) -> "MethodAverage":
        average = cls()
        average.cyclomatic = data.get("cyclomatic", 0)
        average.cyclomatic_density = data.get("cyclomaticDensity", 0)
        average.halstead = HalsteadAverage.parse(data.get("halstead", {}))
        average.param_count = data.get("paramCount", 0)
        average.sloc = Sloc.parse(data.get("sloc", {}))
        return average


class ModuleAverage:
    """Per-project mean over modules: method averages and maintainability."""

    KEYS = tuple(f"method_average.{key}" for key in MethodAverage.KEYS) + ("maintainability",)

    def __init__(self) -> None:
        self.method_average = MethodAverage()
        self.maintainability: float = 0

    @property
    def keys(self) -> tuple:
        return self.KEYS

    def get(self, accessor: str) -> float:
        return ObjectUtil.safe_access(self, accessor, 0)

    def set(self, accessor: str, value: float) -> None:
        ObjectUtil.safe_set(self, accessor, value)

    def finalize(self) -> None:
        self.method_average.finalize()
        self.maintainability = MathUtil.to_fixed(self.maintainability)

    def to_dict(self) -> dict:
        return {"methodAverage": self.method_average.to_dict(), "maintainability": self.maintainability}

    @classmethod
    def parse(cls, data: Mapping[str, Any]) -> "ModuleAverage":
        average = cls()
        average.method_average = MethodAverage.parse(data.get("methodAverage", {}))
        average.maintainability = data.get("maintainability", 0)
        return average
