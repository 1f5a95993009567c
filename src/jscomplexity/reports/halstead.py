"""Halstead operator/operand tallies and their derived metrics."""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from ..utils import MathUtil

DERIVED_FIELDS = ("bugs", "difficulty", "effort", "length", "time", "vocabulary", "volume")


class HalsteadCounts:
    """Distinct/total tally for one side (operators or operands)."""

    __slots__ = ("distinct", "total", "_identifiers", "_seen")

    def __init__(self, distinct: float = 0, total: float = 0, identifiers: Iterable[str] = ()):
        self.distinct = distinct
        self.total = total
        self.identifiers = identifiers

    @property
    def identifiers(self) -> list[str]:
        """Distinct identifiers in first-seen order."""
        return self._identifiers

    @identifiers.setter
    def identifiers(self, identifiers: Iterable[str]) -> None:
        self._identifiers: list[str] = list(identifiers)
        self._seen: set[str] = set(self._identifiers)

    def add(self, identifier: str) -> None:
        self.total += 1
        if identifier not in self._seen:
            self._seen.add(identifier)
            self._identifiers.append(identifier)
            self.distinct += 1

    def reset(self, clear_identifiers: bool = False) -> None:
        self.distinct = 0
        self.total = 0
        if clear_identifiers:
            self.identifiers = []

    def to_dict(self, include_identifiers: bool = True) -> dict:
        data = {"distinct": self.distinct, "total": self.total}
        if include_identifiers:
            data["identifiers"] = list(self.identifiers)
        return data

    @classmethod
    def parse(cls, data: Mapping[str, Any]) -> "HalsteadCounts":
        return cls(data.get("distinct", 0), data.get("total", 0), data.get("identifiers", ()))


class HalsteadData:
    """Operator/operand multisets plus length, vocabulary, volume, difficulty, effort, bugs, time."""

    def __init__(self) -> None:
        self.bugs: float = 0
        self.difficulty: float = 0
        self.effort: float = 0
        self.length: float = 0
        self.time: float = 0
        self.vocabulary: float = 0
        self.volume: float = 0
        self.operands = HalsteadCounts()
        self.operators = HalsteadCounts()

    def reset(self, clear_identifiers: bool = False) -> None:
        for name in DERIVED_FIELDS:
            setattr(self, name, 0)
        self.operands.reset(clear_identifiers)
        self.operators.reset(clear_identifiers)

    def finalize(self) -> None:
        for name in DERIVED_FIELDS:
            setattr(self, name, MathUtil.to_fixed(getattr(self, name)))

    def to_dict(self) -> dict:
        data = {name: getattr(self, name) for name in DERIVED_FIELDS}
        data["operands"] = self.operands.to_dict()
        data["operators"] = self.operators.to_dict()
        return data

    @classmethod
    def parse(cls, data: Mapping[str, Any]) -> "HalsteadData":
        halstead = cls()
        for name in DERIVED_FIELDS:
            setattr(halstead, name, data.get(name, 0))
        halstead.operands = HalsteadCounts.parse(data.get("operands", {}))
        halstead.operators = HalsteadCounts.parse(data.get("operators", {}))
        return halstead
