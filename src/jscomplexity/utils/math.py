"""Numeric helpers shared by the report model and the project metrics."""

from __future__ import annotations

import math
from typing import Any, Sequence

import numpy as np

DECIMAL_PLACES = 3


class MathUtil:
    """Rounding, matrix compaction and small statistics."""

    @staticmethod
    def compact_matrix(matrix: Sequence[Sequence[Any]], test_value: Any = 1) -> list[dict]:
        """
        Compact a dense matrix into sparse ``{row, cols}`` entries.

        Only rows holding at least one cell equal to ``test_value`` are kept.

        Args:
            matrix: Dense 2D matrix (nested sequences or a numpy array)
            test_value: Cell value marking an entry

        Returns:
            List of ``{"row": int, "cols": [int, ...]}`` dictionaries
        """
        compacted = []
        for row_index, row in enumerate(matrix):
            cols = [col_index for col_index, value in enumerate(row) if value == test_value]
            if cols:
                compacted.append({"row": row_index, "cols": cols})
        return compacted

    @staticmethod
    def get_median(values: Sequence[float]) -> float:
        """Median of ``values``; 0 for an empty sequence."""
        if len(values) == 0:
            return 0.0
        return float(np.median(np.asarray(values, dtype=float)))

    @staticmethod
    def get_percent(value: float, limit: float) -> float:
        """``value`` as a percentage of ``limit``; 0 when ``limit`` is 0."""
        return 0.0 if limit == 0 else (value / limit) * 100

    @staticmethod
    def to_fixed(value: Any) -> Any:
        """Round non-integral floats to three decimals; return anything else unchanged."""
        if isinstance(value, bool) or not isinstance(value, float):
            return value
        if not math.isfinite(value) or value.is_integer():
            return value
        return round(value, DECIMAL_PLACES)
