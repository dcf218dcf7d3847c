from __future__ import annotations

import math
from typing import Dict, Iterable, List


class Statistic:
    """Accumulates numeric samples and reports summary values."""

    def __init__(self, values: Iterable[float] = ()) -> None:
        self._values: List[float] = list(values)

    def add_number(self, value: float) -> None:
        self._values.append(value)

    @property
    def values(self) -> List[float]:
        return list(self._values)

    @property
    def count(self) -> int:
        return len(self._values)

    def average(self) -> float:
        if not self._values:
            return math.nan
        return sum(self._values) / len(self._values)

    def percentile(self, percentile: float) -> float:
        if not self._values:
            return math.nan
        sorted_vals = sorted(self._values)
        k = (len(sorted_vals) - 1) * percentile
        f = math.floor(k)
        c = math.ceil(k)
        if f == c:
            return float(sorted_vals[int(k)])
        d0 = sorted_vals[int(f)] * (c - k)
        d1 = sorted_vals[int(c)] * (k - f)
        return float(d0 + d1)

    def describe(self) -> Dict[str, float]:
        return {
            "count": self.count,
            "average": self.average(),
            "p95": self.percentile(0.95),
            "max": float(max(self._values)) if self._values else math.nan,
        }
