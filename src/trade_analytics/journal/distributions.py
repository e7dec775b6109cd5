"""R-multiple distribution histograms."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import asdict, dataclass
from typing import Any

import numpy as np


@dataclass(frozen=True)
class HistogramBin:
    bin: str
    count: int
    min_value: float
    max_value: float

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def bin_r_values(r_values: Sequence[float], bin_count: int = 10) -> list[HistogramBin]:
    """Equal-width bins spanning [min, max]; the last bin is closed.

    When every value is identical all of them land in the last bin.
    """
    if not r_values or bin_count < 1:
        return []

    values = np.asarray(r_values, dtype=float)
    low = float(values.min())
    high = float(values.max())

    if high == low:
        counts = np.zeros(bin_count, dtype=int)
        counts[-1] = len(values)
        edges = np.full(bin_count + 1, low)
    else:
        counts, edges = np.histogram(values, bins=bin_count, range=(low, high))

    return [
        HistogramBin(
            bin=f"{edges[i]:.1f} to {edges[i + 1]:.1f}",
            count=int(counts[i]),
            min_value=float(edges[i]),
            max_value=float(edges[i + 1]),
        )
        for i in range(bin_count)
    ]
