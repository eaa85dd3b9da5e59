"""Small statistics kernel shared by every analyzer.

All functions are total: empty input or a zero denominator yields 0, never
NaN or an exception.
"""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np



def mean(values: Sequence[float]) -> float:
    if not len(values):
        return 0.0
    return float(np.mean(values))



def median(values: Sequence[float]) -> float:
    if not len(values):
        return 0.0
    return float(np.median(values))



def stddev(values: Sequence[float]) -> float:
    """Population standard deviation."""
    if not len(values):
        return 0.0
    return float(np.std(values))



def pearson(xs: Sequence[float], ys: Sequence[float]) -> float:
    if len(xs) != len(ys) or not len(xs):
        return 0.0

    x = np.asarray(xs, dtype=float)
    y = np.asarray(ys, dtype=float)
    dx = x - x.mean()
    dy = y - y.mean()

    sum_sq_x = float(np.sum(dx * dx))
    sum_sq_y = float(np.sum(dy * dy))
    if sum_sq_x == 0 or sum_sq_y == 0:
        return 0.0

    result = float(np.sum(dx * dy)) / math.sqrt(sum_sq_x * sum_sq_y)
    return result if math.isfinite(result) else 0.0



def safe_div(numerator: float, denominator: float) -> float:
    if not denominator:
        return 0.0
    return numerator / denominator



def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))
