import math
from typing import Iterable, Optional, Sequence, Tuple

import numpy as np


def compute_median(values: Iterable[float]) -> Optional[float]:
    """
    Median of a numeric list. Empty input returns None.
    """
    values = list(values)
    if not values:
        return None

    for v in values:
        if isinstance(v, bool) or not isinstance(v, (int, float, np.number)):
            raise ValueError(f"median input must be numeric, got {v!r}")

    arr = np.asarray(values, dtype=float)
    if np.isnan(arr).any():
        raise ValueError("median input contains NaN")

    return float(np.median(arr))


def mean_or_zero(values: Sequence[float]) -> float:
    if len(values) == 0:
        return 0.0
    return float(np.mean(values))


def split_half_averages(values: Sequence[float]) -> Tuple[float, float]:
    """
    Average of the first floor(n/2) values and of the rest.
    An empty half averages to 0.
    """
    values = list(values)
    mid = len(values) // 2
    return mean_or_zero(values[:mid]), mean_or_zero(values[mid:])


def percent_change(before: float, after: float) -> Optional[float]:
    if before == 0:
        return None
    return (after - before) / before * 100


def round_half_up(value: float) -> int:
    """
    Dashboard rounding: .5 always rounds up (Python's round() is banker's).
    """
    return int(math.floor(value + 0.5))


def percent_label(ratio: float, signed: bool = True) -> str:
    """
    0.52 -> '+52%', -0.3 -> '-30%'.
    """
    pct = round_half_up(ratio * 100)
    if signed and pct > 0:
        return f"+{pct}%"
    return f"{pct}%"
