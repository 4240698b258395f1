from dataclasses import dataclass
from typing import Literal, Optional, Sequence

from orbit_analytics.core.stats import percent_change, split_half_averages
from orbit_analytics.core.validation import require_number

TrendDirection = Literal["increasing", "decreasing", "stable"]

# Absolute units between half averages. Empirical; see DESIGN.md.
DEFAULT_TREND_TOLERANCE = 1.0


@dataclass(frozen=True)
class TrendResult:
    direction: TrendDirection
    first_avg: float
    second_avg: float
    percent_change: Optional[float]


def classify_direction(
    first_avg: float,
    second_avg: float,
    tolerance: float = DEFAULT_TREND_TOLERANCE,
) -> TrendDirection:
    if second_avg > first_avg + tolerance:
        return "increasing"
    if second_avg < first_avg - tolerance:
        return "decreasing"
    return "stable"


def classify_trend(
    series: Sequence[float],
    tolerance: float = DEFAULT_TREND_TOLERANCE,
) -> TrendResult:
    """
    Compare the average of the first half of a series (floor(n/2) points)
    with the average of the rest.
    """
    values = [require_number(v, "trend value", allow_none=False, allow_negative=True) for v in series]
    first_avg, second_avg = split_half_averages(values)

    return TrendResult(
        direction=classify_direction(first_avg, second_avg, tolerance),
        first_avg=first_avg,
        second_avg=second_avg,
        percent_change=percent_change(first_avg, second_avg),
    )
