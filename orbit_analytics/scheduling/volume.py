from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional, Union

import pandas as pd

from orbit_analytics.core.stats import round_half_up
from orbit_analytics.core.validation import require_count
from orbit_analytics.flags.trend import DEFAULT_TREND_TOLERANCE, TrendDirection, classify_trend


@dataclass(frozen=True)
class WeeklyVolumeStats:
    max: int
    avg: int
    trend_direction: TrendDirection
    trend_percent: Optional[int]
    first_avg: int
    second_avg: int
    weeks: int


def _count(entry: Union[int, Mapping[str, Any]]) -> int:
    if isinstance(entry, Mapping):
        return require_count(entry.get("count", 0), f"week {entry.get('week', '?')} count")
    return require_count(entry, "weekly count")


def weekly_volume_stats(
    weekly_volume: Iterable[Union[int, Mapping[str, Any]]],
    tolerance: float = DEFAULT_TREND_TOLERANCE,
) -> Optional[WeeklyVolumeStats]:
    """
    Summary of case counts per week: peak, average and half-over-half trend.

    Entries are plain counts or {"week": ..., "count": ...} rows. Returns None
    for an empty series. Averages and percent are rounded for display; the
    trend itself is classified on the unrounded averages.
    """
    counts = pd.Series([_count(w) for w in weekly_volume], dtype=float)
    if counts.empty:
        return None

    trend = classify_trend(counts.tolist(), tolerance)

    return WeeklyVolumeStats(
        max=int(counts.max()),
        avg=round_half_up(counts.mean()),
        trend_direction=trend.direction,
        trend_percent=None if trend.percent_change is None else round_half_up(trend.percent_change),
        first_avg=round_half_up(trend.first_avg),
        second_avg=round_half_up(trend.second_avg),
        weeks=len(counts),
    )
