from orbit_analytics.flags.trend import TrendResult, classify_trend
from .volume import WeeklyVolumeStats, weekly_volume_stats
from .divergence import (
    Divergence,
    NARRATIVES,
    classify_divergence,
    analyze_divergence,
)

__all__ = [
    "TrendResult",
    "classify_trend",
    "WeeklyVolumeStats",
    "weekly_volume_stats",
    "Divergence",
    "NARRATIVES",
    "classify_divergence",
    "analyze_divergence",
]
