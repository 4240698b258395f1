"""
ORbit Analytics

Operating-room analytics core: holiday calendars, milestone pair brackets,
case financials, flag pattern detection and volume/utilization trends.
"""

from .__version__ import __version__

# Keep package init lightweight
# Report runner, CLI and charts (matplotlib) are imported explicitly by users

from .calendars import holidays_for_year, is_holiday, count_in_range
from .timeline import compute_brackets, compute_bracket_area_width
from .financials import compute_projection, compute_comparison, build_case_financial_data
from .flags import FlagAnalytics, detect_flag_patterns
from .scheduling import classify_trend, analyze_divergence, weekly_volume_stats

__all__ = [
    "__version__",
    "holidays_for_year",
    "is_holiday",
    "count_in_range",
    "compute_brackets",
    "compute_bracket_area_width",
    "compute_projection",
    "compute_comparison",
    "build_case_financial_data",
    "FlagAnalytics",
    "detect_flag_patterns",
    "classify_trend",
    "analyze_divergence",
    "weekly_volume_stats",
]
