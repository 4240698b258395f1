from .models import (
    WeeklyTrendPoint,
    DayOfWeekRow,
    SurgeonFlagRow,
    RoomFlagRow,
    DelayTypeRow,
    FlagSummary,
    FlagAnalytics,
    DetectedPattern,
    validate_day_rows,
)
from .thresholds import FlagThresholds, DEFAULT_THRESHOLDS
from .trend import TrendResult, classify_trend, classify_direction
from .patterns import (
    detect_flag_patterns,
    detect_day_spikes,
    detect_trend_changes,
    detect_room_concentration,
    detect_recurring_surgeon,
    detect_equipment_cascade,
)

__all__ = [
    "WeeklyTrendPoint",
    "DayOfWeekRow",
    "SurgeonFlagRow",
    "RoomFlagRow",
    "DelayTypeRow",
    "FlagSummary",
    "FlagAnalytics",
    "DetectedPattern",
    "validate_day_rows",
    "FlagThresholds",
    "DEFAULT_THRESHOLDS",
    "TrendResult",
    "classify_trend",
    "classify_direction",
    "detect_flag_patterns",
    "detect_day_spikes",
    "detect_trend_changes",
    "detect_room_concentration",
    "detect_recurring_surgeon",
    "detect_equipment_cascade",
]
