# orbit_analytics/flags/thresholds.py

"""
FLAG PATTERN THRESHOLDS
-----------------------
Heuristic cut-offs for the pattern detectors. Defaults are the values the
flag analytics page ships with; facilities override them through the
`flags:` section of the config.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class FlagThresholds:
    # Day is a spike if >50% more flags than the daily average
    day_spike_pct: float = 0.5
    # Spike becomes critical past +100%
    day_spike_critical_pct: float = 1.0
    # Trend is significant if >20% change between halves
    trend_change_pct: float = 0.2
    # Minimum weeks needed to detect a trend
    trend_min_weeks: int = 3
    # Room is concentrated if >35% of flags but <30% of cases
    room_flag_pct: float = 0.35
    room_case_pct: float = 0.3
    # Surgeon is recurring if flag rate >2x facility average
    surgeon_multiplier: float = 2.0
    # Minimum flags to consider a pattern meaningful
    min_flags_for_pattern: int = 3
    # Avg flags per flagged case suggesting a cascade
    cascade_flags_per_case: float = 1.5
    cascade_min_delays: int = 2

    def __post_init__(self):
        for name, value in self.__dict__.items():
            if isinstance(value, bool) or not isinstance(value, (int, float)) or value < 0:
                raise ValueError(f"flag threshold {name} must be a non-negative number, got {value!r}")


DEFAULT_THRESHOLDS = FlagThresholds()

EQUIPMENT_KEYWORDS = ("equipment", "supply", "instrument", "device", "implant")

SEVERITY_ORDER = {
    "critical": 0,
    "warning": 1,
    "good": 2,
}
