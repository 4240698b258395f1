# orbit_analytics/flags/patterns.py
"""
Pattern detection over aggregated flag analytics.

The aggregates (weekly trend, day-of-week heatmap, per-surgeon and per-room
counts) are computed server-side; this module only applies heuristic rules
to them and returns named, severity-tagged patterns.
"""

from typing import List, Optional, Sequence

import pandas as pd

from orbit_analytics.core.stats import percent_label, round_half_up, split_half_averages
from .models import (
    DayOfWeekRow,
    DetectedPattern,
    FlagAnalytics,
    RoomFlagRow,
    SurgeonFlagRow,
    WeeklyTrendPoint,
)
from .thresholds import DEFAULT_THRESHOLDS, EQUIPMENT_KEYWORDS, SEVERITY_ORDER, FlagThresholds

# Categories named in a spike description, in tie-break order
SPIKE_CATEGORY_LABELS = {
    "fcots": "FCOTS",
    "timing": "Timing",
    "turnover": "Turnover",
    "delay": "Delay",
    "financial": "Financial",
    "quality": "Quality",
}


# =====================================================
# MAIN ENTRY POINT
# =====================================================

def detect_flag_patterns(
    data: FlagAnalytics,
    thresholds: Optional[FlagThresholds] = None,
) -> List[DetectedPattern]:
    """
    Run every detector and return patterns ordered critical -> warning -> good.
    """
    t = thresholds or DEFAULT_THRESHOLDS
    patterns: List[DetectedPattern] = []

    if data.summary.total_flags < t.min_flags_for_pattern:
        return patterns

    patterns.extend(detect_day_spikes(data.day_of_week_heatmap, t))
    patterns.extend(detect_trend_changes(data.weekly_trend, t))
    patterns.extend(
        detect_room_concentration(
            data.room_flags, data.summary.total_cases, data.summary.total_flags, t
        )
    )
    patterns.extend(detect_recurring_surgeon(data.surgeon_flags, data.summary.flag_rate, t))
    patterns.extend(detect_equipment_cascade(data, t))

    patterns.sort(key=lambda p: SEVERITY_ORDER[p.severity])
    return patterns


# =====================================================
# DETECTORS
# =====================================================

def detect_day_spikes(
    heatmap: Sequence[DayOfWeekRow],
    t: FlagThresholds = DEFAULT_THRESHOLDS,
) -> List[DetectedPattern]:
    """
    Any weekday with more than `day_spike_pct` flags above the daily average.
    """
    if not heatmap:
        return []

    df = pd.DataFrame([{"day": d.day, **d.categories(), "total": d.total} for d in heatmap])
    avg_per_day = df["total"].mean()
    if avg_per_day == 0:
        return []

    df["excess"] = (df["total"] - avg_per_day) / avg_per_day
    spikes = df[(df["excess"] > t.day_spike_pct) & (df["total"] >= t.min_flags_for_pattern)]

    patterns = []
    for _, day in spikes.iterrows():
        # idxmax keeps the first category on ties
        top = day[list(SPIKE_CATEGORY_LABELS)].astype(int).idxmax()
        pct = percent_label(day["excess"])
        patterns.append(
            DetectedPattern(
                type="day_spike",
                severity="critical" if day["excess"] > t.day_spike_critical_pct else "warning",
                title=f"{day['day']} Spike",
                metric=pct,
                description=(
                    f"{day['day']}s average {pct} more flags than other days. "
                    f"{int(day[top])} of {int(day['total'])} flags are {SPIKE_CATEGORY_LABELS[top]}."
                ),
            )
        )
    return patterns


def _half_change(values: Sequence[float]) -> Optional[float]:
    first, second = split_half_averages(values)
    if first <= 0:
        return None
    return (second - first) / first


def detect_trend_changes(
    trend: Sequence[WeeklyTrendPoint],
    t: FlagThresholds = DEFAULT_THRESHOLDS,
) -> List[DetectedPattern]:
    """
    Threshold and delay flag series, first half vs second half of the range.
    """
    if len(trend) < t.trend_min_weeks:
        return []

    series = (
        (
            [w.threshold for w in trend],
            "Threshold Flags",
            "Auto-detected flags",
            "Threshold-based alerts are improving.",
            "Review flag rules for emerging issues.",
        ),
        (
            [w.delay for w in trend],
            "Reported Delays",
            "User-reported delays",
            "Operational improvements are working.",
            "Investigate root causes.",
        ),
    )

    patterns = []
    for values, title, subject, improving_note, worsening_note in series:
        change = _half_change(values)
        if change is None:
            continue

        pct = percent_label(change)
        if change < -t.trend_change_pct:
            patterns.append(
                DetectedPattern(
                    type="trend_improvement",
                    severity="good",
                    title=f"{title} Declining",
                    metric=pct,
                    description=f"{subject} down {pct} over recent weeks. {improving_note}",
                )
            )
        elif change > t.trend_change_pct:
            patterns.append(
                DetectedPattern(
                    type="trend_deterioration",
                    severity="warning",
                    title=f"{title} Increasing",
                    metric=pct,
                    description=f"{subject} up {pct} over recent weeks. {worsening_note}",
                )
            )
    return patterns


def detect_room_concentration(
    rooms: Sequence[RoomFlagRow],
    total_cases: int,
    total_flags: int,
    t: FlagThresholds = DEFAULT_THRESHOLDS,
) -> List[DetectedPattern]:
    """
    A room carrying a large share of flags but a small share of cases.
    """
    if not rooms or total_cases == 0 or total_flags == 0:
        return []

    patterns = []
    for room in rooms:
        flag_share = room.flags / total_flags
        case_share = room.cases / total_cases

        if flag_share > t.room_flag_pct and case_share < t.room_case_pct:
            flag_pct = f"{round_half_up(flag_share * 100)}%"
            case_pct = f"{round_half_up(case_share * 100)}%"
            patterns.append(
                DetectedPattern(
                    type="room_concentration",
                    severity="critical",
                    title=f"{room.room} Flag Concentration",
                    metric=flag_pct,
                    description=(
                        f"{room.room} accounts for {flag_pct} of all flags despite handling "
                        f"{case_pct} of cases. Top issue: {room.top_issue or 'N/A'}."
                    ),
                )
            )
    return patterns


def detect_recurring_surgeon(
    surgeons: Sequence[SurgeonFlagRow],
    facility_flag_rate: float,
    t: FlagThresholds = DEFAULT_THRESHOLDS,
) -> List[DetectedPattern]:
    """
    Surgeons whose flag rate is a multiple of the facility average.
    """
    if not surgeons or facility_flag_rate == 0:
        return []

    threshold = facility_flag_rate * t.surgeon_multiplier

    patterns = []
    for surgeon in surgeons:
        if surgeon.rate > threshold and surgeon.flags >= t.min_flags_for_pattern:
            multiplier = f"{surgeon.rate / facility_flag_rate:.1f}"
            patterns.append(
                DetectedPattern(
                    type="recurring_surgeon",
                    severity="warning",
                    title=f"{surgeon.name} Flag Pattern",
                    metric=f"{multiplier}x",
                    description=(
                        f"{surgeon.name} has a {surgeon.rate:.0f}% flag rate "
                        f"({multiplier}x facility average). Top flag: {surgeon.top_flag or 'N/A'}."
                    ),
                )
            )
    return patterns


def detect_equipment_cascade(
    data: FlagAnalytics,
    t: FlagThresholds = DEFAULT_THRESHOLDS,
) -> List[DetectedPattern]:
    """
    Equipment/supply delays alongside an elevated flags-per-case ratio,
    suggesting equipment issues cascade into further threshold flags.
    """
    equipment_delays = [
        d for d in data.delay_type_breakdown
        if any(kw in d.name.lower() for kw in EQUIPMENT_KEYWORDS)
    ]
    if not equipment_delays:
        return []

    total_equipment_delays = sum(d.count for d in equipment_delays)
    if total_equipment_delays < t.cascade_min_delays:
        return []

    if data.summary.avg_flags_per_case <= t.cascade_flags_per_case:
        return []

    ratio = f"{data.summary.avg_flags_per_case:.1f}"
    return [
        DetectedPattern(
            type="equipment_cascade",
            severity="critical",
            title="Equipment -> Cascade Pattern",
            metric=f"{ratio}x",
            description=(
                f"{total_equipment_delays} equipment-related delays detected. Cases average "
                f"{ratio} flags each, suggesting equipment issues cascade into additional "
                f"threshold flags."
            ),
        )
    ]
