from dataclasses import dataclass, field
from typing import Any, Iterable, List, Literal, Mapping, Optional, Union

from orbit_analytics.core.validation import require_count, require_number

PatternType = Literal[
    "day_spike",
    "equipment_cascade",
    "trend_improvement",
    "trend_deterioration",
    "room_concentration",
    "recurring_surgeon",
]
PatternSeverity = Literal["critical", "warning", "good"]

DAY_CATEGORIES = ("fcots", "timing", "turnover", "delay", "financial", "quality")


# =====================================================
# AGGREGATED ROWS (server-side flag analytics)
# =====================================================

@dataclass
class WeeklyTrendPoint:
    week: str
    threshold: int = 0
    delay: int = 0
    total: int = 0

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "WeeklyTrendPoint":
        return cls(
            week=str(row["week"]),
            threshold=require_count(row.get("threshold", 0), "threshold"),
            delay=require_count(row.get("delay", 0), "delay"),
            total=require_count(row.get("total", 0), "total"),
        )


@dataclass
class DayOfWeekRow:
    day: str
    day_num: int
    fcots: int = 0
    timing: int = 0
    turnover: int = 0
    delay: int = 0
    financial: int = 0
    quality: int = 0
    total: Optional[int] = None

    def __post_init__(self):
        category_sum = sum(getattr(self, c) for c in DAY_CATEGORIES)
        if self.total is None:
            self.total = category_sum
        elif self.total != category_sum:
            raise ValueError(
                f"{self.day}: total {self.total} does not match category sum {category_sum}"
            )

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "DayOfWeekRow":
        counts = {c: require_count(row.get(c, 0), f"{row.get('day')}.{c}") for c in DAY_CATEGORIES}
        total = row.get("total")
        return cls(
            day=str(row["day"]),
            day_num=int(row.get("day_num", row.get("dayNum", 0))),
            total=None if total is None else require_count(total, "total"),
            **counts,
        )

    def categories(self) -> dict:
        return {c: getattr(self, c) for c in DAY_CATEGORIES}


def validate_day_rows(rows: Iterable[Union[DayOfWeekRow, Mapping[str, Any]]]) -> List[DayOfWeekRow]:
    """
    Heatmap rows with totals checked against their category counts.
    Raises ValueError on a mismatch or a repeated day.
    """
    validated: List[DayOfWeekRow] = []
    seen = set()
    for row in rows:
        if not isinstance(row, DayOfWeekRow):
            row = DayOfWeekRow.from_row(row)

        category_sum = sum(row.categories().values())
        if row.total != category_sum:
            raise ValueError(
                f"{row.day}: total {row.total} does not match category sum {category_sum}"
            )
        if row.day in seen:
            raise ValueError(f"duplicate heatmap row for {row.day}")
        seen.add(row.day)
        validated.append(row)
    return validated


@dataclass
class SurgeonFlagRow:
    name: str
    cases: int
    flags: int
    rate: float                 # flagged-case rate, percent
    top_flag: Optional[str] = None
    surgeon_id: Optional[str] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "SurgeonFlagRow":
        return cls(
            name=row["name"],
            cases=require_count(row.get("cases", 0), "cases"),
            flags=require_count(row.get("flags", 0), "flags"),
            rate=require_number(row.get("rate", 0), "rate", allow_none=False),
            top_flag=row.get("top_flag", row.get("topFlag")),
            surgeon_id=row.get("surgeon_id", row.get("surgeonId")),
        )


@dataclass
class RoomFlagRow:
    room: str
    cases: int
    flags: int
    rate: float = 0.0
    top_issue: Optional[str] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "RoomFlagRow":
        return cls(
            room=row["room"],
            cases=require_count(row.get("cases", 0), "cases"),
            flags=require_count(row.get("flags", 0), "flags"),
            rate=require_number(row.get("rate", 0), "rate", allow_none=False),
            top_issue=row.get("top_issue", row.get("topIssue")),
        )


@dataclass
class DelayTypeRow:
    name: str
    count: int

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "DelayTypeRow":
        return cls(name=row["name"], count=require_count(row.get("count", 0), "count"))


@dataclass
class FlagSummary:
    total_cases: int = 0
    flagged_cases: int = 0
    total_flags: int = 0
    flag_rate: float = 0.0              # percent of cases flagged
    avg_flags_per_case: float = 0.0     # per flagged case

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "FlagSummary":
        return cls(
            total_cases=require_count(row.get("total_cases", row.get("totalCases", 0)), "total_cases"),
            flagged_cases=require_count(row.get("flagged_cases", row.get("flaggedCases", 0)), "flagged_cases"),
            total_flags=require_count(row.get("total_flags", row.get("totalFlags", 0)), "total_flags"),
            flag_rate=require_number(row.get("flag_rate", row.get("flagRate", 0)), "flag_rate", allow_none=False),
            avg_flags_per_case=require_number(
                row.get("avg_flags_per_case", row.get("avgFlagsPerCase", 0)),
                "avg_flags_per_case",
                allow_none=False,
            ),
        )


@dataclass
class FlagAnalytics:
    summary: FlagSummary
    weekly_trend: List[WeeklyTrendPoint] = field(default_factory=list)
    day_of_week_heatmap: List[DayOfWeekRow] = field(default_factory=list)
    surgeon_flags: List[SurgeonFlagRow] = field(default_factory=list)
    room_flags: List[RoomFlagRow] = field(default_factory=list)
    delay_type_breakdown: List[DelayTypeRow] = field(default_factory=list)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "FlagAnalytics":
        """
        Build from the JSON blob returned by the flag analytics RPC.
        Accepts snake_case or the RPC's camelCase keys.
        """
        def section(*keys):
            for key in keys:
                if key in payload and payload[key] is not None:
                    return payload[key]
            return []

        return cls(
            summary=FlagSummary.from_row(payload.get("summary") or {}),
            weekly_trend=[WeeklyTrendPoint.from_row(r) for r in section("weekly_trend", "weeklyTrend")],
            day_of_week_heatmap=validate_day_rows(section("day_of_week_heatmap", "dayOfWeekHeatmap")),
            surgeon_flags=[SurgeonFlagRow.from_row(r) for r in section("surgeon_flags", "surgeonFlags")],
            room_flags=[RoomFlagRow.from_row(r) for r in section("room_flags", "roomFlags")],
            delay_type_breakdown=[
                DelayTypeRow.from_row(r) for r in section("delay_type_breakdown", "delayTypeBreakdown")
            ],
        )


# =====================================================
# OUTPUT
# =====================================================

@dataclass
class DetectedPattern:
    type: PatternType
    severity: PatternSeverity
    title: str
    metric: str
    description: str
