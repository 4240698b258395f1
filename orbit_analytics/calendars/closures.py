"""
Facility closure calendar.

Facilities define their own holidays as rules (fixed month/day or the nth
weekday of a month) plus one-off closure dates. Rule rows come straight from
storage, so `day_of_week` uses the storage convention 0=Sunday ... 6=Saturday
and `week_of_month` 5 means "last".
"""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any, Iterable, List, Optional, Set

from dateutil.relativedelta import relativedelta, MO, TU, WE, TH, FR, SA, SU

from orbit_analytics.core.validation import to_date

LAST_WEEK = 5

# storage day_of_week (0=Sunday) -> relativedelta weekday
_STORAGE_WEEKDAYS = (SU, MO, TU, WE, TH, FR, SA)

DAY_NAMES = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")
MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)
ORDINALS = {1: "1st", 2: "2nd", 3: "3rd", 4: "4th", 5: "Last"}


@dataclass(frozen=True)
class FacilityHolidayRule:
    name: str
    month: int
    day: Optional[int] = None
    week_of_month: Optional[int] = None
    day_of_week: Optional[int] = None
    is_active: bool = True

    def __post_init__(self):
        if not 1 <= self.month <= 12:
            raise ValueError(f"{self.name}: month must be 1-12, got {self.month}")
        if self.day is None and (self.week_of_month is None or self.day_of_week is None):
            raise ValueError(
                f"{self.name}: rule needs either a day or week_of_month + day_of_week"
            )
        if self.day is None:
            if not 1 <= self.week_of_month <= LAST_WEEK:
                raise ValueError(f"{self.name}: week_of_month must be 1-5")
            if not 0 <= self.day_of_week <= 6:
                raise ValueError(f"{self.name}: day_of_week must be 0-6")

    @property
    def is_fixed(self) -> bool:
        return self.day is not None

    @classmethod
    def from_row(cls, row: dict) -> "FacilityHolidayRule":
        return cls(
            name=row["name"],
            month=row["month"],
            day=row.get("day"),
            week_of_month=row.get("week_of_month"),
            day_of_week=row.get("day_of_week"),
            is_active=row.get("is_active", True),
        )


@dataclass(frozen=True)
class FacilityClosure:
    closure_date: date
    reason: Optional[str] = None

    @classmethod
    def from_row(cls, row: dict) -> "FacilityClosure":
        return cls(to_date(row["closure_date"], "closure_date"), row.get("reason"))


# =====================================================
# RULE RESOLUTION
# =====================================================
def resolve_rule(rule: FacilityHolidayRule, year: int) -> Optional[date]:
    """
    Concrete date of a rule in `year`. None for an impossible fixed date
    (e.g. February 30).
    """
    if rule.is_fixed:
        try:
            return date(year, rule.month, rule.day)
        except ValueError:
            return None

    weekday = _STORAGE_WEEKDAYS[rule.day_of_week]
    first = date(year, rule.month, 1)
    if rule.week_of_month == LAST_WEEK:
        return first + relativedelta(day=31, weekday=weekday(-1))
    return first + relativedelta(weekday=weekday(+rule.week_of_month))


def resolve_holiday_dates(
    rules: Iterable[FacilityHolidayRule],
    start: Any,
    end: Any,
) -> Set[str]:
    """
    ISO dates of active rules falling in [start, end].
    """
    start_d = to_date(start, "start")
    end_d = to_date(end, "end")
    rules = [r for r in rules if r.is_active]

    dates = set()
    for year in range(start_d.year, end_d.year + 1):
        for rule in rules:
            resolved = resolve_rule(rule, year)
            if resolved and start_d <= resolved <= end_d:
                dates.add(resolved.isoformat())
    return dates


def matches_rule(rule: FacilityHolidayRule, d: date) -> bool:
    if not rule.is_active or rule.month != d.month:
        return False

    if rule.is_fixed:
        return rule.day == d.day

    storage_dow = (d.weekday() + 1) % 7
    if rule.day_of_week != storage_dow:
        return False
    if rule.week_of_month == LAST_WEEK:
        return (d + timedelta(days=7)).month != d.month
    return rule.week_of_month == (d.day - 1) // 7 + 1


def describe_holiday_rule(rule: FacilityHolidayRule) -> str:
    month = MONTH_NAMES[rule.month - 1]
    if rule.is_fixed:
        return f"{month} {rule.day}"
    return f"{ORDINALS[rule.week_of_month]} {DAY_NAMES[rule.day_of_week]} of {month}"


# =====================================================
# FACILITY CALENDAR
# =====================================================
class FacilityCalendar:
    """
    Closed-day lookups for one facility's rules and closures.
    """

    def __init__(
        self,
        rules: Iterable[FacilityHolidayRule] = (),
        closures: Iterable[FacilityClosure] = (),
    ):
        self.rules: List[FacilityHolidayRule] = list(rules)
        self.closure_dates: Set[date] = {c.closure_date for c in closures}

    def is_date_closed(self, value: Any) -> bool:
        d = to_date(value)
        if d in self.closure_dates:
            return True
        return any(matches_rule(rule, d) for rule in self.rules)

    def closed_dates(self, start: Any, end: Any) -> Set[str]:
        start_d = to_date(start, "start")
        end_d = to_date(end, "end")
        dates = resolve_holiday_dates(self.rules, start_d, end_d)
        dates.update(
            d.isoformat() for d in self.closure_dates if start_d <= d <= end_d
        )
        return dates
