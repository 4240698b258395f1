"""
US FEDERAL HOLIDAY ENGINE
-------------------------
Computes the 11 federal holidays for any year:

1. FIXED dates (month/day), e.g. Independence Day.
2. FLOATING dates (nth weekday of a month), e.g. Thanksgiving.

Both are normalized to the same `Holiday` record. The observed date follows
the federal rule: Saturday -> preceding Friday, Sunday -> following Monday.

Observed dates can land in a neighbouring year (New Year's Day 2028 is a
Saturday and is observed on 2027-12-31). Membership and range queries are by
OBSERVED date, so they look one year either side.
"""

from dataclasses import dataclass
from datetime import date, timedelta
from functools import lru_cache
from typing import Any, List, Set, Tuple

from dateutil.relativedelta import relativedelta, MO, TH

from orbit_analytics.core.validation import to_date


# =====================================================
# HOLIDAY RULES
# =====================================================
FIXED_HOLIDAYS: Tuple[Tuple[str, int, int], ...] = (
    ("New Year's Day", 1, 1),
    ("Juneteenth", 6, 19),
    ("Independence Day", 7, 4),
    ("Veterans Day", 11, 11),
    ("Christmas Day", 12, 25),
)

# (name, month, relativedelta weekday). MO(-1) = last Monday of the month.
FLOATING_HOLIDAYS = (
    ("Martin Luther King Jr. Day", 1, MO(+3)),
    ("Presidents' Day", 2, MO(+3)),
    ("Memorial Day", 5, MO(-1)),
    ("Labor Day", 9, MO(+1)),
    ("Columbus Day", 10, MO(+2)),
    ("Thanksgiving Day", 11, TH(+4)),
)

SATURDAY = 5
SUNDAY = 6


@dataclass(frozen=True)
class Holiday:
    name: str
    date: date
    observed_date: date

    @property
    def is_shifted(self) -> bool:
        return self.date != self.observed_date


# =====================================================
# DATE RULES
# =====================================================
def nth_weekday_of_month(year: int, month: int, weekday) -> date:
    """
    Resolve a relativedelta weekday (e.g. TH(+4), MO(-1)) inside a month.
    """
    if weekday.n is not None and weekday.n < 0:
        # day=31 clamps to the month's last day, then walk backwards
        return date(year, month, 1) + relativedelta(day=31, weekday=weekday)
    return date(year, month, 1) + relativedelta(weekday=weekday)


def observed_date(nominal: date) -> date:
    if nominal.weekday() == SATURDAY:
        return nominal - timedelta(days=1)
    if nominal.weekday() == SUNDAY:
        return nominal + timedelta(days=1)
    return nominal


# =====================================================
# PUBLIC API
# =====================================================
def holidays_for_year(year: int) -> List[Holiday]:
    """
    The 11 US federal holidays of `year`, sorted chronologically.
    """
    return list(_holidays_for_year(int(year)))


@lru_cache(maxsize=64)
def _holidays_for_year(year: int) -> Tuple[Holiday, ...]:
    holidays = []

    for name, month, day in FIXED_HOLIDAYS:
        nominal = date(year, month, day)
        holidays.append(Holiday(name, nominal, observed_date(nominal)))

    for name, month, weekday in FLOATING_HOLIDAYS:
        nominal = nth_weekday_of_month(year, month, weekday)
        holidays.append(Holiday(name, nominal, observed_date(nominal)))

    holidays.sort(key=lambda h: h.date)
    return tuple(holidays)


def _neighbour_years(first: int, last: int) -> range:
    # observed dates can spill one year either way; stay inside date's range
    return range(max(first - 1, date.min.year), min(last + 1, date.max.year) + 1)


def is_holiday(value: Any) -> bool:
    """
    True when `value` is the OBSERVED date of a federal holiday.
    """
    d = to_date(value)
    return any(
        h.observed_date == d
        for year in _neighbour_years(d.year, d.year)
        for h in _holidays_for_year(year)
    )


def count_in_range(start: Any, end: Any) -> int:
    """
    Number of observed holidays in [start, end], both ends inclusive.
    """
    start_d = to_date(start, "start")
    end_d = to_date(end, "end")
    if start_d > end_d:
        return 0

    return sum(
        1
        for year in _neighbour_years(start_d.year, end_d.year)
        for h in _holidays_for_year(year)
        if start_d <= h.observed_date <= end_d
    )


def holiday_date_set(start_year: int, end_year: int) -> Set[str]:
    """
    Observed dates (YYYY-MM-DD) for every holiday of an inclusive year range.
    """
    return {
        h.observed_date.isoformat()
        for year in range(int(start_year), int(end_year) + 1)
        for h in _holidays_for_year(year)
    }


# =====================================================
# BUSINESS-DAY ARITHMETIC
# =====================================================
def is_business_day(value: Any) -> bool:
    d = to_date(value)
    return d.weekday() < SATURDAY and not is_holiday(d)


def business_days_in_range(start: Any, end: Any) -> int:
    """
    Weekdays in [start, end] that are not observed holidays.
    """
    start_d = to_date(start, "start")
    end_d = to_date(end, "end")
    if start_d > end_d:
        return 0

    total_days = (end_d - start_d).days + 1
    full_weeks, remainder = divmod(total_days, 7)
    weekdays = full_weeks * 5
    for offset in range(remainder):
        if (start_d + timedelta(days=full_weeks * 7 + offset)).weekday() < SATURDAY:
            weekdays += 1

    # observed dates always fall on weekdays
    return weekdays - count_in_range(start_d, end_d)


def next_business_day(value: Any) -> date:
    """
    First business day strictly after `value`.
    """
    d = to_date(value) + timedelta(days=1)
    while not is_business_day(d):
        d += timedelta(days=1)
    return d
