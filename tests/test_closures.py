from datetime import date

import pytest

from orbit_analytics.calendars import (
    FacilityCalendar,
    FacilityClosure,
    FacilityHolidayRule,
    describe_holiday_rule,
    resolve_holiday_dates,
)
from orbit_analytics.calendars.closures import matches_rule, resolve_rule

# day_of_week uses storage convention: 0=Sunday
CHRISTMAS = FacilityHolidayRule("Christmas", month=12, day=25)
THANKSGIVING = FacilityHolidayRule("Thanksgiving", month=11, week_of_month=4, day_of_week=4)
MEMORIAL_DAY = FacilityHolidayRule("Memorial Day", month=5, week_of_month=5, day_of_week=1)


def test_resolve_fixed_and_floating_rules():
    assert resolve_rule(CHRISTMAS, 2025) == date(2025, 12, 25)
    assert resolve_rule(THANKSGIVING, 2025) == date(2025, 11, 27)
    assert resolve_rule(MEMORIAL_DAY, 2025) == date(2025, 5, 26)


def test_impossible_fixed_date_resolves_to_none():
    rule = FacilityHolidayRule("Leap", month=2, day=30)
    assert resolve_rule(rule, 2025) is None


def test_matches_rule():
    assert matches_rule(THANKSGIVING, date(2025, 11, 27))
    assert not matches_rule(THANKSGIVING, date(2025, 11, 20))
    assert matches_rule(MEMORIAL_DAY, date(2025, 5, 26))
    assert not matches_rule(MEMORIAL_DAY, date(2025, 5, 19))


def test_describe_holiday_rule():
    assert describe_holiday_rule(CHRISTMAS) == "December 25"
    assert describe_holiday_rule(THANKSGIVING) == "4th Thursday of November"
    assert describe_holiday_rule(MEMORIAL_DAY) == "Last Monday of May"


def test_resolve_holiday_dates_skips_inactive():
    inactive = FacilityHolidayRule("Old", month=7, day=1, is_active=False)
    dates = resolve_holiday_dates([CHRISTMAS, THANKSGIVING, inactive], "2025-01-01", "2026-12-31")
    assert dates == {"2025-11-27", "2025-12-25", "2026-11-26", "2026-12-25"}


def test_invalid_rules_raise():
    with pytest.raises(ValueError):
        FacilityHolidayRule("Bad", month=13, day=1)
    with pytest.raises(ValueError):
        FacilityHolidayRule("Incomplete", month=5, week_of_month=2)
    with pytest.raises(ValueError):
        FacilityHolidayRule("Bad week", month=5, week_of_month=6, day_of_week=1)


def test_facility_calendar_from_rows():
    rules = [FacilityHolidayRule.from_row({"name": "Christmas", "month": 12, "day": 25})]
    closures = [FacilityClosure.from_row({"closure_date": "2025-03-14", "reason": "Power work"})]
    calendar = FacilityCalendar(rules, closures)

    assert calendar.is_date_closed("2025-03-14")
    assert calendar.is_date_closed(date(2030, 12, 25))
    assert not calendar.is_date_closed("2025-03-15")
    assert calendar.closed_dates("2025-01-01", "2025-12-31") == {"2025-03-14", "2025-12-25"}
