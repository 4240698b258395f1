from datetime import date, datetime, timedelta

import pytest

from orbit_analytics.calendars import (
    business_days_in_range,
    count_in_range,
    holiday_date_set,
    holidays_for_year,
    is_business_day,
    is_holiday,
    next_business_day,
)


def _by_name(year):
    return {h.name: h for h in holidays_for_year(year)}


def test_eleven_holidays_sorted():
    holidays = holidays_for_year(2025)
    assert len(holidays) == 11
    assert [h.date for h in holidays] == sorted(h.date for h in holidays)
    assert holidays[0].name == "New Year's Day"
    assert holidays[-1].name == "Christmas Day"


def test_floating_holidays_2025():
    h = _by_name(2025)
    assert h["Martin Luther King Jr. Day"].date == date(2025, 1, 20)
    assert h["Presidents' Day"].date == date(2025, 2, 17)
    assert h["Memorial Day"].date == date(2025, 5, 26)
    assert h["Labor Day"].date == date(2025, 9, 1)
    assert h["Columbus Day"].date == date(2025, 10, 13)
    assert h["Thanksgiving Day"].date == date(2025, 11, 27)


def test_saturday_observed_on_friday():
    july4 = _by_name(2026)["Independence Day"]
    assert july4.date == date(2026, 7, 4)
    assert july4.observed_date == date(2026, 7, 3)
    assert july4.is_shifted


def test_sunday_observed_on_monday():
    new_year = _by_name(2023)["New Year's Day"]
    assert new_year.observed_date == date(2023, 1, 2)
    assert is_holiday("2023-01-02")
    assert not is_holiday("2023-01-01")


def test_unshifted_holiday():
    mlk = _by_name(2025)["Martin Luther King Jr. Day"]
    assert mlk.observed_date == mlk.date
    assert not mlk.is_shifted


def test_observed_date_crosses_year_boundary():
    # Jan 1 2028 is a Saturday
    assert is_holiday(date(2027, 12, 31))
    assert count_in_range("2027-01-01", "2027-12-31") == 12
    assert count_in_range("2028-01-01", "2028-12-31") == 10


def test_is_holiday_accepts_datetime_and_string():
    assert is_holiday(datetime(2025, 7, 4, 9, 30))
    assert is_holiday("2025-12-25")
    assert not is_holiday("2025-12-26")


def test_is_holiday_rejects_garbage():
    with pytest.raises(ValueError):
        is_holiday("not-a-date")
    with pytest.raises(TypeError):
        is_holiday(20250704)


def test_count_in_range_is_inclusive():
    assert count_in_range("2025-07-04", "2025-07-04") == 1
    assert count_in_range("2025-01-01", "2025-12-31") == 11


def test_count_in_range_reversed_is_zero():
    assert count_in_range("2025-12-31", "2025-01-01") == 0


def test_holiday_date_set():
    dates = holiday_date_set(2026, 2026)
    assert "2026-07-03" in dates
    assert "2026-07-04" not in dates
    assert len(dates) == 11


def test_business_days():
    assert not is_business_day("2026-07-03")
    assert not is_business_day("2025-07-05")
    assert is_business_day("2025-07-07")

    # Jul 1-7 2025: five weekdays, Jul 4 is a holiday
    assert business_days_in_range("2025-07-01", "2025-07-07") == 4
    assert business_days_in_range("2025-07-07", "2025-07-01") == 0


def test_next_business_day_skips_holiday_and_weekend():
    assert next_business_day("2025-07-03") == date(2025, 7, 7)
    assert next_business_day("2025-07-07") == date(2025, 7, 8)


def _observed_dates(years):
    return {h.observed_date for year in years for h in holidays_for_year(year)}


@pytest.mark.parametrize("year", range(1990, 2101))
def test_every_year_has_eleven_distinct_increasing_holidays(year):
    dates = [h.date for h in holidays_for_year(year)]

    assert len(dates) == 11
    assert all(a < b for a, b in zip(dates, dates[1:]))


@pytest.mark.parametrize("year", range(1990, 2101))
def test_membership_and_single_day_counts_follow_observed_dates(year):
    observed = _observed_dates((year - 1, year, year + 1))

    d = date(year, 1, 1)
    while d.year == year:
        expected = d in observed
        assert is_holiday(d) is expected
        assert count_in_range(d, d) == (1 if expected else 0)
        d += timedelta(days=1)


def test_non_holiday_single_day_count():
    assert count_in_range("2025-07-05", "2025-07-05") == 0


def test_first_and_last_supported_years():
    first = [h for h in holidays_for_year(1) + holidays_for_year(2) if h.observed_date.year == 1]
    last = [h for h in holidays_for_year(9998) + holidays_for_year(9999) if h.observed_date.year == 9999]

    assert count_in_range(date(1, 1, 1), date(1, 12, 31)) == len(first)
    assert count_in_range(date(9999, 1, 1), date(9999, 12, 31)) == len(last)
    assert is_holiday(date(1, 1, 1))
    assert not is_holiday(date(9999, 12, 31))
