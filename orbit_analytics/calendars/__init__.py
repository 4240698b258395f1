from .holidays import (
    Holiday,
    holidays_for_year,
    is_holiday,
    count_in_range,
    holiday_date_set,
    is_business_day,
    business_days_in_range,
    next_business_day,
)
from .closures import (
    FacilityHolidayRule,
    FacilityClosure,
    FacilityCalendar,
    resolve_holiday_dates,
    describe_holiday_rule,
)

__all__ = [
    "Holiday",
    "holidays_for_year",
    "is_holiday",
    "count_in_range",
    "holiday_date_set",
    "is_business_day",
    "business_days_in_range",
    "next_business_day",
    "FacilityHolidayRule",
    "FacilityClosure",
    "FacilityCalendar",
    "resolve_holiday_dates",
    "describe_holiday_rule",
]
