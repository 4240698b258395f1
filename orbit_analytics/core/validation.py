import math
from datetime import date, datetime
from numbers import Real
from typing import Any, Optional

from dateutil.parser import isoparse


# -------------------------------------------------
# NUMERIC BOUNDARY CHECKS
# -------------------------------------------------
def require_number(
    value: Any,
    name: str,
    allow_none: bool = True,
    allow_negative: bool = False,
) -> Optional[float]:
    """
    Validate a caller-supplied numeric field.

    None passes through when allowed (missing optional data is not an
    error). Non-numeric values, NaN and, unless allowed, negatives raise.
    """
    if value is None:
        if allow_none:
            return None
        raise ValueError(f"{name} is required")

    if isinstance(value, bool) or not isinstance(value, Real):
        raise TypeError(f"{name} must be numeric, got {type(value).__name__}")

    value = float(value)

    if math.isnan(value):
        raise ValueError(f"{name} must not be NaN")

    if not allow_negative and value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")

    return value


def require_count(value: Any, name: str) -> int:
    """
    Aggregated counts from storage: non-negative integers.
    """
    if isinstance(value, bool) or not isinstance(value, Real):
        raise TypeError(f"{name} must be numeric, got {type(value).__name__}")
    if value != value or value < 0:
        raise ValueError(f"{name} must be a non-negative count, got {value}")
    if int(value) != value:
        raise ValueError(f"{name} must be a whole number, got {value}")
    return int(value)


# -------------------------------------------------
# DATE BOUNDARY CHECKS
# -------------------------------------------------
def to_date(value: Any, name: str = "date") -> date:
    """
    Normalize date / datetime / ISO-8601 string input to a date.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return isoparse(value.strip()).date()
        except (ValueError, OverflowError) as exc:
            raise ValueError(f"{name} is not an ISO date: {value!r}") from exc

    raise TypeError(f"{name} must be a date or ISO string, got {type(value).__name__}")
