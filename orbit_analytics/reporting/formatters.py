from typing import Optional

MISSING = "-"


def fmt_currency(value: Optional[float], compact: bool = False) -> str:
    """
    Canonical currency formatter for ALL reports.

    5000 -> "$5,000", -1500 -> "-$1,500"; compact=True gives "$1.25M" / "$12.5K".
    """
    if value is None:
        return MISSING

    value = float(value)
    sign = "-" if value < 0 else ""
    magnitude = abs(value)

    if compact and magnitude >= 1_000_000:
        return f"{sign}${magnitude/1_000_000:.2f}M"
    if compact and magnitude >= 1_000:
        return f"{sign}${magnitude/1_000:.1f}K"
    return f"{sign}${magnitude:,.0f}"


def fmt_delta_currency(value: Optional[float]) -> str:
    if value is None:
        return MISSING
    if value >= 0:
        return f"+{fmt_currency(value)}"
    return fmt_currency(value)


def fmt_margin(value: Optional[float], decimals: int = 1) -> str:
    """
    Margin already expressed in percent: 70.5 -> "70.5%".
    """
    if value is None:
        return MISSING
    return f"{value:.{decimals}f}%"


def fmt_percent_delta(value: Optional[float]) -> str:
    if value is None:
        return MISSING
    sign = "+" if value >= 0 else ""
    return f"{sign}{value:.1f}%"
