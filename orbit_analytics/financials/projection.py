# orbit_analytics/financials/projection.py

from typing import List, Optional, Tuple

from orbit_analytics.core.validation import require_number
from .models import (
    ActualFinancials,
    ComparisonLineItem,
    FinancialComparison,
    FinancialProjection,
    ProjectionInputs,
)


# =====================================================
# HELPERS
# =====================================================

def _minutes(value: float) -> str:
    return f"{value:g}"


def _delta(projected: Optional[float], actual: Optional[float]) -> Optional[float]:
    if projected is None or actual is None:
        return None
    return actual - projected


def _percent_delta(projected: Optional[float], delta: Optional[float]) -> Optional[float]:
    if delta is None or not projected:
        return None
    return delta / abs(projected) * 100


def _margin(profit: Optional[float], revenue: Optional[float]) -> Optional[float]:
    if profit is None or not revenue:
        return None
    return profit / revenue * 100


# =====================================================
# PROJECTION
# =====================================================

def resolve_duration(
    inputs: ProjectionInputs,
    surgeon_name: Optional[str] = None,
) -> Tuple[Optional[float], Optional[str]]:
    """
    Surgeon median -> facility median -> scheduled duration.
    """
    surgeon = require_number(inputs.surgeon_median_duration, "surgeon_median_duration")
    facility = require_number(inputs.facility_median_duration, "facility_median_duration")
    scheduled = require_number(inputs.scheduled_duration, "scheduled_duration")

    if surgeon is not None:
        owner = f"{surgeon_name}'s median" if surgeon_name else "Surgeon median"
        return surgeon, f"{owner} ({_minutes(surgeon)} min)"
    if facility is not None:
        return facility, f"Facility median ({_minutes(facility)} min)"
    if scheduled is not None:
        return scheduled, f"Scheduled ({_minutes(scheduled)} min)"
    return None, None


def resolve_revenue(inputs: ProjectionInputs) -> Tuple[Optional[float], Optional[str]]:
    """
    Procedure default -> surgeon median -> facility median. Zero is treated
    as "not configured" and skipped.
    """
    candidates = (
        (inputs.default_reimbursement, "default_reimbursement", "Procedure default"),
        (inputs.surgeon_median_reimbursement, "surgeon_median_reimbursement", "Surgeon median"),
        (inputs.facility_median_reimbursement, "facility_median_reimbursement", "Facility median"),
    )
    for value, name, source in candidates:
        value = require_number(value, name)
        if value:
            return value, source
    return None, None


def compute_projection(
    inputs: ProjectionInputs,
    surgeon_name: Optional[str] = None,
) -> FinancialProjection:
    """
    Expected financial outcome of a case from benchmark medians.

    Missing data degrades to None (never raises); malformed numbers raise.
    Cost items are summed as-is whether or not the case has completed.
    """
    duration, duration_source = resolve_duration(inputs, surgeon_name)
    revenue, revenue_source = resolve_revenue(inputs)
    hourly_rate = require_number(inputs.or_hourly_rate, "or_hourly_rate")

    or_cost = None
    if duration is not None and hourly_rate is not None:
        or_cost = (duration / 60) * hourly_rate

    supply_debits = sum(i.amount for i in inputs.cost_items if i.category_type == "debit")
    supply_credits = sum(i.amount for i in inputs.cost_items if i.category_type == "credit")

    profit = None
    if revenue is not None:
        profit = revenue - (or_cost or 0) - supply_debits + supply_credits

    has_data = (
        revenue is not None
        or or_cost is not None
        or len(inputs.cost_items) > 0
    )

    return FinancialProjection(
        projected_duration=duration,
        duration_source=duration_source,
        revenue=revenue,
        revenue_source=revenue_source,
        or_cost=or_cost,
        supply_debits=supply_debits,
        supply_credits=supply_credits,
        profit=profit,
        margin_percent=_margin(profit, revenue),
        has_data=has_data,
    )


# =====================================================
# PROJECTED vs ACTUAL
# =====================================================

def _line(label: str, projected, actual, is_revenue: bool = False) -> ComparisonLineItem:
    delta = _delta(projected, actual)
    return ComparisonLineItem(
        label=label,
        projected=projected,
        actual=actual,
        delta=delta,
        percent_delta=_percent_delta(projected, delta),
        is_revenue=is_revenue,
    )


def compute_comparison(
    projection: FinancialProjection,
    actual: ActualFinancials,
) -> FinancialComparison:
    """
    Signed deltas (actual - projected) per line item and for revenue, total
    cost and profit. Percent deltas are relative to the projected value and
    None when that value is null or zero.
    """
    line_items: List[ComparisonLineItem] = [
        _line("Revenue", projection.revenue, actual.reimbursement, is_revenue=True),
        _line("OR Time Cost", projection.or_cost, actual.or_time_cost),
        _line("Supply Costs", projection.supply_debits, actual.total_debits),
        _line("Credits", projection.supply_credits, actual.total_credits),
    ]

    revenue = line_items[0]

    projected_cost = projection.total_costs if projection.has_data else None
    actual_cost = actual.total_costs
    cost_delta = _delta(projected_cost, actual_cost)

    profit_delta = _delta(projection.profit, actual.profit)

    return FinancialComparison(
        line_items=line_items,
        projected_revenue=revenue.projected,
        actual_revenue=revenue.actual,
        revenue_delta=revenue.delta,
        revenue_percent_delta=revenue.percent_delta,
        projected_cost=projected_cost,
        actual_cost=actual_cost,
        cost_delta=cost_delta,
        cost_percent_delta=_percent_delta(projected_cost, cost_delta),
        projected_profit=projection.profit,
        actual_profit=actual.profit,
        profit_delta=profit_delta,
        profit_percent_delta=_percent_delta(projection.profit, profit_delta),
        projected_margin=projection.margin_percent,
        actual_margin=_margin(actual.profit, actual.reimbursement),
    )
