# orbit_analytics/financials/analytics.py
"""
Derived views over projections, actuals and already-fetched benchmark rows.
Nothing here performs data access.
"""

from typing import Iterable, List, Optional, Sequence, Union

import pandas as pd

from orbit_analytics.core.stats import compute_median, round_half_up
from .models import (
    ActualFinancials,
    CaseFinancialData,
    CostBreakdownItem,
    CostItem,
    CostSource,
    DataQuality,
    FinancialHeroMetrics,
    FinancialProjection,
    FullDayCase,
    FullDaySurgeonForecast,
    MarginBenchmark,
    MarginRating,
)
from .projection import compute_comparison

__all__ = [
    "compute_median",
    "calculate_margin_rating",
    "build_hero_metrics",
    "build_cost_breakdown",
    "build_full_day_forecast",
    "assess_data_quality",
    "build_case_financial_data",
]

# Benchmarks backed by fewer cases are not rated
MIN_BENCHMARK_CASES = 10
# "fair" band: within 10% below the benchmark median
FAIR_MARGIN_RATIO = 0.9
# surgeon history needed for a "medium" confidence projection
MEDIUM_CONFIDENCE_CASES = 5


# =====================================================
# MARGIN RATING
# =====================================================

def calculate_margin_rating(
    margin: Optional[float],
    median_margin: Optional[float],
    case_count: int,
) -> MarginRating:
    """
    Rate a margin against a benchmark median.
    """
    if margin is None or median_margin is None:
        return "good"
    if case_count < MIN_BENCHMARK_CASES:
        return "good"

    if median_margin <= 0:
        return "excellent" if margin >= 0 else "poor"

    if margin >= median_margin:
        return "excellent"
    if margin >= median_margin * FAIR_MARGIN_RATIO:
        return "fair"
    return "poor"


# =====================================================
# HERO METRICS
# =====================================================

def build_hero_metrics(
    projection: Optional[FinancialProjection],
    actual: Optional[ActualFinancials],
    surgeon_benchmark: Optional[MarginBenchmark],
    facility_benchmark: Optional[MarginBenchmark],
) -> FinancialHeroMetrics:
    """
    Headline numbers for a case. Actuals win once reimbursement is recorded.
    """
    is_actual = actual is not None and actual.reimbursement is not None

    if is_actual:
        revenue = actual.reimbursement
        profit = actual.profit
        margin_pct = (profit / revenue) * 100 if revenue and revenue > 0 and profit is not None else None
        total_costs = (actual.or_time_cost or 0) + (actual.total_debits or 0) - (actual.total_credits or 0)
    elif projection is not None:
        revenue = projection.revenue
        profit = projection.profit
        margin_pct = projection.margin_percent
        total_costs = projection.total_costs
    else:
        revenue = profit = margin_pct = total_costs = None

    surgeon_median = surgeon_benchmark.median_margin if surgeon_benchmark else None
    facility_median = facility_benchmark.median_margin if facility_benchmark else None
    surgeon_cases = surgeon_benchmark.case_count if surgeon_benchmark else 0
    facility_cases = facility_benchmark.case_count if facility_benchmark else 0

    return FinancialHeroMetrics(
        margin_percentage=margin_pct,
        surgeon_margin_rating=calculate_margin_rating(margin_pct, surgeon_median, surgeon_cases),
        facility_margin_rating=calculate_margin_rating(margin_pct, facility_median, facility_cases),
        profit=profit,
        revenue=revenue,
        total_costs=total_costs,
        surgeon_median_margin=surgeon_median,
        facility_median_margin=facility_median,
        surgeon_case_count=surgeon_cases,
        facility_case_count=facility_cases,
    )


# =====================================================
# COST BREAKDOWN
# =====================================================

def build_cost_breakdown(
    cost_items: Sequence[CostItem],
    or_cost: Optional[float],
    source: CostSource,
) -> List[CostBreakdownItem]:
    """
    OR time + debit categories + one negative "Credits" line, largest first,
    each with its (integer) share of the positive total.
    """
    items: List[CostBreakdownItem] = []

    if or_cost is not None and or_cost > 0:
        items.append(CostBreakdownItem("OR Time", or_cost, 0, source))

    if cost_items:
        df = pd.DataFrame(
            [(i.category_name, i.category_type, i.amount) for i in cost_items],
            columns=["category", "type", "amount"],
        )

        debits = (
            df[df["type"] == "debit"]
            .groupby("category", sort=False)["amount"]
            .sum()
        )
        for category, amount in debits.items():
            if amount > 0:
                items.append(CostBreakdownItem(category, float(amount), 0, source))

        total_credits = float(df.loc[df["type"] == "credit", "amount"].sum())
        if total_credits > 0:
            items.append(CostBreakdownItem("Credits", -total_credits, 0, source))

    items.sort(key=lambda i: abs(i.amount), reverse=True)

    total_costs = sum(i.amount for i in items if i.amount > 0)
    if total_costs > 0:
        for item in items:
            if item.amount > 0:
                item.percentage_of_total = round_half_up(item.amount / total_costs * 100)

    return items


# =====================================================
# FULL DAY FORECAST
# =====================================================

def build_full_day_forecast(
    rows: Iterable[Union[FullDayCase, dict]],
    surgeon_id: str,
    surgeon_name: str,
) -> FullDaySurgeonForecast:
    """
    Totals over a surgeon's cases for the day (null figures count as 0).
    """
    cases = [r if isinstance(r, FullDayCase) else FullDayCase.from_row(r) for r in rows]

    frame = pd.DataFrame(
        [(c.revenue, c.total_costs, c.profit) for c in cases],
        columns=["revenue", "total_costs", "profit"],
        dtype=float,
    ).fillna(0)

    total_revenue = float(frame["revenue"].sum())
    total_costs = float(frame["total_costs"].sum())
    total_profit = float(frame["profit"].sum())

    return FullDaySurgeonForecast(
        surgeon_name=surgeon_name,
        surgeon_id=surgeon_id,
        cases=cases,
        total_revenue=total_revenue,
        total_costs=total_costs,
        total_profit=total_profit,
        total_margin=(total_profit / total_revenue) * 100 if total_revenue > 0 else None,
    )


# =====================================================
# DATA QUALITY
# =====================================================

def assess_data_quality(
    has_actuals: bool,
    has_revenue: bool,
    has_costs: bool,
    surgeon_case_count: int,
) -> DataQuality:
    """
    - high:   completed case with actual revenue and costs
    - medium: projected from surgeon history (>= 5 cases)
    - low:    facility defaults or insufficient data
    """
    if has_actuals:
        cost_source = "actual"
    elif has_costs:
        cost_source = "projected"
    else:
        cost_source = "none"

    confidence = "low"
    if has_actuals and has_revenue and has_costs:
        confidence = "high"
    elif has_revenue and has_costs and surgeon_case_count >= MEDIUM_CONFIDENCE_CASES:
        confidence = "medium"

    return DataQuality(
        has_costs=has_costs,
        has_revenue=has_revenue,
        cost_source=cost_source,
        confidence=confidence,
    )


# =====================================================
# CASE BUNDLE
# =====================================================

def build_case_financial_data(
    projection: Optional[FinancialProjection],
    actual: Optional[ActualFinancials],
    cost_items: Sequence[CostItem],
    surgeon_benchmark: Optional[MarginBenchmark] = None,
    facility_benchmark: Optional[MarginBenchmark] = None,
    full_day_rows: Optional[Iterable[Union[FullDayCase, dict]]] = None,
    surgeon_id: Optional[str] = None,
    surgeon_name: Optional[str] = None,
) -> CaseFinancialData:
    """
    Everything the case financials view renders, from inputs the caller has
    already fetched.
    """
    has_actuals = actual is not None and actual.reimbursement is not None
    source: CostSource = "actual" if has_actuals else "projected"

    if has_actuals:
        or_cost = actual.or_time_cost
    else:
        or_cost = projection.or_cost if projection else None

    hero = build_hero_metrics(projection, actual, surgeon_benchmark, facility_benchmark)

    comparison = None
    if projection is not None and has_actuals:
        comparison = compute_comparison(projection, actual)

    forecast = None
    if full_day_rows is not None and surgeon_id is not None:
        forecast = build_full_day_forecast(full_day_rows, surgeon_id, surgeon_name or "")

    quality = assess_data_quality(
        has_actuals=has_actuals,
        has_revenue=hero.revenue is not None,
        has_costs=bool(cost_items) or or_cost is not None,
        surgeon_case_count=surgeon_benchmark.case_count if surgeon_benchmark else 0,
    )

    return CaseFinancialData(
        hero=hero,
        cost_breakdown=build_cost_breakdown(cost_items, or_cost, source),
        projected_vs_actual=comparison,
        full_day_forecast=forecast,
        data_quality=quality,
        projection=projection,
        actual=actual,
    )
