from .models import (
    CostItem,
    ProjectionInputs,
    ActualFinancials,
    MarginBenchmark,
    FinancialProjection,
    ComparisonLineItem,
    FinancialComparison,
    FinancialHeroMetrics,
    CostBreakdownItem,
    FullDayCase,
    FullDaySurgeonForecast,
    DataQuality,
    CaseFinancialData,
)
from .projection import compute_projection, compute_comparison
from .analytics import (
    compute_median,
    calculate_margin_rating,
    build_hero_metrics,
    build_cost_breakdown,
    build_full_day_forecast,
    assess_data_quality,
    build_case_financial_data,
)

__all__ = [
    "CostItem",
    "ProjectionInputs",
    "ActualFinancials",
    "MarginBenchmark",
    "FinancialProjection",
    "ComparisonLineItem",
    "FinancialComparison",
    "FinancialHeroMetrics",
    "CostBreakdownItem",
    "FullDayCase",
    "FullDaySurgeonForecast",
    "DataQuality",
    "CaseFinancialData",
    "compute_projection",
    "compute_comparison",
    "compute_median",
    "calculate_margin_rating",
    "build_hero_metrics",
    "build_cost_breakdown",
    "build_full_day_forecast",
    "assess_data_quality",
    "build_case_financial_data",
]
