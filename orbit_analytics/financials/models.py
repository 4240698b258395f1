from dataclasses import dataclass, field
from typing import Any, List, Literal, Mapping, Optional

from orbit_analytics.core.validation import require_number

CostCategoryType = Literal["debit", "credit"]
CostSource = Literal["actual", "projected"]
MarginRating = Literal["excellent", "good", "fair", "poor"]


# =====================================================
# INPUTS
# =====================================================

@dataclass(frozen=True)
class CostItem:
    amount: float
    category_name: str
    category_type: CostCategoryType = "debit"

    def __post_init__(self):
        require_number(self.amount, f"cost item '{self.category_name}' amount", allow_none=False)
        if self.category_type not in ("debit", "credit"):
            raise ValueError(
                f"category_type must be 'debit' or 'credit', got {self.category_type!r}"
            )

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "CostItem":
        return cls(
            amount=row["amount"],
            category_name=row["category_name"],
            category_type=row.get("category_type", "debit"),
        )


@dataclass
class ProjectionInputs:
    surgeon_median_duration: Optional[float] = None
    facility_median_duration: Optional[float] = None
    scheduled_duration: Optional[float] = None
    default_reimbursement: Optional[float] = None
    surgeon_median_reimbursement: Optional[float] = None
    facility_median_reimbursement: Optional[float] = None
    or_hourly_rate: Optional[float] = None
    cost_items: List[CostItem] = field(default_factory=list)


@dataclass
class ActualFinancials:
    reimbursement: Optional[float] = None
    total_debits: Optional[float] = None
    total_credits: Optional[float] = None
    or_time_cost: Optional[float] = None
    profit: Optional[float] = None
    total_duration_minutes: Optional[float] = None
    or_hourly_rate: Optional[float] = None

    def __post_init__(self):
        for name in ("reimbursement", "total_debits", "total_credits",
                     "or_time_cost", "total_duration_minutes", "or_hourly_rate"):
            require_number(getattr(self, name), name)
        require_number(self.profit, "profit", allow_negative=True)

    @property
    def total_costs(self) -> Optional[float]:
        parts = (self.or_time_cost, self.total_debits, self.total_credits)
        if all(p is None for p in parts):
            return None
        return (self.or_time_cost or 0) + (self.total_debits or 0) - (self.total_credits or 0)


@dataclass
class MarginBenchmark:
    median_margin: Optional[float]
    case_count: int = 0


# =====================================================
# OUTPUTS
# =====================================================

@dataclass
class FinancialProjection:
    projected_duration: Optional[float]
    duration_source: Optional[str]
    revenue: Optional[float]
    revenue_source: Optional[str]
    or_cost: Optional[float]
    supply_debits: float
    supply_credits: float
    profit: Optional[float]
    margin_percent: Optional[float]
    has_data: bool

    @property
    def total_costs(self) -> float:
        return (self.or_cost or 0) + self.supply_debits - self.supply_credits


@dataclass
class ComparisonLineItem:
    label: str
    projected: Optional[float]
    actual: Optional[float]
    delta: Optional[float]
    percent_delta: Optional[float]
    is_revenue: bool


@dataclass
class FinancialComparison:
    line_items: List[ComparisonLineItem]
    projected_revenue: Optional[float]
    actual_revenue: Optional[float]
    revenue_delta: Optional[float]
    revenue_percent_delta: Optional[float]
    projected_cost: Optional[float]
    actual_cost: Optional[float]
    cost_delta: Optional[float]
    cost_percent_delta: Optional[float]
    projected_profit: Optional[float]
    actual_profit: Optional[float]
    profit_delta: Optional[float]
    profit_percent_delta: Optional[float]
    projected_margin: Optional[float]
    actual_margin: Optional[float]


@dataclass
class FinancialHeroMetrics:
    margin_percentage: Optional[float]
    surgeon_margin_rating: MarginRating
    facility_margin_rating: MarginRating
    profit: Optional[float]
    revenue: Optional[float]
    total_costs: Optional[float]
    surgeon_median_margin: Optional[float]
    facility_median_margin: Optional[float]
    surgeon_case_count: int
    facility_case_count: int


@dataclass
class CostBreakdownItem:
    category: str
    amount: float
    percentage_of_total: int
    source: CostSource


@dataclass
class FullDayCase:
    case_id: str
    case_number: str
    procedure_name: str
    status: str
    revenue: Optional[float] = None
    total_costs: Optional[float] = None
    profit: Optional[float] = None
    margin_pct: Optional[float] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "FullDayCase":
        return cls(**{k: row.get(k) for k in cls.__dataclass_fields__})


@dataclass
class FullDaySurgeonForecast:
    surgeon_name: str
    surgeon_id: str
    cases: List[FullDayCase]
    total_revenue: float
    total_costs: float
    total_profit: float
    total_margin: Optional[float]


@dataclass
class DataQuality:
    has_costs: bool
    has_revenue: bool
    cost_source: Literal["actual", "projected", "none"]
    confidence: Literal["high", "medium", "low"]


@dataclass
class CaseFinancialData:
    hero: FinancialHeroMetrics
    cost_breakdown: List[CostBreakdownItem]
    projected_vs_actual: Optional[FinancialComparison]
    full_day_forecast: Optional[FullDaySurgeonForecast]
    data_quality: DataQuality
    projection: Optional[FinancialProjection]
    actual: Optional[ActualFinancials]
