"""Pydantic models for the normalized, dashboard-ready fund entity.

FundModel is the aggregate root. It owns normalized copies of both reports
and every derived field; all derived fields are recomputed together whenever
a report slot changes.
"""

from pydantic import BaseModel, Field

from fund_insights.pydantic_models.analysis import (
    AnalysisStatus,
    BenchmarkComparison,
    BenchmarkSummary,
    Classification,
    Insight,
)
from fund_insights.pydantic_models.reports import AssetClass, Holding, TwrReturns


class FundAllocation(BaseModel):
    """Normalized allocation slot. Asset classes always carry value and percent."""

    as_at_date: str | None = None
    total_value: float | None = None
    asset_classes: list[AssetClass] = Field(default_factory=list)
    holdings: list[Holding] = Field(default_factory=list)
    holdings_count: int = 0


class FundPeriod(BaseModel):
    start: str | None = None
    end: str | None = None


class FundPerformance(BaseModel):
    """Normalized performance slot."""

    period: FundPeriod = Field(default_factory=FundPeriod)
    starting_value: float | None = None
    ending_value: float | None = None
    movement_in_value: float | None = None
    dollar_return: float | None = Field(
        default=None, description="After-expenses dollar return for the period"
    )
    dollar_return_before_expenses: float | None = None
    investment_expenses: float | None = None
    twr: TwrReturns | None = None


class FundModel(BaseModel):
    fund_id: str
    last_updated: str = Field(description="ISO-8601 UTC timestamp of the last mutation")
    asset_allocation: FundAllocation | None = None
    performance: FundPerformance | None = None
    classification: Classification = Field(default_factory=Classification)
    benchmark: BenchmarkSummary | None = None
    benchmark_comparison: BenchmarkComparison | None = None
    performance_score: int | None = None
    derived_insights: list[Insight] = Field(default_factory=list)
    analysis_status: AnalysisStatus = "empty"
    analysis_message: str | None = None


class FundValidation(BaseModel):
    valid: bool
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    has_asset_allocation: bool
    has_performance: bool
    is_complete: bool


class FundSummary(BaseModel):
    """Flat projection of the key figures for display."""

    total_value: float | None
    classification: str
    growth_percent: float
    defensive_percent: float

    one_year_return: float | None
    dollar_return: float | None
    performance_score: int | None

    benchmark_name: str | None
    one_year_vs_benchmark: float | None

    holdings_count: int
    asset_class_count: int

    has_asset_allocation: bool
    has_performance: bool
    has_all_data: bool

    as_at_date: str | None
    period_start: str | None
    period_end: str | None
