"""Pydantic models produced by the fund analysis engine."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

ClassificationTag = Literal["defensive", "balanced", "growth", "unknown"]
PerformanceStatus = Literal[
    "strong_outperformance",
    "slight_outperformance",
    "inline",
    "slight_underperformance",
    "strong_underperformance",
]
Importance = Literal["high", "medium", "low"]
AnalysisStatus = Literal["complete", "partial", "empty"]


class BenchmarkReturns(BaseModel):
    model_config = ConfigDict(frozen=True)

    one_year: float | None = None
    three_years: float | None = None
    five_years: float | None = None
    since_inception: float | None = None


class Benchmark(BaseModel):
    """Static reference benchmark for one classification tier."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    composition: str
    returns: BenchmarkReturns
    risk_level: str
    volatility: float = Field(description="Annualised standard deviation, percent")


class BenchmarkSummary(BaseModel):
    """Benchmark fields carried on the fund model (returns live in the comparison)."""

    name: str
    description: str = ""
    composition: str | None = None
    risk_level: str | None = None


class Classification(BaseModel):
    """Growth/defensive split by value. Percentages are rounded to 0.1."""

    classification: ClassificationTag = "unknown"
    growth_percent: float = 0.0
    defensive_percent: float = 0.0
    other_percent: float = 0.0

    @classmethod
    def unknown(cls) -> "Classification":
        return cls()


class HorizonComparison(BaseModel):
    fund_return: float
    benchmark_return: float
    difference: float = Field(description="fund_return - benchmark_return, percentage points")
    status: PerformanceStatus


class BenchmarkComparison(BaseModel):
    """Per-horizon comparison. None where either operand is missing."""

    one_year: HorizonComparison | None = None
    three_years: HorizonComparison | None = None
    since_inception: HorizonComparison | None = None


class Insight(BaseModel):
    type: Literal["data", "classification", "performance", "concentration", "return"]
    title: str
    description: str
    importance: Importance


class FundAnalysis(BaseModel):
    """Everything derived from an allocation + performance pair."""

    classification: Classification
    benchmark: BenchmarkSummary
    benchmark_comparison: BenchmarkComparison | None = None
    performance_score: int | None = None
    insights: list[Insight] = Field(default_factory=list)
    status: AnalysisStatus
    message: str | None = None
