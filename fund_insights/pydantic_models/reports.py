"""Pydantic models for extractor output.

- AssetAllocationReport: CLASS Super "Investment Allocation" report
- PerformanceReport: CLASS Super "Investment Movement and Returns" report
- ReportIdentification / ParsedReport / ReportValidation: registry surface

Every extracted figure is Optional: None means the label or pattern was not
found in an otherwise identified document. Such misses are surfaced as
validation warnings, never as exceptions.
"""

from typing import Literal

from pydantic import BaseModel, Field


# Asset allocation

class AssetClass(BaseModel):
    """One asset-class column of the allocation TOTAL row."""

    name: str = Field(description="Asset class, e.g. 'Australian Equities'")
    value: float | None = Field(default=None, description="Dollar value")
    percent: float | None = Field(default=None, description="Share of portfolio, 0-100")
    source: str = Field(default="total_row", description="Provenance tag")


class Holding(BaseModel):
    """A single investment line. Not extracted from the TOTAL row."""

    name: str
    value: float | None = None
    asset_class: str | None = None
    percent: float | None = None


class AssetAllocationReport(BaseModel):
    """Parsed allocation report. Immutable once parsed; replaced on re-upload."""

    report_type: Literal["asset_allocation"] = "asset_allocation"
    as_at_date: str | None = Field(default=None, description="ISO date of the report")
    total_value: float | None = Field(
        default=None,
        description="Sum of asset-class values; None when no TOTAL row was found",
    )
    asset_classes: list[AssetClass] = Field(default_factory=list)
    holdings: list[Holding] = Field(default_factory=list)
    holdings_count: int = 0


# Performance

class ReportPeriod(BaseModel):
    """Reporting period from the report header."""

    from_date: str | None = None
    to_date: str | None = None
    raw_from: str | None = None
    raw_to: str | None = None


class SinceDateReturn(BaseModel):
    """A "Since DD/MM/YYYY" TWR column paired with its value."""

    date: str | None
    raw_date: str
    value: float | None


class TwrReturns(BaseModel):
    """Time-weighted returns in percent. None means "-" or not printed."""

    one_year: float | None = None
    three_years: float | None = None
    five_years: float | None = None
    since_start: float | None = None
    since_period_start: float | None = None
    since_dates: list[SinceDateReturn] = Field(default_factory=list)


class MovementInValue(BaseModel):
    """Figures from the "Movement in Value" section."""

    starting_market_value: float | None = None
    net_addition: float | None = None
    realised_gains_losses: float | None = None
    investment_income: float | None = None
    other: float | None = None
    ending_market_value: float | None = None
    movement_in_value: float | None = None


class PortfolioReturn(BaseModel):
    """Figures from the "Portfolio Return" section."""

    realised_gains_losses: float | None = None
    investment_income: float | None = None
    credits: float | None = None
    total_before_expenses: float | None = None
    expenses: float | None = None
    total_after_expenses: float | None = None


class PerformanceDetails(BaseModel):
    """Full section breakdowns, kept for display and debugging."""

    movement_in_value: MovementInValue = Field(default_factory=MovementInValue)
    portfolio_return: PortfolioReturn = Field(default_factory=PortfolioReturn)


class PerformanceReport(BaseModel):
    """Parsed movement-and-returns report."""

    report_type: Literal["performance"] = "performance"
    period: ReportPeriod = Field(default_factory=ReportPeriod)
    starting_market_value: float | None = None
    ending_market_value: float | None = None
    movement_in_value: float | None = None
    dollar_return_before_expenses: float | None = None
    dollar_return_after_expenses: float | None = None
    investment_expenses: float | None = None
    twr: TwrReturns = Field(default_factory=TwrReturns)
    details: PerformanceDetails = Field(default_factory=PerformanceDetails)

    @property
    def dollar_return(self) -> float | None:
        """Headline dollar return: the after-expenses figure."""
        return self.dollar_return_after_expenses


# Registry surface

class ReportIdentification(BaseModel):
    """Fingerprint verdict for a document."""

    type: str
    confidence: float = Field(description="Matched fingerprints as a percentage, 0-100")
    name: str
    match_count: int
    total_fingerprints: int


class ParsedReport(BaseModel):
    """Result of identifying and parsing one document."""

    report_type: str
    report_name: str
    confidence: float
    data: AssetAllocationReport | PerformanceReport = Field(discriminator="report_type")


class ReportValidation(BaseModel):
    """Outcome of checking a parsed report for missing or inconsistent fields."""

    valid: bool
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


class SupportedReportType(BaseModel):
    """Public description of a registered report type."""

    type: str
    name: str
    fingerprints: list[str]
