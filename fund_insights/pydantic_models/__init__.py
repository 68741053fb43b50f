"""Pydantic models for the report analysis pipeline.

Modules:
- document: ExtractedDocument, PageText (input boundary)
- reports: AssetAllocationReport, PerformanceReport and registry results
- analysis: Classification, Benchmark, BenchmarkComparison, Insight, FundAnalysis
- fund: FundModel aggregate root and its normalized slots
"""

from fund_insights.pydantic_models.document import ExtractedDocument, PageText
from fund_insights.pydantic_models.reports import (
    AssetClass,
    Holding,
    AssetAllocationReport,
    ReportPeriod,
    SinceDateReturn,
    TwrReturns,
    MovementInValue,
    PortfolioReturn,
    PerformanceDetails,
    PerformanceReport,
    ReportIdentification,
    ParsedReport,
    ReportValidation,
    SupportedReportType,
)
from fund_insights.pydantic_models.analysis import (
    ClassificationTag,
    PerformanceStatus,
    BenchmarkReturns,
    Benchmark,
    BenchmarkSummary,
    Classification,
    HorizonComparison,
    BenchmarkComparison,
    Insight,
    FundAnalysis,
)
from fund_insights.pydantic_models.fund import (
    FundAllocation,
    FundPeriod,
    FundPerformance,
    FundModel,
    FundValidation,
    FundSummary,
)

__all__ = [
    # Input boundary
    "ExtractedDocument",
    "PageText",
    # Reports
    "AssetClass",
    "Holding",
    "AssetAllocationReport",
    "ReportPeriod",
    "SinceDateReturn",
    "TwrReturns",
    "MovementInValue",
    "PortfolioReturn",
    "PerformanceDetails",
    "PerformanceReport",
    "ReportIdentification",
    "ParsedReport",
    "ReportValidation",
    "SupportedReportType",
    # Analysis
    "ClassificationTag",
    "PerformanceStatus",
    "BenchmarkReturns",
    "Benchmark",
    "BenchmarkSummary",
    "Classification",
    "HorizonComparison",
    "BenchmarkComparison",
    "Insight",
    "FundAnalysis",
    # Fund model
    "FundAllocation",
    "FundPeriod",
    "FundPerformance",
    "FundModel",
    "FundValidation",
    "FundSummary",
]
