"""CLASS Super Fund Report Analysis.

Identifies uploaded CLASS Super reports by text fingerprints, extracts the
allocation TOTAL row and the movement-and-returns figures, and combines both
into one normalized, analysed fund model.

Architecture:
    core/             - Config, errors, logging, PDF text extraction, value parsing
    parsers/          - Report classifier, per-report parsers, registry
    engines/          - Fund analysis, fund model builder, upload session
    pydantic_models/  - Pydantic models for documents, reports and the fund

Usage:
    from fund_insights import FundSession, read_pdf

    session = FundSession()
    session.ingest(read_pdf("allocation.pdf"))
    session.ingest(read_pdf("movement_and_returns.pdf"))
    session.fund.model_dump(mode="json")

CLI:
    fund-insights reports/allocation.pdf reports/movement_and_returns.pdf
"""

from fund_insights.core.pdf_reader import PDFReader, read_pdf
from fund_insights.engines import (
    FundSession,
    analyze_fund,
    create_fund_model,
    update_fund_model,
    create_empty_fund_model,
    validate_fund_model,
    get_fund_summary,
    generate_fund_id,
)
from fund_insights.parsers import (
    identify_report_type,
    parse_report,
    get_supported_report_types,
    validate_report,
)
from fund_insights.pydantic_models import (
    ExtractedDocument,
    AssetAllocationReport,
    PerformanceReport,
    ParsedReport,
    FundModel,
    FundAnalysis,
    FundSummary,
)

__all__ = [
    # Entry points
    "FundSession",
    "PDFReader",
    "read_pdf",
    # Registry
    "identify_report_type",
    "parse_report",
    "get_supported_report_types",
    "validate_report",
    # Fund model
    "analyze_fund",
    "create_fund_model",
    "update_fund_model",
    "create_empty_fund_model",
    "validate_fund_model",
    "get_fund_summary",
    "generate_fund_id",
    # Models
    "ExtractedDocument",
    "AssetAllocationReport",
    "PerformanceReport",
    "ParsedReport",
    "FundModel",
    "FundAnalysis",
    "FundSummary",
]
