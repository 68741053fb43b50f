"""Report identification and text-pattern extraction."""

from fund_insights.parsers.report_classifier import FingerprintSpec, ReportClassifier
from fund_insights.parsers.asset_allocation import parse_asset_allocation_report
from fund_insights.parsers.performance_report import (
    parse_performance_report,
    validate_performance_report,
)
from fund_insights.parsers.registry import (
    ReportParserSpec,
    ReportRegistry,
    DEFAULT_REPORT_SPECS,
    default_registry,
    identify_report_type,
    parse_report,
    get_supported_report_types,
    validate_report,
    validate_asset_allocation_report,
)

__all__ = [
    "FingerprintSpec",
    "ReportClassifier",
    "parse_asset_allocation_report",
    "parse_performance_report",
    "validate_performance_report",
    "validate_asset_allocation_report",
    "ReportParserSpec",
    "ReportRegistry",
    "DEFAULT_REPORT_SPECS",
    "default_registry",
    "identify_report_type",
    "parse_report",
    "get_supported_report_types",
    "validate_report",
]
