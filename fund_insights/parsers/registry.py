"""Report registry and dispatcher.

Identifies which supported report a document is (by fingerprints) and
routes it to that report's parser. To support a new layout:
1. Write a parser module in parsers/ taking an ExtractedDocument
2. Register a ReportParserSpec for it here (fingerprints + parser + validator)
"""

import logging
from dataclasses import dataclass
from typing import Callable, Sequence

from fund_insights.core.config import ReportFingerprints, ReportTypes
from fund_insights.core.errors import (
    ReportIdentificationError,
    ReportParseError,
    identification_error,
    parse_error,
)
from fund_insights.parsers.asset_allocation import parse_asset_allocation_report
from fund_insights.parsers.performance_report import (
    parse_performance_report,
    validate_performance_report,
)
from fund_insights.parsers.report_classifier import FingerprintSpec, ReportClassifier
from fund_insights.pydantic_models.document import ExtractedDocument
from fund_insights.pydantic_models.reports import (
    AssetAllocationReport,
    ParsedReport,
    PerformanceReport,
    ReportIdentification,
    ReportValidation,
    SupportedReportType,
)

logger = logging.getLogger(__name__)

ParsedData = AssetAllocationReport | PerformanceReport


@dataclass(frozen=True)
class ReportParserSpec:
    """A registered report type.

    Attributes:
        fingerprint: Identification rule (type key, name, fingerprints).
        parser: Turns an ExtractedDocument into the report model. May be None
            for a type that can be recognized but not yet parsed.
        validator: Checks a parsed report for missing fields.
    """

    fingerprint: FingerprintSpec
    parser: Callable[[ExtractedDocument], ParsedData] | None
    validator: Callable[[ParsedData], ReportValidation] | None = None

    @property
    def report_type(self) -> str:
        return self.fingerprint.report_type

    @property
    def name(self) -> str:
        return self.fingerprint.name


def validate_asset_allocation_report(report: AssetAllocationReport) -> ReportValidation:
    """Asset classes are required; holdings are optional for the TOTAL-row parser."""
    errors: list[str] = []
    warnings: list[str] = []

    if not report.asset_classes:
        errors.append("No asset classes found")
    if not report.holdings:
        warnings.append("No holdings found")
    if report.as_at_date is None:
        warnings.append("Report date not found")

    return ReportValidation(valid=not errors, errors=errors, warnings=warnings)


class ReportRegistry:
    """Holds the registered report types in registration order.

    Registration order is also the identification tie-break order (see
    ReportClassifier).
    """

    def __init__(self, specs: Sequence[ReportParserSpec]):
        self._specs = {spec.report_type: spec for spec in specs}
        self.classifier = ReportClassifier([spec.fingerprint for spec in specs])

    def get(self, report_type: str) -> ReportParserSpec | None:
        return self._specs.get(report_type)

    def identify_report_type(self, text: str) -> ReportIdentification | None:
        """Identify a document's report type from its text. None if unrecognized."""
        return self.classifier.identify(text)

    def parse_report(self, document: ExtractedDocument) -> ParsedReport:
        """Identify a document and run the matching parser.

        Raises:
            ReportIdentificationError: No report type matched.
            ReportParseError: No parser registered, or the parser raised.
        """
        identification = self.identify_report_type(document.full_text)

        if identification is None:
            raise ReportIdentificationError(identification_error(
                "Could not identify report type. Please ensure this is a supported "
                "CLASS Super report (Investment Allocation or Movement and Returns).",
                source_name=document.source_name,
            ))

        logger.info(
            f"Identified report as: {identification.name} "
            f"({identification.confidence:.1f}% confidence)"
        )

        spec = self.get(identification.type)
        if spec is None or spec.parser is None:
            raise ReportParseError(parse_error(
                f"No parser registered for report type: {identification.type}",
                report_type=identification.type,
                source_name=document.source_name,
            ))

        try:
            data = spec.parser(document)
        except Exception as e:
            raise ReportParseError(parse_error(
                f"Failed to parse {identification.name}: {e}",
                report_type=identification.type,
                source_name=document.source_name,
                original=e,
            )) from e

        return ParsedReport(
            report_type=identification.type,
            report_name=identification.name,
            confidence=identification.confidence,
            data=data,
        )

    def get_supported_report_types(self) -> list[SupportedReportType]:
        return [
            SupportedReportType(
                type=spec.report_type,
                name=spec.name,
                fingerprints=list(spec.fingerprint.fingerprints),
            )
            for spec in self._specs.values()
        ]

    def validate_report(self, report: ParsedData, report_type: str) -> ReportValidation:
        """Run the registered validator. Unknown types fail validation."""
        spec = self.get(report_type)
        if spec is None:
            return ReportValidation(valid=False, errors=[f"Unsupported report type: {report_type}"])
        if spec.validator is None:
            return ReportValidation(valid=True)
        return spec.validator(report)


DEFAULT_REPORT_SPECS: tuple[ReportParserSpec, ...] = (
    ReportParserSpec(
        fingerprint=FingerprintSpec(
            report_type=ReportTypes.PERFORMANCE,
            name="Investment Movement and Returns Report",
            fingerprints=ReportFingerprints.PERFORMANCE,
            min_match_count=ReportFingerprints.MIN_MATCH_COUNT,
        ),
        parser=parse_performance_report,
        validator=validate_performance_report,
    ),
    ReportParserSpec(
        fingerprint=FingerprintSpec(
            report_type=ReportTypes.ASSET_ALLOCATION,
            name="Investment Allocation Report",
            fingerprints=ReportFingerprints.ASSET_ALLOCATION,
            min_match_count=ReportFingerprints.MIN_MATCH_COUNT,
        ),
        parser=parse_asset_allocation_report,
        validator=validate_asset_allocation_report,
    ),
)

default_registry = ReportRegistry(DEFAULT_REPORT_SPECS)


def identify_report_type(text: str) -> ReportIdentification | None:
    return default_registry.identify_report_type(text)


def parse_report(document: ExtractedDocument) -> ParsedReport:
    return default_registry.parse_report(document)


def get_supported_report_types() -> list[SupportedReportType]:
    return default_registry.get_supported_report_types()


def validate_report(report: ParsedData, report_type: str) -> ReportValidation:
    return default_registry.validate_report(report, report_type)
