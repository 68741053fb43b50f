"""Upload session: one fund, reports arriving one at a time.

FundSession runs read-check -> identify -> parse -> validate -> merge for
each uploaded document. All steps for one document happen under a lock, so
concurrent uploads are applied one after another and none is lost.
"""

import threading

from fund_insights.core.config import DocumentLimits, ReportTypes
from fund_insights.core.errors import (
    DocumentReadError,
    PipelineErrors,
    ReportIdentificationError,
    ReportProcessingError,
    identification_error,
    pdf_read_error,
    validation_warning,
)
from fund_insights.core.pipeline_logger import PipelineLogger, get_logger
from fund_insights.engines.fund_model import (
    clear_fund_report,
    create_empty_fund_model,
    generate_fund_id,
    update_fund_model,
    validate_fund_model,
)
from fund_insights.parsers.registry import ReportRegistry, default_registry
from fund_insights.pydantic_models.document import ExtractedDocument
from fund_insights.pydantic_models.fund import FundModel, FundValidation
from fund_insights.pydantic_models.reports import ParsedReport, ReportValidation


class FundSession:
    """Holds the current FundModel and applies uploads to it.

    Example:
        session = FundSession()
        session.ingest(read_pdf("allocation.pdf"), expected_type="asset_allocation")
        session.ingest(read_pdf("returns.pdf"), expected_type="performance")
        session.fund.analysis_status  # "complete"
    """

    def __init__(
        self,
        fund_id: str | None = None,
        registry: ReportRegistry | None = None,
        logger: PipelineLogger | None = None,
    ):
        self.registry = registry or default_registry
        self.logger = logger or get_logger()
        self.errors = PipelineErrors()
        self.validations: dict[str, ReportValidation] = {}
        self._fixed_id = fund_id is not None
        self._fund = create_empty_fund_model(fund_id)
        self._lock = threading.Lock()

    @property
    def fund(self) -> FundModel:
        """Latest snapshot. Snapshots are never modified after publication."""
        return self._fund

    def validate(self) -> FundValidation:
        return validate_fund_model(self._fund)

    def ingest(self, document: ExtractedDocument, expected_type: str | None = None) -> ParsedReport:
        """Parse one document and merge it into the fund.

        Args:
            document: Extracted PDF text.
            expected_type: If given, documents of any other type are rejected.

        Returns:
            The parsed report.

        Raises:
            DocumentReadError: Text shorter than DocumentLimits.MIN_TEXT_LENGTH.
            ReportIdentificationError: Unrecognized, or not the expected type.
            ReportParseError: The parser failed.

        On any of these the fund is left unchanged.
        """
        source = document.source_name or "document"

        with self._lock:
            self.logger.start_step("ingest", source)
            try:
                parsed = self._parse(document, expected_type)
            except ReportProcessingError as e:
                self.errors.add(e.error)
                self.logger.error(e.error.message, source=source)
                raise

            validation = self.registry.validate_report(parsed.data, parsed.report_type)
            self.validations[parsed.report_type] = validation
            for message in [*validation.errors, *validation.warnings]:
                self.errors.add(validation_warning(message, parsed.report_type, document.source_name))
                self.logger.warning(message, report=parsed.report_type)

            fund = self._fund
            if fund.analysis_status == "empty" and not self._fixed_id:
                fund = fund.model_copy(update={
                    "fund_id": generate_fund_id({parsed.report_type: parsed.data}),
                })
            self._fund = update_fund_model(fund, parsed.report_type, parsed.data)

            self.logger.step_result(
                parsed.report_name,
                confidence=f"{parsed.confidence:.1f}%",
                status=self._fund.analysis_status,
            )
            return parsed

    def _parse(self, document: ExtractedDocument, expected_type: str | None) -> ParsedReport:
        text = document.full_text or ""
        if len(text) < DocumentLimits.MIN_TEXT_LENGTH:
            raise DocumentReadError(pdf_read_error(
                "Could not extract text from PDF. The file may be image-based or corrupted.",
                source_name=document.source_name,
            ))

        if expected_type is not None:
            identification = self.registry.identify_report_type(text)
            if identification is None or identification.type != expected_type:
                actual_name = identification.name if identification else "Unknown report type"
                expected_spec = self.registry.get(expected_type)
                expected_name = expected_spec.name if expected_spec else expected_type
                raise ReportIdentificationError(identification_error(
                    f"This appears to be a {actual_name}. "
                    f"Please upload a {expected_name} for this step.",
                    source_name=document.source_name,
                    detected_type=identification.type if identification else None,
                    expected_type=expected_type,
                ))

        parsed = self.registry.parse_report(document)
        self.logger.milestone(
            f"Identified {parsed.report_name}",
            confidence=f"{parsed.confidence:.1f}%",
        )
        return parsed

    def reset(self, report_type: str | None = None) -> FundModel:
        """Clear one report slot (re-analysing the rest) or the whole fund.

        Raises:
            ValueError: report_type is not a supported report type.
        """
        with self._lock:
            if report_type is None:
                self._fund = create_empty_fund_model(self._fund.fund_id if self._fixed_id else None)
                self.validations.clear()
                self.errors = PipelineErrors()
            else:
                if report_type not in (ReportTypes.ASSET_ALLOCATION, ReportTypes.PERFORMANCE):
                    raise ValueError(f"Unsupported report type: {report_type}")
                self._fund = clear_fund_report(self._fund, report_type)
                self.validations.pop(report_type, None)
                self.errors.drop_report(report_type)
            self.logger.info(f"Reset {report_type or 'all reports'}", status=self._fund.analysis_status)
            return self._fund
