"""Tests for fund_insights.core.errors module.

Tests the error handling infrastructure:
- ExtractionError dataclass
- PipelineErrors accumulator
- Error factory functions
- Exceptions carrying an ExtractionError
"""

from fund_insights.core.errors import (
    DocumentReadError,
    ErrorCategory,
    ErrorSeverity,
    ExtractionError,
    PipelineErrors,
    ReportParseError,
    ReportProcessingError,
    identification_error,
    parse_error,
    pdf_read_error,
    validation_warning,
)


# =============================================================================
# ExtractionError tests
# =============================================================================


class TestExtractionError:
    """Tests for ExtractionError dataclass."""

    def test_str(self):
        """String form names severity, category and context."""
        error = ExtractionError(
            category=ErrorCategory.PARSE,
            severity=ErrorSeverity.ERROR,
            message="Failed to parse",
            phase="parse",
            report_type="performance",
            source_name="returns.pdf",
        )
        assert str(error) == (
            "[ERROR] parse: Failed to parse | report=performance | source=returns.pdf | phase=parse"
        )

    def test_to_dict(self):
        """to_dict is JSON-friendly and omits the original exception."""
        error = pdf_read_error("bad file", source_name="x.pdf", original=OSError("boom"))
        data = error.to_dict()

        assert data["category"] == "pdf_read"
        assert data["severity"] == "error"
        assert data["source_name"] == "x.pdf"
        assert "original_error" not in data


# =============================================================================
# Factory tests
# =============================================================================


class TestFactories:
    """Tests for error factory functions."""

    def test_identification_context(self):
        error = identification_error("wrong type", detected_type="performance", expected_type="asset_allocation")
        assert error.category == ErrorCategory.IDENTIFICATION
        assert error.phase == "identify"
        assert error.report_type == "performance"
        assert error.context == {"detected_type": "performance", "expected_type": "asset_allocation"}

    def test_identification_without_types(self):
        assert identification_error("no match").context == {}

    def test_parse_error(self):
        original = ValueError("x")
        error = parse_error("failed", report_type="asset_allocation", original=original)
        assert error.severity == ErrorSeverity.ERROR
        assert error.original_error is original

    def test_validation_warning(self):
        warning = validation_warning("No holdings found", report_type="asset_allocation")
        assert warning.severity == ErrorSeverity.WARNING
        assert warning.category == ErrorCategory.VALIDATION


# =============================================================================
# PipelineErrors tests
# =============================================================================


class TestPipelineErrors:
    """Tests for PipelineErrors accumulator."""

    def test_errors_and_warnings_separated(self):
        errors = PipelineErrors()
        errors.add(pdf_read_error("unreadable", source_name="a.pdf"))
        errors.add(validation_warning("No holdings found", source_name="b.pdf"))

        assert errors.error_count == 1
        assert errors.warning_count == 1
        assert errors.failed_sources == ["a.pdf"]

    def test_failed_sources_deduplicated(self):
        errors = PipelineErrors()
        errors.add(pdf_read_error("one", source_name="a.pdf"))
        errors.add(parse_error("two", report_type="performance", source_name="a.pdf"))
        assert errors.failed_sources == ["a.pdf"]

    def test_summary(self):
        errors = PipelineErrors()
        errors.add(pdf_read_error("one"))
        errors.add(pdf_read_error("two"))
        errors.add(identification_error("three"))

        summary = errors.summary()
        assert summary["total_errors"] == 3
        assert summary["errors_by_category"] == {"pdf_read": 2, "identification": 1}

    def test_drop_report(self):
        errors = PipelineErrors()
        errors.add(validation_warning("No holdings found", report_type="asset_allocation"))
        errors.add(validation_warning("1-year TWR not found", report_type="performance"))
        errors.add(pdf_read_error("unreadable", source_name="a.pdf"))

        errors.drop_report("asset_allocation")

        assert [w.message for w in errors.warnings] == ["1-year TWR not found"]
        assert errors.error_count == 1

    def test_to_dict(self):
        errors = PipelineErrors()
        errors.add(validation_warning("w"))
        data = errors.to_dict()

        assert data["errors"] == []
        assert data["warnings"][0]["message"] == "w"
        assert data["summary"]["total_warnings"] == 1


# =============================================================================
# Exception tests
# =============================================================================


class TestExceptions:
    """Tests for ReportProcessingError subclasses."""

    def test_carries_error(self):
        error = pdf_read_error("unreadable")
        exc = DocumentReadError(error)

        assert isinstance(exc, ReportProcessingError)
        assert exc.error is error
        assert str(exc) == "unreadable"

    def test_parse_error_subclass(self):
        assert issubclass(ReportParseError, ReportProcessingError)
