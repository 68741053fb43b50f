"""Tests for fund_insights.engines.session module.

Tests FundSession upload handling:
- Short-text rejection
- Expected-type mismatch
- Merging uploads into one fund
- Validation warnings collected
- Reset
- Concurrent uploads
"""

import threading

import pytest

from fund_insights.core.errors import (
    DocumentReadError,
    ErrorCategory,
    ReportIdentificationError,
)
from fund_insights.engines.session import FundSession


@pytest.fixture
def session(mock_logger):
    return FundSession(logger=mock_logger)


# =============================================================================
# Rejections
# =============================================================================


class TestRejections:
    """Tests for documents the session refuses."""

    def test_short_text(self, session, make_document):
        doc = make_document(["Investment Allocation"], source_name="scan.pdf")
        before = session.fund

        with pytest.raises(DocumentReadError, match="image-based or corrupted"):
            session.ingest(doc)

        assert session.fund is before
        assert session.errors.error_count == 1
        assert session.errors.failed_sources == ["scan.pdf"]

    def test_wrong_expected_type(self, session, performance_document):
        with pytest.raises(ReportIdentificationError) as exc_info:
            session.ingest(performance_document, expected_type="asset_allocation")

        assert str(exc_info.value) == (
            "This appears to be a Investment Movement and Returns Report. "
            "Please upload a Investment Allocation Report for this step."
        )
        error = exc_info.value.error
        assert error.category == ErrorCategory.IDENTIFICATION
        assert error.context == {"detected_type": "performance", "expected_type": "asset_allocation"}
        assert session.fund.analysis_status == "empty"

    def test_unrecognized_with_expected_type(self, session, make_document):
        doc = make_document(["Quarterly newsletter " * 10])
        with pytest.raises(ReportIdentificationError, match="Unknown report type"):
            session.ingest(doc, expected_type="performance")

    def test_unrecognized(self, session, make_document):
        doc = make_document(["Quarterly newsletter " * 10])
        with pytest.raises(ReportIdentificationError, match="Could not identify report type"):
            session.ingest(doc)


# =============================================================================
# Ingest
# =============================================================================


class TestIngest:
    """Tests for successful uploads."""

    def test_allocation_then_performance(self, session, allocation_document, performance_document):
        parsed = session.ingest(allocation_document, expected_type="asset_allocation")
        assert parsed.report_type == "asset_allocation"
        assert session.fund.analysis_status == "partial"

        session.ingest(performance_document, expected_type="performance")
        fund = session.fund

        assert fund.analysis_status == "complete"
        assert fund.classification.classification == "balanced"
        assert fund.performance_score == 82

    def test_generated_fund_id_kept(self, session, allocation_document, performance_document):
        session.ingest(allocation_document)
        fund_id = session.fund.fund_id
        session.ingest(performance_document)

        assert fund_id.startswith("FUND-")
        assert not fund_id.endswith("-empty")
        assert session.fund.fund_id == fund_id

    def test_fixed_fund_id(self, mock_logger, allocation_document):
        session = FundSession(fund_id="SMSF-42", logger=mock_logger)
        session.ingest(allocation_document)
        assert session.fund.fund_id == "SMSF-42"

    def test_validation_warnings_recorded(self, session, allocation_document):
        session.ingest(allocation_document)

        assert session.errors.error_count == 0
        assert [w.message for w in session.errors.warnings] == ["No holdings found"]
        assert session.validations["asset_allocation"].valid

    def test_logs_progress(self, session, mock_logger, allocation_document):
        session.ingest(allocation_document)
        mock_logger.start_step.assert_called_once_with("ingest", "allocation.pdf")
        mock_logger.step_result.assert_called_once()


# =============================================================================
# Reset
# =============================================================================


class TestReset:
    """Tests for FundSession.reset."""

    def test_reset_one_slot(self, session, allocation_document, performance_document):
        session.ingest(allocation_document)
        session.ingest(performance_document)

        fund = session.reset("performance")

        assert fund.performance is None
        assert fund.asset_allocation is not None
        assert fund.analysis_status == "partial"
        assert "performance" not in session.validations

    def test_reset_slot_drops_its_warnings(self, session, allocation_document, performance_document):
        session.ingest(allocation_document)
        session.ingest(performance_document)
        assert session.errors.warning_count == 1

        session.reset("asset_allocation")

        assert session.errors.warnings == []

    def test_reset_all(self, session, allocation_document):
        session.ingest(allocation_document)
        fund = session.reset()

        assert fund.analysis_status == "empty"
        assert session.validations == {}
        assert session.errors.to_dict()["warnings"] == []

    def test_reset_unknown_type(self, session):
        with pytest.raises(ValueError):
            session.reset("tax")


# =============================================================================
# Concurrency
# =============================================================================


class TestConcurrentIngest:
    """Uploads from several threads are all applied."""

    def test_no_lost_update(self, session, allocation_document, performance_document):
        threads = [
            threading.Thread(target=session.ingest, args=(allocation_document,)),
            threading.Thread(target=session.ingest, args=(performance_document,)),
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert session.fund.asset_allocation is not None
        assert session.fund.performance is not None
        assert session.fund.analysis_status == "complete"
