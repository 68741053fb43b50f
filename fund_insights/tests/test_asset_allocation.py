"""Tests for fund_insights.parsers.asset_allocation module.

Tests TOTAL-row parsing of Investment Allocation reports:
- Positional column mapping
- Degraded result without a TOTAL row
- Header-based column order (rapidfuzz)
- As-at date extraction
"""

import pytest

from fund_insights.core.config import AssetClasses
from fund_insights.parsers.asset_allocation import (
    detect_header_columns,
    extract_report_date,
    find_total_row,
    parse_asset_allocation_report,
    parse_total_row,
)


# =============================================================================
# Full report
# =============================================================================


class TestParseAssetAllocationReport:
    """Tests for parse_asset_allocation_report."""

    def test_all_columns(self, allocation_report):
        names = [ac.name for ac in allocation_report.asset_classes]
        assert names == list(AssetClasses.ALLOCATION_COLUMNS)

    def test_values_and_percents(self, allocation_report):
        by_name = {ac.name: ac for ac in allocation_report.asset_classes}

        assert by_name["Australian Equities"].value == pytest.approx(400_000.0)
        assert by_name["Australian Equities"].percent == pytest.approx(40.0)
        assert by_name["Cash"].value == pytest.approx(100_000.0)
        assert by_name["Unknown"].value == 0.0
        assert all(ac.source == "total_row" for ac in allocation_report.asset_classes)

    def test_total_is_sum_of_columns(self, allocation_report):
        """The printed grand total is surplus and ignored; total is recomputed."""
        assert allocation_report.total_value == pytest.approx(1_000_000.0)

    def test_as_at_date(self, allocation_report):
        assert allocation_report.as_at_date == "2024-06-30"

    def test_holdings_not_extracted(self, allocation_report):
        assert allocation_report.holdings == []
        assert allocation_report.holdings_count == 0

    def test_two_column_total_row(self, make_document):
        """Only the first two columns populated."""
        doc = make_document([
            "Investment Allocation as at 30/06/2024",
            "TOTAL $600,000.00 60.00% $400,000.00 40.00%",
        ])
        report = parse_asset_allocation_report(doc)

        assert [ac.name for ac in report.asset_classes] == [
            "Australian Equities",
            "Australian Fixed Interest",
        ]
        assert report.total_value == pytest.approx(1_000_000.0)
        assert report.asset_classes[1].percent == pytest.approx(40.0)

    def test_no_total_row(self, make_document):
        """No TOTAL row is a degraded result, not an error."""
        doc = make_document(["Investment Allocation", "Allocation as at 30 June 2024"])
        report = parse_asset_allocation_report(doc)

        assert report.total_value is None
        assert report.asset_classes == []
        assert report.as_at_date == "2024-06-30"

    def test_total_row_on_later_page(self, make_document):
        doc = make_document(
            ["Investment Allocation", "BHP Group 10,000.00"],
            ["  Total $5,000.00 100.00%"],
        )
        report = parse_asset_allocation_report(doc)
        assert report.asset_classes[0].name == "Australian Equities"
        assert report.total_value == pytest.approx(5_000.0)


# =============================================================================
# Row helpers
# =============================================================================


class TestFindTotalRow:
    """Tests for find_total_row."""

    def test_first_total_line_wins(self, make_document):
        doc = make_document(["Header", "TOTAL $1.00", "Total $2.00"])
        line, preceding = find_total_row(doc)
        assert line == "TOTAL $1.00"
        assert preceding == ["Header"]

    def test_total_must_start_the_line(self, make_document):
        doc = make_document(["Grand Total $1.00"])
        assert find_total_row(doc) is None


class TestParseTotalRow:
    """Tests for parse_total_row."""

    def test_percent_numbers_are_not_dollars(self):
        """"40.00%" must not be read as a dollar token."""
        rows = parse_total_row("TOTAL $600,000.00 60.00% $400,000.00 40.00%", ["A", "B", "C"])
        assert [(r.name, r.value, r.percent) for r in rows] == [
            ("A", 600_000.0, 60.0),
            ("B", 400_000.0, 40.0),
        ]

    def test_percent_only_column(self):
        rows = parse_total_row("TOTAL 100.00%", ["A"])
        assert rows[0].value is None
        assert rows[0].percent == 100.0

    def test_empty_row(self):
        assert parse_total_row("TOTAL", ["A", "B"]) == []


# =============================================================================
# Header column strategy
# =============================================================================


class TestHeaderColumns:
    """Tests for the header-based column strategy."""

    REVERSED = [
        "Investment Allocation",
        "Allocation as at 30 June 2024",
        "Cash Australian Equities",
        "TOTAL $100,000.00 25.00% $300,000.00 75.00% $400,000.00 100.00%",
    ]

    def test_detects_header_order(self):
        assert detect_header_columns(self.REVERSED[:3]) == ["Cash", "Australian Equities"]

    def test_no_header(self):
        assert detect_header_columns(["Investment Allocation", "Smith Family Super Fund"]) is None

    def test_header_strategy_uses_header_order(self, make_document):
        doc = make_document(self.REVERSED)
        report = parse_asset_allocation_report(doc, column_strategy="header")
        by_name = {ac.name: ac.value for ac in report.asset_classes}

        assert by_name == {"Cash": 100_000.0, "Australian Equities": 300_000.0}
        assert report.total_value == pytest.approx(400_000.0)

    def test_positional_strategy_ignores_header(self, make_document):
        doc = make_document(self.REVERSED)
        report = parse_asset_allocation_report(doc)
        assert report.asset_classes[0].name == "Australian Equities"
        assert report.asset_classes[0].value == 100_000.0

    def test_header_strategy_falls_back(self, make_document):
        doc = make_document(["Investment Allocation", "TOTAL $10.00 100.00%"])
        report = parse_asset_allocation_report(doc, column_strategy="header")
        assert report.asset_classes[0].name == "Australian Equities"


# =============================================================================
# Report date
# =============================================================================


class TestExtractReportDate:
    """Tests for extract_report_date."""

    def test_month_name(self):
        assert extract_report_date("Allocation As At 1 July 2023") == "2023-07-01"

    def test_slash_form(self):
        assert extract_report_date("as at 31/12/2023") == "2023-12-31"

    def test_missing(self):
        assert extract_report_date("no date here") is None
