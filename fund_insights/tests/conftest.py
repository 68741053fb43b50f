"""Pytest configuration and shared fixtures.

Provides reusable test fixtures for:
- Sample report lines (allocation and movement-and-returns)
- ExtractedDocument builders
- Parsed sample reports
- Mock loggers
"""

import pytest
from unittest.mock import MagicMock

from fund_insights.core.pipeline_logger import reset_logger
from fund_insights.parsers.asset_allocation import parse_asset_allocation_report
from fund_insights.parsers.performance_report import parse_performance_report
from fund_insights.pydantic_models.document import ExtractedDocument


# =============================================================================
# Sample report lines
# =============================================================================

# Growth 700k (70%), defensive 250k (25%), other 50k (5%): balanced at the upper bound.
ALLOCATION_LINES = [
    "Investment Allocation",
    "Smith Family Super Fund",
    "Allocation as at 30 June 2024",
    "Australian Equities Australian Fixed Interest Cash International Equities "
    "Listed Property Other Unknown Total",
    "TOTAL $400,000.00 40.00% $150,000.00 15.00% $100,000.00 10.00% "
    "$200,000.00 20.00% $100,000.00 10.00% $50,000.00 5.00% $0.00 0.00% "
    "$1,000,000.00 100.00%",
]

PERFORMANCE_LINES = [
    "Investment Movement and Returns Report",
    "Smith Family Super Fund",
    "For the period from 1 July 2023 to 30 June 2024",
    "Returns shown are time weighted",
    "Movement in Value",
    "Starting market value 900,000.00",
    "Net addition / (withdrawal) (20,000.00)",
    "Realised gains / (losses) 15,000.00",
    "Investment income 30,000.00",
    "Change in market value 75,000.00",
    "Other 0.00",
    "Ending market value 1,000,000.00",
    "Movement in value 100,000.00",
    "Portfolio Return",
    "Realised gains / (losses) 15,000.00",
    "Investment income 30,000.00",
    "Credits 2,000.00",
    "Total dollar return before expenses 127,000.00",
    "Investment expenses (2,000.00)",
    "Total dollar return after expenses 125,000.00",
    "Return over time",
    "1 Year 3 Years Since 01/07/2015 Since 01/07/2023",
    "Investment return before expenses (TWR) 12.95% - 33.82% 4.47%",
]


# =============================================================================
# Documents
# =============================================================================


@pytest.fixture
def make_document():
    """Factory: build an ExtractedDocument from page line lists."""
    def _make(*pages: list[str], source_name: str = "report.pdf") -> ExtractedDocument:
        return ExtractedDocument.from_pages(list(pages), source_name=source_name)

    return _make


@pytest.fixture
def allocation_document(make_document):
    """Investment Allocation report with a 7-column TOTAL row."""
    return make_document(ALLOCATION_LINES, source_name="allocation.pdf")


@pytest.fixture
def performance_document(make_document):
    """Movement and Returns report split over two pages."""
    return make_document(
        PERFORMANCE_LINES[:13],
        PERFORMANCE_LINES[13:],
        source_name="performance.pdf",
    )


@pytest.fixture
def allocation_report(allocation_document):
    return parse_asset_allocation_report(allocation_document)


@pytest.fixture
def performance_report(performance_document):
    return parse_performance_report(performance_document)


# =============================================================================
# Logging
# =============================================================================


@pytest.fixture
def mock_logger():
    """A PipelineLogger stand-in that records calls."""
    return MagicMock()


@pytest.fixture(autouse=True)
def _reset_global_logger():
    """Drop the global logger (and its file handlers) between tests."""
    yield
    reset_logger()
