"""Centralized configuration for the fund report analysis pipeline.

All thresholds, fingerprints, asset-class taxonomies and benchmark figures
live here. Each constant documents:
- What it controls
- Where it is used

Runtime code never reads these tables implicitly for decisions that tests
need to vary: the analysis engine and the report classifier take them as
constructor arguments (see engines/analysis.py:AnalysisConfig and
parsers/report_classifier.py:FingerprintSpec).
"""

import os
from pathlib import Path
from typing import Final


# =============================================================================
# Environment Configuration
# =============================================================================
#
# The CLI loads a .env file (python-dotenv) before importing this module's
# consumers, so these can be set either in the shell or in .env:
#   - FUND_INSIGHTS_OUTPUT_DIR: where analysis JSON files are written
#   - FUND_INSIGHTS_LOG_DIR: where per-run log files are written (unset = none)
#
# =============================================================================

OUTPUT_DIR: Final[Path] = Path(os.environ.get("FUND_INSIGHTS_OUTPUT_DIR", "outputs"))
"""Default output directory for exported fund models."""

LOG_DIR: Final[Path | None] = (
    Path(os.environ["FUND_INSIGHTS_LOG_DIR"]) if os.environ.get("FUND_INSIGHTS_LOG_DIR") else None
)
"""Directory for log files. None disables file logging."""


# Report identification

class ReportTypes:
    """Identifiers of the supported report layouts.

    Used as registry keys, FundModel slot names and ParsedReport.report_type.
    """

    ASSET_ALLOCATION: Final[str] = "asset_allocation"
    PERFORMANCE: Final[str] = "performance"


class ReportFingerprints:
    """Case-insensitive substrings that identify each report type.

    A report's confidence is the share of its fingerprints found in the
    document text. Generic words like "cash" are deliberately included:
    the CLASS Super allocation report always prints its asset-class columns.

    Used by: parsers/registry.py
    """

    ASSET_ALLOCATION: Final[tuple[str, ...]] = (
        "investment allocation",
        "asset allocation",
        "allocation as at",
        "current allocation",
        "australian equities",
        "international equities",
        "fixed interest",
        "listed property",
        "cash",
    )

    PERFORMANCE: Final[tuple[str, ...]] = (
        "investment movement",
        "movement and returns",
        "time weighted",
        "time weighted return",
        "twr",
        "opening balance",
        "closing balance",
        "net return",
    )

    MIN_MATCH_COUNT: Final[int] = 1
    """Fingerprints that must match before a type is eligible at all."""


# Asset classes

class AssetClasses:
    """Asset-class taxonomy for allocation parsing and classification."""

    ALLOCATION_COLUMNS: Final[tuple[str, ...]] = (
        "Australian Equities",
        "Australian Fixed Interest",
        "Cash",
        "International Equities",
        "Listed Property",
        "Other",
        "Unknown",
    )
    """Column order of the CLASS Super "Investment Allocation" TOTAL row.

    Dollar and percent tokens on the TOTAL row are mapped onto these names
    by position. A layout change breaks this mapping silently; the
    header-based column strategy in parsers/asset_allocation.py exists for
    that case.

    Used by: parsers/asset_allocation.py
    """

    GROWTH: Final[frozenset[str]] = frozenset({
        "Australian Equities",
        "International Equities",
        "Listed Property",
        "Direct Property",
    })
    """Asset classes counted as growth assets (equities and property)."""

    DEFENSIVE: Final[frozenset[str]] = frozenset({
        "Australian Fixed Interest",
        "International Fixed Interest",
        "Cash",
        "Foreign Cash",
        "Mortgages",
    })
    """Asset classes counted as defensive assets (fixed interest and cash)."""

    HEADER_MATCH_SCORE: Final[float] = 90.0
    """Minimum rapidfuzz partial-alignment score for a header column label.

    Lower values start matching "Cash" inside unrelated words.

    Used by: parsers/asset_allocation.py header column strategy
    """


# Classification and performance thresholds

class ClassificationThresholds:
    """Growth-asset percentage bands.

    - Defensive: growth < DEFENSIVE_MAX
    - Growth: growth > GROWTH_MIN
    - Balanced: everything in between, both boundaries inclusive
    """

    DEFENSIVE_MAX: Final[float] = 30.0
    GROWTH_MIN: Final[float] = 70.0


class PerformanceThresholds:
    """Benchmark-difference (percentage points) and absolute-return bands."""

    STRONG_OUTPERFORMANCE: Final[float] = 2.0
    SLIGHT_OUTPERFORMANCE: Final[float] = 0.5
    SLIGHT_UNDERPERFORMANCE: Final[float] = -0.5
    STRONG_UNDERPERFORMANCE: Final[float] = -2.0

    EXCELLENT_RETURN: Final[float] = 15.0
    GOOD_RETURN: Final[float] = 8.0
    MODERATE_RETURN: Final[float] = 4.0
    POOR_RETURN: Final[float] = 0.0


class ScoringConfig:
    """Performance score heuristic (0-100, informational only).

    score = BASE + clamp(one_year_difference * DIFFERENCE_WEIGHT, -CAP, CAP)
            + absolute return band bonus

    Used by: engines/analysis.py:calculate_performance_score()
    """

    BASE: Final[float] = 50.0
    DIFFERENCE_WEIGHT: Final[float] = 5.0
    DIFFERENCE_CAP: Final[float] = 25.0

    EXCELLENT_BONUS: Final[float] = 15.0
    GOOD_BONUS: Final[float] = 10.0
    MODERATE_BONUS: Final[float] = 5.0
    NEGATIVE_PENALTY: Final[float] = -10.0

    MIN_SCORE: Final[float] = 0.0
    MAX_SCORE: Final[float] = 100.0


class InsightConfig:
    """Insight generation parameters."""

    TOP_HOLDINGS: Final[int] = 5
    """Number of largest holdings summed for the concentration check."""

    CONCENTRATION_PERCENT: Final[float] = 40.0
    """Top holdings share of total value above which concentration is flagged."""

    PARTIAL_ANALYSIS_MESSAGE: Final[str] = (
        "Upload both reports for complete analysis. "
        "Cannot classify fund without asset allocation data."
    )

    EMPTY_MODEL_MESSAGE: Final[str] = (
        "No reports uploaded. Please upload asset allocation and/or performance reports."
    )


class ValidationConfig:
    """Tolerances for report sanity checks."""

    MOVEMENT_TOLERANCE: Final[float] = 1.0
    """Allowed dollar gap between (ending - starting) and the printed movement."""


class DocumentLimits:
    """Limits applied to PDF text before parsing."""

    MIN_TEXT_LENGTH: Final[int] = 100
    """Below this many characters a PDF is treated as image-based or corrupt.

    Used by: engines/session.py:FundSession.ingest()
    """

    LINE_Y_TOLERANCE: Final[float] = 5.0
    """Max vertical distance (points) between words on the same text line.

    Used by: core/pdf_reader.py:group_words_into_lines()
    """


# Regex patterns

class RegexPatterns:
    """Regex patterns shared by the report extractors."""

    DOLLAR_TOKEN: Final[str] = r"\$?[0-9,]+\.\d{2}(?!\d*%)"
    """Dollar amount on the allocation TOTAL row, e.g. "$1,234.56". Never the number of a "40.00%" token."""

    PERCENT_TOKEN: Final[str] = r"\d+\.?\d*%"
    """Percentage on the allocation TOTAL row, e.g. "40.00%"."""

    TRAILING_AMOUNT: Final[str] = r"([0-9,]+\.[0-9]{2}|\([0-9,]+\.[0-9]{2}\))\s*$"
    """Currency value anchored at end of line; parentheses mean negative."""

    TWR_TOKEN: Final[str] = r"(-?\d+\.?\d*%|-)"
    """TWR cell: a percentage or a lone dash for "no value"."""

    AS_AT_DATE: Final[tuple[str, ...]] = (
        r"as\s+at\s+(\d{1,2}\s+\w+\s+\d{4})",
        r"as\s+at\s+(\d{1,2}/\d{1,2}/\d{4})",
    )
    """Allocation report date, month-name form tried first."""

    PERIOD: Final[tuple[str, ...]] = (
        r"for\s+the\s+period\s+from\s+(\d{1,2}\s+\w+\s+\d{4})\s+to\s+(\d{1,2}\s+\w+\s+\d{4})",
        r"period\s+from\s+(\d{1,2}/\d{1,2}/\d{4})\s+to\s+(\d{1,2}/\d{1,2}/\d{4})",
    )
    """Performance report period, month-name form tried first."""

    SINCE_DATE: Final[str] = r"since\s+(\d{2}/\d{2}/\d{4})"
    """"Since DD/MM/YYYY" column label in the TWR header row."""


# Benchmarks

BENCHMARK_DATA: Final[dict[str, dict]] = {
    "defensive": {
        "name": "Conservative Benchmark",
        "description": "Weighted average of defensive asset indices",
        "composition": "70% Fixed Interest, 20% Cash, 10% Equities",
        "returns": {
            "one_year": 5.5,
            "three_years": 4.2,
            "five_years": 3.8,
            "since_inception": 4.0,
        },
        "risk_level": "Low",
        "volatility": 3.5,
    },
    "balanced": {
        "name": "Balanced Benchmark",
        "description": "Diversified multi-asset benchmark",
        "composition": "50% Equities, 30% Fixed Interest, 15% Property, 5% Cash",
        "returns": {
            "one_year": 8.5,
            "three_years": 6.8,
            "five_years": 7.2,
            "since_inception": 7.0,
        },
        "risk_level": "Medium",
        "volatility": 8.5,
    },
    "growth": {
        "name": "Growth Benchmark",
        "description": "High equity exposure benchmark",
        "composition": "80% Equities, 10% Property, 10% Other",
        "returns": {
            "one_year": 11.5,
            "three_years": 9.2,
            "five_years": 10.5,
            "since_inception": 9.8,
        },
        "risk_level": "High",
        "volatility": 14.0,
    },
}
"""Hypothetical benchmark returns per classification tier.

Volatility is an annualised standard deviation in percent. These would come
from index data in production; here they are fixed reference figures.

Used by: engines/analysis.py:AnalysisConfig
"""

DEFAULT_BENCHMARK: Final[str] = "balanced"
"""Benchmark used for "unknown" or unrecognized classifications."""
