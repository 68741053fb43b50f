"""Asset allocation report parser (TOTAL row based).

Parses CLASS Super "Investment Allocation" reports. The source of truth is
the TOTAL row at the bottom of the allocation table, not the holding rows:

    TOTAL $400,000.00 40.00% $200,000.00 20.00% ... $1,000,000.00 100.00%

Dollar and percent tokens are paired with asset-class columns by position.
That pairing assumes the report prints its columns in the fixed order of
AssetClasses.ALLOCATION_COLUMNS. When that cannot be assumed, pass
column_strategy="header" to take the column order from the table header.
"""

import logging
import re
from typing import Literal

from rapidfuzz import fuzz

from fund_insights.core.config import AssetClasses, RegexPatterns
from fund_insights.core.value_parsers import parse_currency, parse_date, parse_percentage
from fund_insights.pydantic_models.document import ExtractedDocument
from fund_insights.pydantic_models.reports import AssetAllocationReport, AssetClass

logger = logging.getLogger(__name__)

ColumnStrategy = Literal["positional", "header"]

_DOLLAR_TOKEN = re.compile(RegexPatterns.DOLLAR_TOKEN)
_PERCENT_TOKEN = re.compile(RegexPatterns.PERCENT_TOKEN)
_AS_AT_PATTERNS = [re.compile(p, re.IGNORECASE) for p in RegexPatterns.AS_AT_DATE]


def parse_asset_allocation_report(
    document: ExtractedDocument,
    column_strategy: ColumnStrategy = "positional",
) -> AssetAllocationReport:
    """Parse an allocation report into per-asset-class totals.

    Args:
        document: Extracted PDF text.
        column_strategy: "positional" maps TOTAL row tokens onto the fixed
            column order; "header" reads the order from the table header and
            falls back to the fixed order when no header is recognized.

    Returns:
        AssetAllocationReport. Without a TOTAL row, total_value is None and
        asset_classes is empty; this is a degraded result, not an error.
    """
    as_at_date = extract_report_date(document.full_text)

    located = find_total_row(document)
    if located is None:
        logger.warning("TOTAL row not found in allocation report")
        return AssetAllocationReport(as_at_date=as_at_date)

    total_row, preceding_lines = located

    columns = list(AssetClasses.ALLOCATION_COLUMNS)
    if column_strategy == "header":
        header_columns = detect_header_columns(preceding_lines)
        if header_columns:
            columns = header_columns
        else:
            logger.debug("No allocation header recognized, using fixed column order")

    asset_classes = parse_total_row(total_row, columns)
    total_value = sum(ac.value or 0.0 for ac in asset_classes)

    logger.debug(f"Parsed {len(asset_classes)} asset classes, total {total_value:.2f}")

    return AssetAllocationReport(
        as_at_date=as_at_date,
        total_value=total_value,
        asset_classes=asset_classes,
        holdings=[],
        holdings_count=0,
    )


def find_total_row(document: ExtractedDocument) -> tuple[str, list[str]] | None:
    """Find the first line, across all pages, that starts with "total".

    Returns:
        (total_row, lines_before_it) or None.
    """
    seen: list[str] = []
    for page in document.pages:
        for line in page.lines:
            if line.strip().lower().startswith("total"):
                return line, seen
            seen.append(line)
    return None


def parse_total_row(line: str, columns: list[str]) -> list[AssetClass]:
    """Pair the i-th dollar token and i-th percent token with the i-th column.

    A column is emitted only if it has a value or a percent. Tokens beyond
    the last column (such as the printed grand total) are ignored.
    """
    values = _DOLLAR_TOKEN.findall(line)
    percents = _PERCENT_TOKEN.findall(line)

    asset_classes = []
    for i, name in enumerate(columns):
        value = parse_currency(values[i]) if i < len(values) else None
        percent = parse_percentage(percents[i]) if i < len(percents) else None

        if value is not None or percent is not None:
            asset_classes.append(AssetClass(
                name=name,
                value=value,
                percent=percent,
                source="total_row",
            ))

    return asset_classes


def detect_header_columns(
    lines: list[str],
    min_score: float = AssetClasses.HEADER_MATCH_SCORE,
) -> list[str] | None:
    """Read the asset-class column order from the nearest header line.

    Scans upwards from the TOTAL row for a line naming at least two known
    columns, locates each name with a fuzzy partial alignment (tolerates
    broken spacing like "Australian  Equities") and orders them by position.

    Returns:
        Column names in header order, or None if no header line qualifies.
    """
    for line in reversed(lines):
        text = " ".join(line.lower().split())
        if not text:
            continue

        positions: list[tuple[int, str]] = []
        for name in AssetClasses.ALLOCATION_COLUMNS:
            alignment = fuzz.partial_ratio_alignment(name.lower(), text, score_cutoff=min_score)
            if alignment is not None and alignment.score >= min_score:
                positions.append((alignment.dest_start, name))

        if len(positions) >= 2:
            positions.sort()
            return [name for _, name in positions]

    return None


def extract_report_date(text: str) -> str | None:
    """Extract the "as at" date, month-name form first, then DD/MM/YYYY."""
    for pattern in _AS_AT_PATTERNS:
        match = pattern.search(text or "")
        if match:
            return parse_date(match.group(1))
    return None
