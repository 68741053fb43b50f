"""Performance report parser.

Parses CLASS Super "Investment Movement and Returns" reports.

Extracts:
- Period dates (from/to)
- "Movement in Value" section figures
- "Portfolio Return" section dollar returns
- TWR (time-weighted return) percentages

Assumptions:
1. Section headers are consistent ("Movement in Value", "Portfolio Return")
2. A figure sits at the end of the same line as its label
3. Dates are "D Month YYYY" or DD/MM/YYYY
4. Negative amounts are parenthesized: (123.45) = -123.45
"""

import logging
import re
from typing import Callable, Literal

from fund_insights.core.config import RegexPatterns, ValidationConfig
from fund_insights.core.value_parsers import parse_currency, parse_date, parse_percentage
from fund_insights.pydantic_models.document import ExtractedDocument
from fund_insights.pydantic_models.reports import (
    MovementInValue,
    PerformanceDetails,
    PerformanceReport,
    PortfolioReturn,
    ReportPeriod,
    ReportValidation,
    SinceDateReturn,
    TwrReturns,
)

logger = logging.getLogger(__name__)

LabelMatch = Literal["first", "last"]

_PERIOD_PATTERNS = [re.compile(p, re.IGNORECASE) for p in RegexPatterns.PERIOD]
_TRAILING_AMOUNT = re.compile(RegexPatterns.TRAILING_AMOUNT)
_TWR_TOKEN = re.compile(RegexPatterns.TWR_TOKEN)
_SINCE_DATE = re.compile(RegexPatterns.SINCE_DATE, re.IGNORECASE)

# (field, predicate on the lower-cased line). Order matters: the first
# predicate that accepts a line claims it.
LabelRule = tuple[str, Callable[[str], bool]]

MOVEMENT_LABELS: list[LabelRule] = [
    ("starting_market_value", lambda s: "starting market value" in s),
    ("net_addition", lambda s: "net addition" in s or "net withdrawal" in s),
    ("realised_gains_losses", lambda s: "realised" in s and "gains" in s),
    ("investment_income", lambda s: "investment income" in s),
    ("other", lambda s: "other" in s),
    ("ending_market_value", lambda s: "ending market value" in s),
    ("movement_in_value", lambda s: re.match(r"movement\s+in\s+value", s.strip()) is not None),
]

PORTFOLIO_RETURN_LABELS: list[LabelRule] = [
    ("realised_gains_losses", lambda s: "realised" in s and "gains" in s),
    ("investment_income", lambda s: "investment income" in s),
    ("credits", lambda s: "credits" in s and "excluding" not in s),
    ("total_before_expenses", lambda s: "total dollar return before expenses" in s),
    ("expenses", lambda s: "investment expenses" in s),
    ("total_after_expenses", lambda s: "total dollar return after expenses" in s),
]


def parse_performance_report(
    document: ExtractedDocument,
    label_match: LabelMatch = "last",
) -> PerformanceReport:
    """Parse a movement-and-returns report.

    Args:
        document: Extracted PDF text.
        label_match: Which line wins when a label repeats inside a section.
            "last" keeps the latest line's figure, "first" the earliest.

    Returns:
        PerformanceReport. Fields whose label was not found are None.
    """
    lines = document.all_lines

    period = extract_period_dates(document.full_text)
    movement = extract_movement_in_value(lines, label_match)
    portfolio_return = extract_portfolio_return(lines, label_match)
    twr = extract_twr_values(lines)

    report = PerformanceReport(
        period=period,
        starting_market_value=movement.starting_market_value,
        ending_market_value=movement.ending_market_value,
        movement_in_value=movement.movement_in_value,
        dollar_return_before_expenses=portfolio_return.total_before_expenses,
        dollar_return_after_expenses=portfolio_return.total_after_expenses,
        investment_expenses=portfolio_return.expenses,
        twr=twr,
        details=PerformanceDetails(
            movement_in_value=movement,
            portfolio_return=portfolio_return,
        ),
    )

    logger.debug(
        f"Parsed performance report: period={period.from_date}..{period.to_date}, "
        f"1y TWR={twr.one_year}, dollar return={report.dollar_return_after_expenses}"
    )
    return report


def extract_period_dates(text: str) -> ReportPeriod:
    """Extract "for the period from X to Y"; month-name form is tried first."""
    for pattern in _PERIOD_PATTERNS:
        match = pattern.search(text or "")
        if match:
            return ReportPeriod(
                from_date=parse_date(match.group(1)),
                to_date=parse_date(match.group(2)),
                raw_from=match.group(1),
                raw_to=match.group(2),
            )

    logger.warning("Could not extract period dates")
    return ReportPeriod()


def section_lines(
    lines: list[str],
    starts: Callable[[str], bool],
    ends: Callable[[str], bool],
) -> list[str]:
    """Lines strictly between the first start marker and the next end marker.

    Both predicates receive the lower-cased line. If no end marker follows,
    the section runs to the end of the document.
    """
    collected: list[str] = []
    in_section = False

    for line in lines:
        lower = line.lower()
        if not in_section:
            if starts(lower):
                in_section = True
            continue
        if ends(lower):
            break
        collected.append(line)

    return collected


def trailing_amount(line: str) -> float | None:
    """Currency figure at the very end of a line, if any."""
    match = _TRAILING_AMOUNT.search(line)
    return parse_currency(match.group(1)) if match else None


def extract_labeled_values(
    lines: list[str],
    labels: list[LabelRule],
    label_match: LabelMatch = "last",
) -> dict[str, float]:
    """Assign each line's trailing figure to the first label it matches.

    Lines without a trailing figure are skipped. A line is only tested
    against labels until one matches.
    """
    found: dict[str, float] = {}

    for line in lines:
        value = trailing_amount(line)
        if value is None:
            continue
        lower = line.lower()
        for field_name, matches in labels:
            if matches(lower):
                if label_match == "last" or field_name not in found:
                    found[field_name] = value
                break

    return found


def extract_movement_in_value(lines: list[str], label_match: LabelMatch = "last") -> MovementInValue:
    """Extract the "Movement in Value" section."""
    section = section_lines(
        lines,
        starts=lambda s: "movement in value" in s and "portfolio" not in s,
        ends=lambda s: "portfolio value versus" in s or "portfolio return" in s,
    )
    if not section:
        logger.warning("Movement in Value section not found")
    return MovementInValue(**extract_labeled_values(section, MOVEMENT_LABELS, label_match))


def extract_portfolio_return(lines: list[str], label_match: LabelMatch = "last") -> PortfolioReturn:
    """Extract the "Portfolio Return" section."""
    section = section_lines(
        lines,
        starts=lambda s: "portfolio return" in s and "investment return" not in s,
        ends=lambda s: (
            "return over time" in s
            or "1 year" in s
            or "investment return before expenses" in s
        ),
    )
    if not section:
        logger.warning("Portfolio Return section not found")
    return PortfolioReturn(**extract_labeled_values(section, PORTFOLIO_RETURN_LABELS, label_match))


def extract_twr_values(lines: list[str]) -> TwrReturns:
    """Extract TWR percentages from the "Investment return before expenses (TWR)" row.

    Row tokens are read left to right: 1 year, 3 years, since start, since
    period start. A "-" cell is kept as a placeholder with no value, so
    "12.95% - 33.82%" gives three_years=None and since_start=33.82.
    """
    header_line: str | None = None
    twr_line: str | None = None

    for line in lines:
        lower = line.lower()
        if "1 year" in lower or "3 year" in lower:
            header_line = line
            continue
        if "investment return before expenses" in lower and "twr" in lower:
            twr_line = line
            break

    if twr_line is None:
        logger.warning("Could not find TWR row")
        return TwrReturns()

    tokens = _TWR_TOKEN.findall(twr_line)
    values = [parse_percentage(token) for token in tokens]

    def at(index: int) -> float | None:
        return values[index] if index < len(values) else None

    since_dates: list[SinceDateReturn] = []
    if header_line:
        # "Since" columns follow the 1 year and 3 year columns
        for index, match in enumerate(_SINCE_DATE.finditer(header_line), start=2):
            if index < len(tokens):
                since_dates.append(SinceDateReturn(
                    date=parse_date(match.group(1)),
                    raw_date=match.group(1),
                    value=values[index],
                ))

    return TwrReturns(
        one_year=at(0),
        three_years=at(1),
        since_start=at(2),
        since_period_start=at(3),
        since_dates=since_dates,
    )


def validate_performance_report(report: PerformanceReport) -> ReportValidation:
    """Check a parsed performance report for missing and inconsistent figures.

    Errors: period bounds or after-expenses dollar return missing.
    Warnings: starting/ending value or 1-year TWR missing; printed movement
    differs from (ending - starting) by more than the dollar tolerance.
    The extracted figures are never corrected.
    """
    errors: list[str] = []
    warnings: list[str] = []

    if not report.period.from_date or not report.period.to_date:
        errors.append("Could not extract report period dates")

    if report.dollar_return_after_expenses is None:
        errors.append("Could not extract total dollar return after expenses")

    if report.starting_market_value is None:
        warnings.append("Starting market value not found")

    if report.ending_market_value is None:
        warnings.append("Ending market value not found")

    if report.twr.one_year is None:
        warnings.append("1-year TWR not found")

    if (
        report.starting_market_value is not None
        and report.ending_market_value is not None
        and report.movement_in_value is not None
    ):
        expected = report.ending_market_value - report.starting_market_value
        actual = report.movement_in_value
        if abs(expected - actual) > ValidationConfig.MOVEMENT_TOLERANCE:
            warnings.append(
                f"Movement in value ({actual}) doesn't match start/end difference ({expected:.2f})"
            )

    return ReportValidation(valid=not errors, errors=errors, warnings=warnings)
