"""Fund model builder.

Normalizes parsed reports into one FundModel and keeps its derived fields
(classification, benchmark, comparison, score, insights) in sync.

Inputs may be the parser's pydantic models or raw mappings from older
exports, whose keys vary ("startingMarketValue", "starting_value",
TWR "1year", period "startDate", ...). Every builder goes through the same
normalization and the same _assemble() step, so uploading allocation then
performance gives the same model as creating it with both reports at once
(apart from fund_id and last_updated).
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Mapping

from pydantic import BaseModel

from fund_insights.core.config import InsightConfig, ReportTypes
from fund_insights.engines.analysis import analyze_fund
from fund_insights.pydantic_models.analysis import Classification
from fund_insights.pydantic_models.fund import (
    FundAllocation,
    FundModel,
    FundPerformance,
    FundPeriod,
    FundSummary,
    FundValidation,
)
from fund_insights.pydantic_models.reports import AssetClass, Holding, SinceDateReturn, TwrReturns

logger = logging.getLogger(__name__)

ReportInput = BaseModel | Mapping[str, Any]


# =============================================================================
# Key normalization
# =============================================================================

def _as_dict(data: ReportInput | None) -> dict[str, Any] | None:
    if data is None:
        return None
    if isinstance(data, BaseModel):
        return data.model_dump()
    return dict(data)


def _pick(data: Mapping[str, Any] | None, *keys: str) -> Any:
    """First non-None value among the given key spellings."""
    if not data:
        return None
    for key in keys:
        value = data.get(key)
        if value is not None:
            return value
    return None


def _float(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def normalize_asset_classes(asset_classes: Any, total_value: float | None) -> list[AssetClass]:
    """Give every asset class a value and a percent.

    A missing value becomes 0; a missing percent is derived from the total
    when the total is positive, otherwise 0.
    """
    if not asset_classes:
        return []

    normalized = []
    for raw in asset_classes:
        item = _as_dict(raw) or {}
        value = _float(item.get("value")) or 0.0
        percent = _float(item.get("percent"))
        if percent is None and total_value and total_value > 0:
            percent = value / total_value * 100
        normalized.append(AssetClass(
            name=item.get("name") or "Unknown",
            value=value,
            percent=percent if percent is not None else 0.0,
            source=item.get("source") or "parsed",
        ))
    return normalized


def normalize_holdings(holdings: Any) -> list[Holding]:
    if not holdings:
        return []

    normalized = []
    for raw in holdings:
        item = _as_dict(raw) or {}
        normalized.append(Holding(
            name=item.get("name") or "Unknown",
            value=_float(item.get("value")),
            asset_class=_pick(item, "asset_class", "assetClass"),
            percent=_float(item.get("percent")),
        ))
    return normalized


def normalize_allocation(data: ReportInput | None) -> FundAllocation | None:
    raw = _as_dict(data)
    if raw is None:
        return None

    total_value = _float(_pick(raw, "total_value", "totalValue"))
    holdings = normalize_holdings(raw.get("holdings"))
    holdings_count = _pick(raw, "holdings_count", "holdingsCount") or len(holdings)

    return FundAllocation(
        as_at_date=_pick(raw, "as_at_date", "asAtDate"),
        total_value=total_value,
        asset_classes=normalize_asset_classes(
            _pick(raw, "asset_classes", "assetClasses"), total_value
        ),
        holdings=holdings,
        holdings_count=int(holdings_count),
    )


def normalize_period(period: Any) -> FundPeriod:
    raw = _as_dict(period)
    if not raw:
        return FundPeriod()
    return FundPeriod(
        start=_pick(raw, "start", "start_date", "startDate", "from_date", "fromDate", "from"),
        end=_pick(raw, "end", "end_date", "endDate", "to_date", "toDate", "to"),
    )


def normalize_twr(twr: Any) -> TwrReturns | None:
    raw = _as_dict(twr)
    if raw is None:
        return None

    since_dates = []
    for entry in _pick(raw, "since_dates", "sinceDates") or []:
        entry = _as_dict(entry)
        raw_date = _pick(entry, "raw_date", "rawDate", "date")
        # Entries without any date label are dropped
        if raw_date is None:
            continue
        since_dates.append(SinceDateReturn(
            date=_pick(entry, "date"),
            raw_date=str(raw_date),
            value=_float(_pick(entry, "value")),
        ))

    return TwrReturns(
        one_year=_float(_pick(raw, "one_year", "oneYear", "1year", "1Year")),
        three_years=_float(_pick(raw, "three_years", "threeYears", "3years", "3Years")),
        five_years=_float(_pick(raw, "five_years", "fiveYears", "5years", "5Years")),
        since_start=_float(_pick(
            raw, "since_start", "sinceStart", "since_inception", "sinceInception", "inception"
        )),
        since_period_start=_float(_pick(raw, "since_period_start", "sincePeriodStart")),
        since_dates=since_dates,
    )


def normalize_performance(data: ReportInput | None) -> FundPerformance | None:
    raw = _as_dict(data)
    if raw is None:
        return None

    return FundPerformance(
        period=normalize_period(raw.get("period")),
        starting_value=_float(_pick(
            raw, "starting_market_value", "startingMarketValue", "starting_value", "startingValue"
        )),
        ending_value=_float(_pick(
            raw, "ending_market_value", "endingMarketValue", "ending_value", "endingValue"
        )),
        movement_in_value=_float(_pick(raw, "movement_in_value", "movementInValue")),
        dollar_return=_float(_pick(
            raw,
            "dollar_return_after_expenses",
            "dollarReturnAfterExpenses",
            "dollar_return",
            "dollarReturn",
        )),
        dollar_return_before_expenses=_float(_pick(
            raw, "dollar_return_before_expenses", "dollarReturnBeforeExpenses"
        )),
        investment_expenses=_float(_pick(raw, "investment_expenses", "investmentExpenses")),
        twr=normalize_twr(raw.get("twr")),
    )


# =============================================================================
# Builders
# =============================================================================

def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _assemble(
    fund_id: str,
    allocation: FundAllocation | None,
    performance: FundPerformance | None,
) -> FundModel:
    """Run the analysis on normalized slots and build a fresh snapshot."""
    analysis = analyze_fund(allocation, performance)

    return FundModel(
        fund_id=fund_id,
        last_updated=_timestamp(),
        asset_allocation=allocation,
        performance=performance,
        classification=analysis.classification,
        benchmark=analysis.benchmark,
        benchmark_comparison=analysis.benchmark_comparison,
        performance_score=analysis.performance_score,
        derived_insights=analysis.insights,
        analysis_status=analysis.status,
        analysis_message=analysis.message,
    )


def create_fund_model(
    fund_id: str,
    asset_allocation: ReportInput | None = None,
    performance: ReportInput | None = None,
) -> FundModel:
    """Build a fund model from zero, one or both reports."""
    return _assemble(
        fund_id,
        normalize_allocation(asset_allocation),
        normalize_performance(performance),
    )


def update_fund_model(existing: FundModel, report_type: str, data: ReportInput) -> FundModel:
    """Replace one report slot and recompute every derived field.

    The existing model is not modified; a new snapshot is returned.

    Raises:
        ValueError: report_type is not a supported report type.
    """
    allocation = existing.asset_allocation
    performance = existing.performance

    if report_type == ReportTypes.ASSET_ALLOCATION:
        allocation = normalize_allocation(data)
    elif report_type == ReportTypes.PERFORMANCE:
        performance = normalize_performance(data)
    else:
        raise ValueError(f"Unsupported report type: {report_type}")

    logger.debug(f"Updating fund {existing.fund_id} with {report_type} report")
    return _assemble(existing.fund_id, allocation, performance)


def clear_fund_report(existing: FundModel, report_type: str) -> FundModel:
    """Drop one report slot and re-analyse what is left.

    Clearing the last remaining slot gives an empty model with the same id.

    Raises:
        ValueError: report_type is not a supported report type.
    """
    allocation = existing.asset_allocation
    performance = existing.performance

    if report_type == ReportTypes.ASSET_ALLOCATION:
        allocation = None
    elif report_type == ReportTypes.PERFORMANCE:
        performance = None
    else:
        raise ValueError(f"Unsupported report type: {report_type}")

    if allocation is None and performance is None:
        return create_empty_fund_model(existing.fund_id)
    return _assemble(existing.fund_id, allocation, performance)


def create_empty_fund_model(fund_id: str | None = None) -> FundModel:
    """Initial state before any report is uploaded."""
    now = _timestamp()
    return FundModel(
        fund_id=fund_id or f"FUND-{_epoch_ms()}-empty",
        last_updated=now,
        classification=Classification.unknown(),
        analysis_status="empty",
        analysis_message=InsightConfig.EMPTY_MODEL_MESSAGE,
    )


# =============================================================================
# Validation and summary
# =============================================================================

def validate_fund_model(fund: FundModel) -> FundValidation:
    """Check a fund model for the data a dashboard needs."""
    errors: list[str] = []
    warnings: list[str] = []

    allocation = fund.asset_allocation
    performance = fund.performance

    if allocation is None and performance is None:
        errors.append("Fund must have at least one report type parsed")

    if fund.classification.classification == "unknown":
        if allocation is None:
            warnings.append("Cannot classify fund without asset allocation data")
        else:
            warnings.append("Fund classification could not be determined")

    if performance is not None and fund.benchmark_comparison is None:
        warnings.append("Benchmark comparison not available")

    if allocation is not None:
        if not allocation.total_value or allocation.total_value <= 0:
            warnings.append("Total portfolio value is missing or zero")
        if not allocation.asset_classes:
            warnings.append("Asset class breakdown is missing")

    if performance is not None:
        if performance.dollar_return is None:
            warnings.append("Dollar return figure is missing")
        if performance.twr is None or performance.twr.one_year is None:
            warnings.append("1-year TWR is missing")

    return FundValidation(
        valid=not errors,
        errors=errors,
        warnings=warnings,
        has_asset_allocation=allocation is not None,
        has_performance=performance is not None,
        is_complete=allocation is not None and performance is not None,
    )


def get_fund_summary(fund: FundModel) -> FundSummary:
    """Flatten the key figures. Total value prefers the allocation report."""
    allocation = fund.asset_allocation
    performance = fund.performance
    twr = performance.twr if performance is not None else None
    comparison = fund.benchmark_comparison

    total_value = (allocation.total_value if allocation is not None else None) or (
        performance.ending_value if performance is not None else None
    )

    return FundSummary(
        total_value=total_value or None,
        classification=fund.classification.classification,
        growth_percent=fund.classification.growth_percent,
        defensive_percent=fund.classification.defensive_percent,
        one_year_return=twr.one_year if twr is not None else None,
        dollar_return=performance.dollar_return if performance is not None else None,
        performance_score=fund.performance_score,
        benchmark_name=fund.benchmark.name if fund.benchmark is not None else None,
        one_year_vs_benchmark=(
            comparison.one_year.difference
            if comparison is not None and comparison.one_year is not None
            else None
        ),
        holdings_count=allocation.holdings_count if allocation is not None else 0,
        asset_class_count=len(allocation.asset_classes) if allocation is not None else 0,
        has_asset_allocation=allocation is not None,
        has_performance=performance is not None,
        has_all_data=allocation is not None and performance is not None,
        as_at_date=allocation.as_at_date if allocation is not None else None,
        period_start=performance.period.start if performance is not None else None,
        period_end=performance.period.end if performance is not None else None,
    )


# =============================================================================
# Fund ids
# =============================================================================

def _epoch_ms() -> int:
    return int(datetime.now(timezone.utc).timestamp() * 1000)


def _json_default(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    return str(value)


def content_hash(text: str) -> str:
    """32-bit shift-and-add string hash, as up to 8 hex chars of its magnitude."""
    h = 0
    for char in text:
        h = ((h << 5) - h + ord(char)) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return format(abs(h), "x")[:8]


def generate_fund_id(reports: Any) -> str:
    """FUND-<epoch ms>-<content hash of the serialized reports>."""
    serialized = json.dumps(reports, sort_keys=True, default=_json_default)
    return f"FUND-{_epoch_ms()}-{content_hash(serialized)}"
