"""Fund analysis engine.

Turns an (optional) allocation and an (optional) performance report into:
- Risk classification (value-weighted growth/defensive split)
- Benchmark comparison per horizon
- A 0-100 performance score (informational heuristic)
- Ordered, human-readable insights

Every threshold, asset-class set and benchmark comes from an AnalysisConfig
passed to FundAnalysisEngine. The module-level functions use the default
configuration built from core/config.py.
"""

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping

from fund_insights.core.config import (
    BENCHMARK_DATA,
    DEFAULT_BENCHMARK,
    AssetClasses,
    ClassificationThresholds,
    InsightConfig,
    PerformanceThresholds,
    ScoringConfig,
)
from fund_insights.core.value_parsers import round_half_up
from fund_insights.pydantic_models.analysis import (
    Benchmark,
    BenchmarkComparison,
    BenchmarkSummary,
    Classification,
    FundAnalysis,
    HorizonComparison,
    Insight,
    PerformanceStatus,
)
from fund_insights.pydantic_models.fund import FundAllocation, FundPerformance
from fund_insights.pydantic_models.reports import (
    AssetAllocationReport,
    AssetClass,
    Holding,
    PerformanceReport,
    TwrReturns,
)

logger = logging.getLogger(__name__)

AllocationInput = AssetAllocationReport | FundAllocation
PerformanceInput = PerformanceReport | FundPerformance


def _default_benchmarks() -> Mapping[str, Benchmark]:
    return MappingProxyType({
        key: Benchmark.model_validate(data) for key, data in BENCHMARK_DATA.items()
    })


@dataclass(frozen=True)
class AnalysisConfig:
    """Immutable decision tables for the analysis engine."""

    growth_asset_classes: frozenset[str] = AssetClasses.GROWTH
    defensive_asset_classes: frozenset[str] = AssetClasses.DEFENSIVE

    defensive_max: float = ClassificationThresholds.DEFENSIVE_MAX
    growth_min: float = ClassificationThresholds.GROWTH_MIN

    strong_outperformance: float = PerformanceThresholds.STRONG_OUTPERFORMANCE
    slight_outperformance: float = PerformanceThresholds.SLIGHT_OUTPERFORMANCE
    slight_underperformance: float = PerformanceThresholds.SLIGHT_UNDERPERFORMANCE
    strong_underperformance: float = PerformanceThresholds.STRONG_UNDERPERFORMANCE

    excellent_return: float = PerformanceThresholds.EXCELLENT_RETURN
    good_return: float = PerformanceThresholds.GOOD_RETURN
    moderate_return: float = PerformanceThresholds.MODERATE_RETURN
    poor_return: float = PerformanceThresholds.POOR_RETURN

    score_base: float = ScoringConfig.BASE
    score_difference_weight: float = ScoringConfig.DIFFERENCE_WEIGHT
    score_difference_cap: float = ScoringConfig.DIFFERENCE_CAP
    excellent_bonus: float = ScoringConfig.EXCELLENT_BONUS
    good_bonus: float = ScoringConfig.GOOD_BONUS
    moderate_bonus: float = ScoringConfig.MODERATE_BONUS
    negative_penalty: float = ScoringConfig.NEGATIVE_PENALTY
    min_score: float = ScoringConfig.MIN_SCORE
    max_score: float = ScoringConfig.MAX_SCORE

    top_holdings: int = InsightConfig.TOP_HOLDINGS
    concentration_percent: float = InsightConfig.CONCENTRATION_PERCENT

    benchmarks: Mapping[str, Benchmark] = field(default_factory=_default_benchmarks)
    default_benchmark: str = DEFAULT_BENCHMARK
    partial_message: str = InsightConfig.PARTIAL_ANALYSIS_MESSAGE


def _number(value: float | None) -> float:
    return value if value is not None else 0.0


def _clamp(value: float, low: float, high: float) -> float:
    return min(max(value, low), high)


def _has_allocation(allocation: AllocationInput | None) -> bool:
    return allocation is not None and len(allocation.asset_classes) > 0


def _has_performance(performance: PerformanceInput | None) -> bool:
    return performance is not None and performance.twr is not None


class FundAnalysisEngine:
    """Stateless analysis over an injected AnalysisConfig."""

    def __init__(self, config: AnalysisConfig | None = None):
        self.config = config or AnalysisConfig()

    # Classification

    def classify_fund(self, asset_classes: Iterable[AssetClass] | None) -> Classification:
        """Classify by the value share of growth assets.

        - growth < defensive_max  -> "defensive"
        - growth > growth_min     -> "growth"
        - otherwise (bounds included) -> "balanced"

        An empty list or a non-positive total gives "unknown" with all
        percentages 0; it is never coerced to "balanced".
        """
        classes = list(asset_classes or [])
        if not classes:
            return Classification.unknown()

        total = sum(_number(ac.value) for ac in classes)
        if total <= 0:
            return Classification.unknown()

        growth_value = sum(
            _number(ac.value) for ac in classes if ac.name in self.config.growth_asset_classes
        )
        defensive_value = sum(
            _number(ac.value) for ac in classes if ac.name in self.config.defensive_asset_classes
        )

        growth_percent = growth_value / total * 100
        defensive_percent = defensive_value / total * 100
        other_percent = max(0.0, 100 - growth_percent - defensive_percent)

        if growth_percent < self.config.defensive_max:
            tag = "defensive"
        elif growth_percent > self.config.growth_min:
            tag = "growth"
        else:
            tag = "balanced"

        return Classification(
            classification=tag,
            growth_percent=round_half_up(growth_percent, 1),
            defensive_percent=round_half_up(defensive_percent, 1),
            other_percent=round_half_up(other_percent, 1),
        )

    # Benchmarks

    def get_benchmark(self, classification: str | None) -> Benchmark:
        """Benchmark for a tier; "unknown" and unrecognized tags get the default tier."""
        benchmarks = self.config.benchmarks
        if classification in benchmarks:
            return benchmarks[classification]
        return benchmarks[self.config.default_benchmark]

    def performance_status(self, difference: float) -> PerformanceStatus:
        if difference >= self.config.strong_outperformance:
            return "strong_outperformance"
        if difference >= self.config.slight_outperformance:
            return "slight_outperformance"
        if difference >= self.config.slight_underperformance:
            return "inline"
        if difference >= self.config.strong_underperformance:
            return "slight_underperformance"
        return "strong_underperformance"

    def _compare(self, fund_return: float | None, benchmark_return: float | None) -> HorizonComparison | None:
        if fund_return is None or benchmark_return is None:
            return None
        difference = fund_return - benchmark_return
        return HorizonComparison(
            fund_return=fund_return,
            benchmark_return=benchmark_return,
            difference=difference,
            status=self.performance_status(difference),
        )

    def compare_to_benchmark(self, fund_twr: TwrReturns | None, benchmark: Benchmark | None) -> BenchmarkComparison:
        """Compare fund TWRs to benchmark returns.

        The fund's since_start TWR stands in for "since inception". A horizon
        is None when either side is missing; no difference is ever computed
        against a missing operand.
        """
        if fund_twr is None or benchmark is None:
            return BenchmarkComparison()

        returns = benchmark.returns
        return BenchmarkComparison(
            one_year=self._compare(fund_twr.one_year, returns.one_year),
            three_years=self._compare(fund_twr.three_years, returns.three_years),
            since_inception=self._compare(fund_twr.since_start, returns.since_inception),
        )

    # Scoring

    def calculate_performance_score(
        self,
        performance: PerformanceInput | None,
        comparison: BenchmarkComparison | None,
    ) -> int | None:
        """Score 0-100: base, plus weighted 1-year benchmark gap, plus return band.

        Example: +3.0pp vs benchmark and a 20% 1-year TWR gives
        50 + min(15, 25) + 15 = 80.
        """
        if performance is None or comparison is None:
            return None

        cfg = self.config
        score = cfg.score_base

        if comparison.one_year is not None:
            score += _clamp(
                comparison.one_year.difference * cfg.score_difference_weight,
                -cfg.score_difference_cap,
                cfg.score_difference_cap,
            )

        one_year = performance.twr.one_year if performance.twr is not None else None
        if one_year is not None:
            if one_year >= cfg.excellent_return:
                score += cfg.excellent_bonus
            elif one_year >= cfg.good_return:
                score += cfg.good_bonus
            elif one_year >= cfg.moderate_return:
                score += cfg.moderate_bonus
            elif one_year < cfg.poor_return:
                score += cfg.negative_penalty

        score = round_half_up(score)
        return int(_clamp(score, cfg.min_score, cfg.max_score))

    # Insights

    def generate_insights(
        self,
        allocation: AllocationInput | None,
        performance: PerformanceInput | None,
        classification: Classification,
        comparison: BenchmarkComparison | None,
    ) -> list[Insight]:
        """Insights in fixed priority order; untriggered ones are omitted."""
        insights: list[Insight] = []

        if not _has_allocation(allocation):
            insights.append(Insight(
                type="data",
                title="Asset Allocation Missing",
                description=(
                    "Asset allocation data was not detected. Please upload the Investment "
                    "Allocation report to enable classification and allocation insights."
                ),
                importance="high",
            ))

        if classification.classification != "unknown":
            tag = classification.classification
            insights.append(Insight(
                type="classification",
                title=f"{tag.capitalize()} Investment Profile",
                description=(
                    f"With {classification.growth_percent:.1f}% in growth assets, "
                    f"this fund follows a {tag} strategy."
                ),
                importance="high",
            ))

        if comparison is not None and comparison.one_year is not None:
            insights.append(self._benchmark_insight(comparison.one_year))

        if allocation is not None and allocation.holdings:
            concentration = self._concentration_insight(allocation.holdings, allocation.total_value)
            if concentration is not None:
                insights.append(concentration)

        dollar_return = performance.dollar_return if performance is not None else None
        if dollar_return is not None:
            verb = "gained" if dollar_return > 0 else "lost"
            insights.append(Insight(
                type="return",
                title="Total Dollar Return",
                description=f"The fund {verb} ${abs(dollar_return):,.2f} during the reporting period.",
                importance="high",
            ))

        return insights

    def _benchmark_insight(self, one_year: HorizonComparison) -> Insight:
        status = one_year.status
        gap = abs(one_year.difference)
        if "outperformance" in status:
            description = f"The fund outperformed its benchmark by {gap:.2f}% over the past year."
        elif status == "inline":
            description = "The fund performed in line with its benchmark over the past year."
        else:
            description = f"The fund underperformed its benchmark by {gap:.2f}% over the past year."

        return Insight(
            type="performance",
            title="Benchmark Comparison",
            description=description,
            importance="high" if "strong" in status else "medium",
        )

    def _concentration_insight(self, holdings: list[Holding], total_value: float | None) -> Insight | None:
        total = _number(total_value)
        if total <= 0:
            return None

        top = sorted(holdings, key=lambda h: _number(h.value), reverse=True)[: self.config.top_holdings]
        top_percent = sum(_number(h.value) for h in top) / total * 100
        if top_percent <= self.config.concentration_percent:
            return None

        return Insight(
            type="concentration",
            title="Portfolio Concentration",
            description=(
                f"The top {len(top)} holdings represent {top_percent:.1f}% of the portfolio. "
                "Consider reviewing diversification."
            ),
            importance="medium",
        )

    # Top level

    def analyze_fund(
        self,
        allocation: AllocationInput | None,
        performance: PerformanceInput | None,
    ) -> FundAnalysis:
        """Full analysis of a report pair.

        status is "complete" only when allocation has asset classes and
        performance has TWR data; otherwise "partial" with a guidance message.
        A missing allocation yields an "unknown" classification, not a guess.
        """
        has_allocation = _has_allocation(allocation)
        has_performance = _has_performance(performance)

        classification = (
            self.classify_fund(allocation.asset_classes) if has_allocation else Classification.unknown()
        )
        benchmark = self.get_benchmark(classification.classification)

        comparison = self.compare_to_benchmark(performance.twr, benchmark) if has_performance else None
        score = self.calculate_performance_score(performance, comparison)
        insights = self.generate_insights(allocation, performance, classification, comparison)

        complete = has_allocation and has_performance
        logger.debug(
            f"Analysis: classification={classification.classification}, score={score}, "
            f"insights={len(insights)}, complete={complete}"
        )

        return FundAnalysis(
            classification=classification,
            benchmark=BenchmarkSummary(
                name=benchmark.name,
                description=benchmark.description,
                composition=benchmark.composition,
                risk_level=benchmark.risk_level,
            ),
            benchmark_comparison=comparison,
            performance_score=score,
            insights=insights,
            status="complete" if complete else "partial",
            message=None if complete else self.config.partial_message,
        )


default_engine = FundAnalysisEngine()


def classify_fund(asset_classes: Iterable[AssetClass] | None) -> Classification:
    return default_engine.classify_fund(asset_classes)


def get_benchmark(classification: str | None) -> Benchmark:
    return default_engine.get_benchmark(classification)


def compare_to_benchmark(fund_twr: TwrReturns | None, benchmark: Benchmark | None) -> BenchmarkComparison:
    return default_engine.compare_to_benchmark(fund_twr, benchmark)


def calculate_performance_score(
    performance: PerformanceInput | None,
    comparison: BenchmarkComparison | None,
) -> int | None:
    return default_engine.calculate_performance_score(performance, comparison)


def generate_insights(
    allocation: AllocationInput | None,
    performance: PerformanceInput | None,
    classification: Classification,
    comparison: BenchmarkComparison | None,
) -> list[Insight]:
    return default_engine.generate_insights(allocation, performance, classification, comparison)


def analyze_fund(allocation: AllocationInput | None, performance: PerformanceInput | None) -> FundAnalysis:
    return default_engine.analyze_fund(allocation, performance)
