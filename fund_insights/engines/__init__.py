"""Analysis, fund model assembly and upload sessions."""

from fund_insights.engines.analysis import (
    AnalysisConfig,
    FundAnalysisEngine,
    default_engine,
    classify_fund,
    get_benchmark,
    compare_to_benchmark,
    calculate_performance_score,
    generate_insights,
    analyze_fund,
)
from fund_insights.engines.fund_model import (
    create_fund_model,
    update_fund_model,
    clear_fund_report,
    create_empty_fund_model,
    validate_fund_model,
    get_fund_summary,
    generate_fund_id,
)
from fund_insights.engines.session import FundSession

__all__ = [
    # Analysis
    "AnalysisConfig",
    "FundAnalysisEngine",
    "default_engine",
    "classify_fund",
    "get_benchmark",
    "compare_to_benchmark",
    "calculate_performance_score",
    "generate_insights",
    "analyze_fund",
    # Fund model
    "create_fund_model",
    "update_fund_model",
    "clear_fund_report",
    "create_empty_fund_model",
    "validate_fund_model",
    "get_fund_summary",
    "generate_fund_id",
    # Sessions
    "FundSession",
]
