"""Core utilities: configuration, errors, logging, PDF text extraction and value parsing."""

from fund_insights.core.config import (
    OUTPUT_DIR,
    LOG_DIR,
    BENCHMARK_DATA,
    DEFAULT_BENCHMARK,
    ReportTypes,
    ReportFingerprints,
    AssetClasses,
    ClassificationThresholds,
    PerformanceThresholds,
    ScoringConfig,
    InsightConfig,
    ValidationConfig,
    DocumentLimits,
    RegexPatterns,
)
from fund_insights.core.errors import (
    ErrorSeverity,
    ErrorCategory,
    ExtractionError,
    PipelineErrors,
    ReportProcessingError,
    DocumentReadError,
    ReportIdentificationError,
    ReportParseError,
    pdf_read_error,
    identification_error,
    parse_error,
    validation_warning,
)
from fund_insights.core.pdf_reader import PDFReader, group_words_into_lines, read_pdf
from fund_insights.core.pipeline_logger import PipelineLogger, get_logger, reset_logger
from fund_insights.core.value_parsers import (
    parse_date,
    parse_currency,
    parse_percentage,
    round_half_up,
)

__all__ = [
    # Configuration
    "OUTPUT_DIR",
    "LOG_DIR",
    "BENCHMARK_DATA",
    "DEFAULT_BENCHMARK",
    "ReportTypes",
    "ReportFingerprints",
    "AssetClasses",
    "ClassificationThresholds",
    "PerformanceThresholds",
    "ScoringConfig",
    "InsightConfig",
    "ValidationConfig",
    "DocumentLimits",
    "RegexPatterns",
    # Errors
    "ErrorSeverity",
    "ErrorCategory",
    "ExtractionError",
    "PipelineErrors",
    "ReportProcessingError",
    "DocumentReadError",
    "ReportIdentificationError",
    "ReportParseError",
    "pdf_read_error",
    "identification_error",
    "parse_error",
    "validation_warning",
    # PDF reading
    "PDFReader",
    "group_words_into_lines",
    "read_pdf",
    # Logging
    "PipelineLogger",
    "get_logger",
    "reset_logger",
    # Value parsing
    "parse_date",
    "parse_currency",
    "parse_percentage",
    "round_half_up",
]
