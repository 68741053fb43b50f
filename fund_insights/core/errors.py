"""Structured error types for the report analysis pipeline.

Provides typed errors for:
- PDF read failures
- Report identification failures
- Parser failures
- Validation warnings

Only identification, PDF read and parser failures abort an upload; they are
raised as ReportProcessingError subclasses carrying an ExtractionError.
Everything else is collected as a warning.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorSeverity(Enum):
    """Severity levels for pipeline errors."""
    WARNING = "warning"   # Non-fatal, values left as None
    ERROR = "error"       # Fatal for this upload, session state unchanged
    CRITICAL = "critical" # Pipeline halted


class ErrorCategory(Enum):
    """Categories of pipeline errors."""
    PDF_READ = "pdf_read"               # PDF could not be opened or has no text
    IDENTIFICATION = "identification"   # No report type matched / wrong type
    PARSE = "parse"                     # Parser missing or raised
    VALIDATION = "validation"           # Expected field not extracted
    UNKNOWN = "unknown"                 # Unclassified errors


@dataclass
class ExtractionError:
    """Structured pipeline error with context."""

    category: ErrorCategory
    severity: ErrorSeverity
    message: str
    phase: str                          # Pipeline phase where error occurred
    report_type: str | None = None      # "asset_allocation", "performance"
    source_name: str | None = None      # File name or document label
    original_error: Exception | None = None
    context: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        parts = [f"[{self.severity.value.upper()}] {self.category.value}: {self.message}"]
        if self.report_type:
            parts.append(f"report={self.report_type}")
        if self.source_name:
            parts.append(f"source={self.source_name}")
        if self.phase:
            parts.append(f"phase={self.phase}")
        return " | ".join(parts)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "category": self.category.value,
            "severity": self.severity.value,
            "message": self.message,
            "phase": self.phase,
            "report_type": self.report_type,
            "source_name": self.source_name,
            "context": self.context,
        }


@dataclass
class PipelineErrors:
    """Aggregate errors and warnings across a session."""

    errors: list[ExtractionError] = field(default_factory=list)
    warnings: list[ExtractionError] = field(default_factory=list)
    failed_sources: list[str] = field(default_factory=list)

    def add(self, error: ExtractionError):
        """Add an error or warning."""
        if error.severity == ErrorSeverity.WARNING:
            self.warnings.append(error)
        else:
            self.errors.append(error)
            if error.source_name and error.source_name not in self.failed_sources:
                self.failed_sources.append(error.source_name)

    def drop_report(self, report_type: str):
        """Remove warnings recorded for one report type."""
        self.warnings = [w for w in self.warnings if w.report_type != report_type]

    @property
    def error_count(self) -> int:
        return len(self.errors)

    @property
    def warning_count(self) -> int:
        return len(self.warnings)

    def summary(self) -> dict:
        """Get summary statistics."""
        by_category = {}
        for error in self.errors:
            cat = error.category.value
            by_category[cat] = by_category.get(cat, 0) + 1

        return {
            "total_errors": self.error_count,
            "total_warnings": self.warning_count,
            "failed_sources": len(self.failed_sources),
            "errors_by_category": by_category,
        }

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "errors": [e.to_dict() for e in self.errors],
            "warnings": [w.to_dict() for w in self.warnings],
            "failed_sources": self.failed_sources,
            "summary": self.summary(),
        }


class ReportProcessingError(Exception):
    """Base exception for failures that abort processing of one document."""

    def __init__(self, error: ExtractionError):
        super().__init__(error.message)
        self.error = error


class DocumentReadError(ReportProcessingError):
    """The PDF could not be read or yielded too little text."""


class ReportIdentificationError(ReportProcessingError):
    """The document matched no registered report type, or the wrong one."""


class ReportParseError(ReportProcessingError):
    """No parser is registered for the type, or the parser raised."""


# Factory functions for common error types

def pdf_read_error(
    message: str,
    source_name: str | None = None,
    original: Exception | None = None,
) -> ExtractionError:
    """Create a PDF read error."""
    return ExtractionError(
        category=ErrorCategory.PDF_READ,
        severity=ErrorSeverity.ERROR,
        message=message,
        phase="read",
        source_name=source_name,
        original_error=original,
    )


def identification_error(
    message: str,
    source_name: str | None = None,
    detected_type: str | None = None,
    expected_type: str | None = None,
) -> ExtractionError:
    """Create a report identification error."""
    context = {}
    if detected_type:
        context["detected_type"] = detected_type
    if expected_type:
        context["expected_type"] = expected_type
    return ExtractionError(
        category=ErrorCategory.IDENTIFICATION,
        severity=ErrorSeverity.ERROR,
        message=message,
        phase="identify",
        report_type=detected_type,
        source_name=source_name,
        context=context,
    )


def parse_error(
    message: str,
    report_type: str,
    source_name: str | None = None,
    original: Exception | None = None,
) -> ExtractionError:
    """Create a parser error."""
    return ExtractionError(
        category=ErrorCategory.PARSE,
        severity=ErrorSeverity.ERROR,
        message=message,
        phase="parse",
        report_type=report_type,
        source_name=source_name,
        original_error=original,
    )


def validation_warning(
    message: str,
    report_type: str | None = None,
    source_name: str | None = None,
) -> ExtractionError:
    """Create a validation warning (field missing after an otherwise good parse)."""
    return ExtractionError(
        category=ErrorCategory.VALIDATION,
        severity=ErrorSeverity.WARNING,
        message=message,
        phase="validate",
        report_type=report_type,
        source_name=source_name,
    )
