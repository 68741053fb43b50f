"""Structured logging for report processing.

Provides consistent logging with:
- Timestamps
- Log levels (DEBUG, INFO, WARNING, ERROR)
- Step tracking per uploaded report (read, identify, parse, analyse)
- Structured key=value data
- Optional per-run log file

Module loggers (logging.getLogger(__name__)) live under the "fund_insights"
namespace, so their records reach the handlers configured here.
"""

import logging
import sys
import time
from datetime import datetime
from pathlib import Path
from typing import Any


class PipelineLogger:
    """Structured logger for a fund session or a CLI run."""

    def __init__(self, name: str = "fund_insights", verbose: bool = False, log_dir: str | Path | None = None):
        """Initialize the logger.

        Args:
            name: Logger name.
            verbose: If True, show DEBUG level logs.
            log_dir: Directory for log files. If None, no file logging.
        """
        self.logger = logging.getLogger(name)
        self.verbose = verbose
        self._step: str = ""
        self._step_start: float = 0
        self._run_start: float = 0
        self._log_file: Path | None = None
        self._log_dir = Path(log_dir) if log_dir else None

        if not self.logger.handlers:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setFormatter(ConsoleFormatter())
            console_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
            self.logger.addHandler(console_handler)

        self.logger.setLevel(logging.DEBUG)

    @property
    def log_file(self) -> Path | None:
        return self._log_file

    def set_verbose(self, verbose: bool):
        """Update verbose setting on the console handler."""
        self.verbose = verbose
        for handler in self.logger.handlers:
            if isinstance(handler, logging.StreamHandler) and handler.stream == sys.stdout:
                handler.setLevel(logging.DEBUG if verbose else logging.INFO)

    def _ts(self) -> str:
        return datetime.now().strftime("%H:%M:%S")

    def _elapsed(self) -> str:
        if self._step_start:
            return f"{time.time() - self._step_start:.1f}s"
        return ""

    def _total_elapsed(self) -> str:
        if not self._run_start:
            return ""
        elapsed = time.time() - self._run_start
        mins = int(elapsed // 60)
        secs = elapsed % 60
        if mins > 0:
            return f"{mins}m {secs:.0f}s"
        return f"{secs:.1f}s"

    def start_run(self, label: str):
        """Mark the start of a run and set up file logging."""
        self._run_start = time.time()

        if self._log_dir and self._log_file is None:
            self._log_dir.mkdir(parents=True, exist_ok=True)
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            self._log_file = self._log_dir / f"{Path(label).stem}_{timestamp}.log"

            file_handler = logging.FileHandler(self._log_file, encoding="utf-8")
            file_handler.setFormatter(FileFormatter())
            file_handler.setLevel(logging.DEBUG)
            self.logger.addHandler(file_handler)

        self.logger.info(f"[{self._ts()}] Starting: {label}")

    def end_run(self, success: bool = True, stats: dict | None = None):
        """Mark the end of a run."""
        status = "COMPLETE" if success else "FAILED"
        if stats:
            self.summary(stats)
        self.logger.info(f"{'=' * 50}")
        self.logger.info(f"Run {status} [{self._total_elapsed()}]")
        if self._log_file:
            self.logger.info(f"Log: {self._log_file}")

    def start_step(self, step: str, source: str = ""):
        """Start a processing step, e.g. "ingest" for one report."""
        self._step = step
        self._step_start = time.time()
        header = step.upper()
        if source:
            header += f" ({source})"
        self.logger.info(header)

    def step_result(self, result: str, **metrics):
        """Log step completion with key metrics."""
        parts = [result]
        if metrics:
            parts.append(", ".join(f"{k}={v}" for k, v in metrics.items()))
        elapsed = self._elapsed()
        if elapsed:
            parts.append(f"[{elapsed}]")
        self.logger.info(f"  Done: {' | '.join(parts)}")
        self._step = ""

    def debug(self, message: str, **data):
        """Log debug message (only shown in verbose mode)."""
        if data:
            message = f"{message} | {_format_data(data)}"
        self.logger.debug(f"[{self._ts()}] {message}")

    def info(self, message: str, **data):
        if data:
            message = f"{message} | {_format_data(data)}"
        self.logger.info(f"  {message}")

    def warning(self, message: str, **data):
        if data:
            message = f"{message} | {_format_data(data)}"
        self.logger.warning(f"[{self._ts()}] WARN: {message}")

    def error(self, message: str, exc: Exception | None = None, **data):
        if data:
            message = f"{message} | {_format_data(data)}"
        if exc:
            message = f"{message} | {type(exc).__name__}: {exc}"
        self.logger.error(f"[{self._ts()}] ERROR: {message}")

    def milestone(self, message: str, **data):
        """Log a key event (always visible, highlighted)."""
        if data:
            message = f"{message} | {_format_data(data)}"
        self.logger.info(f"  -> {message}")

    def summary(self, stats: dict):
        """Log a summary block."""
        lines = ["SUMMARY"]
        for key, value in stats.items():
            if isinstance(value, dict):
                lines.append(f"  {key}:")
                for k, v in value.items():
                    lines.append(f"    {k}: {v}")
            else:
                lines.append(f"  {key}: {value}")
        self.logger.info("\n".join(lines))


class ConsoleFormatter(logging.Formatter):
    """Console formatter: the message already carries its timestamp."""

    def format(self, record: logging.LogRecord) -> str:
        return record.getMessage()


class FileFormatter(logging.Formatter):
    """File formatter with full timestamp and level."""

    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.now().strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]
        level = record.levelname[:4]
        return f"{ts} [{level}] {record.getMessage()}"


def _format_data(data: dict[str, Any]) -> str:
    """Format structured data for logging."""
    parts = []
    for k, v in data.items():
        if isinstance(v, str) and len(v) > 50:
            v = v[:47] + "..."
        elif isinstance(v, list) and len(v) > 5:
            v = f"[{len(v)} items]"
        parts.append(f"{k}={v}")
    return ", ".join(parts)


_logger: PipelineLogger | None = None


def get_logger(verbose: bool = False, log_dir: str | Path | None = None) -> PipelineLogger:
    """Get or create the global logger.

    Args:
        verbose: If True, show DEBUG level logs in console.
        log_dir: Directory for log files. Applied to an existing logger only
            if it has none yet.
    """
    global _logger
    if _logger is None:
        _logger = PipelineLogger(verbose=verbose, log_dir=log_dir)
    else:
        if verbose and not _logger.verbose:
            _logger.set_verbose(True)
        if log_dir and not _logger._log_dir:
            _logger._log_dir = Path(log_dir)
    return _logger


def reset_logger():
    """Reset the global logger (for testing)."""
    global _logger
    if _logger:
        for handler in _logger.logger.handlers[:]:
            if isinstance(handler, logging.FileHandler):
                handler.close()
                _logger.logger.removeHandler(handler)
    _logger = None
