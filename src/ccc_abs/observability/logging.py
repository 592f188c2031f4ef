"""
Logging configuration for the CCC assessment engine.

Assessment runs are long and mostly spent waiting on log ingestion, so
the engine logs progress at INFO. Output is either human-readable for
terminals or JSON lines for collection by a log pipeline.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any

# LogRecord attributes that are not user supplied extra fields
_RESERVED_ATTRS = frozenset(
    {
        "name",
        "msg",
        "args",
        "created",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "exc_info",
        "exc_text",
        "thread",
        "threadName",
        "taskName",
        "message",
    }
)


class StructuredFormatter(logging.Formatter):
    """
    Formatter that outputs one JSON object per log record.

    Extra fields passed through ``extra=`` are copied to the top level
    of the object.
    """

    def __init__(
        self,
        include_location: bool = False,
        extra_fields: dict[str, Any] | None = None,
    ):
        """
        Initialize structured formatter.

        Args:
            include_location: Include file/line location
            extra_fields: Additional fields to include in every record
        """
        super().__init__()
        self.include_location = include_location
        self.extra_fields = extra_fields or {}

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
        }

        if self.include_location:
            log_data["location"] = {
                "file": record.pathname,
                "line": record.lineno,
                "function": record.funcName,
            }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS:
                log_data[key] = value

        log_data.update(self.extra_fields)

        return json.dumps(log_data, default=str)


class HumanReadableFormatter(logging.Formatter):
    """Formatter for terminal output, colored when attached to a TTY."""

    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def __init__(self, use_colors: bool = True, stream: Any = None):
        """
        Initialize human-readable formatter.

        Args:
            use_colors: Use ANSI colors in output
            stream: Stream the handler writes to, used for TTY detection
        """
        super().__init__()
        stream = stream or sys.stderr
        self.use_colors = use_colors and hasattr(stream, "isatty") and stream.isatty()

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as human-readable text."""
        timestamp = datetime.fromtimestamp(record.created, timezone.utc).strftime(
            "%Y-%m-%d %H:%M:%S"
        )
        level = record.levelname
        if self.use_colors and level in self.COLORS:
            level = f"{self.COLORS[level]}{level}{self.RESET}"

        output = f"[{timestamp}] {level:>8} {record.name}: {record.getMessage()}"

        if record.exc_info:
            output += "\n" + self.formatException(record.exc_info)

        return output


class AssessmentLogger:
    """
    Wrapper around a standard logger with persistent context and
    helpers for the events of an assessment run.
    """

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)
        self._context: dict[str, Any] = {}

    def set_context(self, **kwargs: Any) -> None:
        """Set persistent context fields for all records."""
        self._context.update(kwargs)

    def clear_context(self) -> None:
        """Clear context fields."""
        self._context.clear()

    def _log(self, level: int, message: str, exc_info: bool = False, **kwargs: Any) -> None:
        extra = {**self._context, **kwargs}
        self.logger.log(level, message, exc_info=exc_info, extra=extra)

    def debug(self, message: str, **kwargs: Any) -> None:
        self._log(logging.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self._log(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._log(logging.WARNING, message, **kwargs)

    def error(self, message: str, exc_info: bool = False, **kwargs: Any) -> None:
        self._log(logging.ERROR, message, exc_info=exc_info, **kwargs)

    def run_started(self, tactic_name: str, target: str, test_set_count: int) -> None:
        """Log the start of a tactic run."""
        self.info(
            f"Running tactic {tactic_name} ({test_set_count} test sets)",
            event_type="run.started",
            tactic_name=tactic_name,
            target=target,
            test_set_count=test_set_count,
        )

    def run_completed(
        self,
        tactic_name: str,
        passed_count: int,
        failed_count: int,
        duration_seconds: float,
    ) -> None:
        """Log the end of a tactic run."""
        self.info(
            f"Tactic {tactic_name} completed: {passed_count} passed, {failed_count} failed",
            event_type="run.completed",
            tactic_name=tactic_name,
            passed_count=passed_count,
            failed_count=failed_count,
            duration_seconds=duration_seconds,
        )

    def test_set_completed(self, test_set_id: str, passed: bool, message: str) -> None:
        """Log the verdict of one test set."""
        self.info(
            f"{test_set_id}: {'passed' if passed else 'failed'}",
            event_type="test_set.completed",
            test_set_id=test_set_id,
            passed=passed,
            result_message=message,
        )

    def test_skipped(self, test_id: str) -> None:
        """Log an invasive test skipped because invasive tests are not enabled."""
        self.debug(
            f"Skipping invasive test {test_id}",
            event_type="test.skipped",
            test_id=test_id,
        )


def configure_logging(
    level: str = "INFO",
    format: str = "human",
    output: str = "stderr",
    extra_fields: dict[str, Any] | None = None,
) -> None:
    """
    Configure logging for the ccc_abs package.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format: Output format (human, json)
        output: Output destination (stderr, stdout)
        extra_fields: Extra fields to include in structured logs
    """
    root_logger = logging.getLogger("ccc_abs")
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    root_logger.handlers.clear()

    stream = sys.stdout if output == "stdout" else sys.stderr
    handler = logging.StreamHandler(stream)

    if format == "json":
        formatter: logging.Formatter = StructuredFormatter(extra_fields=extra_fields)
    else:
        formatter = HumanReadableFormatter(stream=stream)

    handler.setFormatter(formatter)
    root_logger.addHandler(handler)


def get_logger(name: str) -> AssessmentLogger:
    """
    Get an assessment logger.

    Args:
        name: Logger name relative to the package (e.g. "engine.runner")

    Returns:
        AssessmentLogger instance
    """
    if not name.startswith("ccc_abs"):
        name = f"ccc_abs.{name}"
    return AssessmentLogger(name)


# Configure logging from environment on import
configure_logging(
    level=os.getenv("CCC_ABS_LOG_LEVEL", "INFO"),
    format=os.getenv("CCC_ABS_LOG_FORMAT", "human"),
)
