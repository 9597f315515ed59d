"""Structured logging configuration for feednorm."""

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any

from .config import Config

# Record attributes copied into the JSON entry when a log call provides them
CONTEXT_FIELDS = (
    "execution_id",
    "component",
    "source",
    "feed_type",
    "items_count",
    "error",
    "error_kind",
    "metrics",
)

FEEDNORM_LOGGERS = ("feednorm", "feednorm.parser", "feednorm.processor")


class StructuredFormatter(logging.Formatter):
    """Formats each record as a single JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        for field in CONTEXT_FIELDS:
            if hasattr(record, field):
                log_entry[field] = getattr(record, field)

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, ensure_ascii=False, default=str)


class ExecutionLogger:
    """Logger bound to one batch run of a feednorm component."""

    def __init__(self, execution_id: str, component: str = "processor"):
        """Initialize execution logger.

        Args:
            execution_id: Unique identifier for this run
            component: Component name, used as the ``feednorm.<component>`` logger
        """
        self.execution_id = execution_id
        self.component = component
        self.logger = logging.getLogger(f"feednorm.{component}")
        self.start_time: datetime | None = None

    def _log(self, level: int, message: str, **context) -> None:
        extra = {
            "execution_id": self.execution_id,
            "component": self.component,
            **context,
        }
        self.logger.log(level, message, extra=extra)

    def info(self, message: str, **context) -> None:
        self._log(logging.INFO, message, **context)

    def error(self, message: str, **context) -> None:
        self._log(logging.ERROR, message, **context)

    def log_execution_start(self, **context) -> None:
        """Record the start of a run."""
        self.start_time = datetime.now(UTC)
        self.info(
            f"Starting {self.component} execution",
            execution_start=self.start_time.isoformat(),
            **context,
        )

    def log_execution_end(self, success: bool = True, **context) -> None:
        """Record the end of a run and how long it took."""
        end_time = datetime.now(UTC)
        duration_seconds = None
        if self.start_time:
            duration_seconds = (end_time - self.start_time).total_seconds()

        self.info(
            f"Completed {self.component} execution",
            execution_end=end_time.isoformat(),
            execution_duration_seconds=duration_seconds,
            execution_success=success,
            **context,
        )

    def log_feed_processing(
        self, source: str, feed_type: str, items_count: int
    ) -> None:
        """Log a successfully parsed document."""
        self.info(
            f"Parsed {feed_type} feed: {items_count} items found",
            source=source,
            feed_type=feed_type,
            items_count=items_count,
        )

    def log_feed_failure(self, source: str, error: Exception) -> None:
        """Log a document that could not be parsed."""
        self.error(
            f"Failed to parse feed {source}: {error}",
            source=source,
            error=str(error),
            error_kind=type(error).__name__,
        )

    def log_metrics(self, metrics: dict[str, Any]) -> None:
        self.info("Execution metrics", metrics=metrics)


def setup_structured_logging(log_level: str | None = None) -> None:
    """Send JSON logs to stdout.

    Args:
        log_level: Logging level name, LOG_LEVEL from the environment when None
    """
    if log_level is None:
        log_level = Config().get_parser_config().log_level
    level = getattr(logging, log_level.upper())

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(StructuredFormatter())
    root_logger.addHandler(console_handler)

    for logger_name in FEEDNORM_LOGGERS:
        logger = logging.getLogger(logger_name)
        logger.setLevel(level)
        logger.propagate = True


def create_execution_logger(
    component: str, execution_id: str | None = None
) -> ExecutionLogger:
    """Create an execution logger, generating an id when none is given."""
    if not execution_id:
        execution_id = f"exec_{datetime.now(UTC).strftime('%Y%m%d_%H%M%S_%f')}"

    return ExecutionLogger(execution_id, component)
