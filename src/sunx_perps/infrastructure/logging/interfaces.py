"""
Core Logging Interfaces

Defines lightweight interfaces for structured logging with pluggable backends.
Formatting happens in backends; the logger only builds records and routes them.
"""

import time
from abc import ABC, abstractmethod
from enum import IntEnum
from typing import Any, Dict, Optional
from dataclasses import dataclass, field


class LogLevel(IntEnum):
    """Log levels with numeric values for fast comparison."""
    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    CRITICAL = 50


class LogType(IntEnum):
    """Log types for routing decisions."""
    TEXT = 1      # Regular log messages
    METRIC = 2    # Numeric metrics (latency, counters)
    AUDIT = 3     # Audit trail messages


@dataclass
class LogRecord:
    """
    Lightweight log record passed from logger to backends.

    Formatting happens in backends, not here.
    """
    timestamp: float
    level: LogLevel
    log_type: LogType
    logger_name: str
    message: str
    context: Dict[str, Any] = field(default_factory=dict)

    # For metrics (only used when log_type == METRIC)
    metric_name: Optional[str] = None
    metric_value: Optional[float] = None
    metric_tags: Optional[Dict[str, Any]] = None

    # For correlation tracking
    correlation_id: Optional[str] = None
    exchange: Optional[str] = None

    @classmethod
    def create_metric(cls, logger_name: str, metric_name: str, value: float, **tags) -> 'LogRecord':
        """Factory method for metric log records."""
        return cls(
            timestamp=time.time(),
            level=LogLevel.INFO,
            log_type=LogType.METRIC,
            logger_name=logger_name,
            message="",
            metric_name=metric_name,
            metric_value=value,
            metric_tags=tags
        )


class LogBackend(ABC):
    """
    Abstract base for all logging backends.

    Each backend handles its own formatting and output logic.
    """

    def __init__(self, name: str):
        self.name = name
        self.enabled = True
        self.min_level = LogLevel.DEBUG
        self._error_count = 0
        self._max_errors = 10  # Disable after too many failures

    @abstractmethod
    def should_handle(self, record: LogRecord) -> bool:
        """Fast check if this backend should process the record."""
        pass

    @abstractmethod
    def write_sync(self, record: LogRecord) -> None:
        """Format and emit (or buffer) a record without awaiting."""
        pass

    @abstractmethod
    async def flush(self) -> None:
        """Flush any buffered data."""
        pass

    def _handle_error(self, error: Exception) -> None:
        """Count backend failures; a backend that keeps failing is switched off."""
        self._error_count += 1
        if self._error_count >= self._max_errors:
            self.enabled = False
            print(f"Backend {self.name} disabled after {self._max_errors} errors: {error}")


class HFTLoggerInterface(ABC):
    """
    Interface for the structured logger.

    This is what gets injected into components as ``self.logger``.
    Keyword arguments become structured context on the record.
    """

    @abstractmethod
    def debug(self, msg: str, **context) -> None:
        pass

    @abstractmethod
    def info(self, msg: str, **context) -> None:
        pass

    @abstractmethod
    def warning(self, msg: str, **context) -> None:
        pass

    @abstractmethod
    def error(self, msg: str, **context) -> None:
        pass

    @abstractmethod
    def critical(self, msg: str, **context) -> None:
        pass

    @abstractmethod
    def metric(self, name: str, value: float, **tags) -> None:
        """Log metric value."""
        pass

    @abstractmethod
    def latency(self, operation: str, duration_ms: float, **tags) -> None:
        """Log latency metric. Convenience method for timing."""
        pass

    @abstractmethod
    def counter(self, name: str, value: int = 1, **tags) -> None:
        """Log counter metric. Increment by value."""
        pass

    @abstractmethod
    def audit(self, event: str, **context) -> None:
        """Log audit event."""
        pass

    @abstractmethod
    def set_context(self, **context) -> None:
        """Set persistent context for all logs from this logger."""
        pass

    @abstractmethod
    async def flush(self) -> None:
        """Flush all backends."""
        pass
