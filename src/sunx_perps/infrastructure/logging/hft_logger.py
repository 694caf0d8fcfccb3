"""
Structured Logger Implementation

Main logger with keyword context, metric helpers and multiple backends.
Records are routed to backends immediately; backends decide whether to
buffer. WARNING and above are also handed to Python logging when
propagation is on.
"""

import logging
import os
import time
from typing import Any, Dict, List, Optional

from .interfaces import HFTLoggerInterface, LogBackend, LogRecord, LogLevel, LogType


class HFTLogger(HFTLoggerInterface):
    """
    Logger with multiple backends and persistent context.

    Key features:
    - Keyword arguments become structured context
    - Metric, counter and latency records
    - Python logging compatibility for warnings and errors
    """

    def __init__(self, name: str, backends: List[LogBackend],
                 default_context: Optional[Dict[str, Any]] = None):
        self.name = name
        self.backends = backends

        # Persistent context for all log messages
        self.context: Dict[str, Any] = dict(default_context or {})

        # Python logging compatibility
        self._py_logger = logging.getLogger(name)

        # Propagate in dev/test for easier debugging (pytest caplog, IDE consoles)
        environment = os.getenv('ENVIRONMENT', 'dev').lower()
        self._py_logger.propagate = environment in ('dev', 'development', 'local', 'test')

    @property
    def propagate(self) -> bool:
        return self._py_logger.propagate

    @propagate.setter
    def propagate(self, value: bool) -> None:
        self._py_logger.propagate = value

    @staticmethod
    def _convert_level_to_python(level: LogLevel) -> int:
        return int(level)

    def _dispatch(self, record: LogRecord) -> None:
        for backend in self.backends:
            if backend.enabled and backend.should_handle(record):
                try:
                    backend.write_sync(record)
                except Exception as e:
                    # Logging must not fail the caller
                    backend._handle_error(e)

    def _log(self, level: LogLevel, msg: str, log_type: LogType = LogType.TEXT, **context) -> None:
        full_context = {**self.context, **context}
        correlation_id = full_context.pop('correlation_id', None)
        exchange = full_context.pop('exchange', None)

        record = LogRecord(
            timestamp=time.time(),
            level=level,
            log_type=log_type,
            logger_name=self.name,
            message=msg,
            context=full_context,
            correlation_id=correlation_id,
            exchange=exchange
        )

        # Immediate propagation for warnings and errors
        if level >= LogLevel.WARNING and self._py_logger.propagate:
            extra = f" | {full_context}" if full_context else ""
            self._py_logger.log(self._convert_level_to_python(level), f"{msg}{extra}")

        self._dispatch(record)

    # Standard logging methods
    def debug(self, msg: str, **context) -> None:
        self._log(LogLevel.DEBUG, msg, **context)

    def info(self, msg: str, **context) -> None:
        self._log(LogLevel.INFO, msg, **context)

    def warning(self, msg: str, **context) -> None:
        self._log(LogLevel.WARNING, msg, **context)

    def error(self, msg: str, **context) -> None:
        self._log(LogLevel.ERROR, msg, **context)

    def critical(self, msg: str, **context) -> None:
        self._log(LogLevel.CRITICAL, msg, **context)

    def metric(self, name: str, value: float, **tags) -> None:
        full_tags = {**self.context, **tags}
        record = LogRecord.create_metric(self.name, name, value, **full_tags)
        record.correlation_id = full_tags.get('correlation_id')
        record.exchange = full_tags.get('exchange')
        self._dispatch(record)

    def latency(self, operation: str, duration_ms: float, **tags) -> None:
        self.metric(f"{operation}_latency_ms", duration_ms, **tags)

    def counter(self, name: str, value: int = 1, **tags) -> None:
        self.metric(f"{name}_count", float(value), **tags)

    def audit(self, event: str, **context) -> None:
        self._log(LogLevel.INFO, event, LogType.AUDIT, **context)

    def set_context(self, **context) -> None:
        self.context.update(context)

    async def flush(self) -> None:
        for backend in self.backends:
            try:
                await backend.flush()
            except Exception as e:
                backend._handle_error(e)


class LoggingTimer:
    """Context manager for timing operations with automatic logging."""

    def __init__(self, logger: HFTLoggerInterface, operation: str, **tags):
        self.logger = logger
        self.operation = operation
        self.tags = tags
        self.start_time: Optional[float] = None
        self.end_time: Optional[float] = None

    def __enter__(self):
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.end_time = time.perf_counter()
        self.logger.latency(self.operation, self.elapsed_ms, **self.tags)

        if exc_type is not None:
            self.logger.error(f"{self.operation} failed",
                              error_type=exc_type.__name__,
                              **self.tags)

    @property
    def elapsed_ms(self) -> float:
        if self.start_time is None:
            return 0.0
        end_time = self.end_time or time.perf_counter()
        return (end_time - self.start_time) * 1000
