"""
Console Backend

Writes human-readable log lines to stdout (stderr for errors).
"""

import sys
import time
from typing import Any, Dict

from ..interfaces import LogBackend, LogRecord, LogLevel, LogType
from ..structs import ConsoleBackendConfig


class ConsoleBackend(LogBackend):
    """Plain console output."""

    def __init__(self, config: ConsoleBackendConfig, name: str = "console"):
        if not isinstance(config, ConsoleBackendConfig):
            raise TypeError(f"Expected ConsoleBackendConfig, got {type(config)}")

        super().__init__(name)
        self.config = config
        self.min_level = LogLevel[config.min_level.upper()]
        self.include_context = config.include_context
        self.include_metrics = config.include_metrics
        self.max_message_length = config.max_message_length
        self.enabled = config.enabled

    def should_handle(self, record: LogRecord) -> bool:
        if not self.enabled or record.level < self.min_level:
            return False
        if record.log_type == LogType.METRIC:
            return self.include_metrics
        return True

    def write_sync(self, record: LogRecord) -> None:
        line = self._format(record)
        stream = sys.stderr if record.level >= LogLevel.ERROR else sys.stdout
        print(line, file=stream)

    async def flush(self) -> None:
        sys.stdout.flush()
        sys.stderr.flush()

    def _format(self, record: LogRecord) -> str:
        ts = time.strftime("%Y-%m-%d %H:%M:%S", time.localtime(record.timestamp))
        level = self._level_label(record.level)

        if record.log_type == LogType.METRIC:
            tags = self._format_context(record.metric_tags or {})
            return f"[{ts}] {level} [{record.logger_name}] metric {record.metric_name}={record.metric_value}{tags}"

        message = record.message
        if len(message) > self.max_message_length:
            message = message[:self.max_message_length] + "..."

        context = self._format_context(record.context) if self.include_context else ""
        return f"[{ts}] {level} [{record.logger_name}] {message}{context}"

    def _level_label(self, level: LogLevel) -> str:
        return level.name

    @staticmethod
    def _format_context(context: Dict[str, Any]) -> str:
        if not context:
            return ""
        return " | " + " ".join(f"{k}={v}" for k, v in context.items())


class ColorConsoleBackend(ConsoleBackend):
    """Console output with ANSI-coloured level labels."""

    _COLORS = {
        LogLevel.DEBUG: "\033[36m",
        LogLevel.INFO: "\033[32m",
        LogLevel.WARNING: "\033[33m",
        LogLevel.ERROR: "\033[31m",
        LogLevel.CRITICAL: "\033[35m",
    }
    _RESET = "\033[0m"

    def _level_label(self, level: LogLevel) -> str:
        return f"{self._COLORS.get(level, '')}{level.name}{self._RESET}"
