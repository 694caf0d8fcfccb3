"""
File Backend for Persistent Logging

Buffers formatted lines in memory and appends them to disk with aiofiles.
A flush is scheduled on the running event loop once the buffer fills up;
anything left over is written by ``flush()`` at shutdown.
"""

import asyncio
import json
import time
from datetime import datetime
from pathlib import Path
from typing import List, Set

import aiofiles

from ..interfaces import LogBackend, LogRecord, LogLevel, LogType
from ..structs import FileBackendConfig


class FileBackend(LogBackend):
    """
    File logging backend.

    Accepts only FileBackendConfig struct for configuration.
    """

    def __init__(self, config: FileBackendConfig, name: str = "file"):
        if not isinstance(config, FileBackendConfig):
            raise TypeError(f"Expected FileBackendConfig, got {type(config)}")

        super().__init__(name)
        self.config = config
        self.file_path = Path(config.path)
        self.format_type = config.format
        self.min_level = LogLevel[config.min_level.upper()]
        self.buffer_size = config.buffer_size
        self.enabled = config.enabled

        if self.enabled:
            self.file_path.parent.mkdir(parents=True, exist_ok=True)

        self._write_buffer: List[str] = []
        self._lock = asyncio.Lock()
        self._pending: Set[asyncio.Task] = set()

    def should_handle(self, record: LogRecord) -> bool:
        if not self.enabled:
            return False
        return record.level >= self.min_level and record.log_type in (LogType.TEXT, LogType.AUDIT)

    def write_sync(self, record: LogRecord) -> None:
        if self.format_type == 'json':
            self._write_buffer.append(self._format_json(record))
        else:
            self._write_buffer.append(self._format_text(record))

        if len(self._write_buffer) >= self.buffer_size:
            self._schedule_flush()

    def _schedule_flush(self) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # No loop: lines stay buffered until flush() is awaited
            return
        task = loop.create_task(self.flush())
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def flush(self) -> None:
        if not self.enabled:
            return

        async with self._lock:
            if not self._write_buffer:
                return
            lines, self._write_buffer = self._write_buffer, []
            try:
                async with aiofiles.open(self.file_path, mode='a', encoding='utf-8') as f:
                    await f.write("\n".join(lines) + "\n")
            except OSError as e:
                self._handle_error(e)

    def _format_text(self, record: LogRecord) -> str:
        ts = datetime.fromtimestamp(record.timestamp).isoformat(timespec='milliseconds')
        line = f"{ts} {record.level.name} [{record.logger_name}] {record.message}"
        if record.context:
            line += " | " + " ".join(f"{k}={v}" for k, v in record.context.items())
        return line

    def _format_json(self, record: LogRecord) -> str:
        payload = {
            "timestamp": record.timestamp,
            "time": time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime(record.timestamp)),
            "level": record.level.name,
            "type": record.log_type.name.lower(),
            "logger": record.logger_name,
            "message": record.message,
        }
        if record.correlation_id:
            payload["correlation_id"] = record.correlation_id
        if record.exchange:
            payload["exchange"] = record.exchange
        if record.context:
            payload["context"] = record.context
        return json.dumps(payload, default=str)
