"""
Structured Logging System

Usage:
    from sunx_perps.infrastructure.logging import get_logger

    logger = get_logger('my.component')
    logger.info("Component initialized", endpoint="/sapi/v1/order")

    # Exchange logger with component
    logger = get_exchange_logger('sunx', 'rest')
    logger.metric("request_duration_ms", 12.5, endpoint="/sapi/v1/order")
"""

from .interfaces import (
    LogLevel,
    LogType,
    LogRecord,
    LogBackend,
    HFTLoggerInterface
)
from .hft_logger import HFTLogger, LoggingTimer
from .factory import (
    LoggerFactory,
    get_logger,
    get_exchange_logger,
    configure_logging,
    configure_logging_from_dict
)
from .structs import (
    LoggingConfig,
    BackendConfig,
    ConsoleBackendConfig,
    FileBackendConfig
)
from .backends.console import ConsoleBackend, ColorConsoleBackend
from .backends.file import FileBackend

__all__ = [
    'LogLevel',
    'LogType',
    'LogRecord',
    'LogBackend',
    'HFTLoggerInterface',
    'HFTLogger',
    'LoggingTimer',
    'LoggerFactory',
    'get_logger',
    'get_exchange_logger',
    'configure_logging',
    'configure_logging_from_dict',
    'LoggingConfig',
    'BackendConfig',
    'ConsoleBackendConfig',
    'FileBackendConfig',
    'ConsoleBackend',
    'ColorConsoleBackend',
    'FileBackend',
]
