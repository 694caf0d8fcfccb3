"""
Logging Factory

Creates and caches logger instances from struct-based configuration.
Components receive the result as ``self.logger``.
"""

import os
from typing import Any, Dict, List, Optional

from .interfaces import HFTLoggerInterface, LogBackend
from .hft_logger import HFTLogger
from .backends.console import ConsoleBackend, ColorConsoleBackend
from .backends.file import FileBackend
from .structs import LoggingConfig


class LoggerFactory:
    """Logging factory - trust config, fail fast."""

    _cached_loggers: Dict[str, HFTLogger] = {}
    _default_config: Optional[LoggingConfig] = None
    _backends: Optional[List[LogBackend]] = None

    @classmethod
    def create_logger(cls, name: str, config: Optional[LoggingConfig] = None) -> HFTLoggerInterface:
        """Create (or return the cached) logger for ``name``."""
        if name in cls._cached_loggers:
            return cls._cached_loggers[name]

        if config is not None:
            backends = cls._create_backends(config)
        else:
            config = cls._get_default_config()
            backends = cls._shared_backends(config)

        logger = HFTLogger(name=name, backends=backends, default_context=config.default_context)
        cls._cached_loggers[name] = logger
        return logger

    @classmethod
    def configure(cls, config: LoggingConfig) -> None:
        """Replace the default configuration. Existing loggers are dropped."""
        config.validate()
        cls.clear_cache()
        cls._default_config = config

    @classmethod
    def get_default_config(cls) -> LoggingConfig:
        return cls._get_default_config()

    @classmethod
    def clear_cache(cls) -> None:
        """Clear cached logger instances."""
        cls._cached_loggers.clear()
        cls._default_config = None
        cls._backends = None

    @classmethod
    async def flush_all(cls) -> None:
        for logger in list(cls._cached_loggers.values()):
            await logger.flush()

    @classmethod
    def _shared_backends(cls, config: LoggingConfig) -> List[LogBackend]:
        # One set of backends for all default loggers, so the file backend
        # owns a single buffer per path
        if cls._backends is None:
            cls._backends = cls._create_backends(config)
        return cls._backends

    @staticmethod
    def _create_backends(config: LoggingConfig) -> List[LogBackend]:
        backends: List[LogBackend] = []
        if config.console and config.console.enabled:
            backend_class = ColorConsoleBackend if config.console.color else ConsoleBackend
            backends.append(backend_class(config.console, 'console'))
        if config.file and config.file.enabled:
            backends.append(FileBackend(config.file, 'file'))
        return backends

    @classmethod
    def _get_default_config(cls) -> LoggingConfig:
        if cls._default_config is None:
            environment = os.getenv('ENVIRONMENT', 'dev')
            if environment == 'prod':
                cls._default_config = LoggingConfig.default_production()
            elif environment == 'test':
                cls._default_config = LoggingConfig.default_test()
            else:
                cls._default_config = LoggingConfig.default_development()
        return cls._default_config


def get_logger(name: str) -> HFTLoggerInterface:
    """Get logger instance."""
    return LoggerFactory.create_logger(name)


def get_exchange_logger(exchange: str, component: Optional[str] = None) -> HFTLoggerInterface:
    """Get exchange logger with optional component."""
    name = f"{exchange}.{component}" if component else exchange
    return get_logger(name)


def configure_logging(config: LoggingConfig) -> None:
    """Install ``config`` as the default logging configuration."""
    LoggerFactory.configure(config)


def configure_logging_from_dict(data: Dict[str, Any], environment: str = "dev") -> LoggingConfig:
    """Build a LoggingConfig from the ``logging`` section of config.yaml and install it."""
    config = LoggingConfig.from_dict({'environment': environment, **data})
    configure_logging(config)
    return config
