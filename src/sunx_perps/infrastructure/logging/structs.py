"""
Logging Configuration Structures

Structured configuration for the logging system using msgspec.Struct
for type safety.
"""

from typing import Optional, Dict, Any

import msgspec
from msgspec import Struct


_VALID_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class BackendConfig(Struct, frozen=True):
    """
    Base configuration for all logging backends.

    Attributes:
        enabled: Whether this backend is active
        min_level: Minimum log level to process (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    enabled: bool = True
    min_level: str = "INFO"

    def validate(self) -> None:
        """Validate backend configuration."""
        if self.min_level.upper() not in _VALID_LEVELS:
            raise ValueError(f"Invalid log level: {self.min_level}")


class ConsoleBackendConfig(BackendConfig):
    """
    Console backend configuration.

    Attributes:
        color: Enable colored output
        include_context: Include context information
        include_metrics: Print metric records as well as text
        max_message_length: Maximum message length before truncation
    """
    color: bool = True
    include_context: bool = True
    include_metrics: bool = False
    max_message_length: int = 1000


class FileBackendConfig(BackendConfig):
    """
    File backend configuration.

    Attributes:
        path: Log file path
        format: Output format (text or json)
        buffer_size: Number of lines buffered before a flush is scheduled
    """
    path: str = "logs/sunx.log"
    format: str = "text"
    buffer_size: int = 100

    def validate(self) -> None:
        """Validate file backend configuration."""
        super().validate()
        if self.format not in {"text", "json"}:
            raise ValueError(f"Invalid format: {self.format}")
        if self.buffer_size <= 0:
            raise ValueError("buffer_size must be positive")


class LoggingConfig(Struct, frozen=True):
    """
    Complete logging configuration.

    Attributes:
        environment: Environment name (dev, prod, test)
        console: Console backend configuration
        file: File backend configuration
        default_context: Default context for all log messages
    """
    environment: str = "dev"
    console: Optional[ConsoleBackendConfig] = None
    file: Optional[FileBackendConfig] = None
    default_context: Optional[Dict[str, Any]] = None

    def validate(self) -> None:
        """Validate complete configuration."""
        if self.environment not in {"dev", "prod", "test", "staging"}:
            raise ValueError(f"Invalid environment: {self.environment}")
        if self.console:
            self.console.validate()
        if self.file:
            self.file.validate()

    def to_dict(self) -> Dict[str, Any]:
        return msgspec.to_builtins(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LoggingConfig":
        """Create from a plain dictionary such as the ``logging`` section of config.yaml."""
        return msgspec.convert(data, type=cls)

    @classmethod
    def default_development(cls) -> "LoggingConfig":
        """Get default development configuration."""
        return cls(
            environment="dev",
            console=ConsoleBackendConfig(
                enabled=True,
                min_level="DEBUG",
                color=True,
                include_context=True
            ),
            file=FileBackendConfig(
                enabled=True,
                min_level="INFO",
                path="logs/dev.log",
                format="text"
            )
        )

    @classmethod
    def default_production(cls) -> "LoggingConfig":
        """Get default production configuration."""
        return cls(
            environment="prod",
            console=ConsoleBackendConfig(
                enabled=True,
                min_level="WARNING",
                color=False
            ),
            file=FileBackendConfig(
                enabled=True,
                min_level="INFO",
                path="logs/production.log",
                format="json"
            )
        )

    @classmethod
    def default_test(cls) -> "LoggingConfig":
        """Console only, warnings and above, no files written."""
        return cls(
            environment="test",
            console=ConsoleBackendConfig(enabled=True, min_level="WARNING", color=False)
        )
