from .exchange import (
    ExchangeRestError,
    RemoteApiError,
    ExchangeConnectionRestError,
    ExchangeTimeoutError,
)
from .system import ConfigurationError, InvalidInputError

__all__ = [
    'ExchangeRestError',
    'RemoteApiError',
    'ExchangeConnectionRestError',
    'ExchangeTimeoutError',
    'ConfigurationError',
    'InvalidInputError',
]
