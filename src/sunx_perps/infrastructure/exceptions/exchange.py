from typing import Any, Optional


class ExchangeRestError(Exception):
    """Base exception for all exchange REST API errors."""
    def __init__(self, code: int, message: str, api_code: Any = None) -> None:
        self.api_code = api_code
        self.message = message
        self.status_code = code
        super().__init__(f"HTTP {code}: {message}")


class RemoteApiError(ExchangeRestError):
    """
    Error reported by the SunX API or raised while talking to it.

    Signature and authentication failures arrive here as well; the API does not
    distinguish them from any other rejected request.
    """
    def __init__(self, code: int, message: str, api_code: Any = None,
                 body: Optional[str] = None) -> None:
        super().__init__(code, message, api_code)
        self.body = body

    def __str__(self) -> str:
        return f"SunX API Error: {self.message}"


# Connection and Infrastructure Errors
class ExchangeConnectionRestError(RemoteApiError):
    """Network failure before a response was received."""
    pass


class ExchangeTimeoutError(ExchangeConnectionRestError):
    """Request timed out in the transport."""
    pass
