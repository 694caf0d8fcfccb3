from enum import Enum
from typing import Any, Dict, Optional, Union

import msgspec


class HTTPMethod(Enum):
    """HTTP methods."""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"

    @classmethod
    def coerce(cls, method: Union["HTTPMethod", str]) -> "HTTPMethod":
        """Accept an enum member or a case-insensitive verb name."""
        if isinstance(method, cls):
            return method
        return cls(str(method).upper())


class OutboundRequest(msgspec.Struct, frozen=True):
    """
    Fully-formed description of one HTTP call, handed to the transport.

    ``params`` is sent as the query string exactly as stored, so for
    authenticated calls it holds the same strings that were signed.
    """
    method: HTTPMethod
    url: str
    params: Dict[str, str]
    headers: Dict[str, str]
    body: Optional[Any] = None

    @property
    def has_body(self) -> bool:
        return self.body is not None
