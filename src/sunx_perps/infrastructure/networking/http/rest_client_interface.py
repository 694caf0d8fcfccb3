"""
REST Base Implementation

Shared base class for exchange REST clients.

Key Features:
- Constructor injection for configuration and logger
- Shared aiohttp session management and connection handling
- msgspec JSON encoding/decoding
- Abstract error mapping for exchange-specific error bodies
- Request latency tracking through logger metrics

Requests are executed once. Transport failures are mapped to
ExchangeConnectionRestError / ExchangeTimeoutError and re-raised.
"""

import asyncio
import time
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import aiohttp
import msgspec

from sunx_perps.config.structs import NetworkConfig
from sunx_perps.infrastructure.exceptions.exchange import (
    ExchangeConnectionRestError, ExchangeTimeoutError, RemoteApiError
)
from sunx_perps.infrastructure.logging import HFTLoggerInterface, get_logger
from .structs import OutboundRequest


class BaseRestClientInterface(ABC):
    """
    Abstract base class for exchange REST clients.

    Subclasses build OutboundRequest objects (signing included) and map error
    bodies to exceptions; this class owns the session and executes requests.
    """

    def __init__(self, network: Optional[NetworkConfig] = None,
                 logger: Optional[HFTLoggerInterface] = None,
                 session: Optional[aiohttp.ClientSession] = None):
        """
        Args:
            network: Transport timeouts
            logger: HFT logger instance (injected)
            session: Pre-built session; the client does not close sessions it did not create
        """
        self.network = network or NetworkConfig()
        self.logger = logger or get_logger(f'rest.client.{self.exchange_name.lower()}')

        self._session: Optional[aiohttp.ClientSession] = session
        self._owns_session = session is None

        # Performance tracking
        self._request_count = 0
        self._total_latency = 0.0

    @property
    @abstractmethod
    def exchange_name(self) -> str:
        """Exchange name for logging and identification."""
        pass

    @abstractmethod
    def _handle_error(self, status: int, response_text: str) -> Exception:
        """
        Handle exchange-specific error responses.

        Args:
            status: HTTP status code
            response_text: Response body text

        Returns:
            Appropriate exception for the error
        """
        pass

    def _parse_response(self, response_text: str, status: int = 200) -> Any:
        """
        Parse response text to JSON using msgspec.

        Raises:
            RemoteApiError: If a successful response body is not JSON
        """
        if not response_text:
            return None

        try:
            return msgspec.json.decode(response_text)
        except msgspec.DecodeError:
            raise RemoteApiError(status, f"Invalid JSON response: {response_text[:100]}",
                                 body=response_text) from None

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure aiohttp session is created."""
        if self._session is None or self._session.closed:
            timeout = aiohttp.ClientTimeout(
                total=self.network.request_timeout,
                connect=self.network.connect_timeout,
            )

            self._session = aiohttp.ClientSession(
                timeout=timeout,
                json_serialize=lambda obj: msgspec.json.encode(obj).decode('utf-8'),
            )
            self._owns_session = True
        return self._session

    async def _send(self, request: OutboundRequest) -> Any:
        session = await self._ensure_session()

        try:
            async with session.request(
                request.method.value,
                request.url,
                params=request.params or None,
                json=request.body if request.has_body else None,
                headers=request.headers,
            ) as response:
                response_text = await response.text()

                if response.status >= 400:
                    raise self._handle_error(response.status, response_text)

                return self._parse_response(response_text, response.status)

        except asyncio.TimeoutError as e:
            raise ExchangeTimeoutError(
                408, f"Request timed out after {self.network.request_timeout}s"
            ) from e
        except aiohttp.ClientError as e:
            raise ExchangeConnectionRestError(503, f"Connection failed: {type(e).__name__}") from e

    async def execute(self, request: OutboundRequest, endpoint: Optional[str] = None) -> Any:
        """
        Execute a prepared request with performance tracking.

        Args:
            request: Fully built request
            endpoint: Path used as a metric tag (defaults to the URL)

        Returns:
            Parsed response data
        """
        tag = endpoint or request.url
        start_time = time.perf_counter()

        try:
            result = await self._send(request)

            duration_ms = (time.perf_counter() - start_time) * 1000
            self._request_count += 1
            self._total_latency += duration_ms

            self.logger.latency(f"{self.exchange_name.lower()}_request", duration_ms,
                                endpoint=tag, method=request.method.value, status="success")
            return result

        except Exception as e:
            duration_ms = (time.perf_counter() - start_time) * 1000

            self.logger.counter(f"{self.exchange_name.lower()}_request_errors",
                                endpoint=tag, method=request.method.value,
                                error=type(e).__name__)

            self.logger.error(f"{self.exchange_name} request failed",
                              exchange=self.exchange_name.lower(),
                              method=request.method.value,
                              endpoint=tag,
                              error_type=type(e).__name__,
                              error_message=str(e),
                              duration_ms=duration_ms)
            raise

    async def close(self):
        """Clean up resources and close connections."""
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()

        if self._request_count > 0:
            avg_latency = self._total_latency / self._request_count
            self.logger.info(f"{self.exchange_name} REST client closed",
                             exchange=self.exchange_name.lower(),
                             total_requests=self._request_count,
                             avg_latency_ms=avg_latency)

    async def __aenter__(self):
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    def get_performance_stats(self) -> Dict[str, Any]:
        """Get performance statistics for monitoring."""
        if self._request_count == 0:
            return {"requests": 0, "avg_latency_ms": 0.0}

        return {
            "requests": self._request_count,
            "avg_latency_ms": self._total_latency / self._request_count,
            "total_latency_ms": self._total_latency
        }
