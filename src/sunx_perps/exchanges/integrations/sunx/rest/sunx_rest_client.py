"""
SunX REST Client

Executes signed and public SunX requests over the shared aiohttp session
from BaseRestClientInterface.

Key Features:
- HMAC-SHA256 signed private requests (see signature.py)
- Fresh timestamp per request
- SunX error body mapping to RemoteApiError
- Optional DEBUG logging of the canonical string for signature troubleshooting
"""

from datetime import datetime
from typing import Any, Callable, Mapping, Optional, Union

import aiohttp
import msgspec

from sunx_perps.config.structs import NetworkConfig, SigningConfig, SunxConfig, SunxCredentials
from sunx_perps.infrastructure.exceptions.exchange import RemoteApiError
from sunx_perps.infrastructure.exceptions.system import ConfigurationError
from sunx_perps.infrastructure.logging import HFTLoggerInterface, get_exchange_logger
from sunx_perps.infrastructure.networking.http.rest_client_interface import BaseRestClientInterface
from sunx_perps.infrastructure.networking.http.structs import HTTPMethod
from .endpoints import BALANCE_ENDPOINT, Endpoint
from .request_builder import build_authenticated_request, build_public_request, utc_now


class SunxErrorResponse(msgspec.Struct):
    """SunX error body; every field is optional."""
    status: Optional[str] = None
    err_code: Optional[Union[int, str]] = None
    err_msg: Optional[str] = None
    message: Optional[str] = None


class SunxRestClient(BaseRestClientInterface):
    """
    REST client for the SunX perpetual futures API.

    Usage:
        async with SunxRestClient(credentials) as client:
            balance = await client.private_request('GET', '/sapi/v1/account/balance')
    """

    def __init__(self, credentials: SunxCredentials,
                 network: Optional[NetworkConfig] = None,
                 signing: Optional[SigningConfig] = None,
                 logger: Optional[HFTLoggerInterface] = None,
                 session: Optional[aiohttp.ClientSession] = None,
                 clock: Callable[[], datetime] = utc_now):
        super().__init__(network, logger or get_exchange_logger('sunx', 'rest'), session)
        self.credentials = credentials
        self.signing = signing or SigningConfig()
        self._clock = clock

        self.logger.debug("SunX REST client initialized",
                          base_url=credentials.base_url,
                          access_key=credentials.get_preview(),
                          has_credentials=credentials.has_private_api)

    @classmethod
    def from_config(cls, config: SunxConfig,
                    logger: Optional[HFTLoggerInterface] = None) -> 'SunxRestClient':
        return cls(config.credentials, network=config.network,
                   signing=config.signing, logger=logger)

    @property
    def exchange_name(self) -> str:
        return "SunX"

    def _handle_error(self, status: int, response_text: str) -> Exception:
        """
        Map a SunX error response to RemoteApiError.

        The message is ``err_msg``, then ``message``, then the raw body.
        """
        api_code = None
        message = response_text
        try:
            error_response = msgspec.json.decode(response_text, type=SunxErrorResponse)
        except (msgspec.DecodeError, msgspec.ValidationError):
            error_response = None

        if error_response is not None:
            api_code = error_response.err_code
            message = error_response.err_msg or error_response.message or response_text

        return RemoteApiError(status, message or f"HTTP {status}", api_code, response_text)

    async def private_request(self, method: Union[HTTPMethod, str], endpoint: str,
                              body: Optional[Any] = None,
                              params: Optional[Mapping[str, Any]] = None) -> Any:
        """
        Send a signed request.

        Raises:
            ConfigurationError: Credentials are not configured
            RemoteApiError: API rejection or transport failure
        """
        if not self.credentials.has_private_api:
            raise ConfigurationError("SunX credentials are required for private endpoints",
                                     'access_key_id')

        request = build_authenticated_request(
            self.credentials, method, endpoint, body, params,
            clock=self._clock,
            logger=self.logger,
            diagnostics=self.signing.diagnostics,
        )
        return await self.execute(request, endpoint)

    async def public_request(self, method: Union[HTTPMethod, str], endpoint: str,
                             params: Optional[Mapping[str, Any]] = None) -> Any:
        request = build_public_request(self.credentials.base_url, method, endpoint, params)
        return await self.execute(request, endpoint)

    async def call(self, endpoint: Endpoint,
                   query: Optional[Mapping[str, Any]] = None,
                   body: Optional[Any] = None) -> Any:
        """Route a table endpoint to the signed or public path."""
        if endpoint.authenticated:
            return await self.private_request(endpoint.method, endpoint.path, body, query)
        return await self.public_request(endpoint.method, endpoint.path, query)

    async def test_credentials(self) -> bool:
        """
        Verify credentials with a balance request.

        Returns True on success; API errors propagate with the SunX message.
        """
        await self.call(BALANCE_ENDPOINT)
        self.logger.info("SunX credentials verified", access_key=self.credentials.get_preview())
        return True
