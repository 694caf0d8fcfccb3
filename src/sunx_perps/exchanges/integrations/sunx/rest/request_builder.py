"""
SunX Request Builders

Turn credentials, an endpoint and parameters into an OutboundRequest ready
for the transport. Authenticated requests carry the signature parameters in
the query string; public requests carry none.
"""

from datetime import datetime, timezone
from typing import Any, Callable, Dict, Mapping, Optional, Tuple, Union
from urllib.parse import urlsplit

from sunx_perps.config.structs import SunxCredentials
from sunx_perps.infrastructure.logging import HFTLoggerInterface
from sunx_perps.infrastructure.networking.http.structs import HTTPMethod, OutboundRequest
from .signature import (
    SIGNATURE_METHOD, SIGNATURE_VERSION,
    build_string_to_sign, format_timestamp, sign_payload, stringify_value
)


JSON_HEADERS = {
    'Content-Type': 'application/json',
    'Accept': 'application/json',
}

_DEFAULT_PORTS = {'http': 80, 'https': 443}

_BODY_METHODS = (HTTPMethod.POST, HTTPMethod.PUT)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def split_host_path(url: str) -> Tuple[str, str]:
    """Return the signing host (lower case, non-default port kept) and path of ``url``."""
    parts = urlsplit(url)
    host = (parts.hostname or '').lower()
    if parts.port is not None and parts.port != _DEFAULT_PORTS.get(parts.scheme):
        host = f"{host}:{parts.port}"
    return host, parts.path or '/'


def _clean_params(params: Optional[Mapping[str, Any]]) -> Dict[str, str]:
    # None and "" are dropped; everything else is stringified once
    cleaned: Dict[str, str] = {}
    for key, value in (params or {}).items():
        if value is None or value == "":
            continue
        cleaned[key] = stringify_value(value)
    return cleaned


def build_authenticated_request(credentials: SunxCredentials,
                                method: Union[HTTPMethod, str],
                                endpoint: str,
                                body: Optional[Any] = None,
                                extra_params: Optional[Mapping[str, Any]] = None,
                                *,
                                clock: Callable[[], datetime] = utc_now,
                                logger: Optional[HFTLoggerInterface] = None,
                                diagnostics: bool = False) -> OutboundRequest:
    """
    Build a signed request.

    The timestamp is taken from ``clock`` before signing. Extra params that
    are None or empty are skipped. The query parameters sent are exactly the
    signed ones plus ``Signature``.

    Args:
        credentials: Access key, secret and base URL
        method: HTTP verb
        endpoint: Path appended to the base URL
        body: JSON body, kept only for POST and PUT
        extra_params: Additional query parameters
        clock: Source of the current time
        logger: Receives the string-to-sign when ``diagnostics`` is on
        diagnostics: Log the canonical string at DEBUG

    Returns:
        OutboundRequest with auth params, Signature and JSON headers
    """
    http_method = HTTPMethod.coerce(method)
    url = f"{credentials.base_url.rstrip('/')}{endpoint}"
    host, path = split_host_path(url)

    params: Dict[str, str] = {
        'AccessKeyId': credentials.access_key_id,
        'SignatureMethod': SIGNATURE_METHOD,
        'SignatureVersion': SIGNATURE_VERSION,
        'Timestamp': format_timestamp(clock()),
    }
    params.update(_clean_params(extra_params))

    string_to_sign = build_string_to_sign(http_method.value, host, path, params)
    if diagnostics and logger is not None:
        logger.debug("SunX string to sign",
                     method=http_method.value,
                     endpoint=endpoint,
                     string_to_sign=string_to_sign)

    params['Signature'] = sign_payload(string_to_sign, credentials.secret_key)

    return OutboundRequest(
        method=http_method,
        url=url,
        params=params,
        headers=dict(JSON_HEADERS),
        body=body if http_method in _BODY_METHODS else None,
    )


def build_public_request(base_url: str,
                         method: Union[HTTPMethod, str],
                         endpoint: str,
                         params: Optional[Mapping[str, Any]] = None) -> OutboundRequest:
    """Build an unsigned request; empty params are dropped as for signed requests."""
    return OutboundRequest(
        method=HTTPMethod.coerce(method),
        url=f"{base_url.rstrip('/')}{endpoint}",
        params=_clean_params(params),
        headers=dict(JSON_HEADERS),
    )
