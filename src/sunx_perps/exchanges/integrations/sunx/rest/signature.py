"""
SunX Request Signing

HMAC-SHA256 signature (version 2) over the canonical request string:

    METHOD\\nHOST\\nPATH\\nQUERYSTRING

QUERYSTRING holds every query parameter except ``Signature``, sorted by key
in code-point order, with only the values percent-encoded. The digest is
Base64 encoded with the standard alphabet and padding.

All functions here are pure; the same inputs always give the same signature.
"""

import base64
import hashlib
import hmac
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Mapping
from urllib.parse import quote


SIGNATURE_METHOD = "HmacSHA256"
SIGNATURE_VERSION = "2"
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S"


def stringify_value(value: Any) -> str:
    """
    Render a parameter value the way the API expects it on the wire.

    Booleans become ``true``/``false`` and integral floats lose their
    fractional part, so ``5.0`` is sent as ``5``.
    """
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def encode_value(value: Any) -> str:
    """
    Strict RFC 3986 percent-encoding of a single value.

    Only ``A-Z a-z 0-9 - _ . ~`` pass through; everything else, including
    ``! ' ( ) *`` and space, becomes ``%XX`` with upper-case hex.
    """
    return quote(stringify_value(value), safe="")


def canonical_query_string(params: Mapping[str, Any]) -> str:
    """Sorted ``key=encodedValue`` pairs joined with ``&``; empty for no params."""
    return "&".join(f"{key}={encode_value(params[key])}" for key in sorted(params))


def build_string_to_sign(method: str, host: str, path: str, params: Mapping[str, Any]) -> str:
    return "\n".join([
        method.upper(),
        host.lower(),
        path or "/",
        canonical_query_string(params),
    ])


def sign_payload(payload: str, secret_key: str) -> str:
    digest = hmac.new(
        secret_key.encode('utf-8'),
        payload.encode('utf-8'),
        hashlib.sha256
    ).digest()
    return base64.b64encode(digest).decode('ascii')


def compute_signature(method: str, host: str, path: str,
                      params: Mapping[str, Any], secret_key: str) -> str:
    """
    Compute the request signature.

    Args:
        method: HTTP verb, any case
        host: Bare host, port included only when non-default
        path: Request path without query string
        params: All query parameters except ``Signature``
        secret_key: API secret

    Returns:
        Base64 HMAC-SHA256 digest of the canonical string
    """
    return sign_payload(build_string_to_sign(method, host, path, params), secret_key)


def format_timestamp(moment: datetime) -> str:
    """UTC ``YYYY-MM-DDThh:mm:ss``; naive datetimes are taken as UTC."""
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return moment.strftime(TIMESTAMP_FORMAT)
