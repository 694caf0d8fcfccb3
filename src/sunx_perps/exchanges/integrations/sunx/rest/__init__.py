from .signature import (
    compute_signature,
    canonical_query_string,
    build_string_to_sign,
    encode_value,
    stringify_value,
    format_timestamp,
)
from .request_builder import build_authenticated_request, build_public_request, utc_now
from .endpoints import ApiVersion, Endpoint, ENDPOINTS, get_endpoint
from .sunx_rest_client import SunxRestClient, SunxErrorResponse

__all__ = [
    'compute_signature',
    'canonical_query_string',
    'build_string_to_sign',
    'encode_value',
    'stringify_value',
    'format_timestamp',
    'build_authenticated_request',
    'build_public_request',
    'utc_now',
    'ApiVersion',
    'Endpoint',
    'ENDPOINTS',
    'get_endpoint',
    'SunxRestClient',
    'SunxErrorResponse',
]
