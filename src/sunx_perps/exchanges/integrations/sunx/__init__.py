"""
SunX perpetual futures integration.

Usage:
    async with SunxRestClient(credentials) as client:
        dispatcher = SunxOperationDispatcher(client, continue_on_fail=True)
        records = await dispatcher.execute('order', 'placeOrder', [fields])
"""

from .rest import SunxRestClient, build_authenticated_request, build_public_request, compute_signature
from .operations import OPERATIONS, SunxOperation, parse_operation
from .dispatcher import ExecutionRecord, SunxOperationDispatcher

__all__ = [
    'SunxRestClient',
    'build_authenticated_request',
    'build_public_request',
    'compute_signature',
    'OPERATIONS',
    'SunxOperation',
    'parse_operation',
    'ExecutionRecord',
    'SunxOperationDispatcher',
]
