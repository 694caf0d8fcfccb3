"""
SunX Operation Dispatcher

Runs one (resource, operation) over a batch of items: each item's fields are
resolved into an operation variant, sent as exactly one request, and the
response is packaged into ExecutionRecords paired with the item index.

Items are processed strictly in order, one awaited call at a time.
"""

from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

import msgspec

from sunx_perps.exchanges.structs.enums import ApiVersion, Resource
from sunx_perps.infrastructure.exceptions.system import InvalidInputError
from sunx_perps.infrastructure.logging import HFTLoggerInterface, LoggingTimer, get_exchange_logger
from .operations import OPERATIONS, parse_operation
from .rest.endpoints import get_endpoint
from .rest.sunx_rest_client import SunxRestClient


class ExecutionRecord(msgspec.Struct, frozen=True):
    """One output item; error records hold ``{"error": message}``."""
    json: Dict[str, Any]
    paired_item: int

    @property
    def is_error(self) -> bool:
        return set(self.json) == {'error'}


def to_records(response: Any, item_index: int) -> List[ExecutionRecord]:
    """
    Package a response: a list yields one record per element, anything else one record.

    Non-object values are wrapped as ``{"value": ...}``; None becomes ``{}``.
    """
    values = response if isinstance(response, list) else [response]
    records = []
    for value in values:
        if value is None:
            data: Dict[str, Any] = {}
        elif isinstance(value, dict):
            data = value
        else:
            data = {'value': value}
        records.append(ExecutionRecord(json=data, paired_item=item_index))
    return records


class SunxOperationDispatcher:
    """
    Batch executor for SunX operations.

    With ``continue_on_fail`` a failing item produces an error record and the
    batch continues; otherwise the first error propagates.
    """

    def __init__(self, client: SunxRestClient, continue_on_fail: bool = False,
                 api_version: ApiVersion = ApiVersion.SAPI_V1,
                 logger: Optional[HFTLoggerInterface] = None):
        self.client = client
        self.continue_on_fail = continue_on_fail
        self.api_version = api_version
        self.logger = logger or get_exchange_logger('sunx', 'dispatcher')

    async def execute(self, resource: Union[Resource, str], operation: str,
                      items: Sequence[Dict[str, Any]]) -> List[ExecutionRecord]:
        """
        Execute ``operation`` once per item.

        Raises:
            InvalidInputError: Unknown resource or operation (whole batch)
            RemoteApiError / InvalidInputError: First item failure when not continuing
        """
        resource = self._resolve_resource(resource)
        if (resource, operation) not in OPERATIONS:
            raise InvalidInputError(
                f"Unsupported operation '{operation}' for resource '{resource.value}'"
            )
        endpoint = get_endpoint(resource, operation, self.api_version)

        self.logger.info("Dispatching SunX batch",
                         resource=resource.value,
                         operation=operation,
                         items=len(items))

        results: List[ExecutionRecord] = []
        for index, fields in enumerate(items):
            with LoggingTimer(self.logger, "sunx_operation", op=operation, item_index=index):
                try:
                    query, body = self._resolve_item(resource, operation, fields, index)
                    response = await self.client.call(endpoint, query, body)
                except Exception as e:
                    if not self.continue_on_fail:
                        raise
                    self.logger.warning("SunX item failed, continuing",
                                        op=operation,
                                        item_index=index,
                                        error_type=type(e).__name__,
                                        error_message=str(e))
                    self.logger.counter("sunx_operation_errors", op=operation,
                                        error=type(e).__name__)
                    results.append(ExecutionRecord(json={'error': str(e)}, paired_item=index))
                    continue

            results.extend(to_records(response, index))

        return results

    @staticmethod
    def _resolve_resource(resource: Union[Resource, str]) -> Resource:
        if isinstance(resource, Resource):
            return resource
        try:
            return Resource(resource)
        except ValueError:
            raise InvalidInputError(f"Unsupported resource '{resource}'") from None

    @staticmethod
    def _resolve_item(resource: Resource, operation: str,
                      fields: Dict[str, Any], index: int) -> Tuple[Optional[Dict[str, Any]], Optional[Dict[str, Any]]]:
        try:
            variant = parse_operation(resource, operation, fields)
            return variant.query(), variant.body()
        except InvalidInputError as e:
            raise e.with_item(index) from None
