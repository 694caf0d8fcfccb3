"""Test SunX operation dispatcher batch semantics."""

from typing import List

import pytest
from unittest.mock import AsyncMock, MagicMock

from sunx_perps.exchanges.integrations.sunx.dispatcher import (
    ExecutionRecord, SunxOperationDispatcher, to_records
)
from sunx_perps.exchanges.integrations.sunx.rest.endpoints import get_endpoint
from sunx_perps.exchanges.structs.enums import ApiVersion, Resource
from sunx_perps.infrastructure.exceptions import InvalidInputError, RemoteApiError
from sunx_perps.infrastructure.logging import HFTLogger, LogBackend, LogLevel, LogRecord


@pytest.fixture
def client():
    client = MagicMock()
    client.call = AsyncMock(return_value={'status': 'ok'})
    return client


def _order(order_id):
    return {'orderId': order_id, 'contractCode': 'BTC-USDT'}


class TestDispatcherBatch:
    """Test per-item execution and failure policy."""

    async def test_one_call_per_item(self, client):
        dispatcher = SunxOperationDispatcher(client)
        records = await dispatcher.execute('order', 'cancelOrder', [_order('1'), _order('2')])

        assert client.call.await_count == 2
        assert [r.paired_item for r in records] == [0, 1]

        endpoint, query, body = client.call.await_args_list[1].args
        assert endpoint == get_endpoint(Resource.ORDER, 'cancelOrder')
        assert query is None
        assert body == {'order_id': '2', 'contract_code': 'BTC-USDT'}

    async def test_get_operation_sends_query(self, client):
        dispatcher = SunxOperationDispatcher(client)
        await dispatcher.execute(Resource.POSITION, 'getCurrentPosition', [{'contractCode': 'ETH-USDT'}])

        endpoint, query, body = client.call.await_args.args
        assert endpoint.path == '/sapi/v1/position/info'
        assert query == {'contract_code': 'ETH-USDT'}
        assert body is None

    async def test_continue_on_fail_isolates_errors(self, client):
        client.call.side_effect = [
            {'order_id': '1'},
            RemoteApiError(400, 'Insufficient margin', 1047),
            {'order_id': '3'},
        ]
        dispatcher = SunxOperationDispatcher(client, continue_on_fail=True)

        records = await dispatcher.execute('order', 'cancelOrder',
                                           [_order('1'), _order('2'), _order('3')])

        assert records == [
            ExecutionRecord(json={'order_id': '1'}, paired_item=0),
            ExecutionRecord(json={'error': 'SunX API Error: Insufficient margin'}, paired_item=1),
            ExecutionRecord(json={'order_id': '3'}, paired_item=2),
        ]
        assert records[1].is_error
        assert not records[0].is_error

    async def test_failure_aborts_without_continue(self, client):
        client.call.side_effect = [
            {'order_id': '1'},
            RemoteApiError(400, 'Insufficient margin'),
            {'order_id': '3'},
        ]
        dispatcher = SunxOperationDispatcher(client)

        with pytest.raises(RemoteApiError, match='Insufficient margin'):
            await dispatcher.execute('order', 'cancelOrder', [_order('1'), _order('2'), _order('3')])

        assert client.call.await_count == 2

    async def test_invalid_item_recorded_with_index(self, client):
        dispatcher = SunxOperationDispatcher(client, continue_on_fail=True)
        records = await dispatcher.execute('order', 'placeMultipleOrders',
                                           [{'orders': 'not json'}, {'orders': '[]'}])

        assert records[0] == ExecutionRecord(json={'error': 'Invalid JSON format for orders'}, paired_item=0)
        assert records[1].paired_item == 1
        assert client.call.await_count == 1

    async def test_invalid_item_raises_with_index(self, client):
        dispatcher = SunxOperationDispatcher(client)

        with pytest.raises(InvalidInputError) as exc_info:
            await dispatcher.execute('order', 'cancelOrder', [_order('1'), {'contractCode': 'BTC-USDT'}])

        assert exc_info.value.item_index == 1
        assert client.call.await_count == 1

    async def test_unknown_operation_rejects_batch(self, client):
        dispatcher = SunxOperationDispatcher(client, continue_on_fail=True)

        with pytest.raises(InvalidInputError, match='Unsupported operation'):
            await dispatcher.execute('account', 'withdraw', [{}])

        client.call.assert_not_awaited()

    async def test_unknown_resource_rejects_batch(self, client):
        dispatcher = SunxOperationDispatcher(client)

        with pytest.raises(InvalidInputError, match='Unsupported resource'):
            await dispatcher.execute('wallet', 'getBalance', [{}])

    async def test_empty_batch(self, client):
        dispatcher = SunxOperationDispatcher(client)
        assert await dispatcher.execute('account', 'getBalance', []) == []


class TestResponsePackaging:
    """Test response to record conversion."""

    async def test_list_response_yields_record_per_element(self, client):
        client.call.return_value = [{'contract_code': 'BTC-USDT'}, {'contract_code': 'ETH-USDT'}]
        dispatcher = SunxOperationDispatcher(client)

        records = await dispatcher.execute('marketData', 'getContractInfo', [{}])

        assert [r.json['contract_code'] for r in records] == ['BTC-USDT', 'ETH-USDT']
        assert {r.paired_item for r in records} == {0}

    def test_none_becomes_empty_object(self):
        assert to_records(None, 3) == [ExecutionRecord(json={}, paired_item=3)]

    def test_scalar_is_wrapped(self):
        assert to_records('ok', 0) == [ExecutionRecord(json={'value': 'ok'}, paired_item=0)]

    def test_empty_list_yields_nothing(self):
        assert to_records([], 0) == []


class RecordingBackend(LogBackend):
    def __init__(self):
        super().__init__("recording")
        self.records: List[LogRecord] = []

    def should_handle(self, record: LogRecord) -> bool:
        return True

    def write_sync(self, record: LogRecord) -> None:
        self.records.append(record)

    async def flush(self) -> None:
        pass


@pytest.fixture
def backend():
    return RecordingBackend()


@pytest.fixture
def recording_logger(backend):
    logger = HFTLogger("test.dispatcher", [backend])
    logger.propagate = False
    return logger


def _place_order(client_order_id):
    return {'contractCode': 'BTC-USDT', 'direction': 'buy', 'offset': 'open',
            'volume': 1, 'price': 65000, 'clientOrderId': client_order_id}


class TestDispatcherLogging:
    """Test dispatcher runs with real loggers attached."""

    async def test_successful_order_is_not_reported_as_error(self, client, recording_logger, backend):
        client.call.return_value = {'status': 'ok', 'data': {'order_id': 99}}
        dispatcher = SunxOperationDispatcher(client, continue_on_fail=True, logger=recording_logger)

        records = await dispatcher.execute('order', 'placeOrder', [_place_order('c1')])

        assert records == [ExecutionRecord(json={'status': 'ok', 'data': {'order_id': 99}}, paired_item=0)]
        latency = [r for r in backend.records if r.metric_name == 'sunx_operation_latency_ms']
        assert len(latency) == 1
        assert latency[0].metric_tags['op'] == 'placeOrder'
        assert latency[0].metric_tags['item_index'] == 0
        assert not [r for r in backend.records if r.level >= LogLevel.WARNING]

    async def test_default_backends_record_success(self, client):
        dispatcher = SunxOperationDispatcher(client)
        assert isinstance(dispatcher.logger, HFTLogger)

        records = await dispatcher.execute('order', 'placeOrder', [_place_order('c1'), _place_order('c2')])

        assert [r.json for r in records] == [{'status': 'ok'}, {'status': 'ok'}]
        assert client.call.await_count == 2

    async def test_failed_item_counted(self, client, recording_logger, backend):
        client.call.side_effect = [RemoteApiError(400, 'Insufficient margin'), {'order_id': '2'}]
        dispatcher = SunxOperationDispatcher(client, continue_on_fail=True, logger=recording_logger)

        records = await dispatcher.execute('order', 'cancelOrder', [_order('1'), _order('2')])

        assert [r.is_error for r in records] == [True, False]
        counters = [r for r in backend.records if r.metric_name == 'sunx_operation_errors_count']
        assert counters[0].metric_tags == {'op': 'cancelOrder', 'error': 'RemoteApiError'}
        warning = next(r for r in backend.records if r.level == LogLevel.WARNING)
        assert warning.context['item_index'] == 0

    async def test_aborting_item_logs_error(self, client, recording_logger, backend):
        client.call.side_effect = RemoteApiError(400, 'Insufficient margin')
        dispatcher = SunxOperationDispatcher(client, logger=recording_logger)

        with pytest.raises(RemoteApiError):
            await dispatcher.execute('order', 'cancelOrder', [_order('1')])

        error = backend.records[-1]
        assert error.level == LogLevel.ERROR
        assert error.message == 'sunx_operation failed'
        assert error.context['error_type'] == 'RemoteApiError'

    async def test_api_version_selects_endpoint_table(self, client):
        dispatcher = SunxOperationDispatcher(client, api_version=ApiVersion.SAPI_V1)
        await dispatcher.execute('account', 'getBalance', [{}])

        endpoint = client.call.await_args.args[0]
        assert endpoint == get_endpoint(Resource.ACCOUNT, 'getBalance', ApiVersion.SAPI_V1)
