"""
SunX operation variants.

Each (resource, operation) pair is a tagged msgspec struct holding the typed
parameters for one call. The tag is ``"<resource>.<operation>"`` and field
names are camelCase on input (``contractCode``, ``orderPriceType``...).

Variants translate themselves into a query mapping and/or a JSON body; the
endpoint (method, path, auth) comes from the endpoint table.
"""

from typing import Any, Dict, List, Optional, Tuple, Type, Union

import msgspec

from sunx_perps.exchanges.structs.enums import (
    Direction, Offset, OrderPriceType, PositionMode, Resource, TradingBillType
)
from sunx_perps.infrastructure.exceptions.system import InvalidInputError


def _number(value: Union[int, float]) -> Union[int, float]:
    # 5.0 goes on the wire as 5
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def _optional(target: Dict[str, Any], key: str, value: Any) -> None:
    if value:
        target[key] = value


class SunxOperation(msgspec.Struct, frozen=True, tag_field="kind", rename="camel"):
    """Base for all operation variants."""

    @property
    def key(self) -> Tuple[Resource, str]:
        resource, operation = type(self).__struct_config__.tag.split('.', 1)
        return Resource(resource), operation

    def query(self) -> Optional[Dict[str, Any]]:
        return None

    def body(self) -> Optional[Dict[str, Any]]:
        return None


class _ContractQuery(SunxOperation, frozen=True):
    """Public lookups keyed by a required contract code."""
    contract_code: str

    def query(self) -> Optional[Dict[str, Any]]:
        return {'contract_code': self.contract_code}


class _OptionalContractQuery(SunxOperation, frozen=True):
    contract_code: str = ""

    def _contract_query(self) -> Dict[str, Any]:
        qs: Dict[str, Any] = {}
        _optional(qs, 'contract_code', self.contract_code)
        return qs

    def query(self) -> Optional[Dict[str, Any]]:
        return self._contract_query()


# Account

class GetBalance(SunxOperation, frozen=True, tag="account.getBalance"):
    pass


class GetTradingBills(_OptionalContractQuery, frozen=True, tag="account.getTradingBills"):
    bill_type: TradingBillType = msgspec.field(name="type", default=TradingBillType.ALL)

    def query(self) -> Optional[Dict[str, Any]]:
        qs = self._contract_query()
        _optional(qs, 'type', self.bill_type.value)
        return qs


# Market data

class GetContractInfo(SunxOperation, frozen=True, tag="marketData.getContractInfo"):
    pass


class GetFeeInfo(_ContractQuery, frozen=True, tag="marketData.getFeeInfo"):
    pass


class GetFundingRate(_ContractQuery, frozen=True, tag="marketData.getFundingRate"):
    pass


class GetHistoricalFundingRate(_ContractQuery, frozen=True, tag="marketData.getHistoricalFundingRate"):
    pass


class GetLeverageInfo(_ContractQuery, frozen=True, tag="marketData.getLeverageInfo"):
    pass


class GetMultiAssetCollateral(SunxOperation, frozen=True, tag="marketData.getMultiAssetCollateral"):
    pass


class GetSwapIndexPrice(_ContractQuery, frozen=True, tag="marketData.getSwapIndexPrice"):
    pass


# Orders

class PlaceOrder(SunxOperation, frozen=True, tag="order.placeOrder"):
    """
    Single order.

    ``price`` is sent only for limit and post-only orders, and only when
    non-zero.
    """
    contract_code: str
    direction: Direction
    offset: Offset
    volume: float
    order_price_type: OrderPriceType = OrderPriceType.LIMIT
    price: float = 0
    leverage_rate: int = 10
    client_order_id: str = ""

    def body(self) -> Optional[Dict[str, Any]]:
        body: Dict[str, Any] = {
            'contract_code': self.contract_code,
            'direction': self.direction.value,
            'offset': self.offset.value,
            'order_price_type': self.order_price_type.value,
            'volume': _number(self.volume),
            'lever_rate': self.leverage_rate,
        }
        if self.price and self.order_price_type.is_priced:
            body['price'] = _number(self.price)
        _optional(body, 'client_order_id', self.client_order_id)
        return body


class PlaceMultipleOrders(SunxOperation, frozen=True, tag="order.placeMultipleOrders"):
    """``orders`` is a JSON array of order objects in wire format."""
    orders: str = "[]"

    def parsed_orders(self) -> List[Any]:
        try:
            orders = msgspec.json.decode(self.orders)
        except msgspec.DecodeError:
            raise InvalidInputError("Invalid JSON format for orders") from None
        if not isinstance(orders, list):
            raise InvalidInputError("Invalid JSON format for orders")
        return orders

    def body(self) -> Optional[Dict[str, Any]]:
        return {'orders_data': self.parsed_orders()}


class CancelOrder(SunxOperation, frozen=True, tag="order.cancelOrder"):
    order_id: str
    contract_code: str = ""

    def body(self) -> Optional[Dict[str, Any]]:
        body: Dict[str, Any] = {'order_id': self.order_id}
        _optional(body, 'contract_code', self.contract_code)
        return body


class CancelMultipleOrders(SunxOperation, frozen=True, tag="order.cancelMultipleOrders"):
    """``order_ids`` is a comma separated list; blanks are dropped."""
    order_ids: str

    def body(self) -> Optional[Dict[str, Any]]:
        ids = [order_id.strip() for order_id in self.order_ids.split(',')]
        return {'order_id': ','.join(order_id for order_id in ids if order_id)}


class CancelAllOrders(SunxOperation, frozen=True, tag="order.cancelAllOrders"):
    contract_code: str = ""

    def body(self) -> Optional[Dict[str, Any]]:
        body: Dict[str, Any] = {}
        _optional(body, 'contract_code', self.contract_code)
        return body


class CloseSymbolAtMarket(SunxOperation, frozen=True, tag="order.closeSymbolAtMarket"):
    contract_code: str
    direction: Direction = Direction.BUY

    def body(self) -> Optional[Dict[str, Any]]:
        return {'contract_code': self.contract_code, 'direction': self.direction.value}


class CloseAllAtMarket(SunxOperation, frozen=True, tag="order.closeAllAtMarket"):
    direction: Direction = Direction.BUY

    def body(self) -> Optional[Dict[str, Any]]:
        return {'direction': self.direction.value}


class GetCurrentOrders(_OptionalContractQuery, frozen=True, tag="order.getCurrentOrders"):
    pass


class GetOrderHistory(_OptionalContractQuery, frozen=True, tag="order.getOrderHistory"):
    page_index: int = 1
    page_size: int = 20

    def query(self) -> Optional[Dict[str, Any]]:
        qs = self._contract_query()
        qs['page_index'] = self.page_index
        qs['page_size'] = self.page_size
        return qs


class GetOrderInfo(SunxOperation, frozen=True, tag="order.getOrderInfo"):
    order_id: str
    contract_code: str = ""

    def query(self) -> Optional[Dict[str, Any]]:
        qs: Dict[str, Any] = {'order_id': self.order_id}
        _optional(qs, 'contract_code', self.contract_code)
        return qs


# Positions

class GetCurrentPosition(_OptionalContractQuery, frozen=True, tag="position.getCurrentPosition"):
    pass


class SetLeverage(SunxOperation, frozen=True, tag="position.setLeverage"):
    contract_code: str
    leverage_rate: int

    def body(self) -> Optional[Dict[str, Any]]:
        return {'contract_code': self.contract_code, 'lever_rate': self.leverage_rate}


class GetPositionMode(SunxOperation, frozen=True, tag="position.getPositionMode"):
    pass


class SetPositionMode(SunxOperation, frozen=True, tag="position.setPositionMode"):
    position_mode: PositionMode = PositionMode.SINGLE_SIDE

    def body(self) -> Optional[Dict[str, Any]]:
        return {'position_mode': self.position_mode.value}


OPERATION_TYPES: Tuple[Type[SunxOperation], ...] = (
    GetBalance, GetTradingBills,
    GetContractInfo, GetFeeInfo, GetFundingRate, GetHistoricalFundingRate,
    GetLeverageInfo, GetMultiAssetCollateral, GetSwapIndexPrice,
    PlaceOrder, PlaceMultipleOrders, CancelOrder, CancelMultipleOrders,
    CancelAllOrders, CloseSymbolAtMarket, CloseAllAtMarket,
    GetCurrentOrders, GetOrderHistory, GetOrderInfo,
    GetCurrentPosition, SetLeverage, GetPositionMode, SetPositionMode,
)

AnyOperation = Union[OPERATION_TYPES]

OPERATIONS: Dict[Tuple[Resource, str], Type[SunxOperation]] = {}
for _operation_type in OPERATION_TYPES:
    _resource, _name = _operation_type.__struct_config__.tag.split('.', 1)
    OPERATIONS[(Resource(_resource), _name)] = _operation_type


def operation_tag(resource: Resource, operation: str) -> str:
    return f"{resource.value}.{operation}"


def parse_operation(resource: Resource, operation: str,
                    fields: Optional[Dict[str, Any]] = None) -> SunxOperation:
    """
    Resolve item fields into the variant for ``resource``/``operation``.

    Strings are coerced to the declared types (``"5"`` becomes 5 for numeric
    fields). Unknown fields are ignored.

    Raises:
        InvalidInputError: Unknown operation, missing or mistyped field
    """
    if (resource, operation) not in OPERATIONS:
        raise InvalidInputError(
            f"Unsupported operation '{operation}' for resource '{resource.value}'"
        )

    data = {**(fields or {}), 'kind': operation_tag(resource, operation)}
    try:
        return msgspec.convert(data, type=AnyOperation, strict=False)
    except msgspec.ValidationError as e:
        raise InvalidInputError(f"Invalid parameters for {resource.value}.{operation}: {e}") from None
