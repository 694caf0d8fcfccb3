"""
SunX endpoint table.

Maps (resource, operation) to HTTP method, path and auth requirement per API
version. Only ``sapi/v1`` is published; new versions get their own table.
"""

from typing import Dict, Tuple

import msgspec

from sunx_perps.exchanges.structs.enums import ApiVersion, Resource
from sunx_perps.infrastructure.exceptions.system import InvalidInputError
from sunx_perps.infrastructure.networking.http.structs import HTTPMethod


class Endpoint(msgspec.Struct, frozen=True):
    method: HTTPMethod
    path: str
    authenticated: bool = True


EndpointKey = Tuple[Resource, str]

_SAPI_V1: Dict[EndpointKey, Endpoint] = {
    # Account
    (Resource.ACCOUNT, 'getBalance'): Endpoint(HTTPMethod.GET, '/sapi/v1/account/balance'),
    (Resource.ACCOUNT, 'getTradingBills'): Endpoint(HTTPMethod.GET, '/sapi/v1/account/financial_record'),

    # Market data (public)
    (Resource.MARKET_DATA, 'getContractInfo'): Endpoint(HTTPMethod.GET, '/sapi/v1/public/contract_info', False),
    (Resource.MARKET_DATA, 'getFeeInfo'): Endpoint(HTTPMethod.GET, '/sapi/v1/public/swap_fee', False),
    (Resource.MARKET_DATA, 'getFundingRate'): Endpoint(HTTPMethod.GET, '/sapi/v1/public/funding_rate', False),
    (Resource.MARKET_DATA, 'getHistoricalFundingRate'): Endpoint(
        HTTPMethod.GET, '/sapi/v1/public/historical_funding_rate', False),
    (Resource.MARKET_DATA, 'getLeverageInfo'): Endpoint(HTTPMethod.GET, '/sapi/v1/public/swap_adjustfactor', False),
    (Resource.MARKET_DATA, 'getMultiAssetCollateral'): Endpoint(
        HTTPMethod.GET, '/sapi/v1/public/cross_transfer_info', False),
    (Resource.MARKET_DATA, 'getSwapIndexPrice'): Endpoint(HTTPMethod.GET, '/sapi/v1/public/swap_index', False),

    # Orders
    (Resource.ORDER, 'placeOrder'): Endpoint(HTTPMethod.POST, '/sapi/v1/order'),
    (Resource.ORDER, 'placeMultipleOrders'): Endpoint(HTTPMethod.POST, '/sapi/v1/order/batch'),
    (Resource.ORDER, 'cancelOrder'): Endpoint(HTTPMethod.POST, '/sapi/v1/order/cancel'),
    (Resource.ORDER, 'cancelMultipleOrders'): Endpoint(HTTPMethod.POST, '/sapi/v1/order/cancel'),
    (Resource.ORDER, 'cancelAllOrders'): Endpoint(HTTPMethod.POST, '/sapi/v1/order/cancelall'),
    (Resource.ORDER, 'closeSymbolAtMarket'): Endpoint(HTTPMethod.POST, '/sapi/v1/order/close_position'),
    (Resource.ORDER, 'closeAllAtMarket'): Endpoint(HTTPMethod.POST, '/sapi/v1/order/close_all_position'),
    (Resource.ORDER, 'getCurrentOrders'): Endpoint(HTTPMethod.GET, '/sapi/v1/order/openorders'),
    (Resource.ORDER, 'getOrderHistory'): Endpoint(HTTPMethod.GET, '/sapi/v1/order/hisorders'),
    (Resource.ORDER, 'getOrderInfo'): Endpoint(HTTPMethod.GET, '/sapi/v1/order/info'),

    # Positions
    (Resource.POSITION, 'getCurrentPosition'): Endpoint(HTTPMethod.GET, '/sapi/v1/position/info'),
    (Resource.POSITION, 'setLeverage'): Endpoint(HTTPMethod.POST, '/sapi/v1/position/switch_lever_rate'),
    (Resource.POSITION, 'getPositionMode'): Endpoint(HTTPMethod.GET, '/sapi/v1/position/position_mode'),
    (Resource.POSITION, 'setPositionMode'): Endpoint(HTTPMethod.POST, '/sapi/v1/position/switch_position_mode'),
}

ENDPOINTS: Dict[ApiVersion, Dict[EndpointKey, Endpoint]] = {
    ApiVersion.SAPI_V1: _SAPI_V1,
}

BALANCE_ENDPOINT = _SAPI_V1[(Resource.ACCOUNT, 'getBalance')]


def get_endpoint(resource: Resource, operation: str,
                 version: ApiVersion = ApiVersion.SAPI_V1) -> Endpoint:
    """
    Look up the endpoint for an operation.

    Raises:
        InvalidInputError: Operation not defined for ``resource`` in ``version``
    """
    try:
        return ENDPOINTS[version][(resource, operation)]
    except KeyError:
        raise InvalidInputError(
            f"Unsupported operation '{operation}' for resource '{resource.value}'"
        ) from None
