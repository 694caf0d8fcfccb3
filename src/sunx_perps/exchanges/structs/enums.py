from enum import Enum


class ApiVersion(Enum):
    """Published endpoint table versions."""
    SAPI_V1 = "sapi_v1"


class Resource(Enum):
    """API resource groups exposed as operations."""
    ACCOUNT = "account"
    MARKET_DATA = "marketData"
    ORDER = "order"
    POSITION = "position"


class Direction(Enum):
    """Order side."""
    BUY = "buy"
    SELL = "sell"


class Offset(Enum):
    """Open a new position or close an existing one."""
    OPEN = "open"
    CLOSE = "close"


class OrderPriceType(Enum):
    """
    Order price type.

    Only LIMIT and POST_ONLY orders carry a price.
    """
    LIMIT = "limit"
    MARKET = "market"
    POST_ONLY = "post_only"
    FOK = "fok"
    IOC = "ioc"

    @property
    def is_priced(self) -> bool:
        return self in (OrderPriceType.LIMIT, OrderPriceType.POST_ONLY)


class PositionMode(Enum):
    """Hedge (dual side) or one-way (single side) positions."""
    DUAL_SIDE = "dual_side"
    SINGLE_SIDE = "single_side"


class TradingBillType(Enum):
    """Trading bill filter; ALL sends no filter."""
    ALL = ""
    OPEN_LONG = "open_long"
    OPEN_SHORT = "open_short"
    CLOSE_LONG = "close_long"
    CLOSE_SHORT = "close_short"
