from .enums import (
    ApiVersion,
    Resource,
    Direction,
    Offset,
    OrderPriceType,
    PositionMode,
    TradingBillType,
)

__all__ = [
    'ApiVersion',
    'Resource',
    'Direction',
    'Offset',
    'OrderPriceType',
    'PositionMode',
    'TradingBillType',
]
