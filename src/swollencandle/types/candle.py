from __future__ import annotations

from dataclasses import dataclass

__all__ = ['Candle', 'Trade', 'CANDLE_HEADER']

CANDLE_HEADER = ('time', 'period', 'trades', 'volume', 'vwap_price',
                 'open_price', 'high_price', 'low_price', 'close_price')


@dataclass(frozen=True, slots=True)
class Candle:
    """
    OHLC aggregate of the trades in one period

    Two candles are equal only if every field matches, but they are ordered by ``time`` alone.
    """
    time: int
    """ Period aligned epoch seconds """
    period: int
    """ Length of the candle in seconds """
    count: int
    """ Number of trades """
    volume: float
    vwap_price: float
    open_price: float
    high_price: float
    low_price: float
    close_price: float

    def __lt__(self, other: Candle) -> bool:
        if not isinstance(other, Candle):
            return NotImplemented
        return self.time < other.time

    def __le__(self, other: Candle) -> bool:
        if not isinstance(other, Candle):
            return NotImplemented
        return self.time <= other.time

    def __gt__(self, other: Candle) -> bool:
        if not isinstance(other, Candle):
            return NotImplemented
        return self.time > other.time

    def __ge__(self, other: Candle) -> bool:
        if not isinstance(other, Candle):
            return NotImplemented
        return self.time >= other.time


@dataclass(frozen=True, slots=True)
class Trade:
    """
    A single trade
    """
    time: int
    amount: float
    price: float
