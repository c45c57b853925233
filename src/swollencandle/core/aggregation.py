"""
Upscaling and merging of candle series

Every function is pure: it takes sequences and returns a new list in a ``Result``. On failure the result
holds only the error classification, no partial series.
"""
from __future__ import annotations

from typing import Sequence
import math

from ..log import logger
from ..types.candle import Candle, Trade
from ..types.period import UpscalePeriod
from ..types.result import Error, Result

__all__ = ['check_integrity', 'upscale', 'upscale_candles', 'upscale_trades', 'merge']


def _vwap(turnover: float, volume: float) -> float:
    """
    Volume weighted average price, NaN if there was no volume.
    """
    if volume == 0:
        return math.nan
    return turnover / volume


def check_integrity(candles: Sequence[Candle]) -> Error:
    """
    Check that all candles have the same period.

    :param candles: The candles to check
    :return: ``Error.ok`` or ``Error.non_constant_period``
    """
    if not candles:
        return Error.ok
    period = candles[0].period
    for candle in candles:
        if candle.period != period:
            return Error.non_constant_period
    return Error.ok


def upscale_candles(candles: Sequence[Candle], period: UpscalePeriod) -> Result[list[Candle]]:
    """
    Aggregate candles into candles of a longer period.

    The candles are taken in consecutive blocks of ``period / source period`` candles. The caller must
    provide complete blocks, an incomplete block at the end is dropped.

    :param candles: Candles with a constant period
    :param period: The target period, must be a multiple of the source period
    :return: The upscaled candles
    """
    if not candles:
        return Result.success([])
    error = check_integrity(candles)
    if error is not Error.ok:
        logger.debug("Cannot upscale candles: %s", error.message)
        return Result.failure(error)

    source_period = candles[0].period
    target_period = period.seconds
    if source_period <= 0 or target_period % source_period != 0:
        logger.debug("Cannot upscale %ds candles to %s", source_period, period.name)
        return Result.failure(Error.invalid_upscale_period)
    if target_period == source_period:
        return Result.success(list(candles))

    block_size = target_period // source_period
    block_count = len(candles) // block_size
    if len(candles) % block_size:
        logger.warning("Dropped %d candles of an incomplete %s at the end",
                       len(candles) % block_size, period.name)

    result = []
    for start in range(0, block_count * block_size, block_size):
        first = candles[start]
        count = first.count
        volume = first.volume
        turnover = first.vwap_price * first.volume
        high_price = first.high_price
        low_price = first.low_price
        for each in candles[start + 1:start + block_size]:
            count += each.count
            volume += each.volume
            turnover += each.volume * each.vwap_price
            if each.high_price > high_price:
                high_price = each.high_price
            if each.low_price < low_price:
                low_price = each.low_price
        result.append(Candle(
            first.time // target_period * target_period,
            target_period,
            count,
            volume,
            _vwap(turnover, volume),
            first.open_price,
            high_price,
            low_price,
            candles[start + block_size - 1].close_price,
        ))
    return Result.success(result)


def upscale_trades(trades: Sequence[Trade], period: UpscalePeriod) -> Result[list[Candle]]:
    """
    Build candles from trades.

    The trades must be sorted by time, this is not checked. A candle is closed when a trade comes
    at or after its end, the next candle starts at the period of that trade, so periods without
    trades have no candle.

    :param trades: Trades in ascending time order
    :param period: The period of the candles
    :return: The candles
    """
    if not trades:
        return Result.success([])

    seconds = period.seconds
    result = []

    first = trades[0]
    time = first.time // seconds * seconds
    count = 1
    volume = first.amount
    turnover = first.amount * first.price
    open_price = high_price = low_price = close_price = first.price

    for trade in trades[1:]:
        if trade.time >= time + seconds:
            result.append(Candle(time, seconds, count, volume, _vwap(turnover, volume),
                                 open_price, high_price, low_price, close_price))
            time = trade.time // seconds * seconds
            count = 1
            volume = trade.amount
            turnover = trade.amount * trade.price
            open_price = high_price = low_price = close_price = trade.price
        else:
            count += 1
            volume += trade.amount
            turnover += trade.price * trade.amount
            if trade.price > high_price:
                high_price = trade.price
            elif trade.price < low_price:
                low_price = trade.price
            close_price = trade.price

    result.append(Candle(time, seconds, count, volume, _vwap(turnover, volume),
                         open_price, high_price, low_price, close_price))
    return Result.success(result)


def upscale(source: Sequence[Candle] | Sequence[Trade], period: UpscalePeriod) -> Result[list[Candle]]:
    """
    Upscale candles or trades, depending on what the sequence holds.

    :param source: Candles with a constant period or trades in time order
    :param period: The target period
    :return: The upscaled candles
    :raises TypeError: If the sequence holds neither candles nor trades
    """
    if not source:
        return Result.success([])
    if isinstance(source[0], Candle):
        return upscale_candles(source, period)  # type: ignore
    if isinstance(source[0], Trade):
        return upscale_trades(source, period)  # type: ignore
    raise TypeError(f"Cannot upscale {type(source[0]).__name__} values")


def merge(first: Sequence[Candle], second: Sequence[Candle]) -> Result[list[Candle]]:
    """
    Union of two candle series.

    A candle of the second series at a time already present must equal the existing candle.

    :param first: Candles, without repeated times
    :param second: Candles of the same period as the first series
    :return: The candles of both series sorted by time
    """
    if first and second and first[0].period != second[0].period:
        logger.debug("Cannot merge %ds candles with %ds candles", first[0].period, second[0].period)
        return Result.failure(Error.merging_periods_mismatch)

    indexed: dict[int, Candle] = {}
    for candle in first:
        if candle.time in indexed:
            logger.debug("Duplicated candle at %d", candle.time)
            return Result.failure(Error.duplicated_candle)
        indexed[candle.time] = candle

    for candle in second:
        existing = indexed.setdefault(candle.time, candle)
        if existing is not candle and existing != candle:
            logger.debug("Mismatched candles at %d", candle.time)
            return Result.failure(Error.mismatched_candles)

    return Result.success([indexed[time] for time in sorted(indexed)])
