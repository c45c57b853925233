"""
Candle and trade files

Candle files start with a header line followed by one line per candle::

    time,period,trades,volume,vwap_price,open_price,high_price,low_price,close_price
    0,60,2,2,10.5,10,11,10,11

Trade files have no header, every line is ``time,price,amount``.
"""
from __future__ import annotations

from typing import Sequence
from pathlib import Path

from ..config import Config, default_config
from ..log import logger
from ..types.candle import Candle, Trade, CANDLE_HEADER
from ..types.result import Error, Result
from .reader import RowRange, TableReader
from .row import FieldType
from .writer import TableWriter

__all__ = [
    'CANDLE_FIELDS', 'TRADE_FIELDS',
    'read_candles', 'write_candles', 'read_trades', 'write_trades',
    'loads_candles', 'dumps_candles', 'loads_trades', 'dumps_trades',
]

CANDLE_FIELDS = (FieldType.uint64, FieldType.uint32, FieldType.uint64,
                 FieldType.float64, FieldType.float64, FieldType.float64,
                 FieldType.float64, FieldType.float64, FieldType.float64)
TRADE_FIELDS = (FieldType.uint64, FieldType.float64, FieldType.float64)

_HEADER_FIELDS = (FieldType.string,) * len(CANDLE_HEADER)


def _parse_candles(rows: RowRange) -> Result[list[Candle]]:
    candles = []
    for row in rows:
        values = row.parse(*CANDLE_FIELDS)
        if values is None:
            logger.debug("Invalid candle row at byte %d", row.cursor)
            return Result.failure(Error.invalid_candle_fields)
        candles.append(Candle(*values))
    return Result.success(candles)


def _parse_trades(rows: RowRange) -> Result[list[Trade]]:
    trades = []
    for row in rows:
        values = row.parse(*TRADE_FIELDS)
        if values is None:
            logger.debug("Invalid trade row at byte %d", row.cursor)
            return Result.failure(Error.invalid_trade_fields)
        time, price, amount = values
        trades.append(Trade(time, amount, price))
    return Result.success(trades)


def _format_candles(candles: Sequence[Candle], config: Config) -> TableWriter:
    writer = TableWriter()
    writer.reserve((len(candles) + 1) * config.write_line_estimation)
    writer.format_row(*CANDLE_HEADER, types=_HEADER_FIELDS)
    for candle in candles:
        writer.format_row(candle.time, candle.period, candle.count, candle.volume,
                          candle.vwap_price, candle.open_price, candle.high_price,
                          candle.low_price, candle.close_price, types=CANDLE_FIELDS)
    return writer


def _format_trades(trades: Sequence[Trade], config: Config) -> TableWriter:
    writer = TableWriter()
    writer.reserve(len(trades) * config.write_line_estimation)
    for trade in trades:
        writer.format_row(trade.time, trade.price, trade.amount, types=TRADE_FIELDS)
    return writer


def read_candles(path: str | Path) -> Result[list[Candle]]:
    """
    Read a candle file.

    The first line is the header, it is skipped without checking.

    :param path: Path of the file
    :return: The candles, ``invalid_candle_fields`` if any row is invalid or ``io_failure``
    """
    loaded = TableReader.from_file(path)
    if not loaded.ok:
        return Result.failure(loaded.error, loaded.os_error)
    reader = loaded.value
    result = _parse_candles(reader.all_but_first_row())
    if result.ok:
        logger.debug("Read %d candles (%d bytes) from %s", len(result.value), reader.text_size, path)
    return result


def write_candles(path: str | Path, candles: Sequence[Candle], *,
                  config: Config | None = None) -> Result[None]:
    """
    Write a candle file with header.

    :param path: Path of the file, it is overwritten
    :param candles: The candles to write
    :param config: Settings, the default config if not given
    """
    writer = _format_candles(candles, config or default_config)
    result = writer.to_file(path)
    if result.ok:
        logger.debug("Wrote %d candles to %s", len(candles), path)
    return result


def read_trades(path: str | Path) -> Result[list[Trade]]:
    """
    Read a trade file.

    :param path: Path of the file
    :return: The trades, ``invalid_trade_fields`` if any row is invalid or ``io_failure``
    """
    loaded = TableReader.from_file(path)
    if not loaded.ok:
        return Result.failure(loaded.error, loaded.os_error)
    reader = loaded.value
    result = _parse_trades(reader.all_rows())
    if result.ok:
        logger.debug("Read %d trades (%d bytes) from %s", len(result.value), reader.text_size, path)
    return result


def write_trades(path: str | Path, trades: Sequence[Trade], *,
                 config: Config | None = None) -> Result[None]:
    """
    Write a trade file, ``time,price,amount`` per line.

    :param path: Path of the file, it is overwritten
    :param trades: The trades to write
    :param config: Settings, the default config if not given
    """
    writer = _format_trades(trades, config or default_config)
    result = writer.to_file(path)
    if result.ok:
        logger.debug("Wrote %d trades to %s", len(trades), path)
    return result


def loads_candles(text: str | bytes) -> Result[list[Candle]]:
    """Parse candles from text in candle file format"""
    return _parse_candles(TableReader.from_text(text).all_but_first_row())


def dumps_candles(candles: Sequence[Candle], *, config: Config | None = None) -> str:
    """Format candles as text in candle file format"""
    return _format_candles(candles, config or default_config).to_text()


def loads_trades(text: str | bytes) -> Result[list[Trade]]:
    """Parse trades from text in trade file format"""
    return _parse_trades(TableReader.from_text(text).all_rows())


def dumps_trades(trades: Sequence[Trade], *, config: Config | None = None) -> str:
    """Format trades as text in trade file format"""
    return _format_trades(trades, config or default_config).to_text()
