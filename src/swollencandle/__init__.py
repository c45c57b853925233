"""
Candlestick aggregation and delimited text storage of trades and candles
"""
from .types import (Candle, Trade, CANDLE_HEADER, UpscalePeriod, parse_upscale_period, seconds_in,
                    Error, Result, SwollenCandleError)
from .core.aggregation import check_integrity, upscale, upscale_candles, upscale_trades, merge
from .core.storage import (read_candles, write_candles, read_trades, write_trades,
                           loads_candles, dumps_candles, loads_trades, dumps_trades)
from .config import Config
from .log import configure_logging

__version__ = "0.1.0"

__all__ = [
    'Candle', 'Trade', 'CANDLE_HEADER', 'UpscalePeriod', 'parse_upscale_period', 'seconds_in',
    'Error', 'Result', 'SwollenCandleError',
    'check_integrity', 'upscale', 'upscale_candles', 'upscale_trades', 'merge',
    'read_candles', 'write_candles', 'read_trades', 'write_trades',
    'loads_candles', 'dumps_candles', 'loads_trades', 'dumps_trades',
    'Config', 'configure_logging',
]
