from .candle import Candle, Trade, CANDLE_HEADER
from .period import UpscalePeriod, parse_upscale_period, seconds_in
from .result import Error, Result, SwollenCandleError

__all__ = [
    'Candle', 'Trade', 'CANDLE_HEADER',
    'UpscalePeriod', 'parse_upscale_period', 'seconds_in',
    'Error', 'Result', 'SwollenCandleError',
]
