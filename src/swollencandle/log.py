from __future__ import annotations

from typing import TYPE_CHECKING
import logging

import rich.logging

if TYPE_CHECKING:
    from .config import Config

__all__ = 'logger', 'configure_logging'

LOG_FORMAT = "%(message)s"
PLAIN_LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


class CandleRichHandler(rich.logging.RichHandler):
    """RichHandler with the settings used for library diagnostics"""

    def __init__(self) -> None:
        super().__init__(
            show_time=True,
            show_level=True,
            omit_repeated_times=False,
            markup=False,
            show_path=False,
        )


def _make_handler(color: bool) -> logging.Handler:
    if color:
        handler: logging.Handler = CandleRichHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="[%Y-%m-%d %H:%M:%S]"))
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(PLAIN_LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    return handler


def configure_logging(config: Config) -> logging.Logger:
    """
    Apply the logging settings of a config to the package logger.

    :param config: Config holding ``log_level`` and ``color_log``
    :return: The package logger
    """
    # Remove existing handlers before adding new one
    if logger.hasHandlers():
        logger.handlers.clear()
    logger.setLevel(config.log_level.upper())
    logger.addHandler(_make_handler(config.color_log))
    return logger


# Create logger, records propagate to the application's handlers
logger = logging.getLogger("swollencandle")
logger.addHandler(logging.NullHandler())
