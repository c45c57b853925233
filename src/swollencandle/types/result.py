from __future__ import annotations

from typing import Generic, TypeVar
from dataclasses import dataclass
from enum import Enum

__all__ = ['Error', 'Result', 'SwollenCandleError']

T = TypeVar('T')


class Error(Enum):
    """
    Classification of the outcome of a fallible operation
    """
    ok = 0
    non_constant_period = 1
    invalid_upscale_period = 2
    merging_periods_mismatch = 3
    duplicated_candle = 4
    mismatched_candles = 5
    invalid_candle_fields = 6
    invalid_trade_fields = 7
    io_failure = 8

    @property
    def message(self) -> str:
        """Human readable description"""
        return _MESSAGES[self]


_MESSAGES = {
    Error.ok: "Ok",
    Error.non_constant_period: "Non constant period",
    Error.invalid_upscale_period: "Invalid upscale period",
    Error.merging_periods_mismatch: "Merging periods mismatch",
    Error.duplicated_candle: "Duplicated candle",
    Error.mismatched_candles: "Mismatched candles",
    Error.invalid_candle_fields: "Invalid candle fields",
    Error.invalid_trade_fields: "Invalid trade fields",
    Error.io_failure: "I/O failure",
}


class SwollenCandleError(Exception):
    """Raised by ``Result.unwrap()`` when the result holds an error."""

    def __init__(self, error: Error, os_error: OSError | None = None):
        self.error = error
        self.os_error = os_error
        message = error.message
        if os_error is not None:
            message = f"{message}: {os_error}"
        super().__init__(message)


@dataclass(frozen=True, slots=True)
class Result(Generic[T]):
    """
    Outcome of a fallible operation

    On failure ``value`` is None and ``error`` tells what went wrong. For I/O failures the original
    ``OSError`` is kept in ``os_error``.
    """
    value: T | None = None
    error: Error = Error.ok
    os_error: OSError | None = None

    @classmethod
    def success(cls, value: T | None = None) -> Result[T]:
        return cls(value)

    @classmethod
    def failure(cls, error: Error, os_error: OSError | None = None) -> Result[T]:
        """
        :param error: The error classification, must not be ``Error.ok``
        :param os_error: The underlying OS error of an I/O failure
        """
        if error is Error.ok:
            raise ValueError("A failed result needs an error")
        return cls(None, error, os_error)

    @property
    def ok(self) -> bool:
        return self.error is Error.ok

    def unwrap(self) -> T:
        """
        Get the value or raise the error.

        :return: The value of a successful result
        :raises SwollenCandleError: If the result holds an error
        """
        if self.error is not Error.ok:
            raise SwollenCandleError(self.error, self.os_error)
        return self.value  # type: ignore
