from __future__ import annotations

from typing import Any, Sequence
from pathlib import Path
import math

from ..log import logger
from ..types.result import Error, Result
from .row import FieldType, INTEGER_BOUNDS, to_float32

__all__ = ['TableWriter', 'FIELD_WIDTHS', 'nearest_power_of_2']

# Reserved bytes per formatted field
FIELD_WIDTHS: dict[FieldType, int] = {
    FieldType.int32: 11,
    FieldType.uint32: 10,
    FieldType.int64: 19,
    FieldType.uint64: 18,
    FieldType.float32: 16,
    FieldType.float64: 32,
}


def nearest_power_of_2(n: int) -> int:
    """
    Round up to the next power of two.

    :param n: The requested size
    :return: The smallest power of two that is >= n, at least 2
    """
    if n < 2:
        return 2
    return 1 << (n - 1).bit_length()


def _format_float64(value: float) -> str:
    text = repr(value)
    if text.endswith('.0'):
        text = text[:-2]
    return text


def _format_float32(value: float) -> str:
    """Shortest text which gives back the same single precision value"""
    value = to_float32(value)
    if math.isnan(value) or math.isinf(value):
        return repr(value)
    for precision in range(1, 10):
        text = f"{value:.{precision}g}"
        if to_float32(float(text)) == value:
            return text
    return f"{value:.9g}"


def _infer_type(value: Any) -> FieldType:
    if isinstance(value, bool):
        raise TypeError("bool values are not supported")
    if isinstance(value, str):
        return FieldType.string
    if isinstance(value, int):
        return FieldType.uint64 if value > INTEGER_BOUNDS[FieldType.int64][1] else FieldType.int64
    if isinstance(value, float):
        return FieldType.float64
    raise TypeError(f"Unsupported value type: {type(value).__name__}")


class TableWriter:
    """
    Writer of delimited text

    Rows are formatted into a growable buffer. The capacity of the buffer grows by powers of two,
    the written size is tracked separately.
    """

    __slots__ = ('_buffer', '_size')

    def __init__(self):
        self._buffer = bytearray()
        self._size = 0

    def __len__(self) -> int:
        return self._size

    @property
    def size(self) -> int:
        """Number of bytes written"""
        return self._size

    @property
    def capacity(self) -> int:
        """Number of bytes allocated"""
        return len(self._buffer)

    def reserve(self, n: int) -> None:
        """
        Pre-allocate the buffer.

        :param n: Expected number of bytes, rounded up to the next power of two
        """
        capacity = nearest_power_of_2(n)
        if capacity > len(self._buffer):
            self._buffer.extend(bytes(capacity - len(self._buffer)))

    def clear(self) -> None:
        """Forget the written rows, the capacity is kept"""
        self._size = 0

    def format_row(self, *values: Any, types: Sequence[FieldType] | None = None) -> None:
        """
        Append one row.

        Strings are always quoted, quotes inside them are not escaped.

        :param values: The field values in order
        :param types: The field types, inferred from the values if not given
        :raises ValueError: If the number of types does not match or an integer is out of range
        :raises TypeError: If a value cannot be formatted
        """
        if not values:
            raise ValueError("At least one value is needed")
        if types is None:
            types = [_infer_type(value) for value in values]
        elif len(types) != len(values):
            raise ValueError(f"Got {len(values)} values for {len(types)} field types")

        last = len(values) - 1
        for i, (value, field_type) in enumerate(zip(values, types)):
            self._format_field(value, field_type)
            self._append(b'\n' if i == last else b',')

    def to_bytes(self) -> bytes:
        return bytes(self._buffer[:self._size])

    def to_text(self) -> str:
        return self._buffer[:self._size].decode('utf-8')

    def to_file(self, path: str | Path) -> Result[None]:
        """
        Write the buffer into a file, the file is truncated first.

        :param path: Path of the file
        :return: Empty result, or an ``io_failure`` with the OS error
        """
        try:
            with open(path, 'wb') as f:
                f.write(memoryview(self._buffer)[:self._size])
        except OSError as e:
            logger.debug("Cannot write %s: %s", path, e)
            return Result.failure(Error.io_failure, e)
        logger.debug("Stored %d bytes to %s", self._size, path)
        return Result.success()

    def _allocate(self, size: int) -> int:
        """
        Make room for ``size`` bytes after the written part.

        :return: Offset of the allocated space
        """
        offset = self._size
        new_size = self._size + size
        if new_size > len(self._buffer):
            self._buffer.extend(bytes(nearest_power_of_2(new_size) - len(self._buffer)))
        self._size = new_size
        return offset

    def _free(self, end: int) -> None:
        """Give back the unused tail of an allocation"""
        self._size = end

    def _append(self, data: bytes) -> None:
        offset = self._allocate(len(data))
        self._buffer[offset:offset + len(data)] = data

    def _format_field(self, value: Any, field_type: FieldType) -> None:
        if field_type is FieldType.string:
            if not isinstance(value, str):
                raise TypeError(f"Expected str, got {type(value).__name__}")
            self._append(b'"' + value.encode('utf-8') + b'"')
            return

        if field_type in INTEGER_BOUNDS:
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError(f"Expected int for {field_type.name}, got {type(value).__name__}")
            low, high = INTEGER_BOUNDS[field_type]
            if not low <= value <= high:
                raise ValueError(f"Value {value} is out of range for {field_type.name}")
            token = str(value).encode('ascii')
        else:
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise TypeError(f"Expected float for {field_type.name}, got {type(value).__name__}")
            if field_type is FieldType.float32:
                token = _format_float32(float(value)).encode('ascii')
            else:
                token = _format_float64(float(value)).encode('ascii')

        # Reserve the widest form of the type, then give back what is not used
        offset = self._allocate(max(FIELD_WIDTHS[field_type], len(token)))
        self._buffer[offset:offset + len(token)] = token
        self._free(offset + len(token))
