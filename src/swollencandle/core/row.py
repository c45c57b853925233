"""
Row cursor of the delimited text codec

A row is a view into the reader's buffer: the buffer itself, the offset where the record starts and the
logical end of the buffer. Scanning never copies the buffer, only the bytes of a field are taken out when
the field is converted.

Fields are separated by commas, a record ends at a newline or at the end of the buffer. A field is either
quoted (``"..."``, an inner ``""`` is an escaped quote) or bare (runs until tab, CR, LF, NUL or comma).
Spaces, tabs and carriage returns before a field are skipped.
"""
from __future__ import annotations

from typing import Any
from enum import Enum
import math
import re
import struct

__all__ = ['FieldType', 'Row', 'skip_line', 'skip_whitespaces']

NEWLINE = 0x0A
COMMA = 0x2C
QUOTE = 0x22

_WHITESPACES = re.compile(rb'[ \t\r]*')
_LINE = re.compile(rb'[^\n]*\n?')
_BARE_TOKEN = re.compile(rb'[^\t\r\n\x00,]*')
# Possessive, so an escaped quote never closes the field on backtracking
_QUOTED_TOKEN = re.compile(rb'"((?:[^"\n\x00]|"")*+)"')

_SIGNED = re.compile(rb'-?[0-9]+')
_UNSIGNED = re.compile(rb'[0-9]+')
_FLOAT = re.compile(rb'-?(?:(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?'
                    rb'|[iI][nN][fF](?:[iI][nN][iI][tT][yY])?|[nN][aA][nN])')


class FieldType(Enum):
    """
    Target type of a field
    """
    int32 = 'int32'
    uint32 = 'uint32'
    int64 = 'int64'
    uint64 = 'uint64'
    float32 = 'float32'
    float64 = 'float64'
    string = 'string'


INTEGER_BOUNDS: dict[FieldType, tuple[int, int]] = {
    FieldType.int32: (-2 ** 31, 2 ** 31 - 1),
    FieldType.uint32: (0, 2 ** 32 - 1),
    FieldType.int64: (-2 ** 63, 2 ** 63 - 1),
    FieldType.uint64: (0, 2 ** 64 - 1),
}


def skip_whitespaces(text: bytes, cursor: int, end: int) -> int:
    """
    Skip spaces, tabs and carriage returns.

    :return: Position of the first other character
    """
    return _WHITESPACES.match(text, cursor, end).end()


def skip_line(text: bytes, cursor: int, end: int) -> int:
    """
    Skip the rest of the record.

    :return: Position after the next newline, or the end if there is none
    """
    return _LINE.match(text, cursor, end).end()


def to_float32(value: float) -> float:
    """
    Round a float to single precision.

    :raises OverflowError: If the value does not fit
    """
    return struct.unpack('f', struct.pack('f', value))[0]


def _convert_integer(token: bytes, field_type: FieldType) -> int | None:
    pattern = _UNSIGNED if field_type in (FieldType.uint32, FieldType.uint64) else _SIGNED
    if pattern.fullmatch(token) is None:
        return None
    value = int(token.decode('ascii'))
    low, high = INTEGER_BOUNDS[field_type]
    if not low <= value <= high:
        return None
    return value


def _convert_float(token: bytes, field_type: FieldType) -> float | None:
    if _FLOAT.fullmatch(token) is None:
        return None
    value = float(token.decode('ascii'))
    if math.isinf(value) and token.lstrip(b'-')[:1] not in (b'i', b'I'):
        return None  # Out of range
    if field_type is FieldType.float32:
        try:
            value = to_float32(value)
        except OverflowError:
            return None
    return value


def convert(token: bytes, field_type: FieldType) -> Any:
    """
    Strictly convert the bytes of a field to the given type.

    :param token: The field content, without surrounding quotes
    :param field_type: The target type
    :return: The converted value or None if the conversion failed
    """
    if field_type is FieldType.string:
        try:
            return token.decode('utf-8')
        except UnicodeDecodeError:
            return None
    if field_type in INTEGER_BOUNDS:
        return _convert_integer(token, field_type)
    return _convert_float(token, field_type)


class Row:
    """
    One record of a reader's buffer
    """

    __slots__ = ('_text', '_cursor', '_end')

    def __init__(self, text: bytes, cursor: int, end: int):
        """
        :param text: The buffer of the reader
        :param cursor: Position of the first character of the record
        :param end: Logical end of the buffer
        """
        self._text = text
        self._cursor = cursor
        self._end = end

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Row):
            return NotImplemented
        return self._text is other._text and self._cursor == other._cursor

    def __hash__(self) -> int:
        return hash((id(self._text), self._cursor))

    def __repr__(self) -> str:
        return f"Row(cursor={self._cursor})"

    @property
    def cursor(self) -> int:
        """Position of the record in the buffer"""
        return self._cursor

    def parse(self, *field_types: FieldType) -> tuple | None:
        """
        Parse the record into exactly ``len(field_types)`` values.

        :param field_types: The types of the fields in order
        :return: Tuple of converted values, or None if the record does not match
        """
        if not field_types:
            raise ValueError("At least one field type is needed")
        values = []
        pos = self._cursor
        last = len(field_types) - 1
        for i, field_type in enumerate(field_types):
            scanned = self._scan_field(pos)
            if scanned is None:
                return None
            token, pos = scanned
            value = convert(token, field_type)
            if value is None:
                return None
            values.append(value)
            pos = skip_whitespaces(self._text, pos, self._end)
            if i == last:
                if pos != self._end and self._text[pos] != NEWLINE:
                    return None
            else:
                if pos == self._end or self._text[pos] != COMMA:
                    return None
                pos = skip_whitespaces(self._text, pos + 1, self._end)
        return tuple(values)

    def fields(self) -> list[str] | None:
        """
        Get the raw text of all fields of the record.

        :return: List of field contents, or None if the record is malformed
        """
        result = []
        pos = self._cursor
        while True:
            scanned = self._scan_field(pos)
            if scanned is None:
                return None
            token, pos = scanned
            value = convert(token, FieldType.string)
            if value is None:
                return None
            result.append(value)
            pos = skip_whitespaces(self._text, pos, self._end)
            if pos == self._end or self._text[pos] == NEWLINE:
                return result
            if self._text[pos] != COMMA:
                return None
            pos = skip_whitespaces(self._text, pos + 1, self._end)

    def _scan_field(self, pos: int) -> tuple[bytes, int] | None:
        """
        Scan one field starting at ``pos``.

        :return: The unquoted content and the position after the field, or None
        """
        text = self._text
        if pos != self._end and text[pos] == QUOTE:
            match = _QUOTED_TOKEN.match(text, pos, self._end)
            if match is None:
                return None  # No closing quote before newline or end
            token = match.group(1)
            if b'""' in token:
                token = token.replace(b'""', b'"')
            return token, match.end()
        match = _BARE_TOKEN.match(text, pos, self._end)
        if match.end() == pos:
            return None  # Empty field
        return match.group(), match.end()
