from __future__ import annotations

from typing import Iterator
from pathlib import Path

from ..log import logger
from ..types.result import Error, Result
from .row import Row, skip_line, skip_whitespaces

__all__ = ['TableReader', 'RowRange']


class RowRange:
    """
    Range of rows of a reader's buffer

    It can be iterated any number of times, every iteration starts again from the first row.
    """

    __slots__ = ('_text', '_begin', '_end')

    def __init__(self, text: bytes, begin: int, end: int):
        self._text = text
        self._begin = begin
        self._end = end

    def __iter__(self) -> Iterator[Row]:
        text = self._text
        end = self._end
        cursor = self._begin
        while cursor != end:
            yield Row(text, cursor, end)
            cursor = skip_whitespaces(text, skip_line(text, cursor, end), end)

    def __bool__(self) -> bool:
        return self._begin != self._end

    def __repr__(self) -> str:
        return f"RowRange({self._begin}, {self._end})"


class TableReader:
    """
    Reader of delimited text

    The reader owns the whole text, the rows and ranges it gives out are views into it.
    """

    __slots__ = ('_text', '_end')

    def __init__(self, text: str | bytes = b''):
        self._text = b''
        self._end = 0
        self.read_text(text)

    @classmethod
    def from_file(cls, path: str | Path) -> Result[TableReader]:
        """
        Load a whole file.

        :param path: Path of the file
        :return: The reader, or an ``io_failure`` with the OS error
        """
        reader = cls()
        result = reader.read_file(path)
        if not result.ok:
            return Result.failure(result.error, result.os_error)
        return Result.success(reader)

    @classmethod
    def from_text(cls, text: str | bytes) -> TableReader:
        return cls(text)

    def read_file(self, path: str | Path) -> Result[None]:
        """
        Replace the content of the reader with a whole file.

        :param path: Path of the file
        """
        try:
            with open(path, 'rb') as f:
                text = f.read()
        except OSError as e:
            logger.debug("Cannot read %s: %s", path, e)
            return Result.failure(Error.io_failure, e)
        self.read_text(text)
        logger.debug("Loaded %d bytes from %s", len(text), path)
        return Result.success()

    def read_text(self, text: str | bytes) -> None:
        """
        Replace the content of the reader.

        :param text: The new text, ``str`` is encoded as UTF-8
        """
        if isinstance(text, str):
            text = text.encode('utf-8')
        self._text = bytes(text)
        # An embedded NUL terminates the text
        nul = self._text.find(b'\x00')
        self._end = len(self._text) if nul < 0 else nul

    @property
    def text_size(self) -> int:
        """Size of the text in bytes"""
        return len(self._text)

    def first_row(self) -> Row:
        return Row(self._text, skip_whitespaces(self._text, 0, self._end), self._end)

    def all_rows(self) -> RowRange:
        """
        All rows from the first to the last one.
        """
        return RowRange(self._text, skip_whitespaces(self._text, 0, self._end), self._end)

    def all_but_first_row(self) -> RowRange:
        """
        All rows except the first one, e.g. to skip a header line.
        """
        begin = skip_whitespaces(self._text, 0, self._end)
        if begin == self._end:
            return RowRange(self._text, self._end, self._end)
        begin = skip_whitespaces(self._text, skip_line(self._text, begin, self._end), self._end)
        return RowRange(self._text, begin, self._end)
