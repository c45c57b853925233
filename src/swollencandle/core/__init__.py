from .row import FieldType, Row
from .reader import TableReader, RowRange
from .writer import TableWriter

__all__ = ['FieldType', 'Row', 'TableReader', 'RowRange', 'TableWriter']
