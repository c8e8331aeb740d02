"""
Key lookup over header rows and label columns.

A key axis is a row (typically row 1, the header) or a column (typically
column A, the labels) whose values identify the perpendicular axes. Keys are
coerced once with ``to_key_string`` and compared by exact string equality.
"""

import logging
from typing import List, Optional, Sequence, TypeVar

from gspread.utils import Dimension

from keygrid.spreadsheet.model import SliceOptions, check_index
from keygrid.utils.coerce import to_key_string
from keygrid.worksheet.access import ValueAccess
from keygrid.worksheet.ranges import RangeBuilder

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Absent key sentinel returned by index lookups
NOT_FOUND = -1


def position_of(items: Sequence[str], key: str) -> int:
    """0-based position of the first item equal to key, or -1."""
    for position, item in enumerate(items):
        if item == key:
            return position
    return NOT_FOUND


def leading_position_of(table: Sequence[Sequence[str]], key: str) -> int:
    """0-based index of the first entry whose first value equals key, or -1.

    For rows this matches against column A; for columns against row 1.
    """
    for position, entry in enumerate(table):
        if entry and entry[0] == key:
            return position
    return NOT_FOUND


def get_or(items: Sequence[T], at: int, default: T) -> T:
    """Item at a 0-based position, or default when out of range."""
    return items[at] if 0 <= at < len(items) else default


def extract_sublist(items: List[str], start: int = 0, length: int = -1) -> List[str]:
    """Slice of a ragged axis that tolerates positions past its end.

    Args:
        items: Axis values
        start: 0-based first position
        length: Number of values, or below 1 for all remaining ones
    """
    if start == 0 and length < 1:
        return items
    begin = min(start, len(items))
    end = len(items) if length < 1 else min(begin + length, len(items))
    return items[begin:end]


class KeyIndexResolver:
    """Resolves keys to 1-based row or column indices.

    Attributes:
        ranges: Range builder of the worksheet
        access: Value access layer of the worksheet
    """

    def __init__(self, ranges: RangeBuilder, access: ValueAccess) -> None:
        self.ranges = ranges
        self.access = access

    def read_key_axis(self, axis: int, dimension: str) -> List[str]:
        """Read a whole key axis: row ``axis`` for ROWS, column ``axis`` for COLUMNS."""
        if Dimension(dimension) == Dimension.rows:
            range_name = self.ranges.row_range(axis, SliceOptions())
        else:
            range_name = self.ranges.column_range(axis, SliceOptions())
        return self.access.read_axis(range_name, dimension)

    def write_key(self, key: str, axis: int, position: int, dimension: str) -> None:
        """Write a key into a single cell of a key axis."""
        if Dimension(dimension) == Dimension.rows:
            row, column = axis, position
        else:
            row, column = position, axis
        self.write_cell(key, row, column)

    def write_cell(self, value: object, row: int, column: int) -> None:
        """Write one value as a 1x1 block."""
        range_name = self.ranges.column_range(column, SliceOptions(start=row, length=1))
        self.access.write_axis(range_name, Dimension.cols, [value])

    def index_of(
        self,
        key: object,
        axis: int,
        dimension: str,
        eager: bool = False,
        keys: Optional[List[str]] = None
    ) -> int:
        """Find the 1-based position of a key in a key axis.

        Args:
            key: Key to look for (coerced with ``to_key_string``)
            axis: Index of the key row (ROWS) or key column (COLUMNS)
            dimension: ``ROWS`` or ``COLUMNS``
            eager: Append the key after the last key when it is absent
            keys: Already fetched key axis; read from the sheet when None

        Returns:
            1-based position of the first match, the new position when the key
            was appended, or -1 when absent and not eager

        Raises:
            InvalidArgumentError: If the key is blank or axis is below 1
        """
        check_index("row" if Dimension(dimension) == Dimension.rows else "column", axis)
        key = to_key_string(key)
        if keys is None:
            keys = self.read_key_axis(axis, dimension)

        position = position_of(keys, key)
        if position != NOT_FOUND:
            return position + 1
        if not eager:
            return NOT_FOUND

        position = len(keys) + 1
        logger.info(f"Appending key {key!r} at position {position} of axis {axis}")
        self.write_key(key, axis, position, dimension)
        return position
