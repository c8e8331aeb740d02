"""
String values of a worksheet.

``WorksheetValues`` is the list-shaped surface of a worksheet: rows, columns
and tables as lists of strings, addressed by index or by key. Index reads
start at 1; by-key reads and writes start at 2 so that the key row or column
itself is skipped.
"""

import logging
from typing import Any, List, Optional

import pandas as pd
from gspread.utils import Dimension

from keygrid.exceptions import InvalidArgumentError
from keygrid.spreadsheet.model import SliceOptions, check_index
from keygrid.utils.coerce import is_nested, to_key_string
from keygrid.utils.frames import frame_to_rows, rows_to_frame
from keygrid.values.keys import (
    KeyIndexResolver,
    extract_sublist,
    get_or,
    leading_position_of,
    position_of,
)
from keygrid.values.mapper import ValuesMapper
from keygrid.worksheet.access import ValueAccess, max_length
from keygrid.worksheet.ranges import RangeBuilder

logger = logging.getLogger(__name__)


def check_axis_values(values: List[Any]) -> None:
    """Reject an empty or nested value list for a single row or column."""
    if not values:
        raise InvalidArgumentError(f"invalid values ({values!r})")
    if is_nested(values):
        raise InvalidArgumentError("nested values cannot be written to a single row or column")


def check_table_values(values: List[List[Any]]) -> None:
    """Reject an empty table, one whose entries are not lists, or nested cells."""
    if not values or not all(isinstance(entry, (list, tuple)) for entry in values):
        raise InvalidArgumentError(f"invalid values ({values!r})")
    if any(is_nested(entry) for entry in values):
        raise InvalidArgumentError("nested values cannot be written to a single cell")


class WorksheetValues:
    """Row, column and table access to the values of one worksheet.

    Attributes:
        ranges: Range builder of the worksheet
        access: Value access layer of the worksheet
        keys: Key index resolver of the worksheet
        map: Key-indexed view of the same values
    """

    def __init__(
        self,
        ranges: RangeBuilder,
        access: ValueAccess,
        keys: KeyIndexResolver
    ) -> None:
        self.ranges = ranges
        self.access = access
        self.keys = keys
        self.map = ValuesMapper(self)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def column(self, column: int, from_row: int = 1, length: int = -1) -> List[str]:
        """Read a column.

        Args:
            column: Column index
            from_row: First row to read
            length: Number of rows to read, -1 for all of them

        Returns:
            Column values without trailing empty cells
        """
        check_index("column", column)
        check_index("fromRow", from_row)
        range_name = self.ranges.column_range(column, SliceOptions(start=from_row, length=length))
        return self.access.read_axis(range_name, Dimension.cols)

    def row(self, row: int, from_column: int = 1, length: int = -1) -> List[str]:
        """Read a row.

        Args:
            row: Row index
            from_column: First column to read
            length: Number of columns to read, -1 for all of them

        Returns:
            Row values without trailing empty cells
        """
        check_index("row", row)
        check_index("fromColumn", from_column)
        range_name = self.ranges.row_range(row, SliceOptions(start=from_column, length=length))
        return self.access.read_axis(range_name, Dimension.rows)

    def column_by_key(
        self,
        key: Any,
        from_row: int = 2,
        length: int = -1
    ) -> Optional[List[str]]:
        """Read the column whose row-1 value is ``key``.

        Returns:
            Column values from ``from_row``, or None if no column has that key
        """
        key = to_key_string(key)
        check_index("fromRow", from_row)
        columns = self.all_columns()
        index = leading_position_of(columns, key)
        if index < 0:
            return None
        return extract_sublist(columns[index], from_row - 1, length)

    def row_by_key(
        self,
        key: Any,
        from_column: int = 2,
        length: int = -1
    ) -> Optional[List[str]]:
        """Read the row whose column-A value is ``key``.

        Returns:
            Row values from ``from_column``, or None if no row has that key
        """
        key = to_key_string(key)
        check_index("fromColumn", from_column)
        rows = self.all_rows()
        index = leading_position_of(rows, key)
        if index < 0:
            return None
        return extract_sublist(rows[index], from_column - 1, length)

    def last_column(
        self,
        from_row: int = 1,
        length: int = -1,
        in_range: bool = False
    ) -> Optional[List[str]]:
        """Read the last column that holds data.

        Args:
            from_row: First row of the returned slice
            length: Number of rows, -1 for all of them
            in_range: Only consider data inside the requested rows when
                deciding which column is last

        Returns:
            The column slice, or None when the sheet (or range) is empty
        """
        check_index("fromRow", from_row)
        if in_range:
            columns = self.all_columns(from_row=from_row, length=length)
            return columns[-1] if columns else None
        columns = self.all_columns()
        if not columns:
            return None
        return extract_sublist(columns[-1], from_row - 1, length)

    def last_row(
        self,
        from_column: int = 1,
        length: int = -1,
        in_range: bool = False
    ) -> Optional[List[str]]:
        """Read the last row that holds data (see ``last_column``)."""
        check_index("fromColumn", from_column)
        if in_range:
            rows = self.all_rows(from_column=from_column, length=length)
            return rows[-1] if rows else None
        rows = self.all_rows()
        if not rows:
            return None
        return extract_sublist(rows[-1], from_column - 1, length)

    def all_columns(
        self,
        from_column: int = 1,
        from_row: int = 1,
        length: int = -1,
        count: int = -1,
        fill: bool = False
    ) -> List[List[str]]:
        """Read a block column by column.

        Args:
            from_column: First column
            from_row: First row
            length: Number of rows per column, -1 for all of them
            count: Number of columns, -1 for all of them
            fill: Pad every column to the longest one with ``""``

        Returns:
            Columns up to the last one holding data; ragged unless ``fill``
        """
        check_index("fromColumn", from_column)
        check_index("fromRow", from_row)
        window = SliceOptions(start=from_row, length=length, count=count, fill=fill)
        range_name = self.ranges.columns_range(from_column, window)
        return self.access.read_table(range_name, Dimension.cols, fill)

    def all_rows(
        self,
        from_row: int = 1,
        from_column: int = 1,
        length: int = -1,
        count: int = -1,
        fill: bool = False
    ) -> List[List[str]]:
        """Read a block row by row (see ``all_columns``)."""
        check_index("fromRow", from_row)
        check_index("fromColumn", from_column)
        window = SliceOptions(start=from_column, length=length, count=count, fill=fill)
        range_name = self.ranges.rows_range(from_row, window)
        return self.access.read_table(range_name, Dimension.rows, fill)

    def value(self, row: int, column: int) -> str:
        """Read a single cell; ``""`` when empty."""
        return get_or(self.column(column, from_row=row, length=1), 0, "")

    def value_by_keys(self, row_key: Any, column_key: Any) -> Optional[str]:
        """Read the cell at the intersection of a keyed row and a keyed column.

        The row key is looked up in column A and the column key in row 1.

        Returns:
            The cell value (``""`` when empty), or None if either key is absent
        """
        row_key = to_key_string(row_key, "row key")
        column_key = to_key_string(column_key, "column key")
        rows = self.all_rows()
        if not rows:
            return None
        column = position_of(rows[0], column_key)
        if column < 0:
            return None
        row = leading_position_of(rows, row_key)
        if row < 0:
            return None
        return get_or(rows[row], column, "")

    def column_index_of(self, key: Any, add: bool = False, in_row: int = 1) -> int:
        """1-based index of the column whose key (in row ``in_row``) is ``key``.

        Returns:
            The column index, or -1 if absent and ``add`` is False; with
            ``add`` the key is appended after the last key
        """
        return self.keys.index_of(key, in_row, Dimension.rows, eager=add)

    def row_index_of(self, key: Any, add: bool = False, in_column: int = 1) -> int:
        """1-based index of the row whose key (in column ``in_column``) is ``key``."""
        return self.keys.index_of(key, in_column, Dimension.cols, eager=add)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def insert_value(self, value: Any, row: int, column: int) -> bool:
        """Write a single cell."""
        check_index("row", row)
        check_index("column", column)
        check_axis_values([value])
        self.keys.write_cell(value, row, column)
        return True

    def insert_value_by_keys(
        self,
        value: Any,
        row_key: Any,
        column_key: Any,
        eager: bool = True
    ) -> bool:
        """Write the cell at the intersection of a keyed row and a keyed column.

        With ``eager``, missing keys are created: a missing row key below the
        last row (never in row 1) and a missing column key after the widest row.

        Returns:
            True if written, False if a key is absent and not eager
        """
        row_key = to_key_string(row_key, "row key")
        column_key = to_key_string(column_key, "column key")
        check_axis_values([value])
        rows = self.all_rows()

        row = leading_position_of(rows, row_key) + 1
        if eager and row < 1:
            row = max(len(rows) + 1, 2)
            logger.info(f"Appending row key {row_key!r} at row {row}")
            self.keys.write_cell(row_key, row, 1)

        column = position_of(rows[0], column_key) + 1 if rows else 0
        if eager and column < 1:
            column = max_length(rows, 1) + 1
            logger.info(f"Appending column key {column_key!r} at column {column}")
            self.keys.write_cell(column_key, 1, column)

        if row < 1 or column < 1:
            return False
        self.keys.write_cell(value, row, column)
        return True

    def insert_column(self, column: int, values: List[Any], from_row: int = 1) -> bool:
        """Write a column.

        ``None`` entries leave the existing cells untouched.

        Raises:
            InvalidArgumentError: If values is empty or nested
        """
        check_index("column", column)
        check_index("fromRow", from_row)
        check_axis_values(values)
        window = SliceOptions(start=from_row, length=len(values))
        self.access.write_axis(self.ranges.column_range(column, window), Dimension.cols, values)
        return True

    def insert_row(self, row: int, values: List[Any], from_column: int = 1) -> bool:
        """Write a row (see ``insert_column``)."""
        check_index("row", row)
        check_index("fromColumn", from_column)
        check_axis_values(values)
        window = SliceOptions(start=from_column, length=len(values))
        self.access.write_axis(self.ranges.row_range(row, window), Dimension.rows, values)
        return True

    def insert_columns(
        self,
        column: int,
        values: List[List[Any]],
        from_row: int = 1
    ) -> bool:
        """Write several adjacent columns in one request.

        Args:
            column: First column
            values: Columns to write; they may differ in length
            from_row: First row
        """
        check_index("column", column)
        check_index("fromRow", from_row)
        check_table_values(values)
        window = SliceOptions(start=from_row, length=max_length(values, 1), count=len(values))
        self.access.write_table(self.ranges.columns_range(column, window), Dimension.cols, values)
        return True

    def insert_rows(
        self,
        row: int,
        values: List[List[Any]],
        from_column: int = 1
    ) -> bool:
        """Write several adjacent rows in one request (see ``insert_columns``)."""
        check_index("row", row)
        check_index("fromColumn", from_column)
        check_table_values(values)
        window = SliceOptions(start=from_column, length=max_length(values, 1), count=len(values))
        self.access.write_table(self.ranges.rows_range(row, window), Dimension.rows, values)
        return True

    def insert_column_by_key(
        self,
        key: Any,
        values: List[Any],
        from_row: int = 2,
        eager: bool = True
    ) -> bool:
        """Write the column whose row-1 value is ``key``.

        Returns:
            True if written, False if the key is absent and not eager
        """
        check_index("fromRow", from_row)
        check_axis_values(values)
        column = self.column_index_of(key, add=eager)
        if column < 1:
            return False
        return self.insert_column(column, values, from_row=from_row)

    def insert_row_by_key(
        self,
        key: Any,
        values: List[Any],
        from_column: int = 2,
        eager: bool = True
    ) -> bool:
        """Write the row whose column-A value is ``key``."""
        check_index("fromColumn", from_column)
        check_axis_values(values)
        row = self.row_index_of(key, add=eager)
        if row < 1:
            return False
        return self.insert_row(row, values, from_column=from_column)

    def append_column(
        self,
        values: List[Any],
        from_row: int = 1,
        in_range: bool = False
    ) -> bool:
        """Write a column after the last column holding data.

        Args:
            values: Column values
            from_row: First row
            in_range: Only consider data at or below ``from_row`` when
                finding the last column
        """
        check_index("fromRow", from_row)
        check_axis_values(values)
        columns = self.all_columns(from_row=from_row if in_range else 1)
        return self.insert_column(len(columns) + 1, values, from_row=from_row)

    def append_row(
        self,
        values: List[Any],
        from_column: int = 1,
        in_range: bool = False
    ) -> bool:
        """Write a row after the last row holding data (see ``append_column``)."""
        check_index("fromColumn", from_column)
        check_axis_values(values)
        rows = self.all_rows(from_column=from_column if in_range else 1)
        return self.insert_row(len(rows) + 1, values, from_column=from_column)

    def append_columns(
        self,
        values: List[List[Any]],
        from_row: int = 1,
        in_range: bool = False
    ) -> bool:
        """Write several columns after the last column holding data."""
        check_index("fromRow", from_row)
        check_table_values(values)
        columns = self.all_columns(from_row=from_row if in_range else 1)
        return self.insert_columns(len(columns) + 1, values, from_row=from_row)

    def append_rows(
        self,
        values: List[List[Any]],
        from_column: int = 1,
        in_range: bool = False
    ) -> bool:
        """Write several rows after the last row holding data."""
        check_index("fromColumn", from_column)
        check_table_values(values)
        rows = self.all_rows(from_column=from_column if in_range else 1)
        return self.insert_rows(len(rows) + 1, values, from_column=from_column)

    # ------------------------------------------------------------------
    # pandas interop
    # ------------------------------------------------------------------

    def to_frame(
        self,
        from_row: int = 1,
        from_column: int = 1,
        header: bool = True
    ) -> pd.DataFrame:
        """Read the sheet (from the given corner) as a DataFrame of strings.

        Args:
            from_row: First row of the block
            from_column: First column of the block
            header: Use the first row of the block as column labels
        """
        rows = self.all_rows(from_row=from_row, from_column=from_column, fill=True)
        return rows_to_frame(rows, header=header)

    def insert_frame(
        self,
        frame: pd.DataFrame,
        row: int = 1,
        column: int = 1,
        header: bool = True
    ) -> bool:
        """Write a DataFrame with its top-left corner at (row, column).

        Args:
            frame: Frame to write; the index is not written
            row: Target row of the first written row
            column: Target column of the first written column
            header: Write the column labels as the first row

        Raises:
            InvalidArgumentError: If there is nothing to write
        """
        rows = frame_to_rows(frame, header=header)
        return self.insert_rows(row, rows, from_column=column)
