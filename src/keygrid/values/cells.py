"""
Cell objects of a worksheet.

``WorksheetCells`` mirrors the reads of ``WorksheetValues`` but returns
``Cell`` objects that remember their coordinates, so they can be changed and
written back. Cells from listing reads are ``WritableCell`` and may be batch
inserted; cells from lookups (``find_by_value``, ``cell``, ``cell_by_keys``)
are ``ReadOnlyCell`` and can only be posted one at a time.
"""

from typing import TYPE_CHECKING, Any, Callable, Dict, Iterable, List, Optional

from keygrid.exceptions import InvalidArgumentError, ReadOnlyCellError
from keygrid.spreadsheet.model import (
    Cell,
    ReadOnlyCell,
    WritableCell,
    check_index,
    check_map_to,
)
from keygrid.utils.coerce import to_cell_string, to_key_string, to_optional_key
from keygrid.values.keys import extract_sublist, get_or, leading_position_of, position_of
from keygrid.values.reconcile import axis_to_map

if TYPE_CHECKING:
    from keygrid.values.values import WorksheetValues


def _column_cells(column: int, from_row: int, values: List[str]) -> List[WritableCell]:
    return [WritableCell(row=from_row + i, column=column, value=v) for i, v in enumerate(values)]


def _row_cells(row: int, from_column: int, values: List[str]) -> List[WritableCell]:
    return [WritableCell(row=row, column=from_column + i, value=v) for i, v in enumerate(values)]


def _in_column(column: int, from_row: int) -> Callable[[int, Optional[str]], WritableCell]:
    def wrap(position: int, value: Optional[str]) -> WritableCell:
        return WritableCell(row=from_row + position, column=column, value=value or "")
    return wrap


def _in_row(row: int, from_column: int) -> Callable[[int, Optional[str]], WritableCell]:
    def wrap(position: int, value: Optional[str]) -> WritableCell:
        return WritableCell(row=row, column=from_column + position, value=value or "")
    return wrap


class WorksheetCells:
    """Cell-object access to one worksheet.

    Attributes:
        values: The list-shaped values surface used for all I/O
        map: Key-indexed view returning cells
    """

    def __init__(self, values: "WorksheetValues") -> None:
        self.values = values
        self.map = CellsMapper(self)

    def column(self, column: int, from_row: int = 1, length: int = -1) -> List[WritableCell]:
        return _column_cells(column, from_row, self.values.column(column, from_row, length))

    def row(self, row: int, from_column: int = 1, length: int = -1) -> List[WritableCell]:
        return _row_cells(row, from_column, self.values.row(row, from_column, length))

    def column_by_key(
        self,
        key: Any,
        from_row: int = 2,
        length: int = -1
    ) -> Optional[List[WritableCell]]:
        key = to_key_string(key)
        check_index("fromRow", from_row)
        columns = self.values.all_columns()
        index = leading_position_of(columns, key)
        if index < 0:
            return None
        return _column_cells(index + 1, from_row, extract_sublist(columns[index], from_row - 1, length))

    def row_by_key(
        self,
        key: Any,
        from_column: int = 2,
        length: int = -1
    ) -> Optional[List[WritableCell]]:
        key = to_key_string(key)
        check_index("fromColumn", from_column)
        rows = self.values.all_rows()
        index = leading_position_of(rows, key)
        if index < 0:
            return None
        return _row_cells(index + 1, from_column, extract_sublist(rows[index], from_column - 1, length))

    def last_column(
        self,
        from_row: int = 1,
        length: int = -1,
        in_range: bool = False
    ) -> Optional[List[WritableCell]]:
        check_index("fromRow", from_row)
        if in_range:
            columns = self.values.all_columns(from_row=from_row, length=length)
            if not columns:
                return None
            return _column_cells(len(columns), from_row, columns[-1])
        columns = self.values.all_columns()
        if not columns:
            return None
        return _column_cells(len(columns), from_row, extract_sublist(columns[-1], from_row - 1, length))

    def last_row(
        self,
        from_column: int = 1,
        length: int = -1,
        in_range: bool = False
    ) -> Optional[List[WritableCell]]:
        check_index("fromColumn", from_column)
        if in_range:
            rows = self.values.all_rows(from_column=from_column, length=length)
            if not rows:
                return None
            return _row_cells(len(rows), from_column, rows[-1])
        rows = self.values.all_rows()
        if not rows:
            return None
        return _row_cells(len(rows), from_column, extract_sublist(rows[-1], from_column - 1, length))

    def all_columns(
        self,
        from_column: int = 1,
        from_row: int = 1,
        length: int = -1,
        count: int = -1,
        fill: bool = False
    ) -> List[List[WritableCell]]:
        columns = self.values.all_columns(from_column, from_row, length, count, fill)
        return [_column_cells(from_column + i, from_row, column) for i, column in enumerate(columns)]

    def all_rows(
        self,
        from_row: int = 1,
        from_column: int = 1,
        length: int = -1,
        count: int = -1,
        fill: bool = False
    ) -> List[List[WritableCell]]:
        rows = self.values.all_rows(from_row, from_column, length, count, fill)
        return [_row_cells(from_row + i, from_column, row) for i, row in enumerate(rows)]

    def find_by_value(
        self,
        value: Any,
        from_row: int = 1,
        from_column: int = 1,
        length: int = -1
    ) -> List[ReadOnlyCell]:
        """Find every cell whose value equals ``value``.

        Args:
            value: Value to look for, compared as a string
            from_row: First row searched
            from_column: First column searched
            length: Number of columns searched, -1 for all of them

        Returns:
            Matching cells in row order
        """
        target = to_cell_string(value)
        rows = self.values.all_rows(from_row=from_row, from_column=from_column, length=length)
        return [
            ReadOnlyCell(row=from_row + r, column=from_column + c, value=found)
            for r, row in enumerate(rows)
            for c, found in enumerate(row)
            if found == target
        ]

    def cell(self, row: int, column: int) -> ReadOnlyCell:
        """Read a single cell."""
        return ReadOnlyCell(row=row, column=column, value=self.values.value(row, column))

    def cell_by_keys(self, row_key: Any, column_key: Any) -> Optional[ReadOnlyCell]:
        """Read the cell at the intersection of a keyed row and a keyed column.

        Returns:
            The cell, or None if either key is absent
        """
        row_key = to_key_string(row_key, "row key")
        column_key = to_key_string(column_key, "column key")
        rows = self.values.all_rows()
        if not rows:
            return None
        column = position_of(rows[0], column_key)
        if column < 0:
            return None
        row = leading_position_of(rows, row_key)
        if row < 0:
            return None
        return ReadOnlyCell(row=row + 1, column=column + 1, value=get_or(rows[row], column, ""))

    def insert(self, cells: Iterable[Cell]) -> bool:
        """Write cells that share a row or a column in one request.

        Positions between the cells that are not covered are left untouched.

        Raises:
            InvalidArgumentError: If there are no cells or they span more than
                one row and column
            ReadOnlyCellError: If any cell is read-only
        """
        cells = list(cells or [])
        if not cells:
            raise InvalidArgumentError(f"invalid cells ({cells!r})")
        for cell in cells:
            if not cell.writable:
                raise ReadOnlyCellError(f"cannot batch insert read-only cell {cell}")

        cells = sorted(cells)
        first, last = cells[0], cells[-1]
        if all(cell.row == first.row for cell in cells):
            axis: List[Any] = [None] * (last.column - first.column + 1)
            for cell in cells:
                axis[cell.column - first.column] = cell.value
            return self.values.insert_row(first.row, axis, from_column=first.column)
        if all(cell.column == first.column for cell in cells):
            axis = [None] * (last.row - first.row + 1)
            for cell in cells:
                axis[cell.row - first.row] = cell.value
            return self.values.insert_column(first.column, axis, from_row=first.row)
        raise InvalidArgumentError("cells must share a row or a column")

    def post(self, cell: Cell, value: Any) -> bool:
        """Write a new value to a cell and update the cell object.

        Returns:
            True if written, False if the cell already holds the value
        """
        text = to_cell_string(value)
        if cell.value == text:
            return False
        self.values.insert_value(value, cell.row, cell.column)
        cell.value = text
        return True

    def refresh(self, cell: Cell) -> bool:
        """Re-read a cell's value from the sheet.

        Returns:
            True if the value changed
        """
        before = cell.value
        cell.value = self.values.value(cell.row, cell.column)
        return cell.value != before


class CellsMapper:
    """Key-indexed access returning ``{key: WritableCell}`` maps.

    Keys without a data cell map to a cell at the intended coordinate with an
    empty value, so writing it back fills that position.
    """

    def __init__(self, cells: WorksheetCells) -> None:
        self.cells = cells

    @property
    def _values(self) -> "WorksheetValues":
        return self.cells.values

    def column(
        self,
        column: int,
        from_row: int = 1,
        length: int = -1,
        map_to: int = 1
    ) -> Dict[str, WritableCell]:
        check_index("column", column)
        check_index("mapTo", map_to)
        check_map_to(column, map_to)
        columns = self._values.all_columns(from_row=from_row, length=length)
        keys = get_or(columns, map_to - 1, [])
        data = get_or(columns, column - 1, [])
        return axis_to_map(keys, data, _in_column(column, from_row))

    def row(
        self,
        row: int,
        from_column: int = 1,
        length: int = -1,
        map_to: int = 1
    ) -> Dict[str, WritableCell]:
        check_index("row", row)
        check_index("mapTo", map_to)
        check_map_to(row, map_to)
        rows = self._values.all_rows(from_column=from_column, length=length)
        keys = get_or(rows, map_to - 1, [])
        data = get_or(rows, row - 1, [])
        return axis_to_map(keys, data, _in_row(row, from_column))

    def column_by_key(
        self,
        key: Any,
        from_row: int = 2,
        length: int = -1,
        map_to: Any = None
    ) -> Optional[Dict[str, WritableCell]]:
        key = to_key_string(key)
        map_key = to_optional_key(map_to)
        check_index("fromRow", from_row)
        check_map_to(key, map_key)
        columns = self._values.all_columns()
        if not columns:
            return None
        index = leading_position_of(columns, key)
        if index < 0:
            return None
        map_index = 0 if map_key is None else leading_position_of(columns, map_key)
        if map_index < 0:
            return None
        check_map_to(index + 1, map_index + 1)
        keys = extract_sublist(columns[map_index], from_row - 1, length)
        data = extract_sublist(columns[index], from_row - 1, length)
        return axis_to_map(keys, data, _in_column(index + 1, from_row))

    def row_by_key(
        self,
        key: Any,
        from_column: int = 2,
        length: int = -1,
        map_to: Any = None
    ) -> Optional[Dict[str, WritableCell]]:
        key = to_key_string(key)
        map_key = to_optional_key(map_to)
        check_index("fromColumn", from_column)
        check_map_to(key, map_key)
        rows = self._values.all_rows()
        if not rows:
            return None
        index = leading_position_of(rows, key)
        if index < 0:
            return None
        map_index = 0 if map_key is None else leading_position_of(rows, map_key)
        if map_index < 0:
            return None
        check_map_to(index + 1, map_index + 1)
        keys = extract_sublist(rows[map_index], from_column - 1, length)
        data = extract_sublist(rows[index], from_column - 1, length)
        return axis_to_map(keys, data, _in_row(index + 1, from_column))

    def last_column(
        self,
        from_row: int = 1,
        length: int = -1,
        map_to: int = 1,
        in_range: bool = False
    ) -> Optional[Dict[str, WritableCell]]:
        check_index("fromRow", from_row)
        check_index("mapTo", map_to)
        if in_range:
            columns = self._values.all_columns(from_row=from_row, length=length)
            keys = get_or(columns, map_to - 1, [])
            data = columns[-1] if columns else []
        else:
            columns = self._values.all_columns()
            keys = extract_sublist(get_or(columns, map_to - 1, []), from_row - 1, length)
            data = extract_sublist(columns[-1], from_row - 1, length) if columns else []
        if len(columns) < 2:
            return None
        check_map_to(len(columns), map_to)
        return axis_to_map(keys, data, _in_column(len(columns), from_row))

    def last_row(
        self,
        from_column: int = 1,
        length: int = -1,
        map_to: int = 1,
        in_range: bool = False
    ) -> Optional[Dict[str, WritableCell]]:
        check_index("fromColumn", from_column)
        check_index("mapTo", map_to)
        if in_range:
            rows = self._values.all_rows(from_column=from_column, length=length)
            keys = get_or(rows, map_to - 1, [])
            data = rows[-1] if rows else []
        else:
            rows = self._values.all_rows()
            keys = extract_sublist(get_or(rows, map_to - 1, []), from_column - 1, length)
            data = extract_sublist(rows[-1], from_column - 1, length) if rows else []
        if len(rows) < 2:
            return None
        check_map_to(len(rows), map_to)
        return axis_to_map(keys, data, _in_row(len(rows), from_column))

    def insert(self, cells: Dict[str, Cell]) -> bool:
        """Write the cells of a map (see ``WorksheetCells.insert``)."""
        if not cells:
            raise InvalidArgumentError(f"invalid cells ({cells!r})")
        return self.cells.insert(sorted(cells.values()))
