"""
Key-indexed value maps.

``ValuesMapper`` reads rows and columns as ``{key: value}`` maps, pairing each
data axis with a key axis (``map_to``): column A for rows, row 1 for columns
by default. Writes go the other way: caller maps are projected onto the key
axis currently in the sheet (see ``keygrid.values.reconcile``).

A write that extends the key axis (``append_missing``) is two requests: the
new keys are written first, then the data. They are not transactional.
"""

import logging
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional

from gspread.utils import Dimension

from keygrid.exceptions import InvalidArgumentError
from keygrid.spreadsheet.model import MapWriteOptions, check_index, check_map_to
from keygrid.utils.coerce import to_key_string, to_optional_key
from keygrid.values.keys import extract_sublist, get_or, leading_position_of
from keygrid.values.reconcile import axis_to_map, normalize_maps, reconcile
from keygrid.worksheet.access import last_in_range

if TYPE_CHECKING:
    from keygrid.values.values import WorksheetValues
    from keygrid.worksheet.bounds import BoundsTracker

logger = logging.getLogger(__name__)


def _text(position: int, value: Optional[str]) -> str:
    return "" if value is None else value


class ValuesMapper:
    """Map-shaped access to the values of one worksheet.

    Attributes:
        values: The list-shaped values surface used for all I/O
    """

    def __init__(self, values: "WorksheetValues") -> None:
        self.values = values

    @property
    def _tracker(self) -> "BoundsTracker":
        return self.values.ranges.tracker

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def column(
        self,
        column: int,
        from_row: int = 1,
        length: int = -1,
        map_to: int = 1
    ) -> Dict[str, str]:
        """Read a column as a map keyed by column ``map_to``.

        Args:
            column: Data column
            from_row: First row
            length: Number of rows, -1 for all of them
            map_to: Key column

        Raises:
            InvalidArgumentError: If column equals map_to
        """
        check_index("column", column)
        check_index("mapTo", map_to)
        check_map_to(column, map_to)
        columns = self.values.all_columns(from_row=from_row, length=length)
        keys = get_or(columns, map_to - 1, [])
        data = get_or(columns, column - 1, [])
        return axis_to_map(keys, data, _text)

    def row(
        self,
        row: int,
        from_column: int = 1,
        length: int = -1,
        map_to: int = 1
    ) -> Dict[str, str]:
        """Read a row as a map keyed by row ``map_to`` (see ``column``)."""
        check_index("row", row)
        check_index("mapTo", map_to)
        check_map_to(row, map_to)
        rows = self.values.all_rows(from_column=from_column, length=length)
        keys = get_or(rows, map_to - 1, [])
        data = get_or(rows, row - 1, [])
        return axis_to_map(keys, data, _text)

    def column_by_key(
        self,
        key: Any,
        from_row: int = 2,
        length: int = -1,
        map_to: Any = None
    ) -> Optional[Dict[str, str]]:
        """Read the column whose row-1 value is ``key`` as a map.

        Args:
            key: Key of the data column
            from_row: First row
            length: Number of rows, -1 for all of them
            map_to: Key of the key column, None for column A

        Returns:
            The map, or None if either column is not found

        Raises:
            InvalidArgumentError: If key and map_to select the same column
        """
        key = to_key_string(key)
        map_key = to_optional_key(map_to)
        check_index("fromRow", from_row)
        check_map_to(key, map_key)
        columns = self.values.all_columns()
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
        return axis_to_map(keys, data, _text)

    def row_by_key(
        self,
        key: Any,
        from_column: int = 2,
        length: int = -1,
        map_to: Any = None
    ) -> Optional[Dict[str, str]]:
        """Read the row whose column-A value is ``key`` as a map."""
        key = to_key_string(key)
        map_key = to_optional_key(map_to)
        check_index("fromColumn", from_column)
        check_map_to(key, map_key)
        rows = self.values.all_rows()
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
        return axis_to_map(keys, data, _text)

    def last_column(
        self,
        from_row: int = 1,
        length: int = -1,
        map_to: int = 1,
        in_range: bool = False
    ) -> Optional[Dict[str, str]]:
        """Read the last column holding data as a map.

        Returns:
            The map, or None when there is no data column besides the key column

        Raises:
            InvalidArgumentError: If the last column is the key column
        """
        check_index("fromRow", from_row)
        check_index("mapTo", map_to)
        if in_range:
            columns = self.values.all_columns(from_row=from_row, length=length)
            if len(columns) < 2:
                return None
            check_map_to(len(columns), map_to)
            return axis_to_map(get_or(columns, map_to - 1, []), columns[-1], _text)

        columns = self.values.all_columns()
        if len(columns) < 2:
            return None
        check_map_to(len(columns), map_to)
        keys = extract_sublist(get_or(columns, map_to - 1, []), from_row - 1, length)
        data = extract_sublist(columns[-1], from_row - 1, length)
        return axis_to_map(keys, data, _text)

    def last_row(
        self,
        from_column: int = 1,
        length: int = -1,
        map_to: int = 1,
        in_range: bool = False
    ) -> Optional[Dict[str, str]]:
        """Read the last row holding data as a map (see ``last_column``)."""
        check_index("fromColumn", from_column)
        check_index("mapTo", map_to)
        if in_range:
            rows = self.values.all_rows(from_column=from_column, length=length)
            if len(rows) < 2:
                return None
            check_map_to(len(rows), map_to)
            return axis_to_map(get_or(rows, map_to - 1, []), rows[-1], _text)

        rows = self.values.all_rows()
        if len(rows) < 2:
            return None
        check_map_to(len(rows), map_to)
        keys = extract_sublist(get_or(rows, map_to - 1, []), from_column - 1, length)
        data = extract_sublist(rows[-1], from_column - 1, length)
        return axis_to_map(keys, data, _text)

    def all_columns(
        self,
        from_column: int = 1,
        from_row: int = 1,
        length: int = -1,
        count: int = -1,
        map_to: int = 1
    ) -> Optional[List[Dict[str, str]]]:
        """Read columns as maps keyed by column ``map_to``.

        The key column itself is skipped.

        Returns:
            One map per column from ``from_column``; None when the sheet has
            fewer than two columns, an empty list when the key column is empty
        """
        check_index("fromColumn", from_column)
        check_index("mapTo", map_to)
        columns = self.values.all_columns(from_row=from_row, length=length)
        if len(columns) < 2:
            return None
        keys = get_or(columns, map_to - 1, [])
        if not keys:
            return []
        start = min(from_column - 1, len(columns))
        end = len(columns) if count < 1 else min(start + count, len(columns))
        return [
            axis_to_map(keys, columns[index], _text)
            for index in range(start, end)
            if index != map_to - 1
        ]

    def all_rows(
        self,
        from_row: int = 1,
        from_column: int = 1,
        length: int = -1,
        count: int = -1,
        map_to: int = 1
    ) -> Optional[List[Dict[str, str]]]:
        """Read rows as maps keyed by row ``map_to`` (see ``all_columns``)."""
        check_index("fromRow", from_row)
        check_index("mapTo", map_to)
        rows = self.values.all_rows(from_column=from_column, length=length)
        if len(rows) < 2:
            return None
        keys = get_or(rows, map_to - 1, [])
        if not keys:
            return []
        start = min(from_row - 1, len(rows))
        end = len(rows) if count < 1 else min(start + count, len(rows))
        return [
            axis_to_map(keys, rows[index], _text)
            for index in range(start, end)
            if index != map_to - 1
        ]

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def _write(
        self,
        index: int,
        maps: List[Dict[str, Any]],
        all_keys: List[str],
        start: int,
        options: MapWriteOptions,
        dimension: str
    ) -> bool:
        """Reconcile maps against a key axis and write them.

        Args:
            index: First data column (COLUMNS) or row (ROWS) to write
            maps: Normalized maps
            all_keys: The whole key axis as currently in the sheet
            start: Position along the key axis where the data starts
            options: Map write policies
            dimension: ``COLUMNS`` writes columns keyed by a column, ``ROWS``
                writes rows keyed by a row
        """
        result = reconcile(maps, all_keys, start, options)
        by_columns = Dimension(dimension) == Dimension.cols

        if result.new_keys:
            logger.info(
                f"Appending {len(result.new_keys)} keys to "
                f"{'column' if by_columns else 'row'} {options.map_to} "
                f"at position {result.key_offset}"
            )
            if by_columns:
                self.values.insert_column(options.map_to, result.new_keys, from_row=result.key_offset)
            else:
                self.values.insert_row(options.map_to, result.new_keys, from_column=result.key_offset)

        if result.is_empty:
            return False
        if len(result.axes) == 1:
            if by_columns:
                return self.values.insert_column(index, result.axes[0], from_row=start)
            return self.values.insert_row(index, result.axes[0], from_column=start)
        if by_columns:
            return self.values.insert_columns(index, result.axes, from_row=start)
        return self.values.insert_rows(index, result.axes, from_column=start)

    def _check_map_to_bounds(self, map_to: int, count: int) -> None:
        if map_to > count:
            raise InvalidArgumentError(f"invalid mapTo ({map_to})")

    def insert_column(
        self,
        column: int,
        mapping: Mapping[Any, Any],
        from_row: int = 1,
        map_to: int = 1,
        append_missing: bool = False,
        overwrite: bool = False
    ) -> bool:
        """Write a map into a column, matching its keys against column ``map_to``.

        Args:
            column: Data column
            mapping: Values by key
            from_row: First row of the key column to match against
            map_to: Key column
            append_missing: Add keys absent from the key column below its end
            overwrite: Blank cells whose keys are absent from the map

        Returns:
            True if written, False if there was nothing to write

        Raises:
            InvalidArgumentError: If the map is empty, column equals map_to or
                map_to lies outside the grid
        """
        return self.insert_columns(
            column,
            [mapping],
            from_row=from_row,
            map_to=map_to,
            append_missing=append_missing,
            overwrite=overwrite,
        )

    def insert_row(
        self,
        row: int,
        mapping: Mapping[Any, Any],
        from_column: int = 1,
        map_to: int = 1,
        append_missing: bool = False,
        overwrite: bool = False
    ) -> bool:
        """Write a map into a row, matching its keys against row ``map_to``."""
        return self.insert_rows(
            row,
            [mapping],
            from_column=from_column,
            map_to=map_to,
            append_missing=append_missing,
            overwrite=overwrite,
        )

    def insert_columns(
        self,
        column: int,
        maps: List[Mapping[Any, Any]],
        from_row: int = 1,
        map_to: int = 1,
        append_missing: bool = False,
        overwrite: bool = False
    ) -> bool:
        """Write maps into adjacent columns starting at ``column``.

        All maps are matched against the same key column; missing keys are
        appended once, in order of first appearance.
        """
        check_index("column", column)
        check_index("fromRow", from_row)
        options = MapWriteOptions(map_to=map_to, append_missing=append_missing, overwrite=overwrite)
        check_map_to(column, map_to)
        maps = normalize_maps(maps)
        self._check_map_to_bounds(map_to, self._tracker.column_count)
        keys = self.values.column(map_to)
        return self._write(column, maps, keys, from_row, options, Dimension.cols)

    def insert_rows(
        self,
        row: int,
        maps: List[Mapping[Any, Any]],
        from_column: int = 1,
        map_to: int = 1,
        append_missing: bool = False,
        overwrite: bool = False
    ) -> bool:
        """Write maps into adjacent rows starting at ``row``."""
        check_index("row", row)
        check_index("fromColumn", from_column)
        options = MapWriteOptions(map_to=map_to, append_missing=append_missing, overwrite=overwrite)
        check_map_to(row, map_to)
        maps = normalize_maps(maps)
        self._check_map_to_bounds(map_to, self._tracker.row_count)
        keys = self.values.row(map_to)
        return self._write(row, maps, keys, from_column, options, Dimension.rows)

    def insert_column_by_key(
        self,
        key: Any,
        mapping: Mapping[Any, Any],
        from_row: int = 2,
        map_to: Any = None,
        append_missing: bool = False,
        overwrite: bool = False,
        eager: bool = True
    ) -> bool:
        """Write a map into the column whose row-1 value is ``key``.

        Args:
            key: Key of the data column
            mapping: Values by key
            from_row: First row of the key column to match against
            map_to: Key of the key column, None for column A
            append_missing: Add keys absent from the key column below its end
            overwrite: Blank cells whose keys are absent from the map
            eager: Create the data column after the last one when absent

        Returns:
            True if written; False if a column could not be found (or created)
            or there was nothing to write
        """
        key = to_key_string(key)
        map_key = to_optional_key(map_to)
        check_index("fromRow", from_row)
        check_map_to(key, map_key)
        maps = normalize_maps([mapping])

        columns = self.values.all_columns()
        map_index = 0 if map_key is None else leading_position_of(columns, map_key)
        if map_index < 0:
            return False
        index = leading_position_of(columns, key)
        if index < 0:
            if not eager or not columns or not columns[0]:
                return False
            index = len(columns)
            logger.info(f"Appending column key {key!r} at column {index + 1}")
            self.values.keys.write_cell(key, 1, index + 1)
        else:
            check_map_to(index + 1, map_index + 1)

        options = MapWriteOptions(
            map_to=map_index + 1,
            append_missing=append_missing,
            overwrite=overwrite,
        )
        keys = get_or(columns, map_index, [])
        return self._write(index + 1, maps, keys, from_row, options, Dimension.cols)

    def insert_row_by_key(
        self,
        key: Any,
        mapping: Mapping[Any, Any],
        from_column: int = 2,
        map_to: Any = None,
        append_missing: bool = False,
        overwrite: bool = False,
        eager: bool = True
    ) -> bool:
        """Write a map into the row whose column-A value is ``key``."""
        key = to_key_string(key)
        map_key = to_optional_key(map_to)
        check_index("fromColumn", from_column)
        check_map_to(key, map_key)
        maps = normalize_maps([mapping])

        rows = self.values.all_rows()
        map_index = 0 if map_key is None else leading_position_of(rows, map_key)
        if map_index < 0:
            return False
        index = leading_position_of(rows, key)
        if index < 0:
            if not eager or not rows or not rows[0]:
                return False
            index = len(rows)
            logger.info(f"Appending row key {key!r} at row {index + 1}")
            self.values.keys.write_cell(key, index + 1, 1)
        else:
            check_map_to(index + 1, map_index + 1)

        options = MapWriteOptions(
            map_to=map_index + 1,
            append_missing=append_missing,
            overwrite=overwrite,
        )
        keys = get_or(rows, map_index, [])
        return self._write(index + 1, maps, keys, from_column, options, Dimension.rows)

    def append_column(
        self,
        mapping: Mapping[Any, Any],
        from_row: int = 1,
        map_to: int = 1,
        append_missing: bool = False,
        in_range: bool = False
    ) -> bool:
        """Write a map into a new column after the last column holding data.

        On an empty sheet with ``append_missing`` and ``map_to`` 1 the keys are
        written to column A and the values to column B.
        """
        return self.append_columns(
            [mapping],
            from_row=from_row,
            map_to=map_to,
            append_missing=append_missing,
            in_range=in_range,
        )

    def append_row(
        self,
        mapping: Mapping[Any, Any],
        from_column: int = 1,
        map_to: int = 1,
        append_missing: bool = False,
        in_range: bool = False
    ) -> bool:
        """Write a map into a new row after the last row holding data."""
        return self.append_rows(
            [mapping],
            from_column=from_column,
            map_to=map_to,
            append_missing=append_missing,
            in_range=in_range,
        )

    def append_columns(
        self,
        maps: List[Mapping[Any, Any]],
        from_row: int = 1,
        map_to: int = 1,
        append_missing: bool = False,
        in_range: bool = False
    ) -> bool:
        """Write maps into new columns after the last column holding data.

        Args:
            maps: Values by key, one map per new column
            from_row: First row of the key column to match against
            map_to: Key column
            append_missing: Add keys absent from the key column below its end
            in_range: Only consider data at or below ``from_row`` when finding
                the last column

        Returns:
            True if written, False if there is no key column to match against

        Raises:
            InvalidArgumentError: If map_to lies after the last column
        """
        check_index("fromRow", from_row)
        check_index("mapTo", map_to)
        maps = normalize_maps(maps)
        columns = self.values.all_columns()
        column = (last_in_range(columns, from_row) if in_range else len(columns)) + 1

        if column < 2:
            if append_missing and map_to == 1:
                options = MapWriteOptions(map_to=1, append_missing=True)
                return self._write(2, maps, [], from_row, options, Dimension.cols)
            return False

        check_map_to(column, map_to)
        self._check_map_to_bounds(map_to, len(columns))
        options = MapWriteOptions(map_to=map_to, append_missing=append_missing)
        return self._write(column, maps, columns[map_to - 1], from_row, options, Dimension.cols)

    def append_rows(
        self,
        maps: List[Mapping[Any, Any]],
        from_column: int = 1,
        map_to: int = 1,
        append_missing: bool = False,
        in_range: bool = False
    ) -> bool:
        """Write maps into new rows after the last row holding data."""
        check_index("fromColumn", from_column)
        check_index("mapTo", map_to)
        maps = normalize_maps(maps)
        rows = self.values.all_rows()
        row = (last_in_range(rows, from_column) if in_range else len(rows)) + 1

        if row < 2:
            if append_missing and map_to == 1:
                options = MapWriteOptions(map_to=1, append_missing=True)
                return self._write(2, maps, [], from_column, options, Dimension.rows)
            return False

        check_map_to(row, map_to)
        self._check_map_to_bounds(map_to, len(rows))
        options = MapWriteOptions(map_to=map_to, append_missing=append_missing)
        return self._write(row, maps, rows[map_to - 1], from_column, options, Dimension.rows)
