"""
Range construction for worksheet reads and writes.

Every range is built as ``'<title>'!<from>:<to>`` with both corners spelled
out. Before the label string is built the bounds tracker is asked to cover the
last row and column the range touches; open-ended slices (length or count of
UNBOUNDED) end at the post-expansion grid bound.
"""

from typing import Optional

from gspread.utils import absolute_range_name

from keygrid.spreadsheet.a1 import cell_label
from keygrid.spreadsheet.model import SliceOptions
from keygrid.worksheet.bounds import BoundsTracker


def _last(start: int, size: int) -> Optional[int]:
    """Last 1-based position of a bounded span, None when unbounded."""
    return start + size - 1 if size > 0 else None


class RangeBuilder:
    """Builds A1 ranges for one worksheet.

    Attributes:
        title: Sheet title used as the range prefix
        tracker: Bounds tracker consulted (and grown) for every range
    """

    def __init__(self, title: str, tracker: BoundsTracker) -> None:
        self.title = title
        self.tracker = tracker

    def _span(self, row: int, column: int, end_row: int, end_column: int) -> str:
        start = cell_label(row, column)
        end = cell_label(end_row, end_column)
        return absolute_range_name(self.title, f"{start}:{end}")

    def sheet_range(self) -> str:
        """Range covering the whole sheet (the quoted title)."""
        return absolute_range_name(self.title)

    def cell_range(self, row: int, column: int) -> str:
        """Range of a single cell, e.g. ``'Sheet1'!C7``."""
        self.tracker.ensure_bounds(row, column)
        return absolute_range_name(self.title, cell_label(row, column))

    def row_range(self, row: int, window: SliceOptions) -> str:
        """Range of a row slice.

        Args:
            row: Row index
            window: ``start`` is the first column, ``length`` the number of
                cells (UNBOUNDED for up to the last column of the grid)
        """
        end_column = _last(window.start, window.length)
        self.tracker.ensure_bounds(row, end_column or window.start)
        if end_column is None:
            end_column = self.tracker.column_count
        return self._span(row, window.start, row, end_column)

    def column_range(self, column: int, window: SliceOptions) -> str:
        """Range of a column slice.

        Args:
            column: Column index
            window: ``start`` is the first row, ``length`` the number of cells
                (UNBOUNDED for up to the last row of the grid)
        """
        end_row = _last(window.start, window.length)
        self.tracker.ensure_bounds(end_row or window.start, column)
        if end_row is None:
            end_row = self.tracker.row_count
        return self._span(window.start, column, end_row, column)

    def columns_range(self, column: int, window: SliceOptions) -> str:
        """Range of a block read or written column by column.

        Args:
            column: First column of the block
            window: ``start`` is the first row, ``length`` bounds the rows and
                ``count`` bounds the columns
        """
        end_row = _last(window.start, window.length)
        end_column = _last(column, window.count)
        self.tracker.ensure_bounds(end_row or window.start, end_column or column)
        if end_row is None:
            end_row = self.tracker.row_count
        if end_column is None:
            end_column = self.tracker.column_count
        return self._span(window.start, column, end_row, end_column)

    def rows_range(self, row: int, window: SliceOptions) -> str:
        """Range of a block read or written row by row.

        Args:
            row: First row of the block
            window: ``start`` is the first column, ``length`` bounds the
                columns and ``count`` bounds the rows
        """
        end_column = _last(window.start, window.length)
        end_row = _last(row, window.count)
        self.tracker.ensure_bounds(end_row or row, end_column or window.start)
        if end_row is None:
            end_row = self.tracker.row_count
        if end_column is None:
            end_column = self.tracker.column_count
        return self._span(row, window.start, end_row, end_column)
