"""
Worksheet handle.

A ``Worksheet`` owns the per-sheet state (the bounds tracker) and wires the
range builder, value access layer, key resolver and the public ``values`` and
``cells`` surfaces together around one ``SheetsClient``.

Usage:
    >>> import gspread
    >>> from keygrid import Worksheet
    >>> gc = gspread.service_account()
    >>> ws = Worksheet.from_gspread(gc.open_by_key(KEY).sheet1)
    >>> ws.values.map.insert_row_by_key("alice", {"age": 30}, append_missing=True)
"""

import logging
from typing import Any, Dict, Optional

import gspread

from keygrid.config import WorksheetConfig
from keygrid.exceptions import InvalidArgumentError
from keygrid.spreadsheet.model import Bounds, SliceOptions, check_index
from keygrid.transport.sheets_client import SheetsClient
from keygrid.values.cells import WorksheetCells
from keygrid.values.keys import KeyIndexResolver
from keygrid.values.values import WorksheetValues
from keygrid.worksheet.access import ValueAccess
from keygrid.worksheet.bounds import BoundsTracker
from keygrid.worksheet.ranges import RangeBuilder

logger = logging.getLogger(__name__)


class Worksheet:
    """
    A single sheet (tab) of a spreadsheet.

    Attributes:
        client: SheetsClient used for all requests
        id: Numeric sheet id
        title: Sheet title
        tracker: Grid bounds of the sheet
        values: String values by index or key (``values.map`` for maps)
        cells: Cell objects by index or key (``cells.map`` for maps)
    """

    def __init__(
        self,
        client: SheetsClient,
        sheet_id: int,
        title: str,
        row_count: int,
        column_count: int
    ) -> None:
        self.client = client
        self.id = sheet_id
        self.title = title
        self.tracker = BoundsTracker(client, sheet_id, row_count, column_count)
        self.ranges = RangeBuilder(title, self.tracker)
        self.access = ValueAccess(client)
        self.keys = KeyIndexResolver(self.ranges, self.access)
        self.values = WorksheetValues(self.ranges, self.access, self.keys)
        self.cells = WorksheetCells(self.values)

    @classmethod
    def from_gspread(
        cls,
        worksheet: gspread.Worksheet,
        config: Optional[WorksheetConfig] = None
    ) -> "Worksheet":
        """
        Wrap a worksheet obtained through gspread.

        Args:
            worksheet: e.g. ``gc.open_by_key(key).worksheet("Sheet1")``
            config: Request options (defaults to ``WorksheetConfig()``)
        """
        client = SheetsClient(worksheet.spreadsheet, config)
        return cls(
            client,
            sheet_id=worksheet.id,
            title=worksheet.title,
            row_count=worksheet.row_count,
            column_count=worksheet.col_count,
        )

    @property
    def bounds(self) -> Bounds:
        return self.tracker.bounds

    @property
    def row_count(self) -> int:
        return self.tracker.row_count

    @property
    def column_count(self) -> int:
        return self.tracker.column_count

    def add(self, rows: int = 0, columns: int = 0) -> bool:
        """
        Grow the grid by a number of rows and columns.

        Returns:
            True if the grid was resized, False if both counts are 0

        Raises:
            InvalidArgumentError: If a count is negative
        """
        if rows < 0:
            raise InvalidArgumentError(f"invalid rows ({rows})")
        if columns < 0:
            raise InvalidArgumentError(f"invalid columns ({columns})")
        return self.tracker.ensure_bounds(self.row_count + rows, self.column_count + columns)

    def clear(self) -> None:
        """Clear every value in the sheet; the grid size is unchanged."""
        self.access.clear(self.ranges.sheet_range())

    def clear_row(
        self,
        row: int,
        from_column: int = 1,
        length: int = -1,
        count: int = 1
    ) -> None:
        """
        Clear ``count`` rows starting at ``row``.

        Args:
            row: First row
            from_column: First column to clear
            length: Number of columns to clear, -1 for all of them
            count: Number of rows
        """
        check_index("row", row)
        check_index("fromColumn", from_column)
        check_index("count", count)
        window = SliceOptions(start=from_column, length=length, count=count)
        self.access.clear(self.ranges.rows_range(row, window))

    def clear_column(
        self,
        column: int,
        from_row: int = 1,
        length: int = -1,
        count: int = 1
    ) -> None:
        """Clear ``count`` columns starting at ``column`` (see ``clear_row``)."""
        check_index("column", column)
        check_index("fromRow", from_row)
        check_index("count", count)
        window = SliceOptions(start=from_row, length=length, count=count)
        self.access.clear(self.ranges.columns_range(column, window))

    def refresh(self) -> Bounds:
        """
        Re-read the title and grid size from the server.

        Returns:
            The server-confirmed bounds
        """
        properties = self.properties()
        grid: Dict[str, Any] = properties.get("gridProperties", {})
        self.title = properties.get("title", self.title)
        self.ranges.title = self.title
        self.tracker.reset(grid.get("rowCount", 0), grid.get("columnCount", 0))
        logger.debug(f"Refreshed sheet {self.id}: {self.row_count}x{self.column_count}")
        return self.bounds

    def properties(self) -> Dict[str, Any]:
        """Fetch the sheet's properties object."""
        return self.client.sheet_properties(self.id)

    def __repr__(self) -> str:
        return (
            f"Worksheet(id={self.id}, title={self.title!r}, "
            f"rows={self.row_count}, columns={self.column_count})"
        )
