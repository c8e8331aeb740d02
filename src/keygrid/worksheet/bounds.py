"""
Grid bounds tracking.

Google Sheets rejects reads and writes that reference cells outside a sheet's
grid, so every range is checked against the tracked bounds first and the grid
is grown with a single resize request when the range does not fit.
"""

import logging

from keygrid.spreadsheet.model import Bounds
from keygrid.transport.sheets_client import SheetsClient

logger = logging.getLogger(__name__)


class BoundsTracker:
    """Tracks the grid size of one worksheet and grows it on demand.

    The tracked bounds are a local copy of the server state; they change only
    after a successful resize or an explicit ``reset``. Nothing is locked, so a
    concurrent external change is only observed after ``reset``.

    Attributes:
        client: SheetsClient used for the resize requests
        sheet_id: Numeric id of the sheet (tab)
        bounds: Last-known grid size
    """

    def __init__(
        self,
        client: SheetsClient,
        sheet_id: int,
        row_count: int,
        column_count: int
    ) -> None:
        self.client = client
        self.sheet_id = sheet_id
        self.bounds = Bounds(row_count=row_count, column_count=column_count)

    @property
    def row_count(self) -> int:
        return self.bounds.row_count

    @property
    def column_count(self) -> int:
        return self.bounds.column_count

    def ensure_bounds(self, rows: int, columns: int) -> bool:
        """Grow the grid so that it has at least ``rows`` x ``columns`` cells.

        Args:
            rows: Required row count
            columns: Required column count

        Returns:
            True if the grid was resized, False if it already fit (no request
            is made in that case)

        Raises:
            SheetsAPIError: If the resize fails; the tracked bounds are left
                unchanged
        """
        if self.bounds.covers(rows, columns):
            return False

        new_rows = max(self.bounds.row_count, rows)
        new_columns = max(self.bounds.column_count, columns)
        logger.info(
            f"Expanding sheet {self.sheet_id} from "
            f"{self.bounds.row_count}x{self.bounds.column_count} "
            f"to {new_rows}x{new_columns}"
        )
        self.client.resize(self.sheet_id, new_rows, new_columns)
        self.bounds = Bounds(row_count=new_rows, column_count=new_columns)
        return True

    def reset(self, row_count: int, column_count: int) -> None:
        """Replace the tracked bounds with server-confirmed values."""
        self.bounds = Bounds(row_count=row_count, column_count=column_count)
