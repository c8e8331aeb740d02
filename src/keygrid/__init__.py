"""
keygrid - Key-indexed access to Google Sheets worksheets.

This package reads and writes a worksheet by row/column index, by A1 label and
by key (a header row or label column), growing the sheet's grid on demand.

Usage:
    >>> import gspread
    >>> import keygrid
    >>> gc = gspread.service_account()
    >>> ws = keygrid.Worksheet.from_gspread(gc.open("Inventory").sheet1)
    >>> ws.values.insert_row(1, ["id", "name", "qty"])
    >>> ws.values.map.append_row({"id": 1, "name": "bolt", "qty": 40})
    >>> ws.values.map.row_by_key("1")
    {'name': 'bolt', 'qty': '40'}

Key components:
- Worksheet: Handle for one sheet, exposing ``values`` and ``cells``
- WorksheetValues / ValuesMapper: Lists and maps of strings
- WorksheetCells / CellsMapper: Cell objects that can be written back
- SheetsClient: The gspread-backed transport
"""

from .config import WorksheetConfig
from .exceptions import *
from .spreadsheet import (
    Bounds,
    Cell,
    MapWriteOptions,
    ReadOnlyCell,
    SliceOptions,
    WritableCell,
    cell_label,
    column_index,
    column_label,
    parse_cell_reference,
)
from .transport import SheetsClient
from .values import CellsMapper, ValuesMapper, WorksheetCells, WorksheetValues
from .worksheet.worksheet import Worksheet

# Version
__version__ = "0.1.0"

__all__ = [
    'Worksheet',
    'WorksheetConfig',
    'SheetsClient',
    'WorksheetValues',
    'ValuesMapper',
    'WorksheetCells',
    'CellsMapper',
    'Bounds',
    'Cell',
    'WritableCell',
    'ReadOnlyCell',
    'SliceOptions',
    'MapWriteOptions',
    'column_label',
    'column_index',
    'parse_cell_reference',
    'cell_label',
    'InvalidArgumentError',
    'InvalidReferenceError',
    'ReadOnlyCellError',
    'SheetsAPIError',
]
