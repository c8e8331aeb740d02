"""
Spreadsheet model module.

This module provides A1 notation helpers and the value types used to address
and describe worksheet content.
"""

from keygrid.spreadsheet.a1 import (
    column_label,
    column_index,
    parse_cell_reference,
    cell_label,
)
from keygrid.spreadsheet.model import (
    UNBOUNDED,
    Bounds,
    SliceOptions,
    MapWriteOptions,
    Cell,
    WritableCell,
    ReadOnlyCell,
)

__all__ = [
    "column_label",
    "column_index",
    "parse_cell_reference",
    "cell_label",
    "UNBOUNDED",
    "Bounds",
    "SliceOptions",
    "MapWriteOptions",
    "Cell",
    "WritableCell",
    "ReadOnlyCell",
]
