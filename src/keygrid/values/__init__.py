"""
Values module for keygrid.

This module provides the public read/write surfaces of a worksheet:
- WorksheetValues / ValuesMapper: Strings as lists and key-indexed maps
- WorksheetCells / CellsMapper: Cell objects as lists and key-indexed maps
- KeyIndexResolver: Key lookup in header rows and label columns
"""

from keygrid.values.keys import KeyIndexResolver
from keygrid.values.mapper import ValuesMapper
from keygrid.values.values import WorksheetValues
from keygrid.values.cells import CellsMapper, WorksheetCells

__all__ = [
    "KeyIndexResolver",
    "ValuesMapper",
    "WorksheetValues",
    "CellsMapper",
    "WorksheetCells",
]
