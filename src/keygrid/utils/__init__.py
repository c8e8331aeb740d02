"""
Utility functions for keygrid.

This module provides value coercion helpers and pandas DataFrame conversion.
"""

from keygrid.utils.coerce import to_cell_string, to_key_string
from keygrid.utils.frames import frame_to_rows, rows_to_frame

__all__ = [
    "to_cell_string",
    "to_key_string",
    "frame_to_rows",
    "rows_to_frame",
]
