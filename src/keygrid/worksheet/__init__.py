"""
Worksheet module for keygrid.

This module provides the per-sheet machinery owned by a ``Worksheet``
(see ``keygrid.worksheet.worksheet``):
- BoundsTracker: Grid size tracking and on-demand expansion
- RangeBuilder: A1 range construction for rows, columns and blocks
- ValueAccess: Axis and table reads and writes
"""

from keygrid.worksheet.bounds import BoundsTracker
from keygrid.worksheet.ranges import RangeBuilder
from keygrid.worksheet.access import ValueAccess

__all__ = [
    "BoundsTracker",
    "RangeBuilder",
    "ValueAccess",
]
