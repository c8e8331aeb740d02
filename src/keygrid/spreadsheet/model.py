"""
Worksheet model classes.

This module provides the value types shared by the range builder, the value
access layer and the mappers:
- Bounds: Current grid size of a worksheet
- SliceOptions: Window (start, length, count) of a row/column/table access
- MapWriteOptions: Policies for writing key-indexed maps
- Cell: A cell value with its coordinates (WritableCell / ReadOnlyCell)
"""

from dataclasses import dataclass, field
from typing import Tuple

from keygrid.exceptions import InvalidArgumentError
from keygrid.spreadsheet.a1 import cell_label


# Slice length / count meaning "up to the end of the data"
UNBOUNDED = -1


def check_index(name: str, value: int) -> None:
    """Reject 1-based coordinates below 1.

    Raises:
        InvalidArgumentError: If value is below 1
    """
    if value is None or value < 1:
        raise InvalidArgumentError(f"invalid {name} ({value})")


def check_map_to(target: object, map_to: object) -> None:
    """Reject mapping an axis to itself.

    Raises:
        InvalidArgumentError: If target and map_to are equal
    """
    if target == map_to:
        raise InvalidArgumentError(f"cannot map {target} to {map_to}")


@dataclass
class Bounds:
    """Grid size of a worksheet.

    Attributes:
        row_count: Number of rows in the grid
        column_count: Number of columns in the grid
    """
    row_count: int = 0
    column_count: int = 0

    def covers(self, rows: int, columns: int) -> bool:
        """Check whether a (rows x columns) extent fits inside the grid."""
        return rows <= self.row_count and columns <= self.column_count


@dataclass(frozen=True)
class SliceOptions:
    """Window of a row, column or table access.

    Attributes:
        start: First row (column-shaped access) or first column (row-shaped
            access), 1-indexed
        length: Number of cells along each axis, UNBOUNDED for all of them
        count: Number of axes for table-shaped access, UNBOUNDED for all
        fill: Pad ragged results with empty strings
    """
    start: int = 1
    length: int = UNBOUNDED
    count: int = UNBOUNDED
    fill: bool = False

    def __post_init__(self) -> None:
        check_index("start", self.start)


@dataclass(frozen=True)
class MapWriteOptions:
    """Policies for writing key-indexed maps.

    Attributes:
        map_to: Index of the key axis the map keys are matched against
        append_missing: Extend the key axis with keys it does not contain
        overwrite: Blank cells whose keys are absent from the map instead of
            leaving them untouched
    """
    map_to: int = 1
    append_missing: bool = False
    overwrite: bool = False

    def __post_init__(self) -> None:
        check_index("mapTo", self.map_to)


@dataclass(eq=False)
class Cell:
    """A cell value together with its coordinates.

    Attributes:
        row: Row index (1-indexed)
        column: Column index (1-indexed)
        value: Cell content as a string
    """
    row: int
    column: int
    value: str = field(default="")

    @property
    def label(self) -> str:
        """A1 label of the cell, e.g. ``"B3"``."""
        return cell_label(self.row, self.column)

    @property
    def writable(self) -> bool:
        return True

    def _sort_key(self) -> Tuple[int, int, int]:
        return (self.row + self.column, self.row, self.column)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Cell):
            return NotImplemented
        return (
            type(self) is type(other)
            and self.row == other.row
            and self.column == other.column
            and self.value == other.value
        )

    def __lt__(self, other: "Cell") -> bool:
        if not isinstance(other, Cell):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __str__(self) -> str:
        return f"'{self.value}' at {self.label}"


class WritableCell(Cell):
    """A cell read as part of a row, column or map; may be batch inserted."""


class ReadOnlyCell(Cell):
    """A cell returned by a lookup (find, cell, cell by keys).

    Read-only cells cannot be passed to batch inserts; post them one at a time.
    """

    @property
    def writable(self) -> bool:
        return False
