"""
Value access layer.

Reads and writes whole axes (a row or a column) and rectangular blocks through
the SheetsClient. Results are ragged as returned by the API unless ``fill`` is
requested.
"""

from typing import Any, List, Sequence

from keygrid.exceptions import InvalidArgumentError
from keygrid.transport.sheets_client import SheetsClient
from keygrid.utils.coerce import is_nested


def pad_table(table: List[List[str]], length: int, filler: str = "") -> List[List[str]]:
    """Pad every entry of a ragged table to ``length`` in place.

    Args:
        table: Ragged table (rows or columns)
        length: Target length; longer entries are left as they are
        filler: Value appended to short entries

    Returns:
        The same table, for chaining
    """
    for entry in table:
        if len(entry) < length:
            entry.extend([filler] * (length - len(entry)))
    return table


def max_length(table: Sequence[Sequence[Any]], at_least: int = 0) -> int:
    """Length of the longest entry of a table (at least ``at_least``)."""
    return max([at_least] + [len(entry) for entry in table])


def last_in_range(table: Sequence[Sequence[str]], start: int) -> int:
    """1-based index of the last entry holding data at or after ``start``.

    Args:
        table: Ragged table read from the first axis
        start: 1-based position along each entry

    Returns:
        Index of the last entry with a non-empty value in range, 0 if none
    """
    for index in range(len(table), 0, -1):
        if any(table[index - 1][start - 1:]):
            return index
    return 0


class ValueAccess:
    """Axis and table I/O for one worksheet.

    Attributes:
        client: SheetsClient performing the API calls
    """

    def __init__(self, client: SheetsClient) -> None:
        self.client = client

    def read_axis(self, range_name: str, dimension: str) -> List[str]:
        """Read a single row or column.

        Returns:
            The axis values, or an empty list when the range holds no data
        """
        table = self.client.get_values(range_name, dimension)
        return table[0] if table else []

    def read_table(
        self,
        range_name: str,
        dimension: str,
        fill: bool = False
    ) -> List[List[str]]:
        """Read a rectangular block.

        Args:
            range_name: Absolute A1 range
            dimension: ``ROWS`` or ``COLUMNS``
            fill: Pad every entry to the longest observed entry with ``""``

        Returns:
            Entries in major-dimension order, ragged unless ``fill``
        """
        table = self.client.get_values(range_name, dimension)
        if fill:
            pad_table(table, max_length(table))
        return table

    def write_axis(self, range_name: str, dimension: str, values: List[Any]) -> None:
        """Write a flat list of values to a row or column.

        Raises:
            InvalidArgumentError: If values is empty or nested
        """
        if not values:
            raise InvalidArgumentError(f"invalid values ({values!r})")
        if is_nested(values):
            raise InvalidArgumentError(
                "nested values cannot be written to a single row or column"
            )
        self.client.update_values(range_name, dimension, [list(values)])

    def write_table(
        self,
        range_name: str,
        dimension: str,
        values: List[List[Any]]
    ) -> None:
        """Write a block of values in one request.

        Raises:
            InvalidArgumentError: If values is empty
        """
        if not values:
            raise InvalidArgumentError(f"invalid values ({values!r})")
        self.client.update_values(range_name, dimension, [list(entry) for entry in values])

    def clear(self, range_name: str) -> None:
        """Clear the contents of a range; the grid size is unchanged."""
        self.client.clear_values(range_name)
