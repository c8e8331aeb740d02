"""
A1 notation helpers.

Column labels use bijective base-26 numbering: there is no zero digit, so
1 -> A, 26 -> Z, 27 -> AA, 702 -> ZZ, 703 -> AAA. All indices are 1-based,
matching the spreadsheet convention.
"""

import re
from typing import Tuple

from keygrid.exceptions import InvalidArgumentError, InvalidReferenceError


_CELL_PATTERN = re.compile(r"^([A-Z]+)([0-9]+)$")
_LABEL_PATTERN = re.compile(r"^[A-Z]+$")


def column_label(index: int) -> str:
    """Convert a column index to its letter label.

    Args:
        index: Column index (1-indexed: 1 = A, 26 = Z, 27 = AA)

    Returns:
        Column letter(s) in A1 notation

    Raises:
        InvalidArgumentError: If index is below 1
    """
    if index < 1:
        raise InvalidArgumentError(f"invalid column ({index})")

    letters = []
    while index > 0:
        index -= 1
        letters.append(chr(65 + index % 26))
        index //= 26
    return "".join(reversed(letters))


def column_index(label: str) -> int:
    """Convert column letter(s) to a column index.

    Args:
        label: Column letter(s) in A1 notation (A, Z, AA, etc.), any case

    Returns:
        Column index (1-indexed: A = 1, Z = 26, AA = 27)

    Raises:
        InvalidReferenceError: If label is empty or contains non-letters
    """
    letters = label.strip().upper()
    if not _LABEL_PATTERN.match(letters):
        raise InvalidReferenceError(f"invalid column label ({label!r})")

    result = 0
    for char in letters:
        result = result * 26 + (ord(char) - 64)
    return result


def parse_cell_reference(reference: str) -> Tuple[int, int]:
    """Parse a single-cell A1 reference.

    Parsing is case-insensitive and ignores surrounding whitespace.

    Args:
        reference: Cell reference such as ``"C7"`` or ``" aa10 "``

    Returns:
        Tuple of (column, row), both 1-indexed

    Raises:
        InvalidReferenceError: If reference is not letters followed by digits
    """
    match = _CELL_PATTERN.match(reference.strip().upper())
    if not match:
        raise InvalidReferenceError(f"invalid A1 notation reference ({reference!r})")

    letters, digits = match.groups()
    return column_index(letters), int(digits)


def cell_label(row: int, column: int) -> str:
    """Build the A1 label of a cell, e.g. ``cell_label(7, 3) == "C7"``."""
    if row < 1:
        raise InvalidArgumentError(f"invalid row ({row})")
    return f"{column_label(column)}{row}"
