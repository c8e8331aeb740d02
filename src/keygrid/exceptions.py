"""
Exception classes for keygrid.

These exceptions are used throughout the keygrid package to signal invalid
coordinates, keys and values, and failures reported by the Google Sheets API.
"""


class InvalidArgumentError(ValueError):
    """Raised when an argument is rejected before any remote call is made.

    Validation happens locally and fails fast, so the remote worksheet is never
    touched when this error is raised. Examples:
        - Row or column index below 1 (``invalid row (0)``)
        - Empty or nested values for an axis write
        - Mapping an axis to itself (``cannot map 2 to 2``)
        - A blank key
        - ``map_to`` pointing outside the current table
    """
    pass


class InvalidReferenceError(InvalidArgumentError):
    """Raised when a cell reference is not valid A1 notation.

    A valid reference is one or more letters followed by one or more digits
    (``"C7"``, ``"aa10"``). References such as ``"7C"`` or ``"A"`` are rejected.
    """
    pass


class ReadOnlyCellError(InvalidArgumentError):
    """Raised when read-only cells are passed to a batch cell insert.

    Cells returned by ``find_by_value``, ``cell`` and ``cell_by_keys`` are
    read-only; use ``WorksheetCells.post`` to update them one at a time.
    """
    pass


class SheetsAPIError(Exception):
    """Raised when a Google Sheets API call fails.

    This error wraps exceptions from the Google Sheets API (via gspread) and
    carries the server-reported message together with the operation that
    failed. It is never retried by keygrid. Common causes include:
        - Rate limiting (HTTP 429)
        - Ranges exceeding the grid limits of the sheet
        - Invalid spreadsheet IDs or permissions errors
    """
    pass
