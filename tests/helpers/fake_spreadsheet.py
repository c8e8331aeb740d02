"""
In-memory stand-in for gspread.Spreadsheet.

FakeSpreadsheet holds a single sheet and answers the calls SheetsClient makes
the way the Sheets values API does:
- reads omit trailing empty cells and trailing empty entries, and drop the
  ``values`` field entirely when the range is empty
- writes skip ``None`` entries, leaving the existing cell untouched
- ranges outside the grid fail with a grid-limits APIError
- ``batch_update`` applies updateSheetProperties grid resizes

Every call is recorded in ``calls`` as ``(method, range_name)`` so tests can
assert how many requests (and resizes) an operation issued.
"""

import json
import re
from typing import Any, Dict, List, Optional, Tuple

from gspread.exceptions import APIError


_RANGE_PATTERN = re.compile(r"^'((?:[^']|'')*)'(?:!(.*))?$")
_CELL_PATTERN = re.compile(r"^([A-Z]+)([0-9]+)$")


class FakeResponse:
    """Minimal HTTP response carrying a Sheets API error body."""

    def __init__(self, code: int, message: str, status: str = "INVALID_ARGUMENT"):
        self.status_code = code
        self._body = {"error": {"code": code, "message": message, "status": status}}
        self.text = json.dumps(self._body)

    def json(self) -> Dict[str, Any]:
        return self._body


def api_error(code: int, message: str) -> APIError:
    return APIError(FakeResponse(code, message))


def _column_number(letters: str) -> int:
    number = 0
    for char in letters:
        number = number * 26 + (ord(char) - ord("A") + 1)
    return number


def _stored(value: Any) -> str:
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    return str(value)


class FakeSpreadsheet:
    """A one-sheet spreadsheet kept in memory.

    Attributes:
        title: Sheet title
        sheet_id: Numeric sheet id
        row_count: Grid rows
        column_count: Grid columns
        cells: Non-empty cell values by (row, column)
        calls: Recorded (method, range_name) pairs
    """

    def __init__(
        self,
        title: str = "Sheet1",
        sheet_id: int = 0,
        row_count: int = 10,
        column_count: int = 5
    ):
        self.title = title
        self.sheet_id = sheet_id
        self.row_count = row_count
        self.column_count = column_count
        self.cells: Dict[Tuple[int, int], str] = {}
        self.calls: List[Tuple[str, Optional[str]]] = []
        self._failures: Dict[str, Tuple[int, APIError]] = {}

    # ------------------------------------------------------------------
    # Test helpers
    # ------------------------------------------------------------------

    def seed(self, rows: List[List[Any]], row: int = 1, column: int = 1) -> None:
        """Put rows into the sheet directly, growing the grid if needed."""
        for i, entry in enumerate(rows):
            for j, value in enumerate(entry):
                if value is None or value == "":
                    continue
                self.cells[(row + i, column + j)] = _stored(value)
        self.row_count = max(self.row_count, row + len(rows) - 1)
        self.column_count = max(
            self.column_count, column + max([len(e) for e in rows] + [1]) - 1
        )

    def value(self, row: int, column: int) -> str:
        return self.cells.get((row, column), "")

    def rows(self) -> List[List[str]]:
        """All rows up to the last one holding data, trailing cells trimmed."""
        return self._entries(1, 1, self.row_count, self.column_count, "ROWS")

    def fail_next(
        self,
        method: str,
        code: int = 500,
        message: str = "Internal error",
        after: int = 0
    ) -> None:
        """Make a call to ``method`` raise an APIError.

        The first ``after`` calls succeed; the one following them fails.
        """
        self._failures[method] = (after, api_error(code, message))

    def count(self, method: str) -> int:
        return sum(1 for name, _ in self.calls if name == method)

    @property
    def resize_count(self) -> int:
        return self.count("batch_update")

    # ------------------------------------------------------------------
    # gspread.Spreadsheet interface
    # ------------------------------------------------------------------

    def values_get(self, range_name: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        self._record("values_get", range_name)
        params = params or {}
        dimension = params.get("majorDimension", "ROWS")
        top, left, bottom, right = self._parse(range_name)
        response: Dict[str, Any] = {"range": range_name, "majorDimension": dimension}
        entries = self._entries(top, left, bottom, right, dimension)
        if entries:
            response["values"] = entries
        return response

    def values_update(
        self,
        range_name: str,
        params: Optional[Dict[str, Any]] = None,
        body: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        self._record("values_update", range_name)
        body = body or {}
        dimension = body.get("majorDimension", "ROWS")
        top, left, bottom, right = self._parse(range_name)
        updated = 0
        for i, entry in enumerate(body.get("values", [])):
            for j, value in enumerate(entry):
                row, column = (top + i, left + j) if dimension == "ROWS" else (top + j, left + i)
                if row > bottom or column > right:
                    raise api_error(
                        400,
                        f"Requested writing within range [{range_name}], but tried "
                        f"writing to row [{row}] column [{column}]",
                    )
                if value is None:
                    continue
                if value == "":
                    self.cells.pop((row, column), None)
                else:
                    self.cells[(row, column)] = _stored(value)
                updated += 1
        return {"updatedRange": range_name, "updatedCells": updated}

    def values_clear(self, range_name: str) -> Dict[str, Any]:
        self._record("values_clear", range_name)
        top, left, bottom, right = self._parse(range_name)
        for row, column in list(self.cells):
            if top <= row <= bottom and left <= column <= right:
                del self.cells[(row, column)]
        return {"clearedRange": range_name}

    def batch_update(self, body: Dict[str, Any]) -> Dict[str, Any]:
        self._record("batch_update", None)
        for request in body.get("requests", []):
            properties = request["updateSheetProperties"]["properties"]
            if properties["sheetId"] != self.sheet_id:
                raise api_error(400, f"No grid with id: {properties['sheetId']}")
            grid = properties["gridProperties"]
            self.row_count = grid.get("rowCount", self.row_count)
            self.column_count = grid.get("columnCount", self.column_count)
        return {"replies": [{}]}

    def fetch_sheet_metadata(self, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        self._record("fetch_sheet_metadata", None)
        return {
            "sheets": [
                {
                    "properties": {
                        "sheetId": self.sheet_id,
                        "title": self.title,
                        "index": 0,
                        "gridProperties": {
                            "rowCount": self.row_count,
                            "columnCount": self.column_count,
                        },
                    }
                }
            ]
        }

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _record(self, method: str, range_name: Optional[str]) -> None:
        self.calls.append((method, range_name))
        if method not in self._failures:
            return
        after, error = self._failures[method]
        if after > 0:
            self._failures[method] = (after - 1, error)
            return
        del self._failures[method]
        raise error

    def _parse(self, range_name: str) -> Tuple[int, int, int, int]:
        match = _RANGE_PATTERN.match(range_name)
        if not match:
            raise api_error(400, f"Unable to parse range: {range_name}")
        title = match.group(1).replace("''", "'")
        if title != self.title:
            raise api_error(400, f"Unable to parse range: {range_name}")

        span = match.group(2)
        if span is None:
            return 1, 1, self.row_count, self.column_count

        corners = []
        for part in span.split(":"):
            cell = _CELL_PATTERN.match(part)
            if not cell:
                raise api_error(400, f"Unable to parse range: {range_name}")
            corners.append((int(cell.group(2)), _column_number(cell.group(1))))
        (top, left), (bottom, right) = corners[0], corners[-1]

        if bottom > self.row_count or right > self.column_count:
            raise api_error(400, f"Range ({self.title}!{span}) exceeds grid limits. "
                                 f"Max rows: {self.row_count}, max columns: {self.column_count}")
        return top, left, bottom, right

    def _entries(self, top: int, left: int, bottom: int, right: int, dimension: str) -> List[List[str]]:
        if dimension == "ROWS":
            entries = [
                [self.cells.get((row, column), "") for column in range(left, right + 1)]
                for row in range(top, bottom + 1)
            ]
        else:
            entries = [
                [self.cells.get((row, column), "") for row in range(top, bottom + 1)]
                for column in range(left, right + 1)
            ]
        for entry in entries:
            while entry and entry[-1] == "":
                entry.pop()
        while entries and not entries[-1]:
            entries.pop()
        return entries
