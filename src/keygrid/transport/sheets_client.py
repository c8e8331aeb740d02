"""
Google Sheets API client wrapper.

This module provides the values-level interface to the Google Sheets API via
gspread that the worksheet engine is built on: read a range, write a range,
clear a range, and resize a sheet's grid. API errors are wrapped in
SheetsAPIError carrying the server-reported message.
"""

import logging
from typing import Any, Dict, List, Optional

import gspread
from gspread.exceptions import APIError
from gspread.utils import Dimension

from keygrid.config import WorksheetConfig
from keygrid.exceptions import SheetsAPIError
from keygrid.utils.coerce import to_cell_string

logger = logging.getLogger(__name__)


def _api_message(error: APIError) -> str:
    """Extract the server-reported message of an APIError, else the raw body."""
    details = getattr(error, "error", None)
    if isinstance(details, dict) and details.get("message"):
        return details["message"]
    response = getattr(error, "response", None)
    text = getattr(response, "text", None)
    if text:
        return text
    return str(error)


class SheetsClient:
    """
    A wrapper around a gspread Spreadsheet for values-level operations.

    The client issues exactly one API call per method and never retries;
    retry policy, if any, belongs to the gspread session it wraps.

    Attributes:
        spreadsheet: The gspread spreadsheet the worksheets belong to
        config: Value input/render options sent with every request
    """

    def __init__(
        self,
        spreadsheet: gspread.Spreadsheet,
        config: Optional[WorksheetConfig] = None
    ) -> None:
        """
        Initialize the client with an opened gspread spreadsheet.

        Args:
            spreadsheet: A spreadsheet opened through an authenticated gspread
                client, e.g. ``gspread.service_account().open_by_key(...)``
            config: Request options (defaults to ``WorksheetConfig()``)
        """
        self.spreadsheet = spreadsheet
        self.config = config or WorksheetConfig()

    def get_values(self, range_name: str, major_dimension: str) -> List[List[str]]:
        """
        Read a range as a (possibly ragged) table of strings.

        Args:
            range_name: Absolute A1 range (e.g., "'Sheet1'!A1:C10")
            major_dimension: ``ROWS`` or ``COLUMNS``

        Returns:
            Major-dimension entries as lists of strings; empty when the range
            holds no data. Trailing empty cells are omitted by the API.

        Raises:
            SheetsAPIError: If the API call fails
        """
        dimension = Dimension(major_dimension).value
        logger.debug(f"GET {range_name} ({dimension})")
        try:
            response = self.spreadsheet.values_get(
                range_name,
                params={
                    "majorDimension": dimension,
                    "valueRenderOption": self.config.value_render_option.value,
                },
            )
        except APIError as e:
            raise SheetsAPIError(
                f"Failed to read range '{range_name}': {_api_message(e)}"
            ) from e

        values = (response or {}).get("values") or []
        return [[to_cell_string(value) for value in entry] for entry in values]

    def update_values(
        self,
        range_name: str,
        major_dimension: str,
        values: List[List[Any]]
    ) -> None:
        """
        Write a table of values to a range.

        ``None`` entries are sent as JSON null, which the API skips, leaving the
        existing cell content untouched.

        Args:
            range_name: Absolute A1 range (e.g., "'Sheet1'!A1:C10")
            major_dimension: ``ROWS`` or ``COLUMNS``
            values: A 2D list of values in major-dimension order

        Raises:
            SheetsAPIError: If the API call fails
        """
        dimension = Dimension(major_dimension).value
        logger.debug(f"PUT {range_name} ({dimension}, {len(values)} entries)")
        try:
            self.spreadsheet.values_update(
                range_name,
                params={"valueInputOption": self.config.value_input_option.value},
                body={
                    "range": range_name,
                    "majorDimension": dimension,
                    "values": values,
                },
            )
        except APIError as e:
            raise SheetsAPIError(
                f"Failed to write values to range '{range_name}': {_api_message(e)}"
            ) from e

    def clear_values(self, range_name: str) -> None:
        """
        Clear the contents of a range without changing the grid size.

        Args:
            range_name: Absolute A1 range or a quoted sheet title

        Raises:
            SheetsAPIError: If the API call fails
        """
        logger.debug(f"CLEAR {range_name}")
        try:
            self.spreadsheet.values_clear(range_name)
        except APIError as e:
            raise SheetsAPIError(
                f"Failed to clear range '{range_name}': {_api_message(e)}"
            ) from e

    def resize(self, sheet_id: int, rows: int, columns: int) -> None:
        """
        Set the grid size of a sheet.

        Args:
            sheet_id: Numeric id of the sheet (tab)
            rows: New row count
            columns: New column count

        Raises:
            SheetsAPIError: If the API call fails
        """
        request = {
            "updateSheetProperties": {
                "properties": {
                    "sheetId": sheet_id,
                    "gridProperties": {
                        "rowCount": rows,
                        "columnCount": columns,
                    },
                },
                "fields": "gridProperties/rowCount,gridProperties/columnCount",
            }
        }
        logger.debug(f"RESIZE sheet {sheet_id} to {rows}x{columns}")
        try:
            self.spreadsheet.batch_update({"requests": [request]})
        except APIError as e:
            raise SheetsAPIError(
                f"Failed to resize sheet {sheet_id} to {rows}x{columns}: "
                f"{_api_message(e)}"
            ) from e

    def sheet_properties(self, sheet_id: int) -> Dict[str, Any]:
        """
        Fetch the current properties of a sheet.

        Args:
            sheet_id: Numeric id of the sheet (tab)

        Returns:
            The sheet's ``properties`` object (title, index, gridProperties)

        Raises:
            SheetsAPIError: If the API call fails or the sheet does not exist
        """
        try:
            metadata = self.spreadsheet.fetch_sheet_metadata()
        except APIError as e:
            raise SheetsAPIError(
                f"Failed to fetch properties of sheet {sheet_id}: {_api_message(e)}"
            ) from e

        for sheet in metadata.get("sheets", []):
            properties = sheet.get("properties", {})
            if properties.get("sheetId") == sheet_id:
                return properties
        raise SheetsAPIError(f"Sheet {sheet_id} not found in spreadsheet")
