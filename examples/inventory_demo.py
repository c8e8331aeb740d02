"""
Demonstration of key-indexed worksheet access.

This script creates a scratch spreadsheet, writes an inventory table keyed by
item id, updates it through maps and reads it back as a DataFrame.

Authentication: requires either a service account JSON at
~/.config/gspread/service_account.json or OAuth credentials at
~/.config/gspread/credentials.json (browser flow on first use).
"""

import logging
import sys

import gspread

from keygrid import Worksheet


def _get_gspread_client() -> gspread.Client:
    """Authenticate with Google Sheets, trying service account then OAuth."""
    try:
        return gspread.service_account()
    except Exception:
        pass
    try:
        return gspread.oauth()
    except Exception as exc:
        print(f"Could not authenticate with Google Sheets: {exc}")
        print("Place a service account key at ~/.config/gspread/service_account.json")
        print("or OAuth credentials at ~/.config/gspread/credentials.json")
        sys.exit(1)


def main() -> None:
    logging.basicConfig(level=logging.INFO)

    gc = _get_gspread_client()
    spreadsheet = gc.create("keygrid inventory demo")
    ws = Worksheet.from_gspread(spreadsheet.sheet1)

    # Header row; column A holds the item ids
    ws.values.insert_row(1, ["id", "name", "qty"])

    ws.values.map.append_rows([
        {"id": "b-100", "name": "bolt", "qty": 40},
        {"id": "n-200", "name": "nut", "qty": 120},
    ])

    # "price" is not in the header yet; append_missing adds it
    ws.values.map.insert_row_by_key("b-100", {"qty": 35, "price": 0.2}, append_missing=True)

    # Unknown row keys are created below the last row
    ws.values.map.insert_row_by_key("w-300", {"name": "washer", "qty": 500})

    print(ws.values.map.row_by_key("b-100"))
    print(ws.values.value_by_keys("n-200", "qty"))
    print(ws.values.to_frame())
    print(spreadsheet.url)


if __name__ == "__main__":
    main()
