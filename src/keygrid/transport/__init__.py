"""
Transport module for keygrid.

``SheetsClient`` is the only component that talks to the Google Sheets API.
"""

from keygrid.transport.sheets_client import SheetsClient

__all__ = [
    "SheetsClient",
]
