"""
Live Google Sheets tests.

- Marked @pytest.mark.slow, skipped by default
- Require gspread credentials (service account or OAuth)

Usage:
    pytest tests/test_live.py -v --run-slow
"""

import time

import pytest

from keygrid import Worksheet

_RATE_LIMIT_DELAY = 2.0


@pytest.mark.slow
class TestLiveWorksheet:
    """End-to-end checks against a scratch spreadsheet."""

    @pytest.fixture(scope="class")
    def gc(self):
        """Session-wide authenticated gspread client."""
        import gspread

        try:
            return gspread.service_account()
        except Exception:
            pass
        try:
            return gspread.oauth()
        except Exception as exc:
            pytest.skip(f"No Google Sheets credentials available: {exc}")

    @pytest.fixture
    def ws(self, gc):
        spreadsheet = gc.create("keygrid_live_test")
        try:
            worksheet = spreadsheet.sheet1
            worksheet.resize(rows=5, cols=3)
            yield Worksheet.from_gspread(worksheet)
        finally:
            gc.del_spreadsheet(spreadsheet.id)

    def test_rows_columns_and_growth(self, ws):
        ws.values.insert_row(1, [1, 2, 3])
        ws.values.insert_row(2, [1, 2, 3], from_column=2)
        time.sleep(_RATE_LIMIT_DELAY)

        assert ws.values.row(1) == ["1", "2", "3"]
        assert ws.values.column(2) == ["2", "1"]
        assert ws.column_count == 4

    def test_keyed_maps(self, ws):
        ws.values.insert_row(1, ["index", "letter"])
        ws.values.map.append_row({"index": "1", "letter": "a", "number": "10"}, append_missing=True)
        time.sleep(_RATE_LIMIT_DELAY)

        assert ws.values.column_index_of("number") == 3
        assert ws.values.map.row_by_key("1") == {"letter": "a", "number": "10"}

        ws.values.map.insert_row_by_key("1", {"letter": "b"})
        time.sleep(_RATE_LIMIT_DELAY)

        assert ws.values.row(2) == ["1", "b", "10"]
