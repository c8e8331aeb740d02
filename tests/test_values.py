"""
Tests for WorksheetValues against an in-memory spreadsheet.

The ``letters`` fixture holds:

    index | letter | number
    1     | a      | 10
    2     | b      | 20
    3     | c      | 30
"""

import pandas as pd
import pytest

from keygrid.exceptions import InvalidArgumentError, SheetsAPIError


def updates(sheet):
    return [name for name, _ in sheet.calls if name == "values_update"]


class TestReads:
    """Test suite for index and key reads."""

    def test_write_then_read_row(self, ws):
        ws.values.insert_row(1, [1, 2, 3])
        assert ws.values.row(1) == ["1", "2", "3"]

    def test_cross_axis_consistency(self, ws):
        """A row written from column 2 shows up in column 2."""
        ws.values.insert_row(1, [1, 2, 3])
        ws.values.insert_row(2, [1, 2, 3], from_column=2)

        assert ws.values.column(2) == ["2", "1"]

    def test_row_slice(self, ws, letters):
        assert ws.values.row(2, from_column=2) == ["a", "10"]
        assert ws.values.row(2, from_column=2, length=1) == ["a"]

    def test_empty_reads(self, ws):
        assert ws.values.row(1) == []
        assert ws.values.all_rows() == []
        assert ws.values.last_row() is None
        assert ws.values.last_column() is None

    def test_all_rows_ragged_and_filled(self, ws, sheet):
        sheet.seed([["a", "b", "c"], ["d"], ["e", "f"]])

        assert ws.values.all_rows() == [["a", "b", "c"], ["d"], ["e", "f"]]
        assert ws.values.all_rows(fill=True) == [
            ["a", "b", "c"],
            ["d", "", ""],
            ["e", "f", ""],
        ]

    def test_all_columns_window(self, ws, letters):
        assert ws.values.all_columns(from_column=2, from_row=2, count=1) == [["a", "b", "c"]]

    def test_column_by_key(self, ws, letters):
        assert ws.values.column_by_key("letter") == ["a", "b", "c"]
        assert ws.values.column_by_key("number", from_row=3) == ["20", "30"]
        assert ws.values.column_by_key("missing") is None

    def test_row_by_key(self, ws, letters):
        assert ws.values.row_by_key(2) == ["b", "20"]
        assert ws.values.row_by_key("9") is None

    def test_blank_key_rejected(self, ws, letters):
        with pytest.raises(InvalidArgumentError, match="invalid key"):
            ws.values.column_by_key(" ")

    def test_last_row_and_column(self, ws, letters):
        assert ws.values.last_row() == ["3", "c", "30"]
        assert ws.values.last_column(from_row=2) == ["10", "20", "30"]

    def test_last_row_in_range(self, ws, sheet):
        sheet.seed([["k1", "x"], ["k2"]])

        assert ws.values.last_row() == ["k2"]
        assert ws.values.last_row(from_column=2) == []
        assert ws.values.last_row(from_column=2, in_range=True) == ["x"]

    def test_value(self, ws, letters):
        assert ws.values.value(2, 3) == "10"
        assert ws.values.value(9, 5) == ""

    def test_value_by_keys(self, ws, letters):
        assert ws.values.value_by_keys("2", "number") == "20"
        assert ws.values.value_by_keys("9", "number") is None
        assert ws.values.value_by_keys("2", "color") is None

    def test_reads_within_grid_do_not_resize(self, ws, letters):
        ws.values.all_rows()
        ws.values.column(5)
        assert letters.resize_count == 0


class TestKeyIndex:
    """Test suite for key index lookups."""

    def test_column_index_of(self, ws, letters):
        assert ws.values.column_index_of("letter") == 2
        assert ws.values.column_index_of("missing") == -1

    def test_column_index_of_add(self, ws, letters):
        assert ws.values.column_index_of("missing", add=True) == 4
        assert letters.value(1, 4) == "missing"
        assert ws.values.column_index_of("missing") == 4

    def test_row_index_of(self, ws, letters):
        assert ws.values.row_index_of(2) == 3
        assert ws.values.row_index_of("4", add=True) == 5
        assert letters.value(5, 1) == "4"

    def test_index_of_other_axis(self, ws, letters):
        assert ws.values.column_index_of("b", in_row=3) == 2
        assert ws.values.row_index_of("20", in_column=3) == 3

    def test_index_of_first_match(self, ws, sheet):
        sheet.seed([["a", "b", "a"]])
        assert ws.values.column_index_of("a") == 1


class TestWrites:
    """Test suite for index, key and append writes."""

    def test_insert_is_idempotent(self, ws, letters):
        ws.values.insert_row(2, ["1", "z"])
        once = dict(letters.cells)
        ws.values.insert_row(2, ["1", "z"])

        assert letters.cells == once

    def test_none_leaves_cell_untouched(self, ws, letters):
        ws.values.insert_row(2, [None, "z"])

        assert letters.value(2, 1) == "1"
        assert letters.value(2, 2) == "z"

    def test_write_past_grid_expands(self, ws, sheet):
        ws.values.insert_row(12, ["x"])

        assert sheet.row_count == 12
        assert sheet.resize_count == 1
        assert sheet.value(12, 1) == "x"
        assert ws.row_count == 12

    def test_wide_row_expands_columns(self, ws, sheet):
        ws.values.insert_row(1, list(range(8)))

        assert sheet.column_count == 8
        assert ws.values.row(1) == [str(i) for i in range(8)]

    @pytest.mark.parametrize("values", [[], [[1]], [(1, 2)]])
    def test_invalid_axis_values(self, ws, sheet, values):
        with pytest.raises(InvalidArgumentError):
            ws.values.insert_row(1, values)
        assert sheet.calls == []

    def test_invalid_index(self, ws, sheet):
        with pytest.raises(InvalidArgumentError, match=r"invalid row \(0\)"):
            ws.values.insert_row(0, [1])
        assert sheet.calls == []

    def test_insert_columns_ragged(self, ws, sheet):
        ws.values.insert_columns(1, [["a", "b", "c"], ["d"]])

        assert sheet.value(3, 1) == "c"
        assert sheet.value(1, 2) == "d"
        assert sheet.value(2, 2) == ""

    def test_insert_rows(self, ws, sheet):
        ws.values.insert_rows(2, [["a"], ["b", "c"]], from_column=2)

        assert ws.values.all_rows() == [[], ["", "a"], ["", "b", "c"]]

    def test_insert_rows_rejects_flat_list(self, ws, sheet):
        with pytest.raises(InvalidArgumentError):
            ws.values.insert_rows(1, ["a", "b"])

    def test_nested_table_cells_rejected(self, ws, sheet):
        with pytest.raises(InvalidArgumentError, match="nested values"):
            ws.values.insert_rows(1, [["a", ["b", "c"]]])
        with pytest.raises(InvalidArgumentError, match="nested values"):
            ws.values.insert_columns(1, [["a"], ["b", ("c", "d")]])
        assert sheet.calls == []

    def test_insert_value(self, ws, sheet):
        assert ws.values.insert_value("x", 3, 2) is True
        assert sheet.value(3, 2) == "x"

    def test_insert_value_by_keys(self, ws, letters):
        assert ws.values.insert_value_by_keys("z", "2", "number") is True
        assert letters.value(3, 3) == "z"

    def test_insert_value_by_keys_eager(self, ws, letters):
        assert ws.values.insert_value_by_keys("x", "4", "color") is True

        assert letters.value(5, 1) == "4"
        assert letters.value(1, 4) == "color"
        assert letters.value(5, 4) == "x"

    def test_insert_value_by_keys_not_eager(self, ws, letters):
        assert ws.values.insert_value_by_keys("x", "4", "color", eager=False) is False
        assert updates(letters) == []

    def test_insert_value_by_keys_empty_sheet(self, ws, sheet):
        """A new row key never lands in the header row."""
        ws.values.insert_value_by_keys("x", "r", "c")

        assert sheet.value(2, 1) == "r"
        assert sheet.value(1, 2) == "c"
        assert sheet.value(2, 2) == "x"

    def test_insert_column_by_key(self, ws, letters):
        assert ws.values.insert_column_by_key("letter", ["x", "y"]) is True

        assert letters.value(2, 2) == "x"
        assert letters.value(3, 2) == "y"
        assert letters.value(4, 2) == "c"

    def test_insert_column_by_key_eager(self, ws, letters):
        assert ws.values.insert_column_by_key("color", ["red"]) is True
        assert letters.value(1, 4) == "color"
        assert letters.value(2, 4) == "red"

    def test_insert_column_by_key_not_eager(self, ws, letters):
        assert ws.values.insert_column_by_key("color", ["red"], eager=False) is False
        assert letters.value(1, 4) == ""

    def test_insert_row_by_key(self, ws, letters):
        assert ws.values.insert_row_by_key("3", ["cc", "33"]) is True
        assert ws.values.row(4) == ["3", "cc", "33"]

    def test_append_row_and_column(self, ws, letters):
        ws.values.append_row(["4", "d", "40"])
        ws.values.append_column(["extra"])

        assert ws.values.row(5) == ["4", "d", "40"]
        assert letters.value(1, 4) == "extra"

    def test_append_row_in_range(self, ws, letters):
        letters.seed([["note"]], row=6)

        ws.values.append_row(["v"], from_column=2, in_range=True)
        ws.values.append_row(["w"], from_column=2)

        assert letters.value(5, 2) == "v"
        assert letters.value(7, 2) == "w"

    def test_append_rows(self, ws, letters):
        ws.values.append_rows([["4", "d"], ["5", "e"]])

        assert ws.values.column(1) == ["index", "1", "2", "3", "4", "5"]

    def test_append_columns(self, ws, letters):
        ws.values.append_columns([["x"], ["y"]])

        assert ws.values.row(1) == ["index", "letter", "number", "x", "y"]

    def test_api_error_propagates(self, ws, sheet):
        sheet.fail_next("values_get", 429, "Quota exceeded")

        with pytest.raises(SheetsAPIError, match="Quota exceeded"):
            ws.values.row(1)


class TestFrames:
    """Test suite for DataFrame reads and writes."""

    def test_to_frame(self, ws, letters):
        frame = ws.values.to_frame()

        assert list(frame.columns) == ["index", "letter", "number"]
        assert len(frame) == 3
        assert frame.loc[1, "letter"] == "b"

    def test_to_frame_without_header(self, ws, letters):
        assert ws.values.to_frame(header=False).shape == (4, 3)

    def test_to_frame_empty(self, ws):
        assert ws.values.to_frame().empty

    def test_insert_frame(self, ws, sheet):
        frame = pd.DataFrame({"a": ["p", None], "b": [1, 2]})

        assert ws.values.insert_frame(frame) is True
        assert sheet.rows() == [["a", "b"], ["p", "1"], ["", "2"]]

    def test_insert_frame_at_offset(self, ws, sheet):
        frame = pd.DataFrame({"a": ["p"]})

        ws.values.insert_frame(frame, row=3, column=2, header=False)

        assert sheet.value(3, 2) == "p"

    def test_insert_empty_frame(self, ws):
        with pytest.raises(InvalidArgumentError):
            ws.values.insert_frame(pd.DataFrame())
