"""
Unit tests for value coercion and DataFrame conversion helpers.
"""

import math

import pandas as pd
import pytest

from keygrid.exceptions import InvalidArgumentError
from keygrid.utils.coerce import is_nested, to_cell_string, to_key_string, to_optional_key
from keygrid.utils.frames import frame_to_rows, rows_to_frame


class TestCoerce:
    """Test suite for cell and key coercion."""

    @pytest.mark.parametrize("value,expected", [
        (None, ""),
        (True, "TRUE"),
        (False, "FALSE"),
        (3, "3"),
        (1.5, "1.5"),
        ("x", "x"),
    ])
    def test_to_cell_string(self, value, expected):
        assert to_cell_string(value) == expected

    def test_key_is_not_trimmed(self):
        assert to_key_string(" a ") == " a "
        assert to_key_string(7) == "7"

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_blank_key_rejected(self, value):
        with pytest.raises(InvalidArgumentError, match="invalid row key"):
            to_key_string(value, "row key")

    def test_optional_key(self):
        assert to_optional_key(None) is None
        assert to_optional_key(" ") is None
        assert to_optional_key(5) == "5"

    def test_is_nested(self):
        assert is_nested([1, [2]])
        assert is_nested([(1, 2)])
        assert not is_nested([1, "ab", None])


class TestFrames:
    """Test suite for DataFrame conversion."""

    def test_rows_to_frame_with_header(self):
        frame = rows_to_frame([["a", "b"], ["1", "2"]])

        assert list(frame.columns) == ["a", "b"]
        assert frame.iloc[0].tolist() == ["1", "2"]

    def test_rows_to_frame_header_only(self):
        frame = rows_to_frame([["a", "b"]])

        assert list(frame.columns) == ["a", "b"]
        assert frame.empty

    def test_rows_to_frame_empty(self):
        assert rows_to_frame([]).empty

    def test_frame_to_rows_missing_values(self):
        frame = pd.DataFrame({"x": [1.5, math.nan], "y": ["a", None]})

        assert frame_to_rows(frame) == [["x", "y"], [1.5, "a"], ["", ""]]

    def test_frame_to_rows_plain_python_values(self):
        frame = pd.DataFrame({"n": [1, 2]})

        rows = frame_to_rows(frame, header=False)

        assert rows == [[1], [2]]
        assert type(rows[0][0]) is int

    def test_frame_to_rows_stringifies_timestamps(self):
        frame = pd.DataFrame({"when": pd.to_datetime(["2024-01-02"])})

        assert frame_to_rows(frame, header=False) == [["2024-01-02 00:00:00"]]

    def test_frame_without_columns(self):
        assert frame_to_rows(pd.DataFrame()) == []
