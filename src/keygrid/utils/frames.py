"""
Conversion between worksheet tables and pandas DataFrames.
"""

from typing import Any, List

import pandas as pd


def _cell_value(value: Any) -> Any:
    """Make a frame value JSON-serializable for a values write."""
    if value is None:
        return ""
    if pd.api.types.is_scalar(value) and pd.isna(value):
        return ""
    if isinstance(value, (bool, int, float, str)):
        return value
    return str(value)


def rows_to_frame(rows: List[List[str]], header: bool = True) -> pd.DataFrame:
    """
    Build a DataFrame from rows read with ``fill=True``.

    Args:
        rows: Rectangular list of rows
        header: Use the first row as column labels

    Returns:
        A DataFrame of strings; empty when there are no rows
    """
    if not rows:
        return pd.DataFrame()
    if not header:
        return pd.DataFrame(rows)
    return pd.DataFrame(rows[1:], columns=rows[0])


def frame_to_rows(frame: pd.DataFrame, header: bool = True) -> List[List[Any]]:
    """
    Flatten a DataFrame into rows for a values write.

    Missing values (``None``, ``NaN``, ``NaT``) become ``""`` and values that
    are not plain numbers, booleans or strings are written as ``str(value)``.
    The index is dropped.

    Args:
        frame: Frame to flatten
        header: Prepend the column labels as the first row

    Returns:
        List of rows; empty when the frame has no columns
    """
    if len(frame.columns) == 0:
        return []

    rows = []
    if header:
        rows.append([_cell_value(label) for label in frame.columns])
    for record in frame.astype(object).itertuples(index=False, name=None):
        rows.append([_cell_value(value) for value in record])
    return rows
