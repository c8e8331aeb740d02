"""Shared pytest configuration and fixtures for keygrid tests."""

import pytest

from keygrid.transport.sheets_client import SheetsClient
from keygrid.worksheet.worksheet import Worksheet
from tests.helpers.fake_spreadsheet import FakeSpreadsheet


def pytest_addoption(parser):
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="Include tests marked @pytest.mark.slow (e.g. live Google Sheets)",
    )


def pytest_configure(config):
    config.addinivalue_line("markers", "slow: marks tests as slow (skipped unless --run-slow)")


def pytest_collection_modifyitems(config, items):
    if config.getoption("--run-slow"):
        return
    skip = pytest.mark.skip(reason="slow test, pass --run-slow to include")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip)


@pytest.fixture
def sheet() -> FakeSpreadsheet:
    return FakeSpreadsheet(title="Sheet1", sheet_id=7, row_count=10, column_count=5)


@pytest.fixture
def ws(sheet) -> Worksheet:
    return Worksheet(
        SheetsClient(sheet),
        sheet_id=sheet.sheet_id,
        title=sheet.title,
        row_count=sheet.row_count,
        column_count=sheet.column_count,
    )


@pytest.fixture
def letters(sheet) -> FakeSpreadsheet:
    """Sheet with a header row and an index column."""
    sheet.seed([
        ["index", "letter", "number"],
        ["1", "a", "10"],
        ["2", "b", "20"],
        ["3", "c", "30"],
    ])
    return sheet
