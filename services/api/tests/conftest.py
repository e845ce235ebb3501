"""
Shared fixtures.

Run with: pytest services/api/tests -v
"""
import os
import re
import sys

import gspread
import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# The app builds its storage adapter at import time
os.environ["STORAGE_BACKEND"] = "memory"
os.environ["SHEETS_SPREADSHEET_ID"] = ""
os.environ["PERSIST_ON_SAVE"] = "false"

from adapters.memory import MemoryAdapter  # noqa: E402
from models.converters import ROW_HEADERS  # noqa: E402


def _start_row(a1: str) -> int:
    return int(re.match(r"[A-Z]+(\d+)", a1).group(1))


class FakeWorksheet:
    """Just enough of gspread.Worksheet for the adapter."""

    def __init__(self, title, rows=None):
        self.title = title
        self.rows = [list(r) for r in (rows or [])]
        self.fail_updates = False
        self.update_calls = []

    def get_all_values(self):
        return [list(r) for r in self.rows]

    def row_values(self, n):
        return list(self.rows[n - 1]) if len(self.rows) >= n else []

    def acell(self, label):
        return self.rows[0][0] if self.rows and self.rows[0] else ""

    def update(self, range_name=None, values=None, value_input_option=None):
        if self.fail_updates:
            raise RuntimeError("quota exceeded")
        self.update_calls.append((range_name, value_input_option))
        start = _start_row(range_name)
        for offset, row in enumerate(values):
            idx = start - 1 + offset
            while len(self.rows) <= idx:
                self.rows.append([])
            self.rows[idx] = list(row)

    def batch_clear(self, ranges):
        for rng in ranges:
            del self.rows[_start_row(rng) - 1:]


class FakeSpreadsheet:
    def __init__(self, worksheets=None):
        self.worksheets = {ws.title: ws for ws in (worksheets or [])}

    def worksheet(self, title):
        if title not in self.worksheets:
            raise gspread.WorksheetNotFound(title)
        return self.worksheets[title]

    def add_worksheet(self, title, rows, cols):
        ws = FakeWorksheet(title)
        self.worksheets[title] = ws
        return ws


class FakeClient:
    def __init__(self, spreadsheets=None):
        self.spreadsheets = dict(spreadsheets or {})
        self.open_calls = 0

    def open_by_key(self, key):
        self.open_calls += 1
        if key not in self.spreadsheets:
            raise gspread.SpreadsheetNotFound(key)
        return self.spreadsheets[key]


@pytest.fixture
def sheet_rows():
    return [
        ROW_HEADERS,
        ["f12345", "2024-07-01", "123456", "654321, 234567", "A1", "X100", "None"],
        ["f67890", "2024-07-02", "789012", "890123", "B2", "Y200", "Screen"],
        ["f34567", "2024-07-03", "345678"],
    ]


@pytest.fixture
def fake_worksheet(sheet_rows):
    return FakeWorksheet("Sheet1", sheet_rows)


@pytest.fixture
def fake_client(fake_worksheet):
    return FakeClient({"sheet-1": FakeSpreadsheet([fake_worksheet])})


@pytest.fixture
def memory_store():
    return MemoryAdapter()


@pytest.fixture
def client(memory_store):
    """TestClient wired to a fresh in-memory store and empty session registry."""
    from fastapi.testclient import TestClient

    from main import app
    from routers import data as data_router
    from routers import inventory as inventory_router

    inventory_router.reset_views()
    app.dependency_overrides[data_router.get_storage] = lambda: memory_store
    app.dependency_overrides[inventory_router.get_storage] = lambda: memory_store
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
    inventory_router.reset_views()
