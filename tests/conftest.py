"""
Shared test fixtures.
"""

import os
import sys
from pathlib import Path

# Add project root to Python path
project_dir = Path(__file__).parent.parent
sys.path.insert(0, str(project_dir))

# Settings are loaded at import time; never point tests at a real project
os.environ.setdefault("SUPABASE_URL", "http://localhost:54321")
os.environ.setdefault("SUPABASE_KEY", "test-anon-key")

import pytest
from unittest.mock import patch
from typing import Generator

# ===================
# IN-MEMORY SUPABASE CLIENT
# ===================

class MockSupabaseResponse:
    """Mock Supabase query response."""

    def __init__(self, data: list = None, count: int = None):
        self.data = data or []
        self.count = count if count is not None else len(self.data)


class MockSupabaseQuery:
    """
    Chainable query builder over an in-memory table.

    eq / is_ filters, order and limit are applied for real so lookups
    behave like the store. insert() appends to the table on execute().
    """

    def __init__(self, table: "MockSupabaseTable"):
        self._table = table
        self._filters = []
        self._order = None
        self._limit = None
        self._insert_rows = None

    def select(self, *args, **kwargs):
        return self

    def insert(self, data):
        rows = data if isinstance(data, list) else [data]
        self._insert_rows = [dict(row) for row in rows]
        return self

    def eq(self, column, value):
        self._filters.append(lambda row: row.get(column) == value)
        return self

    def is_(self, column, value):
        expected = None if value in ("null", None) else value
        self._filters.append(lambda row: row.get(column) is expected)
        return self

    def order(self, column, desc: bool = False, **kwargs):
        self._order = (column, desc)
        return self

    def limit(self, count):
        self._limit = count
        return self

    def execute(self) -> MockSupabaseResponse:
        self._table.executed.append(self)

        if self._table.error is not None:
            raise self._table.error

        if self._insert_rows is not None:
            self._table.rows.extend(self._insert_rows)
            self._table.inserted.extend(self._insert_rows)
            return MockSupabaseResponse(data=self._insert_rows)

        rows = [row for row in self._table.rows if all(f(row) for f in self._filters)]
        if self._order:
            column, desc = self._order
            rows = sorted(rows, key=lambda row: row.get(column), reverse=desc)
        if self._limit is not None:
            rows = rows[:self._limit]
        return MockSupabaseResponse(data=[dict(row) for row in rows])


class MockSupabaseTable:
    """In-memory table with a log of inserted rows."""

    def __init__(self, rows: list = None):
        self.rows = list(rows or [])
        self.inserted = []
        self.executed = []
        self.error = None

    def select(self, *args, **kwargs):
        return MockSupabaseQuery(self).select(*args, **kwargs)

    def insert(self, data):
        return MockSupabaseQuery(self).insert(data)


class MockStorageBucket:
    """Mock storage bucket recording uploads."""

    def __init__(self, storage: "MockSupabaseStorage", name: str):
        self._storage = storage
        self.name = name

    def upload(self, path, file, file_options=None):
        if self._storage.error is not None:
            raise self._storage.error
        self._storage.uploads.append({
            "bucket": self.name,
            "path": path,
            "file": file,
            "file_options": file_options or {},
        })
        return {"Key": f"{self.name}/{path}"}


class MockSupabaseStorage:
    """Mock Supabase storage client."""

    def __init__(self):
        self.uploads = []
        self.error = None

    def from_(self, bucket: str) -> MockStorageBucket:
        return MockStorageBucket(self, bucket)


class MockSupabaseClient:
    """Mock Supabase client keeping table state between calls."""

    def __init__(self):
        self._tables = {}
        self.storage = MockSupabaseStorage()

    def set_table_data(self, table_name: str, data: list):
        """Seed rows for a table."""
        self._tables[table_name] = MockSupabaseTable(data)

    def get_table(self, name: str) -> MockSupabaseTable:
        """Access table state for assertions."""
        if name not in self._tables:
            self._tables[name] = MockSupabaseTable()
        return self._tables[name]

    def table(self, name: str) -> MockSupabaseTable:
        return self.get_table(name)


# ===================
# FIXTURES
# ===================

@pytest.fixture
def mock_supabase() -> MockSupabaseClient:
    """
    Create a mock Supabase client.

    Usage:
        def test_something(mock_supabase):
            mock_supabase.set_table_data("tax", [
                {"id": "1", "name": "Standard rate", "tax_rate": 19.0}
            ])
    """
    return MockSupabaseClient()


@pytest.fixture
def mock_db(mock_supabase) -> Generator:
    """
    Patch the database client with mock.

    Usage:
        def test_something(mock_db, mock_supabase):
            mock_supabase.set_table_data("category", [...])
            # Now any code using get_supabase_client() gets the mock
    """
    with patch("config.database.get_supabase_client", return_value=mock_supabase):
        with patch("services.reference_data_service.get_supabase_client", return_value=mock_supabase):
            with patch("services.media_service.get_supabase_client", return_value=mock_supabase):
                with patch("integrations.media_storage.get_supabase_client", return_value=mock_supabase):
                    with patch("integrations.media_storage.get_admin_client", return_value=None):
                        yield mock_supabase


@pytest.fixture
def mock_download() -> Generator:
    """
    Patch requests.get used for remote images.

    Usage:
        def test_something(mock_download):
            mock_download.return_value.content = b"..."
    """
    with patch("integrations.image_download.requests.get") as mock_get:
        mock_get.return_value.status_code = 200
        mock_get.return_value.raise_for_status.return_value = None
        yield mock_get


@pytest.fixture
def mock_mime() -> Generator:
    """
    Patch MIME detection.

    Usage:
        def test_something(mock_mime):
            mock_mime.return_value = "image/webp"
    """
    with patch("services.media_service.detect_mime_type") as mock_detect:
        mock_detect.return_value = "image/png"
        yield mock_detect


@pytest.fixture
def temp_dir(tmp_path, monkeypatch) -> Path:
    """Route tempfile to an isolated directory so leftovers can be counted."""
    monkeypatch.setattr("tempfile.tempdir", str(tmp_path))
    return tmp_path
