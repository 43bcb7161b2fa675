"""Tests for the SQLite bill storage."""

import asyncio

import pytest

from bill_calendar.services import SQLiteBillStorage, SQLiteClient, StorageError


class TestSQLiteClient:
    """Tests for connection ownership."""

    def test_connects_lazily_and_reuses_connection(self, sqlite_client):
        """Test that connect() opens once and returns the same handle."""
        first = sqlite_client.connect()
        assert sqlite_client.connect() is first

    def test_close_allows_reconnect(self, sqlite_client):
        """Test that a closed client reopens on next use."""
        first = sqlite_client.connect()
        sqlite_client.close()
        assert sqlite_client.connect() is not first

    def test_unreachable_path_raises_storage_error(self, tmp_path):
        """Test that an unopenable database surfaces as StorageError."""
        client = SQLiteClient(path=str(tmp_path / "missing" / "bills.db"), timeout_seconds=1.0)
        with pytest.raises(StorageError) as exc_info:
            client.connect()
        assert exc_info.value.operation == "connect"


class TestSQLiteBillStorage:
    """Tests for the five bill statements."""

    def test_ensure_schema_is_idempotent(self, storage):
        """Test that creating the table twice is harmless."""
        asyncio.run(storage.ensure_schema())
        asyncio.run(storage.ensure_schema())
        assert asyncio.run(storage.list_by_date("2026-10-19")) == []

    def test_create_assigns_ids(self, storage):
        """Test that ids are assigned and distinct."""
        first = asyncio.run(storage.create("Rent", 900.0, "2026-10-19"))
        second = asyncio.run(storage.create("Rent", 900.0, "2026-10-19"))
        assert first.id is not None
        assert second.id != first.id

    def test_list_by_date_filters_and_keeps_insertion_order(self, storage):
        """Test exact date matching in insertion order."""
        asyncio.run(storage.create("Rent", 900.0, "2026-10-19"))
        asyncio.run(storage.create("Power", 60.5, "2026-10-20"))
        asyncio.run(storage.create("Water", 20.0, "2026-10-19"))

        bills = asyncio.run(storage.list_by_date("2026-10-19"))
        assert [b.title for b in bills] == ["Rent", "Water"]

    def test_malformed_date_stored_as_is(self, storage):
        """Test that the date is not validated."""
        bill = asyncio.run(storage.create("Gym", 30.0, "next tuesday"))
        bills = asyncio.run(storage.list_by_date("next tuesday"))
        assert [b.id for b in bills] == [bill.id]

    def test_update_rewrites_fields(self, storage):
        """Test that update changes all three fields and keeps the id."""
        bill = asyncio.run(storage.create("Rent", 900.0, "2026-10-19"))
        rows = asyncio.run(storage.update(bill.id, "Rent (new)", 950.0, "2026-11-01"))
        assert rows == 1

        moved = asyncio.run(storage.list_by_date("2026-11-01"))
        assert len(moved) == 1
        assert moved[0].id == bill.id
        assert moved[0].title == "Rent (new)"
        assert moved[0].amount == 950.0

    def test_update_missing_id_affects_nothing(self, storage):
        """Test that updating an unknown id is a no-op."""
        assert asyncio.run(storage.update(999, "Ghost", 1.0, "2026-10-19")) == 0

    def test_delete(self, storage):
        """Test delete and delete of an absent id."""
        bill = asyncio.run(storage.create("Rent", 900.0, "2026-10-19"))
        assert asyncio.run(storage.delete(bill.id)) == 1
        assert asyncio.run(storage.delete(bill.id)) == 0
        assert asyncio.run(storage.list_by_date("2026-10-19")) == []

    def test_list_without_table_raises_storage_error(self, sqlite_client):
        """Test that a query against a missing table is a StorageError."""
        bare = SQLiteBillStorage(sqlite_client)
        with pytest.raises(StorageError) as exc_info:
            asyncio.run(bare.list_by_date("2026-10-19"))
        assert exc_info.value.operation == "list_by_date"

    def test_data_survives_reopen(self, tmp_path):
        """Test that bills persist across connections."""
        path = str(tmp_path / "bills.db")
        client = SQLiteClient(path=path, timeout_seconds=1.0)
        storage = SQLiteBillStorage(client)
        asyncio.run(storage.ensure_schema())
        asyncio.run(storage.create("Rent", 900.0, "2026-10-19"))
        client.close()

        reopened = SQLiteBillStorage(SQLiteClient(path=path, timeout_seconds=1.0))
        bills = asyncio.run(reopened.list_by_date("2026-10-19"))
        assert [b.title for b in bills] == ["Rent"]
