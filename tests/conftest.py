"""Shared fixtures: a real SQLite store on a temp file and a faulty backend."""

import asyncio

import pytest

from bill_calendar.models.bill import Bill
from bill_calendar.services import (
    BillStorageInterface,
    BillStore,
    SQLiteBillStorage,
    SQLiteClient,
    StorageError,
)


def run(coro):
    """Drive a coroutine to completion from a sync test."""
    return asyncio.run(coro)


class FaultyStorage(BillStorageInterface):
    """
    Delegates to a real storage but raises StorageError for the
    operations named in `failing`.
    """

    def __init__(self, inner: BillStorageInterface, failing: set[str]):
        self._inner = inner
        self.failing = set(failing)

    def _check(self, operation: str) -> None:
        if operation in self.failing:
            raise StorageError(f"disk I/O error during {operation}", operation=operation)

    async def ensure_schema(self) -> None:
        self._check("ensure_schema")
        await self._inner.ensure_schema()

    async def list_by_date(self, bill_date: str) -> list[Bill]:
        self._check("list_by_date")
        return await self._inner.list_by_date(bill_date)

    async def create(self, title: str, amount: float, bill_date: str) -> Bill:
        self._check("create")
        return await self._inner.create(title, amount, bill_date)

    async def update(self, bill_id: int, title: str, amount: float, bill_date: str) -> int:
        self._check("update")
        return await self._inner.update(bill_id, title, amount, bill_date)

    async def delete(self, bill_id: int) -> int:
        self._check("delete")
        return await self._inner.delete(bill_id)


@pytest.fixture
def sqlite_client(tmp_path):
    client = SQLiteClient(path=str(tmp_path / "bills.db"), timeout_seconds=1.0)
    yield client
    client.close()


@pytest.fixture
def storage(sqlite_client):
    storage = SQLiteBillStorage(sqlite_client)
    run(storage.ensure_schema())
    return storage


@pytest.fixture
def store(storage):
    return BillStore(storage)


@pytest.fixture
def faulty_storage(storage):
    return FaultyStorage(storage, failing=set())


@pytest.fixture
def faulty_store(faulty_storage):
    return BillStore(faulty_storage)
