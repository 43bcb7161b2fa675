"""
SQLite Storage Implementation

Bills live in a single table:

    id     INTEGER PRIMARY KEY AUTOINCREMENT
    title  TEXT
    amount REAL
    date   TEXT  (YYYY-MM-DD, the query partition key)

The connection is owned by an SQLiteClient that the application creates
once and hands to the storage. Each write runs in its own transaction,
so a list issued after a write has returned always sees it.
"""

import sqlite3
from typing import Optional

from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from bill_calendar.config import get_settings
from bill_calendar.models.bill import Bill
from bill_calendar.services.storage.interface import (
    BillStorageInterface,
    StorageError,
)


BILLS_TABLE = "bills"

CREATE_TABLE_SQL = (
    f"CREATE TABLE IF NOT EXISTS {BILLS_TABLE} "
    "(id INTEGER PRIMARY KEY AUTOINCREMENT, title TEXT, amount REAL, date TEXT)"
)


class SQLiteClient:
    """
    Owner of the SQLite connection.

    Connects lazily on first use and retries transient open failures.
    """

    def __init__(
        self,
        path: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
    ):
        if path is None or timeout_seconds is None:
            settings = get_settings().storage
            path = path if path is not None else settings.path
            if timeout_seconds is None:
                timeout_seconds = settings.timeout_seconds
        self._path = path
        self._timeout = timeout_seconds
        self._connection: Optional[sqlite3.Connection] = None

    @property
    def path(self) -> str:
        return self._path

    @retry(
        retry=retry_if_exception_type(sqlite3.OperationalError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.1, max=1),
        reraise=True,
    )
    def _open(self) -> sqlite3.Connection:
        connection = sqlite3.connect(
            self._path,
            timeout=self._timeout,
            check_same_thread=False,
        )
        connection.row_factory = sqlite3.Row
        return connection

    def connect(self) -> sqlite3.Connection:
        """Return the open connection, opening it if needed."""
        if self._connection is None:
            try:
                self._connection = self._open()
            except sqlite3.Error as e:
                raise StorageError(
                    f"Failed to open bills database at {self._path}: {e}",
                    operation="connect",
                )
        return self._connection

    def close(self) -> None:
        """Close the connection. A later call to connect() reopens it."""
        if self._connection is not None:
            self._connection.close()
            self._connection = None


class SQLiteBillStorage(BillStorageInterface):
    """
    SQLite implementation of bill storage.

    One bill per row; rows are returned in insertion order.
    """

    def __init__(self, client: Optional[SQLiteClient] = None):
        self._client = client or SQLiteClient()

    def _row_to_bill(self, row: sqlite3.Row) -> Bill:
        """Convert a table row to a Bill."""
        return Bill(
            id=row["id"],
            title=row["title"],
            amount=row["amount"],
            date=row["date"],
        )

    async def ensure_schema(self) -> None:
        """Create the bills table if missing."""
        try:
            connection = self._client.connect()
            with connection:
                connection.execute(CREATE_TABLE_SQL)
        except sqlite3.Error as e:
            raise StorageError(f"Failed to create bills table: {e}", operation="ensure_schema")

    async def list_by_date(self, bill_date: str) -> list[Bill]:
        """List the bills due on bill_date."""
        try:
            connection = self._client.connect()
            rows = connection.execute(
                f"SELECT id, title, amount, date FROM {BILLS_TABLE} WHERE date = ? ORDER BY id",
                (bill_date,),
            ).fetchall()
            return [self._row_to_bill(row) for row in rows]
        except (sqlite3.Error, ValueError) as e:
            raise StorageError(f"Failed to list bills: {e}", operation="list_by_date")

    async def create(self, title: str, amount: float, bill_date: str) -> Bill:
        """Insert a bill and return it with its new id."""
        try:
            connection = self._client.connect()
            with connection:
                cursor = connection.execute(
                    f"INSERT INTO {BILLS_TABLE} (title, amount, date) VALUES (?, ?, ?)",
                    (title, amount, bill_date),
                )
            return Bill(id=cursor.lastrowid, title=title, amount=amount, date=bill_date)
        except sqlite3.Error as e:
            raise StorageError(f"Failed to add bill: {e}", operation="create")

    async def update(
        self,
        bill_id: int,
        title: str,
        amount: float,
        bill_date: str,
    ) -> int:
        """Rewrite a bill's title, amount and date."""
        try:
            connection = self._client.connect()
            with connection:
                cursor = connection.execute(
                    f"UPDATE {BILLS_TABLE} SET title = ?, amount = ?, date = ? WHERE id = ?",
                    (title, amount, bill_date, bill_id),
                )
            return cursor.rowcount
        except sqlite3.Error as e:
            raise StorageError(f"Failed to edit bill: {e}", operation="update")

    async def delete(self, bill_id: int) -> int:
        """Delete a bill."""
        try:
            connection = self._client.connect()
            with connection:
                cursor = connection.execute(
                    f"DELETE FROM {BILLS_TABLE} WHERE id = ?",
                    (bill_id,),
                )
            return cursor.rowcount
        except sqlite3.Error as e:
            raise StorageError(f"Failed to delete bill: {e}", operation="delete")
