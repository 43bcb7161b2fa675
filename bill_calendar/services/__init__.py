"""Services package."""

from bill_calendar.services.storage import (
    BillStorageInterface,
    SQLiteBillStorage,
    SQLiteClient,
    StorageError,
)
from bill_calendar.services.bill_store import BillStore

__all__ = [
    # Store service
    "BillStore",
    # Storage services
    "BillStorageInterface",
    "SQLiteBillStorage",
    "SQLiteClient",
    "StorageError",
]
