"""
Storage Services Package

Provides the abstract bill storage interface and its SQLite implementation.
"""

from bill_calendar.services.storage.interface import (
    BillStorageInterface,
    StorageError,
)
from bill_calendar.services.storage.sqlite import (
    SQLiteBillStorage,
    SQLiteClient,
)

__all__ = [
    # Interfaces
    "BillStorageInterface",
    # Exceptions
    "StorageError",
    # SQLite implementation
    "SQLiteBillStorage",
    "SQLiteClient",
]
