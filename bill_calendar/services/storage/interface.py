"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for storage operations.
This allows us to:
1. Keep the store service independent of SQLite
2. Substitute a failing backend in tests
3. Move to another engine without touching callers

The interface is intentionally small: the five statements the
calendar screen needs, partitioned by due date.
"""

from abc import ABC, abstractmethod
from typing import Optional

from bill_calendar.models.bill import Bill


class BillStorageInterface(ABC):
    """
    Abstract interface for bill storage operations.

    Every method raises StorageError when the engine fails.
    """

    @abstractmethod
    async def ensure_schema(self) -> None:
        """
        Create the bills table if it does not exist. Idempotent.

        Raises:
            StorageError: If the table cannot be created
        """
        pass

    @abstractmethod
    async def list_by_date(self, bill_date: str) -> list[Bill]:
        """
        List bills whose date equals bill_date.

        Args:
            bill_date: Due date as YYYY-MM-DD (compared as text)

        Returns:
            Matching bills in insertion order; empty if none

        Raises:
            StorageError: If the query fails
        """
        pass

    @abstractmethod
    async def create(self, title: str, amount: float, bill_date: str) -> Bill:
        """
        Insert a new bill.

        Returns:
            The stored bill with its assigned id

        Raises:
            StorageError: If the insert fails
        """
        pass

    @abstractmethod
    async def update(
        self,
        bill_id: int,
        title: str,
        amount: float,
        bill_date: str,
    ) -> int:
        """
        Overwrite title, amount and date of a bill.

        Returns:
            Number of rows affected (0 if the id does not exist)

        Raises:
            StorageError: If the update fails
        """
        pass

    @abstractmethod
    async def delete(self, bill_id: int) -> int:
        """
        Delete a bill by id.

        Returns:
            Number of rows affected (0 if the id does not exist)

        Raises:
            StorageError: If the delete fails
        """
        pass


class StorageError(Exception):
    """Any failure of the storage engine."""

    def __init__(self, message: str, operation: Optional[str] = None):
        super().__init__(message)
        self.operation = operation
