"""
Bill Store

The operation surface the calendar screen talks to. Wraps a storage
backend and guarantees:
- preconditions are checked before anything is written; an unmet
  precondition makes the call a logged no-op, not an error
- a StorageError never escapes; it is logged and returned in the result
- create re-reads the bill's day after the insert, so the returned list
  already contains the new bill; once the insert has committed the
  result is successful even if that re-read fails
"""

import math
from typing import Any, Optional
from uuid import UUID

from bill_calendar.events import EventLogger
from bill_calendar.models.bill import Bill, StoreResult
from bill_calendar.services.storage import BillStorageInterface, StorageError


def _missing_fields(**fields: Any) -> list[str]:
    """
    Names of required fields that are empty.

    Zero is a valid amount; NaN and infinity are not. SQLite stores
    NaN as NULL, and a NULL amount no longer reads back as a Bill.
    """
    missing = []
    for name, value in fields.items():
        if value is None or (isinstance(value, str) and value == ""):
            missing.append(name)
        elif isinstance(value, float) and not math.isfinite(value):
            missing.append(name)
    return missing


class BillStore:
    """
    Bill persistence scoped by due date.

    Construct once at startup with an owned storage backend and pass the
    instance to whoever needs it.
    """

    def __init__(
        self,
        storage: BillStorageInterface,
        event_logger: Optional[EventLogger] = None,
    ):
        self._storage = storage
        self._events = event_logger or EventLogger()

    async def ensure_schema(self) -> StoreResult[None]:
        """Create the bills table if needed. Never raises."""
        try:
            await self._storage.ensure_schema()
        except StorageError as e:
            self._events.log_storage_error("ensure_schema", str(e))
            return StoreResult(operation="ensure_schema", success=False, error_message=str(e))

        self._events.log_schema_ensured("bills")
        return StoreResult(operation="ensure_schema", success=True)

    async def list_by_date(
        self,
        bill_date: str,
        correlation_id: Optional[UUID] = None,
    ) -> StoreResult[list[Bill]]:
        """
        Bills due on bill_date, in insertion order.

        On a storage fault the result fails and data is an empty list,
        so callers can render it as "no bills".
        """
        try:
            bills = await self._storage.list_by_date(bill_date)
        except StorageError as e:
            self._events.log_storage_error(
                "list_by_date",
                str(e),
                bill_date=bill_date,
                correlation_id=correlation_id,
            )
            return StoreResult(
                operation="list_by_date",
                success=False,
                data=[],
                error_message=str(e),
            )

        self._events.log_bills_listed(bill_date, len(bills), correlation_id)
        return StoreResult(operation="list_by_date", success=True, data=bills)

    async def create(
        self,
        title: Optional[str],
        amount: Optional[float],
        bill_date: Optional[str],
        correlation_id: Optional[UUID] = None,
    ) -> StoreResult[list[Bill]]:
        """
        Add a bill, then return the refreshed list for its date.

        Skipped without writing if title is empty, amount is missing
        or not finite, or bill_date is not set. If the insert commits but
        the re-read fails, the result is still successful: data is empty
        and refresh_error carries the read failure.
        """
        missing = _missing_fields(title=title, amount=amount, date=bill_date)
        if missing:
            self._events.log_bill_skipped("create", missing, correlation_id)
            return StoreResult(operation="create", success=True, skipped=True)

        try:
            bill = await self._storage.create(title, amount, bill_date)
        except StorageError as e:
            self._events.log_storage_error(
                "create",
                str(e),
                bill_date=bill_date,
                correlation_id=correlation_id,
            )
            return StoreResult(operation="create", success=False, error_message=str(e))

        self._events.log_bill_created(bill.id, bill_date, correlation_id)

        refreshed = await self.list_by_date(bill_date, correlation_id)
        return StoreResult(
            operation="create",
            success=True,
            data=refreshed.data,
            refresh_error=refreshed.error_message,
        )

    async def update(
        self,
        bill_id: Optional[int],
        title: Optional[str],
        amount: Optional[float],
        bill_date: Optional[str],
        correlation_id: Optional[UUID] = None,
    ) -> StoreResult[int]:
        """
        Rewrite title, amount and date of a bill. The id never changes.

        data is the number of rows affected; 0 means the id was not found.
        """
        missing = _missing_fields(id=bill_id, title=title, amount=amount, date=bill_date)
        if missing:
            self._events.log_bill_skipped("update", missing, correlation_id)
            return StoreResult(operation="update", success=True, skipped=True, data=0)

        try:
            rows = await self._storage.update(bill_id, title, amount, bill_date)
        except StorageError as e:
            self._events.log_storage_error(
                "update",
                str(e),
                bill_id=bill_id,
                bill_date=bill_date,
                correlation_id=correlation_id,
            )
            return StoreResult(operation="update", success=False, error_message=str(e))

        self._events.log_bill_updated(bill_id, bill_date, rows, correlation_id)
        return StoreResult(operation="update", success=True, data=rows)

    async def delete(
        self,
        bill_id: Optional[int],
        correlation_id: Optional[UUID] = None,
    ) -> StoreResult[int]:
        """Remove a bill permanently. data is the number of rows affected."""
        if bill_id is None:
            self._events.log_bill_skipped("delete", ["id"], correlation_id)
            return StoreResult(operation="delete", success=True, skipped=True, data=0)

        try:
            rows = await self._storage.delete(bill_id)
        except StorageError as e:
            self._events.log_storage_error(
                "delete",
                str(e),
                bill_id=bill_id,
                correlation_id=correlation_id,
            )
            return StoreResult(operation="delete", success=False, error_message=str(e))

        self._events.log_bill_deleted(bill_id, rows, correlation_id)
        return StoreResult(operation="delete", success=True, data=rows)
