"""
Store Event Models for Bill Calendar

Every store operation emits one structured event. Events go to the
structured log only; bills themselves carry no history.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class StoreEventType(str, Enum):
    """Types of events emitted by the bill store."""
    # Schema
    SCHEMA_ENSURED = "schema_ensured"

    # Reads
    BILLS_LISTED = "bills_listed"

    # Mutations
    BILL_CREATED = "bill_created"
    BILL_UPDATED = "bill_updated"
    BILL_DELETED = "bill_deleted"
    BILL_SKIPPED = "bill_skipped"

    # Failures
    STORAGE_ERROR = "storage_error"


class EventSeverity(str, Enum):
    """Severity level for store events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class StoreEvent(BaseModel):
    """A single store event."""

    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the event occurred (UTC)"
    )

    event_type: StoreEventType
    severity: EventSeverity = EventSeverity.INFO

    # Context - which bill / which day
    bill_id: Optional[int] = None
    bill_date: Optional[str] = None

    # Ties a mutation to the refresh that follows it
    correlation_id: Optional[UUID] = None

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(default_factory=dict)

    operation: Optional[str] = None
    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "bill_id": self.bill_id,
            "bill_date": self.bill_date,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "operation": self.operation,
            "error_message": self.error_message,
        }


class StoreEventBuilder:
    """
    Helper class to build store events with common patterns.

    Usage:
        event = StoreEventBuilder.bill_created(bill_id, bill_date, correlation_id)
        event = StoreEventBuilder.storage_error("list_by_date", str(exc))
    """

    @staticmethod
    def schema_ensured(table: str) -> StoreEvent:
        return StoreEvent(
            event_type=StoreEventType.SCHEMA_ENSURED,
            severity=EventSeverity.DEBUG,
            description=f"Schema ensured for table: {table}",
            details={"table": table},
        )

    @staticmethod
    def bills_listed(
        bill_date: str,
        count: int,
        correlation_id: Optional[UUID] = None
    ) -> StoreEvent:
        return StoreEvent(
            event_type=StoreEventType.BILLS_LISTED,
            severity=EventSeverity.DEBUG,
            bill_date=bill_date,
            correlation_id=correlation_id,
            description=f"Listed {count} bills due {bill_date}",
            details={"count": count},
        )

    @staticmethod
    def bill_created(
        bill_id: int,
        bill_date: str,
        correlation_id: Optional[UUID] = None
    ) -> StoreEvent:
        return StoreEvent(
            event_type=StoreEventType.BILL_CREATED,
            bill_id=bill_id,
            bill_date=bill_date,
            correlation_id=correlation_id,
            description=f"Bill {bill_id} created for {bill_date}",
        )

    @staticmethod
    def bill_updated(
        bill_id: int,
        bill_date: str,
        rows_affected: int,
        correlation_id: Optional[UUID] = None
    ) -> StoreEvent:
        return StoreEvent(
            event_type=StoreEventType.BILL_UPDATED,
            bill_id=bill_id,
            bill_date=bill_date,
            correlation_id=correlation_id,
            description=f"Bill {bill_id} updated ({rows_affected} rows)",
            details={"rows_affected": rows_affected},
        )

    @staticmethod
    def bill_deleted(
        bill_id: int,
        rows_affected: int,
        correlation_id: Optional[UUID] = None
    ) -> StoreEvent:
        return StoreEvent(
            event_type=StoreEventType.BILL_DELETED,
            bill_id=bill_id,
            correlation_id=correlation_id,
            description=f"Bill {bill_id} deleted ({rows_affected} rows)",
            details={"rows_affected": rows_affected},
        )

    @staticmethod
    def bill_skipped(
        operation: str,
        missing: list[str],
        correlation_id: Optional[UUID] = None
    ) -> StoreEvent:
        return StoreEvent(
            event_type=StoreEventType.BILL_SKIPPED,
            severity=EventSeverity.WARNING,
            operation=operation,
            correlation_id=correlation_id,
            description=f"{operation} skipped: missing {', '.join(missing)}",
            details={"missing": missing},
        )

    @staticmethod
    def storage_error(
        operation: str,
        error_message: str,
        bill_id: Optional[int] = None,
        bill_date: Optional[str] = None,
        correlation_id: Optional[UUID] = None
    ) -> StoreEvent:
        return StoreEvent(
            event_type=StoreEventType.STORAGE_ERROR,
            severity=EventSeverity.ERROR,
            operation=operation,
            bill_id=bill_id,
            bill_date=bill_date,
            correlation_id=correlation_id,
            description=f"Storage error during {operation}",
            error_message=error_message,
        )
