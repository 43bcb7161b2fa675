"""
Data Models Package

This package contains the Pydantic models used in Bill Calendar.
"""

from bill_calendar.models.bill import (
    Bill,
    DueStatus,
    StoreResult,
)
from bill_calendar.models.event import (
    EventSeverity,
    StoreEvent,
    StoreEventBuilder,
    StoreEventType,
)

__all__ = [
    # Bill models
    "Bill",
    "DueStatus",
    "StoreResult",
    # Event models
    "EventSeverity",
    "StoreEvent",
    "StoreEventBuilder",
    "StoreEventType",
]
