"""
Core Data Models for Bill Calendar

These models define the shapes flowing between storage, the
store service and the calendar screen.

DESIGN DECISION: The bill's date is kept as the ISO string the caller
supplied. The store partitions on exact string equality and does not
validate it, so a malformed value is stored and returned unchanged.
"""

from enum import Enum
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, Field


T = TypeVar("T")


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class DueStatus(str, Enum):
    """
    Display bucket of a bill relative to today.

    Mutually exclusive; every bill falls in exactly one.
    """
    OVERDUE = "overdue"
    SOON_DUE = "soon_due"
    NORMAL = "normal"


# =============================================================================
# CORE BILL MODEL
# =============================================================================

class Bill(BaseModel):
    """
    A persisted bill.

    The id is assigned by storage on creation and never changes.
    Title, amount and date are rewritten together on edit.
    """
    id: int = Field(
        ...,
        description="Storage-assigned identifier"
    )
    title: str = Field(
        ...,
        description="User-supplied title, not unique"
    )
    amount: float = Field(
        ...,
        description="Amount due; zero and negative values are accepted"
    )
    date: str = Field(
        ...,
        description="Due date as YYYY-MM-DD"
    )


# =============================================================================
# OPERATION RESULTS
# =============================================================================

class StoreResult(BaseModel, Generic[T]):
    """
    Outcome of a BillStore operation.

    Storage faults are reported here instead of being raised:
    success is False and error_message says what went wrong.
    A skipped operation (precondition not met) is successful but
    performed no mutation.
    """

    operation: str = Field(
        ...,
        description="Name of the store operation"
    )
    success: bool = Field(
        ...,
        description="False if the storage engine reported an error"
    )
    skipped: bool = Field(
        default=False,
        description="True if preconditions were not met and nothing was written"
    )
    data: Optional[T] = None
    error_message: Optional[str] = None
    refresh_error: Optional[str] = Field(
        default=None,
        description="Set when the write succeeded but the re-read after it failed"
    )

    @property
    def failed(self) -> bool:
        return not self.success
