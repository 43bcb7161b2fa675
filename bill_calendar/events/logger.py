"""
Store Event Logger

Every store operation is logged as a structured event:
- reads at debug level
- mutations at info level
- skipped mutations at warning level
- storage faults at error level
"""

import logging
from typing import Optional
from uuid import UUID, uuid4

import structlog

from bill_calendar.models.event import EventSeverity, StoreEvent, StoreEventBuilder


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(level: str = "INFO") -> None:
    """Route structlog output through stdlib logging at the given level."""
    logging.basicConfig(format="%(message)s", level=level.upper())


class EventLogger:
    """Structured logger for store events."""

    def __init__(self, name: str = "bill_calendar.store"):
        self._logger = structlog.get_logger(name)

    def log(self, event: StoreEvent) -> None:
        """Log an event at the level matching its severity."""
        log_dict = event.to_log_dict()

        if event.severity == EventSeverity.ERROR:
            self._logger.error("store_event", **log_dict)
        elif event.severity == EventSeverity.WARNING:
            self._logger.warning("store_event", **log_dict)
        elif event.severity == EventSeverity.DEBUG:
            self._logger.debug("store_event", **log_dict)
        else:
            self._logger.info("store_event", **log_dict)

    def log_schema_ensured(self, table: str) -> None:
        self.log(StoreEventBuilder.schema_ensured(table))

    def log_bills_listed(
        self,
        bill_date: str,
        count: int,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(StoreEventBuilder.bills_listed(bill_date, count, correlation_id))

    def log_bill_created(
        self,
        bill_id: int,
        bill_date: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(StoreEventBuilder.bill_created(bill_id, bill_date, correlation_id))

    def log_bill_updated(
        self,
        bill_id: int,
        bill_date: str,
        rows_affected: int,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(
            StoreEventBuilder.bill_updated(bill_id, bill_date, rows_affected, correlation_id)
        )

    def log_bill_deleted(
        self,
        bill_id: int,
        rows_affected: int,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(StoreEventBuilder.bill_deleted(bill_id, rows_affected, correlation_id))

    def log_bill_skipped(
        self,
        operation: str,
        missing: list[str],
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(StoreEventBuilder.bill_skipped(operation, missing, correlation_id))

    def log_storage_error(
        self,
        operation: str,
        error_message: str,
        bill_id: Optional[int] = None,
        bill_date: Optional[str] = None,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a storage fault."""
        self.log(
            StoreEventBuilder.storage_error(
                operation=operation,
                error_message=error_message,
                bill_id=bill_id,
                bill_date=bill_date,
                correlation_id=correlation_id,
            )
        )


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this at the start of a user action (e.g. submitting the form)
    and pass it through the mutation and the refresh that follows.
    """
    return uuid4()
