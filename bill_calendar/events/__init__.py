"""Store event logging package."""

from bill_calendar.events.logger import EventLogger, configure_logging, create_correlation_id

__all__ = ["EventLogger", "configure_logging", "create_correlation_id"]
