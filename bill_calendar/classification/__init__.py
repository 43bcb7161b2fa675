"""Due date classification package."""

from bill_calendar.classification.due_date import (
    STATUS_COLORS,
    classify,
    classify_bill,
    parse_bill_date,
)

__all__ = ["STATUS_COLORS", "classify", "classify_bill", "parse_bill_date"]
