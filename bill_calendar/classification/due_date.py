"""
Due Date Classification

Maps a bill's due date and a reference "today" to one of three
display buckets:

- OVERDUE:  due date is before today
- SOON_DUE: due date minus 3 days is on or after today,
            i.e. the bill is due 3 or more days from now
- NORMAL:   anything else (due today, tomorrow or the day after)

NOTE: SOON_DUE covers every bill at least 3 days out, however far.
The near-term 0-2 day window is NORMAL. The rule is kept exactly as the
calendar has always drawn it; see DESIGN.md before changing it.
"""

from datetime import date, timedelta
from typing import Optional

from bill_calendar.models.bill import Bill, DueStatus


SOON_DUE_OFFSET = timedelta(days=3)

# Display bucket colors for the calendar list
STATUS_COLORS: dict[DueStatus, str] = {
    DueStatus.OVERDUE: "red",
    DueStatus.SOON_DUE: "green",
    DueStatus.NORMAL: "yellow",
}


def classify(due_date: date, today: date) -> DueStatus:
    """Classify a due date relative to today. Total and side-effect free."""
    if due_date < today:
        return DueStatus.OVERDUE
    if due_date - SOON_DUE_OFFSET >= today:
        return DueStatus.SOON_DUE
    return DueStatus.NORMAL


def parse_bill_date(value: str) -> Optional[date]:
    """Parse a YYYY-MM-DD string; None if it is not a calendar date."""
    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError):
        return None


def classify_bill(bill: Bill, today: date) -> DueStatus:
    """
    Classify a stored bill.

    Bills are stored with whatever date text the caller supplied.
    A date that does not parse is neither before today nor 3+ days
    after it, so it lands in NORMAL.
    """
    due_date = parse_bill_date(bill.date)
    if due_date is None:
        return DueStatus.NORMAL
    return classify(due_date, today)
