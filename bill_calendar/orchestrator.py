"""
Main Orchestrator for Bill Calendar

Holds the state of the calendar screen and drives the bill store:
1. Start       → ensure the table exists, load today's bills
2. Select day  → load that day's bills
3. Open modal  → add form (empty) or edit form (prefilled)
4. Submit      → create or update, then reload the selected day
5. Remove      → delete the selected bill, then reload the selected day

DESIGN DECISION: The flow is headless. Any UI (the Streamlit page in
app/main.py, a test) renders its attributes and calls its methods.
Every mutation is awaited before the reload, so the list shown after
a submit always reflects it.
"""

import html
import math
from datetime import date
from typing import Optional
from uuid import UUID

from bill_calendar.classification import classify_bill
from bill_calendar.config import get_settings
from bill_calendar.events import EventLogger, configure_logging, create_correlation_id
from bill_calendar.models.bill import Bill, DueStatus, StoreResult
from bill_calendar.services import BillStore, SQLiteBillStorage, SQLiteClient


def parse_amount(text: Optional[str]) -> Optional[float]:
    """
    Parse the amount typed into the form.

    Empty, non-numeric and non-finite input all count as a missing amount.
    """
    if text is None:
        return None
    text = text.strip()
    if not text:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def format_amount(amount: float) -> str:
    """Render an amount the way it is typed: 12 not 12.0."""
    if float(amount).is_integer():
        return str(int(amount))
    return str(amount)


def bill_label(bill: Bill) -> str:
    """HTML-safe row text for a bill, e.g. "Rent: $900"."""
    return f"{html.escape(bill.title)}: ${format_amount(bill.amount)}"


class BillCalendarFlow:
    """
    State machine behind the calendar screen.

    Attributes read by the UI:
        today, selected_date  ISO dates
        bills                 bills due on selected_date
        modal_visible         whether the add/edit form is open
        selected_bill         bill being edited, None when adding
        title_text, amount_text  form contents
        last_error            message of the last storage fault, if any
    """

    def __init__(
        self,
        bill_store: BillStore,
        today: Optional[date] = None,
        accent_color: Optional[str] = None,
    ):
        self._store = bill_store
        self._today = today or date.today()
        self._accent_color = accent_color or get_settings().app.accent_color

        self.selected_date: str = self._today.isoformat()
        self.bills: list[Bill] = []

        self.modal_visible = False
        self.selected_bill: Optional[Bill] = None
        self.title_text = ""
        self.amount_text = ""

        self.last_error: Optional[str] = None

    @property
    def today(self) -> str:
        return self._today.isoformat()

    @property
    def modal_title(self) -> str:
        return "Edit Bill" if self.selected_bill else "Add Bill"

    async def start(self) -> StoreResult[list[Bill]]:
        """Ensure the table exists and load today's bills."""
        schema = await self._store.ensure_schema()
        if schema.failed:
            self.last_error = schema.error_message
        return await self.refresh()

    async def refresh(
        self,
        correlation_id: Optional[UUID] = None,
    ) -> StoreResult[list[Bill]]:
        """Reload the bills of the selected date."""
        result = await self._store.list_by_date(self.selected_date, correlation_id)
        self.bills = result.data or []
        if result.failed:
            self.last_error = result.error_message
        return result

    async def select_day(self, day: str) -> StoreResult[list[Bill]]:
        """Make day the selected date and load its bills."""
        self.selected_date = day
        return await self.refresh()

    def open_modal(self, bill: Optional[Bill] = None) -> None:
        """Open the edit form for bill, or the add form if bill is None."""
        self.selected_bill = bill
        self.title_text = bill.title if bill else ""
        self.amount_text = format_amount(bill.amount) if bill else ""
        self.modal_visible = True

    def close_modal(self) -> None:
        self.modal_visible = False

    def _reset_form(self) -> None:
        self.modal_visible = False
        self.selected_bill = None
        self.title_text = ""
        self.amount_text = ""

    async def submit(self) -> StoreResult:
        """
        Add or edit, depending on whether a bill is selected.

        An edit moves the bill to the selected date. The form stays
        open if the submit was skipped or the write failed. A committed
        add always closes the form, even when the reload after it failed.
        """
        correlation_id = create_correlation_id()
        amount = parse_amount(self.amount_text)

        if self.selected_bill is None:
            result = await self._store.create(
                self.title_text,
                amount,
                self.selected_date,
                correlation_id,
            )
        else:
            result = await self._store.update(
                self.selected_bill.id,
                self.title_text,
                amount,
                self.selected_date,
                correlation_id,
            )

        if result.skipped:
            return result
        if result.failed:
            self.last_error = result.error_message
            return result

        self.last_error = result.refresh_error
        if result.operation == "create":
            self.bills = result.data or []
        else:
            await self.refresh(correlation_id)
        self._reset_form()
        return result

    async def remove(self) -> StoreResult[int]:
        """Delete the selected bill and reload the selected date."""
        correlation_id = create_correlation_id()
        bill_id = self.selected_bill.id if self.selected_bill else None

        result = await self._store.delete(bill_id, correlation_id)
        if result.skipped:
            return result
        if result.failed:
            self.last_error = result.error_message
            return result

        self.last_error = None
        self._reset_form()
        await self.refresh(correlation_id)
        return result

    def marked_dates(self) -> dict[str, dict]:
        """
        Calendar day markers.

        If the selected date is today, today's marker wins.
        """
        marks = {
            self.selected_date: {
                "selected": True,
                "selected_color": self._accent_color,
            },
        }
        marks[self.today] = {
            "selected": True,
            "dot_color": "black",
            "marked": True,
        }
        return marks

    def bill_rows(self) -> list[tuple[Bill, DueStatus]]:
        """Bills of the selected date with their display bucket."""
        return [(bill, classify_bill(bill, self._today)) for bill in self.bills]


def create_app_components(
    db_path: Optional[str] = None,
) -> tuple[BillStore, SQLiteClient]:
    """
    Factory function to create the application components.

    Args:
        db_path: SQLite file to use. Defaults to BILLS_DB_PATH / bills.db.

    Returns:
        (bill_store, sqlite_client). The caller owns the client and
        closes it on shutdown.
    """
    settings = get_settings()
    configure_logging(settings.app.log_level)

    client = SQLiteClient(path=db_path)
    storage = SQLiteBillStorage(client)
    bill_store = BillStore(storage, EventLogger())

    return bill_store, client
