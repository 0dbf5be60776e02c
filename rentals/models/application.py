"""Rental application models."""

from dataclasses import dataclass
from datetime import date, datetime

from rentals.models.enums import ApplicationStatus


@dataclass(frozen=True)
class ApplicationDraft:
    """Raw form input for a rental application.

    Every field holds the string exactly as entered. The draft is frozen so
    a failed submission can be retried with the same object.
    """

    full_name: str = ""
    email: str = ""
    phone: str = ""
    monthly_income: str = ""
    move_in_date: str = ""
    notes: str = ""


@dataclass
class Application:
    """Rental application as read back from the store."""

    application_id: str
    property_id: str
    property_title: str
    user_id: str
    full_name: str
    email: str
    phone: str
    monthly_income: int
    move_in_date: date | None
    notes: str
    status: ApplicationStatus
    created_at: datetime
    updated_at: datetime | None = None
    created_at_estimated: bool = False  # Stored timestamp missing or malformed; never persisted
