"""Conversion between domain objects and store documents."""

from dataclasses import fields, is_dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import TYPE_CHECKING, Any

from rentals.dashboard import coerce_timestamp
from rentals.models import Application, ApplicationStatus

if TYPE_CHECKING:
    from rentals.store.base import Document

# Longest whole number accepted from form or document input
MAX_INT_DIGITS = 15

# Application attribute -> document key, in the collection's camelCase format
FIELD_NAMES: dict[str, str] = {
    "property_id": "propertyId",
    "property_title": "propertyTitle",
    "user_id": "userId",
    "full_name": "fullName",
    "email": "email",
    "phone": "phone",
    "monthly_income": "monthlyIncome",
    "move_in_date": "moveInDate",
    "notes": "notes",
    "status": "status",
    "created_at": "createdAt",
    "updated_at": "updatedAt",
}


def serialize_value(value: Any) -> Any:
    """Serialize a value for JSON output."""
    if isinstance(value, Decimal):
        return str(value)
    elif isinstance(value, Enum):
        return value.value
    elif isinstance(value, datetime):
        return value.isoformat()
    elif isinstance(value, date):
        return value.isoformat()
    elif is_dataclass(value) and not isinstance(value, type):
        return {f.name: serialize_value(getattr(value, f.name)) for f in fields(value)}
    elif isinstance(value, dict):
        return {k: serialize_value(v) for k, v in value.items()}
    elif isinstance(value, (list, tuple)):
        return [serialize_value(v) for v in value]
    return value


def application_to_document(application: Application) -> dict[str, Any]:
    """Build the stored document for ``application``.

    The identifier and the transient ``created_at_estimated`` flag are not
    part of the document.
    """
    data: dict[str, Any] = {}
    for attr, key in FIELD_NAMES.items():
        value = getattr(application, attr)
        if attr == "updated_at" and value is None:
            continue
        if attr == "move_in_date":
            value = value.isoformat() if value else ""
        elif attr == "status":
            value = ApplicationStatus(value).value
        data[key] = value
    return data


def application_from_document(document: "Document", now: datetime) -> Application:
    """Normalize a stored document into an :class:`Application`.

    Parameters
    ----------
    document : Document
        Document as returned by the store.
    now : datetime
        Substituted for a missing or malformed ``createdAt``.

    Returns
    -------
    Application
        Normalized application.

    Raises
    ------
    ValueError
        If the stored status is not a known :class:`ApplicationStatus`.
    """
    data = document.data
    created_at, estimated = coerce_timestamp(data.get("createdAt"), now)
    updated_raw = data.get("updatedAt")
    updated_at = coerce_timestamp(updated_raw, now)[0] if updated_raw else None

    return Application(
        application_id=document.id,
        property_id=str(data.get("propertyId", "")),
        property_title=str(data.get("propertyTitle", "")),
        user_id=str(data.get("userId", "")),
        full_name=str(data.get("fullName", "")),
        email=str(data.get("email", "")),
        phone=str(data.get("phone", "")),
        monthly_income=parse_int(data.get("monthlyIncome")) or 0,
        move_in_date=parse_date(data.get("moveInDate")),
        notes=str(data.get("notes", "")),
        status=ApplicationStatus(data.get("status", ApplicationStatus.PENDING.value)),
        created_at=created_at,
        updated_at=updated_at,
        created_at_estimated=estimated,
    )


def parse_int(value: Any) -> int | None:
    """Parse a whole number from form or document input.

    Fractions are truncated toward zero; ``None`` is returned for anything
    that is not numeric or has more than ``MAX_INT_DIGITS`` integer digits.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        number = Decimal(str(value).strip())
    except InvalidOperation:
        return None
    # Bounded before int(), which would expand an exponent like "1e5000000"
    if not number.is_finite() or number.adjusted() >= MAX_INT_DIGITS:
        return None
    return int(number)


def parse_date(value: Any) -> date | None:
    """Parse an ISO date or datetime string as a calendar date.

    The whole string must parse; ``None`` is returned otherwise.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        return None
