"""Rental application validation and submission."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from rentals.exceptions import StoreError, ValidationError
from rentals.models import INCOME_TO_RENT_RATIO, ApplicationDraft, ApplicationStatus, Property
from rentals.notifications import Notifier
from rentals.serialization import parse_date, parse_int
from rentals.services.errors import describe_store_error
from rentals.store import SERVER_TIMESTAMP, DocumentStore

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"\S+@\S+\.\S+")
NON_DIGITS = re.compile(r"\D")
MIN_PHONE_DIGITS = 7
MAX_PHONE_DIGITS = 15


def validate_application(
    draft: ApplicationDraft,
    prop: Property,
    now: datetime | None = None,
) -> dict[str, str]:
    """Check a draft against the form rules.

    Every rule is evaluated, so the result lists all violations at once.

    Parameters
    ----------
    draft : ApplicationDraft
        Raw form input.
    prop : Property
        Property applied for; its rent sets the income threshold.
    now : datetime | None
        Reference moment for the move-in check (default: current time).

    Returns
    -------
    dict[str, str]
        Field name to error message. Empty when the draft is valid.
    """
    now = now or datetime.now()
    errors: dict[str, str] = {}

    if not draft.full_name.strip():
        errors["full_name"] = "Full name is required"

    if not draft.email.strip():
        errors["email"] = "Email is required"
    elif not EMAIL_PATTERN.search(draft.email):
        errors["email"] = "Email is invalid"

    if not draft.phone.strip():
        errors["phone"] = "Phone number is required"
    else:
        digits = NON_DIGITS.sub("", draft.phone)
        if not MIN_PHONE_DIGITS <= len(digits) <= MAX_PHONE_DIGITS:
            errors["phone"] = (
                f"Phone number must be between {MIN_PHONE_DIGITS}-{MAX_PHONE_DIGITS} digits"
            )

    minimum_income = prop.minimum_income
    if not draft.monthly_income.strip():
        errors["monthly_income"] = "Monthly income is required"
    else:
        income = parse_int(draft.monthly_income)
        if income is None:
            errors["monthly_income"] = "Monthly income must be a number"
        elif income < minimum_income:
            errors["monthly_income"] = (
                f"Monthly income should be at least {INCOME_TO_RENT_RATIO}x the rent (${minimum_income})"
            )

    if not draft.move_in_date.strip():
        errors["move_in_date"] = "Move-in date is required"
    else:
        move_in = parse_date(draft.move_in_date)
        if move_in is None:
            errors["move_in_date"] = "Move-in date is invalid"
        elif datetime.combine(move_in, datetime.min.time()) <= now:
            errors["move_in_date"] = "Move-in date must be in the future"

    return errors


def ensure_valid(draft: ApplicationDraft, prop: Property, now: datetime | None = None) -> None:
    """Raise :class:`ValidationError` listing every violated rule."""
    errors = validate_application(draft, prop, now)
    if errors:
        raise ValidationError(errors)


def build_application_record(draft: ApplicationDraft, prop: Property, user_id: str) -> dict[str, Any]:
    """Build the document written for a validated draft.

    ``createdAt`` is left as :data:`SERVER_TIMESTAMP` for the store to fill.
    """
    move_in = parse_date(draft.move_in_date)
    return {
        "fullName": draft.full_name.strip(),
        "email": draft.email.strip(),
        "phone": draft.phone.strip(),
        "monthlyIncome": parse_int(draft.monthly_income),
        "moveInDate": move_in.isoformat() if move_in else "",
        "notes": draft.notes,
        "propertyId": prop.property_id,
        "propertyTitle": prop.title,
        "userId": user_id,
        "status": ApplicationStatus.PENDING.value,
        "createdAt": SERVER_TIMESTAMP,
    }


@dataclass
class SubmissionResult:
    """Outcome of one submission attempt."""

    application_id: str | None = None
    errors: dict[str, str] = field(default_factory=dict)
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.application_id is not None


class ApplicationSubmission:
    """Validate drafts and write them to the applications collection."""

    def __init__(
        self,
        store: DocumentStore,
        notifier: Notifier | None = None,
        collection: str = "applications",
    ) -> None:
        self.store = store
        self.notifier = notifier or Notifier()
        self.collection = collection

    async def submit(
        self,
        draft: ApplicationDraft,
        prop: Property,
        user_id: str,
        now: datetime | None = None,
    ) -> SubmissionResult:
        """Validate ``draft`` and, when it passes, persist it as pending.

        Parameters
        ----------
        draft : ApplicationDraft
            Raw form input; never modified.
        prop : Property
            Property applied for.
        user_id : str
            Authenticated submitter.
        now : datetime | None
            Reference moment for validation.

        Returns
        -------
        SubmissionResult
            The new application id on success, otherwise the field errors
            or the store failure message.
        """
        try:
            ensure_valid(draft, prop, now)
        except ValidationError as exc:
            logger.info("Rejected application for property %s: %s", prop.property_id, exc)
            message = "Please fix the errors in the form"
            self.notifier.error(message)
            return SubmissionResult(errors=exc.errors, message=message)

        record = build_application_record(draft, prop, user_id)
        logger.info("Submitting application for property %s", prop.property_id)
        try:
            application_id = await self.store.create(self.collection, record)
        except StoreError as exc:
            logger.error(
                "Store error while submitting application (%s)",
                exc.code,
                exc_info=exc,
                extra={"property_id": prop.property_id, "error_code": exc.code},
            )
            message = describe_store_error(exc, action="submit")
            self.notifier.error(message)
            return SubmissionResult(message=message)

        logger.info("Application submitted with ID %s", application_id)
        message = "Application submitted successfully!"
        self.notifier.success(message)
        return SubmissionResult(application_id=application_id, message=message)
