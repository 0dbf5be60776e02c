"""Domain models for rental listings and applications."""

from rentals.models.application import Application, ApplicationDraft
from rentals.models.enums import DECISION_STATUSES, ApplicationStatus
from rentals.models.property import INCOME_TO_RENT_RATIO, Property
from rentals.models.status import STATUS_DISPLAY, StatusDisplay, status_display

__all__ = [
    "Application",
    "ApplicationDraft",
    "ApplicationStatus",
    "DECISION_STATUSES",
    "INCOME_TO_RENT_RATIO",
    "Property",
    "STATUS_DISPLAY",
    "StatusDisplay",
    "status_display",
]
