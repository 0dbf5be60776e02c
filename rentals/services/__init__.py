"""Application services: submission, aggregation and listings."""

from rentals.services.aggregator import ApplicationAggregator
from rentals.services.errors import describe_store_error
from rentals.services.listing import ListingEntry, PropertyFilters, PropertyListing
from rentals.services.submission import (
    ApplicationSubmission,
    SubmissionResult,
    build_application_record,
    ensure_valid,
    validate_application,
)

__all__ = [
    "ApplicationAggregator",
    "ApplicationSubmission",
    "ListingEntry",
    "PropertyFilters",
    "PropertyListing",
    "SubmissionResult",
    "build_application_record",
    "describe_store_error",
    "ensure_valid",
    "validate_application",
]
