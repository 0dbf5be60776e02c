"""Pytest configuration and fixtures."""

from datetime import datetime

import pytest

from rentals.catalog import PropertyCatalog
from rentals.models import ApplicationDraft, Property
from rentals.notifications import Notifier
from rentals.store import InMemoryDocumentStore


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def now() -> datetime:
    """Fixed reference moment (mid-afternoon so day buckets are unambiguous)."""
    return datetime(2026, 10, 19, 15, 30, 0)


@pytest.fixture
def sample_property() -> Property:
    """Property with rent 1000, so the income threshold is 3000."""
    return Property(
        property_id="prop-001",
        title="Sunny Loft",
        city="Makati",
        rent=1000,
        beds=1,
        baths=1,
    )


@pytest.fixture
def catalog(sample_property: Property) -> PropertyCatalog:
    """Small catalog spanning three cities."""
    return PropertyCatalog(
        [
            sample_property,
            Property("prop-002", "Modern Condo", "Taguig", 2400, 2, 2),
            Property("prop-003", "Family House", "Quezon City", 3200, 4, 3),
            Property("prop-004", "Executive Suite", "Makati", 2901, 2, 2),
        ]
    )


@pytest.fixture
def store(now: datetime) -> InMemoryDocumentStore:
    """Empty in-memory store whose server clock is ``now``."""
    return InMemoryDocumentStore(clock=lambda: now)


@pytest.fixture
def notifier() -> Notifier:
    return Notifier()


@pytest.fixture
def valid_draft() -> ApplicationDraft:
    """Draft that passes every rule against ``sample_property`` at ``now``."""
    return ApplicationDraft(
        full_name="Maria Santos",
        email="maria@example.com",
        phone="+63 912 345 6789",
        monthly_income="3500",
        move_in_date="2026-11-01",
        notes="Quiet tenant, no pets.",
    )
