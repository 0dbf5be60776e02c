"""Tests for demo data generators."""

from datetime import datetime, timedelta

from rentals.generators import ApplicationGenerator
from rentals.models import ApplicationStatus, Property
from rentals.services import validate_application


class TestApplicationGenerator:
    def test_valid_draft_passes_validation(self, seed: int, sample_property: Property, now: datetime) -> None:
        gen = ApplicationGenerator(seed=seed)

        for _ in range(10):
            draft = gen.generate_draft(sample_property, now=now)
            assert validate_application(draft, sample_property, now) == {}

    def test_invalid_draft_fails_income_and_date(
        self, seed: int, sample_property: Property, now: datetime
    ) -> None:
        draft = ApplicationGenerator(seed=seed).generate_draft(sample_property, valid=False, now=now)

        errors = validate_application(draft, sample_property, now)

        assert set(errors) == {"monthly_income", "move_in_date"}

    def test_generate_application(self, seed: int, sample_property: Property, now: datetime) -> None:
        app = ApplicationGenerator(seed=seed).generate_application(sample_property, "user-001", now=now)

        assert app.application_id == ""
        assert app.monthly_income >= sample_property.minimum_income
        assert app.move_in_date > now.date()
        assert (app.updated_at is None) is (app.status is ApplicationStatus.PENDING)

    def test_generate_document(self, seed: int, sample_property: Property, now: datetime) -> None:
        doc = ApplicationGenerator(seed=seed).generate_document(sample_property, "user-001", now=now, days_back=5)

        assert doc["propertyId"] == "prop-001"
        assert doc["propertyTitle"] == "Sunny Loft"
        assert doc["userId"] == "user-001"
        assert doc["status"] in {s.value for s in ApplicationStatus}
        assert now - timedelta(days=5) <= doc["createdAt"] <= now
        assert ("updatedAt" in doc) is (doc["status"] != "pending")

    def test_generate_batch(self, seed: int, catalog, now: datetime) -> None:
        docs = list(
            ApplicationGenerator(seed=seed).generate_batch(
                list(catalog), 30, user_ids=["user-001", "user-002"], now=now
            )
        )

        assert len(docs) == 30
        assert {d["userId"] for d in docs} <= {"user-001", "user-002"}
        assert {d["propertyId"] for d in docs} <= {p.property_id for p in catalog}

    def test_reproducible(self, seed: int, sample_property: Property, now: datetime) -> None:
        first = ApplicationGenerator(seed=seed).generate_document(sample_property, "u", now=now)
        second = ApplicationGenerator(seed=seed).generate_document(sample_property, "u", now=now)

        assert first == second
