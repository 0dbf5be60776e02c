"""Application generator for demo dashboards."""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Any, Iterator, Sequence

from rentals.generators.base import BaseGenerator
from rentals.models import Application, ApplicationDraft, ApplicationStatus, Property
from rentals.serialization import application_to_document


class ApplicationGenerator(BaseGenerator):
    """Generate rental application drafts and stored documents."""

    STATUSES = list(ApplicationStatus)
    STATUS_WEIGHTS = [0.6, 0.25, 0.15]

    def generate_draft(
        self,
        prop: Property,
        valid: bool = True,
        now: datetime | None = None,
    ) -> ApplicationDraft:
        """Generate form input for ``prop``.

        Parameters
        ----------
        prop : Property
            Property applied for.
        valid : bool
            When False, the income falls short of the 3x rent rule and the
            move-in date is in the past.
        now : datetime | None
            Reference moment for the move-in date.

        Returns
        -------
        ApplicationDraft
            Generated draft.
        """
        now = now or datetime.now()
        if valid:
            income = prop.minimum_income + self.random.randint(0, 4) * 500
            move_in = now.date() + timedelta(days=self.random.randint(7, 90))
        else:
            income = max(0, prop.minimum_income - self.random.randint(1, 10) * 100)
            move_in = now.date() - timedelta(days=self.random.randint(1, 30))

        return ApplicationDraft(
            full_name=self.fake.name(),
            email=self.fake.email(),
            phone=self.fake.numerify("+1 ###-###-####"),
            monthly_income=str(income),
            move_in_date=move_in.isoformat(),
            notes=self.fake.sentence() if self.random.random() < 0.5 else "",
        )

    def generate_application(
        self,
        prop: Property,
        user_id: str,
        now: datetime | None = None,
        days_back: int = 30,
    ) -> Application:
        """Generate an application created within ``days_back`` days of ``now``.

        Decided applications get an ``updated_at`` up to two days after
        creation. The id is left empty for the store to assign.
        """
        now = now or datetime.now()
        draft = self.generate_draft(prop, now=now)
        created_at = self.moment_before(now, days_back)
        status = self.random.choices(self.STATUSES, weights=self.STATUS_WEIGHTS, k=1)[0]
        updated_at = None
        if status is not ApplicationStatus.PENDING:
            updated_at = created_at + timedelta(hours=self.random.randint(1, 48))

        return Application(
            application_id="",
            property_id=prop.property_id,
            property_title=prop.title,
            user_id=user_id,
            full_name=draft.full_name,
            email=draft.email,
            phone=draft.phone,
            monthly_income=int(draft.monthly_income),
            move_in_date=date.fromisoformat(draft.move_in_date),
            notes=draft.notes,
            status=status,
            created_at=created_at,
            updated_at=updated_at,
        )

    def generate_document(
        self,
        prop: Property,
        user_id: str,
        now: datetime | None = None,
        days_back: int = 30,
    ) -> dict[str, Any]:
        """Generate a stored application document, ready for ``DocumentStore.create``."""
        return application_to_document(self.generate_application(prop, user_id, now, days_back))

    def generate_batch(
        self,
        properties: Sequence[Property],
        count: int,
        user_ids: Sequence[str] | None = None,
        now: datetime | None = None,
        days_back: int = 30,
    ) -> Iterator[dict[str, Any]]:
        """Generate ``count`` documents spread over the catalog and users."""
        user_ids = list(user_ids or [self.fake.uuid4() for _ in range(max(1, count // 3))])
        for _ in range(count):
            yield self.generate_document(
                self.random.choice(list(properties)),
                self.random.choice(user_ids),
                now=now,
                days_back=days_back,
            )
