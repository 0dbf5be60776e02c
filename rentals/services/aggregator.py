"""Application aggregation for the admin dashboard and applicant views."""

from __future__ import annotations

import dataclasses
import logging
from datetime import datetime

from rentals.catalog import PropertyCatalog
from rentals.config import DashboardConfig
from rentals.dashboard import (
    DashboardSummary,
    TrendPoint,
    build_trend,
    compute_summary,
    filter_applications,
    sort_recent_first,
)
from rentals.exceptions import InvalidEntityStateError, StoreError
from rentals.models import DECISION_STATUSES, Application, ApplicationStatus
from rentals.notifications import Notifier
from rentals.serialization import application_from_document
from rentals.store import SERVER_TIMESTAMP, DocumentStore

logger = logging.getLogger(__name__)


class ApplicationAggregator:
    """Holds one view's copy of the applications collection.

    The list in :attr:`applications` belongs to this instance only. It is
    replaced by :meth:`load` and patched in place by :meth:`update_status`.
    """

    def __init__(
        self,
        store: DocumentStore,
        catalog: PropertyCatalog,
        notifier: Notifier | None = None,
        config: DashboardConfig | None = None,
        collection: str = "applications",
    ) -> None:
        self.store = store
        self.catalog = catalog
        self.notifier = notifier or Notifier()
        self.config = config or DashboardConfig()
        self.collection = collection
        self.applications: list[Application] = []

    async def load(self, user_id: str | None = None, now: datetime | None = None) -> bool:
        """Fetch applications and replace the in-memory list.

        Parameters
        ----------
        user_id : str | None
            Restrict to one submitter ("my applications"); ``None`` loads
            the whole collection for the admin dashboard.
        now : datetime | None
            Substituted for missing or malformed creation timestamps.

        Returns
        -------
        bool
            False if the store call failed; the previous list is kept.
        """
        now = now or datetime.now()
        where = ("userId", user_id) if user_id is not None else None
        try:
            documents = await self.store.query_all(self.collection, where)
        except StoreError as exc:
            logger.error(
                "Error fetching applications (%s)",
                exc.code,
                exc_info=exc,
                extra={"collection": self.collection, "error_code": exc.code},
            )
            self.notifier.error(
                "Failed to load applications" if user_id is not None else "Failed to load dashboard data"
            )
            return False

        applications = []
        for document in documents:
            try:
                application = application_from_document(document, now)
            except ValueError:
                logger.warning(
                    "Skipping application %s with unknown status %r",
                    document.id,
                    document.data.get("status"),
                )
                continue
            if application.created_at_estimated:
                logger.debug("Application %s has no usable createdAt; using load time", document.id)
            applications.append(application)

        self.applications = sort_recent_first(applications)
        logger.info("Loaded %d applications", len(self.applications))
        return True

    def summary(self, now: datetime | None = None) -> DashboardSummary:
        """Headline counts over the loaded list."""
        return compute_summary(
            self.applications,
            self.catalog,
            now or datetime.now(),
            week_days=self.config.week_days,
            month_days=self.config.month_days,
        )

    def trend(self, now: datetime | None = None) -> list[TrendPoint]:
        """Daily counts for the configured number of days, oldest first."""
        return build_trend(self.applications, now or datetime.now(), days=self.config.trend_days)

    def search(self, query: str) -> list[Application]:
        return filter_applications(self.applications, query)

    def recent(self, query: str = "", limit: int | None = None) -> list[Application]:
        """The newest matching applications, as shown in the dashboard table."""
        if limit is None:
            limit = self.config.recent_limit
        return self.search(query)[: max(limit, 0)]

    def find(self, application_id: str) -> Application | None:
        for application in self.applications:
            if application.application_id == application_id:
                return application
        return None

    async def update_status(self, application_id: str, status: ApplicationStatus | str) -> bool:
        """Approve or reject an application.

        Writes the new status and an update timestamp, then patches the
        matching entry of :attr:`applications`. The list is untouched when
        the write fails.

        Parameters
        ----------
        application_id : str
            Application to decide.
        status : ApplicationStatus | str
            ``approved`` or ``rejected``.

        Returns
        -------
        bool
            True if the store accepted the change.

        Raises
        ------
        InvalidEntityStateError
            If ``status`` is not a decision status.
        """
        try:
            target = ApplicationStatus(status)
        except ValueError:
            raise InvalidEntityStateError(f"Unknown application status {status!r}") from None
        if target not in DECISION_STATUSES:
            raise InvalidEntityStateError(f"Cannot move an application to {target.value}")

        cached = self.find(application_id)
        if cached is not None and not cached.status.can_transition_to(target):
            logger.warning(
                "Application %s is already %s; refusing %s",
                application_id,
                cached.status.value,
                target.value,
            )
            self.notifier.error(f"Application is already {cached.status.value}")
            return False

        expected = {"status": ApplicationStatus.PENDING.value} if self.config.guard_transitions else None
        try:
            await self.store.update(
                self.collection,
                application_id,
                {"status": target.value, "updatedAt": SERVER_TIMESTAMP},
                expected=expected,
            )
        except StoreError as exc:
            logger.error(
                "Error updating application %s (%s)",
                application_id,
                exc.code,
                exc_info=exc,
                extra={"application_id": application_id, "error_code": exc.code},
            )
            self.notifier.error("Failed to update application status")
            return False

        now = datetime.now()
        self.applications = [
            dataclasses.replace(app, status=target, updated_at=now)
            if app.application_id == application_id
            else app
            for app in self.applications
        ]
        self.notifier.success(f"Application {target.value}!")
        return True
