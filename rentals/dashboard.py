"""Dashboard statistics over an in-memory list of applications.

Every function here is pure: the caller supplies "now" and the lists, so
results are reproducible in tests.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING, Any, Iterable

if TYPE_CHECKING:
    from rentals.models import Application, Property

DAY = timedelta(days=1)


@dataclass
class DashboardSummary:
    """Headline counts shown on the admin dashboard."""

    total_applications: int = 0
    today_applications: int = 0
    week_applications: int = 0
    month_applications: int = 0
    avg_rent_by_city: dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class TrendPoint:
    """Applications created during one calendar day."""

    day: date
    label: str  # e.g. "Oct 5"
    applications: int


def start_of_day(moment: datetime) -> datetime:
    """Local midnight of the day containing ``moment``."""
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


def coerce_timestamp(value: Any, now: datetime) -> tuple[datetime, bool]:
    """Turn a stored timestamp into a datetime.

    Returns the datetime and whether ``now`` had to be substituted because
    the stored value was missing or malformed. Timezone-aware values are
    converted to naive local time so they compare with ``now``.
    """
    if isinstance(value, datetime):
        return _naive_local(value), False
    if isinstance(value, date):
        return datetime.combine(value, datetime.min.time()), False
    if isinstance(value, str) and value.strip():
        try:
            return _naive_local(datetime.fromisoformat(value.strip())), False
        except ValueError:
            pass
    return now, True


def _naive_local(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment
    return moment.astimezone().replace(tzinfo=None)


def sort_recent_first(applications: Iterable[Application]) -> list[Application]:
    """Order applications by creation time, newest first."""
    return sorted(applications, key=lambda app: app.created_at, reverse=True)


def average_rent_by_city(properties: Iterable[Property]) -> dict[str, int]:
    """Average catalog rent per city, rounded half up to a whole unit."""
    totals: dict[str, list[int]] = defaultdict(lambda: [0, 0])
    for prop in properties:
        bucket = totals[prop.city]
        bucket[0] += prop.rent
        bucket[1] += 1

    return {
        city: int((Decimal(total) / Decimal(count)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
        for city, (total, count) in totals.items()
    }


def compute_summary(
    applications: list[Application],
    properties: Iterable[Property],
    now: datetime,
    week_days: int = 7,
    month_days: int = 30,
) -> DashboardSummary:
    """Compute the dashboard headline counts.

    Parameters
    ----------
    applications : list[Application]
        Normalized applications.
    properties : Iterable[Property]
        Catalog used for the per-city rent averages.
    now : datetime
        Reference moment.
    week_days, month_days : int
        Length of the rolling windows, counted back from ``now``.

    Returns
    -------
    DashboardSummary
        Counts and averages.
    """
    today = start_of_day(now)
    week_ago = now - week_days * DAY
    month_ago = now - month_days * DAY

    return DashboardSummary(
        total_applications=len(applications),
        today_applications=sum(1 for app in applications if app.created_at >= today),
        week_applications=sum(1 for app in applications if app.created_at >= week_ago),
        month_applications=sum(1 for app in applications if app.created_at >= month_ago),
        avg_rent_by_city=average_rent_by_city(properties),
    )


def build_trend(applications: list[Application], now: datetime, days: int = 14) -> list[TrendPoint]:
    """Daily application counts for the ``days`` days ending today, oldest first."""
    today = start_of_day(now)
    points = []
    for offset in range(days - 1, -1, -1):
        day_start = today - offset * DAY
        day_end = day_start + DAY
        count = sum(1 for app in applications if day_start <= app.created_at < day_end)
        points.append(
            TrendPoint(
                day=day_start.date(),
                label=f"{day_start:%b} {day_start.day}",
                applications=count,
            )
        )
    return points


def filter_applications(applications: list[Application], query: str) -> list[Application]:
    """Case-insensitive substring search over name, email and property title."""
    needle = query.lower()
    if not needle:
        return list(applications)
    return [
        app
        for app in applications
        if needle in app.full_name.lower()
        or needle in app.email.lower()
        or needle in app.property_title.lower()
    ]
