"""Command-line front end for listings, applications and the dashboard."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from datetime import datetime
from pathlib import Path

from rentals.catalog import PropertyCatalog
from rentals.config import RentalsConfig
from rentals.exceptions import EntityNotFoundError, RentalsError
from rentals.generators import ApplicationGenerator
from rentals.logging import setup_logging
from rentals.models import ApplicationDraft, ApplicationStatus, status_display
from rentals.notifications import Notifier, NoticeLevel
from rentals.services import (
    ApplicationAggregator,
    ApplicationSubmission,
    PropertyFilters,
    PropertyListing,
)
from rentals.store import JsonFileDocumentStore

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rentals",
        description="Browse rental listings, submit applications and review them",
    )
    parser.add_argument(
        "--store",
        type=Path,
        default=None,
        help="JSON file holding the applications (default: $RENTALS_STORE_PATH or rentals-store.json)",
    )
    parser.add_argument(
        "--catalog",
        type=Path,
        default=None,
        help="Property catalog JSON (default: bundled catalog)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Log level (default: $LOG_LEVEL or INFO)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    listings = sub.add_parser("listings", help="List properties")
    listings.add_argument("--search", default="", help="Match title or city")
    listings.add_argument("--city", default="", help="City contains")
    listings.add_argument("--min-price", type=int, default=None)
    listings.add_argument("--max-price", type=int, default=None)
    listings.add_argument("--beds", type=int, default=None, help="Minimum bedrooms")
    listings.add_argument("--cities", action="store_true", help="Only list the cities in the catalog")

    apply = sub.add_parser("apply", help="Submit a rental application")
    apply.add_argument("property_id")
    apply.add_argument("--user", required=True, help="Authenticated user id")
    apply.add_argument("--name", default="", dest="full_name")
    apply.add_argument("--email", default="")
    apply.add_argument("--phone", default="")
    apply.add_argument("--income", default="", dest="monthly_income")
    apply.add_argument("--move-in", default="", dest="move_in_date", help="YYYY-MM-DD")
    apply.add_argument("--notes", default="")

    mine = sub.add_parser("mine", help="Show one user's applications")
    mine.add_argument("user_id")

    dashboard = sub.add_parser("dashboard", help="Admin dashboard")
    dashboard.add_argument("--search", default="", help="Filter by name, email or property")
    dashboard.add_argument("--limit", type=int, default=None, help="Rows in the recent table")

    for name in ("approve", "reject"):
        decide = sub.add_parser(name, help=f"{name.capitalize()} a pending application")
        decide.add_argument("application_id")

    seed = sub.add_parser("seed", help="Fill the store with demo applications")
    seed.add_argument("--count", type=int, default=40)
    seed.add_argument("--days", type=int, default=30, help="Spread creation dates over N days")
    seed.add_argument("--seed", type=int, default=None, help="Random seed")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    notifier = Notifier()

    try:
        config = RentalsConfig.from_env()
        setup_logging(level=args.log_level or config.log_level, format_type=config.log_format)
        store = JsonFileDocumentStore(args.store or config.store.path)
        catalog = PropertyCatalog.from_json(args.catalog or config.catalog.path)
        ok = asyncio.run(_dispatch(args, config, store, catalog, notifier))
    except RentalsError as exc:
        ok = False
        print(f"Error: {exc}", file=sys.stderr)

    _print_notices(notifier)
    return 0 if ok else 1


async def _dispatch(
    args: argparse.Namespace,
    config: RentalsConfig,
    store: JsonFileDocumentStore,
    catalog: PropertyCatalog,
    notifier: Notifier,
) -> bool:
    collection = config.store.collection

    if args.command == "listings":
        if args.cities:
            for city in catalog.cities():
                print(city)
            return True
        listing = PropertyListing(store, catalog, notifier, collection=collection)
        filters = PropertyFilters(
            search=args.search,
            city=args.city,
            min_price=args.min_price,
            max_price=args.max_price,
            beds=args.beds,
        )
        return _print_listings(listing, filters, await listing.unavailable_property_ids())

    if args.command == "apply":
        try:
            prop = catalog.get(args.property_id)
        except EntityNotFoundError:
            notifier.error("Property not found")
            return False
        draft = ApplicationDraft(
            full_name=args.full_name,
            email=args.email,
            phone=args.phone,
            monthly_income=args.monthly_income,
            move_in_date=args.move_in_date,
            notes=args.notes,
        )
        result = await ApplicationSubmission(store, notifier, collection).submit(draft, prop, args.user)
        for field_name, message in result.errors.items():
            print(f"  {field_name}: {message}")
        if result.ok:
            print(f"Application ID: {result.application_id}")
        return result.ok

    aggregator = ApplicationAggregator(store, catalog, notifier, config.dashboard, collection)

    if args.command == "mine":
        if not await aggregator.load(user_id=args.user_id):
            return False
        return _print_my_applications(aggregator)

    if args.command == "dashboard":
        if not await aggregator.load():
            return False
        return _print_dashboard(aggregator, args.search, args.limit)

    if args.command in ("approve", "reject"):
        if not await aggregator.load():
            return False
        target = ApplicationStatus.APPROVED if args.command == "approve" else ApplicationStatus.REJECTED
        return await aggregator.update_status(args.application_id, target)

    if args.command == "seed":
        return await _seed(store, catalog, collection, args.count, args.days, args.seed or config.seed)

    raise ValueError(f"Unknown command {args.command}")


async def _seed(
    store: JsonFileDocumentStore,
    catalog: PropertyCatalog,
    collection: str,
    count: int,
    days: int,
    seed: int | None,
) -> bool:
    generator = ApplicationGenerator(seed=seed)
    properties = list(catalog)
    for document in generator.generate_batch(properties, count, days_back=days):
        await store.create(collection, document)
    logger.info("Seeded %d applications into %s", count, store.path)
    print(f"Seeded {count} applications into {store.path}")
    return True


def _print_listings(listing: PropertyListing, filters: PropertyFilters, unavailable: set[str]) -> bool:
    entries = listing.browse(filters, unavailable)
    if not entries:
        print("No properties found matching your criteria.")
        return True
    for entry in entries:
        prop = entry.property
        availability = "Apply Now" if entry.available else "Not Available"
        print(
            f"[{prop.property_id}] {prop.title} - {prop.city} - ${prop.rent}/month - "
            f"{prop.beds} beds, {prop.baths:g} baths - {availability}"
        )
    return True


def _print_my_applications(aggregator: ApplicationAggregator) -> bool:
    if not aggregator.applications:
        print("You have not submitted any applications yet.")
        return True
    for app in aggregator.applications:
        display = status_display(app.status)
        applied = "N/A" if app.created_at_estimated else f"{app.created_at:%Y-%m-%d}"
        print(f"{display.icon} {app.property_title} [{display.label}]")
        print(f"    Applied: {applied}  Move-in: {app.move_in_date or 'N/A'}  Income: ${app.monthly_income}")
        print(f"    {display.message}")
    return True


def _print_dashboard(aggregator: ApplicationAggregator, search: str, limit: int | None) -> bool:
    now = datetime.now()
    summary = aggregator.summary(now)
    print("Dashboard")
    print("=" * 60)
    print(f"Total applications: {summary.total_applications}")
    print(f"Today:              {summary.today_applications}")
    print(f"Last 7 days:        {summary.week_applications}")
    print(f"Last 30 days:       {summary.month_applications}")

    print("\nApplications trend")
    for point in aggregator.trend(now):
        print(f"  {point.label:>7} {'#' * point.applications} {point.applications}")

    print("\nAverage rent by city")
    for city, rent in summary.avg_rent_by_city.items():
        print(f"  {city:<20} ${rent}")

    print("\nRecent applications")
    rows = aggregator.recent(search, limit)
    if not rows:
        print("  No applications found.")
    for app in rows:
        print(
            f"  {app.application_id}  {app.full_name:<24} {app.email:<30} "
            f"{app.property_title:<30} {app.status.value}"
        )
    return True


def _print_notices(notifier: Notifier) -> None:
    for notice in notifier.drain():
        stream = sys.stderr if notice.level is NoticeLevel.ERROR else sys.stdout
        print(notice.message, file=stream)


if __name__ == "__main__":
    sys.exit(main())
