"""Property browsing with availability derived from approved applications."""

import logging
from dataclasses import dataclass

from rentals.catalog import PropertyCatalog
from rentals.exceptions import StoreError
from rentals.models import ApplicationStatus, Property
from rentals.notifications import Notifier
from rentals.store import DocumentStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PropertyFilters:
    """Listing filters; empty values match everything."""

    search: str = ""
    city: str = ""
    min_price: int | None = None
    max_price: int | None = None
    beds: int | None = None  # Minimum bedrooms


@dataclass(frozen=True)
class ListingEntry:
    property: Property
    available: bool


class PropertyListing:
    """Browse the catalog, marking properties that already have a tenant."""

    def __init__(
        self,
        store: DocumentStore,
        catalog: PropertyCatalog,
        notifier: Notifier | None = None,
        collection: str = "applications",
    ) -> None:
        self.store = store
        self.catalog = catalog
        self.notifier = notifier or Notifier()
        self.collection = collection

    async def unavailable_property_ids(self) -> set[str]:
        """Ids of properties with at least one approved application.

        A store failure is logged and treated as "nothing taken" so the
        listing still renders.
        """
        try:
            documents = await self.store.query_all(
                self.collection, ("status", ApplicationStatus.APPROVED.value)
            )
        except StoreError as exc:
            logger.error(
                "Error fetching approved applications (%s)",
                exc.code,
                exc_info=exc,
                extra={"collection": self.collection, "error_code": exc.code},
            )
            self.notifier.error("Failed to load property availability")
            return set()
        return {str(doc.data["propertyId"]) for doc in documents if doc.data.get("propertyId")}

    def browse(
        self,
        filters: PropertyFilters | None = None,
        unavailable: set[str] | frozenset[str] = frozenset(),
    ) -> list[ListingEntry]:
        """Filter the catalog, keeping catalog order."""
        filters = filters or PropertyFilters()
        search = filters.search.lower()
        city = filters.city.lower()

        entries = []
        for prop in self.catalog:
            if search and search not in prop.title.lower() and search not in prop.city.lower():
                continue
            if city and city not in prop.city.lower():
                continue
            if filters.min_price is not None and prop.rent < filters.min_price:
                continue
            if filters.max_price is not None and prop.rent > filters.max_price:
                continue
            if filters.beds is not None and prop.beds < filters.beds:
                continue
            entries.append(ListingEntry(property=prop, available=prop.property_id not in unavailable))
        return entries
