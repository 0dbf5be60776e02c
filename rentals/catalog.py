"""Static property catalog."""

import json
import logging
from pathlib import Path
from typing import Any, Iterable, Iterator

from rentals.config import DEFAULT_CATALOG_PATH
from rentals.exceptions import ConfigurationError, EntityNotFoundError
from rentals.models import Property

logger = logging.getLogger(__name__)


class PropertyCatalog:
    """Ordered, read-only list of rental properties.

    Loaded once at startup; nothing in the package writes to it.
    """

    def __init__(self, properties: Iterable[Property]) -> None:
        self._properties: tuple[Property, ...] = tuple(properties)
        self._by_id = {prop.property_id: prop for prop in self._properties}

    @classmethod
    def from_json(cls, path: str | Path) -> "PropertyCatalog":
        """Load a catalog from a JSON array of property objects.

        Parameters
        ----------
        path : str | Path
            File with ``id``, ``title``, ``city``, ``rent``, ``beds``,
            ``baths`` and ``image`` keys per entry.

        Returns
        -------
        PropertyCatalog
            Loaded catalog.

        Raises
        ------
        ConfigurationError
            If the file is missing or malformed.
        """
        path = Path(path)
        try:
            with open(path, encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            raise ConfigurationError(f"Cannot load property catalog {path}: {exc}") from exc

        if not isinstance(raw, list):
            raise ConfigurationError(f"Property catalog {path} must hold a JSON array")

        catalog = cls(_property_from_json(entry, path) for entry in raw)
        logger.info("Loaded %d properties from %s", len(catalog), path)
        return catalog

    @classmethod
    def default(cls) -> "PropertyCatalog":
        """The catalog bundled with the package."""
        return cls.from_json(DEFAULT_CATALOG_PATH)

    def get(self, property_id: str) -> Property:
        """Return the property with ``property_id``."""
        try:
            return self._by_id[property_id]
        except KeyError:
            raise EntityNotFoundError(f"Property {property_id} not found") from None

    def cities(self) -> list[str]:
        """Sorted unique cities."""
        return sorted({prop.city for prop in self._properties})

    def __iter__(self) -> Iterator[Property]:
        return iter(self._properties)

    def __len__(self) -> int:
        return len(self._properties)

    def __contains__(self, property_id: object) -> bool:
        return property_id in self._by_id


def _property_from_json(entry: Any, path: Path) -> Property:
    try:
        return Property(
            property_id=str(entry["id"]),
            title=entry["title"],
            city=entry["city"],
            rent=int(entry["rent"]),
            beds=int(entry.get("beds", 0)),
            baths=float(entry.get("baths", 0)),
            image=entry.get("image", ""),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise ConfigurationError(f"Invalid property entry in {path}: {entry!r}") from exc
