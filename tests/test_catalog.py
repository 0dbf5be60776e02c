"""Tests for the property catalog."""

import json
from pathlib import Path

import pytest

from rentals.catalog import PropertyCatalog
from rentals.exceptions import ConfigurationError, EntityNotFoundError
from rentals.models import Property


class TestPropertyCatalog:
    def test_get(self, catalog: PropertyCatalog, sample_property: Property) -> None:
        assert catalog.get("prop-001") is sample_property

    def test_get_missing(self, catalog: PropertyCatalog) -> None:
        with pytest.raises(EntityNotFoundError, match="prop-999"):
            catalog.get("prop-999")

    def test_keeps_order(self, catalog: PropertyCatalog) -> None:
        assert [p.property_id for p in catalog] == ["prop-001", "prop-002", "prop-003", "prop-004"]

    def test_len_and_contains(self, catalog: PropertyCatalog) -> None:
        assert len(catalog) == 4
        assert "prop-002" in catalog
        assert "prop-999" not in catalog

    def test_cities(self, catalog: PropertyCatalog) -> None:
        assert catalog.cities() == ["Makati", "Quezon City", "Taguig"]


class TestFromJson:
    def test_load(self, tmp_path: Path) -> None:
        path = tmp_path / "properties.json"
        path.write_text(
            json.dumps([{"id": 7, "title": "Loft", "city": "Pasig", "rent": "1500", "beds": 1, "baths": 1.5}]),
            encoding="utf-8",
        )

        catalog = PropertyCatalog.from_json(path)

        prop = catalog.get("7")
        assert prop.rent == 1500
        assert prop.baths == 1.5
        assert prop.image == ""

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError):
            PropertyCatalog.from_json(tmp_path / "nope.json")

    def test_not_an_array(self, tmp_path: Path) -> None:
        path = tmp_path / "properties.json"
        path.write_text("{}", encoding="utf-8")

        with pytest.raises(ConfigurationError, match="array"):
            PropertyCatalog.from_json(path)

    def test_bad_entry(self, tmp_path: Path) -> None:
        path = tmp_path / "properties.json"
        path.write_text(json.dumps([{"id": "1", "title": "No rent", "city": "Pasig"}]), encoding="utf-8")

        with pytest.raises(ConfigurationError, match="Invalid property entry"):
            PropertyCatalog.from_json(path)

    def test_bundled_catalog(self) -> None:
        catalog = PropertyCatalog.default()

        assert len(catalog) > 0
        assert len({p.property_id for p in catalog}) == len(catalog)
        assert all(p.rent > 0 for p in catalog)
