"""Tests for the startup LoadCatalog use case."""

import json

from vending.application.load_catalog import LoadCatalogHandler
from vending.domain.model.product import Product
from vending.domain.model.value_objects import Money
from vending.infrastructure.persistence.json_catalog_repository import (
    JsonCatalogRepository,
)
from tests.fakes import FakeCatalogRepository, FakeSeedSource, counter_ids, euro_coins


def _handler(repo: FakeCatalogRepository, seed: FakeSeedSource) -> LoadCatalogHandler:
    return LoadCatalogHandler(repo, seed, euro_coins(), id_factory=counter_ids())


class TestLoadCatalog:

    def test_uses_stored_catalog(self):
        stored = [Product(id="7", name="Tea", price=Money(120), stock=2, max_stock=5)]
        repo, seed = FakeCatalogRepository(stored), FakeSeedSource()

        catalog = _handler(repo, seed).handle()

        assert [p.name for p in catalog.list()] == ["Tea"]
        assert seed.fetch_count == 0
        assert repo.save_count == 0

    def test_empty_stored_catalog_is_respected(self):
        repo, seed = FakeCatalogRepository([]), FakeSeedSource()
        catalog = _handler(repo, seed).handle()
        assert len(catalog) == 0
        assert seed.fetch_count == 0

    def test_seeds_and_saves_when_nothing_stored(self):
        repo, seed = FakeCatalogRepository(), FakeSeedSource()

        catalog = _handler(repo, seed).handle()

        assert len(catalog) == 4
        assert seed.fetch_count == 1
        assert [p.id for p in repo.stored] == ["1", "2", "3", "4"]

    def test_unreadable_store_falls_back_to_seed(self):
        repo = FakeCatalogRepository(fail_on_load=True)
        seed = FakeSeedSource()
        catalog = _handler(repo, seed).handle()
        assert len(catalog) == 4

    def test_invalid_stored_data_falls_back_to_seed(self):
        stored = [Product(id="7", name="Tea", price=Money(121), stock=2, max_stock=5)]
        repo, seed = FakeCatalogRepository(stored), FakeSeedSource()
        catalog = _handler(repo, seed).handle()
        assert "7" not in catalog
        assert seed.fetch_count == 1

    def test_seed_save_failure_is_not_fatal(self):
        repo = FakeCatalogRepository(fail_on_save=True)
        catalog = _handler(repo, FakeSeedSource()).handle()
        assert len(catalog) == 4
        assert repo.stored is None

    def test_stored_record_with_non_text_name_falls_back_to_seed(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text(json.dumps([
            {"id": "1", "name": 5, "price": 150, "quantity": 3, "icon": "🥤", "maxQuantity": 15},
        ]), encoding="utf-8")
        seed = FakeSeedSource()

        catalog = LoadCatalogHandler(
            JsonCatalogRepository(path), seed, euro_coins(), id_factory=counter_ids()
        ).handle()

        assert len(catalog) == 4
        assert seed.fetch_count == 1
        assert catalog.require("1").name == "Espresso"
