"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from vending.application.load_catalog import LoadCatalogHandler
from vending.application.transaction_engine import TransactionEngine
from vending.domain.model.catalog import Catalog
from vending.domain.model.coin import DenominationSet
from vending.domain.service.change_calculator import ChangeCalculator
from vending.domain.service.coin_acceptor import CoinAcceptor
from vending.infrastructure.persistence.json_catalog_repository import (
    JsonCatalogRepository,
)
from vending.infrastructure.seed.static_seed_source import StaticSeedSource
from vending.infrastructure.settings import Settings, load_settings


def denominations(settings: Settings | None = None) -> DenominationSet:
    settings = settings or load_settings()
    return DenominationSet(settings.DENOMINATIONS)


def catalog_repository(settings: Settings | None = None) -> JsonCatalogRepository:
    settings = settings or load_settings()
    return JsonCatalogRepository(settings.catalog_path)


def load_catalog(settings: Settings | None = None) -> Catalog:
    settings = settings or load_settings()
    handler = LoadCatalogHandler(
        catalog_repo=catalog_repository(settings),
        seed_source=StaticSeedSource(max_stock=settings.DEFAULT_MAX_STOCK),
        denominations=denominations(settings),
    )
    return handler.handle()


def transaction_engine(
    catalog: Catalog,
    settings: Settings | None = None,
) -> TransactionEngine:
    settings = settings or load_settings()
    calculator = ChangeCalculator(catalog.denominations)
    return TransactionEngine(
        catalog=catalog,
        coin_acceptor=CoinAcceptor(catalog.denominations, calculator),
        change_calculator=calculator,
        catalog_repo=catalog_repository(settings),
    )
