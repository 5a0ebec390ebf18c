"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from cafe_ledger.domain.repository.customer_repository import CustomerRepository
from cafe_ledger.domain.repository.product_repository import ProductRepository
from cafe_ledger.domain.repository.sale_repository import SaleRepository
from cafe_ledger.domain.service.ledger_service import LedgerService
from cafe_ledger.infrastructure.persistence.key_value_store import (
    JsonFileKeyValueStore,
    KeyValueStore,
)
from cafe_ledger.infrastructure.persistence.snapshot_repositories import (
    SnapshotCustomerRepository,
    SnapshotProductRepository,
    SnapshotSaleRepository,
)
from cafe_ledger.infrastructure.settings import Settings

logger = logging.getLogger(__name__)


@dataclass
class CafeLedgerApp:
    """The application's store object: one instance per process.

    Created at start-up, loaded from the key-value store once, and
    flushed by the repositories on every committed change.
    """

    settings: Settings
    product_repo: ProductRepository
    sale_repo: SaleRepository
    customer_repo: CustomerRepository

    @property
    def ledger(self) -> LedgerService:
        return LedgerService(self.product_repo, self.sale_repo)


def build_app(settings: Settings | None = None, store: KeyValueStore | None = None) -> CafeLedgerApp:
    settings = settings or Settings()
    store = store or JsonFileKeyValueStore(settings.data_dir)
    logger.debug("Opening café ledger (data dir %s)", settings.data_dir)
    return CafeLedgerApp(
        settings=settings,
        product_repo=SnapshotProductRepository(store, settings.products_key),
        sale_repo=SnapshotSaleRepository(store, settings.sales_key),
        customer_repo=SnapshotCustomerRepository(store, settings.customers_key),
    )
