"""Domain service: Ledger Reconciliation.

Keeps the Product store and the Sale ledger consistent as sales are
recorded, edited and deleted.  Every operation uses the two-phase
approach:

  Phase 1, load and validate: resolve every entity and check every
            precondition.  Fails fast before any mutation.
  Phase 2, mutate and persist: nothing in this phase can be rejected.
            The product is written first; if the sale write then fails
            the product is written back as it was before re-raising, so
            a caller never observes a product updated without its sale.

Unit prices are frozen on the sale when it is recorded.  Edits price the
quantity delta at that frozen unit price, which keeps
``product.revenue == sum(sale.total)`` exact across edits and deletes.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date
from typing import Callable

from cafe_ledger.domain.exceptions import (
    DomainException,
    ProductNotFoundError,
    SaleNotFoundError,
)
from cafe_ledger.domain.model.product import Product
from cafe_ledger.domain.model.sale import Sale
from cafe_ledger.domain.model.value_objects import Quantity
from cafe_ledger.domain.repository.product_repository import ProductRepository
from cafe_ledger.domain.repository.sale_repository import SaleRepository

logger = logging.getLogger(__name__)


class LedgerService:

    def __init__(
        self,
        product_repo: ProductRepository,
        sale_repo: SaleRepository,
    ) -> None:
        self._product_repo = product_repo
        self._sale_repo = sale_repo

    # --- Commands ---------------------------------------------------------------

    def record_sale(
        self,
        product_id: str,
        quantity: int,
        customer: str,
        sale_date: date,
    ) -> Sale:
        """Record a sale and take its quantity out of the product's stock."""
        try:
            # Phase 1: load and validate
            product = self._get_product(product_id)
            qty = Quantity(quantity)
            product.ensure_in_stock(qty.value)
        except DomainException as exc:
            logger.warning("Rejected sale of product %s: %s", product_id, exc)
            raise

        # Phase 2: mutate and persist
        sale = Sale(
            id=self._sale_repo.next_id(),
            product_id=product.id,
            product_name=product.name,
            quantity=qty,
            unit_price=product.price,  # <-- price snapshot
            customer=customer.strip(),
            sale_date=sale_date,
        )
        original = replace(product)
        product.record_sale(qty.value, sale.total)
        self._product_repo.save(product)
        self._write_sale_or_restore(original, lambda: self._sale_repo.save(sale))

        logger.info(
            "Recorded sale %s: %d x %s for %s",
            sale.id, qty.value, product.name, sale.total,
        )
        return sale

    def edit_sale(
        self,
        sale_id: str,
        new_quantity: int,
        new_customer: str,
        new_date: date,
    ) -> Sale:
        """Change a sale's quantity, customer and date.

        The product absorbs only the difference between the old and new
        quantity, priced at the sale's frozen unit price.
        """
        try:
            # Phase 1: load and validate
            sale = self._get_sale(sale_id)
            product = self._get_product(sale.product_id)
            qty = Quantity(new_quantity)
            delta = qty.value - sale.quantity.value
            if delta > 0:
                product.ensure_in_stock(delta)
            elif delta < 0:
                product.ensure_reversible(-delta, sale.unit_price * -delta)
        except DomainException as exc:
            logger.warning("Rejected edit of sale %s: %s", sale_id, exc)
            raise

        # Phase 2: mutate and persist
        original = replace(product)
        if delta > 0:
            product.record_sale(delta, sale.unit_price * delta)
        elif delta < 0:
            product.reverse_sale(-delta, sale.unit_price * -delta)
        sale.revise(qty, new_customer, new_date)

        self._product_repo.save(product)
        self._write_sale_or_restore(original, lambda: self._sale_repo.save(sale))

        logger.info(
            "Edited sale %s: quantity %+d, total now %s", sale.id, delta, sale.total
        )
        return sale

    def delete_sale(self, sale_id: str) -> None:
        """Remove a sale and return its effect on the product.

        A sale whose product no longer exists is removed without any
        product adjustment.
        """
        try:
            # Phase 1: load and validate
            sale = self._get_sale(sale_id)
            product = self._product_repo.get_by_id(sale.product_id)
            if product is not None:
                product.ensure_reversible(sale.quantity.value, sale.total)
        except DomainException as exc:
            logger.warning("Rejected deletion of sale %s: %s", sale_id, exc)
            raise

        # Phase 2: mutate and persist
        if product is not None:
            original = replace(product)
            product.reverse_sale(sale.quantity.value, sale.total)
            self._product_repo.save(product)
            self._write_sale_or_restore(original, lambda: self._sale_repo.delete(sale.id))
        else:
            logger.info(
                "Sale %s references missing product %s; removing without reversal",
                sale.id, sale.product_id,
            )
            self._sale_repo.delete(sale.id)

        logger.info("Deleted sale %s (%d x %s)", sale.id, sale.quantity.value, sale.product_name)

    def add_stock(self, product_id: str, amount: int) -> Product:
        """Receive ``amount`` new units of a product."""
        try:
            product = self._get_product(product_id)
            product.add_stock(amount)
        except DomainException as exc:
            logger.warning("Rejected restock of product %s: %s", product_id, exc)
            raise

        self._product_repo.save(product)
        logger.info("Added %d units to %s (now %d)", amount, product.name, product.quantity)
        return product

    # --- Queries ----------------------------------------------------------------

    def list_sales(self) -> list[Sale]:
        return self._sale_repo.list_all()

    def sales_for_product(self, product_id: str) -> list[Sale]:
        return self._sale_repo.list_by_product(product_id)

    # --- Internal helpers -------------------------------------------------------

    def _write_sale_or_restore(self, original: Product, write_sale: Callable[[], None]) -> None:
        """Run ``write_sale``; if it fails, put ``original`` back and re-raise."""
        try:
            write_sale()
        except Exception:
            logger.error(
                "Sale write failed; restoring product %s to its previous state", original.id
            )
            self._product_repo.save(original)
            raise

    def _get_product(self, product_id: str) -> Product:
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise ProductNotFoundError(f"Product with ID '{product_id}' not found")
        return product

    def _get_sale(self, sale_id: str) -> Sale:
        sale = self._sale_repo.get_by_id(sale_id)
        if sale is None:
            raise SaleNotFoundError(f"Sale #{sale_id} not found")
        return sale
