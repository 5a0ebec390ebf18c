"""Application service: Update Product use case."""

from __future__ import annotations

import logging

from cafe_ledger.application.parsing import parse_non_negative_int, parse_price
from cafe_ledger.domain.exceptions import ProductNotFoundError, ValidationError
from cafe_ledger.domain.model.product import Product
from cafe_ledger.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class UpdateProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        product_id: str,
        name: str | None = None,
        price: str | None = None,
        quantity: str | int | None = None,
    ) -> Product:
        """Edit a product's name, price and/or stock level.

        This does NOT affect any existing sales, which captured a
        price snapshot when they were recorded.
        """
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise ProductNotFoundError(f"Product with ID '{product_id}' not found")

        # Parse everything before touching the product.
        new_price = parse_price(price) if price is not None else None
        new_quantity = (
            parse_non_negative_int(quantity, "stock quantity")
            if quantity is not None
            else None
        )
        if name is not None:
            clash = self._product_repo.get_by_name(name.strip())
            if clash is not None and clash.id != product.id:
                raise ValidationError(f"Product '{name.strip()}' already exists")

        if name is not None:
            product.rename(name)
        if new_price is not None:
            product.update_price(new_price)
        if new_quantity is not None:
            product.set_quantity(new_quantity)

        self._product_repo.save(product)
        logger.info("Updated product %s '%s'", product.id, product.name)
        return product
