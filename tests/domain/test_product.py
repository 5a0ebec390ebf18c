"""Unit tests for the Product aggregate."""

import pytest

from cafe_ledger.domain.exceptions import (
    InsufficientStockError,
    InvalidAmountError,
    ValidationError,
)
from cafe_ledger.domain.model.product import Product
from cafe_ledger.domain.model.value_objects import Money


def _espresso(quantity: int = 20) -> Product:
    return Product.create("1", "Espresso", Money.of("3.00"), quantity)


class TestProductCreate:

    def test_starts_with_empty_totals(self):
        p = _espresso()
        assert p.quantity == 20
        assert p.total_sold == 0
        assert p.revenue == Money.zero()

    def test_strips_name(self):
        p = Product.create("1", "  Tea ", Money.of("2"), 5)
        assert p.name == "Tea"

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError, match="name is required"):
            Product.create("1", "   ", Money.of("2"), 5)

    def test_negative_stock_rejected(self):
        with pytest.raises(ValidationError, match="non-negative"):
            Product.create("1", "Tea", Money.of("2"), -1)


class TestProductDirectEdits:

    def test_update_price(self):
        p = _espresso()
        p.update_price(Money.of("3.50"))
        assert p.price == Money.of("3.50")

    def test_update_price_other_currency_rejected(self):
        p = _espresso()
        with pytest.raises(ValidationError, match="Cannot reprice"):
            p.update_price(Money.of("3", "EUR"))

    def test_set_quantity(self):
        p = _espresso()
        p.set_quantity(7)
        assert p.quantity == 7

    def test_set_negative_quantity_rejected(self):
        p = _espresso()
        with pytest.raises(ValidationError):
            p.set_quantity(-2)
        assert p.quantity == 20

    def test_rename_blank_rejected(self):
        p = _espresso()
        with pytest.raises(ValidationError):
            p.rename("")
        assert p.name == "Espresso"


class TestProductLowStock:

    def test_at_threshold_is_low(self):
        assert _espresso(quantity=5).is_low_stock()

    def test_above_threshold_is_not_low(self):
        assert not _espresso(quantity=6).is_low_stock()

    def test_custom_threshold(self):
        assert _espresso(quantity=8).is_low_stock(threshold=10)


class TestProductLedgerMovements:

    def test_record_sale_moves_stock_into_totals(self):
        p = _espresso()
        p.record_sale(4, Money.of("12.00"))
        assert p.quantity == 16
        assert p.total_sold == 4
        assert p.revenue == Money.of("12.00")

    def test_record_sale_beyond_stock_rejected_without_change(self):
        p = _espresso(quantity=3)
        with pytest.raises(InsufficientStockError, match="need 4, have 3"):
            p.record_sale(4, Money.of("12"))
        assert p.quantity == 3
        assert p.total_sold == 0
        assert p.revenue == Money.zero()

    def test_reverse_sale_restores_stock(self):
        p = _espresso()
        p.record_sale(4, Money.of("12.00"))
        p.reverse_sale(4, Money.of("12.00"))
        assert p.quantity == 20
        assert p.total_sold == 0
        assert p.revenue == Money.zero()

    def test_reverse_more_than_sold_rejected_without_change(self):
        p = _espresso()
        p.record_sale(2, Money.of("6"))
        with pytest.raises(ValidationError, match="Cannot reverse"):
            p.reverse_sale(3, Money.of("9"))
        assert p.quantity == 18
        assert p.total_sold == 2

    def test_add_stock(self):
        p = _espresso()
        p.add_stock(5)
        assert p.quantity == 25
        assert p.total_sold == 0

    @pytest.mark.parametrize("amount", [0, -1, 2.5, True])
    def test_add_stock_invalid_amount(self, amount):
        p = _espresso()
        with pytest.raises(InvalidAmountError):
            p.add_stock(amount)
        assert p.quantity == 20
