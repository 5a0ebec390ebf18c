"""Unit tests for the LedgerService domain service."""

from datetime import date
from decimal import Decimal

import pytest

from cafe_ledger.domain.exceptions import (
    InsufficientStockError,
    InvalidAmountError,
    InvalidQuantityError,
    ProductNotFoundError,
    SaleNotFoundError,
    ValidationError,
)
from cafe_ledger.domain.model.product import Product
from cafe_ledger.domain.model.sale import Sale
from cafe_ledger.domain.model.value_objects import Money, Quantity
from cafe_ledger.domain.service.ledger_service import LedgerService
from tests.fakes import FakeProductRepository, FakeSaleRepository

DAY = date(2024, 1, 1)


def _setup(*products: Product):
    if not products:
        products = (
            Product.create("1", "Espresso", Money.of("3.00"), 20),
            Product.create("2", "Sandwich", Money.of("5.00"), 5),
        )
    product_repo = FakeProductRepository(list(products))
    sale_repo = FakeSaleRepository()
    return LedgerService(product_repo, sale_repo), product_repo, sale_repo


def _snapshot(product: Product) -> tuple:
    return (product.quantity, product.total_sold, product.revenue)


# ── record_sale ──────────────────────────────────────────────────────────────


class TestRecordSale:

    def test_worked_example(self):
        svc, product_repo, _ = _setup()

        sale = svc.record_sale("1", 4, "Bob", DAY)

        assert sale.quantity.value == 4
        assert sale.total == Money.of("12.0")
        p = product_repo.get_by_id("1")
        assert p.quantity == 16
        assert p.total_sold == 4
        assert p.revenue == Money.of("12.0")

    def test_sale_snapshots_name_and_price(self):
        svc, _, _ = _setup()
        sale = svc.record_sale("1", 1, "Alice", DAY)
        assert sale.product_name == "Espresso"
        assert sale.unit_price == Money.of("3.00")
        assert sale.customer == "Alice"
        assert sale.sale_date == DAY

    def test_sale_is_persisted(self):
        svc, _, sale_repo = _setup()
        sale = svc.record_sale("1", 1, "Alice", DAY)
        assert sale_repo.get_by_id(sale.id) is sale

    def test_sequential_ids(self):
        svc, _, _ = _setup()
        first = svc.record_sale("1", 1, "Alice", DAY)
        second = svc.record_sale("1", 1, "Bob", DAY)
        assert int(second.id) == int(first.id) + 1

    def test_selling_entire_stock_then_one_more(self):
        svc, product_repo, sale_repo = _setup()

        svc.record_sale("2", 5, "Alice", DAY)
        assert product_repo.get_by_id("2").quantity == 0

        before = _snapshot(product_repo.get_by_id("2"))
        with pytest.raises(InsufficientStockError):
            svc.record_sale("2", 1, "Alice", DAY)
        assert _snapshot(product_repo.get_by_id("2")) == before
        assert len(sale_repo.list_all()) == 1

    def test_unknown_product(self):
        svc, _, sale_repo = _setup()
        with pytest.raises(ProductNotFoundError, match="not found"):
            svc.record_sale("99", 1, "Alice", DAY)
        assert sale_repo.list_all() == []

    @pytest.mark.parametrize("quantity", [0, -2, 1.5])
    def test_invalid_quantity(self, quantity):
        svc, product_repo, sale_repo = _setup()
        with pytest.raises(InvalidQuantityError):
            svc.record_sale("1", quantity, "Alice", DAY)
        assert _snapshot(product_repo.get_by_id("1")) == (20, 0, Money.zero())
        assert sale_repo.list_all() == []

    def test_later_price_change_does_not_touch_sale(self):
        svc, product_repo, sale_repo = _setup()
        sale = svc.record_sale("1", 2, "Alice", DAY)

        product_repo.get_by_id("1").update_price(Money.of("9.99"))

        assert sale_repo.get_by_id(sale.id).total == Money.of("6.00")


# ── edit_sale ────────────────────────────────────────────────────────────────


class TestEditSale:

    def test_increase_quantity(self):
        svc, product_repo, _ = _setup()
        sale = svc.record_sale("1", 4, "Bob", DAY)

        edited = svc.edit_sale(sale.id, 6, "Bob", DAY)

        assert edited.quantity.value == 6
        assert edited.total == Money.of("18.00")
        assert _snapshot(product_repo.get_by_id("1")) == (14, 6, Money.of("18.00"))

    def test_decrease_quantity_returns_stock(self):
        svc, product_repo, _ = _setup()
        sale = svc.record_sale("1", 4, "Bob", DAY)

        svc.edit_sale(sale.id, 1, "Bob", DAY)

        assert _snapshot(product_repo.get_by_id("1")) == (19, 1, Money.of("3.00"))

    def test_updates_customer_and_date(self):
        svc, _, sale_repo = _setup()
        sale = svc.record_sale("1", 1, "Bob", DAY)

        svc.edit_sale(sale.id, 1, "Carol", date(2024, 2, 2))

        saved = sale_repo.get_by_id(sale.id)
        assert saved.customer == "Carol"
        assert saved.sale_date == date(2024, 2, 2)

    def test_delta_priced_at_frozen_unit_price(self):
        svc, product_repo, sale_repo = _setup()
        sale = svc.record_sale("1", 2, "Bob", DAY)
        product_repo.get_by_id("1").update_price(Money.of("5.00"))

        svc.edit_sale(sale.id, 3, "Bob", DAY)

        assert sale_repo.get_by_id(sale.id).total == Money.of("9.00")
        assert product_repo.get_by_id("1").revenue == Money.of("9.00")

    def test_increase_beyond_stock_rejected(self):
        svc, product_repo, sale_repo = _setup()
        sale = svc.record_sale("2", 3, "Bob", DAY)  # 2 left

        with pytest.raises(InsufficientStockError):
            svc.edit_sale(sale.id, 6, "Bob", DAY)

        assert _snapshot(product_repo.get_by_id("2")) == (2, 3, Money.of("15.00"))
        assert sale_repo.get_by_id(sale.id).quantity == Quantity(3)

    def test_increase_using_exactly_remaining_stock(self):
        svc, product_repo, _ = _setup()
        sale = svc.record_sale("2", 3, "Bob", DAY)

        svc.edit_sale(sale.id, 5, "Bob", DAY)

        assert product_repo.get_by_id("2").quantity == 0

    @pytest.mark.parametrize("quantity", [0, -1])
    def test_non_positive_quantity_rejected(self, quantity):
        svc, product_repo, sale_repo = _setup()
        sale = svc.record_sale("1", 4, "Bob", DAY)
        before = _snapshot(product_repo.get_by_id("1"))

        with pytest.raises(InvalidQuantityError):
            svc.edit_sale(sale.id, quantity, "Eve", date(2030, 1, 1))

        assert _snapshot(product_repo.get_by_id("1")) == before
        saved = sale_repo.get_by_id(sale.id)
        assert saved.quantity == Quantity(4)
        assert saved.customer == "Bob"
        assert saved.sale_date == DAY

    def test_unknown_sale(self):
        svc, _, _ = _setup()
        with pytest.raises(SaleNotFoundError):
            svc.edit_sale("42", 1, "Bob", DAY)

    def test_product_deleted_after_sale(self):
        svc, product_repo, _ = _setup()
        sale = svc.record_sale("1", 1, "Bob", DAY)
        product_repo.delete("1")

        with pytest.raises(ProductNotFoundError):
            svc.edit_sale(sale.id, 2, "Bob", DAY)


# ── delete_sale ──────────────────────────────────────────────────────────────


class TestDeleteSale:

    def test_round_trip_restores_product(self):
        svc, product_repo, sale_repo = _setup()
        before = _snapshot(product_repo.get_by_id("1"))

        sale = svc.record_sale("1", 7, "Alice", DAY)
        svc.delete_sale(sale.id)

        assert _snapshot(product_repo.get_by_id("1")) == before
        assert sale_repo.get_by_id(sale.id) is None

    def test_round_trip_after_edit_and_price_change(self):
        svc, product_repo, _ = _setup()
        sale = svc.record_sale("1", 2, "Alice", DAY)
        product_repo.get_by_id("1").update_price(Money.of("4.00"))
        svc.edit_sale(sale.id, 5, "Alice", DAY)

        svc.delete_sale(sale.id)

        assert _snapshot(product_repo.get_by_id("1")) == (20, 0, Money.zero())

    def test_orphan_sale_removed_silently(self):
        svc, product_repo, sale_repo = _setup()
        sale_repo.save(
            Sale(
                id="7",
                product_id="gone",
                product_name="Muffin",
                quantity=Quantity(2),
                unit_price=Money.of("2.00"),
                customer="Alice",
                sale_date=DAY,
            )
        )
        products_before = [_snapshot(p) for p in product_repo.list_all()]

        svc.delete_sale("7")

        assert sale_repo.get_by_id("7") is None
        assert product_repo.get_by_id("gone") is None
        assert [_snapshot(p) for p in product_repo.list_all()] == products_before

    def test_unknown_sale(self):
        svc, _, _ = _setup()
        with pytest.raises(SaleNotFoundError):
            svc.delete_sale("nope")

    def test_inconsistent_totals_rejected_without_change(self):
        drifted = Product(
            id="1", name="Tea", price=Money.of("2"), quantity=10,
            total_sold=1, revenue=Money.of("2"),
        )
        svc, product_repo, sale_repo = _setup(drifted)
        sale_repo.save(
            Sale("1", "1", "Tea", Quantity(3), Money.of("2"), "Alice", DAY)
        )

        with pytest.raises(ValidationError, match="Cannot reverse"):
            svc.delete_sale("1")

        assert _snapshot(product_repo.get_by_id("1")) == (10, 1, Money.of("2"))
        assert sale_repo.get_by_id("1") is not None


# ── add_stock ────────────────────────────────────────────────────────────────


class TestAddStock:

    def test_adds_to_quantity_only(self):
        svc, product_repo, _ = _setup()
        svc.record_sale("1", 2, "Alice", DAY)

        product = svc.add_stock("1", 10)

        assert product.quantity == 28
        assert product.total_sold == 2
        assert product.revenue == Money.of("6")
        assert product_repo.get_by_id("1").quantity == 28

    def test_unknown_product(self):
        svc, _, _ = _setup()
        with pytest.raises(ProductNotFoundError):
            svc.add_stock("99", 1)

    @pytest.mark.parametrize("amount", [0, -5])
    def test_invalid_amount(self, amount):
        svc, product_repo, _ = _setup()
        with pytest.raises(InvalidAmountError):
            svc.add_stock("1", amount)
        assert product_repo.get_by_id("1").quantity == 20


# ── reconciliation ───────────────────────────────────────────────────────────


class TestReconciliation:

    def test_totals_match_active_sales_after_mixed_operations(self):
        svc, product_repo, sale_repo = _setup()
        a = svc.record_sale("1", 3, "Alice", DAY)
        b = svc.record_sale("1", 2, "Bob", DAY)
        product_repo.get_by_id("1").update_price(Money.of("3.50"))
        c = svc.record_sale("1", 4, "Carol", DAY)
        svc.edit_sale(a.id, 1, "Alice", DAY)
        svc.edit_sale(c.id, 6, "Carol", DAY)
        svc.delete_sale(b.id)
        svc.add_stock("1", 5)

        product = product_repo.get_by_id("1")
        active = sale_repo.list_by_product("1")
        assert product.total_sold == sum(s.quantity.value for s in active)
        assert product.revenue.amount == sum(
            (s.total.amount for s in active), Decimal("0")
        )
        # 1 @ 3.00 + 6 @ 3.50
        assert product.revenue == Money.of("24.00")
        assert product.quantity == 20 - 7 + 5

    def test_sales_for_product(self):
        svc, _, _ = _setup()
        svc.record_sale("1", 1, "Alice", DAY)
        svc.record_sale("2", 1, "Bob", DAY)

        assert [s.customer for s in svc.sales_for_product("2")] == ["Bob"]
        assert len(svc.list_sales()) == 2


# ── failed sale writes ───────────────────────────────────────────────────────


class BrokenSaleRepository(FakeSaleRepository):
    """Accepts reads but fails every write once ``broken`` is set."""

    broken = False

    def save(self, sale: Sale) -> None:
        if self.broken:
            raise OSError("disk full")
        super().save(sale)

    def delete(self, sale_id: str) -> None:
        if self.broken:
            raise OSError("disk full")
        super().delete(sale_id)


class TestFailedSaleWrite:

    def _setup(self):
        product_repo = FakeProductRepository(
            [Product.create("1", "Espresso", Money.of("3.00"), 20)]
        )
        sale_repo = BrokenSaleRepository()
        return LedgerService(product_repo, sale_repo), product_repo, sale_repo

    def test_record_restores_product(self):
        ledger, product_repo, sale_repo = self._setup()
        sale_repo.broken = True

        with pytest.raises(OSError):
            ledger.record_sale("1", 4, "Bob", DAY)

        assert _snapshot(product_repo.get_by_id("1")) == (20, 0, Money.zero())
        assert sale_repo.list_all() == []

    def test_edit_restores_product(self):
        ledger, product_repo, sale_repo = self._setup()
        sale = ledger.record_sale("1", 4, "Bob", DAY)
        sale_repo.broken = True

        with pytest.raises(OSError):
            ledger.edit_sale(sale.id, 6, "Bob", DAY)

        assert _snapshot(product_repo.get_by_id("1")) == (16, 4, Money.of("12"))

    def test_delete_restores_product_and_keeps_sale(self):
        ledger, product_repo, sale_repo = self._setup()
        sale = ledger.record_sale("1", 4, "Bob", DAY)
        sale_repo.broken = True

        with pytest.raises(OSError):
            ledger.delete_sale(sale.id)

        assert _snapshot(product_repo.get_by_id("1")) == (16, 4, Money.of("12"))
        assert sale_repo.get_by_id(sale.id) is not None
